from __future__ import annotations
from typing import Any, Dict

from drafting.api.factory import build_api_client

from .http_service import TemplateHttpService


def build_template_service(cfg: Dict[str, Any]):
    tcfg = cfg.get("templates", {})
    ptype = tcfg.get("type", "http")
    if ptype == "http":
        timeout = (cfg.get("api") or {}).get("time_out_s")
        return TemplateHttpService(
            build_api_client(cfg),
            time_out_s=float(timeout) if timeout is not None else None,
        )

    raise ValueError(f"Unknown template service type: {ptype}")
