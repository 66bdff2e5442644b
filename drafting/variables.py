from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple
import json
import logging
import re

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")


@dataclass
class TemplateVariable:
    value: str = ""
    editable: bool = True
    type: str = "text"
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_template_json(raw: Any) -> Dict[str, Any]:
    """
    template_json arrives either pre-serialized or already parsed.
    Anything unusable becomes {} so drafting can continue without variables.
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (str, bytes)):
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning("Error parsing template JSON: %s", e)
            return {}
        if isinstance(parsed, dict):
            return parsed
        logger.warning("template_json is not an object (got %s)", type(parsed).__name__)
        return {}
    logger.warning("Unexpected template_json type: %s", type(raw).__name__)
    return {}


def humanize_label(name: str) -> str:
    # party_a_name -> Party A Name
    spaced = name.replace("_", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def extract_variables(template_json: Dict[str, Any]) -> Dict[str, TemplateVariable]:
    variables = (template_json or {}).get("variables") or []
    out: Dict[str, TemplateVariable] = {}
    if not isinstance(variables, list):
        return out
    for v in variables:
        if not isinstance(v, dict):
            continue
        name = v.get("variable_name")
        if not name:
            continue
        out[name] = TemplateVariable(
            value=v.get("value") or "",
            editable=v.get("editable") is not False,
            type=v.get("type") or "text",
            label=v.get("label") or name,
        )
    return out


def find_placeholders(html_content: str) -> List[str]:
    """Distinct {{name}} placeholders in order of first appearance."""
    seen: List[str] = []
    for m in PLACEHOLDER_RE.finditer(html_content or ""):
        name = m.group(1).strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def reconcile_placeholders(
    html_content: str,
    variables: Dict[str, TemplateVariable],
) -> Tuple[Dict[str, TemplateVariable], List[str]]:
    """
    Add a default entry for every placeholder the generator emitted but did
    not list in template_json.variables. Returns (merged map, added names).
    """
    merged = dict(variables)
    added: List[str] = []
    for name in find_placeholders(html_content):
        if name in merged:
            continue
        merged[name] = TemplateVariable(value="", editable=True, type="text", label=humanize_label(name))
        added.append(name)
        logger.debug("Added missing variable from content: %s", name)
    return merged, added
