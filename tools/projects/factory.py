from __future__ import annotations
from typing import Any, Dict

from drafting.api.factory import build_api_client

from .service import ProjectCreator, ProjectHttpService


def build_project_creator(cfg: Dict[str, Any]) -> ProjectCreator:
    return ProjectCreator(ProjectHttpService(build_api_client(cfg)))
