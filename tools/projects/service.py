from __future__ import annotations
from typing import Any, Dict, Optional
import asyncio
import logging
import time

from drafting.api import routes
from drafting.api.http_client import ApiClient
from drafting.errors import ApiError
from drafting.state import Generated

logger = logging.getLogger(__name__)


def build_project_request(generated: Generated, project_name: str) -> Dict[str, Any]:
    """Create-project body for a freshly generated draft."""
    return {
        "title": project_name,
        "category": "draft",
        "access_type": "private",
        "content": {
            "data": {
                "blocks": [
                    {
                        "id": "draft-content",
                        "type": "paragraph",
                        "data": {"text": generated.html_content},
                    }
                ],
                "variables": {name: v.to_dict() for name, v in generated.variables.items()},
                "time": int(time.time() * 1000),
                "version": "2.0",
            }
        },
        "metadata": {
            "data": {
                "data": {
                    "type": "template",
                    "aiGenerated": True,
                    "prompt": "AI Generated Draft",
                    "docMetadata": generated.doc_metadata,
                    "generationMetrics": generated.pipeline_metrics,
                    "citations": {},
                }
            }
        },
    }


class ProjectHttpService:
    def __init__(self, api: ApiClient):
        self.api = api

    def create_project(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if not (body.get("title") or "").strip():
            raise ValueError("Project title is required")
        resp = self.api.post(routes.PROJECTS, json=body)
        if not resp.success:
            raise ApiError(resp.message or "Failed to create project", body=resp.data)
        return resp.data if isinstance(resp.data, dict) else {}


class ProjectCreator:
    """on_draft_success collaborator: saves the generated draft as a new project."""

    def __init__(self, service: ProjectHttpService):
        self.service = service
        self.last_project: Optional[Dict[str, Any]] = None

    async def __call__(self, generated: Generated, project_name: str) -> Dict[str, Any]:
        body = build_project_request(generated, project_name)
        project = await asyncio.to_thread(self.service.create_project, body)
        logger.info("Created project %s for draft '%s'", project.get("id") or project.get("project_id"), project_name)
        self.last_project = project
        return project
