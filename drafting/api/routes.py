DRAFT_INQUIRY = "drafting/inquiry"
DRAFT_GENERATE = "drafting/generate"

LIST_TEMPLATES = "templates"
SEARCH_TEMPLATES = "templates/search/"
INIT_TEMPLATE_UPLOAD = "templates/init-upload"
COMPLETE_TEMPLATE_UPLOAD = "templates/complete-upload"

REF_DOCUMENTS = "ref-documents"
REF_DOCUMENTS_PUBLIC_PREVIEW = "ref-documents/public-preview"

PROJECTS = "projects"


def template(template_id: str) -> str:
    return f"templates/{template_id}"


def document_preview(document_id: str) -> str:
    return f"{REF_DOCUMENTS}/{document_id}/preview"
