from unittest.mock import MagicMock, patch

import pytest

from drafting.api.http_client import ApiResponse
from drafting.errors import ApiError, TemplateUploadError
from tools.templates.base import ListTemplatesParams, TemplateItem
from tools.templates.http_service import TemplateHttpService
from tools.templates.normalize import clamp_limit, clamp_page, normalize_template_page
from uistate.state import UploadFile

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ROWS = [{"id": 7, "title": "Rent Agreement", "s3Key": "t/7.docx", "language": "en"}]


def test_normalize_flat_and_nested():
    flat = normalize_template_page({"templates": ROWS, "total_count": 1}, 1, 10)
    nested = normalize_template_page({"data": {"templates": ROWS, "total_count": 1}}, 1, 10)
    assert flat == nested
    assert flat.templates[0] == TemplateItem(id="7", title="Rent Agreement", s3_key="t/7.docx", language="en")


def test_normalize_garbage():
    page = normalize_template_page({"data": "nope"}, 2, 5)
    assert page.templates == [] and page.total_count == 0 and page.page == 2


def test_clamping():
    assert clamp_page(0) == 1 and clamp_page("3") == 1 and clamp_page(4) == 4
    assert clamp_limit(500, 10) == 10 and clamp_limit(25, 10) == 25


def test_list_templates_params():
    api = MagicMock()
    api.get.return_value = ApiResponse(True, {"templates": ROWS, "total_count": 1})
    svc = TemplateHttpService(api)
    page = svc.list_templates(ListTemplatesParams(category="Property", tags=["rent", "lease"], page=0, user_id="u1"))

    api.get.assert_called_once_with("templates", params=[
        ("category", "Property"),
        ("tags", "rent,lease"),
        ("page", 1),
        ("limit", 10),
        ("user_id", "u1"),
    ])
    assert page.total_count == 1


def test_list_templates_failure():
    api = MagicMock()
    api.get.return_value = ApiResponse(False, None, "db down")
    with pytest.raises(ApiError, match="db down"):
        TemplateHttpService(api).list_templates()


def test_empty_search_makes_no_call():
    api = MagicMock()
    page = TemplateHttpService(api).search_templates("   ")
    assert page.templates == [] and page.limit == 20
    api.get.assert_not_called()


def test_search_sends_query_for_every_field():
    api = MagicMock()
    api.get.return_value = ApiResponse(True, {"data": {"templates": ROWS, "total_count": 1}})
    page = TemplateHttpService(api).search_templates(" lease ")
    params = api.get.call_args.kwargs["params"]
    assert params[:5] == [(k, "lease") for k in ("category", "language", "doc_type", "title", "tags")]
    assert params[5:] == [("page", 1), ("limit", 20)]
    assert api.get.call_args.args[0] == "templates/search/"
    assert page.templates[0].id == "7"


def test_get_template():
    api = MagicMock()
    api.get.return_value = ApiResponse(True, {"template": ROWS[0]})
    t = TemplateHttpService(api).get_template("7")
    api.get.assert_called_once_with("templates/7")
    assert t.s3_key == "t/7.docx"


@pytest.fixture
def docx(tmp_path):
    p = tmp_path / "Sale Deed.docx"
    p.write_bytes(b"x" * 1000)
    return UploadFile(p.name, 1000, DOCX, p)


def _init_ok():
    return ApiResponse(True, {"upload_url": "https://s3/put", "template_id": "42", "s3_key": "t/42.docx"})


@patch("tools.templates.http_service.requests.put")
def test_upload_three_phases(mock_put, docx):
    api = MagicMock()
    api.post.side_effect = [_init_ok(), ApiResponse(True, {"id": "42", "title": "Sale Deed"})]

    def drain(url, data, headers, timeout):
        assert len(data) == 1000
        while data.read(256):
            pass
        return MagicMock(ok=True)

    mock_put.side_effect = drain
    progress = []
    t = TemplateHttpService(api).upload_template(docx, language="Hindi", on_progress=progress.append)

    init_payload = api.post.call_args_list[0].kwargs["json"]
    assert init_payload["title"] == "Sale Deed"
    assert init_payload["language"] == "hi"
    assert init_payload["file_type"] == DOCX
    assert mock_put.call_args.kwargs["headers"] == {"Content-Type": DOCX}
    assert api.post.call_args_list[1].kwargs["json"] == {"template_id": "42", "s3_key": "t/42.docx"}
    assert progress[-1] == 100 and progress == sorted(progress)
    assert t.id == "42" and t.s3_key == "t/42.docx"


def test_upload_rejects_wrong_type(tmp_path):
    api = MagicMock()
    f = UploadFile("scan.png", 10, "image/png", tmp_path / "scan.png")
    with pytest.raises(TemplateUploadError, match="PDF or Word"):
        TemplateHttpService(api).upload_template(f)
    api.post.assert_not_called()


@patch("tools.templates.http_service.requests.put")
def test_upload_init_failure_stops(mock_put, docx):
    api = MagicMock()
    api.post.return_value = ApiResponse(True, {"upload_url": "https://s3/put"})
    with pytest.raises(TemplateUploadError):
        TemplateHttpService(api).upload_template(docx)
    mock_put.assert_not_called()


@patch("tools.templates.http_service.requests.put")
def test_upload_storage_failure_skips_complete(mock_put, docx):
    api = MagicMock()
    api.post.return_value = _init_ok()
    mock_put.return_value = MagicMock(ok=False, status_code=403, reason="Forbidden")
    with pytest.raises(TemplateUploadError, match="403"):
        TemplateHttpService(api).upload_template(docx)
    assert api.post.call_count == 1


@patch("tools.templates.http_service.requests.put")
def test_upload_complete_api_error_is_wrapped(mock_put, docx):
    api = MagicMock()
    api.post.side_effect = [_init_ok(), ApiError("Network error: reset")]
    mock_put.return_value = MagicMock(ok=True)
    with pytest.raises(TemplateUploadError, match="reset"):
        TemplateHttpService(api).upload_template(docx)
