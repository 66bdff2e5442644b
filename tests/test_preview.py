from unittest.mock import MagicMock

import pytest

from drafting.api.http_client import ApiResponse
from drafting.errors import ApiError
from tools.documents.preview import DocumentPreviewService, proxy_preview_url

SIGNED = "https://bucket.s3.amazonaws.com/doc 1.pdf?X-Amz-Signature=a/b&X-Amz-Expires=900"


def test_proxy_preview_url_encodes_everything():
    assert proxy_preview_url(SIGNED) == (
        "/proxy-pdf?url=https%3A%2F%2Fbucket.s3.amazonaws.com%2Fdoc%201.pdf"
        "%3FX-Amz-Signature%3Da%2Fb%26X-Amz-Expires%3D900"
    )
    assert proxy_preview_url("x(1)!", "/p") == "/p?url=x(1)!"


@pytest.mark.parametrize("url", [None, "", 12])
def test_proxy_preview_url_missing(url):
    assert proxy_preview_url(url) is None


def test_preview_document():
    api = MagicMock()
    api.post.return_value = ApiResponse(True, {"preview_url": "https://s3/a.pdf"})
    svc = DocumentPreviewService(api)
    assert svc.preview_document("d1") == "/proxy-pdf?url=https%3A%2F%2Fs3%2Fa.pdf"
    api.post.assert_called_once_with("ref-documents/d1/preview")


def test_preview_document_without_url():
    api = MagicMock()
    api.post.return_value = ApiResponse(True, {})
    assert DocumentPreviewService(api).preview_document("d1") is None


def test_preview_failure_raises():
    api = MagicMock()
    api.post.return_value = ApiResponse(False, None, "forbidden")
    with pytest.raises(ApiError, match="forbidden"):
        DocumentPreviewService(api).preview_document("d1")


def test_public_preview():
    api = MagicMock()
    api.post.return_value = ApiResponse(True, {"preview_url": "https://s3/pub.pdf"})
    out = DocumentPreviewService(api, proxy_path="/api/proxy").public_preview_document("pub/k.pdf")
    api.post.assert_called_once_with("ref-documents/public-preview", json={"s3_key": "pub/k.pdf"})
    assert out == "/api/proxy?url=https%3A%2F%2Fs3%2Fpub.pdf"
