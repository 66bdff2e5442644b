from uistate.files import MAX_FILE_SIZE, select_files, validate_file
from uistate.scoped import ScopedUIStore
from uistate.state import UploadFile

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_validate_file():
    assert validate_file(UploadFile("a.pdf", 10, "application/pdf")) == (True, None)
    ok, reason = validate_file(UploadFile("a.png", 10, "image/png"))
    assert not ok and "PDF, DOCX, or TXT" in reason
    ok, reason = validate_file(UploadFile("big.docx", MAX_FILE_SIZE + 1, DOCX))
    assert not ok and "50MB" in reason
    assert validate_file(UploadFile("edge.txt", MAX_FILE_SIZE, "text/plain"))[0]


def test_select_files_splits_and_updates_store():
    store = ScopedUIStore()
    store.init_scope("dlg")
    files = [
        UploadFile("a.pdf", 10, "application/pdf"),
        UploadFile("b.png", 10, "image/png"),
        UploadFile("c.docx", MAX_FILE_SIZE * 2, DOCX),
    ]
    sel = select_files(store, "dlg", files)

    assert [f.name for f in sel.valid] == ["a.pdf"]
    assert [f.name for f in sel.invalid] == ["b.png", "c.docx"]
    assert sel.summary == "You had 2 invalid files."
    assert store.get("dlg", "creation_type") == "upload"
    assert [f.name for f in store.get("dlg", "files")] == ["a.pdf"]
    assert len(store.get("dlg", "invalid_files")) == 2


def test_select_files_all_invalid_keeps_creation_type():
    store = ScopedUIStore()
    store.init_scope("dlg")
    sel = select_files(store, "dlg", [UploadFile("b.png", 10, "image/png")])
    assert sel.summary == "You had 1 invalid file."
    assert store.get("dlg", "creation_type") == "scratch"
    assert store.get("dlg", "files") == []


def test_upload_file_from_path(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("hello", encoding="utf-8")
    f = UploadFile.from_path(p)
    assert (f.name, f.size, f.content_type) == ("notes.txt", 5, "text/plain")
