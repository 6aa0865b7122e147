import json
import tempfile

from ui_demo_streamlit.app import _parse_uploaded


class UploadedFile:
    def __init__(self, name, data):
        self.name = name
        self._data = data

    def getbuffer(self):
        return memoryview(self._data)


def test_parse_uploaded_removes_temp_file(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    payload = [{"id": "t1", "title": "Invoice", "due_date": "2024-03-10T14:30:00Z"}]
    items = _parse_uploaded(UploadedFile("items.json", json.dumps(payload).encode("utf-8")))
    assert [item.id for item in items] == ["t1"]
    assert list(tmp_path.iterdir()) == []
