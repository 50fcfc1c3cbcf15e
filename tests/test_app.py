import io
import zipfile

import pytest

from app import app

from .conftest import MOBY_BODY, write_odt


@pytest.fixture
def client(settings):
    app.config.update(TESTING=True, INDEX_SETTINGS=settings)
    yield app.test_client()
    app.config["INDEX_SETTINGS"] = None


def upload(path, name="moby.odt"):
    return {"document": (io.BytesIO(path.read_bytes()), name)}


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_index_returns_indexed_archive(client, moby_odt):
    resp = client.post("/index", data=upload(moby_odt), content_type="multipart/form-data")
    assert resp.status_code == 200
    assert "moby.odt.indexed.odt" in resp.headers["Content-Disposition"]
    with zipfile.ZipFile(io.BytesIO(resp.data)) as zf:
        content = zf.read("content.xml").decode("utf-8")
    assert '<text:bookmark text:name="Ishmael_0"/>Ishmael' in content
    assert "[INDEX_HERE]" not in content


def test_preview_counts(client, moby_odt):
    resp = client.post("/preview", data=upload(moby_odt), content_type="multipart/form-data")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["terms"] == 3
    assert body["anchors"] == 4
    assert body["byLetter"] == {"A": 1, "B-I": 1, "J-W": 1}
    assert body["created_at"]


def test_missing_upload(client):
    resp = client.post("/index", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_indexer_error_is_reported(client, tmp_path):
    src = write_odt(tmp_path / "plain.odt", "<text:p>[INDEX_HERE]</text:p>")
    resp = client.post("/preview", data=upload(src, "plain.odt"), content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "EmptyRegistryError"


def test_unusable_server_settings_are_a_server_error(moby_odt, tmp_path):
    app.config.update(
        TESTING=True, INDEX_SETTINGS=None,
        INDEX_SETTINGS_FILE=str(tmp_path / "missing.properties"),
    )
    try:
        resp = app.test_client().post(
            "/preview", data=upload(moby_odt), content_type="multipart/form-data"
        )
    finally:
        app.config.update(INDEX_SETTINGS=None, INDEX_SETTINGS_FILE=None)
    assert resp.status_code == 500
    assert resp.get_json()["kind"] == "ConfigurationError"
