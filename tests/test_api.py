import os

import pytest
from fastapi.testclient import TestClient

import api.app
from api.app import app, get_pipeline
from models import PDF_MEDIA_TYPE, PPTX_MEDIA_TYPE
from pipeline import TranslationPipeline
from tests.conftest import ClosableOracle, EchoOracle, ScriptedOracle, make_pdf, slide_texts


@pytest.fixture
def client_for(config):
    def build(oracle):
        pipeline = TranslationPipeline(config, oracle=oracle)
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return TestClient(app), pipeline

    yield build
    app.dependency_overrides.clear()


def test_translate_pptx(client_for, config, three_slide_deck):
    client, pipeline = client_for(EchoOracle())

    response = client.post(
        "/api/translate",
        files={"file": ("deck.pptx", three_slide_deck, PPTX_MEDIA_TYPE)},
        data={"targetLanguage": "German", "jobId": "abc"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == PPTX_MEDIA_TYPE
    assert 'filename="deck_translated.pptx"' in response.headers["content-disposition"]
    assert slide_texts(response.content) == slide_texts(three_slide_deck)
    assert "German" in pipeline.oracle.calls[0][0]
    assert client.get("/api/status/abc").json() == {"status": "completed", "message": "Slide translation ready!"}
    assert os.listdir(config.upload_dir) == []


def test_translate_pdf(client_for):
    client, _ = client_for(ScriptedOracle(lambda content: "Bonjour le monde"))

    response = client.post(
        "/api/translate",
        files={"file": ("hello.pdf", make_pdf(["Hello world"]), PDF_MEDIA_TYPE)},
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == PDF_MEDIA_TYPE
    assert response.content.startswith(b"%PDF")


def test_failed_translation_returns_error_message(client_for, config):
    client, _ = client_for(EchoOracle())

    response = client.post(
        "/api/translate",
        files={"file": ("blank.pdf", make_pdf([]), PDF_MEDIA_TYPE)},
        data={"jobId": "blank"},
    )

    assert response.status_code == 500
    assert response.text == "An error occurred during translation: Could not extract text from PDF."
    assert client.get("/api/status/blank").json()["status"] == "error"
    assert os.listdir(config.upload_dir) == []


def test_unsupported_format_is_a_client_error(client_for):
    client, _ = client_for(EchoOracle())

    response = client.post(
        "/api/translate",
        files={"file": ("notes.txt", b"just text", "text/plain")},
        data={"jobId": "txt"},
    )

    assert response.status_code == 400
    assert client.get("/api/status/txt").json()["status"] == "error"


def test_missing_file(client_for):
    client, _ = client_for(EchoOracle())

    response = client.post("/api/translate", data={"jobId": "nofile"})

    assert response.status_code == 400
    assert response.text == "No file uploaded."
    assert client.get("/api/status/nofile").json() == {"status": "error", "message": "No file uploaded."}


def test_unknown_status(client_for):
    client, _ = client_for(EchoOracle())

    response = client.get("/api/status/does-not-exist")

    assert response.status_code == 200
    assert response.json() == {"status": "unknown", "message": "Job not found"}


def test_health(client_for):
    client, _ = client_for(EchoOracle())

    assert client.get("/health").json()["status"] == "ok"


def test_shutdown_closes_pipeline(config, monkeypatch):
    oracle = ClosableOracle()
    monkeypatch.setattr(api.app, "_pipeline", TranslationPipeline(config, oracle=oracle))

    with TestClient(app) as client:
        assert client.get("/health").json()["status"] == "ok"
        assert not oracle.closed

    assert oracle.closed
