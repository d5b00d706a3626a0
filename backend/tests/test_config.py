"""Tests for settings parsing"""

from signature_engine.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.documents == {"sample": "sample.pdf"}
    assert settings.signed_url_for("signed-1.pdf") == "/signed/signed-1.pdf"
    assert settings.public_url_for("/signed/signed-1.pdf") == "http://localhost:5001/signed/signed-1.pdf"


def test_documents_from_json_env(monkeypatch):
    monkeypatch.setenv("DOCUMENTS", '{"nda": "nda-v2.pdf", "lease": "lease.pdf"}')

    assert Settings(_env_file=None).documents == {"nda": "nda-v2.pdf", "lease": "lease.pdf"}


def test_documents_from_pairs_env(monkeypatch):
    monkeypatch.setenv("DOCUMENTS", "nda=nda-v2.pdf, lease = lease.pdf,broken")

    assert Settings(_env_file=None).documents == {"nda": "nda-v2.pdf", "lease": "lease.pdf"}


def test_empty_documents_env(monkeypatch):
    monkeypatch.setenv("DOCUMENTS", "  ")

    assert Settings(_env_file=None).documents == {}


def test_trailing_slashes_are_normalized():
    settings = Settings(_env_file=None, base_url="https://sign.example.com/", signed_url_prefix="/files/")

    assert settings.public_url_for(settings.signed_url_for("a.pdf")) == "https://sign.example.com/files/a.pdf"


def test_cors_origins():
    assert Settings(_env_file=None).cors_origins() == ["*"]
    assert Settings(_env_file=None, cors_allow_all=False).cors_origins() == ["http://localhost:5173"]
