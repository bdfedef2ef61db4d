"""HTTP contract tests for GET /api/resume."""

from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_api.api.endpoints import resume as resume_endpoint
from portfolio_api.core.resume import MISSING_RESUME_HINT

PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


def test_missing_resume_returns_hint(client) -> None:
    response = client.get("/api/resume")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Resume file not found",
        "message": MISSING_RESUME_HINT,
    }


def test_resume_download_round_trips_bytes(client, tmp_path: Path) -> None:
    (tmp_path / "resume.pdf").write_bytes(PDF_BYTES)

    response = client.get("/api/resume")

    assert response.status_code == 200
    assert response.content == PDF_BYTES
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="Sayyedain_Saqlain_Resume.pdf"'
    )


def test_download_name_is_configurable(client_factory, tmp_path: Path) -> None:
    (tmp_path / "resume.pdf").write_bytes(PDF_BYTES)
    client = client_factory(resume_download_name="Ada_Lovelace_CV.pdf")

    response = client.get("/api/resume")

    assert response.headers["content-disposition"] == 'attachment; filename="Ada_Lovelace_CV.pdf"'


def test_directory_at_resume_path_is_not_a_resume(client_factory, tmp_path: Path) -> None:
    (tmp_path / "cv").mkdir()
    client = client_factory(resume_path=tmp_path / "cv")

    response = client.get("/api/resume")

    assert response.status_code == 404


class _UnreadablePath:
    """Resume path that exists but cannot be stat'ed."""

    def stat(self):
        raise OSError("Permission denied: resume.pdf")


@pytest.mark.parametrize(
    "app_env, expected_body",
    [
        ("production", {"error": "Failed to download resume"}),
        (
            "development",
            {"error": "Failed to download resume", "details": "Permission denied: resume.pdf"},
        ),
    ],
)
def test_unreadable_resume_returns_500(
    client_factory, monkeypatch: pytest.MonkeyPatch, app_env: str, expected_body: dict
) -> None:
    monkeypatch.setattr(resume_endpoint, "locate_resume", lambda settings: _UnreadablePath())
    client = client_factory(app_env=app_env)

    response = client.get("/api/resume")

    assert response.status_code == 500
    assert response.json() == expected_body
