from datetime import datetime, timezone
from io import BytesIO

import app.routers.resume as resume_mod

RESUME_TEXT = "Experienced data engineer with Python, SQL and Spark across cloud platforms. " * 2


class _Analysis:
    id = "ra1"
    user_id = "user-1"
    file_name = "cv.pdf"
    analysis_data = {"score": 78}
    marketability_score = 78.0
    target_role = "Data Engineer"
    career_stage = "mid"
    industry_focus = None
    created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_extract_text_rejects_non_pdf_extension(client):
    resp = client.post("/resumes/extract-text", files={"file": ("resume.txt", BytesIO(b"hello"), "text/plain")})
    assert resp.status_code == 400
    assert "PDF" in resp.json()["detail"]


def test_extract_text_rejects_large_upload(monkeypatch, client):
    monkeypatch.setattr(resume_mod.settings, "max_resume_upload_mb", 1)
    huge = b"%PDF" + (b"A" * (1024 * 1024 + 10))
    resp = client.post("/resumes/extract-text", files={"file": ("resume.pdf", BytesIO(huge), "application/pdf")})
    assert resp.status_code == 413


def test_extract_text_rejects_invalid_magic_bytes(client):
    resp = client.post("/resumes/extract-text", files={"file": ("resume.pdf", BytesIO(b"NOT_PDF"), "application/pdf")})
    assert resp.status_code == 400
    assert "Invalid PDF" in resp.json()["detail"]


def test_extract_text_success(monkeypatch, client):
    monkeypatch.setattr(resume_mod, "extract_text_from_pdf", lambda content: "Jane Doe\nData Engineer")
    resp = client.post(
        "/resumes/extract-text", files={"file": ("cv.pdf", BytesIO(b"%PDF-1.4 mock"), "application/pdf")}
    )
    assert resp.status_code == 200
    assert resp.json() == {"text": "Jane Doe\nData Engineer", "file_name": "cv.pdf"}


def test_extract_text_failure_returns_500(monkeypatch, client):
    monkeypatch.setattr(
        resume_mod, "extract_text_from_pdf", lambda content: (_ for _ in ()).throw(ValueError("corrupt"))
    )
    resp = client.post(
        "/resumes/extract-text", files={"file": ("cv.pdf", BytesIO(b"%PDF-1.4 mock"), "application/pdf")}
    )
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to extract text from PDF"


def test_analyze_validates_resume_length(client):
    assert client.post("/resumes/analyze", json={"resume_text": "too short"}).status_code == 422
    assert client.post("/resumes/analyze", json={"resume_text": "x" * 50001}).status_code == 422
    assert client.post(
        "/resumes/analyze", json={"resume_text": RESUME_TEXT, "career_stage": "wizard"}
    ).status_code == 422


def test_analyze_success(monkeypatch, client):
    seen = {}

    def fake_analyze(db, uid, text, **kw):
        seen.update(kw)
        return {"score": 78, "strengths": ["SQL"], "improvements": [], "recommendations": [], "overall_assessment": {}}

    monkeypatch.setattr(resume_mod, "analyze_resume", fake_analyze)
    resp = client.post("/resumes/analyze", json={"resume_text": RESUME_TEXT, "target_role": "Data Engineer"})
    assert resp.status_code == 200
    assert resp.json()["score"] == 78
    assert seen["target_role"] == "Data Engineer"
    assert seen["career_stage"] is None


def test_analyze_failure_returns_500(monkeypatch, client):
    monkeypatch.setattr(resume_mod, "analyze_resume", lambda *a, **kw: (_ for _ in ()).throw(ValueError("no json")))
    resp = client.post("/resumes/analyze", json={"resume_text": RESUME_TEXT})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to analyze resume"


def test_get_latest_analysis_not_found(monkeypatch, client):
    monkeypatch.setattr(resume_mod, "get_latest_by_user", lambda db, uid: None)
    assert client.get("/resumes/latest").status_code == 404


def test_get_latest_analysis_and_history(monkeypatch, client):
    monkeypatch.setattr(resume_mod, "get_latest_by_user", lambda db, uid: _Analysis())
    monkeypatch.setattr(resume_mod, "list_for_user", lambda db, uid, limit=20: [_Analysis()] * min(limit, 2))
    latest = client.get("/resumes/latest")
    assert latest.status_code == 200
    assert latest.json()["marketability_score"] == 78.0

    history = client.get("/resumes", params={"limit": 1})
    assert history.status_code == 200
    assert len(history.json()) == 1
