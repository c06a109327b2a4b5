import pytest

import app.services.job_interaction_service as jis
import app.services.recommendation_service as recsvc
import app.services.resume_analysis_service as ras
import app.services.user_context as uctx

ANALYSIS = {
    "extracted_skills": {"technical": [{"skill": "Python"}]},
    "overall_assessment": {
        "marketability_score": 78,
        "strengths": ["Python"],
        "improvement_areas": ["Leadership"],
        "strategic_recommendations": ["Lead a project"],
    },
}


class _DB:
    def __init__(self):
        self.rolled_back = 0

    def rollback(self):
        self.rolled_back += 1


def test_user_context_maps_rows(monkeypatch):
    profile = type("P", (), {"current_role": "Analyst", "location": "Leeds"})()
    monkeypatch.setattr(uctx, "get_profile", lambda db, uid: profile)
    monkeypatch.setattr(uctx, "get_objectives", lambda db, uid: None)
    ctx = uctx.get_user_context(object(), "u1")
    assert ctx["profile"]["current_role"] == "Analyst"
    assert ctx["profile"]["bio"] is None
    assert ctx["objectives"] is None


def test_user_context_failure_degrades(monkeypatch):
    monkeypatch.setattr(uctx, "get_profile", lambda db, uid: (_ for _ in ()).throw(RuntimeError("db")))
    assert uctx.get_user_context(object(), "u1") == {"profile": None, "objectives": None}


def test_analyze_resume_fills_context_and_persists(monkeypatch):
    seen = {}
    monkeypatch.setattr(
        ras, "get_user_context",
        lambda db, uid: {"profile": None, "objectives": {"target_role": "Data Engineer", "career_stage": "mid", "target_industry": "Fintech"}},
    )
    monkeypatch.setattr(ras, "is_llm_enabled", lambda: True)

    def fake_llm(text, role, stage, industry):
        seen["llm"] = (role, stage, industry)
        return ANALYSIS

    def fake_create(db, uid, text, data, **kw):
        seen["create"] = kw
        return type("R", (), {"id": "ra1"})()

    monkeypatch.setattr(ras, "llm_analyze_resume", fake_llm)
    monkeypatch.setattr(ras, "create_analysis", fake_create)
    out = ras.analyze_resume(_DB(), "u1", "resume", career_stage="senior", file_name="cv.pdf")
    assert seen["llm"] == ("Data Engineer", "senior", "Fintech")
    assert seen["create"]["marketability_score"] == 78.0
    assert seen["create"]["file_name"] == "cv.pdf"
    assert out["score"] == 78
    assert out["improvements"] == ["Leadership"]
    assert out["recommendations"] == ["Lead a project"]
    assert out["extracted_skills"]["technical"][0]["skill"] == "Python"


def test_analyze_resume_persist_failure_still_returns(monkeypatch):
    db = _DB()
    monkeypatch.setattr(ras, "get_user_context", lambda db, uid: {"profile": None, "objectives": None})
    monkeypatch.setattr(ras, "is_llm_enabled", lambda: True)
    monkeypatch.setattr(ras, "llm_analyze_resume", lambda *a: ANALYSIS)
    monkeypatch.setattr(ras, "create_analysis", lambda *a, **kw: (_ for _ in ()).throw(RuntimeError("db")))
    out = ras.analyze_resume(db, "u1", "resume")
    assert out["score"] == 78
    assert db.rolled_back == 1


def test_analyze_resume_propagates_parse_failure(monkeypatch):
    monkeypatch.setattr(ras, "get_user_context", lambda db, uid: {"profile": None, "objectives": None})
    monkeypatch.setattr(ras, "is_llm_enabled", lambda: True)
    monkeypatch.setattr(ras, "llm_analyze_resume", lambda *a: (_ for _ in ()).throw(ValueError("no json")))
    with pytest.raises(ValueError):
        ras.analyze_resume(_DB(), "u1", "resume")


def test_build_analysis_response_tolerates_missing_assessment():
    out = ras.build_analysis_response({"extracted_skills": {}})
    assert out["score"] is None
    assert out["strengths"] == []


def test_generate_recommendations_uses_stored_goals(monkeypatch):
    monkeypatch.setattr(
        recsvc, "get_user_context",
        lambda db, uid: {"profile": {"current_role": "Analyst"}, "objectives": {"target_role": "Data Engineer"}},
    )
    monkeypatch.setattr(recsvc, "is_llm_enabled", lambda: True)
    monkeypatch.setattr(recsvc, "llm_generate_recommendations", lambda goals, profile: ["Learn Spark"])
    monkeypatch.setattr(recsvc, "create_recommendation", lambda db, uid, data: type("R", (), {"id": "rec-1"})())
    out = recsvc.generate_recommendations(_DB(), "u1")
    assert out == {"recommendations": ["Learn Spark"], "id": "rec-1"}


def test_generate_recommendations_requires_goals(monkeypatch):
    monkeypatch.setattr(recsvc, "get_user_context", lambda db, uid: {"profile": None, "objectives": None})
    with pytest.raises(recsvc.MissingCareerGoals):
        recsvc.generate_recommendations(_DB(), "u1")


def test_generate_recommendations_store_failure_returns_without_id(monkeypatch):
    db = _DB()
    monkeypatch.setattr(recsvc, "is_llm_enabled", lambda: True)
    monkeypatch.setattr(recsvc, "llm_generate_recommendations", lambda goals, profile: ["a", "b"])
    monkeypatch.setattr(recsvc, "create_recommendation", lambda *a: (_ for _ in ()).throw(RuntimeError("db")))
    out = recsvc.generate_recommendations(db, "u1", {"target_role": "x"}, {"current_role": "y"})
    assert out == {"recommendations": ["a", "b"], "id": None}
    assert db.rolled_back == 1


def test_analyze_saved_job_needs_objectives(monkeypatch):
    monkeypatch.setattr(jis, "get_user_context", lambda db, uid: {"profile": None, "objectives": None})
    monkeypatch.setattr(jis, "is_llm_enabled", lambda: True)
    assert jis.analyze_saved_job(object(), "u1", {"title": "Dev"}) is None


def test_analyze_saved_job_swallows_llm_errors(monkeypatch):
    monkeypatch.setattr(jis, "get_user_context", lambda db, uid: {"profile": None, "objectives": {"target_role": "Dev"}})
    monkeypatch.setattr(jis, "is_llm_enabled", lambda: True)
    monkeypatch.setattr(jis, "llm_job_match_analysis", lambda job, ctx: (_ for _ in ()).throw(RuntimeError("bedrock")))
    assert jis.analyze_saved_job(object(), "u1", {"title": "Dev"}) is None

    monkeypatch.setattr(jis, "llm_job_match_analysis", lambda job, ctx: {"match_score": "91"})
    analysis = jis.analyze_saved_job(object(), "u1", {"title": "Dev"})
    assert jis.match_score_of(analysis) == 91.0
    assert jis.match_score_of(None) is None


def test_interaction_summary_counts_and_failure(monkeypatch):
    monkeypatch.setattr(jis, "count_by_type", lambda db, uid: {"saved": 2, "applied": 1})
    summary = jis.interaction_summary(object(), "u1")
    assert summary == {"total_interactions": 3, "saved_jobs": 2, "applied_jobs": 1, "viewed_jobs": 0, "dismissed_jobs": 0}

    monkeypatch.setattr(jis, "count_by_type", lambda db, uid: (_ for _ in ()).throw(RuntimeError("db")))
    assert jis.interaction_summary(object(), "u1")["total_interactions"] == 0


def test_analysis_body_of_keeps_inner_analysis():
    assert jis.analysis_body_of({"match_score": 80, "analysis": {"recommendation": "apply_now"}}) == {
        "recommendation": "apply_now"
    }
    assert jis.analysis_body_of({"match_score": 80, "analysis": "n/a"}) is None
    assert jis.analysis_body_of(None) is None


def test_serialize_interaction_hides_ai_fields_on_request():
    class _Row:
        id = "i1"
        job_id = "adzuna:1"
        job_data = {"title": "Dev"}
        interaction_type = "saved"
        notes = None
        ai_match_score = 81.0
        match_analysis = {"recommendation": "apply_now"}
        created_at = None
        updated_at = None

    full = jis.serialize_interaction(_Row())
    assert full["ai_match_score"] == 81.0
    assert full["match_analysis"] == {"recommendation": "apply_now"}

    slim = jis.serialize_interaction(_Row(), include_ai_analysis=False)
    assert "ai_match_score" not in slim
    assert "match_analysis" not in slim
    assert slim["job_id"] == "adzuna:1"
