from datetime import datetime, timezone

import app.repos.job_interaction_repo as irepo
import app.repos.profile_repo as prepo
import app.repos.recommendation_repo as recrepo
import app.repos.resume_repo as rrepo
import app.repos.search_session_repo as srepo
import app.repos.user_repo as urepo


class _Query:
    def __init__(self, data):
        self.data = data

    def filter(self, *args, **kwargs):
        return self

    def order_by(self, *args, **kwargs):
        return self

    def group_by(self, *args, **kwargs):
        return self

    def offset(self, n):
        return self

    def limit(self, n):
        return self

    def all(self):
        return self.data if isinstance(self.data, list) else [self.data]

    def first(self):
        if isinstance(self.data, list):
            return self.data[0] if self.data else None
        return self.data

    def count(self):
        if isinstance(self.data, list):
            return len(self.data)
        return 1 if self.data else 0

    def delete(self, synchronize_session=False):
        return 2


class _DB:
    def __init__(self, data=None):
        self.data = data
        self.added = []
        self.committed = 0
        self.rolled_back = 0

    def query(self, *models):
        return _Query(self.data)

    def add(self, obj):
        self.added.append(obj)

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def refresh(self, obj):
        return None


def test_user_repo_get_or_create_provisions_and_updates_email():
    db = _DB(data=None)
    user = urepo.get_or_create(db, "sub-1", "a@example.com")
    assert user.id == "sub-1"
    assert user.email == "a@example.com"
    assert db.added == [user]

    existing = type("U", (), {"id": "sub-1", "email": "old@example.com"})()
    db2 = _DB(data=existing)
    out = urepo.get_or_create(db2, "sub-1", "new@example.com")
    assert out is existing
    assert existing.email == "new@example.com"
    assert db2.committed == 1
    assert db2.added == []


def test_profile_repo_upserts_create_then_update():
    db = _DB(data=None)
    profile = prepo.upsert_profile(db, "u1", {"full_name": "Jane", "years_experience": 3})
    assert profile.user_id == "u1"
    assert profile.full_name == "Jane"
    assert db.added == [profile]

    db2 = _DB(data=profile)
    prepo.upsert_profile(db2, "u1", {"full_name": "Jane Doe"})
    assert profile.full_name == "Jane Doe"
    assert db2.added == []

    objectives = prepo.upsert_objectives(_DB(data=None), "u1", {"target_role": "Data Engineer", "salary_min": 1})
    assert objectives.target_role == "Data Engineer"
    assert objectives.id


def test_resume_repo_create_and_fetch(monkeypatch):
    monkeypatch.setattr(rrepo, "generate_id", lambda: "ra1")
    db = _DB(data=[])
    record = rrepo.create(db, "u1", "text", {"score": 70}, marketability_score=70.0, target_role="Dev")
    assert record.id == "ra1"
    assert record.marketability_score == 70.0
    assert rrepo.get_latest_by_user(db, "u1") is None
    assert rrepo.list_for_user(db, "u1") == []


def test_job_interaction_repo_crud(monkeypatch):
    monkeypatch.setattr(irepo, "generate_id", lambda: "i1")
    db = _DB(data=None)
    row = irepo.create(db, "u1", "adzuna:1", {"title": "Dev"}, "saved", notes="n")
    assert row.id == "i1"
    assert row.interaction_type == "saved"
    assert irepo.get_existing(db, "u1", "adzuna:1", "saved") is None

    existing = irepo.JobInteraction(id="i2", user_id="u1", job_id="adzuna:1", interaction_type="saved", notes="old")
    db2 = _DB(data=[existing])
    updated = irepo.update_for_job(db2, "u1", "adzuna:1", interaction_type="applied", notes=None, set_notes=True)
    assert updated == [existing]
    assert existing.interaction_type == "applied"
    assert existing.notes is None
    assert irepo.update_for_job(_DB(data=[]), "u1", "x", notes="n", set_notes=True) == []

    assert irepo.delete_for_job(db2, "u1", "adzuna:1") == 2

    items, total = irepo.list_for_user(db2, "u1", "applied", limit=5, offset=0)
    assert items == [existing]
    assert total == 1


def test_job_interaction_repo_aggregates():
    counts_db = _DB(data=[("saved", 3), ("viewed", 2)])
    assert irepo.count_by_type(counts_db, "u1") == {"saved": 3, "viewed": 2}

    types_db = _DB(data=[("a:1", "saved"), ("a:1", "viewed"), ("a:2", "viewed")])
    assert irepo.get_types_for_jobs(types_db, "u1", ["a:1", "a:2"]) == {"a:1": {"saved", "viewed"}, "a:2": {"viewed"}}
    assert irepo.get_types_for_jobs(types_db, "u1", []) == {}


def test_search_session_repo_create_sets_expiry():
    db = _DB()
    before = datetime.now(timezone.utc)
    row = srepo.create(db, "u1", "python", {"query": "python"}, 2, ["a:1", "a:2"], ttl_hours=24)
    hours = (row.expires_at - before).total_seconds() / 3600
    assert 23.9 < hours <= 24.01
    assert row.job_ids == ["a:1", "a:2"]
    assert db.committed == 1


def test_search_session_repo_expired_counts_and_delete():
    db = _DB(data=[object(), object()])
    assert srepo.count_expired(db) == 2
    assert srepo.delete_expired(db) == 2
    assert db.committed == 1


def test_recommendation_repo_create_list_and_status():
    db = _DB(data=None)
    rec = recrepo.create(db, "u1", {"recommendations": ["a"]})
    assert rec.status == "active"
    assert rec.recommendation_type == "general"
    assert recrepo.update_status(db, "missing", "u1", "completed") is None

    db2 = _DB(data=rec)
    assert recrepo.update_status(db2, rec.id, "u1", "completed").status == "completed"
    assert recrepo.list_for_user(db2, "u1") == [rec]


def test_job_interaction_type_change_moves_only_the_newest_row():
    newest = irepo.JobInteraction(id="i2", user_id="u1", job_id="adzuna:1", interaction_type="viewed")
    older = irepo.JobInteraction(id="i1", user_id="u1", job_id="adzuna:1", interaction_type="saved")
    db = _DB(data=[newest, older])

    updated = irepo.update_for_job(db, "u1", "adzuna:1", interaction_type="applied")
    assert updated == [newest]
    assert [r.interaction_type for r in (newest, older)] == ["applied", "saved"]

    notes_only = irepo.update_for_job(db, "u1", "adzuna:1", notes="Recruiter call", set_notes=True)
    assert notes_only == [newest, older]
    assert older.notes == "Recruiter call"
