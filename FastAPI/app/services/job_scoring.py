import logging
import math
import re
from typing import Any

from app.services.llm_client import is_llm_enabled, llm_score_jobs

logger = logging.getLogger(__name__)

_STOPWORDS = {
    "and", "the", "with", "for", "from", "that", "this", "you", "your", "our", "are", "was", "were",
    "have", "has", "had", "into", "onto", "about", "over", "under", "than", "their", "them", "they",
    "will", "would", "could", "should", "must", "can", "across", "using", "use", "used", "build", "built",
    "experience", "project", "projects", "role", "team", "work", "worked", "not", "specified",
}
_TOKEN_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_+#.-]{1,}")


def _tokens(text: str) -> set[str]:
    return {t.lower() for t in _TOKEN_RE.findall(text or "") if t.lower() not in _STOPWORDS}


def fallback_keyword_score(candidate_text: str, job_text: str) -> int:
    """Token-overlap score on the 0-100 scale, mapped into the practical range [35, 92]."""
    candidate_tokens = _tokens(candidate_text)
    job_tokens = _tokens(job_text)
    if not candidate_tokens or not job_tokens:
        return 35
    coverage = len(candidate_tokens & job_tokens) / max(len(candidate_tokens), 1)
    score = 0.35 + min(coverage, 1.0) * 0.57
    return int(round(max(0.0, min(1.0, score)) * 100))


def _candidate_text(user_context: dict[str, Any]) -> str:
    profile = user_context.get("profile") or {}
    objectives = user_context.get("objectives") or {}
    parts = [
        objectives.get("target_role"),
        objectives.get("target_industry"),
        objectives.get("work_preference"),
        profile.get("current_role"),
        profile.get("location"),
    ]
    return " ".join(str(p) for p in parts if p)


def _as_score(value: Any) -> float | None:
    """Model score as a float, or None when the reply is not a plain number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return score if math.isfinite(score) else None


def _as_reasons(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(r).strip() for r in value if isinstance(r, (str, int, float)) and str(r).strip()]


def _fallback_reasons(job: dict[str, Any], user_context: dict[str, Any]) -> list[str]:
    objectives = user_context.get("objectives") or {}
    reasons = []
    target = (objectives.get("target_role") or "").lower()
    title = (job.get("title") or "").lower()
    if target and _tokens(target) & _tokens(title):
        reasons.append("Title overlaps with target role")
    pref = objectives.get("work_preference")
    if pref and pref != "flexible" and job.get("location_type") == pref:
        reasons.append(f"Matches {pref} work preference")
    if not reasons:
        reasons.append("Keyword similarity with your goals")
    return reasons


def score_jobs(jobs: list[dict[str, Any]], user_context: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Annotate jobs with ai_match_score and match_reasons.
    Jobs are returned unchanged when the user has no career objectives.
    LLM failures leave the jobs without scores; a disabled LLM uses the keyword score.
    """
    if not jobs or not user_context.get("objectives"):
        return jobs

    if is_llm_enabled():
        try:
            scored = llm_score_jobs(jobs, user_context)
            out = []
            for job, enhancement in zip(jobs, scored):
                job = dict(job)
                job["ai_match_score"] = _as_score(enhancement.get("match_score"))
                job["match_reasons"] = _as_reasons(enhancement.get("match_reasons"))
                out.append(job)
        except Exception as e:
            logger.warning("Bedrock LLM job scoring failed: %s", e)
            return jobs
        return out

    candidate = _candidate_text(user_context)
    out = []
    for job in jobs:
        job = dict(job)
        job_text = f"{job.get('title') or ''}\n{job.get('description') or ''}"
        job["ai_match_score"] = fallback_keyword_score(candidate, job_text)
        job["match_reasons"] = _fallback_reasons(job, user_context)
        out.append(job)
    return out
