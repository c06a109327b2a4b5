import json
import logging
from typing import Any

import boto3
from botocore.config import Config

from app.config import settings

logger = logging.getLogger(__name__)


def _call_bedrock_llm(prompt: str, timeout: float = 60.0, max_tokens: int = 1200) -> str:
    """Call Bedrock LLM via converse API and return response text."""
    try:
        client = boto3.client(
            "bedrock-runtime",
            region_name=settings.aws_region,
            config=Config(read_timeout=int(timeout), connect_timeout=10),
        )
        model_ids = [settings.bedrock_llm_model_id]
        # Common typo safety: "ministral" -> "mistral".
        if "ministral" in settings.bedrock_llm_model_id:
            model_ids.append(settings.bedrock_llm_model_id.replace("ministral", "mistral"))

        last_err = None
        response = None
        for model_id in model_ids:
            try:
                response = client.converse(
                    modelId=model_id,
                    messages=[
                        {
                            "role": "user",
                            "content": [{"text": prompt}],
                        }
                    ],
                    inferenceConfig={
                        "maxTokens": max_tokens,
                        "temperature": 0.2,
                    },
                )
                break
            except Exception as e:
                last_err = e
                logger.warning("Bedrock LLM model attempt failed: model=%s err=%s", model_id, e)
        if response is None and last_err is not None:
            raise last_err

        blocks = (response.get("output") or {}).get("message", {}).get("content", [])
        text = "".join(b.get("text", "") for b in blocks if isinstance(b, dict)).strip()
        logger.debug("Bedrock LLM response length=%d", len(text))
        return text
    except Exception as e:
        logger.warning("Bedrock LLM call failed: %s", e)
        raise


def is_llm_enabled() -> bool:
    """Whether Bedrock LLM is enabled."""
    return bool(settings.bedrock_llm_enabled and settings.bedrock_llm_model_id and settings.aws_region)


def _first_balanced(text: str, open_ch: str, close_ch: str) -> str | None:
    """
    Return the first balanced open_ch...close_ch span in text.
    Brackets inside JSON string literals (and escaped quotes) are ignored.
    """
    start = text.find(open_ch)
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == open_ch:
                depth += 1
            elif ch == close_ch:
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        # Unbalanced from this start; try the next opener.
        start = text.find(open_ch, start + 1)
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the first balanced JSON object in a model reply. Raises ValueError if none."""
    span = _first_balanced(text or "", "{", "}")
    if span is None:
        raise ValueError("No JSON object found in LLM response")
    obj = json.loads(span)
    if not isinstance(obj, dict):
        raise ValueError("LLM response JSON is not an object")
    return obj


def extract_json_array(text: str) -> list[Any]:
    """Parse the first balanced JSON array in a model reply. Raises ValueError if none."""
    span = _first_balanced(text or "", "[", "]")
    if span is None:
        raise ValueError("No JSON array found in LLM response")
    arr = json.loads(span)
    if not isinstance(arr, list):
        raise ValueError("LLM response JSON is not an array")
    return arr


def _ns(value: Any) -> str:
    return str(value) if value not in (None, "") else "Not specified"


def llm_analyze_resume(
    resume_text: str,
    target_role: str | None = None,
    career_stage: str | None = None,
    industry_focus: str | None = None,
) -> dict[str, Any]:
    """
    Full skills analysis of a resume.
    Returns the parsed JSON object; raises ValueError when the reply has none.
    """
    prompt = f"""You are a career strategist and skills analyst. Perform a skills analysis of this resume.

CONTEXT:
- Target Role: {_ns(target_role)}
- Career Stage: {_ns(career_stage)}
- Industry Focus: {_ns(industry_focus)}

REQUIREMENTS:
1. Extract skills: technical, soft, industry specific, certifications.
2. Identify skill gaps for the target role and outdated skills.
3. Assess market demand and competitive positioning.
4. Suggest next roles and skill development priorities.
5. Give an overall assessment with a marketability score (0-100).

RESUME TEXT:
<<<{resume_text}>>>

Respond with ONLY a JSON object of this shape:
{{
  "extracted_skills": {{
    "technical": [{{"skill": "Python", "confidence": 95, "category": "Programming Language", "years_experience": 3, "proficiency_level": "advanced"}}],
    "soft": [{{"skill": "Leadership", "confidence": 85, "evidence": ["Led team of 5 developers"]}}],
    "industry_specific": [{{"skill": "Financial Modeling", "confidence": 80, "industry": "Finance"}}],
    "certifications": [{{"name": "AWS Solutions Architect", "issuer": "Amazon", "year": 2023, "status": "active"}}]
  }},
  "skill_gaps": {{
    "missing_for_target_role": [{{"skill": "...", "importance": "critical", "market_demand": 90, "learning_resources": ["..."]}}],
    "outdated_skills": [{{"skill": "...", "current_relevance": 30, "modernization_path": "..."}}]
  }},
  "market_intelligence": {{
    "skills_demand_analysis": [{{"skill": "...", "demand_trend": "rising", "demand_score": 90, "salary_impact": 10, "job_market_growth": "..."}}],
    "competitive_positioning": {{"percentile_ranking": 75, "similar_profiles_comparison": "...", "unique_differentiators": ["..."]}}
  }},
  "career_progression": {{
    "suggested_next_roles": [{{"title": "...", "skills_alignment": 85, "skills_needed": ["..."], "timeline_estimate": "..."}}],
    "skill_development_priorities": [{{"skill": "...", "priority_score": 90, "learning_path": {{"beginner": [], "intermediate": [], "advanced": []}}, "estimated_time_to_proficiency": "..."}}]
  }},
  "overall_assessment": {{
    "marketability_score": 78,
    "strengths": ["..."],
    "improvement_areas": ["..."],
    "strategic_recommendations": ["..."]
  }}
}}"""
    text = _call_bedrock_llm(prompt, timeout=120.0, max_tokens=4000)
    return extract_json_object(text)


def _candidate_block(user_context: dict[str, Any]) -> str:
    profile = user_context.get("profile") or {}
    objectives = user_context.get("objectives") or {}
    return (
        "CANDIDATE PROFILE:\n"
        f"- Current Role: {_ns(profile.get('current_role'))}\n"
        f"- Location: {_ns(profile.get('location'))}\n"
        f"- Target Role: {_ns(objectives.get('target_role'))}\n"
        f"- Career Stage: {_ns(objectives.get('career_stage'))}\n"
        f"- Primary Goal: {_ns(objectives.get('primary_goal'))}\n"
        f"- Work Preference: {_ns(objectives.get('work_preference'))}\n"
    )


def llm_score_jobs(jobs: list[dict[str, Any]], user_context: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Score every job against the candidate in one call.
    Returns one {"match_score", "match_reasons"} entry per job, in job order
    (entries the model omitted come back as empty dicts).
    """
    if not jobs:
        return []
    listing = "\n".join(
        f"{i}. {j.get('title')} at {j.get('company')}\n"
        f"Location: {j.get('location') or 'Unknown'}\n"
        f"Category: {j.get('category') or 'Unknown'}\n"
        f"Description: {(j.get('description') or '')[:300]}...\n"
        for i, j in enumerate(jobs, start=1)
    )
    prompt = f"""You are a career coach analyzing job matches for a candidate.

{_candidate_block(user_context)}
JOBS TO ANALYZE:
{listing}
For each job, give a match score (0-100) and 2-3 brief reasons why it matches or does not match the candidate.

Respond with ONLY a JSON array, one object per job in the same order:
[{{"match_score": 85, "match_reasons": ["Title aligns with target role", "Location matches preference"]}}]"""
    text = _call_bedrock_llm(prompt, max_tokens=2000)
    arr = extract_json_array(text)
    out: list[dict[str, Any]] = []
    for i in range(len(jobs)):
        item = arr[i] if i < len(arr) and isinstance(arr[i], dict) else {}
        out.append(item)
    return out


FALLBACK_MATCH_ANALYSIS: dict[str, Any] = {
    "match_score": 75,
    "analysis": {
        "strengths": ["Job saved for detailed review"],
        "concerns": [],
        "overall_assessment": "AI analysis temporarily unavailable - job saved for manual review",
        "recommendation": "needs_more_research",
        "next_steps": ["Review job details manually"],
    },
}


def llm_job_match_analysis(job_data: dict[str, Any], user_context: dict[str, Any]) -> dict[str, Any]:
    """
    Detailed fit analysis for a single saved job.
    An unparseable reply yields FALLBACK_MATCH_ANALYSIS; call failures propagate.
    """
    salary_min = job_data.get("salary_min")
    salary_max = job_data.get("salary_max")
    prompt = f"""You are a career coach analyzing why a specific job matches a candidate's profile.

{_candidate_block(user_context)}
JOB TO ANALYZE:
Title: {job_data.get('title')}
Company: {job_data.get('company')}
Location: {job_data.get('location')}
Category: {job_data.get('category')}
Salary: {f'${salary_min}' if salary_min else 'Not specified'} - {f'${salary_max}' if salary_max else 'Not specified'}
Description: {(job_data.get('description') or '')[:500]}

Consider role alignment, skills match, location and work preference, salary, culture fit and career goals.

Respond with ONLY a JSON object:
{{
  "match_score": 85,
  "analysis": {{
    "strengths": ["..."],
    "concerns": ["..."],
    "overall_assessment": "...",
    "recommendation": "apply_now",
    "next_steps": ["..."]
  }}
}}"""
    text = _call_bedrock_llm(prompt, max_tokens=1000)
    try:
        obj = extract_json_object(text)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning("Failed to parse job match analysis: %s", e)
        return json.loads(json.dumps(FALLBACK_MATCH_ANALYSIS))
    return obj


def llm_generate_recommendations(career_goals: dict[str, Any], profile: dict[str, Any] | None) -> list[str]:
    """3-5 actionable recommendations. Raises ValueError when the reply cannot be parsed."""
    profile = profile or {}
    prompt = f"""You are a career coach. Based on this person's career goals and profile, provide 3-5 specific, actionable recommendations.

Career Goals:
- Career Stage: {_ns(career_goals.get('career_stage'))}
- Primary Goal: {_ns(career_goals.get('primary_goal'))}
- Target Role: {_ns(career_goals.get('target_role'))}
- Timeline: {_ns(career_goals.get('timeline'))}
- Work Preference: {_ns(career_goals.get('work_preference'))}
- Current Situation: {_ns(career_goals.get('current_situation'))}

Current Profile:
- Current Role: {_ns(profile.get('current_role'))}
- Location: {_ns(profile.get('location'))}

Respond with ONLY a JSON object:
{{"recommendations": ["Specific action 1", "Specific action 2"]}}"""
    text = _call_bedrock_llm(prompt, max_tokens=1500)
    obj = extract_json_object(text)
    recs = obj.get("recommendations")
    if not isinstance(recs, list):
        raise ValueError("LLM response has no recommendations list")
    return [str(r).strip() for r in recs if str(r or "").strip()]
