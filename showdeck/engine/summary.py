"""
Executive Summary - AI analysis of the exhibition schedule.
Sends a reduced projection of the collection to the configured AI backend and
parses the constrained JSON reply. Never raises: every failure path returns a
fixed fallback record.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from showdeck.config import config
from showdeck.engine.ai_client import call_ai, has_credentials
from showdeck.logging_config import log_call
from showdeck.models import Exhibition, SummaryRecord

logger = logging.getLogger(__name__)

SUMMARY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "overview": {"type": "STRING"},
        "strategicRecommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
        "budgetRisk": {"type": "STRING"},
    },
    "required": ["overview", "strategicRecommendations", "budgetRisk"],
}


def missing_credentials_summary() -> SummaryRecord:
    return SummaryRecord(
        overview="API Key missing. Please configure the environment to use AI generation.",
        strategic_recommendations=["Ensure API key is set.", "Manually review data."],
        budget_risk="Unknown",
    )


def failed_summary() -> SummaryRecord:
    return SummaryRecord(
        overview="Failed to generate AI summary. Please try again.",
        strategic_recommendations=["Check network connection.", "Review input data complexity."],
        budget_risk="Analysis unavailable.",
    )


# =============================================================================
# PROMPT
# =============================================================================

def build_payload(exhibitions: Sequence[Exhibition]) -> List[Dict[str, Any]]:
    """Reduced projection sent to the model. SWOT and notes stay local."""
    return [
        {
            'event': e.name,
            'costTWD': e.total_cost_twd,
            'competitors': e.competitors,
            'recommendation': e.recommendation,
            'region': e.region,
        }
        for e in exhibitions
    ]


def build_prompt(exhibitions: Sequence[Exhibition]) -> str:
    data_context = json.dumps(build_payload(exhibitions), ensure_ascii=False)

    return f"""You are a Senior Marketing Director for a Tier 1 Automotive Supplier.
Analyze the following 2026-2027 exhibition schedule data:
{data_context}

Context:
- Costs are in TWD (New Taiwan Dollar).
- "competitors" indicates the number of key rivals present.
- We want to maximize ROI. High competitor density means a necessary battlefield.
- Focus on "Precision Strikes" (精準打擊) and "Budget Efficiency" (預算效益).

Provide an executive summary in TRADITIONAL CHINESE (繁體中文):
1. overview: A concise paragraph on the global footprint and where the fiercest competition lies.
2. strategicRecommendations: 3 specific, actionable bullet points. Mention specific events (e.g., IZB, CES).
3. budgetRisk: Analyze if we are overspending in low-priority areas or missing key battlegrounds.

Reply with a single JSON object with exactly these keys:
{{"overview": string, "strategicRecommendations": [string, ...], "budgetRisk": string}}"""


# =============================================================================
# RESPONSE PARSING
# =============================================================================

def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def parse_summary(text: Optional[str]) -> SummaryRecord:
    """
    Parse the model's reply into a SummaryRecord.
    Raises ValueError on an empty body, invalid JSON, or a schema violation.
    """
    if not text or not text.strip():
        raise ValueError("Empty response from AI")

    data = json.loads(_strip_code_fence(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    overview = data.get('overview')
    recommendations = data.get('strategicRecommendations')
    budget_risk = data.get('budgetRisk')

    if not isinstance(overview, str):
        raise ValueError("'overview' missing or not a string")
    if not isinstance(recommendations, list) or not all(isinstance(r, str) for r in recommendations):
        raise ValueError("'strategicRecommendations' missing or not a list of strings")
    if not isinstance(budget_risk, str):
        raise ValueError("'budgetRisk' missing or not a string")

    return SummaryRecord(
        overview=overview,
        strategic_recommendations=list(recommendations),
        budget_risk=budget_risk,
    )


# =============================================================================
# REQUESTER
# =============================================================================

@log_call
def generate_executive_summary(
    exhibitions: Sequence[Exhibition],
    model: Optional[str] = None,
) -> SummaryRecord:
    """
    Ask the AI backend for an executive summary of the collection.
    No retry, no cancellation; a missing credential skips the network entirely.
    """
    _model = model or config.SUMMARY_MODEL

    if not has_credentials(_model):
        logger.warning(f"No credentials for summary backend '{_model}', returning offline summary")
        return missing_credentials_summary()

    logger.info(f"Generating executive summary for {len(exhibitions)} exhibitions with {_model}")

    try:
        response = call_ai(build_prompt(exhibitions), model=_model, response_schema=SUMMARY_SCHEMA)
        return parse_summary(response)
    except Exception as e:
        logger.error(f"Executive summary failed: {type(e).__name__}: {e}")
        return failed_summary()
