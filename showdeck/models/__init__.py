"""
Data Models
Dataclasses for all entities. These are pure Python objects, no I/O.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

REGIONS = ('North America', 'Europe', 'Asia', 'Other')
STATUSES = ('Confirmed', 'Planned', 'Under Review', 'Dropped')
SCORE_LINES = ('inverter', 'adas', 'zonal')


@dataclass
class ProductScores:
    """Product-fit scores (1-5) per product line"""
    inverter: Optional[float] = None
    adas: Optional[float] = None
    zonal: Optional[float] = None


@dataclass
class SWOT:
    """Strengths / weaknesses / opportunities / threats breakdown"""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    opportunities: List[str] = field(default_factory=list)
    threats: List[str] = field(default_factory=list)


@dataclass
class Exhibition:
    """Trade-show candidacy entity"""
    id: str = ''
    name: str = ''
    location: str = ''
    region: str = 'Other'
    date: str = ''  # YYYY-MM
    year: Optional[int] = None
    total_cost_twd: Optional[float] = None
    competitors: Optional[int] = None
    recommendation: Optional[int] = None  # 1-5 stars
    status: str = 'Planned'
    notes: str = ''
    product_scores: Optional[ProductScores] = None
    buyer_type: str = ''
    media_reach: Optional[float] = None  # 1-10
    swot: SWOT = field(default_factory=SWOT)


@dataclass
class SummaryRecord:
    """AI executive summary. Ephemeral, never persisted."""
    overview: str = ''
    strategic_recommendations: List[str] = field(default_factory=list)
    budget_risk: str = ''


# =============================================================================
# VALIDITY
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid(exhibition: Exhibition) -> bool:
    """True if product scores are present and numeric and media reach is numeric."""
    scores = exhibition.product_scores
    if scores is None:
        return False
    if not all(_is_number(getattr(scores, line)) for line in SCORE_LINES):
        return False
    return _is_number(exhibition.media_reach)


# =============================================================================
# DICT CONVERSION (camelCase wire names, as exported to JSON)
# =============================================================================

def exhibition_to_dict(exhibition: Exhibition) -> Dict[str, Any]:
    scores = exhibition.product_scores
    return {
        'id': exhibition.id,
        'name': exhibition.name,
        'location': exhibition.location,
        'region': exhibition.region,
        'date': exhibition.date,
        'year': exhibition.year,
        'totalCostTWD': exhibition.total_cost_twd,
        'competitors': exhibition.competitors,
        'recommendation': exhibition.recommendation,
        'status': exhibition.status,
        'notes': exhibition.notes,
        'productScores': None if scores is None else {
            'inverter': scores.inverter,
            'adas': scores.adas,
            'zonal': scores.zonal,
        },
        'buyerType': exhibition.buyer_type,
        'mediaReach': exhibition.media_reach,
        'swot': {
            'strengths': list(exhibition.swot.strengths),
            'weaknesses': list(exhibition.swot.weaknesses),
            'opportunities': list(exhibition.swot.opportunities),
            'threats': list(exhibition.swot.threats),
        },
    }


def _text_list(value: Any) -> List[str]:
    """SWOT entries as strings; anything other than a list reads as empty."""
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def exhibition_from_dict(row: Dict[str, Any]) -> Exhibition:
    """
    Build an Exhibition from its dict form.
    Missing keys become None so the integrity check can see them.
    """
    raw_scores = row.get('productScores')
    scores = None
    if isinstance(raw_scores, dict):
        scores = ProductScores(
            inverter=raw_scores.get('inverter'),
            adas=raw_scores.get('adas'),
            zonal=raw_scores.get('zonal'),
        )

    raw_swot = row.get('swot')
    if not isinstance(raw_swot, dict):
        raw_swot = {}
    swot = SWOT(
        strengths=_text_list(raw_swot.get('strengths')),
        weaknesses=_text_list(raw_swot.get('weaknesses')),
        opportunities=_text_list(raw_swot.get('opportunities')),
        threats=_text_list(raw_swot.get('threats')),
    )

    return Exhibition(
        id=str(row.get('id', '')),
        name=row.get('name') or '',
        location=row.get('location') or '',
        region=row.get('region') or 'Other',
        date=row.get('date') or '',
        year=row.get('year'),
        total_cost_twd=row.get('totalCostTWD'),
        competitors=row.get('competitors'),
        recommendation=row.get('recommendation'),
        status=row.get('status') or 'Planned',
        notes=row.get('notes') or '',
        product_scores=scores,
        buyer_type=row.get('buyerType') or '',
        media_reach=row.get('mediaReach'),
        swot=swot,
    )
