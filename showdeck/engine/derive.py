"""
Derivations - Chart-ready views of an exhibition collection.
Every function here is pure: no I/O, no mutation of the input, never raises.
Missing numeric fields read as 0 unless noted otherwise.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from showdeck.models import Exhibition

# Fixed region order for aggregation and display
REGION_ORDER = ('Europe', 'North America', 'Asia', 'Other')

# Product-value zones (inverter focus)
HIGH_VALUE_MIN_SCORE = 4
HIGH_VALUE_MAX_COST = 850000
AVOID_MIN_COST = 1000000
ZONE_HIGH_VALUE = 'high_value'
ZONE_AVOID = 'avoid'
ZONE_NEUTRAL = 'neutral'

# Buyer-influence collision spread
BUYER_SPREAD_STEP = 0.5

# Visibility index weights
VISIBILITY_REACH_WEIGHT = 1.5
VISIBILITY_COMPETITOR_WEIGHT = 0.2
VISIBILITY_TOP_N = 8

# Strategy tiers
NICE_TO_HAVE_SHOWN = 5

# Selected budget scenario above this is flagged
BUDGET_WARNING_TWD = 6000000

# Table sort
SORT_ASC = 'asc'
SORT_DESC = 'desc'
VIRTUAL_SORT_KEYS = {'cost': 'total_cost_twd', 'scores': 'inverter'}
NUMERIC_SORT_KEYS = {
    'year', 'total_cost_twd', 'competitors', 'recommendation', 'media_reach', 'inverter',
}
TEXT_SORT_KEYS = {'name', 'location', 'region', 'date', 'buyer_type', 'status', 'id'}
SORT_KEYS = tuple(sorted(NUMERIC_SORT_KEYS | TEXT_SORT_KEYS | set(VIRTUAL_SORT_KEYS)))


def _num(value: Any) -> float:
    """Numeric read with missing values as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _score(exhibition: Exhibition, line: str) -> float:
    if exhibition.product_scores is None:
        return 0
    return _num(getattr(exhibition.product_scores, line, None))


# =============================================================================
# RESULT SHAPES
# =============================================================================

@dataclass
class RegionSummary:
    """Aggregate of the records in one region"""
    region: str
    count: int
    total_cost: float
    competitors: float
    share_pct: float
    exhibitions: List[Exhibition] = field(default_factory=list)


@dataclass
class RegionBreakdown:
    regions: List[RegionSummary]
    grand_total: float


@dataclass
class ScatterPoint:
    """One plotted exhibition. z is the bubble size/weight when the chart uses one."""
    id: str
    name: str
    x: float
    y: float
    z: Optional[float] = None
    zone: Optional[str] = None
    label: Optional[str] = None


@dataclass
class VisibilityEntry:
    id: str
    name: str
    index: float
    media_reach: float
    competitors: float


@dataclass
class StrategyTiers:
    must_go: List[Exhibition]
    nice_to_have: List[Exhibition]
    hidden_count: int


# =============================================================================
# RANKINGS
# =============================================================================

def rank_by_competitors(exhibitions: Sequence[Exhibition]) -> List[Exhibition]:
    """Competitor count descending; ties keep input order."""
    return sorted(exhibitions, key=lambda e: _num(e.competitors), reverse=True)


def exposure_ordering(exhibitions: Sequence[Exhibition]) -> List[Exhibition]:
    """Media reach descending for the exposure heatmap."""
    return sorted(exhibitions, key=lambda e: _num(e.media_reach), reverse=True)


def aggregate_regions(exhibitions: Sequence[Exhibition]) -> RegionBreakdown:
    """
    Per-region count, cost and competitor sums, in REGION_ORDER.
    Regions without records are omitted. grand_total covers the whole input,
    including records whose region is not one of the fixed labels.
    """
    grand_total = sum(_num(e.total_cost_twd) for e in exhibitions)

    regions = []
    for region in REGION_ORDER:
        items = [e for e in exhibitions if e.region == region]
        if not items:
            continue
        total_cost = sum(_num(e.total_cost_twd) for e in items)
        regions.append(RegionSummary(
            region=region,
            count=len(items),
            total_cost=total_cost,
            competitors=sum(_num(e.competitors) for e in items),
            share_pct=(total_cost / grand_total * 100) if grand_total else 0.0,
            exhibitions=sorted(items, key=lambda e: _num(e.recommendation), reverse=True),
        ))

    return RegionBreakdown(regions=regions, grand_total=grand_total)


# =============================================================================
# SCATTER PROJECTIONS
# =============================================================================

def cost_competition_scatter(exhibitions: Sequence[Exhibition]) -> List[ScatterPoint]:
    """x = competitors, y = total cost, z = recommendation."""
    return [
        ScatterPoint(
            id=e.id, name=e.name,
            x=_num(e.competitors), y=_num(e.total_cost_twd), z=_num(e.recommendation),
        )
        for e in exhibitions
    ]


def classify_value_zone(cost: float, inverter_score: float) -> str:
    if inverter_score >= HIGH_VALUE_MIN_SCORE and cost < HIGH_VALUE_MAX_COST:
        return ZONE_HIGH_VALUE
    if cost > AVOID_MIN_COST:
        return ZONE_AVOID
    return ZONE_NEUTRAL


def product_value_scatter(exhibitions: Sequence[Exhibition]) -> List[ScatterPoint]:
    """x = total cost, y = inverter score, zoned by fixed cost/score thresholds."""
    points = []
    for e in exhibitions:
        x = _num(e.total_cost_twd)
        y = _score(e, 'inverter')
        points.append(ScatterPoint(id=e.id, name=e.name, x=x, y=y, zone=classify_value_zone(x, y)))
    return points


def buyer_quality(buyer_type: Optional[str]) -> float:
    """Heuristic buyer-quality score from a free-text buyer label. First match wins."""
    if not buyer_type:
        return 4
    if 'OEM' in buyer_type and ('Global' in buyer_type or 'Sourcing' in buyer_type):
        return 9
    if 'Tier 1' in buyer_type:
        return 7.5
    if 'Engineer' in buyer_type:
        return 6
    if 'Commercial' in buyer_type or 'Logistics' in buyer_type:
        return 5
    return 4


def spread_offsets(count: int, step: float = BUYER_SPREAD_STEP) -> List[float]:
    """Symmetric x offsets for count colliding points: 2 -> [-0.25, 0.25] at step 0.5."""
    if count <= 1:
        return [0.0] * count
    return [(index - (count - 1) / 2) * step for index in range(count)]


def buyer_influence_scatter(
    exhibitions: Sequence[Exhibition],
    step: float = BUYER_SPREAD_STEP,
) -> List[ScatterPoint]:
    """
    x = buyer quality, y = mean of ADAS and zonal scores, z = competitor weight.

    Records landing on the same (x, y) are spread around the shared x so each
    stays visible; y is never changed. Output is grouped by coordinate in
    first-seen order.
    """
    groups: "OrderedDict[Tuple[float, float], List[Exhibition]]" = OrderedDict()
    for e in exhibitions:
        key = (buyer_quality(e.buyer_type), (_score(e, 'adas') + _score(e, 'zonal')) / 2)
        groups.setdefault(key, []).append(e)

    points = []
    for (base_x, base_y), group in groups.items():
        for e, offset in zip(group, spread_offsets(len(group), step)):
            points.append(ScatterPoint(
                id=e.id, name=e.name,
                x=base_x + offset, y=base_y,
                z=max(_num(e.competitors), 1) * 10,
                label=e.buyer_type,
            ))
    return points


def brand_battlefield_scatter(exhibitions: Sequence[Exhibition]) -> List[ScatterPoint]:
    """x = competitors, y = media reach, z = recommendation (missing reads as 3)."""
    return [
        ScatterPoint(
            id=e.id, name=e.name,
            x=_num(e.competitors), y=_num(e.media_reach),
            z=_num(e.recommendation) or 3,
        )
        for e in exhibitions
    ]


def attack_defend_matrix(exhibitions: Sequence[Exhibition]) -> List[ScatterPoint]:
    """x = market saturation (competitors), y = inverter (attack), z = ADAS (defend)."""
    return [
        ScatterPoint(
            id=e.id, name=e.name,
            x=_num(e.competitors), y=_score(e, 'inverter'), z=_score(e, 'adas'),
            label=str(_num(e.total_cost_twd)),
        )
        for e in exhibitions
    ]


# =============================================================================
# INDICES
# =============================================================================

def visibility_index(exhibition: Exhibition) -> float:
    """(reach * 1.5) / (max(competitors, 1) * 0.2). A missing or zero reach counts as 1."""
    reach = _num(exhibition.media_reach) or 1
    rivals = max(_num(exhibition.competitors), 1)
    return (reach * VISIBILITY_REACH_WEIGHT) / (rivals * VISIBILITY_COMPETITOR_WEIGHT)


def visibility_ranking(
    exhibitions: Sequence[Exhibition],
    limit: Optional[int] = None,
) -> List[VisibilityEntry]:
    """Visibility index descending. limit=None returns every record."""
    entries = sorted(
        (
            VisibilityEntry(
                id=e.id, name=e.name, index=visibility_index(e),
                media_reach=_num(e.media_reach), competitors=_num(e.competitors),
            )
            for e in exhibitions
        ),
        key=lambda entry: entry.index,
        reverse=True,
    )
    return entries if limit is None else entries[:limit]


def strategy_tiers(exhibitions: Sequence[Exhibition]) -> StrategyTiers:
    must_go = [e for e in exhibitions if e.recommendation == 5]
    nice = [e for e in exhibitions if e.recommendation in (3, 4)]
    return StrategyTiers(
        must_go=must_go,
        nice_to_have=nice[:NICE_TO_HAVE_SHOWN],
        hidden_count=max(len(nice) - NICE_TO_HAVE_SHOWN, 0),
    )


# =============================================================================
# BUDGET
# =============================================================================

def budget_total(exhibitions: Iterable[Exhibition]) -> float:
    return sum(_num(e.total_cost_twd) for e in exhibitions)


def selection_subtotal(exhibitions: Iterable[Exhibition], selected_ids: Iterable[str]) -> float:
    """Sum of cost over exactly the records whose id is selected."""
    selected = set(selected_ids)
    return sum(_num(e.total_cost_twd) for e in exhibitions if e.id in selected)


def over_budget(subtotal: float) -> bool:
    return subtotal > BUDGET_WARNING_TWD


# =============================================================================
# TABLE SORT
# =============================================================================

def resolve_sort_key(key: str) -> Optional[str]:
    """Map virtual keys ('cost', 'scores') to the field they sort on. None for unknown keys."""
    resolved = VIRTUAL_SORT_KEYS.get(key, key)
    if resolved not in NUMERIC_SORT_KEYS and resolved not in TEXT_SORT_KEYS:
        return None
    return resolved


def _sort_value(exhibition: Exhibition, field_name: str):
    if field_name == 'inverter':
        return _score(exhibition, 'inverter')
    value = getattr(exhibition, field_name, None)
    if field_name in NUMERIC_SORT_KEYS:
        return _num(value)
    return value if isinstance(value, str) else ''


def sort_table(
    exhibitions: Sequence[Exhibition],
    key: Optional[str],
    direction: str = SORT_ASC,
) -> List[Exhibition]:
    """
    New ordering of the collection by key and direction.
    key=None or an unknown key keeps input order. Ties keep input order in
    both directions.
    """
    field_name = resolve_sort_key(key) if key is not None else None
    if field_name is None:
        return list(exhibitions)
    return sorted(
        exhibitions,
        key=lambda e: _sort_value(e, field_name),
        reverse=(direction == SORT_DESC),
    )


def next_sort_spec(current: Optional[Tuple[str, str]], key: str) -> Tuple[str, str]:
    """
    Column-click rule: same key while ascending flips to descending; same key
    while descending stays descending; any other key starts ascending.
    """
    if current is not None and current[0] == key:
        return (key, SORT_DESC)
    return (key, SORT_ASC)


# =============================================================================
# FORMATTING
# =============================================================================

def format_wan(amount: float) -> str:
    """TWD amount in units of 10,000 (萬), as used on the slides."""
    return f"{_num(amount) / 10000:.0f}萬"


def format_millions(amount: float) -> str:
    return f"NT$ {_num(amount) / 1000000:.2f}M"


def summarize_for_display(exhibition: Exhibition) -> Dict[str, Any]:
    """Flat row used by table renderers."""
    return {
        'id': exhibition.id,
        'name': exhibition.name,
        'buyer_type': exhibition.buyer_type,
        'competitors': _num(exhibition.competitors),
        'scores': tuple(_score(exhibition, line) for line in ('inverter', 'adas', 'zonal')),
        'cost': _num(exhibition.total_cost_twd),
        'recommendation': _num(exhibition.recommendation),
        'status': exhibition.status,
    }
