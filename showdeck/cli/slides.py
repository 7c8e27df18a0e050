"""
Slide renderers.
Each renderer turns a DeckState into the text body of one slide. Charts are
shown as the derived tables they would be drawn from.
"""

from typing import Callable, Dict, List

from showdeck.engine import derive
from showdeck.engine.deck import SLIDE_COUNT, SLIDE_TITLES, DeckState

RULE = "=" * 80
THIN_RULE = "-" * 80

_ZONE_LABELS = {
    derive.ZONE_HIGH_VALUE: 'TARGET',
    derive.ZONE_AVOID: 'AVOID',
    derive.ZONE_NEUTRAL: '',
}


def _stars(count) -> str:
    return "★" * int(count or 0)


def _bar(value: float, scale: float, width: int = 30) -> str:
    if scale <= 0:
        return ""
    return "█" * max(int(round(value / scale * width)), 0)


def render_title(state: DeckState) -> List[str]:
    total = derive.budget_total(state.exhibitions)
    return [
        "",
        "2026/2027 AUTOMOTIVE EXHIBITION STRATEGY REVIEW",
        "Precision strikes & budget efficiency",
        "",
        f"Total Est. Budget: {derive.format_millions(total)}",
        f"Events Targeted:   {len(state.exhibitions)}",
    ]


def render_competitive_landscape(state: DeckState) -> List[str]:
    ranked = derive.rank_by_competitors(state.exhibitions)
    top = max((p.competitors or 0 for p in ranked), default=0)
    lines = ["The battlefield: competitor density", ""]
    for e in ranked:
        lines.append(f"{e.name[:28]:<30} {_bar(e.competitors or 0, top, 20):<20} {e.competitors or 0}")

    lines += ["", "Cost vs competition", f"{'Event':<30} {'Rivals':>6} {'Cost':>10} {'Rec':>5}", THIN_RULE]
    for p in derive.cost_competition_scatter(state.exhibitions):
        lines.append(f"{p.name[:28]:<30} {p.x:>6.0f} {derive.format_wan(p.y):>10} {_stars(p.z):>5}")
    return lines


def render_regional(state: DeckState) -> List[str]:
    breakdown = derive.aggregate_regions(state.exhibitions)
    lines = [f"Budget share by region (total {derive.format_millions(breakdown.grand_total)})", ""]
    for r in breakdown.regions:
        lines.append(
            f"{r.region:<15} {derive.format_wan(r.total_cost):>8} {r.share_pct:5.1f}%  "
            f"{r.count} events  {r.competitors:.0f} rivals"
        )
        for e in r.exhibitions:
            lines.append(f"    {_stars(e.recommendation):<5} {e.name}")
    return lines


def render_inverter_strategy(state: DeckState) -> List[str]:
    lines = ["Inverter (P1) value matrix", f"{'Event':<30} {'Cost':>10} {'Inverter':>9}  Zone", THIN_RULE]
    for p in derive.product_value_scatter(state.exhibitions):
        lines.append(f"{p.name[:28]:<30} {derive.format_wan(p.x):>10} {p.y:>9.0f}  {_ZONE_LABELS[p.zone]}")
    return lines


def render_future_tech(state: DeckState) -> List[str]:
    lines = [
        "Future tech layout: buyer influence vs ADAS/Zonal fit",
        f"{'Event':<30} {'Buyer':>6} {'ADAS/Zonal':>11}  Buyer type",
        THIN_RULE,
    ]
    for p in derive.buyer_influence_scatter(state.exhibitions):
        lines.append(f"{p.name[:28]:<30} {p.x:>6.2f} {p.y:>11.1f}  {p.label}")
    return lines


def render_market_impact(state: DeckState) -> List[str]:
    lines = ["Brand battlefield: media reach vs rivals", f"{'Event':<30} {'Rivals':>6} {'Reach':>6}", THIN_RULE]
    for p in derive.brand_battlefield_scatter(state.exhibitions):
        lines.append(f"{p.name[:28]:<30} {p.x:>6.0f} {p.y:>6.0f}")

    lines += ["", "Exposure heatmap (I/A/Z)", THIN_RULE]
    for e in derive.exposure_ordering(state.exhibitions):
        row = derive.summarize_for_display(e)
        scores = "/".join(f"{s:.0f}" for s in row['scores'])
        lines.append(f"{e.name[:28]:<30} reach {e.media_reach or 0:>3}  {scores}")
    return lines


def render_competitor_intel(state: DeckState) -> List[str]:
    ranking = derive.visibility_ranking(state.exhibitions, limit=derive.VISIBILITY_TOP_N)
    top = ranking[0].index if ranking else 0
    lines = ["Visibility opportunity index (high reach / few rivals)", ""]
    for entry in ranking:
        lines.append(f"{entry.name[:28]:<30} {_bar(entry.index, top, 20):<20} {entry.index:5.1f}")

    lines += ["", "Attack (inverter) vs defend (ADAS)", f"{'Event':<30} {'Rivals':>6} {'Inv':>4} {'ADAS':>5}", THIN_RULE]
    for p in derive.attack_defend_matrix(state.exhibitions):
        lines.append(f"{p.name[:28]:<30} {p.x:>6.0f} {p.y:>4.0f} {p.z:>5.0f}")
    return lines


def render_deep_dive(state: DeckState) -> List[str]:
    target = state.swot_target()
    if target is None:
        return ["No exhibitions to show."]

    scores = target.product_scores
    lines = [
        f"{target.name}  [{target.location}]  Competitors: {target.competitors}",
        f"Buyer: {target.buyer_type}",
        "Scores  Inverter {}  ADAS {}  Zonal {}".format(
            *(getattr(scores, line, None) or '-' for line in ('inverter', 'adas', 'zonal'))
        ),
        f"Cost: NT$ {derive.format_wan(target.total_cost_twd)}",
        "",
    ]
    for heading, items in (
        ('STRENGTHS', target.swot.strengths),
        ('WEAKNESSES', target.swot.weaknesses),
        ('OPPORTUNITIES', target.swot.opportunities),
        ('THREATS', target.swot.threats),
    ):
        lines.append(heading)
        lines += [f"  - {item}" for item in items] or ["  No data available"]
    return lines


def render_strategy(state: DeckState) -> List[str]:
    tiers = derive.strategy_tiers(state.exhibitions)
    lines = ["MUST GO"]
    for e in tiers.must_go:
        lines.append(f"  {e.name[:40]:<42} {e.location[:20]:<22} {derive.format_wan(e.total_cost_twd):>8}")
    lines += ["", "NICE TO HAVE"]
    for e in tiers.nice_to_have:
        lines.append(
            f"  {e.name[:40]:<42} {_stars(e.recommendation):<5} {e.competitors} rivals "
            f"{derive.format_wan(e.total_cost_twd):>8}"
        )
    if tiers.hidden_count:
        lines.append(f"  + {tiers.hidden_count} more events...")
    return lines


def render_summary(state: DeckState) -> List[str]:
    if state.is_generating:
        return ["Generating executive summary..."]
    if state.summary is None:
        return ["No summary yet. Press 's' to generate one."]
    lines = ["OVERVIEW", state.summary.overview, "", "STRATEGIC RECOMMENDATIONS"]
    lines += [f"  {i}. {rec}" for i, rec in enumerate(state.summary.strategic_recommendations, 1)]
    lines += ["", "BUDGET RISK", state.summary.budget_risk]
    return lines


def render_budget_table(state: DeckState) -> List[str]:
    subtotal = derive.selection_subtotal(state.exhibitions, state.table_selection)
    total = derive.budget_total(state.exhibitions)
    warning = "  (over scenario threshold)" if derive.over_budget(subtotal) else ""
    sort_note = ""
    if state.table_sort is not None:
        sort_note = f"  sorted by {state.table_sort[0]} {state.table_sort[1]}"

    all_selected = state.table_selection >= state.all_ids
    lines = [
        f"Selected scenario: {derive.format_millions(subtotal)} / {derive.format_millions(total)} total{warning}",
        "",
        f"[{'x' if all_selected else ' '}] {'ID':<10} {'Event':<28} {'Target Buyer':<22} "
        f"{'Rivals':>6} {'I/A/Z':>7} {'Cost':>10} {'Rec':>4}  Status{sort_note}",
        THIN_RULE,
    ]
    for e in state.sorted_table():
        row = derive.summarize_for_display(e)
        mark = 'x' if e.id in state.table_selection else ' '
        scores = "/".join(f"{s:.0f}" for s in row['scores'])
        lines.append(
            f"[{mark}] {e.id[:10]:<10} {e.name[:26]:<28} {e.buyer_type[:20]:<22} "
            f"{row['competitors']:>6.0f} {scores:>7} {row['cost']:>10,.0f} {row['recommendation']:>4.0f}  {e.status}"
        )
    return lines


RENDERERS: Dict[str, Callable[[DeckState], List[str]]] = {
    'Title': render_title,
    'Competitive Landscape': render_competitive_landscape,
    'Regional Strategy': render_regional,
    'Inverter Strategy': render_inverter_strategy,
    'Future Tech Layout': render_future_tech,
    'Market Impact': render_market_impact,
    'Competitor Intelligence': render_competitor_intel,
    'Deep Dive': render_deep_dive,
    'Strategy': render_strategy,
    'Executive Summary': render_summary,
    'Budget Table': render_budget_table,
}


def render_slide(state: DeckState) -> str:
    """Full text of the current slide including its header."""
    title = SLIDE_TITLES[state.current_slide]
    header = [RULE, f"{title.upper():<70}{state.current_slide + 1:>4} / {SLIDE_COUNT}", RULE]
    return "\n".join(header + RENDERERS[title](state))
