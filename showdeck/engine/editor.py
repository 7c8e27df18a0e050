"""
Editor - Working-copy edits as explicit commands.
Each command is a small dataclass; apply_edit() is the single reducer that
turns (draft, command) into a new draft. The draft passed in is never mutated.
"""

import logging
import math
import re
import secrets
import string
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple, Union

from showdeck.models import REGIONS, SCORE_LINES, STATUSES, SWOT, Exhibition, ProductScores

logger = logging.getLogger(__name__)

DEFAULT_YEAR = 2026
NEW_ID_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits
_LEADING_DIGITS = re.compile(r"\d+")


# =============================================================================
# COMMANDS
# =============================================================================

@dataclass(frozen=True)
class SetName:
    id: str
    value: str


@dataclass(frozen=True)
class SetLocation:
    id: str
    value: str


@dataclass(frozen=True)
class SetRegion:
    id: str
    value: str


@dataclass(frozen=True)
class SetDate:
    """Sets date (YYYY-MM) and re-derives year from it."""
    id: str
    value: str


@dataclass(frozen=True)
class SetCost:
    id: str
    value: float


@dataclass(frozen=True)
class SetCompetitors:
    id: str
    value: int


@dataclass(frozen=True)
class SetRecommendation:
    id: str
    value: int


@dataclass(frozen=True)
class SetStatus:
    id: str
    value: str


@dataclass(frozen=True)
class SetNotes:
    id: str
    value: str


@dataclass(frozen=True)
class SetBuyerType:
    id: str
    value: str


@dataclass(frozen=True)
class SetMediaReach:
    id: str
    value: float


@dataclass(frozen=True)
class SetScore:
    id: str
    line: str  # inverter / adas / zonal
    value: float


@dataclass(frozen=True)
class AddExhibition:
    new_id: str


@dataclass(frozen=True)
class RemoveExhibition:
    id: str


EditCommand = Union[
    SetName, SetLocation, SetRegion, SetDate, SetCost, SetCompetitors,
    SetRecommendation, SetStatus, SetNotes, SetBuyerType, SetMediaReach,
    SetScore, AddExhibition, RemoveExhibition,
]

# command type -> Exhibition attribute it writes
_FIELD_COMMANDS = {
    SetName: 'name',
    SetLocation: 'location',
    SetRegion: 'region',
    SetCost: 'total_cost_twd',
    SetCompetitors: 'competitors',
    SetRecommendation: 'recommendation',
    SetStatus: 'status',
    SetNotes: 'notes',
    SetBuyerType: 'buyer_type',
    SetMediaReach: 'media_reach',
}


# =============================================================================
# HELPERS
# =============================================================================

def year_from_date(date_value: str) -> int:
    """
    Leading digits of the year segment of a YYYY-MM string ('2027x-03' -> 2027).
    No digits, or a zero year, falls back to DEFAULT_YEAR.
    """
    head = (date_value or '').split('-')[0].strip()
    match = _LEADING_DIGITS.match(head)
    if match is None:
        return DEFAULT_YEAR
    return int(match.group()) or DEFAULT_YEAR


def new_id(existing: Iterable[str]) -> str:
    """Random 9-character id not present in existing."""
    taken = set(existing)
    while True:
        candidate = ''.join(secrets.choice(_ID_ALPHABET) for _ in range(NEW_ID_LENGTH))
        if candidate not in taken:
            return candidate


def new_exhibition(exhibition_id: str) -> Exhibition:
    """Blank record with the editor's default values."""
    return Exhibition(
        id=exhibition_id,
        name='New Exhibition',
        location='',
        region='Other',
        date='2027-01',
        year=2027,
        total_cost_twd=0,
        competitors=0,
        recommendation=3,
        status='Planned',
        notes='',
        product_scores=ProductScores(inverter=3, adas=3, zonal=3),
        buyer_type='General',
        media_reach=5,
        swot=SWOT(),
    )


def _warn_out_of_range(command: EditCommand) -> None:
    if isinstance(command, SetScore) or isinstance(command, SetRecommendation):
        low, high = 1, 5
    elif isinstance(command, SetMediaReach):
        low, high = 1, 10
    else:
        return
    if not low <= command.value <= high:
        logger.warning(f"{type(command).__name__} for #{command.id}: {command.value} outside {low}-{high}, accepted")


def _update(exhibition: Exhibition, command: EditCommand) -> Exhibition:
    if isinstance(command, SetDate):
        return replace(exhibition, date=command.value, year=year_from_date(command.value))
    if isinstance(command, SetScore):
        scores = exhibition.product_scores or ProductScores()
        return replace(exhibition, product_scores=replace(scores, **{command.line: command.value}))
    return replace(exhibition, **{_FIELD_COMMANDS[type(command)]: command.value})


# =============================================================================
# REDUCER
# =============================================================================

def apply_edit(draft: Tuple[Exhibition, ...], command: EditCommand) -> Tuple[Exhibition, ...]:
    """
    Apply one edit command to the working copy and return the new working copy.
    Commands naming an unknown id leave the draft unchanged.
    """
    if isinstance(command, AddExhibition):
        if any(e.id == command.new_id for e in draft):
            raise ValueError(f"Exhibition id '{command.new_id}' already exists")
        return draft + (new_exhibition(command.new_id),)

    if isinstance(command, RemoveExhibition):
        return tuple(e for e in draft if e.id != command.id)

    if isinstance(command, SetScore) and command.line not in SCORE_LINES:
        raise ValueError(f"Unknown score line '{command.line}'. Choose from: {', '.join(SCORE_LINES)}")

    _warn_out_of_range(command)
    return tuple(_update(e, command) if e.id == command.id else e for e in draft)


# =============================================================================
# TEXT INPUT -> COMMAND
# =============================================================================

_TEXT_FIELDS = {
    'name': SetName,
    'location': SetLocation,
    'notes': SetNotes,
    'buyer': SetBuyerType,
    'buyer_type': SetBuyerType,
}
_INT_FIELDS = {
    'competitors': SetCompetitors,
    'recommendation': SetRecommendation,
    'rec': SetRecommendation,
}
_FLOAT_FIELDS = {
    'cost': SetCost,
    'media': SetMediaReach,
    'media_reach': SetMediaReach,
}
EDITABLE_FIELDS = tuple(sorted(
    set(_TEXT_FIELDS) | set(_INT_FIELDS) | set(_FLOAT_FIELDS)
    | {'region', 'status', 'date'} | set(SCORE_LINES)
))


def _number(raw: str, field_name: str, cast):
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"'{field_name}' needs a number, got {raw!r}")
    if not math.isfinite(value):
        raise ValueError(f"'{field_name}' needs a finite number, got {raw!r}")
    return cast(value)


def _choice(raw: str, choices, field_name: str) -> str:
    for choice in choices:
        if raw.strip().lower() == choice.lower():
            return choice
    raise ValueError(f"Unknown {field_name} {raw!r}. Choose from: {', '.join(choices)}")


def parse_edit(exhibition_id: str, field_name: str, raw: str) -> EditCommand:
    """
    Turn a field name and raw text value into an edit command.
    Raises ValueError for unknown fields, unknown enum values, or non-numeric input.
    """
    key = field_name.strip().lower()

    if key in _TEXT_FIELDS:
        return _TEXT_FIELDS[key](exhibition_id, raw)
    if key in _INT_FIELDS:
        return _INT_FIELDS[key](exhibition_id, _number(raw, key, int))
    if key in _FLOAT_FIELDS:
        value = _number(raw, key, float)
        if key == 'cost' and value < 0:
            raise ValueError("'cost' cannot be negative")
        return _FLOAT_FIELDS[key](exhibition_id, value)
    if key in SCORE_LINES:
        return SetScore(exhibition_id, key, _number(raw, key, float))
    if key == 'region':
        return SetRegion(exhibition_id, _choice(raw, REGIONS, 'region'))
    if key == 'status':
        return SetStatus(exhibition_id, _choice(raw, STATUSES, 'status'))
    if key == 'date':
        return SetDate(exhibition_id, raw.strip())

    raise ValueError(f"Unknown field '{field_name}'. Choose from: {', '.join(EDITABLE_FIELDS)}")


def find(exhibitions: Iterable[Exhibition], exhibition_id: str) -> Optional[Exhibition]:
    for e in exhibitions:
        if e.id == exhibition_id:
            return e
    return None
