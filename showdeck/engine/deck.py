"""
Deck - Presentation state and its transitions.

DeckState is an immutable snapshot; reduce(state, action) returns the next
snapshot. DeckController owns the current snapshot, applies actions one at a
time, emits bus events, and runs the executive summary request on a worker
thread whose result is applied on the next pump().
"""

import copy
import logging
import queue
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, Optional, Sequence, Tuple, Union

from showdeck.bus.events import (
    EventBus, bus as default_bus,
    EVENT_SLIDE_CHANGED, EVENT_SUMMARY_REQUESTED, EVENT_SUMMARY_READY,
    EVENT_DATA_COMMITTED, EVENT_INTEGRITY_RESET,
)
from showdeck.engine import derive
from showdeck.engine.editor import EditCommand, apply_edit
from showdeck.models import Exhibition, SummaryRecord, is_valid
from showdeck.models.seed import seed_exhibitions

logger = logging.getLogger(__name__)

SLIDE_TITLES = (
    'Title',
    'Competitive Landscape',
    'Regional Strategy',
    'Inverter Strategy',
    'Future Tech Layout',
    'Market Impact',
    'Competitor Intelligence',
    'Deep Dive',
    'Strategy',
    'Executive Summary',
    'Budget Table',
)
SLIDE_COUNT = len(SLIDE_TITLES)


@dataclass(frozen=True)
class DeckState:
    exhibitions: Tuple[Exhibition, ...]
    current_slide: int = 0
    summary: Optional[SummaryRecord] = None
    is_generating: bool = False
    swot_selection: str = ''
    table_sort: Optional[Tuple[str, str]] = None  # (key, direction)
    table_selection: FrozenSet[str] = frozenset()
    editor_draft: Optional[Tuple[Exhibition, ...]] = None

    @property
    def editor_open(self) -> bool:
        return self.editor_draft is not None

    @property
    def slide_title(self) -> str:
        return SLIDE_TITLES[self.current_slide]

    @property
    def all_ids(self) -> FrozenSet[str]:
        return frozenset(e.id for e in self.exhibitions)

    def swot_target(self) -> Optional[Exhibition]:
        """Selected exhibition for the deep-dive slide; unknown ids fall back to the first record."""
        for e in self.exhibitions:
            if e.id == self.swot_selection:
                return e
        return self.exhibitions[0] if self.exhibitions else None

    def sorted_table(self) -> list:
        if self.table_sort is None:
            return list(self.exhibitions)
        key, direction = self.table_sort
        return derive.sort_table(self.exhibitions, key, direction)


# =============================================================================
# ACTIONS
# =============================================================================

@dataclass(frozen=True)
class NextSlide:
    pass


@dataclass(frozen=True)
class PrevSlide:
    pass


@dataclass(frozen=True)
class JumpToSlide:
    index: int


@dataclass(frozen=True)
class SummaryRequested:
    pass


@dataclass(frozen=True)
class SummaryReady:
    summary: SummaryRecord


@dataclass(frozen=True)
class SelectSwot:
    id: str


@dataclass(frozen=True)
class SortTable:
    key: str


@dataclass(frozen=True)
class ToggleRow:
    id: str


@dataclass(frozen=True)
class ToggleSelectAll:
    pass


@dataclass(frozen=True)
class OpenEditor:
    pass


@dataclass(frozen=True)
class CommitEdit:
    pass


@dataclass(frozen=True)
class DiscardEdit:
    pass


@dataclass(frozen=True)
class Edit:
    """Wraps an editor command; only applied while the editor is open."""
    command: EditCommand


Action = Union[
    NextSlide, PrevSlide, JumpToSlide, SummaryRequested, SummaryReady,
    SelectSwot, SortTable, ToggleRow, ToggleSelectAll,
    OpenEditor, CommitEdit, DiscardEdit, Edit,
]


# =============================================================================
# INITIALIZATION
# =============================================================================

def check_integrity(exhibitions: Sequence[Exhibition]) -> Tuple[Tuple[Exhibition, ...], bool]:
    """
    Return (collection, was_reset). Any structurally invalid record replaces
    the whole collection with the seed; records are never patched one by one.
    """
    if all(is_valid(e) for e in exhibitions):
        return tuple(exhibitions), False
    logger.warning("Detected outdated data structure. Resetting to initial state.")
    return seed_exhibitions(), True


def initial_state(exhibitions: Optional[Sequence[Exhibition]] = None) -> DeckState:
    """Fresh deck over the given collection (seed by default), integrity-checked."""
    source = seed_exhibitions() if exhibitions is None else exhibitions
    checked, _ = check_integrity(source)
    return _fresh_state(checked)


def _fresh_state(exhibitions: Tuple[Exhibition, ...]) -> DeckState:
    return DeckState(
        exhibitions=exhibitions,
        swot_selection=exhibitions[0].id if exhibitions else '',
        table_selection=frozenset(e.id for e in exhibitions),
    )


# =============================================================================
# REDUCER
# =============================================================================

def reduce(state: DeckState, action: Action) -> DeckState:
    """Pure transition: old state + action -> new state."""
    if isinstance(action, NextSlide):
        return replace(state, current_slide=(state.current_slide + 1) % SLIDE_COUNT)

    if isinstance(action, PrevSlide):
        return replace(state, current_slide=(state.current_slide - 1) % SLIDE_COUNT)

    if isinstance(action, JumpToSlide):
        if not 0 <= action.index < SLIDE_COUNT:
            return state
        return replace(state, current_slide=action.index)

    if isinstance(action, SummaryRequested):
        if state.is_generating:
            return state
        return replace(state, is_generating=True)

    if isinstance(action, SummaryReady):
        return replace(state, summary=action.summary, is_generating=False)

    if isinstance(action, SelectSwot):
        return replace(state, swot_selection=action.id)

    if isinstance(action, SortTable):
        if action.key not in derive.SORT_KEYS:
            logger.warning(f"Ignoring sort on unknown key '{action.key}'")
            return state
        return replace(state, table_sort=derive.next_sort_spec(state.table_sort, action.key))

    if isinstance(action, ToggleRow):
        selection = set(state.table_selection)
        if action.id in selection:
            selection.discard(action.id)
        else:
            selection.add(action.id)
        return replace(state, table_selection=frozenset(selection))

    if isinstance(action, ToggleSelectAll):
        everything = state.all_ids
        if state.table_selection == everything:
            return replace(state, table_selection=frozenset())
        return replace(state, table_selection=everything)

    if isinstance(action, OpenEditor):
        if state.editor_open:
            return state
        return replace(state, editor_draft=copy.deepcopy(state.exhibitions))

    if isinstance(action, CommitEdit):
        if not state.editor_open:
            return state
        return replace(state, exhibitions=state.editor_draft, editor_draft=None)

    if isinstance(action, DiscardEdit):
        return replace(state, editor_draft=None)

    if isinstance(action, Edit):
        if not state.editor_open:
            logger.debug(f"Ignoring {type(action.command).__name__}: editor is closed")
            return state
        return replace(state, editor_draft=apply_edit(state.editor_draft, action.command))

    raise TypeError(f"Unknown action: {action!r}")


# =============================================================================
# CONTROLLER
# =============================================================================

SummaryFn = Callable[[Sequence[Exhibition]], SummaryRecord]


class DeckController:
    """
    Owns the deck state. Every transition goes through dispatch(), one at a
    time, on the caller's thread. The summary request runs on a single worker
    thread; its result is queued and applied by pump().
    """

    def __init__(
        self,
        exhibitions: Optional[Sequence[Exhibition]] = None,
        summarize: Optional[SummaryFn] = None,
        event_bus: Optional[EventBus] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        if summarize is None:
            from showdeck.engine.summary import generate_executive_summary
            summarize = generate_executive_summary
        self._summarize = summarize
        self._bus = event_bus if event_bus is not None else default_bus
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix='summary')
        self._inbox: "queue.Queue[Action]" = queue.Queue()

        source = seed_exhibitions() if exhibitions is None else exhibitions
        checked, was_reset = check_integrity(source)
        self.state = _fresh_state(checked)
        if was_reset:
            self._bus.emit(EVENT_INTEGRITY_RESET, {'count': len(checked)})

    def dispatch(self, action: Action) -> DeckState:
        before = self.state
        self.state = reduce(before, action)

        if self.state.current_slide != before.current_slide:
            self._bus.emit(EVENT_SLIDE_CHANGED, {
                'index': self.state.current_slide,
                'title': self.state.slide_title,
            })
        if isinstance(action, CommitEdit) and before.editor_open:
            logger.info(f"Committed edits: {len(before.exhibitions)} -> {len(self.state.exhibitions)} exhibitions")
            self._bus.emit(EVENT_DATA_COMMITTED, {'count': len(self.state.exhibitions)})
        if isinstance(action, SummaryReady):
            self._bus.emit(EVENT_SUMMARY_READY, {'summary': action.summary})
        return self.state

    def request_summary(self) -> Optional[Future]:
        """
        Start a summary request unless one is already in flight.
        Returns the Future, or None when the request was rejected.
        """
        if self.state.is_generating:
            logger.info("Summary request rejected: one is already in flight")
            return None

        self.dispatch(SummaryRequested())
        snapshot = self.state.exhibitions
        self._bus.emit(EVENT_SUMMARY_REQUESTED, {'count': len(snapshot)})

        future = self._executor.submit(self._summarize, snapshot)
        future.add_done_callback(self._on_summary_done)
        return future

    def _on_summary_done(self, future: Future) -> None:
        # Runs on the worker thread: only hand the result over, never touch state here.
        try:
            record = future.result()
        except Exception as e:
            from showdeck.engine.summary import failed_summary
            logger.error(f"Summary worker raised {type(e).__name__}: {e}")
            record = failed_summary()
        self._inbox.put(SummaryReady(record))

    def pump(self) -> int:
        """Apply queued results from background work. Returns how many were applied."""
        applied = 0
        while True:
            try:
                action = self._inbox.get_nowait()
            except queue.Empty:
                return applied
            self.dispatch(action)
            applied += 1

    def wait_for_summary(self, timeout: Optional[float] = None) -> DeckState:
        """Block until the in-flight summary lands, then apply it."""
        action = self._inbox.get(timeout=timeout)
        self.dispatch(action)
        self.pump()
        return self.state

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
