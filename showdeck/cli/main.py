#!/usr/bin/env python3
"""
Showdeck Terminal CLI
Interactive exhibition strategy deck plus one-shot commands.
"""

import json
import logging
import shlex
from typing import Optional

import click

from showdeck.bus.events import bus, EVENT_SUMMARY_READY, EVENT_INTEGRITY_RESET
from showdeck.cli.slides import render_slide, render_budget_table, render_summary
from showdeck.engine import derive
from showdeck.engine.ai_client import MODEL_CHOICES
from showdeck.engine.deck import (
    SLIDE_COUNT, DeckController, initial_state, reduce,
    NextSlide, PrevSlide, JumpToSlide, SelectSwot, SortTable, ToggleRow, ToggleSelectAll,
    OpenEditor, CommitEdit, DiscardEdit, Edit, SummaryReady,
)
from showdeck.engine.editor import AddExhibition, RemoveExhibition, SetScore, find, new_id, parse_edit
from showdeck.engine.summary import generate_executive_summary
from showdeck.logging_config import configure_logging, log_call
from showdeck.models import SCORE_LINES, exhibition_from_dict, exhibition_to_dict

DECK_HELP = """\
  n / p        next / previous slide      g N       jump to slide N
  s            generate AI summary        w ID      deep-dive on exhibition ID
  o KEY        sort budget table by KEY   x ID      toggle budget row
  a            toggle all budget rows     e         open data editor
  r            refresh                    q         quit"""

EDITOR_HELP = """\
  set ID FIELD VALUE    change a field (fields: name location region date cost competitors
                        rec status notes buyer media inverter adas zonal)
  add                   add a new exhibition
  del ID                remove an exhibition
  list                  show the working copy
  save / cancel         commit or discard changes"""


def _load_exhibitions(path: Optional[str]):
    """Read a JSON export. None means use the seed collection."""
    if not path:
        return None
    logger = logging.getLogger("showdeck")
    try:
        with open(path, encoding="utf-8") as fh:
            rows = json.load(fh)
    except ValueError as e:
        logger.error(f"Could not parse {path}: {e}")
        raise click.BadParameter(f"{path} is not valid JSON: {e}", param_hint="--data")
    if not isinstance(rows, list):
        raise click.BadParameter(f"{path} must contain a JSON list of exhibitions", param_hint="--data")
    for position, row in enumerate(rows, 1):
        if not isinstance(row, dict):
            logger.error(f"{path}: entry {position} is {type(row).__name__}, not an object")
            raise click.BadParameter(
                f"{path}: entry {position} is not an exhibition object", param_hint="--data"
            )
    logger.info(f"Loaded {len(rows)} exhibitions from {path}")
    return [exhibition_from_dict(row) for row in rows]


@click.group()
@click.option('--data', 'data_path', type=click.Path(exists=True, dir_okay=False),
              help='JSON file of exhibitions to present instead of the built-in shortlist')
@click.pass_context
def cli(ctx, data_path):
    """Showdeck - Exhibition Strategy Deck"""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj['exhibitions'] = _load_exhibitions(data_path)


# =============================================================================
# ONE-SHOT COMMANDS
# =============================================================================

@cli.command('slide')
@click.argument('number', type=click.IntRange(1, SLIDE_COUNT))
@click.option('--swot', 'swot_id', help='Exhibition ID for the deep-dive slide')
@click.pass_context
@log_call
def slide(ctx, number, swot_id):
    """Print one slide (1-based)"""
    state = initial_state(ctx.obj['exhibitions'])
    state = reduce(state, JumpToSlide(number - 1))
    if swot_id:
        state = reduce(state, SelectSwot(swot_id))
    click.echo(render_slide(state))


@cli.command('table')
@click.option('--sort', 'sort_key', type=click.Choice(derive.SORT_KEYS), help='Column to sort by')
@click.option('--desc', is_flag=True, help='Sort descending')
@click.option('--select', 'selected', multiple=True, help='Only count these IDs in the scenario (repeatable)')
@click.pass_context
@log_call
def table(ctx, sort_key, desc, selected):
    """Print the budget table"""
    state = initial_state(ctx.obj['exhibitions'])
    if sort_key:
        state = reduce(state, SortTable(sort_key))
        if desc:
            state = reduce(state, SortTable(sort_key))
    if selected:
        state = reduce(state, ToggleSelectAll())
        for exhibition_id in selected:
            state = reduce(state, ToggleRow(exhibition_id))
    click.echo("\n".join(render_budget_table(state)))


@cli.command('summary')
@click.option('--model', type=click.Choice(MODEL_CHOICES), default=None, help='AI backend (default: SUMMARY_MODEL)')
@click.pass_context
@log_call
def summary(ctx, model):
    """Generate the AI executive summary"""
    state = initial_state(ctx.obj['exhibitions'])
    click.echo("Generating executive summary...")
    record = generate_executive_summary(state.exhibitions, model=model)
    state = reduce(state, SummaryReady(record))
    click.echo("\n".join(render_summary(state)))


@cli.command('export')
@click.argument('path', type=click.Path(dir_okay=False, writable=True))
@click.pass_context
@log_call
def export(ctx, path):
    """Write the exhibition collection to a JSON file"""
    state = initial_state(ctx.obj['exhibitions'])
    rows = [exhibition_to_dict(e) for e in state.exhibitions]
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(rows, fh, ensure_ascii=False, indent=2)
    click.echo(f"✓ Exported {len(rows)} exhibitions to {path}")


# =============================================================================
# INTERACTIVE DECK
# =============================================================================

def _echo_error(message: str) -> None:
    click.echo(f"  {message}", err=True)


def run_editor(controller: DeckController) -> None:
    """Editor sub-loop. Changes touch only the working copy until 'save'."""
    logger = logging.getLogger("showdeck")
    controller.dispatch(OpenEditor())
    click.echo("\n=== EDIT EXHIBITION DATA ===\n")
    click.echo(EDITOR_HELP)

    while controller.state.editor_open:
        controller.pump()
        try:
            raw = click.prompt("edit", default="", show_default=False)
        except (click.Abort, EOFError):
            controller.dispatch(DiscardEdit())
            break

        try:
            parts = shlex.split(raw)
        except ValueError as e:
            _echo_error(f"Could not parse input: {e}")
            continue
        if not parts:
            continue
        verb, args = parts[0].lower(), parts[1:]

        try:
            if verb == 'save':
                controller.dispatch(CommitEdit())
                click.echo(f"✓ Saved {len(controller.state.exhibitions)} exhibitions")
            elif verb == 'cancel':
                controller.dispatch(DiscardEdit())
                click.echo("Changes discarded.")
            elif verb == 'list':
                for e in controller.state.editor_draft:
                    click.echo(f"  {e.id:<10} {e.name[:30]:<32} {e.date:<8} {e.region:<14} {e.status}")
            elif verb == 'add':
                exhibition_id = new_id(e.id for e in controller.state.editor_draft)
                controller.dispatch(Edit(AddExhibition(exhibition_id)))
                click.echo(f"✓ Added exhibition {exhibition_id}")
            elif verb == 'del' and len(args) == 1:
                if find(controller.state.editor_draft, args[0]) is None:
                    _echo_error(f"Exhibition ID {args[0]} not found.")
                    continue
                controller.dispatch(Edit(RemoveExhibition(args[0])))
                click.echo(f"✓ Removed exhibition {args[0]}")
            elif verb == 'set' and len(args) >= 3:
                exhibition_id, field_name, value = args[0], args[1], " ".join(args[2:])
                if find(controller.state.editor_draft, exhibition_id) is None:
                    _echo_error(f"Exhibition ID {exhibition_id} not found.")
                    continue
                command = parse_edit(exhibition_id, field_name, value)
                controller.dispatch(Edit(command))
                label = command.line if isinstance(command, SetScore) else field_name
                click.echo(f"✓ {exhibition_id}: {label} = {value}")
            else:
                _echo_error("Unknown editor command.")
                click.echo(EDITOR_HELP)
        except ValueError as e:
            logger.debug(f"run_editor | rejected input={raw!r}: {e}")
            _echo_error(str(e))


def _handle_deck_input(controller: DeckController, raw: str) -> bool:
    """Apply one deck command. Returns False when the user quits."""
    parts = raw.split()
    if not parts:
        return True
    verb, args = parts[0].lower(), parts[1:]

    if verb in ('q', 'quit', 'exit'):
        return False
    if verb == 'n':
        controller.dispatch(NextSlide())
    elif verb == 'p':
        controller.dispatch(PrevSlide())
    elif verb == 'g' and len(args) == 1 and args[0].isdigit() and 1 <= int(args[0]) <= SLIDE_COUNT:
        controller.dispatch(JumpToSlide(int(args[0]) - 1))
    elif verb == 's':
        if controller.request_summary() is None:
            _echo_error("A summary is already being generated.")
    elif verb == 'w' and len(args) == 1:
        controller.dispatch(SelectSwot(args[0]))
    elif verb == 'o' and len(args) == 1 and args[0] in derive.SORT_KEYS:
        controller.dispatch(SortTable(args[0]))
    elif verb == 'x' and len(args) == 1:
        controller.dispatch(ToggleRow(args[0]))
    elif verb == 'a':
        controller.dispatch(ToggleSelectAll())
    elif verb == 'e':
        run_editor(controller)
    elif verb == 'r':
        pass
    else:
        _echo_error(f"Unknown command: {raw!r}")
        click.echo(DECK_HELP)
    return True


@cli.command('deck')
@click.option('--start', type=click.IntRange(1, SLIDE_COUNT), default=1, help='Slide to open on')
@click.pass_context
@log_call
def deck(ctx, start):
    """Present the interactive deck"""

    def on_summary_ready(event):
        click.echo("\n  ✓ Executive summary ready (slide 10).")

    def on_integrity_reset(event):
        click.echo("  Loaded data was incomplete; showing the built-in shortlist instead.", err=True)

    bus.on(EVENT_SUMMARY_READY, on_summary_ready)
    bus.on(EVENT_INTEGRITY_RESET, on_integrity_reset)
    controller = DeckController(ctx.obj['exhibitions'], summarize=generate_executive_summary, event_bus=bus)
    try:
        controller.dispatch(JumpToSlide(start - 1))
        while True:
            controller.pump()
            click.echo(render_slide(controller.state))
            try:
                raw = click.prompt("\n[n/p/g/s/w/o/x/a/e/r/q]", default="n", show_default=False)
            except (click.Abort, EOFError):
                break
            controller.pump()
            if not _handle_deck_input(controller, raw):
                break
    finally:
        bus.off(EVENT_SUMMARY_READY, on_summary_ready)
        bus.off(EVENT_INTEGRITY_RESET, on_integrity_reset)
        controller.shutdown()
    click.echo("\nGoodbye!\n")


if __name__ == '__main__':
    cli()
