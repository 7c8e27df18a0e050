"""
Unit tests for showdeck/cli/main.py.

Mocking strategy:
  - patch showdeck.cli.main.configure_logging (autouse) to prevent file I/O
  - patch showdeck.cli.main.generate_executive_summary for anything that would
    reach an AI backend
  - Use click.testing.CliRunner to invoke commands end-to-end
"""

import json
import threading

import pytest
from unittest.mock import patch

from click.testing import CliRunner

from showdeck.bus.events import EventBus
from showdeck.cli.main import _handle_deck_input, cli
from showdeck.engine.deck import DeckController
from showdeck.models import SummaryRecord, exhibition_to_dict
from showdeck.models.seed import seed_exhibitions

SAMPLE_SUMMARY = SummaryRecord(
    overview='歐洲競爭最激烈。',
    strategic_recommendations=['Keep IZB', 'Review CES'],
    budget_risk='North America is over-weighted.',
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging():
    """Prevent configure_logging from creating log files during tests."""
    with patch("showdeck.cli.main.configure_logging"):
        yield


@pytest.fixture
def data_file(tmp_path):
    def _write(rows):
        path = tmp_path / "exhibitions.json"
        path.write_text(json.dumps(rows, ensure_ascii=False), encoding="utf-8")
        return str(path)
    return _write


def _row(exhibition_id, mark='x'):
    return f"[{mark}] {exhibition_id:<10} "


def _row_order(output, ids):
    return [output.index(_row(i)) for i in ids]


# ---------------------------------------------------------------------------
# slide
# ---------------------------------------------------------------------------

class TestSlide:

    def test_title_slide(self, runner):
        result = runner.invoke(cli, ['slide', '1'])
        assert result.exit_code == 0
        assert 'TITLE' in result.output
        assert '1 / 11' in result.output
        assert 'Total Est. Budget: NT$ 8.96M' in result.output
        assert 'Events Targeted:   11' in result.output

    def test_regional_slide(self, runner):
        result = runner.invoke(cli, ['slide', '3'])
        assert result.exit_code == 0
        assert 'REGIONAL STRATEGY' in result.output
        assert '311萬' in result.output
        assert '389萬' in result.output

    def test_deep_dive_defaults_to_first_record(self, runner):
        result = runner.invoke(cli, ['slide', '8'])
        assert 'Battery Show NA 2026/2027  [Detroit, USA]' in result.output
        assert 'THREATS' in result.output

    def test_deep_dive_selected(self, runner):
        result = runner.invoke(cli, ['slide', '8', '--swot', '3'])
        assert 'IZB 2026  [Wolfsburg, Germany]' in result.output

    def test_deep_dive_unknown_id_falls_back(self, runner):
        result = runner.invoke(cli, ['slide', '8', '--swot', 'ghost'])
        assert 'Battery Show NA 2026/2027  [Detroit, USA]' in result.output

    def test_strategy_slide_hides_overflow(self, runner):
        result = runner.invoke(cli, ['slide', '9'])
        assert 'MUST GO' in result.output
        assert '+ 1 more events...' in result.output

    def test_summary_slide_empty(self, runner):
        result = runner.invoke(cli, ['slide', '10'])
        assert "No summary yet. Press 's' to generate one." in result.output

    @pytest.mark.parametrize('number, heading, text', [
        ('2', 'COMPETITIVE LANDSCAPE', 'IZB 2026'),
        ('4', 'INVERTER STRATEGY', 'AVOID'),
        ('5', 'FUTURE TECH LAYOUT', 'Buyer type'),
        ('6', 'MARKET IMPACT', 'Exposure heatmap'),
        ('7', 'COMPETITOR INTELLIGENCE', 'Visibility opportunity index'),
        ('11', 'BUDGET TABLE', 'Selected scenario'),
    ])
    def test_chart_slides_render(self, runner, number, heading, text):
        result = runner.invoke(cli, ['slide', number])
        assert result.exit_code == 0, result.output
        assert heading in result.output
        assert text in result.output

    @pytest.mark.parametrize('number', ['0', '12'])
    def test_out_of_range(self, runner, number):
        result = runner.invoke(cli, ['slide', number])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# table
# ---------------------------------------------------------------------------

class TestTable:

    def test_default_everything_selected(self, runner):
        result = runner.invoke(cli, ['table'])
        assert result.exit_code == 0
        assert 'Selected scenario: NT$ 8.96M / NT$ 8.96M total  (over scenario threshold)' in result.output
        assert _row_order(result.output, ['1', '2', '11']) == sorted(_row_order(result.output, ['1', '2', '11']))

    def test_sort_by_cost_ascending(self, runner):
        result = runner.invoke(cli, ['table', '--sort', 'cost'])
        positions = _row_order(result.output, ['10', '9', '7', '1', '6'])
        assert positions == sorted(positions)
        assert 'sorted by cost asc' in result.output

    def test_sort_by_cost_descending(self, runner):
        result = runner.invoke(cli, ['table', '--sort', 'cost', '--desc'])
        positions = _row_order(result.output, ['6', '1', '10'])
        assert positions == sorted(positions)
        assert 'sorted by cost desc' in result.output

    def test_unknown_sort_key_rejected(self, runner):
        result = runner.invoke(cli, ['table', '--sort', 'swot'])
        assert result.exit_code == 2

    def test_select_subset(self, runner):
        result = runner.invoke(cli, ['table', '--select', '1'])
        assert 'Selected scenario: NT$ 1.23M / NT$ 8.96M total' in result.output
        assert 'over scenario threshold' not in result.output
        assert _row('1') in result.output
        assert _row('2', mark=' ') in result.output


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

class TestSummary:

    def test_prints_summary(self, runner):
        with patch('showdeck.cli.main.generate_executive_summary', return_value=SAMPLE_SUMMARY) as mock_gen:
            result = runner.invoke(cli, ['summary'])
        assert result.exit_code == 0
        assert 'Generating executive summary...' in result.output
        assert 'OVERVIEW' in result.output
        assert '  1. Keep IZB' in result.output
        assert 'North America is over-weighted.' in result.output
        exhibitions = mock_gen.call_args[0][0]
        assert len(exhibitions) == 11
        assert mock_gen.call_args[1]['model'] is None

    def test_model_option_passed_through(self, runner):
        with patch('showdeck.cli.main.generate_executive_summary', return_value=SAMPLE_SUMMARY) as mock_gen:
            runner.invoke(cli, ['summary', '--model', 'claude'])
        assert mock_gen.call_args[1]['model'] == 'claude'

    def test_unknown_model_rejected(self, runner):
        result = runner.invoke(cli, ['summary', '--model', 'gpt-9'])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# export / --data
# ---------------------------------------------------------------------------

class TestData:

    def test_export_writes_camel_case_json(self, runner, tmp_path):
        path = tmp_path / 'out.json'
        result = runner.invoke(cli, ['export', str(path)])
        assert result.exit_code == 0
        assert f'✓ Exported 11 exhibitions to {path}' in result.output
        rows = json.loads(path.read_text(encoding='utf-8'))
        assert len(rows) == 11
        assert rows[0]['totalCostTWD'] == 1230000
        assert 'productScores' in rows[0]

    def test_exported_file_loads_back(self, runner, tmp_path):
        path = tmp_path / 'out.json'
        runner.invoke(cli, ['export', str(path)])
        result = runner.invoke(cli, ['--data', str(path), 'slide', '1'])
        assert result.exit_code == 0
        assert 'Total Est. Budget: NT$ 8.96M' in result.output

    def test_data_subset(self, runner, data_file):
        rows = [exhibition_to_dict(e) for e in seed_exhibitions()[:2]]
        result = runner.invoke(cli, ['--data', data_file(rows), 'slide', '1'])
        assert 'Events Targeted:   2' in result.output

    def test_record_without_scores_resets_to_seed(self, runner, data_file):
        rows = [exhibition_to_dict(e) for e in seed_exhibitions()[:2]]
        del rows[1]['productScores']
        result = runner.invoke(cli, ['--data', data_file(rows), 'slide', '1'])
        assert result.exit_code == 0
        assert 'Events Targeted:   11' in result.output

    def test_record_with_missing_text_fields_is_kept(self, runner, data_file):
        rows = [exhibition_to_dict(e) for e in seed_exhibitions()[:2]]
        del rows[1]['name']
        rows[0]['totalCostTWD'] = 'a lot'
        result = runner.invoke(cli, ['--data', data_file(rows), 'slide', '1'])
        assert result.exit_code == 0
        assert 'Events Targeted:   2' in result.output

    def test_non_object_rows_are_usage_error(self, runner, data_file):
        result = runner.invoke(cli, ['--data', data_file([1, 2]), 'slide', '1'])
        assert result.exit_code == 2
        assert 'entry 1 is not an exhibition object' in result.output

    def test_malformed_swot_loads_as_empty(self, runner, data_file):
        rows = [exhibition_to_dict(e) for e in seed_exhibitions()[:1]]
        rows[0]['swot'] = 'strong'
        result = runner.invoke(cli, ['--data', data_file(rows), 'slide', '8'])
        assert result.exit_code == 0
        assert 'No data available' in result.output

    def test_invalid_json_is_usage_error(self, runner, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json', encoding='utf-8')
        result = runner.invoke(cli, ['--data', str(path), 'slide', '1'])
        assert result.exit_code == 2

    def test_non_list_is_usage_error(self, runner, data_file):
        result = runner.invoke(cli, ['--data', data_file({'id': '1'}), 'slide', '1'])
        assert result.exit_code == 2

    def test_missing_file_is_usage_error(self, runner, tmp_path):
        result = runner.invoke(cli, ['--data', str(tmp_path / 'nope.json'), 'slide', '1'])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# deck (interactive)
# ---------------------------------------------------------------------------

class TestDeck:

    def test_quit_immediately(self, runner):
        result = runner.invoke(cli, ['deck'], input='q\n')
        assert result.exit_code == 0
        assert 'TITLE' in result.output
        assert 'Goodbye!' in result.output

    def test_default_input_advances(self, runner):
        result = runner.invoke(cli, ['deck'], input='\nq\n')
        assert 'COMPETITIVE LANDSCAPE' in result.output

    def test_previous_wraps_to_last(self, runner):
        result = runner.invoke(cli, ['deck'], input='p\nq\n')
        assert 'BUDGET TABLE' in result.output
        assert '11 / 11' in result.output

    def test_start_option(self, runner):
        result = runner.invoke(cli, ['deck', '--start', '9'], input='q\n')
        assert 'MUST GO' in result.output

    def test_jump(self, runner):
        result = runner.invoke(cli, ['deck'], input='g 6\nq\n')
        assert 'MARKET IMPACT' in result.output

    def test_end_of_input_exits_cleanly(self, runner):
        result = runner.invoke(cli, ['deck'], input='n\n')
        assert result.exit_code == 0
        assert 'Goodbye!' in result.output

    def test_unknown_command_shows_help(self, runner):
        result = runner.invoke(cli, ['deck'], input='zzz\nq\n')
        assert "Unknown command: 'zzz'" in result.output
        assert 'next / previous slide' in result.output

    def test_swot_select(self, runner):
        result = runner.invoke(cli, ['deck', '--start', '8'], input='w 9\nq\n')
        assert 'JSAE 2026/2027  [Yokohama, Japan]' in result.output

    def test_toggle_all_rows(self, runner):
        result = runner.invoke(cli, ['deck', '--start', '11'], input='a\nq\n')
        assert 'Selected scenario: NT$ 0.00M / NT$ 8.96M total' in result.output

    def test_non_numeric_reach_warns(self, runner, data_file):
        rows = [exhibition_to_dict(e) for e in seed_exhibitions()[:1]]
        rows[0]['mediaReach'] = 'high'
        result = runner.invoke(cli, ['--data', data_file(rows), 'deck'], input='q\n')
        assert 'Loaded data was incomplete' in result.output
        assert 'Events Targeted:   11' in result.output


class TestEditor:

    def test_commit_applies_changes(self, runner):
        keys = 'e\nset 1 name "Renamed Show"\nsave\ng 8\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert result.exit_code == 0
        assert '✓ Saved 11 exhibitions' in result.output
        assert 'Renamed Show  [Detroit, USA]' in result.output

    def test_cancel_discards_changes(self, runner):
        keys = 'e\nset 1 name Nope\ncancel\ng 8\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert 'Changes discarded.' in result.output
        assert 'Nope  [' not in result.output
        assert 'Battery Show NA 2026/2027  [Detroit, USA]' in result.output

    def test_add_and_remove(self, runner):
        keys = 'e\nadd\ndel 11\nsave\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert '✓ Added exhibition' in result.output
        assert '✓ Removed exhibition 11' in result.output
        assert '✓ Saved 11 exhibitions' in result.output

    def test_date_edit_updates_year(self, runner):
        keys = 'e\nset 2 date 2027-06\nlist\nsave\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert '2027-06' in result.output

    def test_rejected_value_keeps_editor_open(self, runner):
        keys = 'e\nset 1 cost lots\nset 1 cost -5\nsave\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert 'needs a number' in result.output
        assert 'cannot be negative' in result.output
        assert '✓ Saved 11 exhibitions' in result.output

    def test_non_finite_values_are_refused(self, runner):
        keys = 'e\nset 2 competitors inf\nset 2 media nan\nsave\ng 7\nq\n'
        result = runner.invoke(cli, ['deck'], input=keys)
        assert result.exit_code == 0, result.output
        assert result.output.count('needs a finite number') == 2
        assert 'COMPETITOR INTELLIGENCE' in result.output
        assert 'Goodbye!' in result.output

    def test_unknown_id(self, runner):
        result = runner.invoke(cli, ['deck'], input='e\ndel ghost\ncancel\nq\n')
        assert 'Exhibition ID ghost not found.' in result.output

    def test_score_edit_message(self, runner):
        result = runner.invoke(cli, ['deck'], input='e\nset 3 Zonal 5\nsave\nq\n')
        assert '✓ 3: zonal = 5' in result.output

    def test_end_of_input_discards(self, runner):
        result = runner.invoke(cli, ['deck'], input='e\nset 1 name Lost\n')
        assert result.exit_code == 0
        assert 'Goodbye!' in result.output


# ---------------------------------------------------------------------------
# _handle_deck_input
# ---------------------------------------------------------------------------

def test_quit_returns_false():
    controller = DeckController(summarize=lambda rows: SAMPLE_SUMMARY, event_bus=EventBus())
    try:
        assert _handle_deck_input(controller, 'q') is False
        assert _handle_deck_input(controller, '') is True
    finally:
        controller.shutdown()


def test_second_summary_request_is_rejected(capsys):
    release = threading.Event()

    def slow_summary(rows):
        release.wait(timeout=5)
        return SAMPLE_SUMMARY

    controller = DeckController(summarize=slow_summary, event_bus=EventBus())
    try:
        _handle_deck_input(controller, 's')
        assert controller.state.is_generating
        _handle_deck_input(controller, 's')
        assert 'already being generated' in capsys.readouterr().err
        release.set()
        state = controller.wait_for_summary(timeout=5)
        assert state.summary == SAMPLE_SUMMARY
        assert not state.is_generating
    finally:
        release.set()
        controller.shutdown()
