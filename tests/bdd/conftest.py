"""
Shared fixtures and step definitions for BDD tests.

- runner, context: available to all scenario files in this directory
- mock_summary: stands in for the AI backend
- no_logging: autouse, prevents log file creation during tests
- 'the output contains' steps: shared across all feature files
"""

import pytest
from unittest.mock import patch
from click.testing import CliRunner
from pytest_bdd import then, parsers

from showdeck.models import SummaryRecord


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def context():
    """Mutable dict shared between Given/When/Then steps within a scenario."""
    return {}


@pytest.fixture
def mock_summary():
    with patch("showdeck.cli.main.generate_executive_summary") as mock:
        mock.return_value = SummaryRecord(
            overview="Europe is the fiercest battlefield.",
            strategic_recommendations=["Keep IZB", "Review CES", "Add JSAE"],
            budget_risk="North America is over-weighted.",
        )
        yield mock


@pytest.fixture(autouse=True)
def no_logging():
    with patch("showdeck.cli.main.configure_logging"):
        yield


@then(parsers.parse('the output contains "{text}"'))
def output_contains(context, text):
    assert text in context["result"].output, (
        f"Expected {text!r} in output:\n{context['result'].output}"
    )


@then(parsers.parse('the output does not contain "{text}"'))
def output_does_not_contain(context, text):
    assert text not in context["result"].output, (
        f"Did not expect {text!r} in output:\n{context['result'].output}"
    )


@then("the command succeeds")
def command_succeeds(context):
    assert context["result"].exit_code == 0, context["result"].output
