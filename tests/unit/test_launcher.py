"""
Unit tests for the menu launcher (main.py).
subprocess.run and input() are patched; nothing is actually launched.
"""

import pytest
from unittest.mock import patch

import main as launcher


@pytest.fixture(autouse=True)
def reset_data_file():
    launcher._data_file = ""
    yield
    launcher._data_file = ""


def test_no_data_args_by_default():
    assert launcher.data_args() == []


def test_choose_data_sets_data_args():
    with patch("builtins.input", return_value="exhibitions.json"):
        launcher.choose_data()
    assert launcher.data_args() == ["--data", "exhibitions.json"]


def test_run_passes_data_file_before_command():
    launcher._data_file = "exhibitions.json"
    with patch("main.subprocess.run") as mock_run, patch("builtins.input", return_value=""):
        launcher.run(["slide", "3"])
    args = mock_run.call_args[0][0]
    assert args[-4:] == ["--data", "exhibitions.json", "slide", "3"]
    assert args[1:3] == ["-m", "showdeck.cli.main"]


def test_present_with_start_slide():
    with patch("main.run") as mock_run, patch("builtins.input", return_value="9"):
        launcher.present()
    mock_run.assert_called_once_with(["deck", "--start", "9"])


def test_budget_table_descending():
    answers = iter(["cost", "y"])
    with patch("main.run") as mock_run, patch("builtins.input", side_effect=lambda _: next(answers)):
        launcher.budget_table()
    mock_run.assert_called_once_with(["table", "--sort", "cost", "--desc"])


def test_summary_default_model():
    with patch("main.run") as mock_run, patch("builtins.input", return_value=""):
        launcher.summary()
    mock_run.assert_called_once_with(["summary"])


def test_menu_exit():
    with patch("builtins.input", return_value="0"), patch("main.clear"):
        launcher.main()
