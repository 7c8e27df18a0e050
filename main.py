#!/usr/bin/env python3
"""
Showdeck - Interactive Menu Launcher
Run this file to reach the deck and its reports through a simple menu.

Usage:
    python main.py
"""

import subprocess
import sys
import os

PYTHON = sys.executable
SHOWDECK = [PYTHON, "-m", "showdeck.cli.main"]

# Project root on PYTHONPATH so the 'showdeck' package is importable
ENV = os.environ.copy()
ENV["PYTHONPATH"] = os.path.dirname(os.path.abspath(__file__))


def run(args: list[str]):
    """Run a showdeck command and return to menu when done."""
    print()
    subprocess.run(SHOWDECK + data_args() + args, env=ENV)
    print()
    input("  Press Enter to return to menu...")


def prompt(label: str, required: bool = True) -> str:
    """Prompt user for input. Returns empty string if optional and skipped."""
    while True:
        value = input(f"  {label}: ").strip()
        if value:
            return value
        if not required:
            return ""
        print("  (required - please enter a value)")


def prompt_optional(label: str) -> str:
    return prompt(f"{label} (optional, Enter to skip)", required=False)


def clear():
    os.system("cls" if os.name == "nt" else "clear")


_data_file = ""


def data_args() -> list[str]:
    return ["--data", _data_file] if _data_file else []


# =============================================================================
# COMMAND HANDLERS
# =============================================================================

def present():
    args = ["deck"]
    start = prompt_optional("Start at slide (1-11)")
    if start: args += ["--start", start]
    run(args)

def show_slide():
    number = prompt("Slide number (1-11)")
    run(["slide", number])

def budget_table():
    args = ["table"]
    key = prompt_optional("Sort by (name/cost/competitors/scores/recommendation/status)")
    if key:
        args += ["--sort", key]
        if input("  Descending? (y/N): ").strip().lower() == "y": args += ["--desc"]
    run(args)

def summary():
    args = ["summary"]
    model = prompt_optional("AI model (gemini/claude/deepseek-chat)")
    if model: args += ["--model", model]
    run(args)

def export():
    path = prompt("Export to file (e.g. exhibitions.json)")
    run(["export", path])

def choose_data():
    global _data_file
    _data_file = prompt_optional("JSON data file (Enter for the built-in shortlist)")


# =============================================================================
# MENU LAYOUT
# =============================================================================

MENU = [
    ("DECK", [
        ("Present deck",                 present),
        ("Print a single slide",         show_slide),
    ]),
    ("REPORTS", [
        ("Budget table",                 budget_table),
        ("AI executive summary",         summary),
    ]),
    ("DATA", [
        ("Choose data file",             choose_data),
        ("Export data to JSON",          export),
    ]),
]


def print_menu():
    clear()
    print("=" * 50)
    print("   SHOWDECK - EXHIBITION STRATEGY")
    print("=" * 50)
    print(f"   Data: {_data_file or 'built-in shortlist'}")

    n = 1
    numbering = {}  # maps display number -> handler function

    for section, commands in MENU:
        print(f"\n  {section}")
        print(f"  {'-' * len(section)}")
        for label, handler in commands:
            print(f"  {n:>2}.  {label}")
            numbering[n] = handler
            n += 1

    print("\n" + "=" * 50)
    print("   0.  Exit")
    print("=" * 50)
    return numbering


def main():
    while True:
        numbering = print_menu()

        try:
            choice = input("\n  Select a command: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\n  Goodbye!\n")
            break

        if choice == "0" or choice.lower() in ("q", "quit", "exit"):
            print("\n  Goodbye!\n")
            break

        try:
            n = int(choice)
            if n in numbering:
                clear()
                numbering[n]()
            else:
                print(f"\n  Invalid selection: {choice}")
                input("  Press Enter to continue...")
        except ValueError:
            print(f"\n  Please enter a number.")
            input("  Press Enter to continue...")


if __name__ == "__main__":
    main()
