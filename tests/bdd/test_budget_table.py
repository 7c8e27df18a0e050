from pytest_bdd import scenarios, when, parsers
from showdeck.cli.main import cli

scenarios("features/budget.feature")


@when("the planner prints the budget table")
def print_table(runner, context):
    context["result"] = runner.invoke(cli, ["table"])


@when(parsers.parse('the planner prints the budget table selecting "{ids}"'))
def print_table_selecting(runner, context, ids):
    args = ["table"]
    for exhibition_id in ids.split():
        args += ["--select", exhibition_id]
    context["result"] = runner.invoke(cli, args)


@when(parsers.parse('the planner opens the budget slide and types "{keys}"'))
def budget_slide_keys(runner, context, keys):
    lines = [k.strip() for k in keys.split(";")]
    context["result"] = runner.invoke(
        cli, ["deck", "--start", "11"], input="\n".join(lines) + "\nq\n"
    )
