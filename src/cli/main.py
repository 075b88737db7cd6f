"""CLI entry point for scorecard-report."""

import typer

from .report import app as report_app

app = typer.Typer(
    name="scorecard-report",
    help="College Scorecard pass/fail report tool.",
    no_args_is_help=True,
)

# Register subcommands
app.add_typer(report_app, name="report", help="Yearly pass/fail report")


if __name__ == "__main__":
    app()
