"""Scorecard report CLI commands."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from src.config import load_config
from src.exceptions import FileIOError, ScorecardError
from src.fetchers.scorecard import ScorecardFetcher
from src.fetchers.scorecard.request import build_query_url, redact_url
from src.models.config import ScorecardConfig
from src.pipeline import run_report
from src.storage import ReportWriter


app = typer.Typer(help="College Scorecard report commands")
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    # httpx logs full request URLs, which carry the API key
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def resolve_config(
    *,
    base_year: int | None = None,
    years: int | None = None,
    page_size: int | None = None,
    state: str | None = None,
    output: Path | None = None,
) -> ScorecardConfig:
    """Build config from scorecard.yaml (or built-in defaults) plus CLI overrides."""
    logger = logging.getLogger(__name__)

    try:
        config = ScorecardConfig.from_yaml(load_config("scorecard"))
    except FileNotFoundError:
        logger.debug("No scorecard.yaml found, using built-in defaults")
        config = ScorecardConfig()

    overrides = {
        "base_year": base_year,
        "year_span": years,
        "state": state,
        "output_path": output.expanduser() if output else None,
    }
    if page_size is not None:
        overrides["pagination"] = {**config.pagination.model_dump(), "page_size": page_size}

    overrides = {k: v for k, v in overrides.items() if v is not None}
    # Re-validate so CLI values go through the same constraints as YAML ones
    return ScorecardConfig.model_validate({**config.model_dump(), **overrides})


@app.command("run")
def run(
    base_year: Annotated[
        Optional[int],
        typer.Option("--base-year", "-y", help="First data year (default: 1996)")
    ] = None,
    years: Annotated[
        Optional[int],
        typer.Option("--years", "-n", help="Number of consecutive years (default: 22)")
    ] = None,
    page_size: Annotated[
        Optional[int],
        typer.Option("--page-size", "-p", help="Records per page, max 100 (default: 100)")
    ] = None,
    state: Annotated[
        Optional[str],
        typer.Option("--state", "-s", help="School state filter (default: IL)")
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Report file (default: ~/Desktop/CollegeScoreCard.csv)")
    ] = None,
    on_error: Annotated[
        str,
        typer.Option("--on-error", help="On a failed year: halt or skip")
    ] = "halt",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """Fetch Scorecard data year by year and append the pass/fail report.

    Example:
        scorecard-report report run --base-year 2010 --years 3
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    if on_error not in ("halt", "skip"):
        console.print(f"[red]Error:[/red] Unknown --on-error value: {on_error}")
        console.print("Supported values: halt, skip")
        raise typer.Exit(1)

    try:
        config = resolve_config(
            base_year=base_year,
            years=years,
            page_size=page_size,
            state=state,
            output=output,
        )
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    logger.debug(f"Config: {config.get_safe_dict()}")

    if not config.api_key:
        console.print(
            f"[yellow]Warning:[/yellow] {config.api_key_env} is not set, "
            "the API will reject requests"
        )

    console.print(f"\n[bold]College Scorecard Report[/bold]")
    console.print(f"  Years: {config.base_year}-{config.base_year + config.year_span - 1}")
    console.print(f"  State: {config.state}")
    console.print(f"  Page Size: {config.pagination.page_size}")
    console.print(f"  Output: {config.output_path}")
    console.print()

    try:
        with ScorecardFetcher(config) as fetcher:
            with ReportWriter(config.output_path) as writer:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    TaskProgressColumn(),
                    console=console,
                ) as progress:
                    task = progress.add_task("Fetching...", total=config.year_span)

                    def advance(year: int) -> None:
                        progress.update(task, advance=1, description=f"Processed {year}")

                    summary = run_report(
                        config,
                        fetcher,
                        writer,
                        on_error=on_error,  # type: ignore[arg-type]
                        on_year_done=advance,
                    )

        console.print()
        console.print("[bold green]✓ Report completed[/bold green]")
        console.print(f"  Years: {len(summary.years)}")
        console.print(f"  Schools: {summary.total_records}")
        console.print(f"  Passed: {summary.total_passed}")
        console.print(f"  Failed: {summary.total_failed}")
        if summary.total_skipped:
            console.print(f"  [yellow]Skipped records: {summary.total_skipped}[/yellow]")
        console.print(f"  Duration: {summary.duration_seconds:.1f}s")
        console.print(f"  Output: {summary.output_path}")

        if summary.failed_years:
            failed = ", ".join(str(y["year"]) for y in summary.failed_years)
            console.print(f"  [yellow]Skipped years: {failed}[/yellow]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except FileIOError as e:
        console.print(f"\n[red]Error:[/red] Report file failed: {escape(str(e))}")
        raise typer.Exit(1)
    except ScorecardError as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        logger.debug(f"Error context: {e.context}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        logger.exception("Report run failed")
        raise typer.Exit(1)


@app.command("url")
def show_url(
    year: Annotated[
        int,
        typer.Option("--year", "-y", help="Data year")
    ] = 1996,
    page: Annotated[
        int,
        typer.Option("--page", "-p", help="Page index (0-indexed)")
    ] = 0,
    state: Annotated[
        Optional[str],
        typer.Option("--state", "-s", help="School state filter")
    ] = None,
) -> None:
    """Print the query URL for one page of one year (API key redacted)."""
    try:
        config = resolve_config(state=state)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    url = build_query_url(config, year, page)
    console.print(redact_url(url, config.api_key), soft_wrap=True, highlight=False)


if __name__ == "__main__":
    app()
