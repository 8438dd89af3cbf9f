"""CLI entry point for the navigation test runner."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from navcheck.models.config import TestConfig
from navcheck.models.test_result import RunSummary
from navcheck.runner import SuiteRunner
from navcheck.suite.loader import discover_scripts

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_summaries(summaries: list[RunSummary]) -> None:
    table = Table(title="Results Summary")
    table.add_column("Script", style="bold")
    table.add_column("Expected")
    table.add_column("Passed")
    table.add_column("Failed")
    table.add_column("Captures")
    table.add_column("Duration")
    for s in summaries:
        table.add_row(
            s.script_id,
            str(s.expected_assertions),
            f"[green]{s.passed}[/green]",
            f"[red]{s.failed}[/red]",
            str(len(s.captures)),
            f"{s.duration_seconds}s",
        )
    console.print(table)
    for s in summaries:
        if s.error:
            console.print(f"[red]{escape(s.script_id)} aborted:[/red] {escape(s.error)}")


def _exit_for(summaries: list[RunSummary]) -> None:
    if not all(s.ok for s in summaries):
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Viewport-cycling browser navigation tests"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default="navcheck.json", help="Script file path")
@click.option("--headless/--headed", default=True, help="Run the browser headless")
@click.option("--report-dir", "-r", default=None, help="Write JSON reports to this directory")
def run(config: str, headless: bool, report_dir: str | None) -> None:
    """Run a single navigation test script."""
    try:
        cfg = TestConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Script file not found: {config}[/red]")
        console.print("Run 'navcheck init' to create a default script.")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid script {config}:[/red]")
        console.print(str(e), markup=False)
        sys.exit(1)

    runner = SuiteRunner(headless=headless, report_dir=Path(report_dir) if report_dir else None)
    summary = runner.run_script(cfg)
    _print_summaries([summary])
    _exit_for([summary])


@cli.command()
@click.option("--folder", "-f", default="./scripts", help="Scripts location")
@click.option("--headless/--headed", default=True, help="Run the browser headless")
@click.option("--report-dir", "-r", default=None, help="Write JSON reports to this directory")
def suite(folder: str, headless: bool, report_dir: str | None) -> None:
    """Run every valid script found in a folder."""
    runner = SuiteRunner(headless=headless, report_dir=Path(report_dir) if report_dir else None)
    try:
        summaries = runner.run_folder(folder)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if not summaries:
        console.print(f"[yellow]No valid test scripts found in {folder}[/yellow]")
        return
    _print_summaries(summaries)
    _exit_for(summaries)


@cli.command("list")
@click.option("--folder", "-f", default="./scripts", help="Scripts location")
def list_scripts(folder: str) -> None:
    """List the valid scripts found in a folder."""
    try:
        scripts = discover_scripts(folder)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if not scripts:
        console.print("[yellow]No valid test scripts found[/yellow]")
        return
    table = Table(title=f"Scripts in {folder}")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Target")
    table.add_column("Viewports")
    for s in scripts:
        table.add_row(s.script_id, s.name, s.target_url, str(len(s.viewports)))
    console.print(table)


@cli.command()
@click.option("--target", "-t", prompt="Target URL", help="Website URL to test")
@click.option("--selector", "-s", prompt="Navigation link selector",
              help="CSS selector of the link to follow, e.g. a[href$='stocks']")
@click.option("--destination", "-d", prompt="Destination URL pattern",
              help="Regular expression the destination URL must match")
@click.option("--output", "-o", default="navcheck.json", help="Script file path")
def init(target: str, selector: str, destination: str, output: str) -> None:
    """Create a default navigation test script."""
    path = Path(output)
    if path.exists():
        if not click.confirm(f"{output} already exists. Overwrite?"):
            return

    try:
        cfg = TestConfig(
            script_id=path.stem,
            name=f"{path.stem} navigation test",
            description=f"Tests navigation from {target} via {selector}",
            target_url=target,
            nav_selector=selector,
            destination_url_pattern=destination,
        )
    except ValidationError as e:
        console.print("[red]Invalid script settings:[/red]")
        console.print(str(e), markup=False)
        sys.exit(1)
    cfg.save(path)
    console.print(f"[green]Created {path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print(f"  [blue]navcheck run -c {path}[/blue]")


if __name__ == "__main__":
    cli()
