#!/usr/bin/env python3
"""
Flag Review Analyzer - Command Line Entry Point

Reads a review export (Task Link, Actioned Date, All Agent Flags,
All QA Flags, Agent) and reports, per task, the overtags and undertags
between agent and QA flags plus the L1 tags seen across the file.

Usage:
    python main.py export.csv              # Print result tables
    python main.py export.csv --json       # Print results as JSON
    python main.py export.csv -v           # Debug logging
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console
from rich.table import Table

from config.settings import config
from src.services.analysis_service import AnalysisOutcome, AnalysisService
from src.utils.log import setup_logging
from src.utils.tag_comparison import AGENT_COL, TASK_LINK_COL

console = Console()


class CustomHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that preserves formatting and adds width."""

    def __init__(self, prog):
        super().__init__(prog, max_help_position=40, width=100)


def parse_args(argv=None):
    """Parse command line arguments."""
    epilog = """
EXAMPLES
  python main.py export.csv               Tables of overtags, undertags and L1 tags
  python main.py export.csv --json        Same results as JSON (sentinel shown as "∅")
  python viewer.py                        Upload files in the browser instead
"""
    parser = argparse.ArgumentParser(
        description="Compare agent flags against QA flags in a review export",
        epilog=epilog,
        formatter_class=CustomHelpFormatter,
    )
    parser.add_argument("file", type=Path, help="CSV export to analyze")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def print_results(outcome: AnalysisOutcome, service: AnalysisService) -> None:
    """Render a successful outcome as rich tables."""
    results = outcome.results

    table = Table(title="Analysis Results", header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Task Link")
    table.add_column("Agent", style="cyan")
    table.add_column("Overtags", style="yellow")
    table.add_column("Undertags", style="magenta")

    rows = zip(results.data[1:], results.overtags, results.undertags)
    for i, (row, over, under) in enumerate(rows, start=1):
        table.add_row(
            str(i),
            row[TASK_LINK_COL],
            row[AGENT_COL] if len(row) > AGENT_COL else "",
            service.format_entry(over),
            service.format_entry(under),
        )
    console.print(table)

    if results.l1_tags:
        console.print(f"\n[bold]L1 Tags Found ({len(results.l1_tags)}):[/bold]")
        console.print("  " + "  ".join(f"[blue]{tag}[/blue]" for tag in results.l1_tags))
    else:
        console.print("\n[dim]No L1 tags found[/dim]")


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(config.logging, verbose=args.verbose)

    service = AnalysisService(config.analyzer)
    outcome = service.analyze(args.file, name=str(args.file))

    if args.json:
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        return 0 if outcome.ok else 1

    if not outcome.ok:
        console.print(f"[bold red]{outcome.error}[/bold red]")
        return 1

    print_results(outcome, service)
    return 0


if __name__ == "__main__":
    sys.exit(main())
