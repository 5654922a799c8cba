"""codegauge CLI - Print code metrics for functions in files or loaded modules."""

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from codegauge.analysis import CompositeReport, analyze, analyze_file, compose
from codegauge.config import load_settings
from codegauge.errors import InvalidKindError, NotFoundError, ParseError
from codegauge.parser import load_file, parser_for_path
from codegauge.resolve import NamespaceResolver, SourceFileResolver

console = Console()

EXIT_NOT_FOUND = 1
EXIT_INVALID_KIND = 2
EXIT_PARSE_ERROR = 3


def _grade_style(grade: str) -> str:
    if grade in ("A", "B"):
        return f"[green]{grade}[/green]"
    if grade in ("C", "D"):
        return f"[yellow]{grade}[/yellow]"
    return f"[red]{grade}[/red]"


def _print_summary(reports: list[CompositeReport], title: str) -> None:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Complexity", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("LLOC", justify="right")
    table.add_column("Depth", justify="right")
    table.add_column("Calls", justify="right")

    for report in reports:
        table.add_row(
            report.name,
            f"{report.start_line}-{report.end_line}",
            str(report.complexity),
            _grade_style(report.grade),
            str(report.lines.logical),
            str(report.max_nesting_depth),
            f"{report.invocations.total_count} ({report.invocations.distinct_count} distinct)",
        )
    console.print(table)


def _print_details(report: CompositeReport) -> None:
    table = Table(title=f"Decision points in {report.name}")
    table.add_column("Construct", style="cyan")
    table.add_column("Occurrences", justify="right")
    table.add_column("Decision points", justify="right")
    table.add_column("Longest (lines)", justify="right")

    for kind, total in report.constructs.items():
        if total.occurrence_count == 0:
            continue
        table.add_row(
            kind.value.replace("_", " "),
            str(total.occurrence_count),
            str(total.total_decision_points),
            str(total.largest_occurrence_line_count),
        )
    if report.boolean_operators.count:
        table.add_row("logical operators", "", str(report.boolean_operators.count), "")
    console.print(table)

    lines = report.lines
    console.print(
        f"Lines: {lines.physical} physical, {lines.logical} logical, "
        f"{lines.comment_lines} comment, {lines.blank_lines} blank"
    )


def _emit(reports: list[CompositeReport], args: argparse.Namespace, title: str) -> None:
    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
        return
    _print_summary(reports, title)
    if len(reports) == 1:
        _print_details(reports[0])


def cmd_file(args: argparse.Namespace) -> int:
    """Report on functions declared in a source file."""
    file_path = Path(args.path).resolve()

    if not file_path.exists():
        console.print(f"[red]Error:[/red] Path does not exist: {file_path}")
        return EXIT_NOT_FOUND

    language = args.language
    if language is None:
        try:
            parser_for_path(file_path)
        except ValueError:
            language = args.default_language

    if args.function:
        resolver = SourceFileResolver(file_path, language)
        reports = [analyze(args.function, resolver=resolver)]
    elif args.script:
        reports = [compose(load_file(file_path, language))]
    else:
        reports = analyze_file(file_path, language)
        if not reports:
            reports = [compose(load_file(file_path, language))]

    _emit(reports, args, str(file_path.name))
    return 0


def cmd_function(args: argparse.Namespace) -> int:
    """Report on a function from an importable Python module."""
    module_name, _, name = args.target.partition(":")
    if not name:
        console.print("[red]Error:[/red] Expected MODULE:NAME, e.g. json.decoder:py_scanstring")
        return EXIT_NOT_FOUND

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise NotFoundError(name, f"module {module_name} ({e})") from e

    report = analyze(name, resolver=NamespaceResolver(module))
    _emit([report], args, args.target)
    return 0


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="codegauge",
        description="Cyclomatic complexity, nesting depth and line counts for functions",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log analysis steps to stderr",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON instead of tables",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # File command
    file_parser = subparsers.add_parser("file", help="Analyze a Python or Java file")
    file_parser.add_argument("path", help="Path to the source file")
    file_parser.add_argument(
        "-f", "--function",
        help="Only this function or method (plain or Class.method name)",
    )
    file_parser.add_argument(
        "-l", "--language",
        choices=["java", "python"],
        help="Override the language picked from the file extension",
    )
    file_parser.add_argument(
        "--script",
        action="store_true",
        help="Analyze the whole file as one script body",
    )
    file_parser.set_defaults(func=cmd_file, default_language=settings.language)

    # Function command
    function_parser = subparsers.add_parser(
        "function", help="Analyze a function from an importable module",
    )
    function_parser.add_argument("target", help="MODULE:NAME (NAME may be Class.method)")
    function_parser.set_defaults(func=cmd_function)

    args = parser.parse_args(argv)
    _configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        return args.func(args)
    except NotFoundError as e:
        console.print(f"[red]Not found:[/red] {e}")
        return EXIT_NOT_FOUND
    except InvalidKindError as e:
        console.print(f"[red]Not analyzable:[/red] {e}")
        return EXIT_INVALID_KIND
    except ParseError as e:
        console.print(f"[red]Parse error:[/red] {e}")
        return EXIT_PARSE_ERROR


if __name__ == "__main__":
    sys.exit(main())
