"""CLI interface for signcheck using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linkset_parser import LinkSetJsonParser, ParsingException, WebLink
from signcheck import __description__, __version__
from signcheck.config import LogLevel, Profile, ReportFormat, SigncheckConfig, find_config_file, load_config
from signcheck.processor import SignPostingProcessor
from signcheck.schemas import SchemaGenerator
from signcheck.validation.framework import SignPostingResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_INPUT_ERROR = 2

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

app = typer.Typer(
    name="signcheck",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"signcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """signcheck - FAIR Signposting validation for typed web links."""


def _load_config_or_exit(config: Optional[Path]) -> SigncheckConfig:
    try:
        signcheck_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_INPUT_ERROR)

    logging.basicConfig(level=LOG_LEVELS.get(signcheck_config.logging.level, logging.WARNING))
    return signcheck_config


def _parse_or_exit(path: Path, signcheck_config: SigncheckConfig) -> list[WebLink]:
    parser = LinkSetJsonParser(signcheck_config.parser.to_parser_config())
    try:
        links = parser.parse_file(path)
    except ParsingException as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_INPUT_ERROR)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {escape(str(e))}")
        raise typer.Exit(EXIT_INPUT_ERROR)

    logger.info(f"Parsed {len(links)} web links from {path}")
    return links


def _link_row(link: WebLink) -> tuple[str, str, str, str]:
    return (
        escape(" ".join(link.rel())),
        escape(link.target),
        escape(link.anchor() or "-"),
        escape(link.type() or "-"),
    )


@app.command()
def parse(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a Link Set JSON document (application/linkset+json)")
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .signcheck.json)")
    ] = None,
) -> None:
    """Parse a Link Set document and list its web links."""
    valid_formats = ["table", "json"]
    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(EXIT_INPUT_ERROR)

    signcheck_config = _load_config_or_exit(config)
    links = _parse_or_exit(path, signcheck_config)

    if format == "json":
        print(jsonlib.dumps({"links": [link.to_dict() for link in links], "total": len(links)}, indent=2))
        return

    table = Table(title=f"Web links in {path.name}")
    table.add_column("Relation", style="cyan")
    table.add_column("Target", style="white")
    table.add_column("Anchor", style="dim")
    table.add_column("Type", style="green")
    for link in links:
        table.add_row(*_link_row(link))
    console.print(table)
    console.print(f"\n[green]{len(links)} web links[/green]")


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a Link Set JSON document (application/linkset+json)")
    ],
    profile: Annotated[
        Optional[list[Profile]],
        typer.Option("--profile", "-p", help="Profile to validate against, repeatable (default: from config, level1)")
    ] = None,
    format: Annotated[
        Optional[ReportFormat],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config, table)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .signcheck.json)")
    ] = None,
) -> None:
    """Validate a Link Set document against Signposting profiles."""
    signcheck_config = _load_config_or_exit(config)
    profiles = [Profile(p) for p in (profile or signcheck_config.validation.profiles)]
    report_format = ReportFormat(format or signcheck_config.output.format)

    links = _parse_or_exit(path, signcheck_config)
    processor = SignPostingProcessor.from_profiles(profiles)
    result = processor.process(links)

    failed = result.report.has_errors() or (
        signcheck_config.validation.fail_on_warnings and result.report.has_warnings()
    )
    exit_code = EXIT_INVALID if failed else EXIT_OK

    if report_format == ReportFormat.JSON:
        output = result.to_dict()
        output["profiles"] = [p.value for p in profiles]
        output["exit_code"] = exit_code
        print(jsonlib.dumps(output, indent=2))
    elif report_format == ReportFormat.MARKDOWN:
        _print_markdown(path, profiles, result, exit_code)
    else:
        _print_table(path, profiles, result, exit_code)

    raise typer.Exit(exit_code)


@app.command()
def schema(
    action: Annotated[
        str,
        typer.Argument(help="Action to perform: generate, validate")
    ],
    out: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output directory for generated schemas (default: ./schemas)")
    ] = Path("schemas"),
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file to validate (default: search for .signcheck.json)")
    ] = None,
) -> None:
    """Generate the configuration JSON schema or validate a configuration file against it."""
    valid_actions = ["generate", "validate"]
    if action not in valid_actions:
        console.print(f"[red]Error:[/red] Invalid action '{action}'. Must be one of: {', '.join(valid_actions)}")
        raise typer.Exit(EXIT_INPUT_ERROR)

    generator = SchemaGenerator()
    generator.generate_all_schemas()

    if action == "generate":
        schema_files = generator.save_schemas(out.resolve())
        console.print(f"[green]Generated {len(schema_files)} JSON schemas:[/green]")
        for schema_name, schema_file in schema_files.items():
            console.print(f"  • {schema_name}: {escape(str(schema_file))}")

        errors = generator.validate_schema_compliance()
        if errors:
            console.print("[yellow]Schema validation warnings:[/yellow]")
            for error in errors:
                console.print(f"  • {escape(error)}")
            raise typer.Exit(EXIT_INVALID)
        console.print("[green]All schemas are valid![/green]")
        return

    config_path = config or find_config_file()
    if config_path is None or not config_path.exists():
        console.print("[red]Error:[/red] No configuration file found")
        raise typer.Exit(EXIT_INPUT_ERROR)

    issues = generator.validate_config_file(config_path)
    if issues:
        console.print(f"[red]Configuration {escape(str(config_path))} is invalid:[/red]")
        for issue in issues:
            console.print(f"  • {escape(str(issue))}")
        raise typer.Exit(EXIT_INVALID)
    console.print(f"[green]Configuration {escape(str(config_path))} is valid[/green]")


def _print_markdown(path: Path, profiles: list[Profile], result: SignPostingResult, exit_code: int) -> None:
    console.print("# Signposting Report")
    console.print(f"**Document:** {escape(str(path))}")
    console.print(f"**Profiles:** {', '.join(p.value for p in profiles)}")
    console.print(f"**Links:** {len(result.view)}")
    console.print(f"**Exit Code:** {exit_code}")
    console.print()

    if result.report.issues:
        console.print("## Issues")
        for issue in result.report.issues:
            console.print(f"- **{issue.severity.value.upper()}** {escape(issue.message)}")
    else:
        console.print("No issues found.")


def _print_table(path: Path, profiles: list[Profile], result: SignPostingResult, exit_code: int) -> None:
    report = result.report
    if exit_code:
        status, status_color = "FAIL", "red"
    elif report.has_warnings():
        status, status_color = "WARN", "yellow"
    else:
        status, status_color = "PASS", "green"
    console.print(f"[{status_color}]Signposting Status: {status}[/{status_color}]")
    console.print(f"Document: {escape(str(path))}")
    console.print(f"Profiles: {', '.join(p.value for p in profiles)}")
    console.print(f"Links: {len(result.view)}")
    console.print(f"Exit Code: {exit_code}")

    if not report.issues:
        console.print("\n[green]No issues found![/green]")
        return

    console.print("\n[blue]Issues Found:[/blue]")
    issues_table = Table()
    issues_table.add_column("Severity", style="white")
    issues_table.add_column("Message", style="white")

    for issue in report.issues:
        severity_color = "red" if issue.is_error() else "yellow"
        issues_table.add_row(
            f"[{severity_color}]{issue.severity.value.upper()}[/{severity_color}]",
            escape(issue.message)
        )

    console.print(issues_table)


if __name__ == "__main__":
    app()
