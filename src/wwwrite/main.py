import json
import typer
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from wwwrite.exceptions import WwwriteError, ParseError, SerializationError
from wwwrite.logging_config import logger, setup_logging
from wwwrite.mapping import (
    MapperConfig,
    NameMapping,
    build_name_mapping,
    discover_packages,
    load_mapping_file,
)
from wwwrite.pipeline import PipelineConfig, rewrite_packages
from wwwrite.pipeline.writer import read_source
from wwwrite.rewrite import RewriteConfig, RewriteEngine
from wwwrite.schemas import RewriteReport

app = typer.Typer(help="Rewrite public Flow declaration files for the www build.")
console = Console()
err_console = Console(stderr=True)

STATUS_STYLES = {
    "written": "green",
    "changed": "cyan",
    "unchanged": "dim",
    "failed": "red",
}


def _configure_logging(verbose: bool, json_output: bool) -> None:
    """JSON output keeps stdout and the console clean; --verbose turns on DEBUG."""
    if json_output:
        setup_logging(suppress_console=True, force=True)
    elif verbose:
        setup_logging(level="DEBUG", force=True)


def _rewrite_config(dialect: Optional[str], tolerant: bool) -> RewriteConfig:
    overrides: Dict[str, Any] = {}
    if dialect:
        overrides["dialect"] = dialect
    if tolerant:
        overrides["tolerate_syntax_errors"] = True
    return RewriteConfig(**overrides)


def _load_mapping(root: Path, mapping_file: Optional[Path], mapper_config: MapperConfig) -> NameMapping:
    if mapping_file is not None:
        logger.info(f"Using precomputed mapping from {mapping_file}")
        return load_mapping_file(mapping_file)
    return build_name_mapping(discover_packages(root, mapper_config), mapper_config)


def _print_report(report: RewriteReport) -> None:
    table = Table(title="Declaration Files" + (" (dry run)" if report.dry_run else ""))
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("File", style="magenta")
    table.add_column("Status")
    table.add_column("Imports", justify="right")
    table.add_column("Detail", style="yellow")

    for outcome in report.files:
        style = STATUS_STYLES.get(outcome.status, "white")
        detail = outcome.error or outcome.output or ""
        if outcome.docblock_annotated:
            detail = f"{detail} (docblock annotated)".strip()
        table.add_row(
            outcome.package,
            Path(outcome.source).name,
            f"[{style}]{outcome.status}[/]",
            str(outcome.replacements),
            detail,
        )

    console.print(table)
    console.print(
        f"Processed [bold blue]{len(report.files)}[/bold blue] files from "
        f"[bold blue]{report.packages}[/bold blue] packages in "
        f"[bold yellow]{report.duration:.4f}s[/bold yellow]: "
        f"[green]{report.count('written') + report.count('changed')}[/green] changed, "
        f"[red]{len(report.failed)}[/red] failed."
    )


@app.command()
def rewrite(
    root: Path = typer.Argument(
        ".", help="Repository root holding the packages directory.", exists=True, file_okay=False, readable=True
    ),
    mapping_file: Optional[Path] = typer.Option(
        None, "--mapping", "-m", help="JSON mapping file to use instead of computing it from package.json files.",
        exists=True, dir_okay=False,
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", min=1, help="Files rewritten in parallel (default: WWWRITE_JOBS or 1)."
    ),
    dialect: Optional[str] = typer.Option(
        None, "--dialect", help="Grammar used to parse sources: typescript, tsx or javascript."
    ),
    tolerant: bool = typer.Option(
        False, "--tolerant", help="Rewrite around recovered syntax errors instead of failing the file."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Report what would be written without writing."
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop at the first file that fails."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the run report as JSON."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
):
    """
    Rewrites every package's declaration files into its output directory.

    Exits with code 1 when any file failed, 2 on configuration errors.
    """
    _configure_logging(verbose, json_output)
    mapper_config = MapperConfig()

    try:
        packages = discover_packages(root, mapper_config)
        if mapping_file is not None:
            mapping = load_mapping_file(mapping_file)
        else:
            mapping = build_name_mapping(packages, mapper_config)
        pipeline_config = PipelineConfig(jobs=jobs) if jobs else PipelineConfig()
        report = rewrite_packages(
            packages,
            mapping,
            rewrite_config=_rewrite_config(dialect, tolerant),
            config=pipeline_config,
            dry_run=dry_run,
            fail_fast=fail_fast,
        )
    except (ParseError, SerializationError, OSError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except WwwriteError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)

    if json_output:
        payload = report.model_dump()
        payload["summary"] = {
            status: report.count(status) for status in STATUS_STYLES
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        _print_report(report)

    if report.failed:
        raise typer.Exit(code=1)


@app.command("mapping")
def show_mapping(
    root: Path = typer.Argument(
        ".", help="Repository root holding the packages directory.", exists=True, file_okay=False, readable=True
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the mapping as a JSON object."
    ),
):
    """
    Shows the npm -> www module name mapping computed from package.json files.
    """
    _configure_logging(False, json_output)
    mapper_config = MapperConfig()
    try:
        mapping = _load_mapping(root, None, mapper_config)
    except WwwriteError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)

    if json_output:
        typer.echo(json.dumps(dict(sorted(mapping.items())), indent=2))
        return

    table = Table(title="Name Mapping")
    table.add_column("npm module", style="cyan", no_wrap=True)
    table.add_column("www module", style="green")
    for npm_name, www_name in sorted(mapping.items()):
        table.add_row(npm_name, www_name)
    console.print(table)


@app.command()
def transform(
    file: Path = typer.Argument(
        ..., help="Declaration file to rewrite.", exists=True, dir_okay=False, readable=True
    ),
    root: Path = typer.Option(
        ".", "--root", "-r", help="Repository root used to compute the mapping.", file_okay=False
    ),
    mapping_file: Optional[Path] = typer.Option(
        None, "--mapping", "-m", help="JSON mapping file to use instead of computing it.",
        exists=True, dir_okay=False,
    ),
    dialect: Optional[str] = typer.Option(
        None, "--dialect", help="Grammar used to parse the file: typescript, tsx or javascript."
    ),
    tolerant: bool = typer.Option(
        False, "--tolerant", help="Rewrite around recovered syntax errors."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the rewrite result as JSON."
    ),
):
    """
    Rewrites a single file and prints the result to stdout. Nothing is written.
    """
    _configure_logging(False, json_output)
    try:
        mapping = _load_mapping(root, mapping_file, MapperConfig())
        engine = RewriteEngine(mapping, _rewrite_config(dialect, tolerant))
        result = engine.rewrite(read_source(file), file_path=str(file))
    except (ParseError, SerializationError, OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except WwwriteError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)

    if json_output:
        payload = result.model_dump()
        payload["changed"] = result.changed
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(result.text, nl=False)


if __name__ == "__main__":
    app()
