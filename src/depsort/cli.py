"""depsort CLI - find dependencies that belong in devDependencies."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from depsort import __version__
from depsort.analysis.dependencies import analyze_dependencies
from depsort.analysis.imports import ImportExtractor
from depsort.analysis.scanner import find_files_to_analyze, scan_imports
from depsort.config import (
    find_config,
    get_analysis_excludes,
    get_analysis_includes,
    get_layout_overrides,
    load_config,
    split_patterns,
)
from depsort.detection.layout import analyze_project
from depsort.errors import DepsortError, ManifestNotFoundError
from depsort.manifest import find_package_json, move_packages_to_dev_dependencies, write_package_json
from depsort.models.project import ProjectConfig
from depsort.models.results import AnalysisResult
from depsort.output.json_writer import generate_json_report, write_json_report
from depsort.output.report import print_compact_report, print_report

app = typer.Typer(
    name="depsort",
    help="Identify dependencies that can be safely moved to devDependencies",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"depsort version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    path: Path = typer.Argument(
        Path("."),
        help="Project directory (package.json is searched upwards from here)",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Move the reported packages to devDependencies in package.json",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write JSON results to this file",
    ),
    exclude: Optional[str] = typer.Option(
        None,
        "--exclude",
        help="Comma-separated glob patterns to exclude from analysis",
    ),
    include: Optional[str] = typer.Option(
        None,
        "--include",
        help="Comma-separated glob patterns; only matching files are analyzed",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to depsort.toml (default: <project>/depsort.toml)",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Analyze files excluded by .gitignore",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show usage details and import locations for every package",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Analyze a project and report dependencies only needed during development."""
    _configure_logging(verbose)
    status = err_console if json_output else console

    try:
        project, config_data = _load_project(path.resolve(), config)
    except DepsortError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if not json_output:
        console.print(Panel.fit("[bold blue]depsort - Dependency Analysis[/]"))
        _display_layout(project)

    dependencies = project.dependencies
    if not dependencies:
        status.print("\n[yellow]No dependencies found to analyze.[/]")
        if json_output:
            typer.echo(generate_json_report(AnalysisResult()))
        return

    excludes = get_analysis_excludes(config_data) + split_patterns(exclude)
    includes = get_analysis_includes(config_data) + split_patterns(include)

    result = _run_analysis(project, excludes, includes, include_ignored, status)

    if json_output:
        typer.echo(generate_json_report(result))
    elif verbose:
        print_report(result, project.root, out=console)
    else:
        print_compact_report(result, out=console)

    if output is not None:
        write_json_report(result, output)
        status.print(f"\n[green]Results saved to:[/] {output}")

    if fix:
        _apply_fix(project, result, status)


def _load_project(path: Path, config_path: Optional[Path]) -> tuple[ProjectConfig, dict]:
    """Find package.json, load configuration and detect the layout."""
    manifest_path = find_package_json(path)
    if manifest_path is None:
        raise ManifestNotFoundError(
            "package.json not found. Please run depsort from a project directory."
        )

    root = manifest_path.parent
    config_path = config_path or find_config(root)
    config_data = load_config(config_path)
    overrides = get_layout_overrides(config_data, config_path)
    if overrides.sources:
        logger.debug("Layout overrides from: %s", ", ".join(overrides.sources))

    return analyze_project(root, overrides), config_data


def _display_layout(project: ProjectConfig) -> None:
    layout = project.layout
    console.print(f"\n[dim]Project root:[/] {layout.root}")
    console.print(f"[dim]Source directories:[/] {', '.join(layout.source_dirs) or 'none'}")
    console.print(f"[dim]Test directories:[/] {', '.join(layout.test_dirs) or 'none'}")
    console.print(f"[dim]Build directories:[/] {', '.join(layout.build_dirs) or 'none'}")
    if project.tsconfig_path:
        console.print(f"[dim]TypeScript config:[/] {project.tsconfig_path}")
    console.print(
        f"\nFound {len(project.dependencies)} dependencies "
        f"and {len(project.dev_dependencies)} devDependencies"
    )


def _run_analysis(
    project: ProjectConfig,
    excludes: list[str],
    includes: list[str],
    include_ignored: bool,
    status: Console,
) -> AnalysisResult:
    """Scan project files and classify every declared dependency."""
    files = find_files_to_analyze(project, excludes, includes, include_ignored)
    status.print(f"\n[dim]Found {len(files)} files to analyze[/]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=status,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning for imports...", total=len(files))
        scan = scan_imports(
            files,
            ImportExtractor(),
            on_file=lambda _: progress.update(task, advance=1),
        )

    for warning in scan.warnings:
        err_console.print(f"[yellow]Warning:[/] {warning}")

    status.print(
        f"[dim]Found {len(scan.imports)} import statements "
        f"from {len(scan.unique_packages)} packages[/]\n"
    )

    return analyze_dependencies(project.dependencies, scan.imports, project.layout)


def _apply_fix(project: ProjectConfig, result: AnalysisResult, status: Console) -> None:
    """Move packages in package.json and report what changed."""
    names = [verdict.package_name for verdict in result.packages_to_move]
    if not names:
        status.print("\n[green]Nothing to move, package.json left unchanged.[/]")
        return

    updated, moved = move_packages_to_dev_dependencies(project.manifest, names)
    try:
        write_package_json(project.manifest_path, updated)
    except (DepsortError, OSError) as e:
        err_console.print(f"[red]Error:[/] could not update {project.manifest_path}: {e}")
        raise typer.Exit(1)

    status.print(f"\n[green]Moved {len(moved)} packages to devDependencies:[/]")
    for package in moved:
        status.print(f"  • {package.name}@{package.version}")


if __name__ == "__main__":
    app()
