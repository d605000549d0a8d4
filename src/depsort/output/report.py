"""Rich rendering of dependency analysis results."""

from collections import defaultdict
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from depsort.analysis.dependencies import detailed_reason
from depsort.models.results import AnalysisResult, PackageVerdict

MAX_LISTED_IMPORTS = 5
MAX_COMPACT_KEEP = 10

console = Console()


def _summary_table(result: AnalysisResult) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Total dependencies analyzed", str(result.total_dependencies))
    table.add_row("Can be moved to devDependencies", f"[green]{result.can_move_count}[/]")
    table.add_row("Should stay in dependencies", str(result.keep_count))
    return table


def _verdict_table(title: str, verdicts: tuple[PackageVerdict, ...], style: str) -> Table:
    table = Table(title=title, title_style=f"bold {style}", title_justify="left")
    table.add_column("Package", style="bold")
    table.add_column("Reason")
    for verdict in verdicts:
        table.add_row(verdict.package_name, verdict.reason)
    return table


def _relative(path: Path, root: Path | None) -> Path:
    if root is None:
        return path
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def build_usage_tree(verdict: PackageVerdict, project_root: Path | None = None) -> Tree:
    """Build a tree with usage counts and import locations of one package."""
    color = "green" if verdict.can_move else "yellow"
    root = Tree(f"[bold {color}]{verdict.package_name}[/]", guide_style="dim")
    root.add(f"Reason: {detailed_reason(verdict)}")

    usage = root.add("Usage")
    usage.add(f"Total imports: {len(verdict.imports)}")
    usage.add(f"Type-only imports: {verdict.type_only_count}")
    usage.add(f"Runtime imports: {verdict.runtime_count}")
    usage.add(f"Used in production: {'Yes' if verdict.used_in_production else 'No'}")
    usage.add(f"Used in dev/test: {'Yes' if verdict.used_in_dev else 'No'}")

    if not verdict.imports:
        return root

    by_file: dict[Path, int] = defaultdict(int)
    for imp in verdict.imports:
        by_file[imp.file_path] += 1

    if len(verdict.imports) > MAX_LISTED_IMPORTS:
        root.add(f"[dim]Import locations: {len(verdict.imports)} imports in {len(by_file)} files[/]")
        return root

    locations = root.add("Import locations")
    for imp in verdict.imports:
        text = Text()
        text.append(f"{_relative(imp.file_path, project_root)}:{imp.line}:{imp.column} ")
        if imp.is_type_only:
            text.append("(type-only)", style="cyan")
        else:
            text.append("(runtime)", style="magenta")
        locations.add(text)

    return root


def print_report(
    result: AnalysisResult,
    project_root: Path | None = None,
    out: Console | None = None,
) -> None:
    """Print the detailed report with usage trees for every package."""
    out = out or console
    out.print(Panel(_summary_table(result), title="[bold]Dependency Analysis[/]", border_style="blue"))

    if result.packages_to_move:
        out.print("\n[bold green]Packages that can be moved to devDependencies:[/]")
        for verdict in result.packages_to_move:
            out.print(build_usage_tree(verdict, project_root))
        out.print("\n[dim]Tip: run with --fix to move these packages automatically[/]")
    else:
        out.print("\n[green]No packages found that can be moved to devDependencies[/]")

    if result.packages_to_keep:
        out.print("\n[bold yellow]Packages that should stay in dependencies:[/]")
        for verdict in result.packages_to_keep:
            out.print(build_usage_tree(verdict, project_root))


def print_compact_report(result: AnalysisResult, out: Console | None = None) -> None:
    """Print summary plus one line per package."""
    out = out or console
    out.print(Panel(_summary_table(result), title="[bold]Dependency Analysis[/]", border_style="blue"))

    if result.packages_to_move:
        out.print(
            _verdict_table(
                "Packages that can be moved to devDependencies", result.packages_to_move, "green"
            )
        )
        out.print("[dim]Tip: run with --fix to move these packages automatically[/]")
    else:
        out.print("[green]No packages found that can be moved to devDependencies[/]")

    if 0 < result.keep_count <= MAX_COMPACT_KEEP:
        out.print(
            _verdict_table(
                "Packages that should stay in dependencies", result.packages_to_keep, "yellow"
            )
        )
    elif result.keep_count > MAX_COMPACT_KEEP:
        out.print(
            f"[yellow]{result.keep_count} packages should stay in dependencies "
            "(run with --verbose to see details)[/]"
        )
