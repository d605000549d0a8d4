"""Decide which runtime dependencies can move to devDependencies."""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Callable, Iterable

from depsort.analysis.classifier import classify_file
from depsort.models.imports import FileClassification, ImportRecord
from depsort.models.project import ProjectLayout
from depsort.models.results import AnalysisResult, PackageVerdict

logger = logging.getLogger(__name__)

Classifier = Callable[[Path, ProjectLayout], FileClassification]

REASON_NOT_FOUND = "not found in imports, may be used outside static analysis"
REASON_DEV_ONLY = "only used in dev/test/config files"
REASON_TYPE_ONLY = "only type-only imports in production code"
REASON_RUNTIME = "has runtime imports in production code"
REASON_FALLBACK = "used in production code"


def group_imports_by_package(imports: Iterable[ImportRecord]) -> dict[str, list[ImportRecord]]:
    """Group records by package, keeping their original order within a group."""
    groups: dict[str, list[ImportRecord]] = defaultdict(list)
    for imp in imports:
        groups[imp.package_name].append(imp)
    return dict(groups)


def analyze_dependencies(
    dependencies: Iterable[str] | None,
    imports: Iterable[ImportRecord],
    layout: ProjectLayout,
    classify: Classifier = classify_file,
) -> AnalysisResult:
    """Produce a verdict for every declared runtime dependency.

    Verdicts follow the order of ``dependencies`` so repeated runs over the
    same manifest report identically.
    """
    if dependencies is None:
        return AnalysisResult()

    groups = group_imports_by_package(imports)
    classifications: dict[Path, FileClassification] = {}

    def classify_cached(file_path: Path) -> FileClassification:
        if file_path not in classifications:
            classifications[file_path] = classify(file_path, layout)
        return classifications[file_path]

    verdicts = [
        analyze_package_usage(name, groups.get(name, []), classify_cached)
        for name in dependencies
    ]

    return AnalysisResult(
        packages_to_move=tuple(v for v in verdicts if v.can_move),
        packages_to_keep=tuple(v for v in verdicts if not v.can_move),
    )


def analyze_package_usage(
    package_name: str,
    imports: list[ImportRecord],
    classify: Callable[[Path], FileClassification],
) -> PackageVerdict:
    """Decide whether a single package can move to devDependencies."""
    # Packages used only from scripts or as CLI binaries have no imports;
    # keeping them trades a missed move for never breaking a consumer.
    if not imports:
        return PackageVerdict(package_name=package_name, reason=REASON_NOT_FOUND)

    used_in_production = False
    used_in_dev = False
    has_runtime_in_production = False
    has_type_only_in_production = False
    all_type_only = True

    for imp in imports:
        classification = classify(imp.file_path)

        if classification.is_production:
            used_in_production = True
            if imp.is_type_only:
                has_type_only_in_production = True
            else:
                has_runtime_in_production = True
                all_type_only = False
        elif classification.is_dev:
            used_in_dev = True
            if not imp.is_type_only:
                all_type_only = False

    if not used_in_production:
        can_move, reason = True, REASON_DEV_ONLY
    elif has_type_only_in_production and not has_runtime_in_production:
        can_move, reason = True, REASON_TYPE_ONLY
    elif has_runtime_in_production:
        can_move, reason = False, REASON_RUNTIME
    else:
        logger.warning("Unexpected usage pattern for %s, keeping it", package_name)
        can_move, reason = False, REASON_FALLBACK

    return PackageVerdict(
        package_name=package_name,
        imports=tuple(imports),
        used_in_production=used_in_production,
        used_in_dev=used_in_dev,
        only_type_imports=all_type_only,
        can_move=can_move,
        reason=reason,
    )


def detailed_reason(verdict: PackageVerdict) -> str:
    """Reason followed by a breakdown of how the package is imported."""
    if not verdict.imports:
        return verdict.reason

    parts: list[str] = []
    if verdict.used_in_production:
        parts.append(f"used in production ({len(verdict.imports)} imports)")
    if verdict.used_in_dev:
        parts.append("used in dev/test files")
    if verdict.type_only_count:
        parts.append(f"{verdict.type_only_count} type-only import(s)")
    if verdict.runtime_count:
        parts.append(f"{verdict.runtime_count} runtime import(s)")

    return f"{verdict.reason} - {', '.join(parts)}"
