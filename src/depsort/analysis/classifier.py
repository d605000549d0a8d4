"""Classify project files as production, test, build output or configuration.

Rules are evaluated in priority order and the first match wins:

1. build/output directory
2. test directory or test file name
3. tool configuration file outside the source directories
4. production when under a source directory
"""

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable

from depsort.models.imports import FileClassification
from depsort.models.project import ProjectLayout

ANALYZABLE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"})

TEST_FILE_PATTERN = re.compile(r"\.(test|spec)\.(ts|tsx|js|jsx)(\.map)?$", re.IGNORECASE)

CONFIG_FILE_PATTERN = re.compile(
    r"^(jest|vitest|vite|webpack|rollup|esbuild|tsup|tsx|ts-node|babel|eslint|prettier"
    r"|\.prettierrc|\.eslintrc)\.(config\.)?(js|ts|json|mjs|cjs)$",
    re.IGNORECASE,
)
CONFIG_DOTFILE_PATTERN = re.compile(r"^\.(eslintrc|prettierrc|babelrc|nycrc)", re.IGNORECASE)
CONFIG_FILE_NAMES = frozenset({"tsconfig.json", "package.json"})


@dataclass(frozen=True)
class _PathInfo:
    """Normalized view of a file path relative to the project root."""

    relative: str
    name: str
    parent: str

    @classmethod
    def from_path(cls, file_path: Path, root: Path) -> "_PathInfo":
        try:
            rel_path = Path(file_path).relative_to(root)
        except ValueError:
            rel_path = Path(file_path)
        relative = rel_path.as_posix()
        posix = PurePosixPath(relative)
        return cls(relative=relative, name=posix.name, parent=str(posix.parent))


def _under_dir(relative: str, directory: str) -> bool:
    return relative.startswith(f"{directory}/") or relative.startswith(f"./{directory}/")


def is_in_build_dir(relative: str, layout: ProjectLayout) -> bool:
    return any(_under_dir(relative, build_dir) for build_dir in layout.build_dirs)


def is_in_test_dir(info: _PathInfo, layout: ProjectLayout) -> bool:
    return any(
        f"/{test_dir}/" in info.relative
        or info.relative.startswith(f"{test_dir}/")
        or info.parent == test_dir
        for test_dir in layout.test_dirs
    )


def is_in_source_dir(relative: str, layout: ProjectLayout) -> bool:
    """Check whether a root-relative path lies in a source directory."""
    for source_dir in layout.source_dirs:
        if source_dir == ".":
            parts = PurePosixPath(relative).parts
            if len(parts) == 1 or (len(parts) == 2 and parts[0] == "."):
                return True
        elif _under_dir(relative, source_dir):
            return True
    return False


def is_test_file_name(name: str) -> bool:
    return TEST_FILE_PATTERN.search(name) is not None


def is_config_file_name(name: str) -> bool:
    return (
        CONFIG_FILE_PATTERN.match(name) is not None
        or CONFIG_DOTFILE_PATTERN.match(name) is not None
        or name in CONFIG_FILE_NAMES
    )


# A rule inspects the path and returns a classification, or None to fall through.
Rule = Callable[[_PathInfo, ProjectLayout], FileClassification | None]


def _build_rule(info: _PathInfo, layout: ProjectLayout) -> FileClassification | None:
    if is_in_build_dir(info.relative, layout):
        return FileClassification(is_build=True, reason="File is in build directory")
    return None


def _test_rule(info: _PathInfo, layout: ProjectLayout) -> FileClassification | None:
    if is_in_test_dir(info, layout):
        return FileClassification(is_test=True, reason="File is in test directory")
    if is_test_file_name(info.name):
        return FileClassification(is_test=True, reason="File matches test pattern")
    return None


def _config_rule(info: _PathInfo, layout: ProjectLayout) -> FileClassification | None:
    if is_config_file_name(info.name) and not is_in_source_dir(info.relative, layout):
        return FileClassification(is_config=True, reason="File is a configuration file")
    return None


def _source_rule(info: _PathInfo, layout: ProjectLayout) -> FileClassification:
    in_source = is_in_source_dir(info.relative, layout)
    config_named = is_config_file_name(info.name)
    is_production = in_source and not config_named

    if is_production:
        reason = "File is in source directory"
    elif info.name.endswith(".d.ts"):
        reason = "File is a type definition"
    else:
        reason = (
            f"File classification: source={str(in_source).lower()}, "
            f"test=false, config={str(config_named).lower()}"
        )
    return FileClassification(is_production=is_production, reason=reason)


RULES: tuple[Rule, ...] = (_build_rule, _test_rule, _config_rule)


def classify_file(file_path: Path, layout: ProjectLayout) -> FileClassification:
    """Classify a file from its path alone; never touches the filesystem."""
    info = _PathInfo.from_path(file_path, layout.root)
    for rule in RULES:
        classification = rule(info, layout)
        if classification is not None:
            return classification
    return _source_rule(info, layout)


def should_analyze_file(file_path: Path, layout: ProjectLayout) -> bool:
    """Check whether a file is a JS/TS source worth scanning for imports."""
    info = _PathInfo.from_path(file_path, layout.root)
    relative = f"/{info.relative}"

    if "/node_modules/" in relative or "/coverage/" in relative:
        return False

    if is_in_build_dir(info.relative, layout):
        return False

    return PurePosixPath(info.name).suffix in ANALYZABLE_EXTENSIONS
