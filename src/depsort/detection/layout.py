"""Project structure detection for JavaScript/TypeScript projects."""

import re
from pathlib import Path

from depsort.errors import ManifestNotFoundError
from depsort.manifest import find_package_json, read_package_json
from depsort.models.project import LayoutOverrides, ProjectConfig, ProjectLayout

SOURCE_DIR_CANDIDATES = ["src", "lib", "source", "app"]
TEST_DIR_CANDIDATES = ["__tests__", "tests", "test", "spec", "__spec__"]
BUILD_DIR_CANDIDATES = ["dist", "build", "out", ".next", ".nuxt", "coverage", "node_modules"]

ROOT_SOURCE_PATTERN = re.compile(r"\.(ts|tsx|js|jsx)$")


def _existing_dirs(root: Path, candidates: list[str]) -> list[str]:
    return [name for name in candidates if (root / name).is_dir()]


def detect_source_dirs(root: Path) -> list[str]:
    """Detect source directories, falling back to the root or ``src``."""
    detected = _existing_dirs(root, SOURCE_DIR_CANDIDATES)
    if detected:
        return detected

    has_root_sources = any(
        entry.is_file()
        and ROOT_SOURCE_PATTERN.search(entry.name)
        and ".test" not in entry.name
        and ".spec" not in entry.name
        for entry in root.iterdir()
    )
    return ["."] if has_root_sources else ["src"]


def detect_test_dirs(root: Path) -> list[str]:
    return _existing_dirs(root, TEST_DIR_CANDIDATES)


def detect_build_dirs(root: Path) -> list[str]:
    return _existing_dirs(root, BUILD_DIR_CANDIDATES)


def find_tsconfig(root: Path) -> Path | None:
    tsconfig = root / "tsconfig.json"
    return tsconfig if tsconfig.is_file() else None


def detect_layout(root: Path, overrides: LayoutOverrides | None = None) -> ProjectLayout:
    """Build the project layout, letting configured directories win."""
    overrides = overrides or LayoutOverrides()
    return ProjectLayout(
        root=root,
        source_dirs=tuple(
            overrides.source_dirs if overrides.source_dirs is not None else detect_source_dirs(root)
        ),
        test_dirs=tuple(
            overrides.test_dirs if overrides.test_dirs is not None else detect_test_dirs(root)
        ),
        build_dirs=tuple(
            overrides.build_dirs if overrides.build_dirs is not None else detect_build_dirs(root)
        ),
    )


def analyze_project(
    start_dir: Path,
    overrides: LayoutOverrides | None = None,
) -> ProjectConfig:
    """Locate package.json from start_dir and describe the project around it."""
    manifest_path = find_package_json(start_dir)
    if manifest_path is None:
        raise ManifestNotFoundError(
            "package.json not found. Please run depsort from a project directory."
        )

    root = manifest_path.parent
    return ProjectConfig(
        manifest=read_package_json(manifest_path),
        manifest_path=manifest_path,
        layout=detect_layout(root, overrides),
        tsconfig_path=find_tsconfig(root),
    )
