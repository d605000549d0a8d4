"""Discover project files and collect their imports."""

import logging
import os
from pathlib import Path
from typing import Callable

import pathspec

from depsort.analysis.classifier import should_analyze_file
from depsort.analysis.imports import ImportExtractor
from depsort.exclusion import FileExcluder
from depsort.models.imports import FileExtraction, ScanResult
from depsort.models.project import ProjectConfig

logger = logging.getLogger(__name__)


def find_files_to_analyze(
    config: ProjectConfig,
    excludes: list[str] | None = None,
    includes: list[str] | None = None,
    include_ignored: bool = False,
) -> list[Path]:
    """Find JS/TS files under the project root, sorted by path.

    Build directories and excluded directories are pruned while walking.
    When include patterns are given only matching files are returned.
    """
    root = config.root
    layout = config.layout
    excluder = FileExcluder(
        root,
        include_ignored=include_ignored,
        extra_excludes=[*(f"/{d}/" for d in layout.build_dirs), *(excludes or [])],
    )
    logger.debug("Exclude patterns from: %s", ", ".join(excluder.sources))
    include_spec = pathspec.GitIgnoreSpec.from_lines(includes) if includes else None

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        dirnames[:] = sorted(d for d in dirnames if not excluder.should_exclude_dir(current / d))

        for filename in filenames:
            file_path = current / filename
            if excluder.should_exclude(file_path):
                continue
            if not should_analyze_file(file_path, layout):
                continue
            if include_spec is not None and not include_spec.match_file(
                file_path.relative_to(root).as_posix()
            ):
                continue
            files.append(file_path)

    return sorted(files)


def extract_file(extractor: ImportExtractor, file_path: Path) -> FileExtraction:
    """Read and extract one file; read failures become warnings."""
    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        return FileExtraction(file_path=file_path, warning=f"Could not decode {file_path}: {e}")
    except OSError as e:
        return FileExtraction(file_path=file_path, warning=f"Could not read {file_path}: {e}")

    return extractor.extract(content, file_path)


def scan_imports(
    files: list[Path],
    extractor: ImportExtractor | None = None,
    on_file: Callable[[Path], None] | None = None,
) -> ScanResult:
    """Extract imports from every file, in the order given."""
    extractor = extractor or ImportExtractor()
    result = ScanResult(files=list(files))

    for file_path in files:
        extraction = extract_file(extractor, file_path)
        result.imports.extend(extraction.imports)
        if extraction.warning:
            logger.debug(extraction.warning)
            result.warnings.append(extraction.warning)
        if on_file is not None:
            on_file(file_path)

    return result
