"""Regex-based import extraction for files tree-sitter cannot parse."""

import re
from pathlib import Path

from depsort.models.imports import ImportRecord

ESM_IMPORT_PATTERN = re.compile(
    r"""^import\s+(?:type\s+)?(?:\*\s+as\s+\w+|[\w\s,{}*]+|\s+)?from\s+['"]([^'"]+)['"]""",
    re.MULTILINE,
)
REQUIRE_PATTERN = re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)""")
DYNAMIC_IMPORT_PATTERN = re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)""")


def is_external_package(source: str) -> bool:
    """Check whether an import source names a package rather than a file."""
    if not source or source.startswith((".", "/")):
        return False
    return not Path(source).is_absolute()


def extract_package_name(source: str) -> str:
    """Reduce an import source to its package name.

    ``@scope/pkg/sub`` becomes ``@scope/pkg`` and ``pkg/sub`` becomes ``pkg``.
    """
    clean = source.split("?")[0].split("#")[0]
    parts = clean.split("/")
    if clean.startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def _line_number(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


def extract_imports_with_regex(content: str, file_path: Path) -> list[ImportRecord]:
    """Find imports with regular expressions; columns are reported as 0."""
    imports: list[ImportRecord] = []

    for match in ESM_IMPORT_PATTERN.finditer(content):
        source = match.group(1)
        if not is_external_package(source):
            continue
        text = match.group(0)
        imports.append(
            ImportRecord(
                package_name=extract_package_name(source),
                is_type_only="import type" in text or "type {" in text,
                file_path=file_path,
                line=_line_number(content, match.start()),
                column=0,
            )
        )

    for pattern in (REQUIRE_PATTERN, DYNAMIC_IMPORT_PATTERN):
        for match in pattern.finditer(content):
            source = match.group(1)
            if not is_external_package(source):
                continue
            imports.append(
                ImportRecord(
                    package_name=extract_package_name(source),
                    is_type_only=False,
                    file_path=file_path,
                    line=_line_number(content, match.start()),
                    column=0,
                )
            )

    return imports
