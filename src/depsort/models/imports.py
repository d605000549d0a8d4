"""Data models for extracted import references."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FileClassification:
    """Role of a single file within the project."""

    is_production: bool = False
    is_test: bool = False
    is_build: bool = False
    is_config: bool = False
    reason: str = ""

    @property
    def is_dev(self) -> bool:
        """True for files that only run during development."""
        return self.is_test or self.is_config or self.is_build


@dataclass(frozen=True)
class ImportRecord:
    """A reference to an external package found in a source file."""

    package_name: str
    is_type_only: bool
    file_path: Path
    line: int  # 1-based
    column: int  # 0-based, 0 when the regex fallback found it

    def to_dict(self) -> dict:
        return {
            "file_path": str(self.file_path),
            "line": self.line,
            "column": self.column,
            "is_type_only": self.is_type_only,
        }


@dataclass
class FileExtraction:
    """Outcome of extracting imports from one file."""

    file_path: Path
    imports: list[ImportRecord] = field(default_factory=list)
    used_fallback: bool = False
    warning: str | None = None


@dataclass
class ScanResult:
    """Imports collected across every analyzed file."""

    files: list[Path] = field(default_factory=list)
    imports: list[ImportRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def unique_packages(self) -> set[str]:
        return {imp.package_name for imp in self.imports}
