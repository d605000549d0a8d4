"""Data models describing the analyzed project."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ProjectLayout:
    """Directory layout of a JavaScript/TypeScript project.

    Directory entries are relative to ``root`` and use forward slashes.
    ``"."`` in ``source_dirs`` means root-level files are source files.
    """

    root: Path
    source_dirs: tuple[str, ...] = ("src",)
    test_dirs: tuple[str, ...] = ()
    build_dirs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectConfig:
    """Everything known about a project before its files are scanned."""

    manifest: dict
    manifest_path: Path
    layout: ProjectLayout
    tsconfig_path: Path | None = None

    @property
    def root(self) -> Path:
        return self.layout.root

    @property
    def dependencies(self) -> list[str]:
        """Declared runtime dependency names, in manifest order."""
        return list(self.manifest.get("dependencies") or {})

    @property
    def dev_dependencies(self) -> list[str]:
        return list(self.manifest.get("devDependencies") or {})


@dataclass(frozen=True)
class MovedPackage:
    """A package relocated from dependencies to devDependencies."""

    name: str
    version: str


@dataclass
class LayoutOverrides:
    """Directory lists from configuration that replace detected ones."""

    source_dirs: list[str] | None = None
    test_dirs: list[str] | None = None
    build_dirs: list[str] | None = None
    sources: list[str] = field(default_factory=list)  # Config files used
