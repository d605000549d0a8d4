"""Decide which project paths are skipped before import scanning.

Patterns come from three places, matched together with gitignore
semantics: built-in excludes for Node projects, the project's .gitignore,
and ``--exclude``/``[analysis] exclude`` patterns.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pathspec


@dataclass
class ExclusionConfig:
    """Exclude patterns grouped by where they were loaded from."""

    default_patterns: list[str] = field(default_factory=list)
    gitignore_patterns: list[str] = field(default_factory=list)
    extra_patterns: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


# Dependency caches and coverage output are never analyzed
DEFAULT_EXCLUDES = [
    "node_modules",
    "coverage",
    ".git",
]


class FileExcluder:
    """Matches project-relative paths against the combined exclude patterns."""

    def __init__(
        self,
        project_root: Path,
        include_ignored: bool = False,
        extra_excludes: list[str] | None = None,
    ) -> None:
        """Build the matcher for one project.

        Args:
            project_root: Directory holding package.json; paths are matched relative to it.
            include_ignored: Leave .gitignore out; defaults and extra patterns still apply.
            extra_excludes: Patterns from the command line and depsort.toml.
        """
        self.project_root = project_root
        self.include_ignored = include_ignored
        self._config = ExclusionConfig(default_patterns=list(DEFAULT_EXCLUDES), sources=["defaults"])
        if not include_ignored:
            self._load_gitignore()
        if extra_excludes:
            self._config.extra_patterns = list(extra_excludes)
            self._config.sources.append("command line and config")
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def _load_gitignore(self) -> None:
        """Load .gitignore patterns."""
        gitignore_path = self.project_root / ".gitignore"
        if not gitignore_path.is_file():
            return
        try:
            content = gitignore_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return

        self._config.gitignore_patterns = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.startswith("#")
        ]
        self._config.sources.append(str(gitignore_path))

    def _relative(self, path: Path) -> Path | None:
        try:
            return path.relative_to(self.project_root)
        except ValueError:
            return None

    def should_exclude(self, file_path: Path) -> bool:
        """Check a file path, or any of its parent directories, against the patterns.

        Files outside the project root are never excluded.
        """
        rel_path = self._relative(file_path)
        if rel_path is None:
            return False

        if self._spec.match_file(rel_path.as_posix()):
            return True

        # A file inside an excluded directory is excluded; ancestors are matched
        # from the root so anchored patterns like "/build" stay anchored
        parts = rel_path.parts
        return any(
            self._spec.match_file("/".join(parts[:i]) + "/") for i in range(1, len(parts))
        )

    def should_exclude_dir(self, dir_path: Path) -> bool:
        """Check if a directory can be skipped without visiting its files."""
        rel_path = self._relative(dir_path)
        if rel_path is None or not rel_path.parts:
            return False
        return self._spec.match_file(f"{rel_path.as_posix()}/")

    @property
    def sources(self) -> list[str]:
        """Where the patterns came from."""
        return self._config.sources

    @property
    def patterns(self) -> list[str]:
        """Defaults, then .gitignore, then extra patterns."""
        return (
            self._config.default_patterns
            + self._config.gitignore_patterns
            + self._config.extra_patterns
        )
