"""Data models for dependency analysis results."""

from dataclasses import dataclass, field

from depsort.models.imports import ImportRecord


@dataclass(frozen=True)
class PackageVerdict:
    """Whether a declared runtime dependency can move to devDependencies."""

    package_name: str
    imports: tuple[ImportRecord, ...] = ()
    used_in_production: bool = False
    used_in_dev: bool = False
    only_type_imports: bool = False
    can_move: bool = False
    reason: str = ""

    @property
    def type_only_count(self) -> int:
        return sum(1 for imp in self.imports if imp.is_type_only)

    @property
    def runtime_count(self) -> int:
        return len(self.imports) - self.type_only_count

    def to_dict(self, include_imports: bool = True) -> dict:
        result = {
            "package_name": self.package_name,
            "reason": self.reason,
            "used_in_production": self.used_in_production,
            "used_in_dev": self.used_in_dev,
            "only_type_imports": self.only_type_imports,
            "import_count": len(self.imports),
            "type_only_import_count": self.type_only_count,
            "runtime_import_count": self.runtime_count,
        }
        if include_imports:
            result["imports"] = [imp.to_dict() for imp in self.imports]
        return result


@dataclass(frozen=True)
class AnalysisResult:
    """Declared runtime dependencies split into move and keep lists."""

    packages_to_move: tuple[PackageVerdict, ...] = field(default_factory=tuple)
    packages_to_keep: tuple[PackageVerdict, ...] = field(default_factory=tuple)

    @property
    def total_dependencies(self) -> int:
        return len(self.packages_to_move) + len(self.packages_to_keep)

    @property
    def can_move_count(self) -> int:
        return len(self.packages_to_move)

    @property
    def keep_count(self) -> int:
        return len(self.packages_to_keep)

    def to_dict(self) -> dict:
        return {
            "summary": {
                "total_dependencies": self.total_dependencies,
                "can_move_count": self.can_move_count,
                "keep_count": self.keep_count,
            },
            "packages_to_move": [pkg.to_dict() for pkg in self.packages_to_move],
            "packages_to_keep": [
                pkg.to_dict(include_imports=False) for pkg in self.packages_to_keep
            ],
        }
