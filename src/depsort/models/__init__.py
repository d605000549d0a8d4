"""Data models for depsort."""

from depsort.models.imports import FileClassification, FileExtraction, ImportRecord, ScanResult
from depsort.models.project import LayoutOverrides, MovedPackage, ProjectConfig, ProjectLayout
from depsort.models.results import AnalysisResult, PackageVerdict

__all__ = [
    # Project models
    "LayoutOverrides",
    "MovedPackage",
    "ProjectConfig",
    "ProjectLayout",
    # Import models
    "FileClassification",
    "FileExtraction",
    "ImportRecord",
    "ScanResult",
    # Results models
    "AnalysisResult",
    "PackageVerdict",
]
