"""Analysis modules for dependency classification."""

from depsort.analysis.classifier import classify_file, should_analyze_file
from depsort.analysis.dependencies import analyze_dependencies, detailed_reason, group_imports_by_package
from depsort.analysis.fallback import extract_imports_with_regex, extract_package_name, is_external_package
from depsort.analysis.imports import ImportExtractor, extract_imports
from depsort.analysis.scanner import find_files_to_analyze, scan_imports

__all__ = [
    "ImportExtractor",
    "analyze_dependencies",
    "classify_file",
    "detailed_reason",
    "extract_imports",
    "extract_imports_with_regex",
    "extract_package_name",
    "find_files_to_analyze",
    "group_imports_by_package",
    "is_external_package",
    "scan_imports",
    "should_analyze_file",
]
