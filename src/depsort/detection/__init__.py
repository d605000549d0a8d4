"""Project structure detection."""

from depsort.detection.layout import analyze_project, detect_layout

__all__ = ["analyze_project", "detect_layout"]
