"""Output modules for CLI display and file writing."""

from depsort.output.json_writer import generate_json_report, write_json_report
from depsort.output.report import build_usage_tree, print_compact_report, print_report

__all__ = [
    "build_usage_tree",
    "generate_json_report",
    "print_compact_report",
    "print_report",
    "write_json_report",
]
