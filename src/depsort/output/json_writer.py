"""JSON output for analysis results."""

import json
from pathlib import Path

from depsort.models.results import AnalysisResult


def generate_json_report(result: AnalysisResult) -> str:
    """Serialize the analysis result with 2-space indentation."""
    return json.dumps(result.to_dict(), indent=2)


def write_json_report(result: AnalysisResult, output_path: Path) -> None:
    """Write the analysis result to a JSON file."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
        f.write("\n")

