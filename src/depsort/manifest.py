"""Reading, updating and writing package.json."""

import json
from pathlib import Path

from depsort.errors import ManifestError
from depsort.models.project import MovedPackage

MANIFEST_NAME = "package.json"


def find_package_json(start_dir: Path) -> Path | None:
    """Find package.json in start_dir or the nearest parent directory."""
    current = Path(start_dir).resolve()
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def read_package_json(manifest_path: Path) -> dict:
    """Load package.json, raising ManifestError if it is not a JSON object."""
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {manifest_path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Could not read {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path} does not contain a JSON object")
    return data


def write_package_json(manifest_path: Path, manifest: dict) -> None:
    """Write manifest changes, keeping fields the manifest does not mention."""
    original = read_package_json(manifest_path)
    updated = {**original, **manifest}

    # Moving every package out of dependencies removes the key entirely.
    if "dependencies" in original and "dependencies" not in manifest:
        del updated["dependencies"]

    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(updated, f, indent=2, ensure_ascii=False)
        f.write("\n")


def move_packages_to_dev_dependencies(
    manifest: dict,
    package_names: list[str],
) -> tuple[dict, list[MovedPackage]]:
    """Move packages from dependencies to devDependencies.

    Returns the updated manifest (the input is not modified) and the packages
    actually moved. Names missing from dependencies are skipped.
    """
    updated = dict(manifest)
    dependencies = dict(updated.get("dependencies") or {})
    dev_dependencies = dict(updated.get("devDependencies") or {})
    moved: list[MovedPackage] = []

    for name in package_names:
        version = dependencies.pop(name, None)
        if version is None:
            continue
        dev_dependencies[name] = version
        moved.append(MovedPackage(name=name, version=version))

    if dependencies:
        updated["dependencies"] = dependencies
    else:
        updated.pop("dependencies", None)

    updated["devDependencies"] = dev_dependencies
    return updated, moved
