"""Tests for package.json handling."""

import json
from pathlib import Path

import pytest

from depsort.errors import ManifestError
from depsort.manifest import (
    find_package_json,
    move_packages_to_dev_dependencies,
    read_package_json,
    write_package_json,
)
from depsort.models.project import MovedPackage


def write_manifest(directory: Path, data) -> Path:
    path = directory / "package.json"
    path.write_text(json.dumps(data))
    return path


class TestFindPackageJson:
    """Tests for locating the manifest."""

    def test_in_start_dir(self, tmp_path: Path):
        manifest = write_manifest(tmp_path, {"name": "app"})
        assert find_package_json(tmp_path) == manifest.resolve()

    def test_in_parent_dir(self, tmp_path: Path):
        manifest = write_manifest(tmp_path, {"name": "app"})
        nested = tmp_path / "src" / "deep"
        nested.mkdir(parents=True)

        assert find_package_json(nested) == manifest.resolve()

    def test_nearest_manifest_wins(self, tmp_path: Path):
        write_manifest(tmp_path, {"name": "outer"})
        inner = tmp_path / "packages" / "inner"
        inner.mkdir(parents=True)
        inner_manifest = write_manifest(inner, {"name": "inner"})

        assert find_package_json(inner) == inner_manifest.resolve()

    def test_directory_named_package_json_ignored(self, tmp_path: Path):
        (tmp_path / "package.json").mkdir()
        assert find_package_json(tmp_path) != (tmp_path / "package.json").resolve()


class TestReadPackageJson:
    """Tests for reading the manifest."""

    def test_reads_object(self, tmp_path: Path):
        path = write_manifest(tmp_path, {"name": "app", "dependencies": {"a": "^1.0.0"}})
        assert read_package_json(path)["dependencies"] == {"a": "^1.0.0"}

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{ not json")

        with pytest.raises(ManifestError, match="Invalid JSON"):
            read_package_json(path)

    def test_non_object(self, tmp_path: Path):
        path = write_manifest(tmp_path, ["a", "b"])

        with pytest.raises(ManifestError, match="JSON object"):
            read_package_json(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="Could not read"):
            read_package_json(tmp_path / "package.json")


class TestMovePackages:
    """Tests for move_packages_to_dev_dependencies."""

    MANIFEST = {
        "name": "app",
        "dependencies": {"express": "^4.18.0", "zod": "^3.22.0", "chalk": "^5.3.0"},
        "devDependencies": {"typescript": "^5.0.0"},
    }

    def test_moves_with_versions(self):
        updated, moved = move_packages_to_dev_dependencies(self.MANIFEST, ["zod", "chalk"])

        assert updated["dependencies"] == {"express": "^4.18.0"}
        assert updated["devDependencies"] == {
            "typescript": "^5.0.0",
            "zod": "^3.22.0",
            "chalk": "^5.3.0",
        }
        assert moved == [MovedPackage("zod", "^3.22.0"), MovedPackage("chalk", "^5.3.0")]

    def test_input_not_modified(self):
        move_packages_to_dev_dependencies(self.MANIFEST, ["zod"])
        assert "zod" in self.MANIFEST["dependencies"]
        assert "zod" not in self.MANIFEST["devDependencies"]

    def test_absent_names_skipped(self):
        updated, moved = move_packages_to_dev_dependencies(self.MANIFEST, ["left-pad"])

        assert moved == []
        assert updated["dependencies"] == self.MANIFEST["dependencies"]

    def test_empty_dependencies_removed(self):
        manifest = {"name": "app", "dependencies": {"chalk": "^5.3.0"}}
        updated, moved = move_packages_to_dev_dependencies(manifest, ["chalk"])

        assert "dependencies" not in updated
        assert updated["devDependencies"] == {"chalk": "^5.3.0"}
        assert [m.name for m in moved] == ["chalk"]


class TestWritePackageJson:
    """Tests for writing the manifest back to disk."""

    def test_preserves_other_fields_and_format(self, tmp_path: Path):
        original = {
            "name": "app",
            "version": "1.0.0",
            "scripts": {"build": "tsc"},
            "dependencies": {"express": "^4.18.0", "zod": "^3.22.0"},
        }
        path = write_manifest(tmp_path, original)

        updated, _ = move_packages_to_dev_dependencies(original, ["zod"])
        write_package_json(path, updated)

        text = path.read_text()
        assert text.endswith("}\n")
        assert '\n  "name": "app",' in text

        data = json.loads(text)
        assert data["scripts"] == {"build": "tsc"}
        assert data["dependencies"] == {"express": "^4.18.0"}
        assert data["devDependencies"] == {"zod": "^3.22.0"}
        assert list(data)[:3] == ["name", "version", "scripts"]

    def test_dependencies_key_removed_when_emptied(self, tmp_path: Path):
        original = {"name": "app", "dependencies": {"chalk": "^5.3.0"}}
        path = write_manifest(tmp_path, original)

        updated, _ = move_packages_to_dev_dependencies(original, ["chalk"])
        write_package_json(path, updated)

        data = json.loads(path.read_text())
        assert "dependencies" not in data
        assert data["devDependencies"] == {"chalk": "^5.3.0"}

    def test_non_ascii_kept(self, tmp_path: Path):
        original = {"name": "app", "description": "café", "dependencies": {}}
        path = write_manifest(tmp_path, original)

        write_package_json(path, original)
        assert "café" in path.read_text(encoding="utf-8")
