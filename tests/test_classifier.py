"""Tests for the file classifier."""

from pathlib import Path

import pytest

from depsort.analysis.classifier import (
    RULES,
    classify_file,
    is_config_file_name,
    is_in_source_dir,
    is_test_file_name,
    should_analyze_file,
)
from depsort.models.project import ProjectLayout

ROOT = Path("/project")


@pytest.fixture
def layout() -> ProjectLayout:
    return ProjectLayout(
        root=ROOT,
        source_dirs=("src", "lib"),
        test_dirs=("test", "__tests__"),
        build_dirs=("dist", "build"),
    )


class TestBuildRule:
    """Files under build directories win over every other rule."""

    @pytest.mark.parametrize(
        "relative",
        [
            "dist/index.js",
            "dist/app.test.ts",
            "dist/jest.config.js",
            "build/src/server.js",
        ],
    )
    def test_build_dir_overrides_naming(self, layout: ProjectLayout, relative: str):
        """Should mark build output as build regardless of file name."""
        result = classify_file(ROOT / relative, layout)

        assert result.is_build is True
        assert result.is_production is False
        assert result.is_test is False
        assert result.is_config is False
        assert result.reason == "File is in build directory"

    def test_build_name_outside_build_dir(self, layout: ProjectLayout):
        """A source file merely named like a build dir is not build output."""
        result = classify_file(ROOT / "src" / "dist.ts", layout)

        assert result.is_build is False
        assert result.is_production is True


class TestTestRule:
    """Tests for test directory and test file detection."""

    def test_file_in_test_dir(self, layout: ProjectLayout):
        result = classify_file(ROOT / "test" / "helpers.ts", layout)

        assert result.is_test is True
        assert result.is_production is False
        assert result.reason == "File is in test directory"

    def test_nested_test_dir_inside_source(self, layout: ProjectLayout):
        """__tests__ folders next to source are still tests."""
        result = classify_file(ROOT / "src" / "components" / "__tests__" / "button.tsx", layout)

        assert result.is_test is True
        assert result.is_production is False

    def test_test_name_outside_any_directory(self, layout: ProjectLayout):
        """foo.test.ts at the root is a test even with no directory match."""
        result = classify_file(ROOT / "foo.test.ts", layout)

        assert result.is_test is True
        assert result.reason == "File matches test pattern"

    def test_spec_name_in_source_dir(self, layout: ProjectLayout):
        result = classify_file(ROOT / "src" / "parser.spec.js", layout)

        assert result.is_test is True
        assert result.is_production is False

    @pytest.mark.parametrize(
        "name",
        ["a.test.ts", "a.spec.tsx", "a.test.jsx", "A.TEST.JS", "a.test.ts.map", "a.spec.js.map"],
    )
    def test_test_file_names(self, name: str):
        assert is_test_file_name(name)

    @pytest.mark.parametrize("name", ["test.ts", "latest.ts", "a.test.py", "a.testing.ts"])
    def test_non_test_file_names(self, name: str):
        assert not is_test_file_name(name)


class TestConfigRule:
    """Tests for tool configuration files."""

    @pytest.mark.parametrize(
        "name",
        [
            "jest.config.js",
            "vitest.config.ts",
            "vite.config.mjs",
            "webpack.config.cjs",
            "rollup.config.js",
            "babel.config.json",
            "eslint.config.mjs",
            "prettier.config.js",
            "tsup.config.ts",
            ".eslintrc.js",
            ".eslintrc",
            ".prettierrc.json",
            ".babelrc",
            ".nycrc",
            "tsconfig.json",
            "package.json",
        ],
    )
    def test_config_file_names(self, name: str):
        assert is_config_file_name(name)

    @pytest.mark.parametrize("name", ["config.ts", "jest.setup.ts", "app.config.ts"])
    def test_non_config_file_names(self, name: str):
        assert not is_config_file_name(name)

    def test_root_config_file(self, layout: ProjectLayout):
        result = classify_file(ROOT / "vite.config.ts", layout)

        assert result.is_config is True
        assert result.is_production is False
        assert result.reason == "File is a configuration file"

    def test_config_named_file_inside_source_is_not_production(self, layout: ProjectLayout):
        """Config-named files in source dirs are neither config nor production."""
        result = classify_file(ROOT / "src" / "vite.config.ts", layout)

        assert result.is_config is False
        assert result.is_production is False
        assert "config=true" in result.reason


class TestSourceRule:
    """Tests for production classification."""

    def test_source_file_is_production(self, layout: ProjectLayout):
        result = classify_file(ROOT / "src" / "server.ts", layout)

        assert result.is_production is True
        assert result.reason == "File is in source directory"

    def test_second_source_dir(self, layout: ProjectLayout):
        assert classify_file(ROOT / "lib" / "deep" / "util.js", layout).is_production

    def test_file_outside_source(self, layout: ProjectLayout):
        result = classify_file(ROOT / "scripts" / "release.js", layout)

        assert result.is_production is False
        assert result.is_test is False
        assert result.is_config is False
        assert result.reason == "File classification: source=false, test=false, config=false"

    def test_type_definition_outside_source(self, layout: ProjectLayout):
        result = classify_file(ROOT / "types" / "globals.d.ts", layout)

        assert result.is_production is False
        assert result.reason == "File is a type definition"

    def test_type_definition_inside_source(self, layout: ProjectLayout):
        result = classify_file(ROOT / "src" / "env.d.ts", layout)

        assert result.is_production is True

    def test_production_and_test_are_exclusive(self, layout: ProjectLayout):
        for relative in ["src/a.ts", "src/a.test.ts", "test/a.ts", "dist/a.js", "a.ts"]:
            result = classify_file(ROOT / relative, layout)
            assert not (result.is_production and result.is_test)


class TestRootSourceDir:
    """Tests for projects whose sources live in the root directory."""

    @pytest.fixture
    def root_layout(self) -> ProjectLayout:
        return ProjectLayout(root=ROOT, source_dirs=(".",), test_dirs=(), build_dirs=())

    def test_root_file_is_source(self, root_layout: ProjectLayout):
        assert classify_file(ROOT / "index.js", root_layout).is_production

    def test_nested_file_is_not_source(self, root_layout: ProjectLayout):
        assert not classify_file(ROOT / "scripts" / "build.js", root_layout).is_production

    def test_root_config_stays_in_rule_four(self, root_layout: ProjectLayout):
        """Config names at the root are under source, so never production."""
        result = classify_file(ROOT / "jest.config.js", root_layout)

        assert result.is_production is False
        assert result.is_config is False

    def test_is_in_source_dir_with_dot_prefix(self, root_layout: ProjectLayout):
        assert is_in_source_dir("./index.js", root_layout)


class TestRuleOrder:
    """The rule chain is ordered build, test, config."""

    def test_rules_are_ordered(self):
        names = [rule.__name__ for rule in RULES]
        assert names == ["_build_rule", "_test_rule", "_config_rule"]

    def test_file_outside_root_is_not_production(self, layout: ProjectLayout):
        result = classify_file(Path("/elsewhere/src/app.ts"), layout)
        assert result.is_production is False


class TestShouldAnalyzeFile:
    """Tests for the pre-scan file filter."""

    @pytest.mark.parametrize("name", ["a.ts", "a.tsx", "a.js", "a.jsx", "a.mjs", "a.cjs"])
    def test_supported_extensions(self, layout: ProjectLayout, name: str):
        assert should_analyze_file(ROOT / "src" / name, layout)

    @pytest.mark.parametrize("name", ["a.json", "a.css", "a.md", "a.test.ts.map"])
    def test_unsupported_extensions(self, layout: ProjectLayout, name: str):
        assert not should_analyze_file(ROOT / "src" / name, layout)

    def test_skips_node_modules(self, layout: ProjectLayout):
        assert not should_analyze_file(ROOT / "node_modules" / "lodash" / "index.js", layout)
        assert not should_analyze_file(ROOT / "packages" / "a" / "node_modules" / "x.js", layout)

    def test_skips_coverage(self, layout: ProjectLayout):
        assert not should_analyze_file(ROOT / "coverage" / "lcov-report" / "prettify.js", layout)

    def test_skips_build_dirs(self, layout: ProjectLayout):
        assert not should_analyze_file(ROOT / "dist" / "index.js", layout)
