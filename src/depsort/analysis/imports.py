"""Extract package imports from JavaScript/TypeScript sources with tree-sitter."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterator

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from depsort.analysis.fallback import (
    extract_imports_with_regex,
    extract_package_name,
    is_external_package,
)
from depsort.models.imports import FileExtraction, ImportRecord

logger = logging.getLogger(__name__)

# Grammar to try first, then the alternate used when the first parse has errors.
GRAMMARS_BY_EXTENSION: dict[str, tuple[str, str]] = {
    ".ts": ("typescript", "tsx"),
    ".tsx": ("tsx", "typescript"),
    ".js": ("javascript", "tsx"),
    ".jsx": ("javascript", "tsx"),
    ".mjs": ("javascript", "tsx"),
    ".cjs": ("javascript", "tsx"),
}
DEFAULT_GRAMMARS = ("javascript", "tsx")

_LANGUAGE_FACTORIES: dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


@lru_cache(maxsize=None)
def get_language(name: str) -> tree_sitter.Language:
    return tree_sitter.Language(_LANGUAGE_FACTORIES[name]())


def grammars_for(file_path: Path) -> tuple[str, str]:
    return GRAMMARS_BY_EXTENSION.get(Path(file_path).suffix.lower(), DEFAULT_GRAMMARS)


def _walk(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield every node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _string_value(node: tree_sitter.Node) -> str:
    return node.text[1:-1].decode("utf-8", errors="replace")


def _char_column(source: bytes, offset: int) -> int:
    """0-based column in characters; tree-sitter reports columns in bytes."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    return len(source[line_start:offset].decode("utf-8", errors="replace"))


def _has_type_keyword(node: tree_sitter.Node) -> bool:
    return any(child.type == "type" for child in node.children)


def is_type_only_import(node: tree_sitter.Node) -> bool:
    """Check whether an import statement is erased at compile time.

    ``import type ...`` always is. Otherwise every specifier must carry its
    own ``type`` marker; default and namespace specifiers never do, and a
    side-effect import has no specifiers at all.
    """
    if _has_type_keyword(node):
        return True

    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is None:
        return False

    specifiers: list[bool] = []
    for child in clause.named_children:
        if child.type == "named_imports":
            specifiers.extend(
                _has_type_keyword(spec)
                for spec in child.named_children
                if spec.type == "import_specifier"
            )
        else:
            specifiers.append(False)

    return bool(specifiers) and all(specifiers)


def _is_module_loader(function: tree_sitter.Node) -> bool:
    """Match the callee of ``require()``, ``import()`` and ``require.resolve()``."""
    if function.type == "import":
        return True
    if function.type == "identifier":
        return function.text == b"require"
    if function.type == "member_expression":
        obj = function.child_by_field_name("object")
        prop = function.child_by_field_name("property")
        return (
            obj is not None
            and prop is not None
            and obj.type == "identifier"
            and obj.text == b"require"
            and prop.text == b"resolve"
        )
    return False


def _import_statement_source(node: tree_sitter.Node) -> tuple[str, bool] | None:
    source = node.child_by_field_name("source")
    if source is not None and source.type == "string":
        return _string_value(source), is_type_only_import(node)

    # TypeScript `import x = require("pkg")`
    for child in node.named_children:
        if child.type == "import_require_clause":
            source = next((c for c in child.named_children if c.type == "string"), None)
            if source is not None:
                return _string_value(source), _has_type_keyword(node)
    return None


def _call_expression_source(node: tree_sitter.Node) -> tuple[str, bool] | None:
    function = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    if function is None or arguments is None or not _is_module_loader(function):
        return None

    args = [arg for arg in arguments.named_children if arg.type != "comment"]
    if not args or args[0].type != "string":
        return None
    return _string_value(args[0]), False


NODE_HANDLERS: dict[str, Callable[[tree_sitter.Node], tuple[str, bool] | None]] = {
    "import_statement": _import_statement_source,
    "call_expression": _call_expression_source,
}


class ImportExtractor:
    """Finds every external package referenced by a source file."""

    def __init__(self) -> None:
        self._parsers: dict[str, tree_sitter.Parser] = {}

    def _parser(self, grammar: str) -> tree_sitter.Parser:
        if grammar not in self._parsers:
            self._parsers[grammar] = tree_sitter.Parser(get_language(grammar))
        return self._parsers[grammar]

    def parse(self, source: bytes, file_path: Path) -> tree_sitter.Tree | None:
        """Parse with the file's grammar, retrying once with the alternate.

        Returns None when both parses contain syntax errors.
        """
        for grammar in grammars_for(file_path):
            tree = self._parser(grammar).parse(source)
            if not tree.root_node.has_error:
                return tree
            logger.debug("Parse with %s grammar failed for %s", grammar, file_path)
        return None

    def extract(self, content: str, file_path: Path) -> FileExtraction:
        source = content.encode("utf-8")
        tree = self.parse(source, file_path)
        if tree is None:
            return FileExtraction(
                file_path=file_path,
                imports=extract_imports_with_regex(content, file_path),
                used_fallback=True,
                warning=f"Could not parse {file_path}, fell back to pattern matching",
            )

        return FileExtraction(file_path=file_path, imports=self.collect(tree, source, file_path))

    def collect(
        self, tree: tree_sitter.Tree, source: bytes, file_path: Path
    ) -> list[ImportRecord]:
        imports: list[ImportRecord] = []

        for node in _walk(tree.root_node):
            handler = NODE_HANDLERS.get(node.type)
            if handler is None:
                continue
            found = handler(node)
            if found is None:
                continue

            specifier, type_only = found
            if not is_external_package(specifier):
                continue

            row = node.start_point[0]
            imports.append(
                ImportRecord(
                    package_name=extract_package_name(specifier),
                    is_type_only=type_only,
                    file_path=file_path,
                    line=row + 1,
                    column=_char_column(source, node.start_byte),
                )
            )

        return imports


_default_extractor: ImportExtractor | None = None


def extract_imports(content: str, file_path: Path) -> list[ImportRecord]:
    """Extract import records from file contents using a shared extractor."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = ImportExtractor()
    return _default_extractor.extract(content, Path(file_path)).imports
