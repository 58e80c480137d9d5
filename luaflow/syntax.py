"""Tree-Sitter syntax checking for emitted Lua."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from . import constants


class ParserFactory(ABC):
    """Abstract factory for obtaining a grammar parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


@dataclass(frozen=True)
class SyntaxIssue:
    """One ERROR or MISSING node in a parse tree (1-based line, 0-based column)."""

    line: int
    column: int
    node_type: str
    missing: bool = False

    def __str__(self) -> str:
        kind = f"missing {self.node_type}" if self.missing else "syntax error"
        return f"{self.line}:{self.column}: {kind}"


class SyntaxChecker:
    """Parses emitted text and reports every error node tree-sitter recovers from."""

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def find_errors(self, text: str, grammar: str) -> list[SyntaxIssue]:
        parser = self._factory.get_parser(grammar)
        tree = parser.parse(text.encode("utf-8"))
        if not tree.root_node.has_error:
            return []
        issues: list[SyntaxIssue] = []
        self._collect(tree.root_node, issues)
        return issues

    def _collect(self, node, issues: list[SyntaxIssue]):
        if node.type == "ERROR" or node.is_missing:
            row, col = node.start_point[0], node.start_point[1]
            issues.append(
                SyntaxIssue(
                    line=row + 1,
                    column=col,
                    node_type=node.type,
                    missing=node.is_missing,
                )
            )
        for child in node.children:
            self._collect(child, issues)


def grammar_for_runtime(runtime: str) -> str:
    """Map a runtime edition name to its tree-sitter grammar name."""
    grammar = constants.GRAMMAR_FOR_RUNTIME.get(runtime)
    if grammar is None:
        raise ValueError(f"No grammar registered for runtime edition: {runtime!r}")
    return grammar
