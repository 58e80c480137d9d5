"""Composable API functions for structured control-flow emission.

Each function is one step a compiler driver needs (validate the stream,
emit it for a runtime edition, inspect it, check the result parses) and is
callable without any CLI around it.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TextIO

from .edition import get_edition
from .emit import emit_control_flow
from .emit_types import EmitConfig, EmitStats
from .ir import ControlInstruction
from .ir_stats import count_ops
from .syntax import (
    ParserFactory,
    SyntaxChecker,
    SyntaxIssue,
    TreeSitterParserFactory,
    grammar_for_runtime,
)
from .writer import StreamWriter, StringWriter, Writer

logger = logging.getLogger(__name__)


def load_instructions(data: list[Any]) -> list[ControlInstruction]:
    """Validate JSON-like data into control instructions.

    Args:
        data: A list of mappings (e.g. parsed JSON), or instructions.

    Returns:
        A list of ControlInstruction models.

    Raises:
        pydantic.ValidationError: if any entry is malformed.
    """
    return [
        inst
        if isinstance(inst, ControlInstruction)
        else ControlInstruction.model_validate(inst)
        for inst in data
    ]


def lower_control_flow(
    instructions: list[ControlInstruction],
    config: EmitConfig = EmitConfig(),
) -> str:
    """Emit *instructions* for ``config.runtime`` and return the Lua text.

    Args:
        instructions: The control instruction stream.
        config: Runtime edition and emission options.

    Returns:
        The emitted Lua source.
    """
    writer = StringWriter()
    write_control_flow(instructions, writer, config)
    return writer.getvalue()


def write_control_flow(
    instructions: list[ControlInstruction],
    stream: TextIO | Writer,
    config: EmitConfig = EmitConfig(),
) -> EmitStats:
    """Emit *instructions* into *stream*, a text stream or a Writer.

    Any ``OSError`` raised while writing propagates unchanged; output
    written before the failure is left as is.
    """
    edition = get_edition(config.runtime)
    writer = stream if isinstance(stream, Writer) else StreamWriter(stream)
    logger.info(
        "Emitting %d control instructions (runtime=%s)",
        len(instructions),
        edition.identify(),
    )
    stats = emit_control_flow(
        instructions,
        edition,
        writer,
        declare_branch_state=config.declare_branch_state,
    )
    logger.info("Emission complete: %s", stats.report())
    return stats


def dump_ir(instructions: list[ControlInstruction]) -> str:
    """Return a human-readable dump, one instruction per line."""
    return "\n".join(f"  {inst}" for inst in instructions)


def ir_stats(instructions: list[ControlInstruction]) -> dict[str, int]:
    """Return a frequency map of op names in *instructions*."""
    return count_ops(instructions)


def check_emitted_syntax(
    text: str,
    runtime: str,
    parser_factory: Optional[ParserFactory] = None,
) -> list[SyntaxIssue]:
    """Parse emitted *text* with the grammar for *runtime*.

    Args:
        text: Emitted Lua source.
        runtime: Runtime edition name ("luajit" or "luau").
        parser_factory: Parser factory override (defaults to tree-sitter).

    Returns:
        Every syntax issue found; an empty list means the text parses cleanly.
    """
    grammar = grammar_for_runtime(runtime)
    checker = SyntaxChecker(parser_factory or TreeSitterParserFactory())
    issues = checker.find_errors(text, grammar)
    if issues:
        logger.warning("%d syntax issue(s) in emitted %s code", len(issues), runtime)
    return issues
