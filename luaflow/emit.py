"""Structured control-flow walker: drives an Edition over a control instruction stream.

The walker is the code-generator side of the edition contract: it assigns
nesting levels from a LIFO stack of open constructs, checks the stream is
well formed, and decides where branch-target checks go.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .edition import Edition
from .emit_types import EmitStats
from .ir import OPENERS, ConstructKind, ControlInstruction, ControlOp
from .writer import Writer

logger = logging.getLogger(__name__)


class ControlFlowError(ValueError):
    """The instruction stream breaks the nesting or branch-depth discipline."""


@dataclass(frozen=True)
class OpenConstruct:
    kind: ConstructKind
    level: int

    @property
    def is_loop(self) -> bool:
        return self.kind == ConstructKind.LOOP


class ControlFlowEmitter:
    """Walks a flat BLOCK/LOOP/IF ... END stream and emits it through *edition*."""

    def __init__(self, edition: Edition, writer: Writer, declare_branch_state: bool = True):
        self._edition = edition
        self._writer = writer
        self._declare_branch_state = declare_branch_state
        self._stack: list[OpenConstruct] = []
        self._stats = EmitStats()

    # ── entry point ──────────────────────────────────────────────

    def emit(self, instructions: list[ControlInstruction]) -> EmitStats:
        self._stack = []
        self._stats = EmitStats()
        if self._declare_branch_state:
            self._edition.declare_branch_state(self._writer)

        for index, inst in enumerate(instructions):
            self._emit_one(index, inst)

        if self._stack:
            open_kinds = ", ".join(c.kind.value.lower() for c in self._stack)
            raise ControlFlowError(
                f"{len(self._stack)} construct(s) left open at end of stream: {open_kinds}"
            )
        logger.debug("Emitted control flow: %s", self._stats.report())
        return self._stats

    # ── dispatch ─────────────────────────────────────────────────

    def _emit_one(self, index: int, inst: ControlInstruction):
        op = inst.op
        if op in OPENERS:
            self._open(index, inst)
        elif op == ControlOp.END:
            self._close(index)
        elif op == ControlOp.BR:
            self._branch(*self._resolve_branch(index, inst))
        elif op == ControlOp.BR_IF:
            cond = self._require_condition(index, inst)
            target = self._resolve_branch(index, inst)
            self._edition.start_branch_guard(cond, self._writer)
            self._branch(*target)
            self._edition.end_branch_guard(self._writer)
        elif op == ControlOp.CODE:
            self._code(inst)

    def _open(self, index: int, inst: ControlInstruction):
        kind = OPENERS[inst.op]
        level = len(self._stack)
        logger.debug("#%d: open %s at level %d", index, kind.value.lower(), level)

        if kind == ConstructKind.BLOCK:
            self._edition.start_block(self._writer)
        elif kind == ConstructKind.LOOP:
            self._edition.start_loop(level, self._writer)
        else:
            cond = self._require_condition(index, inst)
            self._edition.start_if(cond, self._writer)

        self._stack.append(OpenConstruct(kind=kind, level=level))
        self._stats.constructs += 1
        self._stats.max_level = max(self._stats.max_level, level)

    def _close(self, index: int):
        if not self._stack:
            raise ControlFlowError(f"#{index}: 'end' with no open construct")
        construct = self._stack.pop()
        logger.debug(
            "#%d: close %s at level %d", index, construct.kind.value.lower(), construct.level
        )

        if construct.kind == ConstructKind.BLOCK:
            self._edition.end_block(construct.level, self._writer)
        elif construct.kind == ConstructKind.LOOP:
            self._edition.end_loop(self._writer)
        else:
            self._edition.end_if(construct.level, self._writer)

        # First point in the parent's body an unwinding branch reaches.
        if self._stack:
            parent = self._stack[-1]
            self._edition.branch_target_check(parent.level, parent.is_loop, self._writer)

    def _resolve_branch(self, index: int, inst: ControlInstruction) -> tuple[int, int, bool]:
        """Return ``(level, up, is_loop)`` for a branch at the current position."""
        if not self._stack:
            raise ControlFlowError(f"#{index}: '{inst}' outside any construct")
        level = len(self._stack) - 1
        up = inst.depth
        if up < 0 or up > level:
            raise ControlFlowError(
                f"#{index}: '{inst}' branch depth {up} out of range at level {level}"
            )
        return level, up, self._stack[level - up].is_loop

    def _branch(self, level: int, up: int, is_loop: bool):
        self._edition.branch_to_level(level, up, is_loop, self._writer)
        self._stats.branches += 1

    def _code(self, inst: ControlInstruction):
        for line in (inst.text or "").splitlines():
            self._writer.writeln(line)
            self._stats.lines_of_code += 1

    def _require_condition(self, index: int, inst: ControlInstruction) -> str:
        if not inst.condition:
            raise ControlFlowError(f"#{index}: '{inst.op.value.lower()}' needs a condition")
        return inst.condition


def emit_control_flow(
    instructions: list[ControlInstruction],
    edition: Edition,
    writer: Writer,
    declare_branch_state: bool = True,
) -> EmitStats:
    """Emit *instructions* through *edition* into *writer*.

    Raises ``ControlFlowError`` on a malformed stream and lets any
    ``OSError`` from *writer* propagate unchanged.
    """
    emitter = ControlFlowEmitter(edition, writer, declare_branch_state)
    return emitter.emit(instructions)
