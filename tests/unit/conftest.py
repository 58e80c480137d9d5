"""Shared helpers for the edition and walker test suites."""

from __future__ import annotations

from typing import Callable

from luaflow.ir import ControlInstruction, ControlOp
from luaflow.writer import StringWriter, Writer


class FailingWriter(Writer):
    """Accepts *fail_after* writes, then raises OSError on every later write."""

    def __init__(self, fail_after: int):
        self.fail_after = fail_after
        self.written: list[str] = []

    def write(self, text: str) -> None:
        if len(self.written) >= self.fail_after:
            raise OSError("disk full")
        self.written.append(text)


def lines_of(emit: Callable[[Writer], None]) -> list[str]:
    """Run one edition call against a fresh buffer and return its lines."""
    w = StringWriter()
    emit(w)
    return w.getvalue().splitlines()


def block() -> ControlInstruction:
    return ControlInstruction(op=ControlOp.BLOCK)


def loop() -> ControlInstruction:
    return ControlInstruction(op=ControlOp.LOOP)


def if_(cond: str) -> ControlInstruction:
    return ControlInstruction(op=ControlOp.IF, condition=cond)


def end() -> ControlInstruction:
    return ControlInstruction(op=ControlOp.END)


def br(depth: int) -> ControlInstruction:
    return ControlInstruction(op=ControlOp.BR, depth=depth)


def br_if(depth: int, cond: str) -> ControlInstruction:
    return ControlInstruction(op=ControlOp.BR_IF, depth=depth, condition=cond)


def code(text: str) -> ControlInstruction:
    return ControlInstruction(op=ControlOp.CODE, text=text)
