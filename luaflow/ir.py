"""IR Design: flat structured-control instruction stream (WebAssembly style)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ControlOp(str, Enum):
    # Construct openers
    BLOCK = "BLOCK"
    LOOP = "LOOP"
    IF = "IF"
    # Construct closer
    END = "END"
    # Branches (relative depth)
    BR = "BR"
    BR_IF = "BR_IF"
    # Opaque body code from the expression emitter
    CODE = "CODE"


class ConstructKind(str, Enum):
    BLOCK = "BLOCK"
    LOOP = "LOOP"
    IF = "IF"


OPENERS: dict[ControlOp, ConstructKind] = {
    ControlOp.BLOCK: ConstructKind.BLOCK,
    ControlOp.LOOP: ConstructKind.LOOP,
    ControlOp.IF: ConstructKind.IF,
}

BRANCHES: frozenset[ControlOp] = frozenset({ControlOp.BR, ControlOp.BR_IF})


class ControlInstruction(BaseModel):
    op: ControlOp
    depth: int = 0  # relative branch depth for BR / BR_IF
    condition: str | None = None  # for IF / BR_IF
    text: str | None = None  # for CODE

    def __str__(self) -> str:
        name = self.op.value.lower()
        if self.op == ControlOp.CODE:
            return f"{name} {self.text!r}"
        parts = [name]
        if self.op in BRANCHES:
            parts.append(str(self.depth))
        if self.condition is not None:
            parts.append(self.condition)
        return " ".join(parts)
