"""Pure functions for computing statistics over control instruction lists."""

from __future__ import annotations

from collections import Counter

from luaflow.ir import OPENERS, ControlInstruction, ControlOp


def count_ops(instructions: list[ControlInstruction]) -> dict[str, int]:
    """Return a frequency map of op names in the given instruction list.

    Args:
        instructions: A list of control instructions.

    Returns:
        A dict mapping op name strings to their occurrence counts.
        Empty dict for an empty input list.
    """
    return dict(Counter(inst.op.value for inst in instructions))


def max_nesting(instructions: list[ControlInstruction]) -> int:
    """Return the deepest number of simultaneously open constructs.

    Unbalanced streams are measured as written; an ``END`` with nothing
    open does not drive the depth below zero.
    """
    depth = 0
    deepest = 0
    for inst in instructions:
        if inst.op in OPENERS:
            depth += 1
            deepest = max(deepest, depth)
        elif inst.op == ControlOp.END:
            depth = max(depth - 1, 0)
    return deepest
