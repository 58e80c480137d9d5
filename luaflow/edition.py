"""Runtime editions: how structured control flow is spelled in each Lua dialect.

Two interchangeable strategies implement one contract:

* ``GotoEdition`` (LuaJIT) places a ``::continue_at_<level>::`` label at each
  construct's exit (or, for loops, at its top) and branches with ``goto``.
* ``SentinelEdition`` (Luau) has no ``goto``.  Every construct is wrapped in a
  single-iteration ``while true do`` so ``break``/``continue`` can leave or
  restart it, and a branch that crosses more than one wrapper stores its
  destination level in the shared ``desired`` local and breaks; each enclosing
  wrapper's check relays the unwind until the destination level consumes it.

Editions hold no state.  Every method is a straight sequence of
``writer.writeln`` calls; an ``OSError`` from the writer escapes immediately.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .writer import Writer
from . import constants


def _truthy(cond: str) -> str:
    return constants.TRUTHY_TEMPLATE.format(cond=cond)


class Edition(ABC):
    """Target-dialect strategy for structured control flow."""

    @abstractmethod
    def identify(self) -> str:
        """Runtime name, used to pick the matching expression emitter and boilerplate."""
        ...

    # ── constructs ───────────────────────────────────────────────

    @abstractmethod
    def start_block(self, w: Writer) -> None: ...

    @abstractmethod
    def start_loop(self, level: int, w: Writer) -> None: ...

    @abstractmethod
    def start_if(self, cond: str, w: Writer) -> None: ...

    @abstractmethod
    def end_block(self, level: int, w: Writer) -> None: ...

    @abstractmethod
    def end_loop(self, w: Writer) -> None: ...

    @abstractmethod
    def end_if(self, level: int, w: Writer) -> None: ...

    # ── branches ─────────────────────────────────────────────────

    @abstractmethod
    def branch_target_check(self, level: int, in_loop: bool, w: Writer) -> None:
        """Consume or relay an in-flight branch at a potential landing site."""
        ...

    @abstractmethod
    def branch_to_level(self, level: int, up: int, is_loop: bool, w: Writer) -> None:
        """Jump from a site at *level* to the construct *up* levels outward."""
        ...

    def declare_branch_state(self, w: Writer) -> None:
        """Declare whatever per-function state branches need.  Default: none."""

    def start_branch_guard(self, cond: str, w: Writer) -> None:
        """Open a plain conditional around a conditional branch.

        Unlike ``start_if`` this is not a branch target and adds no wrapper,
        so the branch inside it still leaves the enclosing construct.
        """
        w.writeln(f"if {_truthy(cond)} then")

    def end_branch_guard(self, w: Writer) -> None:
        w.writeln("end")

    # ── literals ─────────────────────────────────────────────────

    @abstractmethod
    def format_i64(self, value: int) -> str: ...


class GotoEdition(Edition):
    """LuaJIT: labeled ``goto`` straight to the destination construct."""

    def identify(self) -> str:
        return constants.RUNTIME_LUAJIT

    def start_block(self, w: Writer) -> None:
        w.writeln("do")

    def start_loop(self, level: int, w: Writer) -> None:
        # Repeat point sits at the top, so `goto` to a loop's level restarts it.
        w.writeln("do")
        w.writeln(constants.LABEL_TEMPLATE.format(level=level))

    def start_if(self, cond: str, w: Writer) -> None:
        w.writeln(f"if {_truthy(cond)} then")

    def end_block(self, level: int, w: Writer) -> None:
        w.writeln(constants.LABEL_TEMPLATE.format(level=level))
        w.writeln("end")

    def end_loop(self, w: Writer) -> None:
        # No exit label: a branch aimed at a loop always restarts it.
        w.writeln("end")

    def end_if(self, level: int, w: Writer) -> None:
        w.writeln(constants.LABEL_TEMPLATE.format(level=level))
        w.writeln("end")

    def branch_target_check(self, level: int, in_loop: bool, w: Writer) -> None:
        pass

    def branch_to_level(self, level: int, up: int, is_loop: bool, w: Writer) -> None:
        w.writeln(constants.GOTO_TEMPLATE.format(level=level - up))

    def format_i64(self, value: int) -> str:
        return f"{value}{constants.LUAJIT_I64_SUFFIX}"


class SentinelEdition(Edition):
    """Luau: single-iteration ``while`` wrappers plus the ``desired`` sentinel."""

    def identify(self) -> str:
        return constants.RUNTIME_LUAU

    def declare_branch_state(self, w: Writer) -> None:
        w.writeln(f"local {constants.SENTINEL_VAR}")

    def start_block(self, w: Writer) -> None:
        w.writeln("while true do")

    def start_loop(self, level: int, w: Writer) -> None:
        w.writeln("while true do")

    def start_if(self, cond: str, w: Writer) -> None:
        w.writeln("while true do")
        w.writeln(f"if {_truthy(cond)} then")

    def end_block(self, level: int, w: Writer) -> None:
        w.writeln("break")
        w.writeln("end")

    def end_loop(self, w: Writer) -> None:
        w.writeln("break")
        w.writeln("end")

    def end_if(self, level: int, w: Writer) -> None:
        w.writeln("end")
        w.writeln("break")
        w.writeln("end")

    def branch_target_check(self, level: int, in_loop: bool, w: Writer) -> None:
        sentinel = constants.SENTINEL_VAR
        w.writeln(f"if {sentinel} then")
        w.writeln(f"if {sentinel} == {level} then")
        w.writeln(f"{sentinel} = nil")
        if in_loop:
            w.writeln("continue")
        w.writeln("end")
        # Landed or not, this wrapper stops: a landed block exits, a passing
        # branch keeps unwinding.
        w.writeln("break")
        w.writeln("end")

    def branch_to_level(self, level: int, up: int, is_loop: bool, w: Writer) -> None:
        # `do ... end` keeps break/continue the last statement of its block.
        w.writeln("do")
        if up == 0:
            w.writeln("continue" if is_loop else "break")
        else:
            w.writeln(f"{constants.SENTINEL_VAR} = {level - up}")
            w.writeln("break")
        w.writeln("end")

    def format_i64(self, value: int) -> str:
        return f"{value}{constants.LUAU_I64_SUFFIX}"


_EDITION_CLASSES: dict[str, type[Edition]] = {
    constants.RUNTIME_LUAJIT: GotoEdition,
    constants.RUNTIME_LUAU: SentinelEdition,
}

SUPPORTED_EDITIONS: tuple[str, ...] = tuple(_EDITION_CLASSES.keys())


def get_edition(runtime: str = constants.DEFAULT_RUNTIME) -> Edition:
    """Instantiate the edition for *runtime* (``"luajit"`` or ``"luau"``).

    Raises ``ValueError`` if *runtime* has no registered edition.
    """
    cls = _EDITION_CLASSES.get(runtime)
    if cls is None:
        raise ValueError(
            f"Unknown runtime edition: {runtime!r}. Known editions: {list(SUPPORTED_EDITIONS)}"
        )
    return cls()
