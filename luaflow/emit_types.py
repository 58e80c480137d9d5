"""Emission pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class EmitConfig:
    """Groups emission configuration for one compilation unit."""

    runtime: str = constants.DEFAULT_RUNTIME
    declare_branch_state: bool = True


@dataclass
class EmitStats:
    """Returned metrics from a walker run."""

    constructs: int = 0
    branches: int = 0
    max_level: int = -1
    lines_of_code: int = 0

    def report(self) -> str:
        deepest = "none" if self.max_level < 0 else str(self.max_level)
        return (
            f"{self.constructs} constructs, {self.branches} branches,"
            f" deepest level {deepest}, {self.lines_of_code} code lines"
        )
