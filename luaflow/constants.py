"""Named constants: the generated-output conventions shared by every edition."""

from __future__ import annotations

RUNTIME_LUAJIT = "luajit"
RUNTIME_LUAU = "luau"

DEFAULT_RUNTIME = RUNTIME_LUAJIT

LABEL_PREFIX = "continue_at_"
LABEL_TEMPLATE = "::" + LABEL_PREFIX + "{level}::"
GOTO_TEMPLATE = "goto " + LABEL_PREFIX + "{level}"

SENTINEL_VAR = "desired"

TRUTHY_TEMPLATE = "{cond} ~= 0"

LUAJIT_I64_SUFFIX = "LL"
LUAU_I64_SUFFIX = ""

GRAMMAR_FOR_RUNTIME: dict[str, str] = {
    RUNTIME_LUAJIT: "lua",
    RUNTIME_LUAU: "luau",
}
