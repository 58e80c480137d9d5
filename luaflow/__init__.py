"""Structured control-flow emission for WebAssembly-to-Lua backends."""

from .edition import (  # noqa: F401
    Edition,
    GotoEdition,
    SentinelEdition,
    get_edition,
    SUPPORTED_EDITIONS,
)
from .api import (  # noqa: F401
    lower_control_flow,
    write_control_flow,
    load_instructions,
    dump_ir,
    ir_stats,
    check_emitted_syntax,
)
