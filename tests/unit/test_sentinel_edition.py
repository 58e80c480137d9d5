"""Tests for SentinelEdition (Luau): single-iteration wrappers and the desired sentinel."""

import pytest

from luaflow.edition import SentinelEdition
from tests.unit.conftest import FailingWriter, lines_of

ED = SentinelEdition()


def _sentinel_assignments(lines: list[str]) -> list[str]:
    return [l for l in lines if l.startswith("desired = ") and l != "desired = nil"]


class TestIdentify:
    def test_runtime_name(self):
        assert ED.identify() == "luau"


class TestConstructs:
    def test_start_block_opens_wrapper(self):
        assert lines_of(ED.start_block) == ["while true do"]

    def test_start_loop_opens_wrapper(self):
        assert lines_of(lambda w: ED.start_loop(2, w)) == ["while true do"]

    def test_start_if_opens_wrapper_then_test(self):
        assert lines_of(lambda w: ED.start_if("reg_1", w)) == [
            "while true do",
            "if reg_1 ~= 0 then",
        ]

    def test_end_block_breaks_then_closes(self):
        assert lines_of(lambda w: ED.end_block(0, w)) == ["break", "end"]

    def test_end_loop_breaks_then_closes(self):
        assert lines_of(ED.end_loop) == ["break", "end"]

    def test_end_if_closes_test_then_wrapper(self):
        assert lines_of(lambda w: ED.end_if(1, w)) == ["end", "break", "end"]

    def test_no_labels_or_goto_anywhere(self):
        emitted = (
            lines_of(ED.start_block)
            + lines_of(lambda w: ED.start_loop(1, w))
            + lines_of(lambda w: ED.start_if("c", w))
            + lines_of(lambda w: ED.end_if(2, w))
            + lines_of(ED.end_loop)
            + lines_of(lambda w: ED.end_block(0, w))
            + lines_of(lambda w: ED.branch_to_level(2, 2, False, w))
        )
        assert not any("goto" in l or "::" in l for l in emitted)

    def test_declares_sentinel_local(self):
        assert lines_of(ED.declare_branch_state) == ["local desired"]


class TestBranchToLevel:
    def test_same_level_loop_is_pure_continue(self):
        lines = lines_of(lambda w: ED.branch_to_level(4, 0, True, w))
        assert lines == ["do", "continue", "end"]
        assert _sentinel_assignments(lines) == []

    def test_same_level_block_is_pure_break(self):
        lines = lines_of(lambda w: ED.branch_to_level(4, 0, False, w))
        assert lines == ["do", "break", "end"]
        assert _sentinel_assignments(lines) == []

    @pytest.mark.parametrize("level,up", [(1, 1), (3, 1), (3, 2), (5, 5)])
    def test_multi_level_sets_sentinel_once_then_breaks(self, level, up):
        for is_loop in (True, False):
            lines = lines_of(lambda w: ED.branch_to_level(level, up, is_loop, w))
            assert _sentinel_assignments(lines) == [f"desired = {level - up}"]
            assert lines == ["do", f"desired = {level - up}", "break", "end"]
            assert "continue" not in lines


class TestBranchTargetCheck:
    def test_loop_landing_clears_and_continues(self):
        assert lines_of(lambda w: ED.branch_target_check(2, True, w)) == [
            "if desired then",
            "if desired == 2 then",
            "desired = nil",
            "continue",
            "end",
            "break",
            "end",
        ]

    def test_block_landing_clears_without_continue(self):
        lines = lines_of(lambda w: ED.branch_target_check(0, False, w))
        assert lines == [
            "if desired then",
            "if desired == 0 then",
            "desired = nil",
            "end",
            "break",
            "end",
        ]
        assert "continue" not in lines

    def test_unmatched_sentinel_still_stops_wrapper(self):
        lines = lines_of(lambda w: ED.branch_target_check(3, True, w))
        # The break sits outside the level test, inside the "is set" test.
        assert lines.index("break") > lines.index("continue")
        assert lines[-2:] == ["break", "end"]


class TestFormatI64:
    def test_max_i64_is_bare_digits(self):
        assert ED.format_i64(9223372036854775807) == "9223372036854775807"

    def test_negative(self):
        assert ED.format_i64(-7) == "-7"


class TestSinkFailure:
    def test_check_stops_at_first_failed_write(self):
        w = FailingWriter(fail_after=2)
        with pytest.raises(OSError, match="disk full"):
            ED.branch_target_check(3, True, w)
        assert w.written == ["if desired then\n", "if desired == 3 then\n"]

    def test_branch_stops_at_first_failed_write(self):
        w = FailingWriter(fail_after=1)
        with pytest.raises(OSError):
            ED.branch_to_level(2, 1, False, w)
        assert w.written == ["do\n"]
