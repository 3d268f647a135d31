"""Tests for paragraph unit extraction and the fit check."""

from chunk_splitter.splitter.units import ChunkUnit, ChunkResult, get_units, can_fit_all_units


class TestGetUnits:
    """Tests for paragraph unit extraction."""

    def test_splits_on_blank_lines(self):
        units = get_units("para one.\n\npara two")

        assert units == [
            ChunkUnit(text="para one.", start=0, end=9),
            ChunkUnit(text="para two", start=11, end=19),
        ]

    def test_offsets_bound_unstripped_span(self):
        """Stripping only changes text; offsets keep the surrounding whitespace."""
        units = get_units("  a  \n\n\n b \n\n   \n\n")

        assert units == [
            ChunkUnit(text="a", start=0, end=5),
            ChunkUnit(text="b", start=8, end=11),
        ]

    def test_single_newline_is_not_a_break(self):
        units = get_units("line1\nline2")

        assert units == [ChunkUnit(text="line1\nline2", start=0, end=11)]

    def test_leading_break_is_skipped(self):
        assert get_units("\n\nabc") == [ChunkUnit(text="abc", start=2, end=5)]

    def test_whitespace_only_yields_nothing(self):
        assert get_units("   ") == []
        assert get_units("\n\n\n") == []

    def test_offsets_are_code_points(self):
        units = get_units("héllo\n\nwörld")

        assert units[1] == ChunkUnit(text="wörld", start=7, end=12)


class TestCanFitAllUnits:
    """Tests for the paragraph fit gate."""

    def test_fits_with_joiners(self):
        assert can_fit_all_units([3, 3], 2, 8)

    def test_joined_total_too_long(self):
        assert not can_fit_all_units([3, 3], 2, 7)

    def test_single_unit_too_long(self):
        assert not can_fit_all_units([9], 2, 8)

    def test_no_units_fit(self):
        assert can_fit_all_units([], 2, 8)


def test_chunk_result_to_dict():
    result = ChunkResult(text=["abc"], start=3, end=6)

    assert result.to_dict() == {'text': ['abc'], 'start': 3, 'end': 6}
