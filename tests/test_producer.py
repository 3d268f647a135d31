"""Tests for lazy chunk production and eager splitting."""

import pytest

from chunk_splitter import (
    ChunkIterator,
    ChunkResult,
    ChunkStrategy,
    SplitOptions,
    get_chunk,
    iterate_chunks,
    split,
)


def _spans(chunks):
    return [(c.text, c.start, c.end) for c in chunks]


class TestCharacterStrategy:
    """Tests for the default character-window strategy."""

    def test_fixed_size_windows(self):
        chunks = split(["abcdefgh"], {'chunk_size': 3, 'chunk_overlap': 0})

        assert _spans(chunks) == [
            (["abc"], 0, 3), (["def"], 3, 6), (["gh"], 6, 8),
        ]

    def test_offsets_continue_across_segments(self):
        chunks = split(["abc", "defgh"], {'chunk_size': 2})

        assert _spans(chunks) == [
            (["ab"], 0, 2), (["c"], 2, 3), (["de"], 3, 5), (["fg"], 5, 7), (["h"], 7, 8),
        ]

    def test_defaults_keep_short_text_whole(self):
        assert _spans(split(["hello world"])) == [(["hello world"], 0, 11)]

    def test_unicode_offsets_are_code_points(self):
        chunks = split(["héllo wörld", "😀😀😀"], {'chunk_size': 4})

        assert chunks[-1].end == 14
        assert [c.text[0] for c in chunks] == ["héll", "o wö", "rld", "😀😀😀"]

    def test_overlap_between_chunks(self):
        chunks = split(["abcdefghij"], SplitOptions(chunk_size=4, chunk_overlap=1))

        assert [c.text[0] for c in chunks] == ["abcd", "defg", "ghij"]


class TestEmptySegments:
    """Tests for empty segment position preservation."""

    def test_single_empty_segment(self):
        assert split([""], {}) == [ChunkResult(text=[""], start=0, end=0)]

    def test_empty_segment_between_others(self):
        chunks = split(["abc", "", "de"], {'chunk_size': 10})

        assert _spans(chunks) == [(["abc"], 0, 3), ([""], 3, 3), (["de"], 3, 5)]

    def test_empty_segment_under_paragraph_strategy(self):
        chunks = split(["a\n\nb", "", "c"], {'chunk_strategy': 'paragraph'})

        assert _spans(chunks) == [
            (["a"], 0, 1), (["b"], 3, 4), ([""], 4, 4), (["c"], 4, 5),
        ]

    def test_no_segments(self):
        assert split([]) == []


class TestParagraphStrategy:
    """Tests for paragraph extraction and packing in the producer."""

    TEXT = "para one.\n\npara two is longer and alone."

    def test_fitting_units_are_emitted_verbatim(self):
        chunks = split([self.TEXT], {'chunk_strategy': ChunkStrategy.PARAGRAPH, 'chunk_size': 100})

        assert _spans(chunks) == [
            (["para one."], 0, 9),
            (["para two is longer and alone."], 11, 40),
        ]

    def test_units_too_large_together_are_packed_separately(self):
        chunks = split([self.TEXT], {'chunk_strategy': 'paragraph', 'chunk_size': 30})

        assert _spans(chunks) == [
            (["para one."], 0, 9),
            (["para two is longer and alone."], 11, 40),
        ]

    def test_packing_joins_units(self):
        chunks = split(["aaa\n\nbbb\n\nccc"], {'chunk_strategy': 'paragraph', 'chunk_size': 8})

        assert _spans(chunks) == [(["aaa\n\nbbb"], 0, 8), (["ccc"], 10, 13)]

    def test_offsets_are_rebased_per_segment(self):
        segments = ["ab", "x\n\ny"]

        chunks = split(segments, {'chunk_strategy': 'paragraph'})

        assert _spans(chunks) == [(["ab"], 0, 2), (["x"], 2, 3), (["y"], 5, 6)]
        for chunk in chunks:
            assert get_chunk(segments, chunk.start, chunk.end) == chunk.text

    def test_whitespace_only_segment_emits_nothing(self):
        chunks = split(["ab", "   ", "cd"], {'chunk_strategy': 'paragraph'})

        assert _spans(chunks) == [(["ab"], 0, 2), (["cd"], 5, 7)]

    def test_units_measured_once(self, counting_length):
        options = {'chunk_strategy': 'paragraph', 'chunk_size': 1, 'length_function': counting_length}

        chunks = split(["a\n\nb\n\nc"], options)

        assert [c.text[0] for c in chunks] == ["a", "b", "c"]
        assert sorted(counting_length.calls) == ["\n\n", "a", "b", "c"]


class TestChunkIterator:
    """Tests for the pull-based producer."""

    def test_consumes_segments_lazily(self):
        iterator = iterate_chunks(["abcd", "efgh"], {'chunk_size': 2})

        first = iterator.pull()

        assert first == ChunkResult(text=["ab"], start=0, end=2)
        assert iterator.global_offset == 4
        assert iterator.pull() == ChunkResult(text=["cd"], start=2, end=4)
        assert iterator.global_offset == 4

    def test_exhaustion_is_idempotent(self):
        iterator = ChunkIterator(["ab"])

        assert iterator.pull() is not None
        assert iterator.pull() is None
        assert iterator.pull() is None

    def test_trailing_whitespace_segments_end_the_stream(self):
        iterator = iterate_chunks(["ab", "  ", "\n\n\n"], {'chunk_strategy': 'paragraph'})

        assert iterator.pull() == ChunkResult(text=["ab"], start=0, end=2)
        assert iterator.pull() is None
        assert iterator.global_offset == 7

    def test_python_iteration(self):
        iterator = iterate_chunks(["abc"], {'chunk_size': 2})

        assert [c.text for c in iterator] == [["ab"], ["c"]]
        with pytest.raises(StopIteration):
            next(iterator)

    def test_input_list_is_not_mutated(self):
        segments = ["abc", "def"]

        split(segments, {'chunk_size': 2})

        assert segments == ["abc", "def"]

    def test_length_function_errors_propagate(self):
        def broken(text):
            raise RuntimeError("tokenizer unavailable")

        iterator = iterate_chunks(["abc"], {'length_function': broken})

        with pytest.raises(RuntimeError, match="tokenizer unavailable"):
            iterator.pull()


class TestRangeRoundTrip:
    """Every character chunk maps back to its text through get_chunk."""

    @pytest.mark.parametrize("segments,options", [
        (["abcdefgh"], {'chunk_size': 3}),
        (["abc", "def", "gh"], {'chunk_size': 2, 'chunk_overlap': 1}),
        (["lorem ipsum ", "", "dolor sit amet, consectetur"], {'chunk_size': 5, 'chunk_overlap': 2}),
        (["naïve café", "😀 emoji 😀"], {'chunk_size': 4, 'chunk_overlap': 1}),
    ])
    def test_round_trip(self, segments, options):
        chunks = split(segments, options)

        for chunk in chunks:
            assert "".join(get_chunk(segments, chunk.start, chunk.end)) == "".join(chunk.text)

    def test_chunks_cover_input(self):
        segments = ["The quick brown fox ", "jumps over ", "the lazy dog"]
        total = sum(len(s) for s in segments)

        chunks = split(segments, {'chunk_size': 6, 'chunk_overlap': 2})

        covered = set()
        for chunk in chunks:
            covered.update(range(chunk.start, chunk.end))
        assert covered == set(range(total))
