"""Tests for output naming and partitioners."""

import io
import os

import pytest

from wordlist_forge.config.filter_spec import PctSplit, SingleOutput, SizeSplit
from wordlist_forge.errors import ConflictRequiresConfirmation, WriteFailure
from wordlist_forge.output_layout import existing_parts, part_path
from wordlist_forge.pipeline.context import STDOUT_NAME
from wordlist_forge.pipeline.stream import BufferedLines, StreamingLines
from wordlist_forge.writers.pct_split import PctSplitPartitioner, actual_percentage, allocate_counts
from wordlist_forge.writers.registry import get_partitioner, list_partitioners
from wordlist_forge.writers.single import SinglePartitioner
from wordlist_forge.writers.size_split import SizeSplitPartitioner


def _stream(lines):
    return StreamingLines(iter(lines))


def _read_lines(path) -> list:
    with open(path, "rb") as f:
        return f.read().decode("utf-8").splitlines()


class TestPartNaming:
    """Test cases for split artifact names."""

    @pytest.mark.parametrize(
        ("path", "index", "expected"),
        [
            ("words.txt", 1, "words_part_01.txt"),
            ("words", 2, "words_part_02"),
            ("out/list.tar.gz", 10, "out/list.tar_part_10.gz"),
            ("words.txt", 123, "words_part_123.txt"),
        ],
    )
    def test_part_path(self, path: str, index: int, expected: str) -> None:
        assert part_path(path, index) == expected

    def test_existing_parts(self, tmp_path) -> None:
        out = tmp_path / "w.txt"
        for name in ("w_part_02.txt", "w_part_01.txt", "w.txt", "other_part_01.txt"):
            (tmp_path / name).write_text("x\n")

        assert existing_parts(str(out)) == [
            str(tmp_path / "w_part_01.txt"),
            str(tmp_path / "w_part_02.txt"),
        ]

    def test_existing_parts_needs_exact_extension_and_digits(self, tmp_path) -> None:
        """Test that parts of `words.txt` and malformed indices are not parts of `words`."""
        for name in ("words_part_01.txt", "words_part_01", "words_part_xx", "words_part_1a"):
            (tmp_path / name).write_text("x\n")

        assert existing_parts(str(tmp_path / "words")) == [str(tmp_path / "words_part_01")]
        assert existing_parts(str(tmp_path / "words.txt")) == [str(tmp_path / "words_part_01.txt")]

    def test_existing_parts_skips_directories(self, tmp_path) -> None:
        (tmp_path / "w_part_01.txt").mkdir()

        assert existing_parts(str(tmp_path / "w.txt")) == []


class TestSinglePartitioner:
    """Test cases for the single output mode."""

    def test_writes_to_stdout(self) -> None:
        buf = io.BytesIO()
        part = SinglePartitioner(SingleOutput(), stdout=buf)

        part.preflight()
        artifacts = part.write(_stream(["one", "two"]))

        assert buf.getvalue() == b"one\ntwo\n"
        assert [(a.name, a.lines, a.size_bytes) for a in artifacts] == [(STDOUT_NAME, 2, 8)]

    def test_writes_file(self, tmp_path) -> None:
        out = tmp_path / "out.txt"
        part = SinglePartitioner(SingleOutput(str(out)))

        part.preflight()
        artifacts = part.write(_stream(["alpha", "beta"]))

        assert _read_lines(out) == ["alpha", "beta"]
        assert artifacts[0].name == str(out)
        assert artifacts[0].size_bytes == os.path.getsize(out)

    def test_zero_lines_creates_empty_file(self, tmp_path) -> None:
        out = tmp_path / "out.txt"

        artifacts = SinglePartitioner(SingleOutput(str(out))).write(_stream([]))

        assert out.read_bytes() == b""
        assert artifacts[0].lines == 0


class TestPreflight:
    """Test cases for conflict and same-file checks before writing."""

    def test_existing_output_needs_confirmation(self, tmp_path) -> None:
        out = tmp_path / "out.txt"
        out.write_text("old\n")
        part = SinglePartitioner(SingleOutput(str(out)))

        with pytest.raises(ConflictRequiresConfirmation) as exc_info:
            part.preflight()
        assert exc_info.value.paths == [str(out)]
        assert exc_info.value.stage == "partition"
        assert out.read_text() == "old\n"

    def test_declined_confirmation(self, tmp_path) -> None:
        out = tmp_path / "out.txt"
        out.write_text("old\n")
        seen = []

        def decline(paths):
            seen.extend(paths)
            return False

        with pytest.raises(ConflictRequiresConfirmation):
            SinglePartitioner(SingleOutput(str(out))).preflight(confirm=decline)
        assert seen == [str(out)]

    def test_confirmed_overwrite(self, tmp_path) -> None:
        out = tmp_path / "out.txt"
        out.write_text("old\n")
        part = SinglePartitioner(SingleOutput(str(out)))

        part.preflight(confirm=lambda paths: True)
        part.write(_stream(["new"]))

        assert out.read_text() == "new\n"

    def test_confirmed_split_removes_stale_parts(self, tmp_path) -> None:
        """Test that parts from an earlier, longer run do not survive."""
        out = tmp_path / "w.txt"
        for i in (1, 2, 3):
            (tmp_path / f"w_part_0{i}.txt").write_text("old\n")
        part = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=100))

        part.preflight(confirm=lambda paths: True)
        part.write(_stream(["new"]))

        assert sorted(os.listdir(tmp_path)) == ["w_part_01.txt"]

    def test_split_without_extension_keeps_other_outputs(self, tmp_path) -> None:
        """Test that clearing parts of `words` leaves parts of `words.txt` alone."""
        (tmp_path / "words_part_01.txt").write_text("keep\n")
        (tmp_path / "words_part_01").write_text("old\n")
        part = SizeSplitPartitioner(SizeSplit(str(tmp_path / "words"), max_bytes=100))

        part.preflight(confirm=lambda paths: True)
        part.write(_stream(["new"]))

        assert sorted(os.listdir(tmp_path)) == ["words_part_01", "words_part_01.txt"]
        assert (tmp_path / "words_part_01.txt").read_text() == "keep\n"
        assert (tmp_path / "words_part_01").read_text() == "new\n"

    def test_output_same_as_input(self, tmp_path) -> None:
        path = tmp_path / "words.txt"
        path.write_text("a\n")

        with pytest.raises(WriteFailure, match="same as input") as exc_info:
            SinglePartitioner(SingleOutput(str(path))).preflight(input_path=str(path), confirm=lambda p: True)
        assert exc_info.value.stage == "partition"

    def test_input_is_an_existing_part(self, tmp_path) -> None:
        part_file = tmp_path / "w_part_01.txt"
        part_file.write_text("a\n")
        part = PctSplitPartitioner(PctSplit(str(tmp_path / "w.txt"), (50.0, 50.0)))

        with pytest.raises(WriteFailure, match="same as input"):
            part.preflight(input_path=str(part_file), confirm=lambda p: True)
        assert part_file.read_text() == "a\n"

    def test_missing_directory(self, tmp_path) -> None:
        part = SinglePartitioner(SingleOutput(str(tmp_path / "nope" / "out.txt")))

        with pytest.raises(WriteFailure, match="does not exist"):
            part.preflight()


class TestSizeSplit:
    """Test cases for SizeSplitPartitioner."""

    def test_splits_on_line_boundaries(self, tmp_path) -> None:
        out = tmp_path / "w.txt"
        words = ["aaaa", "bbbb", "cccc", "dd", "e"]

        artifacts = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=10)).write(_stream(words))

        assert [a.name for a in artifacts] == [
            str(tmp_path / "w_part_01.txt"),
            str(tmp_path / "w_part_02.txt"),
        ]
        assert [a.lines for a in artifacts] == [2, 3]
        assert [a.size_bytes for a in artifacts] == [10, 10]
        assert all(os.path.getsize(a.name) <= 10 for a in artifacts)

    def test_concatenation_equals_input(self, tmp_path) -> None:
        out = tmp_path / "w.txt"
        words = [f"word{i}" for i in range(100)]

        artifacts = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=64)).write(_stream(words))

        joined = []
        for a in artifacts:
            joined.extend(_read_lines(a.name))
        assert joined == words
        assert sum(a.lines for a in artifacts) == 100

    def test_oversized_line_gets_its_own_artifact(self, tmp_path) -> None:
        out = tmp_path / "w.txt"

        artifacts = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=4)).write(
            _stream(["ab", "muchtoolong", "cd"])
        )

        assert [a.lines for a in artifacts] == [1, 1, 1]
        assert _read_lines(artifacts[1].name) == ["muchtoolong"]

    def test_empty_input_gives_one_empty_part(self, tmp_path) -> None:
        out = tmp_path / "w.txt"

        artifacts = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=10)).write(_stream([]))

        assert len(artifacts) == 1
        assert artifacts[0].lines == 0
        assert (tmp_path / "w_part_01.txt").read_bytes() == b""

    def test_failure_reports_completed_parts(self, tmp_path) -> None:
        """Test that a write error part-way through keeps the completed artifacts."""
        out = tmp_path / "w.txt"
        (tmp_path / "w_part_02.txt").mkdir()
        part = SizeSplitPartitioner(SizeSplit(str(out), max_bytes=5))

        with pytest.raises(WriteFailure) as exc_info:
            part.write(_stream(["aaaa", "bbbb", "cccc"]))

        err = exc_info.value
        assert err.stage == "write"
        assert "w_part_02.txt" in str(err)
        assert [a.name for a in err.completed] == [str(tmp_path / "w_part_01.txt")]
        assert _read_lines(tmp_path / "w_part_01.txt") == ["aaaa"]


class TestPctSplit:
    """Test cases for percentage allocation and PctSplitPartitioner."""

    def test_allocate_exact(self) -> None:
        assert allocate_counts(10, [30, 30, 40]) == [3, 3, 4]

    def test_last_artifact_absorbs_rounding(self) -> None:
        assert allocate_counts(7, [33, 33, 34]) == [2, 2, 3]
        assert allocate_counts(3, [50, 50]) == [1, 2]
        assert allocate_counts(1, [50, 50]) == [0, 1]

    def test_counts_always_sum_to_total(self) -> None:
        for total in (0, 1, 7, 99, 1000, 12345):
            for pcts in ([100], [10] * 10, [33.33, 33.33, 33.34], [1, 1, 98], [0, 50, 50]):
                assert sum(allocate_counts(total, pcts)) == total

    def test_sum_above_100_never_overallocates(self) -> None:
        assert allocate_counts(10000, [100.01, 0]) == [10000, 0]

    def test_actual_percentage(self) -> None:
        assert actual_percentage(2, 7) == 28.6
        assert actual_percentage(3, 7) == 42.9
        assert actual_percentage(0, 0) == 0.0

    def test_writes_slices_in_order(self, tmp_path) -> None:
        out = tmp_path / "p.txt"
        words = [f"w{i}" for i in range(10)]

        artifacts = PctSplitPartitioner(PctSplit(str(out), (30.0, 30.0, 40.0))).write(BufferedLines(words))

        assert [a.lines for a in artifacts] == [3, 3, 4]
        assert [a.requested_pct for a in artifacts] == [30.0, 30.0, 40.0]
        assert [a.actual_pct for a in artifacts] == [30.0, 30.0, 40.0]
        assert _read_lines(artifacts[0].name) == ["w0", "w1", "w2"]
        assert _read_lines(artifacts[2].name) == ["w6", "w7", "w8", "w9"]

    def test_writes_without_copying_slices(self, tmp_path) -> None:
        """Test that artifacts are fed from one pass over the buffer, not list slices."""
        class NoSlices(list):
            def __getitem__(self, key):
                if isinstance(key, slice):
                    raise AssertionError("buffer was sliced")
                return super().__getitem__(key)

        out = tmp_path / "p.txt"
        words = NoSlices(f"w{i}" for i in range(5))

        artifacts = PctSplitPartitioner(PctSplit(str(out), (0.0, 100.0))).write(BufferedLines(words))

        assert [a.lines for a in artifacts] == [0, 5]
        assert _read_lines(artifacts[0].name) == []
        assert _read_lines(artifacts[1].name) == list(words)

    def test_requested_and_actual_differ(self, tmp_path) -> None:
        out = tmp_path / "p.txt"

        artifacts = PctSplitPartitioner(PctSplit(str(out), (33.0, 33.0, 34.0))).write(
            BufferedLines(list("abcdefg"))
        )

        assert [(a.requested_pct, a.actual_pct) for a in artifacts] == [
            (33.0, 28.6), (33.0, 28.6), (34.0, 42.9),
        ]

    def test_zero_line_artifacts_are_created(self, tmp_path) -> None:
        out = tmp_path / "p.txt"

        artifacts = PctSplitPartitioner(PctSplit(str(out), (50.0, 50.0))).write(StreamingLines(iter([])))

        assert [a.lines for a in artifacts] == [0, 0]
        assert [a.actual_pct for a in artifacts] == [0.0, 0.0]
        assert all(os.path.exists(a.name) for a in artifacts)


class TestRegistry:
    """Test cases for the partitioner registry."""

    def test_builtin_modes(self) -> None:
        assert list_partitioners() == ["single", "size_split", "pct_split"]

    def test_dispatch_on_kind(self) -> None:
        assert isinstance(get_partitioner(SingleOutput(), stdout=io.BytesIO()), SinglePartitioner)
        assert isinstance(get_partitioner(SizeSplit("o.txt", 10), stdout=None), SizeSplitPartitioner)
        assert isinstance(get_partitioner(PctSplit("o.txt", (100.0,))), PctSplitPartitioner)
