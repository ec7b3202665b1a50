"""Tests for the built-in predicates and the predicate chain."""

import pytest

from wordlist_forge.config.builder import build_filter_spec
from wordlist_forge.pipeline.context import Decision
from wordlist_forge.stages.impl import (
    CharClassGate,
    EntropyGate,
    LengthGate,
    RegexExclude,
    RegexInclude,
    WhitespaceGate,
)
from wordlist_forge.stages.registry import Evaluator, evaluate, make_predicates
from wordlist_forge.utils.regex import compile_posix


class TestLengthGate:
    """Test cases for LengthGate."""

    def test_bounds_are_inclusive(self) -> None:
        gate = LengthGate(min_length=3, max_length=5)

        assert gate("abc")
        assert gate("abcde")
        assert gate.apply("ab") == Decision(False, "length_gate", "TOO_SHORT")
        assert gate.apply("abcdef") == Decision(False, "length_gate", "TOO_LONG")

    def test_counts_characters_not_bytes(self) -> None:
        """Test that a 4-character UTF-8 word is 4 long, not 8."""
        assert LengthGate(max_length=4)("ééé!")

    def test_single_bound(self) -> None:
        assert LengthGate(min_length=2)("a" * 1000)
        assert not LengthGate(max_length=0)("a")
        assert LengthGate(max_length=0)("")


class TestCharClassGate:
    """Test cases for CharClassGate."""

    def test_min_bounds(self) -> None:
        gate = CharClassGate(min_digits=1, min_special=1)

        assert gate("Pass1!")
        assert gate.apply("password").reason_code == "TOO_FEW_DIGITS"
        assert gate.apply("pass1").reason_code == "TOO_FEW_SPECIAL"

    def test_max_bounds(self) -> None:
        gate = CharClassGate(max_upper=1, max_lower=3)

        assert gate("Abc1")
        assert gate.apply("ABc").reason_code == "TOO_MANY_UPPER"
        assert gate.apply("abcd").reason_code == "TOO_MANY_LOWER"

    def test_zero_max_forbids_class(self) -> None:
        gate = CharClassGate(max_digits=0)

        assert gate("letters")
        assert not gate("l3tters")

    def test_unset_bounds_are_ignored(self) -> None:
        gate = CharClassGate(min_digits=None, max_digits=None, min_upper=1)

        assert gate.bounds == {"upper": (1, None)}
        assert gate("A")


class TestEntropyGate:
    """Test cases for EntropyGate."""

    def test_min_entropy(self) -> None:
        gate = EntropyGate(min_entropy=1.0)

        assert gate("ab")
        assert gate.apply("aaaa").reason_code == "ENTROPY_TOO_LOW"

    def test_max_entropy(self) -> None:
        gate = EntropyGate(max_entropy=2.0)

        assert gate("abcd")
        assert gate.apply("abcdefgh").reason_code == "ENTROPY_TOO_HIGH"

    def test_empty_line_has_zero_entropy(self) -> None:
        assert EntropyGate(max_entropy=0.0)("")
        assert not EntropyGate(min_entropy=0.1)("")


class TestRegexAndWhitespace:
    """Test cases for the regex and whitespace predicates."""

    def test_include(self) -> None:
        gate = RegexInclude(compile_posix("^[[:upper:]]"))

        assert gate("Password")
        assert gate.apply("password") == Decision(False, "regex_include", "REGEX_NO_MATCH")

    def test_exclude(self) -> None:
        gate = RegexExclude(compile_posix("[[:space:]]"))

        assert gate("password")
        assert gate.apply("pass word").reason_code == "REGEX_EXCLUDED"

    def test_require_whitespace(self) -> None:
        gate = WhitespaceGate(require=True)

        assert gate("correct horse")
        assert gate.apply("correcthorse").reason_code == "WHITESPACE_MISSING"

    def test_forbid_whitespace(self) -> None:
        gate = WhitespaceGate(require=False)

        assert gate("correcthorse")
        assert gate.apply("correct\thorse").reason_code == "WHITESPACE_PRESENT"


class TestEvaluator:
    """Test cases for make_predicates, Evaluator and evaluate."""

    def test_empty_spec_accepts_everything(self) -> None:
        spec = build_filter_spec()

        assert make_predicates(spec) == []
        for line in ["", " ", "anything at all", "\x00"]:
            assert evaluate(line, spec)

    def test_only_configured_predicates_are_built(self) -> None:
        spec = build_filter_spec(min_length=6, min_digits=1, regex_exclude="^admin")

        assert Evaluator.from_spec(spec).names == ["length_gate", "char_class_gate", "regex_exclude"]

    def test_all_predicates_order(self) -> None:
        spec = build_filter_spec(
            min_length=1, whitespace_policy="forbid", min_upper=0,
            regex_include=".", regex_exclude="x", max_entropy=10,
        )

        assert Evaluator.from_spec(spec).names == [
            "length_gate", "whitespace_gate", "char_class_gate",
            "regex_include", "regex_exclude", "entropy_gate",
        ]

    def test_combined_filter(self) -> None:
        """Test min length 6, at least one digit and one special character."""
        spec = build_filter_spec(min_length=6, min_digits=1, min_special=1)
        words = ["Pass1!", "password", "P@ssw0rd123", "abc"]

        assert [w for w in words if evaluate(w, spec)] == ["Pass1!", "P@ssw0rd123"]

    def test_decide_reports_first_rejection(self) -> None:
        evaluator = Evaluator.from_spec(build_filter_spec(min_length=6, min_digits=1))

        rejected, made = evaluator.decide("abc")
        assert rejected == Decision(False, "length_gate", "TOO_SHORT")
        assert made == [rejected]

        rejected, made = evaluator.decide("abcdefg")
        assert rejected.stage == "char_class_gate"
        assert [d.accepted for d in made] == [True, False]

        rejected, made = evaluator.decide("abcdef1")
        assert rejected is None
        assert len(made) == 2

    @pytest.mark.parametrize("line", ["Pass1!", "password", "P@ssw0rd123", "abc", ""])
    def test_evaluate_is_deterministic(self, line: str) -> None:
        spec = build_filter_spec(min_length=4, max_entropy=3.0, regex_include="[[:lower:]]")

        assert evaluate(line, spec) == evaluate(line, spec)

    def test_and_semantics(self) -> None:
        """Test that a line passes the chain iff it passes every predicate on its own."""
        spec = build_filter_spec(min_length=4, max_upper=1, regex_exclude="[0-9]$", min_entropy=1.5)
        preds = make_predicates(spec)

        for line in ["Pass", "PAss", "pass1", "aaaa", "abcde", "Ab"]:
            assert evaluate(line, spec) == all(p(line) for p in preds)
