"""Tests for core.replacement.substitution — single-pass rebuild and invariants."""

from __future__ import annotations

import random

import pytest

from core.replacement.errors import ConsistencyError
from core.replacement.resolver import Match, find_matches
from core.replacement.substitution import apply_matches


class TestApplyMatches:
    def test_scenario_single_term(self):
        text = "公司决定裁员以降低成本"
        trace = apply_matches(text, find_matches(text, [("裁员", "优化人员结构")]))
        assert trace.replaced_text == "公司决定优化人员结构以降低成本"
        assert trace.count == 1

    def test_scenario_overlap(self):
        text = "贿赂官员"
        trace = apply_matches(text, find_matches(text, [("贿赂", "礼品"), ("贿赂官员", "商业往来")]))
        assert trace.replaced_text == "商业往来"

    def test_scenario_no_match(self):
        trace = apply_matches("正常文本", find_matches("正常文本", [("敏感词", "X")]))
        assert trace.replaced_text == "正常文本"
        assert trace.count == 0

    def test_scenario_adjacent(self):
        trace = apply_matches("AABB", find_matches("AABB", [("AA", "11"), ("BB", "22")]))
        assert trace.replaced_text == "1122"

    def test_positions_stay_in_original_space(self):
        text = "a foo b foo"
        matches = find_matches(text, [("foo", "longer-word")])
        trace = apply_matches(text, matches)
        assert [m.position for m in trace.matches] == [2, 8]
        assert trace.text == text

    def test_empty_substitute_deletes(self):
        text = "remove THIS please"
        trace = apply_matches(text, find_matches(text, [("THIS ", "")]))
        assert trace.replaced_text == "remove please"

    def test_substitute_containing_other_term_not_rescanned(self):
        # The substitute of the first term must not be replaced again
        text = "cat"
        trace = apply_matches(text, find_matches(text, [("cat", "dog"), ("dog", "wolf")]))
        assert trace.replaced_text == "dog"

    def test_empty_text(self):
        trace = apply_matches("", [])
        assert trace.replaced_text == ""
        assert trace.matches == ()


class TestConsistencyFaults:
    def test_overlapping_matches_rejected(self):
        with pytest.raises(ConsistencyError):
            apply_matches("abcd", [Match("abc", "x", 0), Match("cd", "y", 2)])

    def test_unsorted_matches_rejected(self):
        with pytest.raises(ConsistencyError):
            apply_matches("ab cd", [Match("cd", "y", 3), Match("ab", "x", 0)])

    def test_stale_position_rejected(self):
        with pytest.raises(ConsistencyError):
            apply_matches("xxab", [Match("ab", "z", 0)])

    def test_past_end_rejected(self):
        with pytest.raises(ConsistencyError):
            apply_matches("ab", [Match("abc", "z", 0)])


class TestRoundTrip:
    @pytest.mark.parametrize("seed", range(30))
    def test_reconstruction_and_length(self, seed: int):
        rng = random.Random(seed)
        text = "".join(rng.choice("xyz\n") for _ in range(rng.randint(0, 50)))
        terms = [("xy", "A"), ("yz", ""), ("zzx", "LONGER"), ("x", "xx")]
        matches = find_matches(text, terms)
        trace = apply_matches(text, matches)

        expected_len = len(text) + sum(len(m.substitute) - m.length for m in matches)
        assert len(trace.replaced_text) == expected_len

        rebuilt = []
        cursor = 0
        for m in trace.matches:
            assert text[m.position:m.end] == m.original
            rebuilt.append(text[cursor:m.position])
            rebuilt.append(m.substitute)
            cursor = m.end
        rebuilt.append(text[cursor:])
        assert "".join(rebuilt) == trace.replaced_text
