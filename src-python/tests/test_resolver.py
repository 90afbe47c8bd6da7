"""Tests for core.replacement.resolver and core.replacement.dictionary.

Covers:
  - Dictionary normalization (empty originals, mappings, type checks)
  - Length-priority ordering
  - Literal, case-sensitive matching
  - Overlap resolution (longer wins, self-overlap, equal-length tiers)
  - Order independence of the supplied dictionary
"""

from __future__ import annotations

import itertools
import random

import pytest

from core.replacement.dictionary import Term, by_priority, normalize_dictionary
from core.replacement.resolver import Match, find_matches


def _assert_disjoint(matches: list[Match]) -> None:
    for a, b in zip(matches, matches[1:]):
        assert a.position + a.length <= b.position


# ---------------------------------------------------------------------------
# Dictionary
# ---------------------------------------------------------------------------

class TestNormalizeDictionary:
    def test_keeps_insertion_order(self):
        terms = normalize_dictionary([("b", "2"), ("a", "1")])
        assert terms == (Term("b", "2"), Term("a", "1"))

    def test_accepts_mapping(self):
        terms = normalize_dictionary({"裁员": "优化人员结构"})
        assert terms == (Term("裁员", "优化人员结构"),)

    def test_skips_empty_original(self):
        terms = normalize_dictionary([("", "x"), ("ok", "fine")])
        assert terms == (Term("ok", "fine"),)

    def test_empty_substitute_kept(self):
        assert normalize_dictionary([("drop", "")]) == (Term("drop", ""),)

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            normalize_dictionary([("a", 1)])

    def test_does_not_mutate_input(self):
        entries = [("ab", "1"), ("abc", "2")]
        snapshot = list(entries)
        find_matches("xabcx", entries)
        assert entries == snapshot


class TestByPriority:
    def test_longest_first(self):
        ordered = by_priority([Term("a", ""), Term("abc", ""), Term("ab", "")])
        assert [t.original for t in ordered] == ["abc", "ab", "a"]

    def test_ties_keep_insertion_order(self):
        ordered = by_priority([Term("xy", "1"), Term("abc", ""), Term("ab", "2")])
        assert [t.original for t in ordered] == ["abc", "xy", "ab"]


# ---------------------------------------------------------------------------
# Basic matching
# ---------------------------------------------------------------------------

class TestBasicMatching:
    def test_empty_text(self):
        assert find_matches("", [("a", "b")]) == []

    def test_empty_dictionary(self):
        assert find_matches("some text", []) == []

    def test_single_chinese_term(self):
        matches = find_matches("公司决定裁员以降低成本", [("裁员", "优化人员结构")])
        assert matches == [Match("裁员", "优化人员结构", 4)]
        assert matches[0].length == 2

    def test_no_match(self):
        assert find_matches("正常文本", [("敏感词", "X")]) == []

    def test_multiple_non_overlapping(self):
        matches = find_matches("AABB", [("AA", "11"), ("BB", "22")])
        assert [(m.original, m.position) for m in matches] == [("AA", 0), ("BB", 2)]

    def test_every_occurrence(self):
        matches = find_matches("cat dog cat", [("cat", "feline")])
        assert [m.position for m in matches] == [0, 8]

    def test_case_sensitive(self):
        matches = find_matches("Apple apple", [("apple", "pear")])
        assert [m.position for m in matches] == [6]

    def test_regex_metacharacters_are_literal(self):
        text = "price (USD) is $5.00 or a.b*c"
        matches = find_matches(text, [("(USD)", "[EUR]"), ("$5.00", "€4"), ("a.b*c", "z")])
        assert [m.original for m in matches] == ["(USD)", "$5.00", "a.b*c"]
        assert find_matches("axb", [("a.b", "z")]) == []

    def test_identity_substitute_still_recorded(self):
        matches = find_matches("keep this", [("keep", "keep")])
        assert matches == [Match("keep", "keep", 0)]

    def test_match_end_property(self):
        m = find_matches("xxabc", [("abc", "")])[0]
        assert m.end == 5


# ---------------------------------------------------------------------------
# Overlap resolution
# ---------------------------------------------------------------------------

class TestOverlapResolution:
    def test_longer_wins(self):
        matches = find_matches("xabcx", [("ab", "1"), ("abc", "2")])
        assert matches == [Match("abc", "2", 1)]

    def test_longer_wins_chinese(self):
        matches = find_matches("贿赂官员", [("贿赂", "礼品"), ("贿赂官员", "商业往来")])
        assert len(matches) == 1
        assert matches[0].substitute == "商业往来"

    def test_partial_overlap_rejected(self):
        # "bcd" (longer) covers the tail of "ab"
        matches = find_matches("abcd", [("ab", "1"), ("bcd", "2")])
        assert matches == [Match("bcd", "2", 1)]

    def test_shorter_matches_elsewhere_survive(self):
        matches = find_matches("ab abc", [("ab", "1"), ("abc", "2")])
        assert [(m.original, m.position) for m in matches] == [("ab", 0), ("abc", 3)]

    def test_self_overlap_is_greedy(self):
        matches = find_matches("aaa", [("aa", "b")])
        assert matches == [Match("aa", "b", 0)]

    def test_self_overlap_four(self):
        matches = find_matches("aaaa", [("aa", "b")])
        assert [m.position for m in matches] == [0, 2]

    def test_rejected_candidate_does_not_skip_later_occurrence(self):
        # "aa" at 1 collides with "ba"; the occurrence at 2 is still free
        matches = find_matches("baaa", [("ba", "1"), ("aa", "2")])
        assert [(m.original, m.position) for m in matches] == [("ba", 0), ("aa", 2)]

    def test_equal_length_leftmost_wins(self):
        forward = find_matches("abc", [("ab", "1"), ("bc", "2")])
        backward = find_matches("abc", [("bc", "2"), ("ab", "1")])
        assert forward == backward == [Match("ab", "1", 0)]

    def test_equal_length_tie_ignores_listing_order(self):
        from core.replacement.pipeline import run_replacement

        outcome = run_replacement("abc", [("bc", "2"), ("ab", "1")])
        assert outcome.replaced_text == "1c"

    def test_duplicate_original_first_wins(self):
        matches = find_matches("foo", [("foo", "first"), ("foo", "second")])
        assert matches == [Match("foo", "first", 0)]

    def test_sorted_by_position(self):
        matches = find_matches("zz yy xx", [("xx", "1"), ("yy", "2"), ("zz", "3")])
        assert [m.position for m in matches] == [0, 3, 6]


# ---------------------------------------------------------------------------
# Properties over generated inputs
# ---------------------------------------------------------------------------

def _random_case(rng: random.Random) -> tuple[str, list[tuple[str, str]]]:
    alphabet = "abc"
    text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))
    originals: set[str] = set()
    while len(originals) < rng.randint(1, 6):
        originals.add("".join(rng.choice(alphabet) for _ in range(rng.randint(1, 4))))
    terms = [(o, "X" * rng.randint(0, 3)) for o in sorted(originals)]
    return text, terms


class TestProperties:
    @pytest.mark.parametrize("seed", range(40))
    def test_no_overlap_and_content(self, seed: int):
        text, terms = _random_case(random.Random(seed))
        matches = find_matches(text, terms)
        _assert_disjoint(matches)
        for m in matches:
            assert text[m.position:m.end] == m.original

    @pytest.mark.parametrize("seed", range(15))
    def test_permutation_independent(self, seed: int):
        rng = random.Random(seed)
        text, terms = _random_case(rng)
        expected = find_matches(text, terms)
        for perm in itertools.islice(itertools.permutations(terms), 24):
            assert find_matches(text, list(perm)) == expected

    @pytest.mark.parametrize("seed", range(20))
    def test_longer_term_never_loses_to_shorter(self, seed: int):
        text, terms = _random_case(random.Random(seed))
        matches = find_matches(text, terms)
        for m in matches:
            # No longer original could have occupied any of this match's characters
            for original, _sub in terms:
                if len(original) <= m.length:
                    continue
                start = max(0, m.position - len(original) + 1)
                for pos in range(start, m.end):
                    if text.startswith(original, pos):
                        covering = [
                            o for o in matches
                            if o.position < pos + len(original) and pos < o.end
                            and o.length >= len(original)
                        ]
                        assert covering, (
                            f"{m.original!r}@{m.position} beat longer {original!r}@{pos}"
                        )
