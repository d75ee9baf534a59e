import random
from collections import Counter

from conftest import make_pair
from teamroping.pairing import count_back_to_back, sequence_pairs


def _all_combinations(headers, heelers):
    pairs = []
    for h in headers:
        for e in heelers:
            if h != e:
                pairs.append(make_pair(f"{h}-{e}", h, e))
    return pairs


def test_output_is_a_permutation_of_the_input():
    pairs = _all_combinations("abcd", "efgh")
    for seed in range(25):
        ordered = sequence_pairs(pairs, rng=random.Random(seed))
        assert Counter(p.id for p in ordered) == Counter(p.id for p in pairs)


def test_empty_and_single_inputs():
    assert sequence_pairs([], rng=random.Random(1)) == []
    only = make_pair("p1", "a", "b")
    assert sequence_pairs([only], rng=random.Random(1)) == [only]


def test_header_repeats_only_when_unavoidable():
    # Plenty of disjoint pairs: a conflict-free draw always exists greedily
    pairs = [make_pair(f"p{i}", f"h{i}", f"e{i}") for i in range(6)]
    pairs += [make_pair(f"q{i}", f"h{i}", f"e{(i + 1) % 6}") for i in range(6)]
    for seed in range(25):
        ordered = sequence_pairs(pairs, rng=random.Random(seed))
        for previous, current in zip(ordered, ordered[1:]):
            if current.header.id == previous.header.id:
                # Only acceptable if every remaining pair had the same header
                remaining = ordered[ordered.index(current):]
                assert all(p.header.id == previous.header.id for p in remaining)


def test_cross_role_reuse_is_avoided():
    # "x" heads one pair and heels another; they must not be adjacent
    # when a neutral pair can go between them
    heads = make_pair("p1", "x", "y")
    heels = make_pair("p2", "z", "x")
    neutral = make_pair("p3", "m", "n")
    for seed in range(20):
        ordered = sequence_pairs([heads, heels, neutral], rng=random.Random(seed))
        if ordered[0].id == "p3":
            # p3 first: p1 and p2 will necessarily be adjacent
            continue
        assert ordered[1].id == "p3"


def test_unavoidable_conflicts_still_terminate():
    # Same header in every pair: nothing can be rested
    pairs = [make_pair(f"p{i}", "solo", f"e{i}") for i in range(5)]
    ordered = sequence_pairs(pairs, rng=random.Random(3))
    assert len(ordered) == 5
    assert count_back_to_back(ordered) == 4


def test_draw_is_reproducible_with_seeded_rng():
    pairs = _all_combinations("abc", "def")
    first = [p.id for p in sequence_pairs(pairs, rng=random.Random(99))]
    second = [p.id for p in sequence_pairs(pairs, rng=random.Random(99))]
    assert first == second


def test_input_list_is_not_modified():
    pairs = _all_combinations("ab", "cd")
    before = [p.id for p in pairs]
    sequence_pairs(pairs, rng=random.Random(5))
    assert [p.id for p in pairs] == before
