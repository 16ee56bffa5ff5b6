"""
Comprehensive unit tests for hand ranking.

Tests all hand classes, the category scorers' scan-order rules, rank
bounds and the consistency between rank and description.
"""

import jax
import jax.numpy as jnp
import pytest

from holdem.cardset import parse_hand, face_counts, cardset_to_grid, random_hand, create_hand
from holdem.evaluator import (
    straight_flush_score, four_kind_score, full_house_score, flush_score,
    straight_score, three_kind_score, two_pair_score, pair_score, high_card_score,
    classify, rank, describe, batch_rank, hand_vs_hand, hand_class, hand_description
)
from holdem.tables.constants import (
    MAX_RANK, HANDCLASS_HIGH_CARD, HANDCLASS_PAIR, HANDCLASS_TWO_PAIR,
    HANDCLASS_THREE_OF_A_KIND, HANDCLASS_STRAIGHT, HANDCLASS_FLUSH,
    HANDCLASS_FULL_HOUSE, HANDCLASS_FOUR_OF_A_KIND, HANDCLASS_STRAIGHT_FLUSH
)


class TestHandEvaluation:
    """Test basic hand evaluation functionality."""

    def test_royal_flush(self):
        """Test royal flush evaluation."""
        hand = parse_hand("As Ks Qs Js Ts")
        assert rank(hand) == 117
        assert rank(hand) == MAX_RANK
        assert describe(hand) == "royal flush"
        assert classify(hand) == (HANDCLASS_STRAIGHT_FLUSH, 13)

    def test_straight_flush(self):
        """Test straight flush evaluation."""
        hand = parse_hand("9s 8s 7s 6s 5s")
        assert rank(hand) == 8 * 13 + 8
        assert describe(hand) == "straight flush"

    def test_four_of_a_kind(self):
        hand = parse_hand("As Ah Ad Ac Kh")
        assert rank(hand) == 7 * 13 + 13
        assert describe(hand) == "four of a kind"

        hand = parse_hand("2s 2h 2d 2c 3h")
        assert rank(hand) == 7 * 13 + 1

    def test_full_house(self):
        hand = parse_hand("As Ah Ad Kc Kh")
        assert rank(hand) == 6 * 13 + 13
        assert describe(hand) == "full house"

        # Trips of the lowest face still count
        hand = parse_hand("2s 2h 2d 3c 3h")
        assert rank(hand) == 6 * 13 + 1

    def test_flush(self):
        hand = parse_hand("2h 5h 7h 9h Kh")
        assert rank(hand) == 5 * 13 + 12
        assert describe(hand) == "flush"

    def test_straight(self):
        hand = parse_hand("5d 6c 7h 8s 9d")
        assert rank(hand) == 4 * 13 + 8
        assert describe(hand) == "straight"

        hand = parse_hand("Ts Jh Qd Kc Ah")
        assert rank(hand) == 4 * 13 + 13

    def test_three_of_a_kind(self):
        hand = parse_hand("7s 7h 7d Kc 2h")
        assert rank(hand) == 3 * 13 + 6
        assert describe(hand) == "three of a kind"

    def test_two_pair(self):
        hand = parse_hand("Ks Kh 5d 5c 9h")
        assert rank(hand) == 2 * 13 + 12
        assert describe(hand) == "two pairs"

    def test_pair(self):
        hand = parse_hand("Qs Qh 2d 5c 9h")
        assert rank(hand) == 13 + 11
        assert describe(hand) == "pair"

    def test_high_card(self):
        hand = parse_hand("As Kh 9d 5c 2h")
        assert rank(hand) == 13
        assert describe(hand) == "high card"

    def test_empty_hand(self):
        hand = create_hand()
        assert classify(hand) == (HANDCLASS_HIGH_CARD, 0)
        assert rank(hand) == 0
        assert describe(hand) == "high card"

    def test_seven_card_hand(self):
        """Best category among seven cards wins."""
        hand = parse_hand("As Ah Kd Kc Ks 2h 7d")
        assert describe(hand) == "full house"
        assert rank(hand) == 6 * 13 + 12


class TestScanOrderRules:
    """Behaviour that follows from how each scorer scans the deck."""

    def test_no_wheel_straight(self):
        """A-2-3-4-5 is not a straight; the ace only plays high."""
        hand = parse_hand("Ah 2c 3d 4s 5h")
        assert describe(hand) == "high card"
        assert rank(hand) == 13
        assert int(straight_score(face_counts(hand))) == 0

    def test_no_wheel_straight_flush(self):
        hand = parse_hand("As 2s 3s 4s 5s")
        assert describe(hand) == "flush"

    def test_straight_reports_highest_run(self):
        hand = parse_hand("4c 5d 6c 7h 8s 9d")
        assert int(straight_score(face_counts(hand))) == 8

    def test_straight_flush_reports_lowest_run(self):
        """Six suited cards in a row report the first run of five found."""
        hand = parse_hand("8s 9s Ts Js Qs Ks")
        assert int(straight_flush_score(cardset_to_grid(hand))) == 11
        assert rank(hand) == 8 * 13 + 11
        assert describe(hand) == "straight flush"

    def test_straight_flush_lowest_suit_wins(self):
        hand = parse_hand("2h 3h 4h 5h 6h 9c Tc Jc Qc Kc")
        assert int(straight_flush_score(cardset_to_grid(hand))) == 5

    def test_flush_takes_fifth_card(self):
        """The flush score is the face of the suit's fifth-lowest card."""
        hand = parse_hand("2h 4h 6h 8h Th Qh")
        assert int(flush_score(cardset_to_grid(hand))) == 9
        assert rank(hand) == 5 * 13 + 9

    def test_flush_lowest_suit_wins(self):
        """With two flush suits the lower suit index decides."""
        hand = parse_hand("2s 4s 6s 8s Ts 3h 5h 7h 9h Ah")
        assert int(flush_score(cardset_to_grid(hand))) == 9
        assert describe(hand) == "flush"

    def test_full_house_needs_exact_pair(self):
        """Two sets of trips without a pair are only three of a kind."""
        hand = parse_hand("7s 7h 7d 9s 9h 9d")
        assert int(full_house_score(face_counts(hand))) == 0
        assert describe(hand) == "three of a kind"
        assert rank(hand) == 3 * 13 + 8

    def test_full_house_with_two_trips(self):
        hand = parse_hand("7s 7h 7d 9s 9h 9d 2c 2d")
        assert int(full_house_score(face_counts(hand))) == 8

    def test_two_pair_ignores_second_pair(self):
        h1 = parse_hand("Ks Kh 5d 5c 9h")
        h2 = parse_hand("Kd Kc 3d 3c 9s")
        assert rank(h1) == rank(h2)

    def test_kickers_not_compared(self):
        h1 = parse_hand("As Ah Kd Qc 2h")
        h2 = parse_hand("As Ah Kd Qc 3h")
        assert rank(h1) == rank(h2)
        assert hand_vs_hand(h1, h2) == 0


class TestScorers:
    """Direct tests of the category scorers."""

    def test_absent_categories_score_zero(self):
        counts = face_counts(parse_hand("As Kh 9d 5c 2h"))
        grid = cardset_to_grid(parse_hand("As Kh 9d 5c 2h"))

        assert int(straight_flush_score(grid)) == 0
        assert int(four_kind_score(counts)) == 0
        assert int(full_house_score(counts)) == 0
        assert int(flush_score(grid)) == 0
        assert int(straight_score(counts)) == 0
        assert int(three_kind_score(counts)) == 0
        assert int(two_pair_score(counts)) == 0
        assert int(pair_score(counts)) == 0
        assert int(high_card_score(counts)) == 13

    def test_counting_scorers(self):
        counts = face_counts(parse_hand("3s 3h 3d 3c Js Jh 8d 8c 6h"))

        assert int(four_kind_score(counts)) == 2
        assert int(three_kind_score(counts)) == 0
        assert int(two_pair_score(counts)) == 10
        assert int(pair_score(counts)) == 10
        assert int(high_card_score(counts)) == 5

    def test_high_card_needs_single(self):
        counts = face_counts(parse_hand("As Ah Kd Kc"))
        assert int(high_card_score(counts)) == 0


class TestRankProperties:
    """Ordering and consistency properties of rank."""

    def test_quads_beat_full_house(self):
        quads = [parse_hand("2s 2h 2d 2c 3h"), parse_hand("9s 9h 9d 9c As")]
        full_houses = [parse_hand("As Ah Ad Kc Kh"), parse_hand("3s 3h 3d 2c 2h")]
        for q in quads:
            for fh in full_houses:
                assert rank(q) > rank(fh)
                assert hand_vs_hand(q, fh) == 1
                assert hand_vs_hand(fh, q) == -1

    def test_class_order(self):
        hands = [
            "As Kh 9d 5c 2h",
            "2s 2h 9d 5c 3h",
            "2s 2h 3d 3c 5h",
            "2s 2h 2d 5c 7h",
            "2s 3h 4d 5c 6h",
            "2h 4h 6h 8h 9h",
            "2s 2h 2d 3c 3h",
            "2s 2h 2d 2c 3h",
            "2s 3s 4s 5s 6s",
        ]
        ranks = [rank(parse_hand(h)) for h in hands]
        assert ranks == sorted(ranks)
        assert [hand_class(r) for r in ranks] == list(range(9))

    def test_random_hands_consistent(self):
        """Rank stays in range and agrees with describe and classify."""
        keys = jax.random.split(jax.random.PRNGKey(7), 30)
        for i, key in enumerate(keys):
            hand = random_hand(5 + i % 3, key)
            category, tiebreak = classify(hand)
            strength = rank(hand)

            assert 0 <= strength <= MAX_RANK
            assert strength == category * 13 + tiebreak
            assert hand_class(strength) == category
            assert hand_description(strength) == describe(hand)

    def test_batch_rank(self):
        hands = [parse_hand(h) for h in ["As Ks Qs Js Ts", "2s 2h 9d 5c 3h", "As Kh 9d 5c 2h"]]
        ranks = batch_rank(jnp.stack(hands))
        assert [int(r) for r in ranks] == [rank(h) for h in hands]


class TestHandClass:
    """Test rank value to hand class mapping."""

    @pytest.mark.parametrize("strength,expected", [
        (0, HANDCLASS_HIGH_CARD),
        (1, HANDCLASS_HIGH_CARD),
        (13, HANDCLASS_HIGH_CARD),
        (14, HANDCLASS_PAIR),
        (27, HANDCLASS_TWO_PAIR),
        (52, HANDCLASS_THREE_OF_A_KIND),
        (53, HANDCLASS_STRAIGHT),
        (66, HANDCLASS_FLUSH),
        (91, HANDCLASS_FULL_HOUSE),
        (104, HANDCLASS_FOUR_OF_A_KIND),
        (105, HANDCLASS_STRAIGHT_FLUSH),
        (117, HANDCLASS_STRAIGHT_FLUSH),
    ])
    def test_hand_class(self, strength, expected):
        assert hand_class(strength) == expected

    def test_hand_description(self):
        assert hand_description(117) == "royal flush"
        assert hand_description(116) == "straight flush"
        assert hand_description(0) == "high card"
        assert hand_description(38) == "two pairs"

    @pytest.mark.parametrize("strength", [-1, 118])
    def test_invalid_rank(self, strength):
        with pytest.raises(ValueError):
            hand_class(strength)
