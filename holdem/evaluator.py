"""
Core hand evaluation functions.

Every category scorer returns 0 when its category is absent, otherwise the
deciding face + 1. ``classify_cardset`` applies them in precedence order and
is the single source for both the numeric rank and the English description.

Kickers beyond the deciding face are not compared: two hands that differ
only in an unranked kicker rank the same.
"""

from typing import Tuple

import jax
import jax.numpy as jnp

from .cardset import cardset_to_grid
from .tables.constants import (
    NUM_FACES, TIER_SIZE, MAX_RANK,
    HANDCLASS_HIGH_CARD, HANDCLASS_STRAIGHT_FLUSH,
    HAND_CLASS_NAMES, ROYAL_FLUSH_NAME, ROYAL_FLUSH_TIEBREAK
)

RUN_LENGTH = 5

# Number of 5-card windows of consecutive faces (2-6 up to T-A)
NUM_WINDOWS = NUM_FACES - RUN_LENGTH + 1

_FACE_SCORES = jnp.arange(1, NUM_FACES + 1, dtype=jnp.int32)
_WINDOW_SCORES = jnp.arange(RUN_LENGTH, NUM_FACES + 1, dtype=jnp.int32)


def _run_windows(present: jnp.ndarray) -> jnp.ndarray:
    """Mark each window of 5 consecutive faces that is fully present (last axis)."""
    windows = present[..., 0:NUM_WINDOWS]
    for k in range(1, RUN_LENGTH):
        windows = windows & present[..., k:k + NUM_WINDOWS]
    return windows > 0


def _highest_face(mask: jnp.ndarray) -> jnp.ndarray:
    return jnp.max(jnp.where(mask, _FACE_SCORES, 0))


def _first_suit(suit_hit: jnp.ndarray, suit_scores: jnp.ndarray) -> jnp.ndarray:
    # Lowest suit index wins when several suits qualify
    return jnp.where(jnp.any(suit_hit), suit_scores[jnp.argmax(suit_hit)], 0)


@jax.jit
def straight_flush_score(grid: jnp.ndarray) -> jnp.ndarray:
    """
    Straight flush scorer.

    Suits are scanned in index order and faces ascending, so the first
    suited run of five found decides: with six or more suited cards in a
    row the lowest run is reported. An ace-high run scores 13 (royal flush).

    Args:
        grid: (4, 13) presence grid

    Returns:
        High face + 1 of the run, or 0
    """
    windows = _run_windows(grid)
    suit_hit = jnp.any(windows, axis=1)
    suit_scores = jnp.argmax(windows, axis=1).astype(jnp.int32) + RUN_LENGTH
    return _first_suit(suit_hit, suit_scores)


@jax.jit
def four_kind_score(counts: jnp.ndarray) -> jnp.ndarray:
    """Highest face held in all four suits."""
    return _highest_face(counts == 4)


@jax.jit
def full_house_score(counts: jnp.ndarray) -> jnp.ndarray:
    """Highest three-of-a-kind face, provided some face is held exactly twice."""
    return jnp.where(jnp.any(counts == 2), _highest_face(counts == 3), 0)


@jax.jit
def flush_score(grid: jnp.ndarray) -> jnp.ndarray:
    """
    Flush scorer.

    Cards are visited in index order (suit major, face ascending); the score
    is taken the moment a suit reaches five cards, so it is the face of that
    suit's fifth-lowest card + 1.

    Args:
        grid: (4, 13) presence grid

    Returns:
        Face + 1 of the fifth card of the first flush suit, or 0
    """
    reached = jnp.cumsum(grid, axis=1) >= RUN_LENGTH
    suit_hit = jnp.any(reached, axis=1)
    suit_scores = jnp.argmax(reached, axis=1).astype(jnp.int32) + 1
    return _first_suit(suit_hit, suit_scores)


@jax.jit
def straight_score(counts: jnp.ndarray) -> jnp.ndarray:
    """
    High face + 1 of the highest run of five faces in any suits.

    Aces only play high; A-2-3-4-5 is not a straight.
    """
    windows = _run_windows(counts > 0)
    return jnp.max(jnp.where(windows, _WINDOW_SCORES, 0))


@jax.jit
def three_kind_score(counts: jnp.ndarray) -> jnp.ndarray:
    return _highest_face(counts == 3)


@jax.jit
def two_pair_score(counts: jnp.ndarray) -> jnp.ndarray:
    """Highest pair face when at least two faces are paired; the second pair is not encoded."""
    return jnp.where(jnp.sum(counts == 2) >= 2, _highest_face(counts == 2), 0)


@jax.jit
def pair_score(counts: jnp.ndarray) -> jnp.ndarray:
    return _highest_face(counts == 2)


@jax.jit
def high_card_score(counts: jnp.ndarray) -> jnp.ndarray:
    return _highest_face(counts == 1)


@jax.jit
def classify_cardset(cardset: jnp.ndarray) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Classify a hand into its hand class and tiebreak.

    Scorers run strongest first; the first nonzero score decides. An empty
    hand classifies as (high card, 0).

    Args:
        cardset: uint32[2] cardset array

    Returns:
        Tuple of (hand_class, tiebreak) as int32 scalars
    """
    grid = cardset_to_grid(cardset)
    counts = jnp.sum(grid, axis=0, dtype=jnp.int32)

    scores = jnp.stack([
        straight_flush_score(grid),
        four_kind_score(counts),
        full_house_score(counts),
        flush_score(grid),
        straight_score(counts),
        three_kind_score(counts),
        two_pair_score(counts),
        pair_score(counts),
        high_card_score(counts),
    ]).astype(jnp.int32)

    hit = scores > 0
    first = jnp.argmax(hit)
    found = jnp.any(hit)

    category = jnp.where(found, HANDCLASS_STRAIGHT_FLUSH - first, HANDCLASS_HIGH_CARD)
    tiebreak = jnp.where(found, scores[first], 0)
    return category.astype(jnp.int32), tiebreak.astype(jnp.int32)


@jax.jit
def rank_cardset(cardset: jnp.ndarray) -> jnp.ndarray:
    """Rank value (0-117) of a cardset; higher beats lower."""
    category, tiebreak = classify_cardset(cardset)
    return category * TIER_SIZE + tiebreak


@jax.jit
def batch_rank(cardsets: jnp.ndarray) -> jnp.ndarray:
    """
    Rank multiple hands in parallel.

    Args:
        cardsets: Array of shape (batch_size, 2) with uint32[2] cardsets

    Returns:
        int32 array of rank values
    """
    return jax.vmap(rank_cardset)(cardsets)


def classify(hand: jnp.ndarray) -> Tuple[int, int]:
    """Return (hand_class, tiebreak) of a hand as Python ints."""
    category, tiebreak = classify_cardset(hand)
    return int(category), int(tiebreak)


def rank(hand: jnp.ndarray) -> int:
    """
    Rank a hand among all possible hands.

    Returns:
        ``hand_class * 13 + tiebreak`` in 0-117; higher beats lower,
        equal values tie
    """
    return int(rank_cardset(hand))


def describe(hand: jnp.ndarray) -> str:
    """English description of a hand, such as 'two pairs' or 'royal flush'."""
    category, tiebreak = classify(hand)
    if category == HANDCLASS_STRAIGHT_FLUSH and tiebreak == ROYAL_FLUSH_TIEBREAK:
        return ROYAL_FLUSH_NAME
    return HAND_CLASS_NAMES[category]


def hand_vs_hand(hand1: jnp.ndarray, hand2: jnp.ndarray) -> int:
    """
    Compare two complete hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    strength1 = rank(hand1)
    strength2 = rank(hand2)
    return (strength1 > strength2) - (strength1 < strength2)


def hand_class(strength: int) -> int:
    """
    Get hand class (0-8) from a rank value.

    Args:
        strength: Rank value from ``rank``

    Returns:
        Hand class: 0=high card, 1=pair, ..., 8=straight flush
    """
    if not 0 <= strength <= MAX_RANK:
        raise ValueError(f"Invalid rank value: {strength} (expected 0-{MAX_RANK})")
    if strength == 0:
        return HANDCLASS_HIGH_CARD
    return (strength - 1) // TIER_SIZE


def hand_description(strength: int) -> str:
    """
    Get human-readable description of a rank value.

    Args:
        strength: Rank value from ``rank``

    Returns:
        Same label ``describe`` gives the ranked hand
    """
    if strength == MAX_RANK:
        return ROYAL_FLUSH_NAME
    return HAND_CLASS_NAMES[hand_class(strength)]


