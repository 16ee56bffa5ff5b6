"""
Exact equity by exhaustive enumeration.

``compare`` deals every remaining card combination to whichever hand is
short of the showdown size, one card per step, and averages the showdown
results. When both hands hold the same number of cards the next card goes
to both of them, which models a shared community card: in Texas Hold'em
after the flop, ``compare(mine | board, theirs | board, 7)`` gives the
chance of winning at the river.

Each step averages over its own candidates, so the result is a mean of
per-branch means. Candidates are taken in strictly increasing card order,
so a multi-card draw is visited once as a combination, never as its
permutations. The cost grows as the falling factorial of the number of
cards drawn; it is meant for a handful of unseen cards.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import jax.numpy as jnp
import numpy as np

from .cardset import cardset_from_int, cardset_to_int
from .cardset_ops import VALID_CARD_MASK
from .config import EquityConfig
from .evaluator import batch_rank, hand_vs_hand
from .tables.constants import NUM_CARDS

logger = logging.getLogger(__name__)

# Last-level batches are padded to one slot per card so batch_rank compiles once
_BATCH_SLOTS = NUM_CARDS

# Hand state during enumeration: (mask1, count1, mask2, count2)
Deal = Tuple[int, int, int, int]


def _hand_mask(hand: jnp.ndarray) -> int:
    mask = cardset_to_int(hand)
    if mask & ~VALID_CARD_MASK:
        raise ValueError(f"Invalid hand: {mask:#x} holds bits beyond card 51")
    return mask


def _count(mask: int) -> int:
    return bin(mask).count("1")


def _candidates(mask1: int, mask2: int, first_card: int) -> List[int]:
    used = mask1 | mask2
    return [card for card in range(first_card, NUM_CARDS) if not used >> card & 1]


def _deal(mask1: int, l1: int, mask2: int, l2: int, card: int) -> Deal:
    """Give the card to the shorter hand, or to both when they are level."""
    bit = 1 << card
    if l1 < l2:
        return mask1 | bit, l1 + 1, mask2, l2
    if l2 < l1:
        return mask1, l1, mask2 | bit, l2 + 1
    return mask1 | bit, l1 + 1, mask2 | bit, l2 + 1


def _showdown(mask1: int, mask2: int) -> float:
    result = hand_vs_hand(cardset_from_int(mask1), cardset_from_int(mask2))
    # 1 -> win, 0 -> tie, -1 -> loss
    return (result + 1) / 2


def _split_words(mask: int) -> Tuple[int, int]:
    return mask & 0xFFFFFFFF, mask >> 32


def _last_draw(mask1: int, l1: int, mask2: int, l2: int, candidates: List[int]) -> float:
    """Average the showdowns of the final draw step with one batched ranking."""
    cardsets = np.zeros((2, _BATCH_SLOTS, 2), dtype=np.uint32)
    for slot, card in enumerate(candidates):
        dealt1, _, dealt2, _ = _deal(mask1, l1, mask2, l2, card)
        cardsets[0, slot] = _split_words(dealt1)
        cardsets[1, slot] = _split_words(dealt2)

    ranks = np.asarray(batch_rank(jnp.asarray(cardsets.reshape(-1, 2))))
    ranks = ranks.reshape(2, _BATCH_SLOTS)[:, :len(candidates)]

    # Count in half points so the mean is exact before the single division
    points = 2 * int(np.sum(ranks[0] > ranks[1])) + int(np.sum(ranks[0] == ranks[1]))
    return points / (2 * len(candidates))


def _compare(mask1: int, l1: int, mask2: int, l2: int,
             first_card: int, remaining: int, batch_leaves: bool) -> float:
    if remaining == 0:
        return _showdown(mask1, mask2)

    candidates = _candidates(mask1, mask2, first_card)
    if not candidates:
        return 0.5

    if remaining == 1 and batch_leaves:
        return _last_draw(mask1, l1, mask2, l2, candidates)

    total = 0.0
    for card in candidates:
        total += _compare(*_deal(mask1, l1, mask2, l2, card),
                          card + 1, remaining - 1, batch_leaves)
    return total / len(candidates)


def _compare_parallel(mask1: int, l1: int, mask2: int, l2: int,
                      remaining: int, config: EquityConfig) -> float:
    """Fan the top-level draw out over a thread pool, then average as ``_compare`` does."""
    candidates = _candidates(mask1, mask2, 0)
    if not candidates:
        return 0.5

    with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
        futures = [
            pool.submit(_compare, *_deal(mask1, l1, mask2, l2, card),
                        card + 1, remaining - 1, config.batch_leaves)
            for card in candidates
        ]
        results = [future.result() for future in futures]

    total = 0.0
    for result in results:
        total += result
    return total / len(candidates)


def compare(hand1: jnp.ndarray, hand2: jnp.ndarray, lookahead: int,
            config: Optional[EquityConfig] = None) -> float:
    """
    Chance that hand1 beats hand2 once both hold ``lookahead`` cards.

    Cards held by either hand are never dealt again. The hands may share
    cards, e.g. community cards included in both. Ties count half.

    Args:
        hand1: uint32[2] cardset
        hand2: uint32[2] cardset
        lookahead: Number of cards each hand holds at showdown
        config: Enumeration settings, defaults to ``EquityConfig()``

    Returns:
        Probability in [0, 1]
    """
    if config is None:
        config = EquityConfig()

    mask1 = _hand_mask(hand1)
    mask2 = _hand_mask(hand2)

    l1 = _count(mask1)
    l2 = _count(mask2)
    if lookahead < max(l1, l2):
        raise ValueError(
            f"Invalid lookahead: {lookahead} (hands already hold {l1} and {l2} cards)"
        )

    remaining = lookahead - min(l1, l2)
    logger.debug("Comparing %d-card and %d-card hands, %d draw steps", l1, l2, remaining)

    if remaining > 1 and config.max_workers > 1:
        result = _compare_parallel(mask1, l1, mask2, l2, remaining, config)
    else:
        result = _compare(mask1, l1, mask2, l2, 0, remaining, config.batch_leaves)

    logger.debug("Equity %.6f", result)
    return result
