"""
Card representation and conversion utilities for hand evaluation.

Cards are integer indices ``suit * 13 + face``. A hand is a cardset: an
immutable uint32[2] array where bit ``i`` is set when card ``i`` is held.
The helpers here validate their arguments and raise ``ValueError`` on
anything outside the 52-card deck; the jitted kernels assume valid input.
"""

from typing import List, Tuple

import jax
import jax.numpy as jnp

from .cardset_ops import (
    VALID_CARD_MASK, create_empty_cardset, create_cardset_from_value,
    cardset_or, set_bit, get_bit, count_bits, cardset_to_uint64
)
from .tables.constants import (
    NUM_CARDS, NUM_FACES, NUM_SUITS, ACE, QUEEN, FACE_CHARS, SUIT_CHARS,
    GLYPH_BASE, GLYPH_SUIT_STRIDE
)

# Card index laid out as [suit, face], computed once at module load
_CARD_GRID = jnp.arange(NUM_CARDS, dtype=jnp.uint32).reshape(NUM_SUITS, NUM_FACES)
_CARD_WORDS = (_CARD_GRID >> 5).astype(jnp.int32)
_CARD_SHIFTS = _CARD_GRID & jnp.uint32(31)


def _check_card(card: int) -> int:
    card = int(card)
    if not 0 <= card < NUM_CARDS:
        raise ValueError(f"Invalid card index: {card} (expected 0-{NUM_CARDS - 1})")
    return card


def to_card(face: int, suit: int) -> int:
    """
    Convert face and suit to card ID.

    Args:
        face: 0=2, 1=3, ..., 11=K, 12=A
        suit: 0=spades, 1=hearts, 2=diamonds, 3=clubs

    Returns:
        Card ID (0-51)
    """
    if not 0 <= face < NUM_FACES:
        raise ValueError(f"Invalid face: {face} (expected 0-{NUM_FACES - 1})")
    if not 0 <= suit < NUM_SUITS:
        raise ValueError(f"Invalid suit: {suit} (expected 0-{NUM_SUITS - 1})")
    return suit * NUM_FACES + face


def id_to_card(card_id: int) -> Tuple[int, int]:
    """
    Convert card ID to suit and face.

    Args:
        card_id: Card ID (0-51)

    Returns:
        Tuple of (suit, face)
    """
    card_id = _check_card(card_id)
    return card_id // NUM_FACES, card_id % NUM_FACES


def card_suit(card_id: int) -> int:
    return id_to_card(card_id)[0]


def card_face(card_id: int) -> int:
    return id_to_card(card_id)[1]


@jax.jit
def cards_to_cardset(cards: jnp.ndarray) -> jnp.ndarray:
    """
    Convert a non-empty array of card IDs to a cardset using vectorized operations.
    Assumes all cards are valid (0-51); duplicates collapse into one bit.

    Args:
        cards: Array of valid card IDs (0-51)

    Returns:
        uint32[2] cardset array
    """
    cards = cards.astype(jnp.uint32)
    words = cards >> 5
    masks = jnp.uint32(1) << (cards & jnp.uint32(31))

    low = jnp.bitwise_or.reduce(jnp.where(words == 0, masks, jnp.uint32(0)))
    high = jnp.bitwise_or.reduce(jnp.where(words == 1, masks, jnp.uint32(0)))

    return jnp.array([low, high], dtype=jnp.uint32)


def create_hand(*cards: int) -> jnp.ndarray:
    """Return a cardset holding the given cards."""
    if not cards:
        return create_empty_cardset()
    checked = [_check_card(card) for card in cards]
    return cards_to_cardset(jnp.array(checked, dtype=jnp.int32))


def add_card(hand: jnp.ndarray, card_id: int) -> jnp.ndarray:
    """
    Add a single card to a hand.

    The original hand is not modified; adding a card that is already
    present returns an equal hand.
    """
    return set_bit(hand, _check_card(card_id))


def has_card(hand: jnp.ndarray, card_id: int) -> bool:
    """Return True if the hand contains the card."""
    return bool(get_bit(hand, _check_card(card_id)))


def num_cards(hand: jnp.ndarray) -> int:
    """Count the cards in a hand (0-52)."""
    return int(count_bits(hand))


def combine(hand1: jnp.ndarray, hand2: jnp.ndarray) -> jnp.ndarray:
    """Union of two hands. Neither input is modified."""
    return cardset_or(hand1, hand2)


def cardset_to_int(cardset: jnp.ndarray) -> int:
    """Convert uint32[2] cardset to a Python int bit mask."""
    return cardset_to_uint64(cardset)


def cardset_from_int(value: int) -> jnp.ndarray:
    """Convert a Python int bit mask to a uint32[2] cardset."""
    if value < 0 or value & ~VALID_CARD_MASK:
        raise ValueError(f"Invalid cardset value: {value:#x} (only bits 0-51 may be set)")
    return create_cardset_from_value(value)


def cardset_to_cards(cardset: jnp.ndarray) -> List[int]:
    """Return the card IDs held by a cardset in ascending order."""
    value = cardset_to_uint64(cardset)
    return [card for card in range(NUM_CARDS) if value >> card & 1]


@jax.jit
def cardset_to_grid(cardset: jnp.ndarray) -> jnp.ndarray:
    """
    Expand a cardset into a presence grid.

    Args:
        cardset: uint32[2] cardset array

    Returns:
        int32 array of shape (4, 13), grid[suit, face] = 1 if the card is held
    """
    bits = (cardset[_CARD_WORDS] >> _CARD_SHIFTS) & jnp.uint32(1)
    return bits.astype(jnp.int32)


@jax.jit
def face_counts(cardset: jnp.ndarray) -> jnp.ndarray:
    """
    Count occurrences of each face across all suits.

    Args:
        cardset: uint32[2] cardset array

    Returns:
        Array of 13 integers (0-4) with the number of suits holding each face
    """
    return jnp.sum(cardset_to_grid(cardset), axis=0, dtype=jnp.int32)


def random_hand(size: int, key: jax.Array) -> jnp.ndarray:
    """
    Deal a hand of ``size`` distinct cards.

    Card indices are drawn uniformly from the whole deck with ``key`` until
    enough distinct cards are held; repeats are simply drawn again. The key
    is split internally and never kept, so callers should pass a fresh one.

    Args:
        size: Number of cards (0-52)
        key: jax.random PRNGKey

    Returns:
        uint32[2] cardset array
    """
    if not 0 <= size <= NUM_CARDS:
        raise ValueError(f"Invalid hand size: {size} (expected 0-{NUM_CARDS})")

    value = 0
    while bin(value).count("1") < size:
        key, subkey = jax.random.split(key)
        card = int(jax.random.randint(subkey, (), 0, NUM_CARDS))
        value |= 1 << card

    return create_cardset_from_value(value)


def format_card(card_id: int) -> str:
    """
    Format card ID as human-readable string.

    Args:
        card_id: Card ID (0-51)

    Returns:
        String like "As" (Ace of spades) or "2c" (2 of clubs)
    """
    suit, face = id_to_card(card_id)
    return FACE_CHARS[face] + SUIT_CHARS[suit]


def parse_card(card_str: str) -> int:
    """
    Parse card string to card ID.

    Args:
        card_str: String like "As" or "2c"

    Returns:
        Card ID (0-51)
    """
    if len(card_str) != 2:
        raise ValueError(f"Invalid card string: {card_str}")

    face_char, suit_char = card_str[0].upper(), card_str[1].lower()
    if face_char not in FACE_CHARS or suit_char not in SUIT_CHARS:
        raise ValueError(f"Invalid card string: {card_str}")

    return to_card(FACE_CHARS.index(face_char), SUIT_CHARS.index(suit_char))


def format_hand(hand: jnp.ndarray) -> str:
    """
    Format a hand as readable string.

    Returns:
        String like "Ts Js Qs Ks As", cards in index order
    """
    return " ".join(format_card(card) for card in cardset_to_cards(hand))


def parse_hand(hand_str: str) -> jnp.ndarray:
    """Parse whitespace separated cards like "As Kh" into a hand."""
    return create_hand(*(parse_card(card) for card in hand_str.split()))


def card_glyph(card_id: int) -> str:
    """Unicode playing card glyph for a card ID (U+1F0A1 is the ace of spades)."""
    suit, face = id_to_card(card_id)

    # Unicode puts the ace first and a knight between jack and queen
    if face == ACE:
        offset = 0
    elif face < QUEEN:
        offset = face + 1
    else:
        offset = face + 2

    return chr(GLYPH_BASE + offset + suit * GLYPH_SUIT_STRIDE)


def hand_glyphs(hand: jnp.ndarray) -> str:
    """Render a hand as glyphs ordered by face, then suit, each followed by a space."""
    value = cardset_to_uint64(hand)
    result = ""
    for face in range(NUM_FACES):
        for suit in range(NUM_SUITS):
            card = suit * NUM_FACES + face
            if value >> card & 1:
                result += card_glyph(card) + " "
    return result
