"""
Exact poker hand ranking and equity enumeration.

Hands are uint32[2] cardsets evaluated with JAX; equity is computed by
enumerating every way the unseen cards can fall.
"""

from .cardset import (
    to_card, id_to_card, create_hand, add_card, has_card, num_cards, combine,
    face_counts, random_hand, format_card, parse_card, format_hand, parse_hand,
    card_glyph, hand_glyphs
)
from .config import EquityConfig
from .equity import compare
from .evaluator import rank, describe, classify, hand_class, hand_description

__all__ = [
    'to_card',
    'id_to_card',
    'create_hand',
    'add_card',
    'has_card',
    'num_cards',
    'combine',
    'face_counts',
    'random_hand',
    'format_card',
    'parse_card',
    'format_hand',
    'parse_hand',
    'card_glyph',
    'hand_glyphs',
    'EquityConfig',
    'compare',
    'rank',
    'describe',
    'classify',
    'hand_class',
    'hand_description'
]
