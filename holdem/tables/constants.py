"""
Deck geometry and hand class constants.

Rank values are composed as ``hand_class * TIER_SIZE + tiebreak`` where the
tiebreak is the deciding face + 1 (0 is reserved for "category absent").
"""

NUM_SUITS = 4
NUM_FACES = 13
NUM_CARDS = NUM_SUITS * NUM_FACES

# Suit indices
SPADES = 0
HEARTS = 1
DIAMONDS = 2
CLUBS = 3

# Face indices (2=0, 3=1, ..., A=12)
TWO = 0
THREE = 1
FOUR = 2
FIVE = 3
SIX = 4
SEVEN = 5
EIGHT = 6
NINE = 7
TEN = 8
JACK = 9
QUEEN = 10
KING = 11
ACE = 12

FACE_CHARS = "23456789TJQKA"
SUIT_CHARS = "shdc"

# Hand class definitions, weakest first
HANDCLASS_HIGH_CARD = 0
HANDCLASS_PAIR = 1
HANDCLASS_TWO_PAIR = 2
HANDCLASS_THREE_OF_A_KIND = 3
HANDCLASS_STRAIGHT = 4
HANDCLASS_FLUSH = 5
HANDCLASS_FULL_HOUSE = 6
HANDCLASS_FOUR_OF_A_KIND = 7
HANDCLASS_STRAIGHT_FLUSH = 8

NUM_HAND_CLASSES = 9

# Width of one hand class band in the rank scale
TIER_SIZE = NUM_FACES

# Highest reachable rank: ace-high straight flush
MAX_RANK = HANDCLASS_STRAIGHT_FLUSH * TIER_SIZE + NUM_FACES

# Straight flush tiebreak of a royal flush (ace + 1)
ROYAL_FLUSH_TIEBREAK = ACE + 1

HAND_CLASS_NAMES = (
    "high card",
    "pair",
    "two pairs",
    "three of a kind",
    "straight",
    "flush",
    "full house",
    "four of a kind",
    "straight flush",
)

ROYAL_FLUSH_NAME = "royal flush"

# Unicode playing cards: ace of spades, one block of 16 code points per suit
GLYPH_BASE = 0x1F0A1
GLYPH_SUIT_STRIDE = 0x10
