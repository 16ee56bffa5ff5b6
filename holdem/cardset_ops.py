"""
Cardset operations for uint32[2] representation.

A cardset is a 64-bit register split into low and high 32-bit words, so its
width does not depend on the platform word size or on JAX's x64 mode.

Cardset format: bit position = card index = suit * 13 + face
- suit: 0=spades, 1=hearts, 2=diamonds, 3=clubs
- face: 0=2, 1=3, ..., 11=K, 12=A

Only bits 0..51 are ever set. All jitted operations are branch free and
assume their bit positions are already validated.
"""

import jax
import jax.numpy as jnp

from .tables.constants import NUM_CARDS

# Bits 0..51 of the 64-bit register
VALID_CARD_MASK = (1 << NUM_CARDS) - 1


# ============================================================================
# UINT32[2] CARDSET OPERATIONS
# ============================================================================

@jax.jit
def create_empty_cardset() -> jnp.ndarray:
    """Create an empty cardset (uint32[2])."""
    return jnp.array([0, 0], dtype=jnp.uint32)


def create_cardset_from_value(value: int) -> jnp.ndarray:
    """Create cardset from a 64-bit integer value (uint32[2])."""
    low = value & 0xFFFFFFFF
    high = (value >> 32) & 0xFFFFFFFF
    # Build from Python ints to avoid JAX 64-bit issues with large values
    return jnp.array([jnp.uint32(low), jnp.uint32(high)], dtype=jnp.uint32)


def cardset_to_uint64(cardset: jnp.ndarray) -> int:
    """Convert uint32[2] cardset to Python int."""
    return int(cardset[0]) | (int(cardset[1]) << 32)


@jax.jit
def cardset_or(a: jnp.ndarray, b: jnp.ndarray) -> jnp.ndarray:
    """Bitwise OR of two cardsets (uint32[2])."""
    return a | b


@jax.jit
def set_bit(cardset: jnp.ndarray, bit_pos: int) -> jnp.ndarray:
    """Set bit at position in cardset (uint32[2])."""
    bit_pos = jnp.uint32(bit_pos)
    word = bit_pos >> 5
    mask = jnp.uint32(1) << (bit_pos & jnp.uint32(31))

    # Mask lands in the low word for bits 0..31 and the high word otherwise
    bit_mask = jnp.where(jnp.arange(2, dtype=jnp.uint32) == word, mask, jnp.uint32(0))
    return cardset | bit_mask


@jax.jit
def get_bit(cardset: jnp.ndarray, bit_pos: int) -> jnp.uint32:
    """Get bit at position in cardset (uint32[2])."""
    bit_pos = jnp.uint32(bit_pos)
    word = cardset[(bit_pos >> 5).astype(jnp.int32)]
    return (word >> (bit_pos & jnp.uint32(31))) & jnp.uint32(1)


@jax.jit
def count_bits(cardset: jnp.ndarray) -> jnp.int32:
    """Population count of a cardset (uint32[2])."""
    return jnp.sum(jnp.bitwise_count(cardset)).astype(jnp.int32)

