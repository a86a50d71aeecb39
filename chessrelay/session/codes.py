"""
Room codes - Short human-typeable identifiers.

Pure generation, no uniqueness check. SessionStore regenerates on
collision (26^6 = 308,915,776 codes, so collisions are rare).
"""

from __future__ import annotations
import random
import string


ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = string.ascii_uppercase


def generate_room_code(
    length: int = ROOM_CODE_LENGTH,
    alphabet: str = ROOM_CODE_ALPHABET,
    rng: random.Random | None = None,
) -> str:
    """
    Generate a random room code, e.g. "QWHZRT".

    Each symbol is drawn independently and uniformly from the alphabet.
    Pass a seeded random.Random for reproducible codes.
    """
    return "".join((rng or random).choices(alphabet, k=length))
