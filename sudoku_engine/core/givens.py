"""Initial puzzle values: the default game and compact string parsing."""

from __future__ import annotations
from typing import List, Tuple

Given = Tuple[int, int, int]

# An easy 9x9 game, used when no puzzle is supplied.
DEFAULT_GIVENS: List[Given] = [
    (0, 2, 7), (0, 3, 4),
    (1, 0, 1), (1, 8, 7),
    (2, 3, 9), (2, 7, 8),
    (3, 7, 9), (3, 8, 8),
    (4, 1, 4), (4, 4, 6), (4, 5, 5), (4, 7, 3),
    (5, 0, 3), (5, 2, 8), (5, 4, 2),
    (6, 0, 4),
    (7, 0, 2), (7, 3, 5), (7, 6, 3),
    (8, 2, 1), (8, 3, 7), (8, 5, 3), (8, 7, 5),
]
DEFAULT_DEGREE = 3


def degree_for_length(length: int) -> int:
    """
    Find the degree whose full grid has ``length`` cells.

    Raises:
        ValueError: If no degree matches (length must be degree ** 4).
    """
    degree = 1
    while degree ** 4 < length:
        degree += 1
    if degree ** 4 != length:
        raise ValueError(f"Puzzle length must be degree**4 (16, 81, 256...), got {length}")
    return degree


def parse_givens(s: str) -> Tuple[int, List[Given]]:
    """
    Parse a compact puzzle string into its degree and given triples.

    Args:
        s: One character per cell in row-major order. ``0`` or ``.`` for an
           empty cell, ``1``-``9`` for digits, ``A``-``Z`` for 10 and up.
           Whitespace is ignored.

    Returns:
        Tuple of (degree, [(row, col, digit), ...]).
    """
    chars = [ch for ch in s if not ch.isspace()]
    degree = degree_for_length(len(chars))
    size = degree * degree

    givens = []
    for idx, ch in enumerate(chars):
        if ch in '0.':
            continue
        if ch.isdigit():
            digit = int(ch)
        elif ch.isalpha():
            digit = ord(ch.upper()) - ord('A') + 10
        else:
            raise ValueError(f"Unexpected character {ch!r} at position {idx}")
        if digit > size:
            raise ValueError(f"Digit {ch!r} at position {idx} exceeds board size {size}")
        givens.append((idx // size, idx % size, digit))

    return degree, givens
