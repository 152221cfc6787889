"""
Bracket positions: canonical seed-to-slot ordering for a power-of-two draw.

Consecutive pairs of the returned list meet in round 1:
  2-entry -> [0, 1]                    -> (0v1)
  4-entry -> [0, 3, 1, 2]              -> (0v3), (1v2)
  8-entry -> [0, 6, 3, 5, 1, 7, 2, 4]  -> (0v6), (3v5), (1v7), (2v4)

Every round-1 pair holds one index from the top half and one from the bottom half,
so the top two indices cannot meet before the final.
"""

from typing import List

from tournament_engine.services.engine_errors import InvalidSize


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    return 1 << max(0, (n - 1).bit_length())


def bracket_positions(size: int) -> List[int]:
    """
    Seed-rank index for each bracket slot of a *size*-entry draw.

    Raises:
        InvalidSize: size < 2 or not a power of two
    """
    if size < 2 or not is_power_of_two(size):
        raise InvalidSize(f"Bracket size must be a power of two >= 2, got {size}")

    if size == 2:
        return [0, 1]

    half = size // 2
    left = bracket_positions(half)
    right = bracket_positions(half)

    positions = [0] * size
    for i in range(half):
        positions[i * 2] = left[i]
        positions[i * 2 + 1] = right[half - 1 - i] + half
    return positions
