"""
Additive (Weyl) walk over user ids used to pick the user of each edge.
"""

from __future__ import annotations

# Knuth's multiplicative hashing constant; odd and prime
STRIDE = 2654435761


class EdgeAssigner:
    """
    Holds the running user cursor for a whole generator run.

    The cursor starts at 0 and is never reset: training and validation
    edges of every movie advance the same walk.
    """

    def __init__(self, nusers: int, stride: int = STRIDE, start: int = 0):
        if nusers < 1:
            raise ValueError(f"nusers must be ≥1; got {nusers}")
        self.nusers = nusers
        self.stride = stride
        self.cursor = start % nusers

    def next_user_id(self) -> int:
        self.cursor = (self.cursor + self.stride) % self.nusers
        return self.cursor
