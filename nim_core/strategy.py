from __future__ import annotations

from functools import reduce
from operator import xor
from typing import Dict, Optional, Protocol, Sequence, Tuple

from .move import Player, Variant

# (row index, sticks to remove)
Ply = Tuple[int, int]


def nim_sum(rows: Sequence[int]) -> int:
    """XOR of all row counts. Zero marks a safe (balanced) position."""
    return reduce(xor, rows, 0)


class Strategy(Protocol):
    variant: Variant

    def machine_move(self, rows: Sequence[int]) -> Ply:
        ...

    def winner(self, last_mover: Player) -> Player:
        ...


class StandardStrategy:
    """Normal play: whoever takes the last stick wins."""
    variant = Variant.STANDARD

    def machine_move(self, rows: Sequence[int]) -> Ply:
        """
        Picks the optimal ply for `rows`, which must not all be empty.

        From an unsafe position the machine restores a nim-sum of zero by
        XOR-ing the first row that carries the highest set bit of the
        nim-sum. From a safe position no such move exists, so it takes half
        (rounded up) of the first non-empty row and waits for a mistake.
        """
        total = nim_sum(rows)
        if total == 0:
            for i, sticks in enumerate(rows):
                if sticks:
                    return i, (sticks + 1) // 2
            raise ValueError("No sticks left to remove")

        bit = total.bit_length() - 1
        for i, sticks in enumerate(rows):
            if (sticks >> bit) & 1:
                return i, sticks - (sticks ^ total)
        # Unreachable: some row always carries the top bit of the nim-sum.
        raise ValueError(f"No row carries bit {bit} of nim-sum {total}")

    def winner(self, last_mover: Player) -> Player:
        return last_mover


class MisereStrategy:
    """Misère play: whoever takes the last stick loses.

    Only the endgame differs from normal play; every other position is
    handed to the standard strategy.
    """
    variant = Variant.MISERE

    def __init__(self, standard: Optional[StandardStrategy] = None) -> None:
        self._standard = standard or StandardStrategy()

    def machine_move(self, rows: Sequence[int]) -> Ply:
        singles = 0
        multis = 0
        multi_index: Optional[int] = None
        for i, sticks in enumerate(rows):
            if sticks > 1:
                multis += 1
                multi_index = i
            elif sticks == 1:
                singles += 1

        if multis == 1 and multi_index is not None:
            # Endgame: leave the opponent an odd number of single-stick rows.
            sticks = rows[multi_index]
            if singles % 2 == 0:
                return multi_index, sticks - 1
            return multi_index, sticks
        return self._standard.machine_move(rows)

    def winner(self, last_mover: Player) -> Player:
        return last_mover.other()


_STRATEGIES: Dict[Variant, Strategy] = {
    Variant.STANDARD: StandardStrategy(),
    Variant.MISERE: MisereStrategy(),
}


def strategy_for(variant: Variant) -> Strategy:
    """Returns the shared, stateless strategy for `variant`."""
    return _STRATEGIES[variant]
