from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .errors import InvalidConfiguration, InvalidIndex, InvalidMove, WrongTurn
from .move import Move, Player, Variant
from .strategy import Strategy, nim_sum, strategy_for

log = logging.getLogger(__name__)


class GameEngine:
    """
    Mutable state of one game: the rows, whose turn it is and the last move.

    Human and machine moves share validation, application and win detection;
    the variant only decides, through its strategy, which ply the machine
    picks and who wins once the board is empty.
    """

    def __init__(
        self,
        rows: Sequence[int],
        turn: Player = Player.HUMAN,
        variant: Variant = Variant.STANDARD,
        last_move: Optional[Move] = None,
    ) -> None:
        self._rows: List[int] = list(rows)
        self.turn = turn
        self.variant = variant
        self.strategy: Strategy = strategy_for(variant)
        self._last_move = last_move

    @property
    def rows(self) -> List[int]:
        """A copy of the row counts, top row first."""
        return list(self._rows)

    @property
    def last_move(self) -> Optional[Move]:
        return self._last_move

    def apply_human_move(self, row: int, count: int) -> Move:
        """Removes `count` sticks from the 0-based `row` on behalf of the human."""
        if self.turn is not Player.HUMAN:
            raise WrongTurn("It's the machines turn.")
        self._check_move(row, count)
        return self._apply(row, count)

    def apply_machine_move(self) -> Move:
        """Plays the strategy's optimal ply for the machine."""
        if self.turn is not Player.MACHINE:
            raise WrongTurn("It's the humans turn.")
        if self.is_over():
            raise InvalidMove("No sticks left to remove.")
        row, count = self.strategy.machine_move(self._rows)
        return self._apply(row, count)

    def is_over(self) -> bool:
        return all(sticks == 0 for sticks in self._rows)

    def winner(self) -> Optional[Player]:
        """The winning player, or None while sticks remain."""
        if not self.is_over() or self._last_move is None:
            return None
        return self.strategy.winner(self._last_move.player)

    def clone(self) -> 'GameEngine':
        """Independent copy of rows, turn and variant. The last move is not carried over."""
        return GameEngine(self._rows, turn=self.turn, variant=self.variant)

    def row_count(self) -> int:
        return len(self._rows)

    def sticks_in_row(self, row: int) -> int:
        if not self._valid_row(row):
            raise InvalidIndex(f"Row {row} out of range 0..{len(self._rows) - 1}")
        return self._rows[row]

    def nim_sum(self) -> int:
        return nim_sum(self._rows)

    def describe_last_move(self) -> str:
        return self._last_move.describe() if self._last_move is not None else ""

    def render(self, verbose: bool = False) -> str:
        """
        One line per row as "R: N" with 1-based R. Verbose mode adds each
        count in binary and a trailing nim-sum line.
        """
        if not verbose:
            return "\n".join(f"{i + 1}: {sticks}" for i, sticks in enumerate(self._rows))
        lines = [f"{i + 1}: {sticks} ({sticks:b})" for i, sticks in enumerate(self._rows)]
        total = self.nim_sum()
        lines.append(f"Nim sum: {total} ({total:b})")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"GameEngine(rows={self._rows!r}, turn={self.turn.name}, "
            f"variant={self.variant.name})"
        )

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self._rows)

    def _check_move(self, row: int, count: int) -> None:
        if not self._valid_row(row):
            raise InvalidMove(f"Row {row + 1} does not exist.")
        if count < 1 or count > self._rows[row]:
            raise InvalidMove(
                f"Cannot remove {count} stick(s) from row {row + 1} holding {self._rows[row]}."
            )

    def _apply(self, row: int, count: int) -> Move:
        self._rows[row] -= count
        move = Move(row=row, count=count, player=self.turn)
        self._last_move = move
        self.turn = self.turn.other()
        log.debug("%s -> %s", move.describe(), self._rows)
        return move


def parse_rows(tokens: Iterable[str]) -> List[int]:
    """Converts row tokens to positive ints, rejecting anything else."""
    rows: List[int] = []
    for tok in tokens:
        try:
            value = int(str(tok).strip())
        except ValueError:
            raise InvalidConfiguration(f"Not a number: {tok!r}") from None
        if value < 1:
            raise InvalidConfiguration(f"Row sizes must be positive, got {value}.")
        rows.append(value)
    return rows


def create_game(
    rows: Sequence[int],
    opener: Player = Player.HUMAN,
    variant: Variant = Variant.STANDARD,
) -> GameEngine:
    """Validates an initial configuration and builds a fresh game."""
    if not rows:
        raise InvalidConfiguration("At least one row is required.")
    for sticks in rows:
        if isinstance(sticks, bool) or not isinstance(sticks, int) or sticks < 1:
            raise InvalidConfiguration(f"Row sizes must be positive integers, got {sticks!r}.")
    log.debug("new %s game %s, %s opens", variant.value, list(rows), opener.value)
    return GameEngine(rows, turn=opener, variant=variant)
