from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Player(Enum):
    """The two sides of a game. There is no third party."""
    HUMAN = "human"
    MACHINE = "machine"

    def other(self) -> 'Player':
        return Player.MACHINE if self is Player.HUMAN else Player.HUMAN

    @classmethod
    def parse(cls, text: str) -> 'Player':
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown player: {text!r}") from None


class Variant(Enum):
    """Rule set, fixed when a game is created."""
    STANDARD = "standard"
    MISERE = "misere"

    @classmethod
    def parse(cls, text: str) -> 'Variant':
        key = str(text).strip().lower().replace("è", "e")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown variant: {text!r}") from None


@dataclass(frozen=True)
class Move:
    """A single ply: `count` sticks taken from the 0-based `row` by `player`."""
    row: int
    count: int
    player: Player

    def describe(self) -> str:
        """Human-readable form, with 1-based row numbering."""
        return f"Player {self.player.value} removed {self.count} stick(s) from row {self.row + 1}."

    def __str__(self) -> str:
        return self.describe()

    def to_json(self) -> Dict[str, Any]:
        return {"row": self.row + 1, "count": self.count, "player": self.player.value}
