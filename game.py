from __future__ import annotations

# Facade module that re-exports the Nim core.
# The Flask app and the tests import from here; the single-responsibility
# modules live under nim_core/*.

from nim_core.move import Move, Player, Variant  # noqa: F401
from nim_core.errors import (  # noqa: F401
    ErrorKind,
    NimError,
    WrongTurn,
    InvalidMove,
    InvalidConfiguration,
    InvalidIndex,
)
from nim_core.strategy import (  # noqa: F401
    Strategy,
    StandardStrategy,
    MisereStrategy,
    nim_sum,
    strategy_for,
)
from nim_core.engine import GameEngine, create_game, parse_rows  # noqa: F401
from nim_core.shell import Session, Shell  # noqa: F401


def main() -> None:
    # CLI driver delegated to nim_core.cli
    from nim_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
