from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TextIO

from .engine import GameEngine, create_game, parse_rows
from .errors import InvalidConfiguration, InvalidMove, WrongTurn
from .move import Player, Variant

log = logging.getLogger(__name__)

SHELL_PROMPT = "nim> "
HUMAN_OPENER = "The human makes the initial move of the next new game."
MACHINE_OPENER = "The machine makes the initial move of the next new game."
GAME_NOT_RUNNING = "There is no game running at the moment"
INVALID_INPUT = "Error! The input is invalid."
ILLEGAL_MOVE = "Error! The provided move is illegal."
NOT_HUMANS_TURN = "It's not the humans turn."
INVALID_COMMAND = "Error! Invalid command."
HUMAN_WINS = "Congratulations! You won."
MACHINE_WINS = "Sorry! Machine wins."

HELP_TEXT = (
    "NEW <s1> <s2> ... <sn>: Creates a new nim game with n >= 1 rows and si >= 1 sticks per row. "
    "The human player starts by default.\n"
    "MISERE <s1> <s2> ... <sn>: Creates a new misere game.\n"
    "REMOVE <r> <s>: Removes s sticks from row r, then the machine replies.\n"
    "SWITCH: Changes the opener of the next game.\n"
    "PRINT: Prints the current board.\n"
    "VERBOSE (ON|OFF): Provides additional details about the state of the game.\n"
    "HELP: Show this helpful guide.\n"
    "QUIT: Quits the game."
)


@dataclass
class Session:
    """Per-shell state that outlives a single game."""
    game: Optional[GameEngine] = None
    opener: Player = Player.HUMAN
    verbose: bool = False


class Shell:
    """
    Line-oriented command loop around a GameEngine.

    Commands are matched on their upper-cased first letter, so "n 3 4 5",
    "NEW 3 4 5" and "nope 3 4 5" all start a standard game. Regular output
    goes to `out`, rejected input and moves to `err`.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        stdin: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.session = session or Session()
        self.stdin = stdin or sys.stdin
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            'N': lambda args: self.new_game(args, Variant.STANDARD),
            'M': lambda args: self.new_game(args, Variant.MISERE),
            'S': lambda args: self.switch_opener(),
            'R': self.remove,
            'V': self.set_verbose,
            'P': lambda args: self.print_game(),
            'H': lambda args: self.print_help(),
        }

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def _error(self, text: str) -> None:
        print(text, file=self.err)

    def run(self) -> None:
        """Reads commands until QUIT or end of input."""
        self._print(HUMAN_OPENER if self.session.opener is Player.HUMAN else MACHINE_OPENER)
        while True:
            self.out.write(SHELL_PROMPT)
            self.out.flush()
            line = self.stdin.readline()
            if not line:
                break
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Runs one command line. Returns False when the shell should stop."""
        tokens = line.split()
        if not tokens:
            self._print(INVALID_COMMAND)
            return True
        key = tokens[0][0].upper()
        if key == 'Q':
            return False
        handler = self._commands.get(key)
        if handler is None:
            self._print(INVALID_COMMAND)
            return True
        log.debug("command %s args=%s", tokens[0], tokens[1:])
        handler(tokens[1:])
        return True

    def new_game(self, args: List[str], variant: Variant) -> None:
        try:
            rows = parse_rows(args)
            game = create_game(rows, opener=self.session.opener, variant=variant)
        except InvalidConfiguration as e:
            log.debug("rejected configuration: %s", e)
            self.session.game = None
            self._error(INVALID_INPUT)
            return
        self.session.game = game
        if game.turn is Player.MACHINE:
            self._print(str(game.apply_machine_move()))
            self._report_if_over(game)

    def switch_opener(self) -> None:
        self.session.opener = self.session.opener.other()
        self._print(HUMAN_OPENER if self.session.opener is Player.HUMAN else MACHINE_OPENER)

    def remove(self, args: List[str]) -> None:
        game = self.session.game
        if game is None:
            self._print(GAME_NOT_RUNNING)
            return
        if game.is_over():
            self._report_if_over(game)
            return
        if len(args) != 2:
            self._error(INVALID_INPUT)
            return
        try:
            row, count = int(args[0]), int(args[1])
        except ValueError:
            self._error(INVALID_INPUT)
            return

        try:
            game.apply_human_move(row - 1, count)
        except WrongTurn:
            self._error(NOT_HUMANS_TURN)
            return
        except InvalidMove:
            self._error(ILLEGAL_MOVE)
            return
        if self._report_if_over(game):
            return

        self._print(str(game.apply_machine_move()))
        self._report_if_over(game)

    def set_verbose(self, args: List[str]) -> None:
        flag = args[0].upper() if args else ""
        if flag == "ON":
            self.session.verbose = True
        elif flag == "OFF":
            self.session.verbose = False
        else:
            self._error(INVALID_INPUT)

    def print_game(self) -> None:
        if self.session.game is None:
            self._print(GAME_NOT_RUNNING)
            return
        self._print(self.session.game.render(self.session.verbose))

    def print_help(self) -> None:
        self._print(HELP_TEXT)

    def _report_if_over(self, game: GameEngine) -> bool:
        if not game.is_over():
            return False
        self._print(HUMAN_WINS if game.winner() is Player.HUMAN else MACHINE_WINS)
        return True


def run_shell(session: Optional[Session] = None) -> None:
    Shell(session).run()
