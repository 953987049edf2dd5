"""
Nim core Python package.

Game model and machine strategy for standard and misère Nim, kept free of
I/O so the shell, the Flask app and the tests can share it.
Modules:
- move.py: Player, Variant, Move
- errors.py: ErrorKind and the NimError hierarchy
- strategy.py: nim-sum, StandardStrategy, MisereStrategy
- engine.py: GameEngine, create_game, parse_rows
- shell.py: line-oriented command shell and its Session
- config.py: environment-driven Settings
- cli.py: argparse entry point
"""
