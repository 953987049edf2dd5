from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import Settings
from .move import Player
from .shell import Session, run_shell


def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description='Play Nim against an optimal machine')
    parser.add_argument('--machine-first', action='store_true', default=settings.opener is Player.MACHINE,
                        help='Let the machine open the first game')
    parser.add_argument('--verbose', action='store_true', default=settings.verbose,
                        help='Start with verbose board rendering (binary rows and nim-sum)')
    parser.add_argument('--log-level', default=settings.log_level,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], type=str.upper,
                        help='Logging level for diagnostics on stderr')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    session = Session(
        opener=Player.MACHINE if args.machine_first else Player.HUMAN,
        verbose=args.verbose,
    )
    run_shell(session)


if __name__ == '__main__':
    main()
