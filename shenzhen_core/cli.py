from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

from .cards import DRAGON_COLORS
from .config import EngineConfig
from .session import GameSession
from .state import GameStatus

HELP = (
    "commands: move <card> <target> | collect <color> | wand | undo | restart | new [seed] | "
    "pause | resume | dev | help | quit\n"
    "cards: normal-A-7, dragon-B-2, flower   targets: col-0..7, free-0..2, foundation-A|B|C|flower"
)


def _status_line(session: GameSession) -> str:
    s = session.state
    extras: List[str] = [f"game {s.game_id}", s.status, f"undo {len(s.history)}"]
    if s.dev_mode:
        extras.append('DEV')
    if session.wand_available:
        extras.append('wand ready')
    ready = [c for c in DRAGON_COLORS if session.can_collect(c)]
    if ready:
        extras.append('collect ' + ','.join(ready))
    return ' | '.join(extras)


def run_command(session: GameSession, line: str) -> Optional[bool]:
    """Executes one text command. Returns None to quit, otherwise whether the state changed."""
    words = line.split()
    if not words:
        return False
    cmd, args = words[0].lower(), words[1:]
    simple: Dict[str, Callable[[], bool]] = {
        'wand': session.auto_solve,
        'undo': session.undo,
        'restart': session.restart,
        'pause': session.pause,
        'resume': session.resume,
        'dev': session.toggle_dev_mode,
        'auto': session.auto_move,
    }
    if cmd in ('quit', 'exit', 'q'):
        return None
    if cmd in simple and not args:
        return simple[cmd]()
    if cmd == 'move' and len(args) == 2:
        return session.move(args[0], args[1])
    if cmd == 'collect' and len(args) == 1:
        return session.collect(args[0].upper())
    if cmd == 'new':
        seed = int(args[0]) if args and args[0].lstrip('-').isdigit() else None
        return session.new_game(seed=seed)
    print(HELP)
    return False


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Shenzhen-style solitaire in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the first deal')
    parser.add_argument('--no-auto-first-move', action='store_true',
                        help='Reshuffle until no 1 or flower is exposed on the deal')
    parser.add_argument('--no-undo', action='store_true', help='Disable undo')
    parser.add_argument('--dev', action='store_true', help='Start in dev mode (moves are not validated)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log engine decisions')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    config = EngineConfig.from_env(EngineConfig(
        is_undo_enabled=not args.no_undo,
        no_auto_move_first_move=args.no_auto_first_move,
        dev_mode=args.dev,
    ))
    session = GameSession(config)
    session.new_game(seed=args.seed)
    print(HELP)
    print(session.state.board.pretty())
    print(_status_line(session))

    while True:
        try:
            line = input('> ')
        except EOFError:
            break
        changed = run_command(session, line)
        if changed is None:
            break
        if not changed and line.split() and line.split()[0].lower() not in ('help',):
            print('(no change)')
        print(session.state.board.pretty())
        print(_status_line(session))
        if session.state.status == GameStatus.WON:
            print('You win! Type "new" for another deal or "undo".')


if __name__ == '__main__':
    main()
