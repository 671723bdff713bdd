from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from .config import GameConfig
from .grid import digit_presence, pretty
from .manager import SessionManager


def _show(mgr: SessionManager) -> None:
    s = mgr.session
    highlights = set(mgr.possible_matches())
    print(pretty(s.grid, s.cols, s.selected, highlights))
    digits = ''.join(str(d) if on else '·' for d, on in digit_presence(s.grid).items())
    undo = 'yes' if mgr.undo_available else 'no'
    print(f"score {s.score} | refills {s.refills_remaining} | undo {undo} | digits {digits}")


def _print_hint(mgr: SessionManager) -> None:
    h = mgr.hint()
    if h is None:
        print('No match on the board. Try a refill.')
    else:
        print(f"Hint: {h.idx1} and {h.idx2} ({h.reasoning})")


def _play(mgr: SessionManager) -> None:
    print('Commands: "<a> <b>" match, "s <i>" select, r refill, u undo, h hint, n new game, q quit')
    while True:
        _show(mgr)
        if mgr.won:
            print('VICTORY! Board cleared.')
            text = input('New game? [y/N] ').strip().lower()
            if text not in ('y', 'yes'):
                return
            mgr.reset()
            continue
        try:
            text = input('> ').strip()
        except EOFError:
            return
        parts = text.replace(',', ' ').split()
        if not parts:
            continue
        cmd = parts[0].lower()
        if cmd == 'q':
            return
        if cmd == 'r':
            res = mgr.refill()
        elif cmd == 'u':
            res = mgr.undo()
        elif cmd == 'n':
            res = mgr.reset()
        elif cmd == 'h':
            _print_hint(mgr)
            continue
        else:
            try:
                nums = [int(p) for p in (parts[1:] if cmd == 's' else parts)]
            except ValueError:
                print('Could not parse. Try again.')
                continue
            if len(nums) != (1 if cmd == 's' else 2):
                print('Could not parse. Try again.')
                continue
            if cmd == 's':
                res = mgr.select(nums[0])
            else:
                mgr.clear_selection()
                mgr.select(nums[0])
                res = mgr.select(nums[1])
                if res.path is None:
                    print('Not a match.')
        if res.message:
            print(res.message)


def main() -> None:
    parser = argparse.ArgumentParser(description='Ten Master number-matching puzzle')
    parser.add_argument('--cols', type=int, default=None, help='Grid columns')
    parser.add_argument('--fill', type=int, default=None, help='Digits dealt on a new board')
    parser.add_argument('--db', default=None, help='SQLite DB file path for the saved game')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for deal and refills')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    parser.add_argument('--new', action='store_true', help='Discard any saved game first')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    args = parser.parse_args()

    cfg = GameConfig.from_env()
    if args.cols is not None and args.cols > 0:
        cfg = replace(cfg, cols=args.cols)
    if args.fill is not None and args.fill >= 0:
        cfg = replace(cfg, initial_fill=args.fill)
    logging.basicConfig(level=logging.DEBUG if (args.debug or cfg.debug) else logging.WARNING)

    mgr = SessionManager(cfg, db_path=args.db, rng=args.seed)
    if args.new and mgr.resumed:
        mgr.reset()

    if not args.play:
        print('Resumed board:' if mgr.resumed and not args.new else 'Initial board:')
        _show(mgr)
        _print_hint(mgr)
        return
    _play(mgr)


if __name__ == '__main__':
    main()
