from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from .engine import TileBoard
from .errors import TileBoardError
from .grid import Direction
from .outcome import MoveOutcome


def play_turn(board: TileBoard, direction: Direction) -> MoveOutcome:
    """Runs one full move + settle and returns the move's outcome."""
    outcome = board.move(direction)
    if outcome.changed:
        board.settle()
    return outcome


def _show_turn(board: TileBoard, outcome: MoveOutcome) -> None:
    if outcome.score:
        print(f"+{outcome.score}")
    print(board.pretty())


def parse_moves(text: str) -> List[Direction]:
    """Parses a scripted move list: "wasd", "w a s d" or "up,left,down"."""
    tokens = text.replace(',', ' ').split()
    if len(tokens) == 1 and tokens[0].upper() not in Direction.__members__:
        tokens = list(tokens[0])
    return [Direction.parse(t) for t in tokens]


def _prompt_direction() -> Optional[Direction]:
    while True:
        text = input('Move (w/a/s/d, q to quit): ').strip()
        if text.lower() in ('q', 'quit', 'exit'):
            return None
        try:
            return Direction.parse(text)
        except ValueError:
            print('Could not parse. Try again.')


def main() -> None:
    parser = argparse.ArgumentParser(description='Sliding-tile merge board')
    parser.add_argument('--width', type=int, default=4, help='Board width')
    parser.add_argument('--height', type=int, default=4, help='Board height')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for spawns and merges')
    parser.add_argument('--moves', default=None, help='Scripted moves, e.g. "wasd" or "up,left"; skips the prompt')
    parser.add_argument('--log-level', default=os.getenv('TILEBOARD_LOG_LEVEL', 'WARNING'), help='Logging level')
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    try:
        board = TileBoard(width=args.width, height=args.height, seed=args.seed)
        board.spawn_initial_tile()
        if board.capacity > 1:
            board.spawn_initial_tile()
    except (TileBoardError, ValueError) as e:
        parser.error(str(e))

    print(board.pretty())

    if args.moves is not None:
        try:
            script = parse_moves(args.moves)
        except ValueError as e:
            parser.error(str(e))
        for direction in script:
            outcome = play_turn(board, direction)
            if outcome.changed:
                print(f"\n{direction.name.lower()}:")
                _show_turn(board, outcome)
            if board.game_over:
                break
    else:
        while not board.game_over:
            direction = _prompt_direction()
            if direction is None:
                break
            outcome = play_turn(board, direction)
            if not outcome.changed:
                print('Nothing moves that way.')
                continue
            _show_turn(board, outcome)

    if board.game_over:
        print('Game over!')
    print(f"Score: {board.score}")


if __name__ == '__main__':
    main()
