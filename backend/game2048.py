import random
from enum import Enum
from typing import NamedTuple

import numpy as np

BOARD_SIZE = 4
EMPTY = 0
SPAWN_VALUES = (2, 4)
SPAWN_PROBABILITY_TWO = 0.9


class Direction(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'


class MoveResult(NamedTuple):
    board: np.ndarray
    changed: bool


class InvalidBoardError(ValueError):
    pass


class InvalidDirectionError(ValueError):
    pass


def to_direction(direction):
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(str(direction).lower())
    except ValueError:
        raise InvalidDirectionError(f"Unknown direction: {direction!r}") from None


def validate_board(board):
    """Returns the board as an integer ndarray, or raises InvalidBoardError."""
    board = np.asarray(board)
    if board.shape != (BOARD_SIZE, BOARD_SIZE):
        raise InvalidBoardError(
            f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got shape {board.shape}")
    if not np.issubdtype(board.dtype, np.integer):
        raise InvalidBoardError(f"Board cells must be integers, got {board.dtype}")

    tiles = board[board != EMPTY]
    # a power of two >= 2 has exactly one bit set and it is not bit 0
    if np.any(tiles < 2) or np.any(tiles & (tiles - 1)):
        raise InvalidBoardError(f"Board holds non power-of-two tiles: {sorted(set(tiles.tolist()))}")
    return board


def get_empty_board():
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)


def initialize(rng=None):
    board = get_empty_board()
    spawn_random_tile(board, rng)
    spawn_random_tile(board, rng)
    return board


def spawn_random_tile(board, rng=None):
    """
    Puts a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell.

    The board is updated in place and returned. A full board is left as is.
    `rng` only needs `choice` and `random`; it defaults to the `random` module.
    """
    rng = rng or random
    board = validate_board(board)
    empty_cells = [(int(i), int(j)) for i, j in zip(*np.where(board == EMPTY))]

    if not empty_cells:
        return board

    i, j = rng.choice(empty_cells)
    board[i, j] = SPAWN_VALUES[0] if rng.random() < SPAWN_PROBABILITY_TWO else SPAWN_VALUES[1]
    return board


def slide_and_merge(row):
    new_row = row[row != EMPTY]
    result_row = []

    i = 0
    while i < len(new_row):
        if i + 1 < len(new_row) and new_row[i] == new_row[i+1]:
            result_row.append(int(new_row[i]) * 2)
            i += 2
        else:
            result_row.append(new_row[i])
            i += 1

    while len(result_row) < len(row):
        result_row.append(EMPTY)

    return np.array(result_row, dtype=int)


def normalize(board, direction):
    """Turns a move in `direction` into a move to the left."""
    board = np.asarray(board)
    direction = to_direction(direction)
    if direction in (Direction.UP, Direction.DOWN):
        board = board.T
    if direction in (Direction.RIGHT, Direction.DOWN):
        board = board[:, ::-1]
    return board


def denormalize(board, direction):
    board = np.asarray(board)
    direction = to_direction(direction)
    if direction in (Direction.RIGHT, Direction.DOWN):
        board = board[:, ::-1]
    if direction in (Direction.UP, Direction.DOWN):
        board = board.T
    return board


def resolve_move(board, direction):
    """
    Slides and merges every line of the board towards `direction`.

    Returns a MoveResult with a fresh board; the input is never modified.
    `changed` is False only when no tile slid and nothing merged.
    """
    board = validate_board(board)
    direction = to_direction(direction)
    normalized = normalize(board, direction)

    new_board = np.zeros(normalized.shape, dtype=int)
    changed = False

    for i, row in enumerate(normalized):
        new_row = slide_and_merge(row)
        if not changed and not np.array_equal(row, new_row):
            changed = True
        new_board[i] = new_row

    return MoveResult(np.ascontiguousarray(denormalize(new_board, direction)), changed)


def is_game_over(board):
    """Checks if the game is over (no empty cells and no possible merges)."""
    board = validate_board(board)
    if EMPTY in board:
        return False

    for i in range(BOARD_SIZE):
        for j in range(BOARD_SIZE):
            current = board[i, j]
            if j < BOARD_SIZE - 1 and current == board[i, j + 1]:
                return False
            if i < BOARD_SIZE - 1 and current == board[i + 1, j]:
                return False

    return True


def valid_directions(board):
    board = validate_board(board)
    return [d for d in Direction if resolve_move(board, d).changed]


def board_to_cells(board):
    """Row-major list of the cell values, 0 for empty cells."""
    return [int(v) for v in validate_board(board).flatten()]


def board_score(board):
    return int(validate_board(board).sum())
