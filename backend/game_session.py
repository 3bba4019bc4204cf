import logging
from enum import Enum

import game2048

logger = logging.getLogger(__name__)

DEFAULT_SHARE_URL = "https://2048.example.com"


class GameState(Enum):
    PLAYING = 'playing'
    OVER = 'over'


class GameSession:
    """
    Holds the board of one game and consumes turns on it.

    Score is 0 until the first accepted move, then the sum of the tiles on
    the board, recomputed after every accepted move. Once the game is over
    it stays over.
    """

    def __init__(self, rng=None, share_url=DEFAULT_SHARE_URL):
        self.rng = rng
        self.share_url = share_url
        self.board = game2048.initialize(rng)
        self.score = 0
        self.state = GameState.PLAYING
        self._check_game_over()

    @property
    def game_over(self):
        return self.state is GameState.OVER

    @property
    def cells(self):
        return game2048.board_to_cells(self.board)

    @property
    def share_message(self):
        if not self.game_over:
            return None
        return f"I scored {self.score} in 2048! {self.share_url}"

    def move(self, direction):
        """Returns True if the move was accepted (the board changed)."""
        direction = game2048.to_direction(direction)
        if self.game_over:
            return False

        new_board, changed = game2048.resolve_move(self.board, direction)
        if not changed:
            return False

        self.board = game2048.spawn_random_tile(new_board, self.rng)
        self.score = game2048.board_score(self.board)
        self._check_game_over()
        return True

    def _check_game_over(self):
        if self.state is GameState.PLAYING and game2048.is_game_over(self.board):
            self.state = GameState.OVER
            logger.info(f"Game over with score {self.score}")

    def to_dict(self):
        return {
            'cells': self.cells,
            'size': game2048.BOARD_SIZE,
            'score': self.score,
            'state': self.state.value,
            'game_over': self.game_over,
            'valid_directions': [d.value for d in game2048.valid_directions(self.board)],
            'share_message': self.share_message,
        }
