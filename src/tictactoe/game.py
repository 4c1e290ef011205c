"""Core rules, undo history and session scoring for 3x3 tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Mark(str, Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


Cell = Optional[Mark]  # None means empty
Board = Tuple[Cell, ...]

BOARD_SIZE = 9

# Scan order matters: the first uniformly marked line is the one reported.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class OutcomeStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: OutcomeStatus
    winner: Optional[Mark] = None
    line: FrozenSet[int] = frozenset()

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeStatus.DRAW)

    @classmethod
    def win(cls, winner: Mark, line: Tuple[int, int, int]) -> "Outcome":
        return cls(OutcomeStatus.WIN, winner, frozenset(line))

    @property
    def is_terminal(self) -> bool:
        return self.status is not OutcomeStatus.IN_PROGRESS


@dataclass(frozen=True)
class HistorySnapshot:
    """Board and turn as they were just before a move."""

    board: Board
    turn: Mark


@dataclass
class Scoreboard:
    x: int = 0
    o: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome.status is OutcomeStatus.DRAW:
            self.draws += 1
        elif outcome.winner is Mark.X:
            self.x += 1
        elif outcome.winner is Mark.O:
            self.o += 1

    def as_dict(self) -> dict:
        return {"X": self.x, "O": self.o, "draws": self.draws}


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def evaluate(board: Board) -> Outcome:
    """Classify ``board`` as a win, a draw or a game still in progress.

    Lines are checked rows first, then columns, then the two diagonals; the
    first uniformly marked line wins. The result depends only on the cells,
    never on the order of the moves that produced them.
    """
    for a, b, c in WINNING_LINES:
        v = board[a]
        if v is not None and v == board[b] == board[c]:
            return Outcome.win(v, (a, b, c))
    if all(cell is not None for cell in board):
        return Outcome.draw()
    return Outcome.in_progress()


@dataclass
class GameEngine:
    """Two-player game state with single-step undo and a running scoreboard.

    Illegal requests (occupied or out-of-range cells, moves after the game has
    ended, undo with nothing to undo) leave the state untouched.
    """

    board: Board = field(default_factory=empty_board)
    turn: Mark = Mark.X
    history: List[HistorySnapshot] = field(default_factory=list)
    scores: Scoreboard = field(default_factory=Scoreboard)
    # Set once the current terminal outcome has been added to ``scores``
    scored_for_current_outcome: bool = False

    # ---- queries ----

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.board)

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def moves_played(self) -> int:
        return sum(1 for cell in self.board if cell is not None)

    @property
    def can_undo(self) -> bool:
        return bool(self.history) and not self.is_over

    def is_playable(self, index: int) -> bool:
        if not 0 <= index < BOARD_SIZE:
            return False
        return self.board[index] is None and not self.is_over

    # ---- operations ----

    def apply_move(self, index: int) -> None:
        if not 0 <= index < BOARD_SIZE:
            logger.debug("Ignoring move at %r: outside the board", index)
            return
        if self.board[index] is not None:
            logger.debug("Ignoring move at %d: cell occupied", index)
            return
        if self.is_over:
            logger.debug("Ignoring move at %d: game already finished", index)
            return

        self.history.append(HistorySnapshot(self.board, self.turn))
        cells = list(self.board)
        cells[index] = self.turn
        self.board = tuple(cells)
        self.turn = self.turn.other

        self._score_transition()

    def undo(self) -> None:
        if not self.history:
            logger.debug("Ignoring undo: no moves to take back")
            return
        if self.is_over:
            logger.debug("Ignoring undo: game already finished")
            return
        snapshot = self.history.pop()
        self.board = snapshot.board
        self.turn = snapshot.turn

    def new_game(self) -> None:
        self.board = empty_board()
        self.turn = Mark.X
        self.history = []
        self.scored_for_current_outcome = False

    def reset_scores(self) -> None:
        self.scores = Scoreboard()
        logger.info("Scores reset")
        self.new_game()

    # ---- helpers ----

    def _score_transition(self) -> None:
        outcome = self.outcome
        if not outcome.is_terminal or self.scored_for_current_outcome:
            return
        self.scores.record(outcome)
        self.scored_for_current_outcome = True
        if outcome.winner is not None:
            logger.info(
                "Game won by %s on line %s", outcome.winner.value, sorted(outcome.line)
            )
        else:
            logger.info("Game drawn")
