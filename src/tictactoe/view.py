"""Projection of engine state into a view model, plus gesture forwarding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from .game import Board, GameEngine, Mark, Outcome, OutcomeStatus, Scoreboard


@dataclass(frozen=True)
class CellView:
    index: int
    value: str  # "X", "O" or "" for empty
    disabled: bool
    winning: bool
    label: str


@dataclass(frozen=True)
class ViewModel:
    board: Board
    turn: Mark
    outcome: Outcome
    scores: Scoreboard
    can_undo: bool
    status_text: str
    moves_played: int
    cells: Tuple[CellView, ...]


Listener = Callable[[ViewModel], None]


def status_text(outcome: Outcome, turn: Mark) -> str:
    if outcome.status is OutcomeStatus.WIN and outcome.winner is not None:
        return f"Winner: {outcome.winner.value}"
    if outcome.status is OutcomeStatus.DRAW:
        return "Draw"
    return f"Next: {turn.value}"


def cell_label(index: int, value: str) -> str:
    return f"Cell {index + 1}, {value or 'empty'}"


@dataclass
class PresentationAdapter:
    """Reads a :class:`GameEngine` for rendering and feeds user gestures back.

    Holds no game state of its own; every view is computed from the engine.
    Subscribers are called with a fresh view after each gesture.
    """

    engine: GameEngine = field(default_factory=GameEngine)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    def view(self) -> ViewModel:
        engine = self.engine
        outcome = engine.outcome
        cells = []
        for index, cell in enumerate(engine.board):
            value = cell.value if cell is not None else ""
            cells.append(
                CellView(
                    index=index,
                    value=value,
                    disabled=not engine.is_playable(index),
                    winning=index in outcome.line,
                    label=cell_label(index, value),
                )
            )
        return ViewModel(
            board=engine.board,
            turn=engine.turn,
            outcome=outcome,
            scores=Scoreboard(engine.scores.x, engine.scores.o, engine.scores.draws),
            can_undo=engine.can_undo,
            status_text=status_text(outcome, engine.turn),
            moves_played=engine.moves_played,
            cells=tuple(cells),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- gestures ----

    def select_cell(self, index: int) -> ViewModel:
        self.engine.apply_move(index)
        return self._publish()

    def undo(self) -> ViewModel:
        self.engine.undo()
        return self._publish()

    def new_game(self) -> ViewModel:
        self.engine.new_game()
        return self._publish()

    def reset_scores(self) -> ViewModel:
        self.engine.reset_scores()
        return self._publish()

    def _publish(self) -> ViewModel:
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
        return view
