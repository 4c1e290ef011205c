"""Tic-tac-toe package exposing the game engine, view adapter, and the web application."""

from .game import GameEngine, Mark, Outcome, OutcomeStatus, Scoreboard, evaluate
from .ui import app
from .view import PresentationAdapter, ViewModel

__all__ = [
    "GameEngine",
    "Mark",
    "Outcome",
    "OutcomeStatus",
    "PresentationAdapter",
    "Scoreboard",
    "ViewModel",
    "app",
    "evaluate",
]
