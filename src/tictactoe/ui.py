"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import BOARD_SIZE
from .view import PresentationAdapter, ViewModel

logger = logging.getLogger(__name__)

app = FastAPI(title="Tic-Tac-Toe", description="Two-player tic-tac-toe with a running score")

def _log_view(view: ViewModel) -> None:
    logger.debug("%s after %d moves", view.status_text, view.moves_played)


# One game per process; gestures are applied one at a time.
ADAPTER = PresentationAdapter()
ADAPTER.subscribe(_log_view)
ADAPTER_LOCK = threading.Lock()


class CellRequest(BaseModel):
    """Request payload for placing the current player's mark."""

    index: int = Field(ge=0, le=BOARD_SIZE - 1, description="Row-major cell index")


def _serialize_view(view: ViewModel) -> Dict[str, object]:
    outcome = view.outcome
    cells: List[Dict[str, object]] = [
        {
            "index": cell.index,
            "value": cell.value,
            "disabled": cell.disabled,
            "winning": cell.winning,
            "label": cell.label,
        }
        for cell in view.cells
    ]
    return {
        "board": [c.value if c is not None else "" for c in view.board],
        "turn": view.turn.value,
        "outcome": {
            "status": outcome.status.value,
            "winner": outcome.winner.value if outcome.winner is not None else None,
            "line": sorted(outcome.line),
        },
        "scores": view.scores.as_dict(),
        "canUndo": view.can_undo,
        "statusText": view.status_text,
        "movesPlayed": view.moves_played,
        "cells": cells,
    }


@app.get("/api/state")
def get_state() -> Dict[str, object]:
    with ADAPTER_LOCK:
        return _serialize_view(ADAPTER.view())


@app.post("/api/cell")
def select_cell(request: CellRequest) -> Dict[str, object]:
    with ADAPTER_LOCK:
        return _serialize_view(ADAPTER.select_cell(request.index))


@app.post("/api/undo")
def undo() -> Dict[str, object]:
    with ADAPTER_LOCK:
        return _serialize_view(ADAPTER.undo())


@app.post("/api/new-game")
def new_game() -> Dict[str, object]:
    with ADAPTER_LOCK:
        return _serialize_view(ADAPTER.new_game())


@app.post("/api/reset-scores")
def reset_scores() -> Dict[str, object]:
    with ADAPTER_LOCK:
        return _serialize_view(ADAPTER.reset_scores())


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
        padding: 1rem;
        background: #f8fafc;
        color: #1e293b;
      }
      main {
        width: min(28rem, 100%);
      }
      h1 {
        margin: 0;
        text-align: center;
        font-size: 1.9rem;
        letter-spacing: -0.01em;
      }
      .tagline {
        margin: 0.25rem 0 1.5rem;
        text-align: center;
        color: #475569;
      }
      .toolbar {
        display: flex;
        align-items: center;
        justify-content: space-between;
        margin-bottom: 1rem;
      }
      .badges {
        display: flex;
        gap: 0.75rem;
      }
      .badge {
        padding: 0.25rem 0.6rem;
        border-radius: 6px;
        font-size: 0.75rem;
        font-weight: 600;
        background: #f1f5f9;
        color: #334155;
        box-shadow: inset 0 0 0 1px #e2e8f0;
      }
      .badge.x {
        background: #e0e7ff;
        color: #4338ca;
        box-shadow: inset 0 0 0 1px #c7d2fe;
      }
      .badge.o {
        background: #ffe4e6;
        color: #be123c;
        box-shadow: inset 0 0 0 1px #fecdd3;
      }
      #status {
        font-size: 0.9rem;
        font-weight: 500;
      }
      #board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        user-select: none;
      }
      .cell {
        aspect-ratio: 1 / 1;
        width: 100%;
        border-radius: 12px;
        border: 1px solid #e2e8f0;
        background: white;
        font-size: 2.25rem;
        font-weight: 700;
        font-family: inherit;
        cursor: pointer;
        transition: background 0.1s ease, transform 0.1s ease;
      }
      .cell:hover:not(:disabled) {
        background: #f8fafc;
      }
      .cell:active:not(:disabled) {
        transform: scale(0.99);
      }
      .cell:disabled {
        background: #f1f5f9;
        color: #94a3b8;
        cursor: not-allowed;
      }
      .cell.winning {
        background: #d1fae5;
        border-color: #6ee7b7;
      }
      .cell-mark.x {
        color: #4f46e5;
      }
      .cell-mark.o {
        color: #e11d48;
      }
      .controls {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin-top: 1.5rem;
      }
      .controls button {
        padding: 0.5rem 0.75rem;
        border-radius: 6px;
        border: 1px solid #e2e8f0;
        background: white;
        color: #334155;
        font-family: inherit;
        font-size: 0.875rem;
        font-weight: 500;
        cursor: pointer;
      }
      .controls button:disabled {
        background: #f1f5f9;
        color: #94a3b8;
        cursor: not-allowed;
      }
      footer {
        margin-top: 1.5rem;
        text-align: center;
        font-size: 0.75rem;
        color: #64748b;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <p class=\"tagline\">First to get three in a row wins.</p>
      <div class=\"toolbar\">
        <div class=\"badges\">
          <span id=\"score-x\" class=\"badge x\">X: 0</span>
          <span id=\"score-o\" class=\"badge o\">O: 0</span>
          <span id=\"score-draws\" class=\"badge\">Draws: 0</span>
        </div>
        <div id=\"status\" aria-live=\"polite\"></div>
      </div>
      <div id=\"board\" role=\"grid\" aria-label=\"Tic tac toe board\"></div>
      <div class=\"controls\">
        <button id=\"undo\" type=\"button\" disabled>Undo</button>
        <button id=\"new-game\" type=\"button\">New Game</button>
        <button id=\"reset-scores\" type=\"button\">Reset Scores</button>
      </div>
      <footer>Tip: Click a square to place your mark. Undo works only before a game ends.</footer>
    </main>
    <script>
      const boardContainer = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const scoreXEl = document.getElementById('score-x');
      const scoreOEl = document.getElementById('score-o');
      const scoreDrawsEl = document.getElementById('score-draws');
      const undoButton = document.getElementById('undo');
      const newGameButton = document.getElementById('new-game');
      const resetScoresButton = document.getElementById('reset-scores');

      let viewState = null;
      let isRequestPending = false;

      async function send(path, payload) {
        if (isRequestPending) {
          return;
        }
        isRequestPending = true;
        try {
          const response = await fetch(path, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: payload ? JSON.stringify(payload) : undefined,
          });
          if (!response.ok) {
            throw new Error('Request failed');
          }
          setState(await response.json());
        } catch (error) {
          statusEl.textContent = error.message || 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      async function loadState() {
        const response = await fetch('/api/state');
        if (response.ok) {
          setState(await response.json());
        }
      }

      function setState(data) {
        viewState = data;
        renderBoard();
        renderScores();
        statusEl.textContent = viewState.statusText;
        undoButton.disabled = !viewState.canUndo;
      }

      function renderBoard() {
        boardContainer.innerHTML = '';
        viewState.cells.forEach((cell) => {
          const cellButton = document.createElement('button');
          cellButton.type = 'button';
          cellButton.classList.add('cell');
          if (cell.winning) {
            cellButton.classList.add('winning');
          }
          cellButton.setAttribute('aria-label', cell.label);
          if (cell.value) {
            const mark = document.createElement('span');
            mark.classList.add('cell-mark', cell.value === 'X' ? 'x' : 'o');
            mark.textContent = cell.value;
            cellButton.appendChild(mark);
          }
          cellButton.disabled = cell.disabled;
          if (!cell.disabled) {
            cellButton.addEventListener('click', () => send('/api/cell', { index: cell.index }));
          }
          boardContainer.appendChild(cellButton);
        });
      }

      function renderScores() {
        scoreXEl.textContent = `X: ${viewState.scores.X}`;
        scoreOEl.textContent = `O: ${viewState.scores.O}`;
        scoreDrawsEl.textContent = `Draws: ${viewState.scores.draws}`;
      }

      undoButton.addEventListener('click', () => send('/api/undo'));
      newGameButton.addEventListener('click', () => send('/api/new-game'));
      resetScoresButton.addEventListener('click', () => send('/api/reset-scores'));

      loadState();
    </script>
  </body>
</html>
"""
