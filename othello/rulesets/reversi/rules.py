from __future__ import annotations

from typing import Any, Dict, List

from othello.core.primitives import Explanation
from othello.models.board import CELLS, Board, coords_of, index_of
from othello.models.enums import Cell, Outcome, Player, opponent

DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1),
              (0, -1),           (0, 1),
              (1, -1),  (1, 0),  (1, 1)]


def _check_index(index: int) -> None:
    if not 0 <= index < CELLS:
        raise ValueError(f"cell index out of range: {index}")


def _ray(board: Board, row: int, col: int, dr: int, dc: int, own: Cell, other: Cell) -> List[int]:
    """Opponent run starting next to (row, col); empty unless closed by an own disc."""
    run: List[int] = []
    r, c = row + dr, col + dc
    while Board.in_bounds(r, c):
        cell = board.cell_at(r, c)
        if cell is other:
            run.append(index_of(r, c))
        elif cell is own:
            return run
        else:
            break
        r += dr
        c += dc
    return []


def compute_flips(board: Board, index: int, player: Player) -> frozenset[int]:
    """Indices captured by `player` placing at `index`; empty means illegal."""
    _check_index(index)
    if board[index] is not Cell.EMPTY:
        return frozenset()
    own, other = player.cell, opponent(player).cell
    row, col = coords_of(index)
    flips: set[int] = set()
    for dr, dc in DIRECTIONS:
        flips.update(_ray(board, row, col, dr, dc, own, other))
    return frozenset(flips)


def has_any_legal_move(board: Board, player: Player) -> bool:
    return any(compute_flips(board, i, player) for i in range(CELLS))


def legal_moves(board: Board, player: Player) -> Dict[int, frozenset[int]]:
    out: Dict[int, frozenset[int]] = {}
    for i in range(CELLS):
        flips = compute_flips(board, i, player)
        if flips:
            out[i] = flips
    return out


def outcome_of(board: Board) -> Outcome:
    black, white = board.score()
    if black > white:
        return Outcome.BLACK
    if white > black:
        return Outcome.WHITE
    return Outcome.DRAW


def explain_move(board: Board, index: int, player: Player) -> Explanation:
    """Per-direction breakdown of a candidate placement for the UI."""
    _check_index(index)
    row, col = coords_of(index)
    steps: List[Dict[str, Any]] = [{"check": "cell_empty", "ok": board[index] is Cell.EMPTY}]
    if not steps[0]["ok"]:
        return Explanation(ok=False, steps=steps, outcome={"reason": "cell occupied"})
    own, other = player.cell, opponent(player).cell
    captured: set[int] = set()
    for dr, dc in DIRECTIONS:
        run = _ray(board, row, col, dr, dc, own, other)
        steps.append({"check": "ray", "direction": [dr, dc], "ok": bool(run), "flips": run})
        captured.update(run)
    if not captured:
        return Explanation(ok=False, steps=steps, outcome={"reason": "no discs flipped"})
    return Explanation(ok=True, steps=steps, outcome={"flips": sorted(captured), "gain": len(captured) + 1})
