# tests/utils/providers.py
import asyncio
from typing import List, Sequence

from othello.models.board import Board
from othello.models.enums import Player


class ScriptedProvider:
    """Stands in for the external decision service: answers with pre-baked moves."""

    name = "scripted"

    def __init__(self, answers: Sequence[int], gate: asyncio.Event | None = None):
        self.answers = list(answers)
        self.gate = gate
        self.calls: List[tuple[str, Player]] = []

    async def next_move(self, board: Board, player: Player) -> int:
        self.calls.append((board.to_wire(), player))
        if self.gate is not None:
            await self.gate.wait()
        return self.answers.pop(0)
