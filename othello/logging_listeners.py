from __future__ import annotations

import logging

from . import storage
from .events import MoveEvent, event_bus
from .models.api import MoveLogEntry

logger = logging.getLogger("othello.moves")


def _on_move_event(ev: MoveEvent) -> None:
    # Convert event to MoveLogEntry JSON for persistence
    entry = MoveLogEntry(
        session_id=ev.session_id,
        generation=ev.generation,
        kind=ev.kind,
        result=ev.result,
        player=ev.player,
        index=ev.index,
        flips=ev.flips,
        message=ev.message,
    )
    storage.logs.append(ev.session_id, entry.model_dump_json())
    logger.debug(
        "session=%s gen=%s %s %s player=%s index=%s %s",
        ev.session_id, ev.generation, ev.kind.value, ev.result.value,
        ev.player.value if ev.player else None, ev.index, ev.message or "",
    )


_registered = False


def register_listeners() -> None:
    global _registered
    if _registered:
        return
    event_bus.subscribe(MoveEvent, _on_move_event)
    _registered = True
