from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...models.session import GameSession

from ...events import MoveEvent, event_bus
from ...models.enums import MoveKind, MoveLogResult, Player


def log_event(
    sess: GameSession,
    kind: MoveKind,
    result: MoveLogResult,
    player: Player | None = None,
    index: int | None = None,
    flips: Iterable[int] = (),
    message: str | None = None,
) -> None:
    event_bus.emit(
        MoveEvent(
            session_id=sess.id,
            generation=sess.generation,
            kind=kind,
            result=result,
            player=player,
            index=index,
            flips=sorted(flips),
            message=message,
        )
    )


def log_illegal(sess: GameSession, kind: MoveKind, error: Exception, player: Player | None = None, index: int | None = None) -> None:
    log_event(sess, kind, MoveLogResult.ILLEGAL, player=player, index=index, message=str(error))


def log_error(sess: GameSession, kind: MoveKind, error: Exception, player: Player | None = None) -> None:
    log_event(sess, kind, MoveLogResult.ERROR, player=player, message=str(error))
