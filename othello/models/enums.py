from enum import Enum

Coord = tuple[int, int]  # (row, col)


class Cell(str, Enum):
    EMPTY = "empty"
    BLACK = "black"
    WHITE = "white"


class Player(str, Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def cell(self) -> Cell:
        return Cell.BLACK if self is Player.BLACK else Cell.WHITE

    @property
    def wire_id(self) -> int:
        return 0 if self is Player.BLACK else 1


class Outcome(str, Enum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"


class TurnPolicy(str, Enum):
    """
    Who moves after a placement:
    - FIXED_ROLES: the designated provider role moves after the human, the human after the provider
    - STRICT_ALTERNATION: the other player always moves next (both sides human driven)
    """

    FIXED_ROLES = "fixed_roles"
    STRICT_ALTERNATION = "strict_alternation"


class MoveKind(str, Enum):
    MOVE = "move"
    PASS = "pass"
    RESET = "reset"
    PROVIDER = "provider"


class MoveLogResult(str, Enum):
    APPLIED = "applied"
    ILLEGAL = "illegal"
    ERROR = "error"
    STALE = "stale"


def opponent(player: Player) -> Player:
    return Player.WHITE if player is Player.BLACK else Player.BLACK


def player_from_wire(value: int) -> Player:
    if value == 0:
        return Player.BLACK
    if value == 1:
        return Player.WHITE
    raise ValueError(f"unknown player id: {value!r}")
