from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from HiveEngine.HiveRules import HiveRules

HexCoord = Tuple[int, int]


class Player(str, Enum):
    WHITE = "White"
    BLACK = "Black"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    @property
    def prefix(self) -> str:
        return self.value[0].lower()


class PieceType(str, Enum):
    QUEEN = "Queen"
    BEETLE = "Beetle"
    GRASSHOPPER = "Grasshopper"
    SPIDER = "Spider"
    ANT = "Ant"

    @property
    def letter(self) -> str:
        return self.value[0]


@dataclass(slots=True, eq=False)
class Piece:
    """A placed (or about to be placed) unit.

    Pieces compare by identity: two Spiders of the same colour are still
    different pieces. ``stack_level`` is 0 on the ground and only a Beetle
    ever sits above that.
    """

    piece_id: str
    kind: PieceType
    owner: Player
    position: HexCoord = (0, 0)
    stack_level: int = 0

    def legal_moves(self, board) -> List[HexCoord]:
        """Legal destinations for this piece on `board`."""
        if self.kind == PieceType.QUEEN:
            return HiveRules.get_queen_moves(board, self)
        elif self.kind == PieceType.BEETLE:
            return HiveRules.get_beetle_moves(board, self)
        elif self.kind == PieceType.GRASSHOPPER:
            return HiveRules.get_grasshopper_jumps(board, self)
        elif self.kind == PieceType.SPIDER:
            return HiveRules.get_spider_destinations(board, self)
        elif self.kind == PieceType.ANT:
            return HiveRules.get_ant_destinations(board, self)
        raise ValueError(f"Unknown piece kind: {self.kind!r}")

    def copy(self) -> "Piece":
        return Piece(self.piece_id, self.kind, self.owner, self.position, self.stack_level)

    def __repr__(self):
        return (f"Piece({self.piece_id}, {self.owner.value} {self.kind.value} "
                f"@ {self.position}, level={self.stack_level})")
