from dataclasses import dataclass

from HiveEngine.Pieces import Piece, PieceType, Player

INITIAL_PIECES = {
    PieceType.QUEEN: 1,
    PieceType.SPIDER: 2,
    PieceType.BEETLE: 2,
    PieceType.GRASSHOPPER: 3,
    PieceType.ANT: 3,
}


@dataclass(frozen=True, slots=True)
class BankEntry:
    entry_id: str
    kind: PieceType
    owner: Player


class PieceBank:
    """
    Unplaced pieces of both players keyed by identifier, e.g. ``wQ1`` or
    ``bA3``. Entries are removed when their piece reaches the board.
    """

    __slots__ = ("entries",)

    def __init__(self, entries=None):
        self.entries = dict(entries) if entries is not None else {}

    @classmethod
    def full(cls):
        entries = {}
        for player in Player:
            for kind, count in INITIAL_PIECES.items():
                for n in range(1, count + 1):
                    entry_id = f"{player.prefix}{kind.letter}{n}"
                    entries[entry_id] = BankEntry(entry_id, kind, player)
        return cls(entries)

    def copy(self):
        # entries are frozen, sharing them is safe
        return PieceBank(self.entries)

    def entries_for(self, player):
        return [e for e in self.entries.values() if e.owner == player]

    def kinds_for(self, player):
        """Distinct kinds still in hand, in bank order."""
        kinds = []
        for entry in self.entries.values():
            if entry.owner == player and entry.kind not in kinds:
                kinds.append(entry.kind)
        return kinds

    def find(self, kind, owner):
        for entry in self.entries.values():
            if entry.kind == kind and entry.owner == owner:
                return entry
        return None

    def count(self, kind, owner):
        return sum(1 for e in self.entries.values() if e.kind == kind and e.owner == owner)

    def create_piece(self, entry_id):
        """Draw a piece for `entry_id` without consuming the entry."""
        entry = self.entries[entry_id]
        return Piece(entry.entry_id, entry.kind, entry.owner)

    def take(self, entry_id):
        """Remove `entry_id` from the bank and return its piece."""
        piece = self.create_piece(entry_id)
        del self.entries[entry_id]
        return piece

    def remove(self, entry_id):
        del self.entries[entry_id]

    def __len__(self):
        return len(self.entries)

    def __contains__(self, entry_id):
        return entry_id in self.entries
