from collections import deque

from HiveEngine.HexUtils import DIRECTIONS, add_dir, neighbors
from HiveEngine.Pieces import PieceType

ORIGIN = (0, 0)


class Board:
    """
    Arena of placed pieces.

      pieces  : flat list in insertion order (only used for drawing order)
      _stacks : (q, r) -> list of pieces at that cell, bottom first

    At most one piece sits at level 0 of a cell and the levels of a stack
    are always 0..k.
    """

    __slots__ = ("pieces", "_stacks")

    def __init__(self):
        self.pieces = []
        self._stacks = {}

    def copy(self):
        """Fully independent copy: pieces are duplicated, never shared."""
        new_board = Board()
        new_board.pieces = [p.copy() for p in self.pieces]
        for piece in sorted(new_board.pieces, key=lambda p: p.stack_level):
            new_board._stacks.setdefault(piece.position, []).append(piece)
        return new_board

    # ---------------------------------------------------------
    # Topology
    # ---------------------------------------------------------
    @staticmethod
    def directions():
        return list(DIRECTIONS)

    @staticmethod
    def add_dir(coord, direction):
        return add_dir(coord, direction)

    @staticmethod
    def neighbors(coord):
        return neighbors(coord)

    # ---------------------------------------------------------
    # Positional queries
    # ---------------------------------------------------------
    def is_empty(self, coord, ignore=None):
        """True if nothing but (optionally) `ignore` occupies `coord`."""
        stack = self._stacks.get(coord)
        if not stack:
            return True
        return all(p is ignore for p in stack)

    def get_stack(self, coord):
        return list(self._stacks.get(coord, ()))

    def stack_height(self, coord):
        return len(self._stacks.get(coord, ()))

    def top_piece_at(self, coord):
        stack = self._stacks.get(coord)
        return stack[-1] if stack else None

    def is_top_piece(self, piece):
        return self.top_piece_at(piece.position) is piece

    def occupied_cells(self):
        return [coord for coord, stack in self._stacks.items() if stack]

    def pieces_of(self, player):
        return [p for p in self.pieces if p.owner == player]

    def find_queen(self, player):
        for piece in self.pieces:
            if piece.owner == player and piece.kind == PieceType.QUEEN:
                return piece
        return None

    def all_coords_around_hive(self):
        """Empty cells touching the hive, or just the origin on an empty board."""
        occupied = self.occupied_cells()
        if not occupied:
            return [ORIGIN]
        around = set()
        for coord in occupied:
            for nb in neighbors(coord):
                if self.is_empty(nb):
                    around.add(nb)
        return sorted(around)

    # ---------------------------------------------------------
    # Connectivity
    # ---------------------------------------------------------
    @staticmethod
    def _all_reachable(occupied):
        if len(occupied) <= 1:
            return True
        start = next(iter(occupied))
        seen = {start}
        frontier = deque([start])
        while frontier:
            cur = frontier.popleft()
            for nb in neighbors(cur):
                if nb in occupied and nb not in seen:
                    seen.add(nb)
                    frontier.append(nb)
        return len(seen) == len(occupied)

    def is_connected(self):
        return self._all_reachable(set(self.occupied_cells()))

    def is_hive_intact(self, moving_piece, new_coord):
        """
        Would the hive still be one connected group with `moving_piece`
        standing at `new_coord`? Nothing is mutated.
        """
        occupied = {coord for coord, stack in self._stacks.items()
                    if any(p is not moving_piece for p in stack)}
        occupied.add(new_coord)
        return self._all_reachable(occupied)

    # ---------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------
    def add_piece(self, piece, coord):
        stack = self._stacks.setdefault(coord, [])
        piece.position = coord
        piece.stack_level = len(stack)
        stack.append(piece)
        self.pieces.append(piece)

    def relocate(self, piece, coord):
        """Move the top piece `piece` onto the stack at `coord`."""
        stack = self._stacks.get(piece.position)
        if not stack or stack[-1] is not piece:
            raise ValueError(f"{piece!r} is not on top of a stack on this board")
        stack.pop()
        if not stack:
            del self._stacks[piece.position]
        target = self._stacks.setdefault(coord, [])
        piece.position = coord
        piece.stack_level = len(target)
        target.append(piece)

    def __len__(self):
        return len(self.pieces)

    def __repr__(self):
        cells = {coord: [p.piece_id for p in stack] for coord, stack in sorted(self._stacks.items())}
        return f"Board({cells})"
