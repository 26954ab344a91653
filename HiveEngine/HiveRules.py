from collections import deque

from HiveEngine.HexUtils import DIRECTIONS, add_dir, neighbors, shared_neighbors


class HiveRules:
    """Per-kind movement geometry.

    Every function takes the live board and the moving piece. The moving
    piece is treated as lifted while a path is traced (``ignore=piece``) and
    every final destination is confirmed with ``board.is_hive_intact``.
    """

    @staticmethod
    def can_slide(board, from_coord, to_coord, moving=None):
        """
        True if a ground piece can slide from `from_coord` into the adjacent
        empty cell `to_coord`:
          - destination is empty
          - destination touches at least one other piece
          - the two flanking cells of the edge are not both occupied
        """
        if not board.is_empty(to_coord, ignore=moving):
            return False
        if all(board.is_empty(n, ignore=moving) for n in neighbors(to_coord)):
            return False

        common = shared_neighbors(from_coord, to_coord)
        blocked = len(common) == 2 and all(not board.is_empty(c, ignore=moving) for c in common)
        return not blocked

    @staticmethod
    def keeps_contact(board, from_coord, to_coord, moving=None):
        """A crawling step must run along at least one occupied flank."""
        return any(not board.is_empty(c, ignore=moving)
                   for c in shared_neighbors(from_coord, to_coord))

    @staticmethod
    def can_crawl(board, from_coord, to_coord, moving=None):
        return (HiveRules.can_slide(board, from_coord, to_coord, moving)
                and HiveRules.keeps_contact(board, from_coord, to_coord, moving))

    @staticmethod
    def get_queen_moves(board, piece):
        start = piece.position
        return [c for c in neighbors(start)
                if HiveRules.can_slide(board, start, c, piece) and board.is_hive_intact(piece, c)]

    @staticmethod
    def get_beetle_moves(board, piece):
        start = piece.position
        on_top = board.stack_height(start) > 1
        moves = []
        for c in neighbors(start):
            if not board.is_hive_intact(piece, c):
                continue
            if board.is_empty(c):
                # climbing down from a stack ignores the corridor rule
                if on_top or HiveRules.can_slide(board, start, c, piece):
                    moves.append(c)
            else:
                moves.append(c)
        return moves

    @staticmethod
    def get_grasshopper_jumps(board, piece):
        possible_destinations = []
        for direction in DIRECTIONS:
            nxt = add_dir(piece.position, direction)
            jumped = False
            while not board.is_empty(nxt):
                jumped = True
                nxt = add_dir(nxt, direction)
            if jumped and board.is_hive_intact(piece, nxt):
                possible_destinations.append(nxt)
        return possible_destinations

    @staticmethod
    def get_spider_destinations(board, piece):
        """
        Every cell the spider can end on after exactly three crawling steps,
        never revisiting a cell of the same path.
        """
        results = []

        def dfs(cur, path):
            if len(path) == 4:
                if cur not in results and board.is_hive_intact(piece, cur):
                    results.append(cur)
                return
            for nb in neighbors(cur):
                if nb in path:  # no back-tracking
                    continue
                if not HiveRules.can_crawl(board, cur, nb, piece):
                    continue
                dfs(nb, path + [nb])

        dfs(piece.position, [piece.position])
        return results

    @staticmethod
    def get_ant_destinations(board, piece):
        """
        Flood-fill all empty cells reachable by the ant while respecting the
        crawl rule on every step.
        """
        start = piece.position
        visited = {start}
        frontier = deque([start])
        reachable = []
        while frontier:
            cur = frontier.popleft()
            for nb in neighbors(cur):
                if nb in visited:
                    continue
                if not HiveRules.can_crawl(board, cur, nb, piece):
                    continue
                visited.add(nb)
                reachable.append(nb)
                frontier.append(nb)
        return [c for c in reachable if board.is_hive_intact(piece, c)]
