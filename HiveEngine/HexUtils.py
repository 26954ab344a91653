DIRECTIONS = [(1, 0), (-1, 0), (0, 1),
              (0, -1), (1, -1), (-1, 1)]


def add_dir(coord, direction):
    return (coord[0] + direction[0], coord[1] + direction[1])


def get_adjacent_cells(q, r):
    """
    Returns a generator of the six neighbors of cell (q, r).
    """
    return ((q + dq, r + dr) for dq, dr in DIRECTIONS)


def neighbors(coord):
    return [(coord[0] + dq, coord[1] + dr) for dq, dr in DIRECTIONS]


def are_adjacent(a, b):
    return (b[0] - a[0], b[1] - a[1]) in DIRECTIONS


def shared_neighbors(a, b):
    """Cells adjacent to both `a` and `b` (the two flanks of the a->b edge)."""
    bn = set(neighbors(b))
    return [n for n in neighbors(a) if n in bn]


def hex_distance(q1, r1, q2, r2):
    x1, z1 = q1, r1
    y1 = -x1 - z1
    x2, z2 = q2, r2
    y2 = -x2 - z2
    return (abs(x1 - x2) + abs(y1 - y2) + abs(z1 - z2)) // 2
