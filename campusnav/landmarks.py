"""
Landmark records and campus YAML I/O.

A campus file lists the buildings (name, position, box size, base color) and
the walking edges between them:

    landmarks:
      - {name: Science Block, position: [-2, 0, 0], size: [1, 2, 1], color: "#ff0000"}
    edges:
      - [Science Block, Library, 5]
    directed: false
    start: Science Block
    end: Admin Office

`graph:` (an adjacency mapping) may be used instead of `edges:`.
"""

import math

import yaml

from campusnav.graph_store import GraphStore

# --- Sample campus (three buildings in a row) ---
SAMPLE_LANDMARKS = [
    {'name': 'Science Block', 'position': [-2, 0, 0], 'size': [1, 2, 1], 'color': '#ff0000'},
    {'name': 'Library', 'position': [0, 0, 0], 'size': [1.5, 3, 1], 'color': '#0000ff'},
    {'name': 'Admin Office', 'position': [2, 0, 0], 'size': [1, 1.5, 1], 'color': '#00ff00'},
]
SAMPLE_EDGES = [
    ['Science Block', 'Library', 5],
    ['Library', 'Admin Office', 3],
    ['Science Block', 'Admin Office', 10],
]
SAMPLE_ROUTE = ('Science Block', 'Admin Office')

DEFAULT_COLOR = '#cccccc'


class Landmark:
    """A labeled building: where it is, how big it is, its resting color."""

    def __init__(self, name, position, size=(1.0, 1.0, 1.0), color=DEFAULT_COLOR):
        self.name = str(name)
        self.position = _triple(position, 'position', name)
        self.size = _triple(size, 'size', name)
        self.color = normalize_color(color)

    def to_dict(self):
        return {
            'name': self.name,
            'position': list(self.position),
            'size': list(self.size),
            'color': self.color
        }

    def __eq__(self, other):
        if not isinstance(other, Landmark):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Landmark({self.name!r}, position={self.position}, color={self.color})"


def normalize_color(color):
    """
    Accepts '#rrggbb', 'rrggbb' or an int such as 0xff0000 (YAML reads
    0xff0000 as an int) and returns '#rrggbb'.
    """
    if isinstance(color, bool):
        raise ValueError(f"Invalid color: {color!r}")
    if isinstance(color, int):
        if not 0 <= color <= 0xFFFFFF:
            raise ValueError(f"Color out of range: {color:#x}")
        return f"#{color:06x}"
    if isinstance(color, str):
        hex_part = color[1:] if color.startswith('#') else color
        if len(hex_part) == 6:
            try:
                int(hex_part, 16)
            except ValueError:
                pass
            else:
                return '#' + hex_part.lower()
    raise ValueError(f"Invalid color: {color!r}")


def _triple(values, field, name):
    try:
        x, y, z = (float(v) for v in values)
    except (TypeError, ValueError):
        raise ValueError(f"Landmark {name!r}: {field} must be three numbers, got {values!r}")
    return (x, y, z)


def _weight(value, u, v):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Edge {u!r} -> {v!r}: weight must be a number, got {value!r}")
    if value < 0 or math.isnan(value):
        raise ValueError(f"Edge {u!r} -> {v!r}: weight must be non-negative, got {value!r}")
    return value


# ----------------------
# Building a campus from plain data
# ----------------------

def build_campus(data):
    """
    Turn a parsed campus mapping into (landmarks, graph).

    Returns:
      - list of Landmark in file order
      - GraphStore over the landmark names
    Raises ValueError for anything malformed.
    """
    if not isinstance(data, dict) or not data.get('landmarks'):
        raise ValueError("Campus config needs a non-empty 'landmarks' list")

    landmarks = []
    seen = set()
    for entry in data['landmarks']:
        if not isinstance(entry, dict):
            raise ValueError(f"Landmark entry must be a mapping, got {entry!r}")
        name = entry.get('name')
        if name is None or name == '':
            raise ValueError(f"Landmark without a name: {entry!r}")
        # YAML reads `name: 101` as an int; identifiers are always strings
        name = str(name)
        if name in seen:
            raise ValueError(f"Duplicate landmark name: {name!r}")
        seen.add(name)
        landmarks.append(Landmark(
            name,
            entry.get('position', (0.0, 0.0, 0.0)),
            entry.get('size', (1.0, 1.0, 1.0)),
            entry.get('color', DEFAULT_COLOR),
        ))

    if 'graph' in data:
        raw = data.get('graph') or {}
        if not isinstance(raw, dict):
            raise ValueError(f"'graph' must be a mapping, got {raw!r}")
        adjacency = {}
        for u, nbrs in raw.items():
            nbrs = nbrs or {}
            if not isinstance(nbrs, dict):
                raise ValueError(f"Neighbors of {u!r} must be a mapping, got {nbrs!r}")
            adjacency[str(u)] = {str(v): _weight(w, u, v) for v, w in nbrs.items()}
        _check_known([(u, v) for u, nbrs in adjacency.items() for v in nbrs], seen)
        # every building is a node even when it has no paths, in file order
        graph = GraphStore({lm.name: adjacency.get(lm.name, {}) for lm in landmarks})
    else:
        raw = data.get('edges') or []
        if not isinstance(raw, list):
            raise ValueError(f"'edges' must be a list, got {raw!r}")
        edges = []
        for e in raw:
            if not isinstance(e, (list, tuple)) or len(e) != 3:
                raise ValueError(f"Edge must be [from, to, weight], got {e!r}")
            u, v, w = e
            edges.append((str(u), str(v), _weight(w, u, v)))
        _check_known([(u, v) for u, v, _ in edges], seen)
        directed = bool(data.get('directed', False))
        adjacency = {lm.name: {} for lm in landmarks}
        for u, v, w in edges:
            adjacency[u][v] = w
            if not directed:
                adjacency[v][u] = w
        graph = GraphStore(adjacency)

    return landmarks, graph


def _check_known(pairs, names):
    for u, v in pairs:
        for node in (u, v):
            if node not in names:
                raise ValueError(f"Edge references unknown landmark: {node!r}")


def sample_campus():
    """The three-building campus used when no config is given."""
    return build_campus({'landmarks': SAMPLE_LANDMARKS, 'edges': SAMPLE_EDGES})


# ----------------------
# YAML I/O
# ----------------------

def load_config(path="config/campus.yaml"):
    """Raw campus mapping from YAML."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    return data or {}


def load_campus(path="config/campus.yaml"):
    """
    Load a campus file.
    Returns (landmarks, graph, data) where `data` is the raw mapping, so
    callers can read optional keys such as start / end.
    """
    data = load_config(path)
    landmarks, graph = build_campus(data)
    return landmarks, graph, data


def save_campus(landmarks, graph, path="config/campus.yaml", **extra):
    """
    Save landmarks and the full adjacency (as `graph:`) to YAML.
    Extra keyword arguments (e.g. start, end) are written at top level.
    """
    out = {
        'landmarks': [lm.to_dict() for lm in landmarks],
        'graph': graph.to_adjacency()
    }
    out.update(extra)
    with open(path, 'w') as f:
        yaml.safe_dump(out, f, sort_keys=False)
    return path
