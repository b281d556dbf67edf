"""
Scene controller: the one object that owns the campus for a viewer session.

It holds the landmarks, the walking graph, which building is selected,
what the search box matched and the current route. Colors are derived from
each landmark's own base color, so adding a building never needs new code.
The controller draws nothing itself; campusnav.visualize turns it into a
figure.
"""

from campusnav.dijkstra import path_weight, shortest_path
from campusnav.landmarks import load_campus, sample_campus

SELECTED_COLOR = '#ffff00'   # Yellow
MATCH_COLOR = '#00ffff'      # Cyan
ROUTE_COLOR = '#ffff00'


class SceneController:

    def __init__(self, landmarks, graph):
        self.landmarks = list(landmarks)
        self.by_name = {lm.name: lm for lm in self.landmarks}
        self.graph = graph

        self.colors = {}
        self.selected = None
        self.info_text = None
        self.route = []
        self.reset_colors()

    @classmethod
    def from_config(cls, path):
        landmarks, graph, _ = load_campus(path)
        return cls(landmarks, graph)

    @classmethod
    def sample(cls):
        landmarks, graph = sample_campus()
        return cls(landmarks, graph)

    def fresh(self):
        """A new controller over the same (read-only) landmarks and graph."""
        return SceneController(self.landmarks, self.graph)

    # --- per-session state ---

    def snapshot(self):
        """JSON-safe view state: selection, info text, colors and route."""
        return {
            'selected': self.selected,
            'info_text': self.info_text,
            'colors': dict(self.colors),
            'route': list(self.route),
        }

    def restore(self, state):
        """Load a snapshot. Unknown names in it are ignored."""
        state = state or {}
        self.reset_colors()
        for name, color in (state.get('colors') or {}).items():
            if name in self.by_name:
                self.colors[name] = color
        selected = state.get('selected')
        self.selected = selected if selected in self.by_name else None
        self.info_text = state.get('info_text') if self.selected else None
        self.route = list(state.get('route') or [])
        return self

    def names(self):
        return [lm.name for lm in self.landmarks]

    def find(self, name):
        return self.by_name.get(name)

    @property
    def info_visible(self):
        return self.info_text is not None

    # --- highlighting ---

    def reset_colors(self):
        for lm in self.landmarks:
            self.colors[lm.name] = lm.color

    def select(self, name):
        """
        Highlight the clicked building and show its name.
        An unknown name (a click on empty space) clears the selection
        and hides the info text.
        """
        self.reset_colors()
        if name in self.by_name:
            self.selected = name
            self.colors[name] = SELECTED_COLOR
            self.info_text = f"Building: {name}"
        else:
            self.selected = None
            self.info_text = None
        return self.info_text

    def search(self, query):
        """
        Case-insensitive substring filter over building names.
        Matches turn cyan, everything else goes back to its base color.
        An empty query matches nothing.

        Returns:
            list of matching names, in landmark order
        """
        q = (query or '').strip().lower()
        matched = []
        for lm in self.landmarks:
            if q and q in lm.name.lower():
                self.colors[lm.name] = MATCH_COLOR
                matched.append(lm.name)
            else:
                self.colors[lm.name] = lm.color
        return matched

    # --- routing ---

    def find_route(self, start, end):
        """Run the shortest-path query and keep the result as the current route."""
        self.route = shortest_path(self.graph, start, end)
        return self.route

    def clear_route(self):
        self.route = []

    def route_weight(self, path=None):
        path = self.route if path is None else path
        return path_weight(self.graph, path)

    def route_points(self, path=None):
        """
        3D positions along `path` (the current route by default).
        Names without a landmark are skipped.
        """
        path = self.route if path is None else path
        points = []
        for name in path:
            lm = self.by_name.get(name)
            if lm is not None:
                points.append(lm.position)
        return points

    def has_drawable_route(self, path=None):
        return len(self.route_points(path)) >= 2
