"""
Graph store for CampusNav
- Holds the static walking topology between landmarks
- Backed by a networkx DiGraph so asymmetric (directed) input is kept as given
- Exposes the neighbor / weight lookups the shortest-path engine relies on
Usage:
    from campusnav.graph_store import GraphStore
    G = GraphStore({"A": {"B": 5}, "B": {"A": 5}})
    G.neighbors("A")   # {'B': 5}
    G = GraphStore.from_edges([("A", "B", 5)])   # mirrored for you
"""

import networkx as nx


class GraphStore:
    """
    Read-only weighted adjacency: identifier -> {neighbor identifier -> weight}.

    The store does not enforce symmetry. An edge A->B without B->A is a
    one-way path, so the store can carry directed graphs too. A neighbor that
    never appears as a top-level key is registered as a node with no outgoing
    edges.
    """

    def __init__(self, adjacency):
        """
        Args:
            adjacency: dict of identifier -> {neighbor identifier: weight}
        """
        G = nx.DiGraph()
        # top-level keys first so identifier order follows the mapping
        G.add_nodes_from(adjacency)
        for node, nbrs in adjacency.items():
            for nbr, w in (nbrs or {}).items():
                G.add_edge(node, nbr, weight=w)
        self._G = G

    @classmethod
    def from_edges(cls, edges, directed=False):
        """
        Build a store from (u, v, weight) triples.
        Each edge is mirrored unless `directed` is set.
        """
        adjacency = {}
        for u, v, w in edges:
            adjacency.setdefault(u, {})[v] = w
            if directed:
                adjacency.setdefault(v, {})
            else:
                adjacency.setdefault(v, {})[u] = w
        return cls(adjacency)

    # --- lookups ---

    def neighbors(self, node):
        """Neighbor -> weight mapping. Raises KeyError for an unknown node."""
        if node not in self._G:
            raise KeyError(node)
        return {nbr: d['weight'] for nbr, d in self._G.adj[node].items()}

    def all_ids(self):
        return set(self._G.nodes())

    def ids(self):
        """Identifiers in insertion order."""
        return list(self._G.nodes())

    def weight(self, u, v):
        return self._G.adj[u][v]['weight']

    def has_edge(self, u, v):
        return self._G.has_edge(u, v)

    def is_symmetric(self):
        """True when every edge has a mirror edge of the same weight."""
        for u, v, w in self._G.edges(data='weight'):
            if not self._G.has_edge(v, u) or self._G.adj[v][u]['weight'] != w:
                return False
        return True

    def __contains__(self, node):
        return node in self._G

    def __len__(self):
        return self._G.number_of_nodes()

    def __repr__(self):
        return f"GraphStore(nodes={self._G.number_of_nodes()}, edges={self._G.number_of_edges()})"

    # --- export ---

    def to_adjacency(self):
        """Plain-dict copy of the adjacency mapping."""
        return {node: self.neighbors(node) for node in self._G.nodes()}

    def to_networkx(self):
        """A detached networkx.DiGraph copy with 'weight' edge attributes."""
        return self._G.copy()


def graph_summary(G):
    n = len(G)
    edges = [(u, v) for u in G.ids() for v in G.neighbors(u)]
    m = len(edges)
    avg_deg = m / n if n else 0.0
    return {
        'nodes': n,
        'edges': m,
        'avg_out_degree': avg_deg,
        'symmetric': G.is_symmetric()
    }
