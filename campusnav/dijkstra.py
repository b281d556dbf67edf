"""
Shortest walking routes between campus landmarks.

`shortest_path` is the engine the scene and the CLI use: a Dijkstra search
whose frontier is the plain set of unsettled nodes, picked by linear scan.
That is O(V^2) and fine for a campus of tens of buildings. For bigger graphs
`shortest_path_heap` gives the same route weights in O((V+E) log V), and
`reference_path` runs networkx's Dijkstra for cross-checking.

All three return an empty result instead of raising when there is no route,
including when either endpoint is not in the graph.
"""

import heapq
import math

import networkx as nx

from campusnav.graph_store import GraphStore

INF = math.inf


def build_sample_graph():
    """
    The three-building sample campus.
        Science Block <-> Library       5
        Library       <-> Admin Office  3
        Science Block <-> Admin Office 10
    """
    edges = [
        ("Science Block", "Library", 5),
        ("Library", "Admin Office", 3),
        ("Science Block", "Admin Office", 10),
    ]
    return GraphStore.from_edges(edges)


def shortest_path(G, start, end, on_relax=None):
    """
    Minimum-weight path from `start` to `end`.

    Args:
        G: GraphStore (weights assumed non-negative)
        start, end: landmark identifiers
        on_relax: optional callable(node, old_distance, new_distance),
                  called each time a tentative distance is lowered

    Returns:
        list of identifiers from start to end inclusive, or [] if there is
        no route or either endpoint is unknown.
    """
    if start not in G or end not in G:
        return []

    nodes = G.ids()
    distances = {node: INF for node in nodes}
    prev = {node: None for node in nodes}
    distances[start] = 0
    # dict keeps insertion order, so ties go to the earliest node
    frontier = dict.fromkeys(nodes)

    while frontier:
        current = None
        for node in frontier:
            if current is None or distances[node] < distances[current]:
                current = node

        # settled the target, or everything left is unreachable
        if current == end or distances[current] == INF:
            break
        del frontier[current]

        for nbr, w in G.neighbors(current).items():
            alt = distances[current] + w
            if alt < distances[nbr]:
                if on_relax is not None:
                    on_relax(nbr, distances[nbr], alt)
                distances[nbr] = alt
                prev[nbr] = current

    return _walk_back(prev, start, end)


def shortest_path_heap(G, start, end):
    """
    Same contract as `shortest_path`, with a binary heap as the frontier.
    Among several equally short routes the one returned may differ.
    """
    if start not in G or end not in G:
        return []

    distances = {start: 0}
    prev = {start: None}
    settled = set()
    # the counter keeps heap entries comparable without comparing names
    counter = 0
    heap = [(0, counter, start)]

    while heap:
        d, _, current = heapq.heappop(heap)
        if current in settled:
            continue
        if current == end:
            break
        settled.add(current)

        for nbr, w in G.neighbors(current).items():
            alt = d + w
            if alt < distances.get(nbr, INF):
                distances[nbr] = alt
                prev[nbr] = current
                counter += 1
                heapq.heappush(heap, (alt, counter, nbr))

    if end not in prev:
        return []
    return _walk_back(prev, start, end)


def _walk_back(prev, start, end):
    path = []
    node = end
    while node is not None:
        path.insert(0, node)
        node = prev[node]
    if path[0] != start:
        return []
    return path


def path_weight(G, path):
    """
    Total weight along `path`.
    Raises KeyError if two consecutive identifiers are not connected.
    """
    total = 0
    for u, v in zip(path, path[1:]):
        total += G.weight(u, v)
    return total


def reference_path(G, start, end):
    """
    Runs networkx's Dijkstra on a copy of the store.
    Returns (path, cost), or ([], inf) when there is no route.
    """
    nxG = G.to_networkx()
    try:
        path = nx.dijkstra_path(nxG, start, end, weight='weight')
        cost = nx.dijkstra_path_length(nxG, start, end, weight='weight')
        return path, cost
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return [], INF


if __name__ == "__main__":
    print("Running campus route on the sample graph...")
    G = build_sample_graph()
    path = shortest_path(G, "Science Block", "Admin Office")
    print(f"Shortest path: {path} (total weight = {path_weight(G, path)})")
