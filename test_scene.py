"""
Tests for landmarks, the scene controller, figures and the dashboard glue.
"""

import matplotlib
matplotlib.use("Agg")

import os

import pytest
import yaml

from campusnav.landmarks import (
    Landmark,
    build_campus,
    load_campus,
    normalize_color,
    sample_campus,
    save_campus,
    SAMPLE_EDGES,
    SAMPLE_LANDMARKS,
)
from campusnav.scene import MATCH_COLOR, SELECTED_COLOR, SceneController
from campusnav.visualize import (
    box_vertices,
    create_scene_figure,
    picked_name,
    plot_route,
    polyline_length,
    route_trace,
)
from frontend.app import create_app
from frontend.callbacks import apply_event, run_event

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "campus.yaml")


@pytest.fixture
def scene():
    return SceneController.sample()


# ----------------------
# Landmarks and campus config
# ----------------------

def test_sample_campus():
    landmarks, graph = sample_campus()
    assert [lm.name for lm in landmarks] == ["Science Block", "Library", "Admin Office"]
    assert landmarks[1].position == (0.0, 0.0, 0.0)
    assert landmarks[1].size == (1.5, 3.0, 1.0)
    assert graph.neighbors("Science Block") == {"Library": 5, "Admin Office": 10}
    assert graph.is_symmetric()


def test_normalize_color():
    assert normalize_color("#FF0000") == "#ff0000"
    assert normalize_color("00ff00") == "#00ff00"
    assert normalize_color(0x0000FF) == "#0000ff"
    for bad in ["red", "#12345", 0x1000000, True, None]:
        with pytest.raises(ValueError):
            normalize_color(bad)


def test_build_campus_directed_edges():
    data = {'landmarks': SAMPLE_LANDMARKS, 'edges': [["Science Block", "Library", 5]], 'directed': True}
    _, graph = build_campus(data)
    assert graph.neighbors("Science Block") == {"Library": 5}
    assert graph.neighbors("Library") == {}
    assert graph.neighbors("Admin Office") == {}


def test_build_campus_from_adjacency():
    data = {
        'landmarks': SAMPLE_LANDMARKS,
        'graph': {"Library": {"Admin Office": 3}, "Admin Office": {"Library": 3}},
    }
    _, graph = build_campus(data)
    assert graph.ids() == ["Science Block", "Library", "Admin Office"]
    assert graph.neighbors("Library") == {"Admin Office": 3}
    assert graph.neighbors("Science Block") == {}


@pytest.mark.parametrize("data", [
    {},
    {'landmarks': []},
    {'landmarks': ["Library"]},
    {'landmarks': [{'position': [0, 0, 0]}]},
    {'landmarks': [{'name': 'A'}, {'name': 'A'}]},
    {'landmarks': [{'name': 'A', 'position': [0, 0]}]},
    {'landmarks': [{'name': 'A'}, {'name': 'B'}], 'edges': [['A', 'B', -1]]},
    {'landmarks': [{'name': 'A'}, {'name': 'B'}], 'edges': [['A', 'B', 'far']]},
    {'landmarks': [{'name': 'A'}, {'name': 'B'}], 'edges': [['A', 'B']]},
    {'landmarks': [{'name': 'A'}, {'name': 'B'}], 'edges': [['A', 'Gym', 1]]},
    {'landmarks': [{'name': 'A'}], 'graph': {'A': {'Gym': 1}}},
    {'landmarks': [{'name': 'A'}], 'edges': [5]},
    {'landmarks': [{'name': 'A'}], 'edges': 5},
    {'landmarks': [{'name': 'A'}], 'graph': 5},
    {'landmarks': [{'name': 'A'}], 'graph': {'A': ['B', 1]}},
])
def test_build_campus_rejects_malformed(data):
    with pytest.raises(ValueError):
        build_campus(data)


def test_yaml_round_trip(tmp_path):
    landmarks, graph = sample_campus()
    path = save_campus(landmarks, graph, str(tmp_path / "campus.yaml"), start="Library", end="Admin Office")
    loaded, loaded_graph, data = load_campus(path)
    assert loaded == landmarks
    assert loaded_graph.to_adjacency() == graph.to_adjacency()
    assert data['start'] == "Library"


def test_load_campus_hex_int_colors(tmp_path):
    path = tmp_path / "campus.yaml"
    path.write_text(
        "landmarks:\n"
        "  - {name: Gym, position: [0, 0, 0], color: 0xff8800}\n"
    )
    landmarks, graph, _ = load_campus(str(path))
    assert landmarks[0].color == "#ff8800"
    assert graph.all_ids() == {"Gym"}


def test_load_campus_numeric_names_become_strings(tmp_path):
    path = tmp_path / "campus.yaml"
    path.write_text(
        "landmarks:\n"
        "  - {name: 101, position: [0, 0, 0]}\n"
        "  - {name: Library, position: [2, 0, 0]}\n"
        "edges:\n"
        "  - [101, Library, 2]\n"
        "start: 101\n"
    )
    landmarks, graph, _ = load_campus(str(path))
    assert [lm.name for lm in landmarks] == ["101", "Library"]
    assert graph.all_ids() == {"101", "Library"}

    scene = SceneController(landmarks, graph)
    assert scene.find_route("101", "Library") == ["101", "Library"]
    assert scene.search("lib") == ["Library"]
    assert scene.search("10") == ["101"]


def test_build_campus_numeric_adjacency_keys():
    data = {'landmarks': [{'name': 7}, {'name': 'Gym'}], 'graph': {7: {'Gym': 1}}}
    _, graph = build_campus(data)
    assert graph.neighbors("7") == {"Gym": 1}


def test_shipped_config_matches_sample():
    landmarks, graph, data = load_campus(CONFIG_PATH)
    sample_landmarks, sample_graph = sample_campus()
    assert landmarks == sample_landmarks
    assert graph.to_adjacency() == sample_graph.to_adjacency()
    assert (data['start'], data['end']) == ("Science Block", "Admin Office")


def test_load_campus_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_campus(str(tmp_path / "nope.yaml"))


# ----------------------
# Scene controller
# ----------------------

def test_initial_colors_come_from_landmarks(scene):
    assert scene.colors == {"Science Block": "#ff0000", "Library": "#0000ff", "Admin Office": "#00ff00"}
    assert not scene.info_visible


def test_select_highlights_one_building(scene):
    assert scene.select("Library") == "Building: Library"
    assert scene.colors["Library"] == SELECTED_COLOR
    assert scene.colors["Science Block"] == "#ff0000"
    assert scene.info_visible

    scene.select("Admin Office")
    assert scene.colors["Library"] == "#0000ff"
    assert scene.colors["Admin Office"] == SELECTED_COLOR


def test_select_nothing_hides_info(scene):
    scene.select("Library")
    assert scene.select(None) is None
    assert scene.selected is None
    assert not scene.info_visible
    assert scene.colors["Library"] == "#0000ff"


def test_search_is_case_insensitive_substring(scene):
    assert scene.search("LIB") == ["Library"]
    assert scene.colors["Library"] == MATCH_COLOR
    assert scene.colors["Science Block"] == "#ff0000"

    assert scene.search("o") == ["Science Block", "Admin Office"]
    assert scene.colors["Library"] == "#0000ff"
    assert scene.colors["Admin Office"] == MATCH_COLOR


def test_empty_search_restores_colors(scene):
    scene.search("lib")
    assert scene.search("") == []
    assert scene.search(None) == []
    assert scene.colors["Library"] == "#0000ff"


def test_landmark_added_without_code_changes():
    landmarks, graph = sample_campus()
    landmarks.append(Landmark("Gym", (4, 0, 0), color="#ff00ff"))
    scene = SceneController(landmarks, graph)
    scene.select("Library")
    assert scene.colors["Gym"] == "#ff00ff"


def test_find_route_and_points(scene):
    path = scene.find_route("Science Block", "Admin Office")
    assert path == ["Science Block", "Library", "Admin Office"]
    assert scene.route_weight() == 8
    assert scene.route_points() == [(-2.0, 0.0, 0.0), (0.0, 0.0, 0.0), (2.0, 0.0, 0.0)]
    assert scene.has_drawable_route()


def test_route_points_skip_unknown_names(scene):
    assert scene.route_points(["Science Block", "Gym", "Library"]) == [(-2.0, 0.0, 0.0), (0.0, 0.0, 0.0)]
    assert not scene.has_drawable_route(["Science Block", "Gym"])
    assert not scene.has_drawable_route([])


def test_no_route(scene):
    assert scene.find_route("Science Block", "Gym") == []
    assert scene.route_points() == []
    assert not scene.has_drawable_route()


# ----------------------
# Figures
# ----------------------

def test_box_vertices():
    v = box_vertices((1, 2, 3), (2, 4, 6))
    assert v.shape == (8, 3)
    assert v[:, 0].min() == 0 and v[:, 0].max() == 2
    assert v[:, 1].min() == 0 and v[:, 1].max() == 4
    assert v[:, 2].min() == 0 and v[:, 2].max() == 6


def test_polyline_length():
    assert polyline_length([]) == 0.0
    assert polyline_length([(0, 0, 0)]) == 0.0
    assert polyline_length([(0, 0, 0), (3, 4, 0), (3, 4, 1)]) == pytest.approx(6.0)


def test_route_trace_needs_two_points():
    assert route_trace([]) is None
    assert route_trace([(0, 0, 0)]) is None
    assert route_trace([(0, 0, 0), (1, 0, 0)]) is not None


def test_scene_figure_without_route(scene):
    fig = create_scene_figure(scene)
    metas = [t.meta for t in fig.data]
    assert metas == ['landmark', 'landmark', 'landmark', 'label']
    assert fig.data[0].color == "#ff0000"


def test_scene_figure_with_route(scene):
    scene.find_route("Science Block", "Admin Office")
    scene.select("Library")
    fig = create_scene_figure(scene)
    assert fig.data[-1].meta == 'route'
    assert list(fig.data[-1].x) == [-2.0, 0.0, 2.0]
    assert fig.data[1].color == SELECTED_COLOR


def test_picked_name():
    assert picked_name(None) is None
    assert picked_name({'points': []}) is None
    assert picked_name({'points': [{'customdata': 'Library'}]}) == 'Library'
    assert picked_name({'points': [{'customdata': ['Library']}]}) == 'Library'
    figure = {'data': [{'meta': 'landmark', 'name': 'Admin Office'}, {'meta': 'label', 'name': 'x'}]}
    assert picked_name({'points': [{'curveNumber': 0}]}, figure) == 'Admin Office'
    assert picked_name({'points': [{'curveNumber': 1}]}, figure) is None


def test_plot_route_saves_png(scene, tmp_path):
    scene.find_route("Science Block", "Admin Office")
    out = tmp_path / "route.png"
    assert plot_route(scene, save_path=str(out)) == str(out)
    assert out.exists()


# ----------------------
# Dashboard glue
# ----------------------

def test_apply_event_click(scene):
    line = apply_event(scene, 'graph-campus', click_data={'points': [{'customdata': 'Library'}]})
    assert line == "Selected: Library"
    assert scene.info_text == "Building: Library"

    assert apply_event(scene, 'graph-campus', click_data=None) is None
    assert not scene.info_visible


def test_apply_event_search_and_route(scene):
    assert apply_event(scene, 'search-input', query="admin") == "Search 'admin': Admin Office"
    line = apply_event(scene, 'btn-route', start="Science Block", end="Admin Office")
    assert "Science Block → Library → Admin Office" in line
    assert "distance 8" in line

    assert apply_event(scene, 'btn-clear') == "Cleared"
    assert scene.route == []
    assert scene.colors["Admin Office"] == "#00ff00"


def test_sample_edges_are_well_formed():
    # the YAML example and the in-code sample stay in sync
    with open(CONFIG_PATH) as f:
        data = yaml.safe_load(f)
    assert data['edges'] == SAMPLE_EDGES


def test_snapshot_restore(scene):
    scene.find_route("Science Block", "Admin Office")
    scene.search("admin")
    state = scene.snapshot()

    other = scene.fresh().restore(state)
    assert other.route == ["Science Block", "Library", "Admin Office"]
    assert other.colors["Admin Office"] == MATCH_COLOR
    assert other.snapshot() == state

    empty = scene.fresh().restore(None)
    assert empty.route == []
    assert empty.colors["Admin Office"] == "#00ff00"


def test_sessions_do_not_share_view_state(scene):
    base_state = scene.snapshot()

    a, line = run_event(scene, base_state, 'graph-campus', click_data={'points': [{'customdata': 'Library'}]})
    assert line == "Selected: Library"
    assert a.info_text == "Building: Library"

    b, _ = run_event(scene, base_state, 'btn-route', start="Science Block", end="Admin Office")
    assert b.info_text is None
    assert b.colors["Library"] == "#0000ff"
    assert b.route == ["Science Block", "Library", "Admin Office"]

    # the shared controller is never touched
    assert scene.snapshot() == base_state

    # a session keeps its own selection across events
    a2, _ = run_event(scene, a.snapshot(), 'btn-route', start="Library", end="Admin Office")
    assert a2.info_text == "Building: Library"
    assert a2.route == ["Library", "Admin Office"]


def test_create_app_falls_back_to_sample(tmp_path):
    app = create_app(str(tmp_path / "missing.yaml"))
    assert app.title == "CampusNav"
    store = app.layout.children[0]
    assert store.id == 'store-scene-state'
    assert store.data['route'] == ["Science Block", "Library", "Admin Office"]
