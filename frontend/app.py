import os

import dash
import dash_bootstrap_components as dbc

from campusnav.landmarks import SAMPLE_ROUTE, load_campus, sample_campus
from campusnav.scene import SceneController

from .callbacks import register_callbacks
from .layout import build_layout

CAMPUS_CONFIG = os.environ.get("CAMPUS_CONFIG", "config/campus.yaml")


def create_app(config_path=CAMPUS_CONFIG):
    """
    Build the Dash app around one scene controller.
    Falls back to the sample campus when the config file is missing.
    """
    if os.path.exists(config_path):
        landmarks, graph, data = load_campus(config_path)
        print(f"✓ Loaded campus from {config_path}")
    else:
        landmarks, graph = sample_campus()
        data = {}
        print(f"Config {config_path} not found, using the sample campus")

    base = SceneController(landmarks, graph)
    start = str(data.get('start', SAMPLE_ROUTE[0]))
    end = str(data.get('end', SAMPLE_ROUTE[1]))

    # the startup route seeds every new session's state; base itself stays untouched
    first = base.fresh()
    path = first.find_route(start, end)
    print(f"Startup route {start} -> {end}: {path}")

    app = dash.Dash(__name__, external_stylesheets=[dbc.themes.BOOTSTRAP])
    app.title = "CampusNav"
    app.layout = build_layout(first, start=start, end=end)
    register_callbacks(app, base)
    return app
