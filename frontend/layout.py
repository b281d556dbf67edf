import dash_bootstrap_components as dbc
from dash import dcc, html

from campusnav.visualize import GRID_COLOR, create_scene_figure

INFO_BOX_STYLE = {
    'display': 'none',
    'position': 'absolute', 'top': '1rem', 'left': '1rem',
    'padding': '0.5rem 1rem',
    'backgroundColor': 'rgba(0, 0, 0, 0.7)', 'color': '#F1F5F9',
    'borderRadius': '4px', 'fontFamily': 'monospace', 'zIndex': 10,
}


def info_box_style(visible):
    style = dict(INFO_BOX_STYLE)
    style['display'] = 'block' if visible else 'none'
    return style


def create_route_card(title, value, color='#F1F5F9'):
    """A single route stat card."""
    return html.Div(
        [
            html.P(title, className="card-title"),
            html.H3(value, className="card-text", style={'color': color}),
        ],
        className="kpi-card"
    )


def route_cards(scene):
    if not scene.route:
        return [create_route_card("Route", "No route"),
                create_route_card("Total Distance", "N/A"),
                create_route_card("Stops", "N/A")]
    return [
        create_route_card("Route", " → ".join(scene.route)),
        create_route_card("Total Distance", f"{scene.route_weight():g}"),
        create_route_card("Stops", str(len(scene.route))),
    ]


# --- Layout Building Functions ---

def build_navbar():
    """Builds the top navigation bar."""
    return dbc.Navbar(
        dbc.Container([
            html.Div([
                html.Span("CampusNav"),
                html.Span(" // Campus Route Finder", className="navbar-brand-accent")
            ], className="navbar-brand")
        ], fluid=True),
        className="mb-4",
    )


def build_control_panel(scene, start=None, end=None):
    """Search box and the start / end pickers."""
    options = [{'label': name, 'value': name} for name in scene.names()]
    return dbc.Card(
        dbc.CardBody([
            dbc.Row([
                dbc.Col(html.H5("Find a Building"), width=12),
                dbc.Col(dbc.Input(id="search-input", type="text", placeholder="Search buildings...",
                                  debounce=False, value=""), width=12),
            ], className="mb-3"),
            html.Hr(style={'borderColor': GRID_COLOR}),
            dbc.Row([
                dbc.Col(html.H5("Walking Route"), width=12),
                dbc.Col([
                    dbc.Label("From:"),
                    dcc.Dropdown(id="dropdown-start", options=options, value=start, clearable=False),
                ], width=6),
                dbc.Col([
                    dbc.Label("To:"),
                    dcc.Dropdown(id="dropdown-end", options=options, value=end, clearable=False),
                ], width=6),
            ]),
            dbc.Row([
                dbc.Col(dbc.Button("Show Route", id="btn-route", color="primary", className="w-100"), width=6),
                dbc.Col(dbc.Button("Clear", id="btn-clear", color="secondary", className="w-100"), width=6),
            ], className="mt-3"),
        ])
    )


def build_layout(scene, start=None, end=None):
    """Main app layout for a scene controller."""
    return html.Div([
        # per-session view state; the scene controller itself is shared and read-only
        dcc.Store(id='store-scene-state', data=scene.snapshot()),
        build_navbar(),
        dbc.Container([
            dbc.Row([
                dbc.Col(build_control_panel(scene, start, end), width=4),
                dbc.Col(dbc.Card(dbc.CardBody(html.Div([
                    html.Div(id="info-box", style=info_box_style(scene.info_visible),
                             children=scene.info_text),
                    dcc.Graph(id="graph-campus", figure=create_scene_figure(scene),
                              style={"height": "70vh"}),
                ], style={'position': 'relative'}))), width=8),
            ]),
            dbc.Row(
                [dbc.Col(card, width=4) for card in route_cards(scene)],
                id="route-cards", className="mt-4"
            ),
            dbc.Row([
                dbc.Col([
                    html.H5("Route Log"),
                    dcc.Textarea(id="route-log", style={'width': '100%', 'height': '15vh'}, readOnly=True,
                                 value="Route queries will appear here..."),
                ], width=12)
            ], className="mt-4 mb-4"),
        ], fluid=True)
    ])
