import dash
import dash_bootstrap_components as dbc
from dash import Input, Output, State, callback_context

from campusnav.visualize import create_scene_figure, picked_name

from .layout import info_box_style, route_cards


def apply_event(scene, trigger_id, click_data=None, query=None, start=None, end=None, figure=None):
    """
    Apply one UI event to the scene controller.
    Returns a log line describing what happened, or None.
    """
    if trigger_id == 'graph-campus':
        name = picked_name(click_data, figure)
        scene.select(name)
        return f"Selected: {name}" if scene.selected else None

    if trigger_id == 'search-input':
        matched = scene.search(query)
        if not query:
            return None
        return f"Search '{query}': {', '.join(matched) if matched else 'no match'}"

    if trigger_id == 'btn-route':
        path = scene.find_route(start, end)
        if path:
            return f"{start} → {end}: {' → '.join(path)} (distance {scene.route_weight():g})"
        return f"{start} → {end}: no route"

    if trigger_id == 'btn-clear':
        scene.clear_route()
        scene.select(None)
        scene.search('')
        return "Cleared"

    return None


def run_event(base, state, trigger_id, **event):
    """
    Replay one browser session's event on a fresh controller.

    Args:
        base: SceneController holding the shared landmarks and graph
        state: the session's snapshot from 'store-scene-state'
        trigger_id, event: as for apply_event

    Returns:
        (scene, log line or None); `base` is never modified
    """
    scene = base.fresh().restore(state)
    line = apply_event(scene, trigger_id, **event)
    return scene, line


# --- Callback Registration ---

def register_callbacks(app, base):

    @app.callback(
        [Output('graph-campus', 'figure'),
         Output('info-box', 'children'),
         Output('info-box', 'style'),
         Output('route-cards', 'children'),
         Output('route-log', 'value'),
         Output('store-scene-state', 'data')],
        [Input('graph-campus', 'clickData'),
         Input('search-input', 'value'),
         Input('btn-route', 'n_clicks'),
         Input('btn-clear', 'n_clicks')],
        [State('store-scene-state', 'data'),
         State('dropdown-start', 'value'),
         State('dropdown-end', 'value'),
         State('graph-campus', 'figure'),
         State('route-log', 'value')],
        prevent_initial_call=True
    )
    def update_scene(click_data, query, route_clicks, clear_clicks, scene_state, start, end, figure, log_text):
        """Routes clicks, search input and button presses to this session's scene."""
        ctx = callback_context
        if not ctx.triggered: raise dash.exceptions.PreventUpdate
        trigger_id = ctx.triggered[0]['prop_id'].split('.')[0]

        scene, line = run_event(base, scene_state, trigger_id, click_data=click_data, query=query,
                                start=start, end=end, figure=figure)
        if line:
            print(f"[campus] {line}")
            log_text = f"{line}\n{log_text}"
            if len(log_text) > 2000: log_text = log_text[:2000]
        else:
            log_text = dash.no_update

        cards = [dbc.Col(card, width=4) for card in route_cards(scene)]
        return (create_scene_figure(scene), scene.info_text,
                info_box_style(scene.info_visible), cards, log_text, scene.snapshot())
