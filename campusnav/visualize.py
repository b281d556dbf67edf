"""
Figures for the campus scene.
- create_scene_figure: interactive plotly 3D view (building boxes, labels, route line)
- plot_route: static matplotlib render, for saving a route to PNG
Coordinates are used as given, with y as the up axis.
"""

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go

from campusnav.scene import ROUTE_COLOR

# --- Theme ---
PLOT_BG_COLOR = '#1D1D1D'
PLOT_FONT_COLOR = '#F1F5F9'
GRID_COLOR = '#333333'

# Unit cube corners around the origin, and its 12 triangles
_CUBE = np.array([
    [0, 0, 0], [0, 1, 0], [1, 1, 0], [1, 0, 0],
    [0, 0, 1], [0, 1, 1], [1, 1, 1], [1, 0, 1],
], dtype=float) - 0.5
_CUBE_I = [7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2]
_CUBE_J = [3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 3]
_CUBE_K = [0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6]


def box_vertices(position, size):
    """8 x 3 array of box corners centred on `position`."""
    return _CUBE * np.asarray(size, dtype=float) + np.asarray(position, dtype=float)


def polyline_length(points):
    """Straight-line length through consecutive 3D points."""
    if len(points) < 2:
        return 0.0
    pts = np.asarray(points, dtype=float)
    return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())


def building_trace(landmark, color):
    v = box_vertices(landmark.position, landmark.size)
    return go.Mesh3d(
        x=v[:, 0], y=v[:, 1], z=v[:, 2],
        i=_CUBE_I, j=_CUBE_J, k=_CUBE_K,
        color=color, opacity=1.0, flatshading=True,
        name=landmark.name, meta='landmark',
        customdata=[landmark.name] * len(v),
        hovertemplate=f"<b>{landmark.name}</b><extra></extra>",
    )


def label_trace(landmarks):
    xs, ys, zs, names = [], [], [], []
    for lm in landmarks:
        x, y, z = lm.position
        xs.append(x)
        # label just above the roof
        ys.append(y + lm.size[1] / 2 + 0.3)
        zs.append(z)
        names.append(lm.name)
    return go.Scatter3d(
        x=xs, y=ys, z=zs, mode='text', text=names,
        textfont=dict(color=PLOT_FONT_COLOR, size=12),
        customdata=names, meta='label',
        hoverinfo='skip', showlegend=False,
    )


def route_trace(points, color=ROUTE_COLOR):
    """Line through the route points, or None when there are fewer than two."""
    if len(points) < 2:
        return None
    pts = np.asarray(points, dtype=float)
    return go.Scatter3d(
        x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
        mode='lines+markers',
        line=dict(width=6, color=color),
        marker=dict(size=4, color=color),
        name='Route', meta='route',
        hoverinfo='skip',
    )


def create_scene_figure(scene, title='Campus Map'):
    """Build the plotly figure for the scene's current colors and route."""
    traces = [building_trace(lm, scene.colors[lm.name]) for lm in scene.landmarks]
    traces.append(label_trace(scene.landmarks))
    line = route_trace(scene.route_points())
    if line is not None:
        traces.append(line)

    axis = dict(showgrid=True, gridcolor=GRID_COLOR, zeroline=False,
                showticklabels=False, title='', backgroundcolor=PLOT_BG_COLOR)
    fig = go.Figure(
        data=traces,
        layout=go.Layout(
            title=title,
            showlegend=False,
            margin=dict(b=0, l=0, r=0, t=40),
            paper_bgcolor=PLOT_BG_COLOR,
            font_color=PLOT_FONT_COLOR,
            scene=dict(
                xaxis=axis, yaxis=axis, zaxis=axis,
                aspectmode='data',
                camera=dict(up=dict(x=0, y=1, z=0), eye=dict(x=0, y=0.6, z=2.2)),
            ),
            uirevision='campus',
        )
    )
    return fig


def picked_name(click_data, figure=None):
    """
    Landmark name from a plotly clickData payload, or None.
    Uses the point's customdata, falling back to the clicked trace's name.
    """
    if not click_data or not click_data.get('points'):
        return None
    point = click_data['points'][0]
    name = point.get('customdata')
    if isinstance(name, list):
        name = name[0] if name else None
    if name:
        return name
    if figure is not None and 'curveNumber' in point:
        data = figure['data'] if isinstance(figure, dict) else figure.data
        trace = data[point['curveNumber']]
        if 'meta' in trace and trace['meta'] == 'landmark':
            return trace['name']
    return None


def plot_route(scene, path=None, save_path=None):
    """
    Static 3D render of the buildings and a route.
    Matplotlib's vertical axis is z, so the scene's y (up) is drawn as z.
    """
    path = scene.route if path is None else path
    fig = plt.figure(figsize=(10, 7))
    ax = fig.add_subplot(projection='3d')

    for lm in scene.landmarks:
        x, y, z = lm.position
        w, h, d = lm.size
        ax.bar3d(x - w / 2, z - d / 2, y - h / 2, w, d, h,
                 color=scene.colors[lm.name], alpha=0.8, shade=True)
        ax.text(x, z, y + h / 2 + 0.3, lm.name, ha='center', fontsize=9)

    points = scene.route_points(path)
    if len(points) >= 2:
        pts = np.asarray(points, dtype=float)
        ax.plot(pts[:, 0], pts[:, 2], pts[:, 1], color='#d4a017', linewidth=3,
                marker='o', label=' -> '.join(path))
        ax.legend(loc='upper right', fontsize=9)

    ax.set_xlabel('x')
    ax.set_ylabel('z')
    ax.set_zlabel('height')
    ax.set_title('Campus Route', fontsize=14, fontweight='bold')

    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"✓ Saved: {save_path}")
    else:
        plt.show()
    plt.close(fig)
    return save_path
