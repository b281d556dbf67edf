import sys

import click

from campusnav.landmarks import SAMPLE_ROUTE, load_campus, sample_campus
from campusnav.scene import SceneController
from campusnav.visualize import plot_route, polyline_length


@click.command()
@click.option("-c", "--config", "config_path", default=None, help="Campus YAML file (default: built-in sample).")
@click.option("--start", default=None, help="Starting building.")
@click.option("--end", default=None, help="Destination building.")
@click.option("--plot", "plot_path", default=None, help="Save a PNG of the route to this path.")
def main(config_path, start, end, plot_path):
    """Print the shortest walking route between two campus buildings."""
    if config_path:
        print(f"Loading campus from {config_path}...")
        try:
            landmarks, graph, data = load_campus(config_path)
        except (OSError, ValueError) as e:
            print(f"Error: could not load {config_path}: {e}")
            sys.exit(1)
    else:
        landmarks, graph = sample_campus()
        data = {}

    scene = SceneController(landmarks, graph)
    start = start or str(data.get('start', SAMPLE_ROUTE[0]))
    end = end or str(data.get('end', SAMPLE_ROUTE[1]))

    path = scene.find_route(start, end)
    print(path)
    if not path:
        missing = [n for n in (start, end) if n not in graph]
        if missing:
            print(f"No route: unknown building(s) {', '.join(missing)}")
        else:
            print(f"No route from {start} to {end}")
        sys.exit(1)

    print(f"Route: {' -> '.join(path)}")
    print(f"Total distance: {scene.route_weight():g} ({len(path)} stops, "
          f"{polyline_length(scene.route_points()):.2f} units on the map)")

    if plot_path:
        plot_route(scene, path, save_path=plot_path)


if __name__ == "__main__":
    main()
