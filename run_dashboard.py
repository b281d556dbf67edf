import sys

import click

from frontend.app import CAMPUS_CONFIG, create_app


@click.command()
@click.option("-c", "--config", "config_path", default=CAMPUS_CONFIG, show_default=True,
              help="Campus YAML file; the sample campus is used if it does not exist.")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8050, show_default=True, type=int)
@click.option("--debug/--no-debug", default=True, show_default=True, help="Dash debug mode (hot reload).")
def serve(config_path, host, port, debug):
    """Serve the campus map dashboard."""
    try:
        app = create_app(config_path)
    except (OSError, ValueError) as e:
        print(f"Error: could not load campus {config_path}: {e}")
        sys.exit(1)

    print(f"Dashboard running at http://{host}:{port}/")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    serve()
