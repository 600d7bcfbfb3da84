"""wattwise REST API module.

To start the API server:
    python -m wattwise serve --host 0.0.0.0 --port 8000

Installation:
    pip install wattwise[api]
"""

__all__ = ["app", "create_app"]

from wattwise.api.main import app, create_app
