"""ASGI entrypoint for the calories tracker API."""

from calories_tracker.api.app import create_app
from calories_tracker.containers import build_container

app = create_app(build_container())
