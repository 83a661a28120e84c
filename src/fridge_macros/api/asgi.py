"""ASGI entrypoint for the fridge macros API."""

from fridge_macros.api.app import create_app
from fridge_macros.containers import build_container

app = create_app(build_container())
