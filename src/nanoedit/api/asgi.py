"""ASGI entrypoint for the NanoEdit API."""

from nanoedit.api.app import create_app
from nanoedit.containers import build_container

app = create_app(build_container())
