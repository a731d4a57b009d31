"""ASGI entrypoint for the label scoring API."""

from label_scoring.api.app import create_app
from label_scoring.containers import build_container

app = create_app(build_container())
