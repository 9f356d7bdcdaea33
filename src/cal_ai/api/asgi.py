"""ASGI entrypoint for the Cal AI tracker API."""

from cal_ai.api.app import create_app
from cal_ai.containers import build_container

app = create_app(build_container())
