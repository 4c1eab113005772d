"""ASGI entrypoint serving meal and workout plan generation."""

from fitplan.api.app import create_app
from fitplan.config import Settings
from fitplan.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
