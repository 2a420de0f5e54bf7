"""ASGI entry point: ``uvicorn roombooking.api.app:app --port 8000``."""

from .factory import create_app

app = create_app()
