"""FastAPI dependencies."""

from fastapi import Request

from roombooking.infra.db import Storage


def get_storage(request: Request) -> Storage:
    """Storage handle owned by the application (see factory.create_app)."""
    return request.app.state.storage
