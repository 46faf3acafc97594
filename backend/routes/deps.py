from fastapi import Request

from storage import ProductStorage


def get_storage(request: Request) -> ProductStorage:
    """Storage handle the app was built with (see main.create_app)."""
    return request.app.state.storage
