from typing import Any

from fastapi.encoders import jsonable_encoder


def success_response(data: Any = None, message: str | None = None, **extra: Any) -> dict:
    """Build the success envelope shared by every route."""
    body: dict[str, Any] = {"success": True, "data": jsonable_encoder(data)}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body
