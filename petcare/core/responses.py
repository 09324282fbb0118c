from datetime import datetime, timezone
from typing import Any, List, Optional
import uuid

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

def generate_request_id() -> str:
    return uuid.uuid4().hex

def get_request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = generate_request_id()
        request.state.request_id = request_id
    return request_id

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

def success_response(
    request: Request,
    data: Any = None,
    message: str = "Success",
    status_code: int = 200,
) -> JSONResponse:
    """Wrap a payload in the standard success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data),
            "requestId": get_request_id(request),
            "timestamp": _timestamp(),
        },
    )

def failure_response(
    request: Request,
    message: str = "Operation failed",
    status_code: int = 400,
    errors: Optional[List[str]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Wrap an error message in the standard failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "errors": errors,
            "requestId": get_request_id(request),
            "timestamp": _timestamp(),
        },
        headers=headers,
    )
