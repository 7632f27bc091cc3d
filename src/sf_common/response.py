"""Response envelope shared by every endpoint.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "2024-05-01T10:00:00+00:00", "request_id": "req_a1b2c3d4e5f6"}

``code`` is 0 on success and the AppError code otherwise; ``data`` is null on
error. The request id is the one RequestLogMiddleware stored on request.state,
so the envelope and the X-Request-ID header always agree.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request

from src.sf_common.errors import AppError


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def request_id_for(request: Request | None) -> str:
    if request is not None:
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            return request_id
    return new_request_id()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(data: Any = None, request: Request | None = None) -> ApiResponse:
    return ApiResponse(data=data, request_id=request_id_for(request))


def error_response(exc: AppError, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=exc.code, message=exc.message, request_id=request_id_for(request))
