"""
Helpers that build the response envelope returned by every book route.

The envelope has four keys: ``message``, ``status`` (the HTTP status
code), ``timestamp`` and ``data``.  Successful calls carry the payload
in ``data``; failures carry an error message string or a mapping of
field name to message.
"""

from datetime import datetime
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..schemas.book import ApiResponse

SUCCESS_MESSAGE = "successful"
ERROR_MESSAGE = "Error Occurred:"


def build_success_response(data: Any, status_code: int = 200) -> ApiResponse:
    return ApiResponse(
        message=SUCCESS_MESSAGE,
        status=status_code,
        timestamp=datetime.now(),
        data=data,
    )


def build_error_response(data: Any, status_code: int) -> ApiResponse:
    return ApiResponse(
        message=ERROR_MESSAGE,
        status=status_code,
        timestamp=datetime.now(),
        data=data,
    )


def error_json_response(data: Any, status_code: int) -> JSONResponse:
    """Wrap an error envelope in a ``JSONResponse`` for exception handlers."""
    envelope = build_error_response(data, status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope))
