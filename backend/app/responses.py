"""
StoreGate API - Error Envelope
===============================

What:  Renders a StoreGateError as the JSON error body shared by every
       non-2xx response.
Who:   The exception handlers in app.main, and middleware that has to
       answer before routing (app.middleware.json_body).
"""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from app.dependencies import get_timestamp, get_translator
from app.exceptions import StoreGateError
from app.middleware.request_id import request_id_var


def error_response(
    request: Request,
    exc: StoreGateError,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    translator = get_translator(request)
    content: Dict[str, Any] = {
        "error": exc.code,
        "message": translator.t(exc.message_key),
    }
    if exc.context:
        content["details"] = exc.context
    content["timestamp"] = get_timestamp(request)
    content["request_id"] = getattr(request.state, "request_id", None) or request_id_var.get("")
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)
