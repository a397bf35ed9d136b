"""
Centralized error handling and structured logging for the record store.
Every error response carries an "error" message, a trace id and a timestamp.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Switches for what error logs and responses include"""

    SENSITIVE_FIELD_PATTERNS = ['password', 'token', 'secret', 'authorization', 'cookie']

    LOG_REQUEST_BODIES = True
    MAX_BODY_LOG_SIZE = 2000

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively redact sensitive values and truncate long strings"""
        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        return data


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredLogger:
    """Emits one JSON document per error"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True,
        level: int = logging.ERROR
    ) -> str:
        """Log a structured error entry and return its trace id"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": _utcnow(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(dict(request.headers)),
                "client_ip": request.client.host if request.client else None
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception)
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = traceback.format_exc()

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.log(level, json.dumps(log_entry, indent=2, default=str))

        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a trace id to each request and keeps its body for error logs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)

        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES:
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        try:
            response = await call_next(request)
        except Exception as e:
            StructuredLogger.log_error(
                "unhandled_exception",
                f"Unhandled exception in request processing: {str(e)}",
                request=request,
                exception=e,
                extra_context={"body": _captured_body(request)}
            )
            raise

        response.headers["X-Trace-ID"] = trace_id
        return response


def _captured_body(request: Request) -> Optional[Any]:
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return ErrorHandlingConfig.sanitize_data(json.loads(body))
    except ValueError:
        return ErrorHandlingConfig.sanitize_data(body.decode('utf-8', errors='replace'))


def _error_content(error: Any, trace_id: Optional[str], **extra) -> Dict[str, Any]:
    content = {"error": error}
    content.update(extra)
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = _utcnow()
    return content


# Global Exception Handlers
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routes"""
    trace_id = StructuredLogger.log_error(
        f"http_{exc.status_code}",
        f"HTTP {exc.status_code}: {exc.detail}",
        request=request,
        exception=exc,
        extra_context={"request_body": _captured_body(request)},
        include_traceback=False,
        level=logging.ERROR if exc.status_code >= 500 else logging.WARNING
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.detail, trace_id),
        headers=getattr(exc, "headers", None)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors (HTTP 422)"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        }
        for error in exc.errors()
    ]

    trace_id = StructuredLogger.log_error(
        "validation_error_422",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        extra_context={
            "validation_errors": validation_details,
            "request_body": _captured_body(request)
        },
        include_traceback=False,
        level=logging.WARNING
    )

    return JSONResponse(
        status_code=422,
        content=_error_content(
            "Validation Error",
            trace_id,
            message="Request validation failed",
            detail=validation_details
        )
    )

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internals"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={"request_body": _captured_body(request)}
    )

    return JSONResponse(
        status_code=500,
        content=_error_content("An unexpected error occurred", trace_id)
    )

def setup_error_handling(app):
    """Install request tracing middleware and exception handlers on the app"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")

def log_business_error(error_type: str, message: str, context: Dict = None):
    """Log a business-level anomaly that is not an exception"""
    StructuredLogger.log_error(
        f"business_error_{error_type}",
        message,
        extra_context=context,
        include_traceback=False,
        level=logging.WARNING
    )
