"""Shared request handling: error envelopes and request logging."""

from typing import Callable

from fastapi import HTTPException, Request, status

from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, ErrorResponse


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def start_log(request: Request, **fields) -> RequestLog:
    """RequestLog for the current call; endpoint and method come from the request."""
    return RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
        **fields,
    )


def error_detail(error: str, code: str, details: list[str] | None = None) -> dict:
    return ErrorResponse(error=error, code=code, details=details or []).model_dump()


def run_logged(request_log: RequestLog, compute: Callable[[], dict]) -> dict:
    """
    Run a report computation, translating failures into API errors.

    ValueError (or a date pushed out of range) from the services becomes a
    422 validation error; anything unexpected becomes a 500. The request
    is always logged.
    """
    try:
        result = compute()
        request_log.finish(200)
        return result

    except HTTPException as e:
        if isinstance(e.detail, dict):
            request_log.finish(e.status_code, e.detail.get("code"), e.detail.get("error"))
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.finish(e.status_code, error_message=str(e.detail))
        raise

    except (ValueError, OverflowError) as e:
        error_msg = str(e)
        request_log.finish(422, ErrorCodes.VALIDATION_ERROR, error_msg)
        request_log.details.append(("validation_error", error_msg))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=error_detail("Request validation failed", ErrorCodes.VALIDATION_ERROR, [error_msg]),
        )

    except Exception as e:
        request_log.finish(500, ErrorCodes.INTERNAL_ERROR, str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("Internal server error", ErrorCodes.INTERNAL_ERROR),
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
