"""Translate service results into the JSON envelope"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from finbridge.domain.results import ErrorKind, Result

STATUS_BY_ERROR_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_DATA: 503,
}


def envelope(data: Any, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    body = {"success": True, "data": data, **extra}
    if message:
        body["message"] = message
    return body


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def failure_response(result: Result) -> JSONResponse:
    return error_response(STATUS_BY_ERROR_KIND.get(result.error_kind, 500), result.error or "Internal server error")
