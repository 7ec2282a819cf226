"""
Response envelope helpers shared by all API routes.

Success:    {"success": true, "message"?: str, "data"?: any}
Error:      {"success": false, "message": str}
Validation: {"success": false, "message": str, "errors": [{"field", "message"}]}
"""
from typing import Any, Optional

from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: Optional[str] = None, status: int = 200) -> JSONResponse:
    body = {"success": True}
    if message:
        body["message"] = message
    if data:
        body["data"] = data
    return JSONResponse(body, status_code=status)


def error_response(message: str, status: int = 500) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status)


def format_field_errors(errors: list[dict]) -> list[dict]:
    """Turn pydantic error dicts into [{field, message}], dropping the 'body' prefix."""
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        formatted.append({
            "field": ".".join(loc) or "root",
            "message": err.get("msg", "Invalid value"),
        })
    return formatted


def validation_error_response(errors: list[dict], message: str = "Invalid request data") -> JSONResponse:
    return JSONResponse(
        {"success": False, "message": message, "errors": format_field_errors(errors)},
        status_code=400,
    )
