from typing import Any

from fastapi.responses import JSONResponse

from app.core.dto.common import ErrorEnvelope, ErrorModel


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorModel(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def validation_details(errors: list[dict]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into JSON-safe {field, message} pairs."""
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(location),
            "message": str(error.get("msg", "")),
        })
    return details
