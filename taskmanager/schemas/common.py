"""Response envelope shared by every endpoint."""

from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts either casing on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel):
    """Standard API response wrapper"""
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    count: Optional[int] = None
    error: Optional[str] = None


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    count: Optional[int] = None,
    status_code: int = 200,
) -> JSONResponse:
    """Wrap a successful result in ``{success, data, message, count}``.

    Keys left as None are omitted.
    """
    content = {"success": True}
    if data is not None:
        content["data"] = jsonable_encoder(data, by_alias=True)
    if message is not None:
        content["message"] = message
    if count is not None:
        content["count"] = count
    return JSONResponse(status_code=status_code, content=content)


def error_envelope(error: str, status_code: int) -> JSONResponse:
    body = ApiResponse(success=False, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(include={"success", "error"}),
    )
