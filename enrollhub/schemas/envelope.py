"""
The uniform response envelope: ``{success, data?, error?, message?}``.

Every endpoint answers through these helpers so clients can branch on
``success`` alone.
"""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data: Any = None, message: Optional[str] = None, status_code: int = 200, **extra) -> JSONResponse:
    content = {"success": True}
    if data is not None:
        content["data"] = data
    if message is not None:
        content["message"] = message
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def failure(error: str, status_code: int = 500, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error}, headers=headers)
