from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class StatusError(Exception):
    """Error rendered as ``{"code": ..., "error": ...}`` with that status code."""

    def __init__(self, code: int, error: str) -> None:
        super().__init__(error)
        self.code = code
        self.error = error


async def status_error_handler(request: Request, exc: StatusError) -> JSONResponse:
    return JSONResponse(status_code=exc.code, content={"code": exc.code, "error": exc.error})
