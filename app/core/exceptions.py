from typing import Any

from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    """Domain failure carrying a stable error code for API clients."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: Any = None,
        headers: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.error_code = error_code
        self.details = details
