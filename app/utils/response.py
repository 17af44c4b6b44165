# app/utils/response.py

import re
from typing import TypeVar, Generic, Optional, Dict, Any
from fastapi.responses import Response
from pydantic import BaseModel

T = TypeVar("T")

PDF_MEDIA_TYPE = "application/pdf"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def file_response(content: bytes, filename: str, media_type: str) -> Response:
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "-", filename)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{safe_name}"'},
    )


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None
