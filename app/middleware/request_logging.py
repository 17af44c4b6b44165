import time
from fastapi import Request

from app.utils.logger import get_logger

logger = get_logger("access")


def _log(request: Request, status_code: int, started: float) -> None:
    logger.info(
        "",
        extra={
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "process_time_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )


async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        # the 500 body is rendered by the unhandled exception handler
        _log(request, 500, started)
        raise

    _log(request, response.status_code, started)
    return response
