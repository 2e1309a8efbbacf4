from datetime import datetime
import logging
import os
import re

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.auth.dependencies import USER_ID_COOKIE
from src.config import LOG_FILE
from src.utils.ip import get_real_ip

logger = logging.getLogger("user_logger")
logger.setLevel(logging.INFO)

if LOG_FILE:
    os.makedirs(os.path.dirname(LOG_FILE) or ".", exist_ok=True)
    handler = logging.FileHandler(LOG_FILE)
else:
    handler = logging.StreamHandler()
logger.addHandler(handler)

SKIP_PATHS = re.compile(r"/(static|favicon|docs|openapi\.json)")


class LogUserActionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if SKIP_PATHS.match(path):
            return await call_next(request)

        user_id = request.cookies.get(USER_ID_COOKIE)
        method = request.method
        query = str(request.url.query)
        ip = await get_real_ip(request)
        ua = request.headers.get("user-agent", "unknown")

        response = await call_next(request)

        logger.info(f"[{datetime.now()}] {ip} {user_id} {method} {path}?{query} UA={ua[:250]} {response.status_code}")
        return response
