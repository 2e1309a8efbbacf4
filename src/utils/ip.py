from starlette.requests import Request

from src.config import TRUSTED_PROXIES


async def get_real_ip(request: Request) -> str:
    client_host = request.client.host if request.client else "unknown"
    forwarded = request.headers.get("x-forwarded-for")
    # only believe the header when it comes from our own reverse proxy
    if forwarded and client_host in TRUSTED_PROXIES:
        return forwarded.split(",")[0].strip()
    return client_host
