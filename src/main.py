import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.params import Depends
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.auth.dependencies import get_admin_role

from src.auth.router import router as auth_router
from src.users.router import router as employees_router
from src.projects.router import router as projects_router
from src.projections.router import router as projections_router
from src.dashboard.router import router as dashboard_router
from src.time_logs.router import router as employee_router

from src.utils.create_admin import create_system_admin

from src.logs.middleware import LogUserActionMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_system_admin()
    yield

app = FastAPI(lifespan=lifespan, title="Project Cost Management", description="Projects, time logs and cost projections", version="0.1.0")

app.add_middleware(LogUserActionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse({"error": errors or "Invalid request"}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


app.include_router(
    router=auth_router,
    prefix="/api",
    tags=["Auth"],
)

app.include_router(
    router=employees_router,
    prefix="/api/admin/employees",
    dependencies=[Depends(get_admin_role)],
)

app.include_router(
    router=projects_router,
    prefix="/api/admin/projects",
    dependencies=[Depends(get_admin_role)],
)

app.include_router(
    router=projections_router,
    prefix="/api/admin/projections",
    dependencies=[Depends(get_admin_role)],
)

app.include_router(
    router=dashboard_router,
    prefix="/api/admin/dashboard",
    dependencies=[Depends(get_admin_role)],
)

app.include_router(
    router=employee_router,
    prefix="/api/employee",
)
