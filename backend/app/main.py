# app/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.errors import NotFoundOrUnauthorized, RestrictViolation, StorageFailure, ValidationFailure
from app.routers.exercises import router as exercises_router
from app.routers.sets import router as sets_router
from app.routers.workouts import router as workouts_router
from app.db import SessionLocal  # for healthz DB check
from app.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()
logging.getLogger("app").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="LiftLog API",
    openapi_tags=[
        {"name": "workouts", "description": "Workout sessions and templates"},
        {"name": "exercises", "description": "Exercise catalog"},
        {"name": "sets", "description": "Sets within a workout exercise"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

# Data layer errors -> HTTP. Not-found never says whether the row exists for someone else.
@app.exception_handler(NotFoundOrUnauthorized)
async def not_found_handler(request: Request, exc: NotFoundOrUnauthorized):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND,
                        content={"detail": f"{exc.resource.capitalize()} not found"})

@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"detail": exc.message, "field": exc.field})

@app.exception_handler(RestrictViolation)
async def restrict_violation_handler(request: Request, exc: RestrictViolation):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT,
                        content={"detail": exc.message, "field": exc.field})

@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    # already logged with traceback by the repository
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "Something went wrong, please try again"})

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check; connection details stay in the log
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except SQLAlchemyError:
        log.exception("health check: database unreachable")
        return {"status": "degraded", "database": "unreachable"}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(workouts_router)
app.include_router(exercises_router)
app.include_router(sets_router)
