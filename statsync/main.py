import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from statsync.api.router import router
from statsync.core.config import get_settings
from statsync.db.session import SessionLocal, engine
from statsync.services.errors import MethodError, SyncError

logger = logging.getLogger(__name__)

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Player Stats Sync", version="1.0")

app.include_router(router)


@app.on_event("shutdown")
def _dispose_engine() -> None:
    engine.dispose()


@app.exception_handler(SyncError)
def handle_sync_error(request: Request, exc: SyncError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content=MethodError().to_payload(),
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health")
def health() -> dict:
    return {"ok": True, "env": settings.APP_ENV}


@app.get("/health/db")
def health_db():
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"ok": True, "env": settings.APP_ENV, "db": "up"}
    except OperationalError as exc:
        logger.warning("db_unavailable detail=%s", str(exc))
        return JSONResponse(
            status_code=503,
            content={
                "ok": False,
                "env": settings.APP_ENV,
                "db": "down",
                "detail": "db_unavailable",
            },
        )
