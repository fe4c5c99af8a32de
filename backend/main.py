# backend/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import SessionLocal, init_db, get_db, check_db_health
from populate_db import seed_defaults

# Router imports
from routes.auth import router as auth_router
from routes.admin import router as admin_router
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.homepage import router as homepage_router
from routes.content import router as content_router
from routes.email import router as email_router
from routes.upload import router as upload_router
from routes.logs import router as logs_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The API still serves content files and sample products without a database
    try:
        init_db()
        db = SessionLocal()
        try:
            seed_defaults(db)
        finally:
            db.close()
        logger.info("Database ready - full functionality available")
    except SQLAlchemyError as e:
        logger.warning("Database unavailable, running in limited mode: %s", e)
    yield


app = FastAPI(title="IndustrialCo API", version="1.0.0", lifespan=lifespan)

# Uploads - make sure the directory exists before mounting it
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS Configuration
origins = ["http://localhost:8080", "http://127.0.0.1:8080", "http://localhost:5173"]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- ERROR RESPONSES ----
# Every failure reaches the client as {"error": "<message>"}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---- OPERATIONAL ----
system_router = APIRouter(tags=["System"])


@system_router.get("/ping")
def ping():
    return {"message": settings.PING_MESSAGE}


@system_router.get("/health")
def health(db: Session = Depends(get_db)):
    database = check_db_health(db)
    healthy = database["connected"]
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "message": "Database connection is healthy" if healthy else "Database connection failed",
            "database": database,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


# Router registration
for router in (
    system_router,
    auth_router,
    admin_router,
    products_router,
    categories_router,
    homepage_router,
    content_router,
    email_router,
    upload_router,
    logs_router,
):
    app.include_router(router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
