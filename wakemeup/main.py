# wakemeup/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wakemeup import config
from wakemeup.errors import AppError
from wakemeup.routers import auth, debug, destinations
from wakemeup.utils.database import database_url, dispose_database, init_database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("wakemeup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.JWT_SECRET == config.DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is the development default; set it before any production use.")
    try:
        await init_database()
    except Exception:
        # Refuse to serve without a database
        logger.exception("Failed to initialize database")
        raise
    yield
    await dispose_database()


app = FastAPI(title="WakeMeUp Destinations API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


@app.get("/api/health")
def health_check():
    return {"ok": True}


# --- Include Routers ---
app.include_router(auth.router)          # /api/auth/...
app.include_router(destinations.router)  # /api/destinations/...
if config.ENABLE_DEBUG_ROUTES:
    app.include_router(debug.router)     # /api/debug/...


def run():
    import uvicorn

    logger.info(f"API on http://{config.HOST}:{config.PORT} (database '{database_url().database}')")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
