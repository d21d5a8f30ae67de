"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from converter.api import responses
from converter.api.routes import router
from converter.config import CORS_ORIGIN, logger as config_logger
from converter.conversion.formats import DEFAULT_REGISTRY
from converter.conversion.service import shutdown_conversion_service

logging.getLogger("uvicorn").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_logger.info("Image conversion API started (formats: %s)", ", ".join(DEFAULT_REGISTRY.formats))
    yield
    shutdown_conversion_service()
    config_logger.info("Image conversion API shutting down")


app = FastAPI(
    title="Image Conversion API",
    description="Convert uploaded images to WebP, AVIF, JPEG or PNG and return them as base64.",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["POST"],
    allow_headers=["Content-Type"],
    expose_headers=["Content-Length"],
    max_age=600,
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Never leak tracebacks to the caller."""
    config_logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": responses.BATCH_ERROR, "details": responses.INTERNAL_ERROR_DETAILS},
    )


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    from converter.config import HOST, PORT
    uvicorn.run("converter.main:app", host=HOST, port=PORT)
