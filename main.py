# main.py
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from logging_config import setup_logging, new_request_id
from models import (
    ErrorResponse,
    GENERATION_FAILED_MESSAGE,
    ItineraryRequest,
    ItineraryResponse,
    REQUIRED_FIELDS_MESSAGE,
)
from security import security_headers_middleware
from services.itinerary_generator import ItineraryGenerator, build_client

# Initialize logging BEFORE creating the app
setup_logging(settings.log_level)
log = logging.getLogger("app")

router = APIRouter(prefix="/api")


class PublicFiles(StaticFiles):
    """Static assets; any method other than GET/HEAD is treated as an unknown path."""

    async def get_response(self, path: str, scope):
        if scope["method"] not in ("GET", "HEAD"):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


def get_generator(request: Request) -> ItineraryGenerator:
    return request.app.state.generator


@router.post(
    "/itinerary",
    response_model=ItineraryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_itinerary(
    body: ItineraryRequest,
    generator: ItineraryGenerator = Depends(get_generator),
):
    log.info("Itinerary request received", extra={"city": body.city, "days": body.duration})
    try:
        itinerary = await generator.generate(body.city, body.duration)
    except Exception as e:
        # Full detail stays in the server log; the client only gets the fixed message
        log.error("AI Agent error: %s", e, exc_info=True)
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED_MESSAGE})
    return ItineraryResponse(itinerary=itinerary)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        path = ".".join(str(item) for item in err.get("loc", []) if item != "body")
        problems.append(f"{path or 'body'}: {err.get('msg')}")
    log.warning("Itinerary request rejected: %s", "; ".join(problems))
    return JSONResponse(status_code=400, content={"error": REQUIRED_FIELDS_MESSAGE})


async def request_logging_mw(request: Request, call_next):
    rid = new_request_id()
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
        response.headers["X-Request-Id"] = rid
        return response
    finally:
        dur_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            f"{request.method} {request.url.path} -> {getattr(response, 'status_code', '?')} in {dur_ms}ms",
            extra={
                "request_id": rid,
                "path": request.url.path,
                "method": request.method,
                "status": getattr(response, "status_code", None),
                "duration_ms": dur_ms,
            },
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("AI Travel Agent listening at http://localhost:%s", settings.PORT, extra={
        "env": settings.APP_ENV,
        "model": app.state.generator.model,
        "api_key_loaded": app.state.generator.configured,
    })
    yield
    await app.state.generator.aclose()


def create_app(
    generator: Optional[ItineraryGenerator] = None,
    public_dir: Optional[Path] = None,
) -> FastAPI:
    """
    Build the application. The generator (and its API client) is created once
    here and shared by every request; pass one in to swap the model backend.
    """
    if generator is None:
        generator = ItineraryGenerator(build_client(settings), model=settings.GEMINI_MODEL)

    app = FastAPI(
        title="AI Travel Agent",
        version="1.0.0",
        description="Day-by-day travel itineraries generated by Gemini",
        lifespan=lifespan,
    )
    app.state.generator = generator

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Last registered runs first: request id is bound before anything else logs
    app.middleware("http")(security_headers_middleware())
    app.middleware("http")(request_logging_mw)

    app.include_router(router)
    # Mounted last so API routes win; html=True serves index.html at "/"
    app.mount("/", PublicFiles(directory=public_dir or settings.PUBLIC_DIR, html=True), name="public")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level="debug" if settings.DEBUG else "info",
    )


# Production entry point
if __name__ == "__main__":
    run()
