from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from starlette.requests import ClientDisconnect

from x12_auth import ApiKeyMiddleware
from x12_core import document_to_dict, parse_x12
from x12_logging import get_logger, setup_logger
from x12_settings import ServerSettings, load_settings

VERSION = "0.1.0"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Use POST."
# Every method other than POST gets the plain-text 405 on /convert
REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

logger = get_logger()
router = APIRouter()


class SegmentPayload(BaseModel):
    id: str
    elements: List[str]


class ConvertResponse(BaseModel):
    segments: List[SegmentPayload]


@router.get("/health")
async def health():
    return {"status": "OK", "version": VERSION, "description": "x12json - converts raw EDI X12 interchanges into ordered JSON segments."}


@router.post("/convert", response_model=ConvertResponse)
async def convert(request: Request):
    # Raw body, not a JSON payload: the request body is the X12 text itself.
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.error("Client disconnected before the request body was read")
        return PlainTextResponse("Failed to read body", status_code=500)

    document = parse_x12(body.decode("utf-8", errors="replace"))
    logger.info(f"Converted {len(body)} bytes into {len(document)} segments")
    return document_to_dict(document)


@router.api_route("/convert", methods=REJECTED_METHODS, include_in_schema=False)
async def convert_wrong_method():
    return PlainTextResponse(METHOD_NOT_ALLOWED_MESSAGE, status_code=405, headers={"Allow": "POST"})


def create_app(settings: ServerSettings) -> FastAPI:
    """Build the API and configure the service logger.

    The X-API-KEY gate wraps /convert unless disabled in settings.
    """
    setup_logger(settings.log_level)

    app = FastAPI(title="x12json API", version=VERSION)
    app.state.settings = settings
    app.include_router(router)

    if settings.require_api_key:
        if settings.uses_default_secret:
            logger.warning("API_SECRET is not set; falling back to the default secret. Set API_SECRET before exposing this service.")
        app.add_middleware(ApiKeyMiddleware, api_secret=settings.api_secret)
    else:
        logger.warning("API key check disabled; /convert is open to any caller")

    return app


def app_factory() -> FastAPI:
    """Entrypoint for `uvicorn main:app_factory --factory`; settings come from the environment."""
    return create_app(load_settings())


def run(settings: Optional[ServerSettings] = None) -> None:
    import uvicorn

    settings = settings or load_settings()
    app = create_app(settings)
    mode = "API key required" if settings.require_api_key else "open"
    logger.info(f"X12 API running on {settings.address} ({mode})")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
