"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from pydantic import ValidationError

from .schemas import ShortenRequest, ShortenResponse
from ureduce.errors import ShortLinkNotFound, StorageError

HOME_MESSAGE = "API running successfully"
INVALID_BODY_MESSAGE = "Invalid request body"
NOT_FOUND_MESSAGE = "Invalid request"
INTERNAL_ERROR_MESSAGE = "Internal server error"

# OPTIONS is the preflight; every other method is treated as a create
SHORTEN_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


@router.api_route(
    "/home",
    methods=["GET", "POST"],
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def home():
    return HOME_MESSAGE


@router.api_route(
    "/shorten",
    methods=SHORTEN_METHODS,
    response_model=ShortenResponse,
    responses={
        400: {"description": "Body is not JSON or url is missing/empty"},
        500: {"description": "Insert failed (only when strict persistence is enabled)"},
    },
    summary="Create short URL",
    description="Derive the short code for a URL and store the mapping. Repeating a URL returns the same code.",
)
async def shorten_url(request: Request):
    """Create a shortened URL. OPTIONS answers CORS preflight with an empty 200."""
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK)

    service = request.app.state.service

    try:
        body = ShortenRequest.model_validate_json(await request.body())
    except ValidationError:
        return PlainTextResponse(INVALID_BODY_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = await service.create_short_url(body.url)
    except ValueError:
        return PlainTextResponse(INVALID_BODY_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)
    except StorageError:
        return PlainTextResponse(
            INTERNAL_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(ShortenResponse(short_url=result["short_code"]).model_dump())


@router.api_route(
    "/{short_code:path}",
    methods=["GET", "HEAD"],
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"description": "Unknown short code"}},
    summary="Redirect to original URL",
)
async def redirect_to_original(request: Request, short_code: str):
    service = request.app.state.service

    try:
        link = await service.get_short_link(short_code)
    except ShortLinkNotFound:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)

    return RedirectResponse(url=link.original_url, status_code=status.HTTP_302_FOUND)
