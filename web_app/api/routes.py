"""Link routes: redirect, stats, create, update and delete."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, Query, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from kvshort.exceptions import (
    KVShortError,
    RecordNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .schemas import (
    CreateLinkRequest,
    UpdateLinkRequest,
    StatsResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()
health_router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Slug not found"}}
UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Key mismatch"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid request"}}


def http_error(e: KVShortError) -> HTTPException:
    """Map a service exception to an HTTP error.

    Store failures get a fixed message; their detail is only logged.
    """
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    if isinstance(e, UnauthorizedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid key")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/{slug}",
    status_code=status.HTTP_308_PERMANENT_REDIRECT,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Follow short link",
)
async def redirect(request: Request, slug: str):
    """Redirect to the target URL of a slug and count the access."""
    service = request.app.state.service

    try:
        target_url = await service.resolve(slug)
    except KVShortError as e:
        raise http_error(e) from e

    return RedirectResponse(url=target_url, status_code=status.HTTP_308_PERMANENT_REDIRECT)


@router.get(
    "/{slug}/stats",
    response_model=StatsResponse,
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Get access statistics",
)
async def get_stats(request: Request, slug: str, key: str = Query(...)):
    """Return the number of redirects served for a slug."""
    service = request.app.state.service

    try:
        total = await service.get_stats(slug, key)
    except KVShortError as e:
        raise http_error(e) from e

    return StatsResponse(total_accesses=total)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST},
    summary="Create short link",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link and return its slug as plain text."""
    service = request.app.state.service

    try:
        slug = await service.create(body.url, body.key)
    except KVShortError as e:
        raise http_error(e) from e

    return PlainTextResponse(slug, status_code=status.HTTP_201_CREATED)


@router.patch(
    "/{slug}",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Replace owner key",
)
async def update_link(request: Request, slug: str, body: UpdateLinkRequest, key: str = Query(...)):
    """Replace the owner key of a link. The target URL is not changed."""
    service = request.app.state.service

    try:
        await service.update(slug, key, body.key)
    except KVShortError as e:
        raise http_error(e) from e

    return PlainTextResponse("Successfully updated URL")


@router.delete(
    "/{slug}",
    response_class=PlainTextResponse,
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
    summary="Delete short link",
)
async def delete_link(request: Request, slug: str, key: str = Query(...)):
    """Delete a link with its key and statistics."""
    service = request.app.state.service

    try:
        await service.delete(slug, key)
    except KVShortError as e:
        raise http_error(e) from e

    return PlainTextResponse("Successfully deleted URL")
