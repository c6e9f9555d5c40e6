"""API routes implementation.

Every path starting with ``/api/urls`` belongs to the URL collection: the
bare path is the documented route, the prefix route catches the rest
(``/api/urls/``, ``/api/urls/anything``) so those never reach the
short code redirect.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .schemas import (
    CreateURLRequest,
    CreateURLResponse,
    URLRecordResponse,
    HealthResponse,
    ErrorResponse,
)
from che_shortener.store.exceptions import StorePersistenceError

router = APIRouter()

URLS_PATH = "/urls"
URLS_PREFIX_PATH = "/urls{rest:path}"


async def parse_create_request(request: Request) -> CreateURLRequest:
    """Decode the body as JSON whatever the Content-Type header says."""
    body = await request.body()
    try:
        return CreateURLRequest.model_validate_json(body)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body",
        )


# Decorators register bottom-up, so the exact route is matched first
@router.post(
    URLS_PREFIX_PATH,
    response_model=CreateURLResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
@router.post(
    URLS_PATH,
    response_model=CreateURLResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request body or URL"},
        500: {"model": ErrorResponse, "description": "The record could not be saved"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": CreateURLRequest.model_json_schema()}},
        },
    },
    summary="Create short URL",
    description="Create an adjective-noun short code for an absolute URL.",
)
async def create_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    body = await parse_create_request(request)
    
    try:
        record = await service.create_short_url(body.url)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StorePersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save URL record",
        )
    
    return CreateURLResponse(short_code=record.short_code)


@router.get(
    URLS_PREFIX_PATH,
    response_model=List[URLRecordResponse],
    include_in_schema=False,
)
@router.get(
    URLS_PATH,
    response_model=List[URLRecordResponse],
    summary="List URLs",
    description="List every shortened URL in creation order, with usage counts.",
)
async def list_urls(request: Request):
    """List all shortened URLs."""
    service = request.app.state.service
    
    records = await service.list_urls()
    
    return [URLRecordResponse.from_record(record) for record in records]


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        503: {"model": HealthResponse, "description": "Record store unusable"},
    },
    summary="Health check",
    description="Check if the service and its backing file are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service
    
    health = await service.health_check()
    
    response = HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        total_urls=health["total_urls"],
        timestamp=datetime.now(timezone.utc),
    )
    
    if not health["overall"]:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )
    return response
