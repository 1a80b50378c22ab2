from fastapi import APIRouter, Depends, HTTPException, Query, status
from shortlink_app.exceptions import NotFoundError, ShortcodeConflictError, ShortcodeCreationError
from shortlink_app.schemas.url import URLCreate, URLCreateResponse, URLStats, URLSummary
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

router = APIRouter(prefix="/shorturls", tags=["shorturls"])


@router.post("", response_model=URLCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    url_data: URLCreate,
    url_service: URLService = Depends(get_url_service)
):
    """Create a short URL, with an optional custom shortcode and validity"""
    try:
        return await url_service.create_short_url(
            url_data.url,
            shortcode=url_data.shortcode,
            validity=url_data.validity
        )
    except ShortcodeConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ShortcodeCreationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{shortcode}/stats", response_model=URLStats)
async def get_url_stats(
    shortcode: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get statistics and full click history (expired shortcodes included)"""
    try:
        return await url_service.get_url_stats(shortcode)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{shortcode}/stats/summary", response_model=URLSummary)
async def get_url_summary(
    shortcode: str,
    limit: int = Query(10, ge=1, le=100),
    days: int = Query(7, ge=1, le=366),
    url_service: URLService = Depends(get_url_service)
):
    """Get top referrers and daily click counts"""
    try:
        return await url_service.get_url_summary(shortcode, limit=limit, days=days)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
