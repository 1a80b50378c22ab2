from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import RedirectResponse
from shortlink_app.exceptions import ExpiredError, NotFoundError
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

router = APIRouter(prefix="/shorturls", tags=["redirect"])


@router.get("/{shortcode}")
async def redirect_to_original_url(
    shortcode: str,
    request: Request,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    The click (timestamp, referrer, origin) is recorded before the
    redirect is returned. Expired shortcodes answer 410 and are not counted.
    """
    try:
        original_url = await url_service.resolve(
            shortcode,
            referrer=request.headers.get("referer"),
            origin=request.client.host if request.client else None,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ExpiredError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
