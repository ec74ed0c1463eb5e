from fastapi import APIRouter, HTTPException
from starlette import status

from storefront.catalog.services import invalidate_catalog_cache
from storefront.common.schemas import JSendResponse

router = APIRouter()


@router.delete("/cache", response_model=JSendResponse[dict])
async def clear_catalog_cache():
    """
    Drop cached catalog snapshots so the next page load reads Firestore again.

    Returns:
        JSendResponse with the number of deleted cache keys
    """
    try:
        deleted = await invalidate_catalog_cache()
        return JSendResponse.success({"deleted": deleted})
    except HTTPException as e:
        return JSendResponse.from_http_exception(e)
    except Exception as e:
        return JSendResponse.error(
            message=str(e),
            code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
