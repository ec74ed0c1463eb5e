from typing import List

from fastapi import APIRouter, HTTPException, Query, BackgroundTasks
from starlette import status

from storefront.common.analytics import track_search
from storefront.common.schemas import JSendResponse
from storefront.listings.pages import SEARCH_PAGE
from storefront.listings.schemas import ListingData
from storefront.listings.services import build_selection
from storefront.search.services import search_catalog

router = APIRouter()


@router.get("", response_model=JSendResponse[ListingData])
async def search_products(
        background_tasks: BackgroundTasks,
        q: str = Query("", description="Search query"),
        brand: List[str] = Query([], description="Brand display names (repeatable)"),
        category: List[str] = Query([], description="Category display names (repeatable)"),
        price: str = Query("", description="Price band label"),
        sort: str = Query(None, description="Sort key"),
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(100, ge=1, le=1000, description="Items per page"),
):
    """
    Search products by name, brand, category or subcategory.

    Args:
        q: The search query; fewer than two characters returns an empty listing
        brand: Brand filter
        category: Category filter
        price: Price band filter
        sort: Sort key (relevance by default)
        page: The page number (starts at 1)
        size: Number of products per page (max 1000)

    Returns:
        JSendResponse containing ranked, filtered results and their facets
    """
    try:
        selection = build_selection(SEARCH_PAGE, brands=brand, categories=category, price_band=price, sort=sort)
        listing = await search_catalog(q, selection, page, size)
        if listing.candidateCount:
            background_tasks.add_task(track_search, q.strip(), listing.total)
        return JSendResponse.success(listing)
    except HTTPException as e:
        return JSendResponse.from_http_exception(e)
    except Exception as e:
        return JSendResponse.error(
            message=str(e),
            code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
