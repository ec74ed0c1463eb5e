from typing import List

from fastapi import APIRouter, HTTPException, Query, Path, BackgroundTasks
from starlette import status

from storefront.common.analytics import track_search, track_view_item_list
from storefront.common.schemas import JSendResponse
from storefront.listings.pages import CATEGORY_PAGE, SUBCATEGORY_PAGE, PROMOTIONS_PAGE
from storefront.listings.schemas import ListingData
from storefront.listings.services import (
    build_selection, analytics_items,
    get_category_listing, get_subcategory_listing, get_promotions_listing,
)

router = APIRouter()


def schedule_listing_analytics(background_tasks: BackgroundTasks, data: ListingData, list_id: str):
    """
    Queue the list-view event and, when filters are active, a search event
    describing them. Runs after the response is sent.
    """
    category_name = data.breadcrumb[0] if data.breadcrumb else data.title
    subcategory_name = data.breadcrumb[1] if len(data.breadcrumb) > 1 else None
    if data.items:
        background_tasks.add_task(
            track_view_item_list,
            list_id,
            data.title,
            analytics_items(data.items, category_name, subcategory_name)
        )

    filters = data.selection.active_filters()
    if filters:
        background_tasks.add_task(track_search, f"{data.title} {' '.join(filters)}", data.total)


@router.get("/promotions", response_model=JSendResponse[ListingData])
async def list_promotions(
        brand: List[str] = Query([], description="Brand display names (repeatable)"),
        category: List[str] = Query([], description="Category display names (repeatable)"),
        price: str = Query("", description="Price band label"),
        discount: str = Query("", description="Discount band label"),
        sort: str = Query(None, description="Sort key"),
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(100, ge=1, le=1000, description="Items per page"),
):
    """
    Get every in-stock product on sale, with discount facets and statistics.

    Returns:
        JSendResponse containing the promotions listing
    """
    try:
        selection = build_selection(
            PROMOTIONS_PAGE, brands=brand, categories=category,
            price_band=price, discount_band=discount, sort=sort
        )
        listing = await get_promotions_listing(selection, page, size)
        return JSendResponse.success(listing)
    except HTTPException as e:
        return JSendResponse.from_http_exception(e)
    except Exception as e:
        return JSendResponse.error(
            message=str(e),
            code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@router.get("/categories/{category_slug}", response_model=JSendResponse[ListingData])
async def list_category(
        background_tasks: BackgroundTasks,
        category_slug: str = Path(..., description="Category slug"),
        brand: List[str] = Query([], description="Brand display names (repeatable)"),
        subcategory: List[str] = Query([], description="Subcategory display names (repeatable)"),
        price: str = Query("", description="Price band label"),
        sort: str = Query(None, description="Sort key"),
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(100, ge=1, le=1000, description="Items per page"),
):
    """
    Get the in-stock products of a category with brand, subcategory and price facets.

    Args:
        category_slug: The category page slug

    Returns:
        JSendResponse containing the category listing
    """
    try:
        selection = build_selection(
            CATEGORY_PAGE, brands=brand, subcategories=subcategory, price_band=price, sort=sort
        )
        listing = await get_category_listing(category_slug, selection, page, size)
        schedule_listing_analytics(background_tasks, listing, category_slug)
        return JSendResponse.success(listing)
    except HTTPException as e:
        return JSendResponse.from_http_exception(e)
    except Exception as e:
        return JSendResponse.error(
            message=str(e),
            code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@router.get("/categories/{category_slug}/{subcategory_slug}", response_model=JSendResponse[ListingData])
async def list_subcategory(
        background_tasks: BackgroundTasks,
        category_slug: str = Path(..., description="Parent category slug"),
        subcategory_slug: str = Path(..., description="Subcategory slug"),
        brand: List[str] = Query([], description="Brand display names (repeatable)"),
        price: str = Query("", description="Price band label"),
        sort: str = Query(None, description="Sort key"),
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(100, ge=1, le=1000, description="Items per page"),
):
    """
    Get the in-stock products of one category/subcategory pair with brand and price facets.

    Returns:
        JSendResponse containing the subcategory listing
    """
    try:
        selection = build_selection(SUBCATEGORY_PAGE, brands=brand, price_band=price, sort=sort)
        listing = await get_subcategory_listing(category_slug, subcategory_slug, selection, page, size)
        schedule_listing_analytics(background_tasks, listing, subcategory_slug)
        return JSendResponse.success(listing)
    except HTTPException as e:
        return JSendResponse.from_http_exception(e)
    except Exception as e:
        return JSendResponse.error(
            message=str(e),
            code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
