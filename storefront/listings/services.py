"""
Service functions assembling category, subcategory and promotions listings.
"""
import logging
import math
from typing import List, Optional, Dict, Any

from fastapi import HTTPException

from storefront.catalog import services as catalog
from storefront.common.config import settings
from storefront.common.schemas import paginate
from storefront.listings.engine import ListingEngine
from storefront.listings.pages import PageProfile, CATEGORY_PAGE, SUBCATEGORY_PAGE, PROMOTIONS_PAGE
from storefront.listings.schemas import Candidate, ListingData, PromotionStats
from storefront.listings.selection import FacetSelection

logger = logging.getLogger(__name__)


def build_selection(
    profile: PageProfile,
    brands: List[str] = (),
    categories: List[str] = (),
    subcategories: List[str] = (),
    price_band: str = "",
    discount_band: str = "",
    sort: Optional[str] = None,
) -> FacetSelection:
    """
    Build a page's facet selection from request parameters.

    Raises:
        HTTPException: 400 if the sort key is not offered on this page
    """
    if sort and not profile.supports_sort(sort):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported sort option '{sort}' for {profile.name} page"
        )
    return FacetSelection.from_params(
        profile,
        brands=brands,
        categories=categories,
        subcategories=subcategories,
        price_band=price_band,
        discount_band=discount_band,
        sort=sort or "",
    )


def listing_data(engine: ListingEngine, page: int, size: int, **extra) -> ListingData:
    """
    Run the engine and package one page of its results.
    """
    results = engine.results()
    items, pages = paginate(results, page, size)
    return ListingData(
        items=items,
        total=len(results),
        page=page,
        size=size,
        pages=pages,
        candidateCount=len(engine.candidates),
        facets=engine.facet_options(),
        selection=engine.selection.to_data(),
        filtersActive=engine.selection.is_filtered,
        **extra
    )


def promotion_stats(candidates: List[Candidate]) -> PromotionStats:
    """
    Average and maximum discount and total savings over promotion candidates.
    """
    if not candidates:
        return PromotionStats()

    discounts = [c.discountPercentage or 0 for c in candidates]
    total_savings = sum((c.product.originalPrice or 0) - c.product.price for c in candidates)
    return PromotionStats(
        avgDiscount=int(math.floor(sum(discounts) / len(discounts) + 0.5)),
        maxDiscount=max(discounts),
        totalSavings=round(total_savings, 2),
    )


def analytics_items(candidates: List[Candidate], category_name: str,
                    subcategory_name: Optional[str] = None) -> List[Dict[str, Any]]:
    items = []
    for candidate in candidates:
        item = {
            "item_id": candidate.product.id,
            "item_name": candidate.product.name,
            "item_brand": candidate.brandName or candidate.product.brand,
            "item_category": category_name,
            "price": candidate.product.price,
        }
        if subcategory_name:
            item["item_category2"] = subcategory_name
        items.append(item)
    return items


async def get_category_listing(category_slug: str, selection: FacetSelection,
                               page: int = 1, size: int = 100) -> ListingData:
    """
    Service function to build a category page listing.

    Args:
        category_slug: Slug of the category page
        selection: Facet selection for this request
        page: Page number (starts at 1)
        size: Items per page

    Returns:
        ListingData for the category

    Raises:
        HTTPException: 404 if the category does not exist, 500 if the catalog cannot be read
    """
    lookups = await catalog.get_lookups()
    category = catalog.get_category(lookups, category_slug)
    products = await catalog.get_category_products(category.slug, settings.listing_fetch_limit)

    engine = ListingEngine(CATEGORY_PAGE, selection)
    # Subcategory labels only resolve within this category
    engine.load(products, lookups.scoped_to_category(category.slug))
    return listing_data(engine, page, size, title=category.name, breadcrumb=[category.name])


async def get_subcategory_listing(category_slug: str, subcategory_slug: str, selection: FacetSelection,
                                  page: int = 1, size: int = 100) -> ListingData:
    """
    Service function to build a subcategory page listing.

    Raises:
        HTTPException: 404 if the category or subcategory does not exist, 500 if the catalog cannot be read
    """
    lookups = await catalog.get_lookups()
    category = catalog.get_category(lookups, category_slug)
    subcategory = catalog.get_subcategory(lookups, category.slug, subcategory_slug)
    products = await catalog.get_subcategory_products(category.slug, subcategory.slug, settings.listing_fetch_limit)

    engine = ListingEngine(SUBCATEGORY_PAGE, selection)
    engine.load(products, lookups)
    return listing_data(engine, page, size, title=subcategory.name,
                        breadcrumb=[category.name, subcategory.name])


async def get_promotions_listing(selection: FacetSelection, page: int = 1, size: int = 100) -> ListingData:
    """
    Service function to build the promotions page listing.

    Raises:
        HTTPException: 500 if the catalog cannot be read
    """
    lookups = await catalog.get_lookups()
    products = await catalog.get_promotion_products(settings.listing_fetch_limit)

    engine = ListingEngine(PROMOTIONS_PAGE, selection)
    engine.load(products, lookups)
    return listing_data(engine, page, size, title="Promotions", stats=promotion_stats(engine.candidates))
