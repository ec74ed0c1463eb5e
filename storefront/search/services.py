"""
Service function for the search page: rank the catalog, then facet, filter and sort.
"""
import logging

from storefront.catalog import services as catalog
from storefront.common.config import settings
from storefront.listings.engine import ListingEngine
from storefront.listings.pages import SEARCH_PAGE
from storefront.listings.schemas import ListingData
from storefront.listings.selection import FacetSelection
from storefront.listings.services import listing_data
from storefront.search.ranker import rank_products, MIN_QUERY_LENGTH

logger = logging.getLogger(__name__)


async def search_catalog(query: str, selection: FacetSelection, page: int = 1, size: int = 100) -> ListingData:
    """
    Service function to search products by name, brand, category or subcategory.

    Args:
        query: Raw search input
        selection: Facet selection for this request
        page: Page number (starts at 1)
        size: Items per page

    Returns:
        ListingData of ranked results. A query shorter than two characters
        yields an empty listing without reading the catalog.

    Raises:
        HTTPException: 500 if the catalog cannot be read
    """
    engine = ListingEngine(SEARCH_PAGE, selection)
    query = query or ""

    if len(query.strip()) < MIN_QUERY_LENGTH:
        return listing_data(engine, page, size, query=query)

    lookups = await catalog.get_lookups()
    products = await catalog.get_search_products(settings.search_fetch_limit)

    ranked = rank_products(query, products, lookups)
    logger.info("Search '%s' matched %d of %d products", query, len(ranked), len(products))

    engine.load_ranked(ranked, lookups)
    return listing_data(engine, page, size, query=query)
