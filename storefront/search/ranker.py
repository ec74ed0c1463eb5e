"""
Relevance ranking of catalog products against a free-text query.
"""
from typing import List, Tuple, Optional

from storefront.catalog.schemas import ProductInDB, CatalogLookups
from storefront.search.similarity import score

MIN_QUERY_LENGTH = 2
RELEVANCE_THRESHOLD = 0.2

NAME_WEIGHT = 1.0
BRAND_WEIGHT = 0.9
CATEGORY_WEIGHT = 0.7
SUBCATEGORY_WEIGHT = 0.8
FULL_TEXT_SCORE = 0.6


def _weighted_label(label: str, term: str, weight: float) -> float:
    # Category labels only count when the pair names one
    if not label:
        return 0.0
    return score(label, term) * weight


def relevance_score(product: ProductInDB, term: str, lookups: CatalogLookups) -> float:
    """
    Score one product against a normalized (lowercased, trimmed) query.

    The result is the maximum over the name, brand, category and subcategory
    matches and the combined "name brand" substring match. Name and brand are
    always scored, so an empty brand name contains every query and gives 0.72.
    """
    relevance = score(product.name, term) * NAME_WEIGHT

    brand_name = lookups.brand_name(product.brand)
    relevance = max(relevance, score(brand_name, term) * BRAND_WEIGHT)

    for pair in product.categories:
        relevance = max(relevance, _weighted_label(lookups.category_name(pair.category), term, CATEGORY_WEIGHT))
        relevance = max(relevance,
                        _weighted_label(lookups.subcategory_name(pair.subcategory), term, SUBCATEGORY_WEIGHT))

    full_text = f"{product.name} {brand_name}".lower()
    if term in full_text:
        relevance = max(relevance, FULL_TEXT_SCORE)

    return relevance


def rank_products(
    query: Optional[str],
    products: List[ProductInDB],
    lookups: CatalogLookups
) -> List[Tuple[ProductInDB, float]]:
    """
    Rank products by relevance to a raw user query.

    Args:
        query: Raw search input
        products: Candidates in fetch order
        lookups: Tables resolving brand/category/subcategory slugs to display names

    Returns:
        List of (product, relevance_score) tuples with score above the inclusion
        threshold, highest first; equal scores keep fetch order
    """
    term = (query or "").lower().strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []

    results = []
    for product in products:
        relevance = relevance_score(product, term, lookups)
        if relevance > RELEVANCE_THRESHOLD:
            results.append((product, relevance))

    # sorted() is stable, so ties stay in fetch order
    return sorted(results, key=lambda item: item[1], reverse=True)
