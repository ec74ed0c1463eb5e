"""
Derivation of the filter options offered for a candidate list.
"""
from typing import List

from storefront.catalog.schemas import CatalogLookups
from storefront.listings.constants import (
    PRICE_BANDS, DISCOUNT_BANDS, SORT_LABELS,
    FACET_BRAND, FACET_CATEGORY, FACET_SUBCATEGORY, FACET_PRICE, FACET_DISCOUNT,
)
from storefront.listings.pages import PageProfile
from storefront.listings.schemas import Candidate, FacetOptions, SortOption


def _distinct(values) -> List[str]:
    seen = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)


def build_facet_options(candidates: List[Candidate], lookups: CatalogLookups, profile: PageProfile) -> FacetOptions:
    """
    Compute the filter options for a page from its current candidates.

    Args:
        candidates: Candidates before filtering (ranked results on the search page)
        lookups: Slug to display-name tables; for a category page, scoped to that category
        profile: The page whose facets are built

    Returns:
        FacetOptions with brand and category names sorted, subcategory names in
        lookup order, and the page's fixed bands and sort options
    """
    options = FacetOptions(
        sortOptions=[SortOption(value=key, label=SORT_LABELS.get(key, key)) for key in profile.sort_keys]
    )

    if profile.has_facet(FACET_BRAND):
        brand_slugs = _distinct(c.product.brand for c in candidates)
        options.brands = sorted(lookups.brand_name(slug) for slug in brand_slugs)

    if profile.has_facet(FACET_CATEGORY):
        category_slugs = _distinct(pair.category for c in candidates for pair in c.product.categories)
        options.categories = sorted(lookups.category_name(slug) for slug in category_slugs)

    if profile.has_facet(FACET_SUBCATEGORY):
        options.subcategories = [s.name or s.slug for s in lookups.subcategories]

    if profile.has_facet(FACET_PRICE):
        options.priceRanges = list(PRICE_BANDS)

    if profile.has_facet(FACET_DISCOUNT):
        options.discountRanges = list(DISCOUNT_BANDS)

    return options
