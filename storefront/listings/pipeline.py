"""
Filter and sort pipeline turning candidates plus a facet selection into the
displayed product list.
"""
import math
import unicodedata
from typing import List, Optional

from storefront.catalog.schemas import ProductInDB, CatalogLookups
from storefront.listings.constants import (
    PRICE_BANDS, DISCOUNT_BANDS,
    SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME, SORT_DISCOUNT_DESC, SORT_DISCOUNT_ASC,
    FACET_BRAND, FACET_CATEGORY, FACET_SUBCATEGORY, FACET_PRICE, FACET_DISCOUNT,
)
from storefront.listings.pages import PageProfile
from storefront.listings.schemas import Band, Candidate
from storefront.listings.selection import FacetSelection


def discount_percentage(price: Optional[float], original_price: Optional[float]) -> int:
    """
    Whole-number discount of price against original price.
    Defined only when original_price > price > 0, otherwise 0. Halves round up.
    """
    price = price or 0
    original_price = original_price or 0
    if not (original_price > price > 0):
        return 0
    return int(math.floor((original_price - price) / original_price * 100 + 0.5))


def build_candidate(product: ProductInDB, lookups: CatalogLookups, relevance: Optional[float] = None) -> Candidate:
    """Resolve a product's labels and discount once for filtering and display."""
    return Candidate(
        product=product,
        brandName=lookups.brand_name(product.brand),
        categoryNames=[lookups.category_name(p.category) for p in product.categories if p.category],
        subcategoryNames=[lookups.subcategory_name(p.subcategory) for p in product.categories if p.subcategory],
        discountPercentage=discount_percentage(product.price, product.originalPrice),
        relevanceScore=relevance,
    )


def find_band(bands: List[Band], label: str) -> Optional[Band]:
    return next((band for band in bands if band.label == label), None)


def _name_collation_key(name: str):
    # Accent- and case-insensitive first, exact text breaks ties
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


# sort key -> (key function, descending)
SORTERS = {
    SORT_PRICE_ASC: (lambda c: c.product.price, False),
    SORT_PRICE_DESC: (lambda c: c.product.price, True),
    SORT_NAME: (lambda c: _name_collation_key(c.product.name), False),
    SORT_DISCOUNT_DESC: (lambda c: c.discountPercentage or 0, True),
    SORT_DISCOUNT_ASC: (lambda c: c.discountPercentage or 0, False),
}


def sort_candidates(candidates: List[Candidate], sort_key: str, profile: PageProfile) -> List[Candidate]:
    """
    Order candidates by a sort key. Keys without a comparator (relevance,
    popularity, newest) use the profile's fallback comparator if it has one,
    otherwise keep the incoming order. Equal keys keep their relative order.
    """
    sorter = SORTERS.get(sort_key)
    if sorter is None and profile.fallback_sort:
        sorter = SORTERS.get(profile.fallback_sort)
    if sorter is None:
        return list(candidates)

    key, descending = sorter
    return sorted(candidates, key=key, reverse=descending)


def apply_filters_and_sort(
    candidates: List[Candidate],
    selection: FacetSelection,
    profile: PageProfile
) -> List[Candidate]:
    """
    Apply the selected facets then the selected sort.

    Facets combine with AND; values within one facet combine with OR. Facets the
    page does not expose and band labels that match no band are ignored.

    Args:
        candidates: Candidates in incoming order (ranked order on the search page)
        selection: The page's current facet selection
        profile: The page the listing is computed for

    Returns:
        New list of the candidates to display, in display order
    """
    filtered = list(candidates)

    if selection.brands and profile.has_facet(FACET_BRAND):
        filtered = [c for c in filtered if c.brandName in selection.brands]

    if selection.categories and profile.has_facet(FACET_CATEGORY):
        filtered = [c for c in filtered if any(name in selection.categories for name in c.categoryNames)]

    if selection.subcategories and profile.has_facet(FACET_SUBCATEGORY):
        filtered = [c for c in filtered if any(name in selection.subcategories for name in c.subcategoryNames)]

    if selection.price_band and profile.has_facet(FACET_PRICE):
        band = find_band(PRICE_BANDS, selection.price_band)
        if band:
            filtered = [c for c in filtered if band.contains(c.product.price)]

    if selection.discount_band and profile.has_facet(FACET_DISCOUNT):
        band = find_band(DISCOUNT_BANDS, selection.discount_band)
        if band:
            filtered = [c for c in filtered if c.discountPercentage and band.contains(c.discountPercentage)]

    return sort_candidates(filtered, selection.sort, profile)
