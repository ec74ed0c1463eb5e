"""
Per-page listing profiles: which facets a page exposes, its sort dropdown and
its default sort.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, FrozenSet

from storefront.listings.constants import (
    SORT_RELEVANCE, SORT_POPULARITY, SORT_NEWEST, SORT_PRICE_ASC, SORT_PRICE_DESC,
    SORT_NAME, SORT_DISCOUNT_DESC, SORT_DISCOUNT_ASC,
    FACET_BRAND, FACET_CATEGORY, FACET_SUBCATEGORY, FACET_PRICE, FACET_DISCOUNT,
)


@dataclass(frozen=True)
class PageProfile:
    name: str
    default_sort: str
    sort_keys: Tuple[str, ...]
    facets: FrozenSet[str]
    # Comparator used for sort keys that define none of their own
    fallback_sort: Optional[str] = None

    def supports_sort(self, key: str) -> bool:
        return key in self.sort_keys

    def has_facet(self, facet: str) -> bool:
        return facet in self.facets


SEARCH_PAGE = PageProfile(
    name="search",
    default_sort=SORT_RELEVANCE,
    sort_keys=(SORT_RELEVANCE, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME, SORT_NEWEST),
    facets=frozenset({FACET_BRAND, FACET_CATEGORY, FACET_PRICE}),
)

CATEGORY_PAGE = PageProfile(
    name="category",
    default_sort=SORT_POPULARITY,
    sort_keys=(SORT_POPULARITY, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME, SORT_NEWEST),
    facets=frozenset({FACET_BRAND, FACET_SUBCATEGORY, FACET_PRICE}),
)

SUBCATEGORY_PAGE = PageProfile(
    name="subcategory",
    default_sort=SORT_POPULARITY,
    sort_keys=(SORT_POPULARITY, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME, SORT_NEWEST),
    facets=frozenset({FACET_BRAND, FACET_PRICE}),
)

PROMOTIONS_PAGE = PageProfile(
    name="promotions",
    default_sort=SORT_DISCOUNT_DESC,
    sort_keys=(SORT_DISCOUNT_DESC, SORT_DISCOUNT_ASC, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME, SORT_NEWEST),
    facets=frozenset({FACET_BRAND, FACET_CATEGORY, FACET_PRICE, FACET_DISCOUNT}),
    fallback_sort=SORT_DISCOUNT_DESC,
)
