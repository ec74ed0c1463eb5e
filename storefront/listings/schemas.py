"""
This module defines the Pydantic models used for product listings (search,
category, subcategory and promotions pages).
"""

from typing import Optional, List

from pydantic import BaseModel

from storefront.catalog.schemas import ProductInDB
from storefront.common.schemas import PaginationResponse


class Band(BaseModel):
    """
    A named numeric range, inclusive on both ends.
    """
    label: str
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


class SortOption(BaseModel):
    """
    One entry of a page's sort dropdown.
    """
    value: str
    label: str


class Candidate(BaseModel):
    """
    A product under consideration for display, with its labels resolved once.
    """
    product: ProductInDB
    brandName: str = ""
    categoryNames: List[str] = []
    subcategoryNames: List[str] = []
    discountPercentage: int = 0
    relevanceScore: Optional[float] = None  # Search page only


class FacetOptions(BaseModel):
    """
    Filter choices offered for the current candidate list.
    """
    brands: List[str] = []
    categories: List[str] = []
    subcategories: List[str] = []
    priceRanges: List[Band] = []
    discountRanges: List[Band] = []
    sortOptions: List[SortOption] = []


class SelectionData(BaseModel):
    """
    Echo of the facet selection a listing was computed with.
    """
    brands: List[str] = []
    categories: List[str] = []
    subcategories: List[str] = []
    priceRange: str = ""
    discountRange: str = ""
    sort: str

    def active_filters(self) -> List[str]:
        """Active filters as 'facet:value' strings for analytics."""
        filters = [f"brand:{name}" for name in self.brands]
        filters += [f"category:{name}" for name in self.categories]
        filters += [f"subcategory:{name}" for name in self.subcategories]
        if self.priceRange:
            filters.append(f"price:{self.priceRange}")
        if self.discountRange:
            filters.append(f"discount:{self.discountRange}")
        return filters


class PromotionStats(BaseModel):
    """
    Summary figures over every product currently on sale.
    """
    avgDiscount: int = 0
    maxDiscount: int = 0
    totalSavings: float = 0


class ListingData(PaginationResponse[Candidate]):
    """
    A filtered, sorted and paginated product listing with its facets.
    'total' counts filtered candidates, 'candidateCount' counts them before filtering.
    """
    candidateCount: int
    facets: FacetOptions
    selection: SelectionData
    filtersActive: bool = False
    title: str = ""
    breadcrumb: List[str] = []
    query: Optional[str] = None
    stats: Optional[PromotionStats] = None
