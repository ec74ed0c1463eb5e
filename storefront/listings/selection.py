"""
Facet selection state owned by one page instance (one request).
"""
from typing import Iterable, List, Set

from storefront.listings.pages import PageProfile
from storefront.listings.schemas import SelectionData


class FacetSelection:
    """
    The user's current filter and sort choices.

    Brand, category and subcategory choices are multi-select sets of display
    names. Price and discount bands are single-choice labels where "" means no
    filter. Changes are synchronous; the next recompute sees them.
    """

    def __init__(self, default_sort: str):
        self.default_sort = default_sort
        self.brands: Set[str] = set()
        self.categories: Set[str] = set()
        self.subcategories: Set[str] = set()
        self.price_band = ""
        self.discount_band = ""
        self.sort = default_sort

    @classmethod
    def for_page(cls, profile: PageProfile) -> "FacetSelection":
        return cls(default_sort=profile.default_sort)

    @classmethod
    def from_params(
        cls,
        profile: PageProfile,
        brands: Iterable[str] = (),
        categories: Iterable[str] = (),
        subcategories: Iterable[str] = (),
        price_band: str = "",
        discount_band: str = "",
        sort: str = "",
    ) -> "FacetSelection":
        """
        Build a selection from request parameters. Repeated values count once.
        """
        selection = cls.for_page(profile)
        selection.brands = {name for name in brands if name}
        selection.categories = {name for name in categories if name}
        selection.subcategories = {name for name in subcategories if name}
        selection.set_price_band(price_band)
        selection.set_discount_band(discount_band)
        if sort:
            selection.set_sort(sort)
        return selection

    @staticmethod
    def _toggle(target: Set[str], value: str) -> None:
        if value in target:
            target.remove(value)
        else:
            target.add(value)

    def toggle_brand(self, name: str) -> None:
        self._toggle(self.brands, name)

    def toggle_category(self, name: str) -> None:
        self._toggle(self.categories, name)

    def toggle_subcategory(self, name: str) -> None:
        self._toggle(self.subcategories, name)

    def set_price_band(self, label: str) -> None:
        self.price_band = label or ""

    def set_discount_band(self, label: str) -> None:
        self.discount_band = label or ""

    def set_sort(self, key: str) -> None:
        self.sort = key

    def reset_all(self) -> None:
        """Clear every facet and restore the page's default sort."""
        self.brands = set()
        self.categories = set()
        self.subcategories = set()
        self.price_band = ""
        self.discount_band = ""
        self.sort = self.default_sort

    @property
    def is_filtered(self) -> bool:
        return bool(self.brands or self.categories or self.subcategories
                    or self.price_band or self.discount_band)

    def snapshot(self) -> tuple:
        """Hashable view of the selection, used as a memoization key."""
        return (
            frozenset(self.brands),
            frozenset(self.categories),
            frozenset(self.subcategories),
            self.price_band,
            self.discount_band,
            self.sort,
        )

    def active_filters(self) -> List[str]:
        """Active filters as 'facet:value' strings for analytics."""
        return self.to_data().active_filters()

    def to_data(self) -> SelectionData:
        return SelectionData(
            brands=sorted(self.brands),
            categories=sorted(self.categories),
            subcategories=sorted(self.subcategories),
            priceRange=self.price_band,
            discountRange=self.discount_band,
            sort=self.sort,
        )
