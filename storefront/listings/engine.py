"""
Per-page listing engine: holds the loaded candidates and the facet selection,
and recomputes facets and results only when one of them has changed.
"""
import logging
from typing import List, Optional, Tuple

from storefront.catalog.schemas import ProductInDB, CatalogLookups
from storefront.listings.facets import build_facet_options
from storefront.listings.pages import PageProfile
from storefront.listings.pipeline import apply_filters_and_sort, build_candidate
from storefront.listings.schemas import Candidate, FacetOptions
from storefront.listings.selection import FacetSelection

logger = logging.getLogger(__name__)


class ListingEngine:
    """
    One page instance's view of the catalog.

    `load()` is the data-loaded event; selection changes are picked up on the
    next `results()` call. Facet options are memoized per load, results per
    (load, selection snapshot).
    """

    def __init__(self, profile: PageProfile, selection: Optional[FacetSelection] = None):
        self.profile = profile
        self.selection = selection or FacetSelection.for_page(profile)
        self.lookups = CatalogLookups()
        self._candidates: List[Candidate] = []
        self._version = 0
        self._facets: Optional[Tuple[int, FacetOptions]] = None
        self._results: Optional[Tuple[tuple, List[Candidate]]] = None

    @property
    def candidates(self) -> List[Candidate]:
        return list(self._candidates)

    def load(self, products: List[ProductInDB], lookups: CatalogLookups,
             scores: Optional[List[float]] = None) -> None:
        """
        Replace the candidate list.

        Args:
            products: Products in incoming order
            lookups: Slug to display-name tables
            scores: Relevance scores aligned with products (search page only)
        """
        if scores is not None and len(scores) != len(products):
            raise ValueError("scores must align with products")

        self.lookups = lookups
        self._candidates = [
            build_candidate(product, lookups, scores[i] if scores is not None else None)
            for i, product in enumerate(products)
        ]
        self._version += 1
        logger.debug("%s listing loaded %d candidates", self.profile.name, len(self._candidates))

    def load_ranked(self, ranked: List[Tuple[ProductInDB, float]], lookups: CatalogLookups) -> None:
        """Load (product, relevance_score) pairs as produced by the ranker."""
        self.load([product for product, _ in ranked], lookups, [relevance for _, relevance in ranked])

    def facet_options(self) -> FacetOptions:
        if self._facets is None or self._facets[0] != self._version:
            self._facets = (self._version, build_facet_options(self._candidates, self.lookups, self.profile))
        return self._facets[1]

    def results(self) -> List[Candidate]:
        key = (self._version, self.selection.snapshot())
        if self._results is None or self._results[0] != key:
            self._results = (key, apply_filters_and_sort(self._candidates, self.selection, self.profile))
        return list(self._results[1])

    def reset_filters(self) -> None:
        self.selection.reset_all()
