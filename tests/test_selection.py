"""
Tests for facet selection state and the memoizing listing engine.
"""
from unittest.mock import patch

import pytest

from storefront.catalog.schemas import ProductInDB, CatalogLookups, BrandInDB
from storefront.listings import pipeline
from storefront.listings.engine import ListingEngine
from storefront.listings.pages import SEARCH_PAGE, CATEGORY_PAGE, SUBCATEGORY_PAGE, PROMOTIONS_PAGE
from storefront.listings.selection import FacetSelection


def test_toggle_twice_restores_selection():
    selection = FacetSelection.for_page(SEARCH_PAGE)
    before = selection.snapshot()

    selection.toggle_brand("Nivea")
    assert selection.brands == {"Nivea"}
    assert selection.snapshot() != before

    selection.toggle_brand("Nivea")
    assert selection.snapshot() == before


def test_toggles_are_independent_per_facet():
    selection = FacetSelection.for_page(CATEGORY_PAGE)
    selection.toggle_brand("Vichy")
    selection.toggle_subcategory("Shampoing")
    selection.toggle_category("Visage")
    assert selection.brands == {"Vichy"}
    assert selection.subcategories == {"Shampoing"}
    assert selection.categories == {"Visage"}


def test_bands_are_single_choice():
    selection = FacetSelection.for_page(PROMOTIONS_PAGE)
    selection.set_price_band("Moins de 50 DH")
    selection.set_price_band("50 - 100 DH")
    assert selection.price_band == "50 - 100 DH"

    selection.set_discount_band("Plus de 50%")
    selection.set_discount_band("")
    assert selection.discount_band == ""


@pytest.mark.parametrize("profile, default_sort", [
    (SEARCH_PAGE, "relevance"),
    (CATEGORY_PAGE, "popularity"),
    (SUBCATEGORY_PAGE, "popularity"),
    (PROMOTIONS_PAGE, "discount-desc"),
])
def test_reset_restores_page_default(profile, default_sort):
    selection = FacetSelection.for_page(profile)
    selection.toggle_brand("Nivea")
    selection.set_price_band("Plus de 500 DH")
    selection.set_sort("price-asc")

    selection.reset_all()

    assert selection.sort == default_sort
    assert not selection.is_filtered
    assert selection.snapshot() == FacetSelection.for_page(profile).snapshot()


def test_from_params_dedupes_and_skips_empty_values():
    selection = FacetSelection.from_params(
        SEARCH_PAGE, brands=["Nivea", "Nivea", ""], categories=["Visage"], price_band="50 - 100 DH"
    )
    assert selection.brands == {"Nivea"}
    assert selection.categories == {"Visage"}
    assert selection.sort == "relevance"
    assert selection.is_filtered


def test_sort_alone_is_not_a_filter():
    selection = FacetSelection.for_page(SEARCH_PAGE)
    selection.set_sort("price-desc")
    assert not selection.is_filtered
    assert selection.active_filters() == []


def test_active_filters_format():
    selection = FacetSelection.from_params(
        PROMOTIONS_PAGE, brands=["Vichy", "Garnier"], categories=["Visage"],
        price_band="100 - 200 DH", discount_band="30% - 50%"
    )
    assert selection.active_filters() == [
        "brand:Garnier", "brand:Vichy", "category:Visage",
        "price:100 - 200 DH", "discount:30% - 50%",
    ]


@pytest.fixture
def lookups():
    return CatalogLookups(brands=[BrandInDB(id="b1", slug="nivea", name="Nivea")])


@pytest.fixture
def products():
    return [
        ProductInDB(id="p1", name="Crème Nivea", brand="nivea", price=40),
        ProductInDB(id="p2", name="Baume", brand="nuxe", price=120),
    ]


def test_engine_memoizes_results_until_selection_changes(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    engine.load(products, lookups)

    with patch("storefront.listings.engine.apply_filters_and_sort",
               wraps=pipeline.apply_filters_and_sort) as mock_apply:
        engine.results()
        engine.results()
        assert mock_apply.call_count == 1

        engine.selection.toggle_brand("Nivea")
        assert [c.product.id for c in engine.results()] == ["p1"]
        assert mock_apply.call_count == 2

        engine.load(products, lookups)
        engine.results()
        assert mock_apply.call_count == 3


def test_engine_memoizes_facets_per_load(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    engine.load(products, lookups)

    with patch("storefront.listings.engine.build_facet_options") as mock_build:
        engine.facet_options()
        engine.selection.toggle_brand("Nivea")
        engine.facet_options()
        assert mock_build.call_count == 1


def test_engine_facets_ignore_selection(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    engine.load(products, lookups)
    engine.selection.toggle_brand("Nivea")
    assert engine.facet_options().brands == ["Nivea", "nuxe"]


def test_engine_reset_filters(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    engine.load(products, lookups)
    engine.selection.toggle_brand("nuxe")
    assert len(engine.results()) == 1

    engine.reset_filters()

    assert [c.product.id for c in engine.results()] == ["p1", "p2"]


def test_load_ranked_carries_relevance(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    engine.load_ranked([(products[1], 0.9), (products[0], 0.6)], lookups)
    assert [(c.product.id, c.relevanceScore) for c in engine.candidates] == [("p2", 0.9), ("p1", 0.6)]


def test_load_rejects_misaligned_scores(products, lookups):
    engine = ListingEngine(SEARCH_PAGE)
    with pytest.raises(ValueError):
        engine.load(products, lookups, scores=[0.5])
