"""
Constants for listing pages: fixed filter bands, sort keys and facet names.
"""
from storefront.listings.schemas import Band

# Price bands in dirhams, identical on every page
PRICE_BANDS = [
    Band(label="Moins de 50 DH", min=0, max=50),
    Band(label="50 - 100 DH", min=50, max=100),
    Band(label="100 - 200 DH", min=100, max=200),
    Band(label="200 - 500 DH", min=200, max=500),
    Band(label="Plus de 500 DH", min=500, max=9999),
]

# Discount bands in percent, promotions page only
DISCOUNT_BANDS = [
    Band(label="10% - 20%", min=10, max=20),
    Band(label="20% - 30%", min=20, max=30),
    Band(label="30% - 50%", min=30, max=50),
    Band(label="Plus de 50%", min=50, max=100),
]

SORT_RELEVANCE = "relevance"
SORT_POPULARITY = "popularity"
SORT_NEWEST = "newest"
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"
SORT_NAME = "name"
SORT_DISCOUNT_DESC = "discount-desc"
SORT_DISCOUNT_ASC = "discount-asc"

SORT_LABELS = {
    SORT_RELEVANCE: "Pertinence",
    SORT_POPULARITY: "Popularité",
    SORT_NEWEST: "Nouveautés",
    SORT_PRICE_ASC: "Prix croissant",
    SORT_PRICE_DESC: "Prix décroissant",
    SORT_NAME: "Nom A-Z",
    SORT_DISCOUNT_DESC: "Réduction décroissante",
    SORT_DISCOUNT_ASC: "Réduction croissante",
}

FACET_BRAND = "brand"
FACET_CATEGORY = "category"
FACET_SUBCATEGORY = "subcategory"
FACET_PRICE = "price"
FACET_DISCOUNT = "discount"
