"""
Service functions for reading catalog documents from Firestore.
Handles bulk product fetches, lookup tables and the Redis snapshot cache.
"""
import logging
from typing import List, Optional, Callable

from fastapi import HTTPException
from firebase_admin import firestore

from storefront.catalog.schemas import (
    ProductInDB, BrandInDB, CategoryInDB, SubcategoryInDB, CatalogLookups, CategoryPair,
)
from storefront.common.cache import get_cache, set_cache, delete_pattern, generate_cache_key

logger = logging.getLogger(__name__)

PRODUCTS_COLLECTION = "products"
BRANDS_COLLECTION = "brands"
CATEGORIES_COLLECTION = "categories"
SUBCATEGORIES_COLLECTION = "subcategories"

CACHE_PREFIX = "catalog"


def get_firestore_client():
    return firestore.client()


def parse_product(doc) -> ProductInDB:
    """
    Convert a Firestore product snapshot into a ProductInDB with typed defaults.

    Args:
        doc: Firestore document snapshot

    Returns:
        ProductInDB with absent strings as "" and absent numbers as 0
    """
    data = doc.to_dict() or {}
    data['id'] = doc.id
    data['slug'] = data.get('slug') or doc.id
    if not data.get('mainImage') and data.get('images'):
        data['mainImage'] = data['images'][0]
    # Pairs can be stored as plain dicts or with missing keys
    data['categories'] = [
        pair if isinstance(pair, dict) else {}
        for pair in (data.get('categories') or [])
    ]
    return ProductInDB(**data)


def _parse_lookup(doc, model):
    data = doc.to_dict() or {}
    data['id'] = doc.id
    return model(**data)


async def _cached(key: str, loader: Callable, parse: Callable):
    """
    Return a cached catalog payload, or load it from Firestore and cache it.
    """
    cached = await get_cache(key)
    if cached is not None:
        logger.debug("Catalog cache hit for %s", key)
        return parse(cached)

    value = loader()
    await set_cache(key, _dump(value))
    return value


def _dump(value):
    if isinstance(value, list):
        return [item.model_dump(mode='json') for item in value]
    return value.model_dump(mode='json')


async def get_lookups() -> CatalogLookups:
    """
    Service function to load the brand, category and subcategory lookup tables.

    Returns:
        CatalogLookups containing every brand, category and subcategory

    Raises:
        HTTPException: If the document store cannot be read
    """
    def load() -> CatalogLookups:
        db = get_firestore_client()
        brands = [_parse_lookup(doc, BrandInDB) for doc in db.collection(BRANDS_COLLECTION).get()]
        categories = [_parse_lookup(doc, CategoryInDB) for doc in db.collection(CATEGORIES_COLLECTION).get()]
        subcategories = [
            _parse_lookup(doc, SubcategoryInDB) for doc in db.collection(SUBCATEGORIES_COLLECTION).get()
        ]
        return CatalogLookups(brands=brands, categories=categories, subcategories=subcategories)

    try:
        return await _cached(
            generate_cache_key(f"{CACHE_PREFIX}:lookups", {}),
            load,
            lambda payload: CatalogLookups(**payload),
        )
    except Exception as exc:
        logger.error("Failed to load catalog lookups: %s", exc)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load catalog: {str(exc)}"
        )


async def get_products(limit: int, in_stock_only: bool = False) -> List[ProductInDB]:
    """
    Service function to fetch a capped batch of products.

    Args:
        limit: Maximum number of product documents to read
        in_stock_only: Query only documents with inStock == True

    Returns:
        List of ProductInDB in fetch order

    Raises:
        HTTPException: If the document store cannot be read
    """
    def load() -> List[ProductInDB]:
        db = get_firestore_client()
        query = db.collection(PRODUCTS_COLLECTION)
        if in_stock_only:
            query = query.where('inStock', '==', True)
        docs = query.limit(limit).get()
        return [parse_product(doc) for doc in docs]

    try:
        products = await _cached(
            generate_cache_key(f"{CACHE_PREFIX}:products", {"limit": limit, "inStock": in_stock_only}),
            load,
            lambda payload: [ProductInDB(**item) for item in payload],
        )
        logger.debug("Loaded %d products (limit=%d, in_stock_only=%s)", len(products), limit, in_stock_only)
        return products
    except Exception as exc:
        logger.error("Failed to load products: %s", exc)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load catalog: {str(exc)}"
        )


async def get_search_products(limit: int) -> List[ProductInDB]:
    """
    Products eligible for search: not explicitly out of stock and carrying a name and slug.
    """
    products = await get_products(limit)
    return [p for p in products if p.inStock and p.name and p.slug]


async def get_category_products(category_slug: str, limit: int) -> List[ProductInDB]:
    """
    In-stock products listed under a category. A pair also matches when its
    subcategory slug equals the category slug. The fetch limit caps the in-stock
    query before this filter, so products beyond the first `limit` documents
    are not considered.
    """
    products = await get_products(limit, in_stock_only=True)
    return [
        p for p in products
        if any(pair.category == category_slug or pair.subcategory == category_slug for pair in p.categories)
    ]


async def get_subcategory_products(category_slug: str, subcategory_slug: str, limit: int) -> List[ProductInDB]:
    """
    In-stock products listed under exactly this category/subcategory pair.
    The fetch limit applies before the pair filter.
    """
    target = CategoryPair(category=category_slug, subcategory=subcategory_slug)
    products = await get_products(limit, in_stock_only=True)
    return [p for p in products if target in p.categories]


async def get_promotion_products(limit: int) -> List[ProductInDB]:
    """
    In-stock products whose original price is above the current price.
    The fetch limit applies before the on-sale filter.
    """
    products = await get_products(limit, in_stock_only=True)
    return [p for p in products if p.originalPrice and p.originalPrice > 0 and p.is_on_sale]


def get_category(lookups: CatalogLookups, category_slug: str) -> CategoryInDB:
    """
    Resolve a category page slug.

    Raises:
        HTTPException: 404 if no category carries this slug
    """
    category = lookups.category_by_slug(category_slug)
    if not category:
        raise HTTPException(
            status_code=404,
            detail="Category not found"
        )
    return category


def get_subcategory(lookups: CatalogLookups, category_slug: str, subcategory_slug: str) -> SubcategoryInDB:
    """
    Resolve a subcategory page slug within its parent category.

    Raises:
        HTTPException: 404 if the subcategory does not exist under this category
    """
    subcategory: Optional[SubcategoryInDB] = next(
        (s for s in lookups.subcategories
         if s.slug == subcategory_slug and s.parentCategory == category_slug),
        None
    )
    if not subcategory:
        raise HTTPException(
            status_code=404,
            detail="Subcategory not found"
        )
    return subcategory


async def invalidate_catalog_cache() -> int:
    """
    Drop every cached catalog snapshot.

    Returns:
        Number of cache keys deleted
    """
    deleted = await delete_pattern(f"{CACHE_PREFIX}:*")
    logger.info("Invalidated %d catalog cache keys", deleted)
    return deleted
