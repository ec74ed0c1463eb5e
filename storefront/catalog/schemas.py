"""
This module defines the Pydantic models for catalog documents read from Firestore.
Typed defaults are applied here once, so ranking and filtering never deal with
missing fields.
"""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, field_validator

from storefront.common.schemas import TimestampMixin


def _number_or_zero(value):
    if value is None or value == "" or isinstance(value, bool):
        return 0
    return value


class CategoryPair(BaseModel):
    """
    One category/subcategory combination a product is listed under.
    """
    category: str = ""
    subcategory: str = ""

    @field_validator('category', 'subcategory', mode='before')
    @classmethod
    def empty_if_missing(cls, value):
        return value or ""


class BrandInDB(BaseModel):
    """
    Represents a brand lookup entry.
    """
    id: str
    slug: str = ""
    name: str = ""

    @field_validator('slug', 'name', mode='before')
    @classmethod
    def empty_if_missing(cls, value):
        return value or ""


class CategoryInDB(BrandInDB, TimestampMixin):
    """
    Represents a category lookup entry.
    """
    title: str = ""
    shortSEOdescription: str = ""


class SubcategoryInDB(CategoryInDB):
    """
    Represents a subcategory lookup entry, scoped under a parent category slug.
    """
    parentCategory: str = ""

    @field_validator('parentCategory', mode='before')
    @classmethod
    def parent_empty_if_missing(cls, value):
        return value or ""


class ProductInDB(TimestampMixin):
    """
    Represents a product as stored in the database.
    """
    id: str
    slug: str = ""
    name: str = ""
    brand: str = ""
    categories: List[CategoryPair] = []
    price: float = 0
    originalPrice: Optional[float] = None
    discount: Optional[float] = None
    inStock: bool = True
    images: List[str] = []
    mainImage: Optional[str] = None
    title: Optional[str] = None
    shortDescription: Optional[str] = None
    sku: Optional[str] = None
    contenance: Optional[str] = None

    @field_validator('name', 'brand', mode='before')
    @classmethod
    def empty_if_missing(cls, value):
        return value or ""

    @field_validator('price', mode='before')
    @classmethod
    def price_not_negative(cls, value):
        value = _number_or_zero(value)
        if isinstance(value, (int, float)) and value < 0:
            return 0
        return value

    @field_validator('originalPrice', 'discount', mode='before')
    @classmethod
    def optional_number(cls, value):
        if value is None or value == "" or isinstance(value, bool):
            return None
        return value

    @field_validator('categories', 'images', mode='before')
    @classmethod
    def list_if_missing(cls, value):
        return value or []

    @property
    def is_on_sale(self) -> bool:
        return self.originalPrice is not None and self.originalPrice > self.price


class CatalogLookups(BaseModel):
    """
    Slug to display-name lookup tables for brands, categories and subcategories.
    Unknown slugs resolve to the slug itself.
    """
    brands: List[BrandInDB] = []
    categories: List[CategoryInDB] = []
    subcategories: List[SubcategoryInDB] = []

    _brand_names: Dict[str, str] = {}
    _category_names: Dict[str, str] = {}
    _subcategory_names: Dict[str, str] = {}

    def model_post_init(self, __context: Any) -> None:
        # First entry wins on duplicate slugs
        self._brand_names = {}
        for brand in self.brands:
            self._brand_names.setdefault(brand.slug, brand.name)
        self._category_names = {}
        for category in self.categories:
            self._category_names.setdefault(category.slug, category.name)
        self._subcategory_names = {}
        for subcategory in self.subcategories:
            self._subcategory_names.setdefault(subcategory.slug, subcategory.name)

    def brand_name(self, slug: str) -> str:
        return self._brand_names.get(slug, slug) if slug else ""

    def category_name(self, slug: str) -> str:
        return self._category_names.get(slug, slug) if slug else ""

    def subcategory_name(self, slug: str) -> str:
        return self._subcategory_names.get(slug, slug) if slug else ""

    def category_by_slug(self, slug: str) -> Optional[CategoryInDB]:
        return next((c for c in self.categories if c.slug == slug), None)

    def scoped_to_category(self, category_slug: str) -> "CatalogLookups":
        """
        Copy of these lookups keeping only the subcategories of one parent category.
        """
        return CatalogLookups(
            brands=self.brands,
            categories=self.categories,
            subcategories=[s for s in self.subcategories if s.parentCategory == category_slug],
        )

