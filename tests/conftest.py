"""
This module contains pytest fixtures and configuration for testing.
"""
from unittest.mock import MagicMock, patch
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add the project's root directory to the system path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

# Import the main app
from main import app


class MockDoc:
    """Mimics a Firestore document snapshot."""

    def __init__(self, doc_id, doc_data):
        self.id = doc_id
        self._data = doc_data

    def to_dict(self):
        return dict(self._data)


BRAND_DOCS = [
    MockDoc("b1", {"slug": "loreal", "name": "L'Oréal Paris"}),
    MockDoc("b2", {"slug": "nivea", "name": "Nivea"}),
    MockDoc("b3", {"slug": "garnier", "name": "Garnier"}),
    MockDoc("b4", {"slug": "vichy", "name": "Vichy"}),
]

CATEGORY_DOCS = [
    MockDoc("c1", {"slug": "cheveux", "name": "Cheveux"}),
    MockDoc("c2", {"slug": "visage", "name": "Visage"}),
    MockDoc("c3", {"slug": "corps", "name": "Corps"}),
]

SUBCATEGORY_DOCS = [
    MockDoc("s1", {"slug": "shampoing", "name": "Shampoing", "parentCategory": "cheveux"}),
    MockDoc("s2", {"slug": "soins-cheveux", "name": "Soins cheveux", "parentCategory": "cheveux"}),
    MockDoc("s3", {"slug": "creme-visage", "name": "Crème visage", "parentCategory": "visage"}),
    MockDoc("s4", {"slug": "gel-douche", "name": "Gel douche", "parentCategory": "corps"}),
]

PRODUCT_DOCS = [
    MockDoc("p1", {
        "slug": "shampoo-argan", "name": "Shampoo Argan", "brand": "loreal",
        "categories": [{"category": "cheveux", "subcategory": "shampoing"}],
        "price": 80, "originalPrice": 100, "inStock": True,
    }),
    MockDoc("p2", {
        "slug": "shampoo-coco", "name": "Shampoo Coco", "brand": "nivea",
        "categories": [{"category": "cheveux", "subcategory": "shampoing"}],
        "price": 30, "inStock": True,
    }),
    MockDoc("p3", {
        "slug": "masque-reparateur", "name": "Masque Réparateur", "brand": "garnier",
        "categories": [{"category": "cheveux", "subcategory": "soins-cheveux"}],
        "price": 120, "originalPrice": 200, "inStock": True,
    }),
    MockDoc("p4", {
        "slug": "creme-hydratante", "name": "Crème Hydratante", "brand": "vichy",
        "categories": [{"category": "visage", "subcategory": "creme-visage"}],
        "price": 250, "originalPrice": 280, "inStock": True,
    }),
    MockDoc("p5", {
        "slug": "gel-douche-coco", "name": "Gel Douche Coco", "brand": "nivea",
        "categories": [{"category": "corps", "subcategory": "gel-douche"}],
        "price": 25, "inStock": False,
    }),
    MockDoc("p6", {
        "slug": "serum-mystere", "name": "Sérum Mystère", "brand": "marque-inconnue",
        "categories": [{"category": "visage", "subcategory": "creme-visage"}],
        "price": 600, "originalPrice": 1300, "inStock": True,
    }),
]


def make_collection(docs):
    """
    Build a mock collection answering full fetches, capped fetches and the
    inStock == True query.
    """
    collection = MagicMock()
    collection.get.return_value = docs
    collection.limit.return_value.get.return_value = docs
    in_stock = [doc for doc in docs if doc.to_dict().get("inStock") is True]
    collection.where.return_value.limit.return_value.get.return_value = in_stock
    return collection


@pytest.fixture
def test_app():
    """
    Create a FastAPI test application.
    """
    return app


@pytest.fixture
def client(test_app):
    """
    Create a test client for the FastAPI application.
    """
    return TestClient(test_app)


@pytest.fixture
def mock_firestore():
    """
    Create a mock for the Firestore client.
    """
    with patch('firebase_admin.firestore.client') as mock:
        # Configure the mock to provide the necessary methods and return values
        firestore_mock = MagicMock()
        mock.return_value = firestore_mock
        yield firestore_mock


@pytest.fixture
def catalog_db(mock_firestore):
    """
    Firestore mock serving the sample beauty catalog.
    """
    collections = {
        "products": make_collection(PRODUCT_DOCS),
        "brands": make_collection(BRAND_DOCS),
        "categories": make_collection(CATEGORY_DOCS),
        "subcategories": make_collection(SUBCATEGORY_DOCS),
    }
    mock_firestore.collection.side_effect = lambda name: collections[name]
    return collections


@pytest.fixture(autouse=True)
def no_redis():
    """
    Run every test without a Redis server: the catalog cache is disabled.
    """
    with patch('storefront.common.cache.get_redis_client', return_value=None) as mock:
        yield mock
