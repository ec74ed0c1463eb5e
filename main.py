import json
import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI
from firebase_admin import credentials

from storefront.common.config import settings, configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def load_firebase_credentials() -> credentials.Certificate:
    """
    Load Firebase credentials.
    Priority: FIREBASE_CREDENTIALS_JSON_CONTENT env var (for production)
    Fallback: local JSON file (for local development)
    """
    if settings.firebase_credentials_json:
        try:
            cred = credentials.Certificate(json.loads(settings.firebase_credentials_json))
            logger.info("Initialized Firebase from FIREBASE_CREDENTIALS_JSON_CONTENT env var.")
            return cred
        except json.JSONDecodeError as e:
            logger.critical("FIREBASE_CREDENTIALS_JSON_CONTENT is set but contains invalid JSON: %s", e)
            raise
        except Exception as e:
            logger.critical("Failed to initialize Firebase from FIREBASE_CREDENTIALS_JSON_CONTENT: %s", e)
            raise

    local_cred_file = settings.firebase_credentials_file
    try:
        cred = credentials.Certificate(local_cred_file)
        logger.info("Initialized Firebase from local JSON file: %s", local_cred_file)
        return cred
    except FileNotFoundError:
        logger.critical(
            "Local credentials file '%s' not found. It is required when "
            "FIREBASE_CREDENTIALS_JSON_CONTENT is not set.", local_cred_file
        )
        raise
    except Exception as e:
        logger.critical("Failed to initialize Firebase from local file '%s': %s", local_cred_file, e)
        raise


def initialize_firebase() -> None:
    try:
        firebase_admin.get_app()
    except ValueError:
        # No default app yet
        firebase_admin.initialize_app(load_firebase_credentials())


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_firebase()
    yield


app = FastAPI(title="Beauty Discount Storefront API", lifespan=lifespan)

from storefront.search.routers import router as search_router
from storefront.listings.routers import router as listings_router
from storefront.catalog.routers import router as catalog_router

app.include_router(search_router, prefix="/search", tags=["search"])
app.include_router(listings_router, tags=["listings"])
app.include_router(catalog_router, prefix="/catalog", tags=["catalog"])


@app.get("/")
def read_root():
    """Root endpoint for the API.
    Returns:
        A simple message indicating the API is running.
    """
    return {"message": "Beauty Discount Storefront API"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
