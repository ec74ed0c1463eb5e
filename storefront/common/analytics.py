"""
Fire-and-forget analytics events emitted after a listing has been computed.

Events never feed back into ranking or filtering; they are scheduled as
background tasks and any failure is logged and dropped.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

import pytz
from firebase_admin import firestore

from storefront.common.config import settings

logger = logging.getLogger(__name__)

VIEW_ITEM_LIST_LIMIT = 10


def get_firestore_client():
    return firestore.client()


def _store_now() -> datetime:
    return datetime.now(pytz.timezone(settings.store_timezone))


async def emit_event(name: str, params: Dict[str, Any]) -> None:
    """
    Record one analytics event.

    Args:
        name: Event name (e.g. 'search', 'view_item_list')
        params: Event parameters
    """
    event = {"event": name, "params": params, "occurredAt": _store_now().isoformat()}
    try:
        logger.info("analytics event %s %s", name, params)
        if settings.analytics_collection:
            db = get_firestore_client()
            db.collection(settings.analytics_collection).add(event)
    except Exception as e:
        logger.warning("Dropping analytics event %s: %s", name, e)


async def track_search(search_term: str, results_count: int) -> None:
    await emit_event("search", {"search_term": search_term, "results_count": results_count})


async def track_view_item_list(list_id: str, list_name: str, items: List[Dict[str, Any]]) -> None:
    """
    Record that a product list was displayed. Only the first items are reported.
    """
    reported = [dict(item, index=index) for index, item in enumerate(items[:VIEW_ITEM_LIST_LIMIT])]
    await emit_event("view_item_list", {
        "item_list_id": list_id,
        "item_list_name": list_name,
        "items": reported,
    })
