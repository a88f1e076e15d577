from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response

from ..models import ConversationView, CustomerFilters, CustomerListing, MessageFilters
from ..services.inbox import InboxService, get_inbox_service
from ..utils.filenames import safe_file_name
from ..utils.params import parse_flag, parse_hours
from .dependencies import require_operator

router = APIRouter(prefix="/customers", tags=["customers"], dependencies=[Depends(require_operator)])


def _no_store(response: Response) -> None:
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"


# Query values arrive as raw strings so malformed input degrades to "no filter"
@router.get("", response_model=CustomerListing)
def list_customers(
    response: Response,
    search: Optional[str] = None,
    unread_only: Optional[str] = None,
    recent_hours: Optional[str] = None,
    tag: Optional[str] = None,
    inbox: InboxService = Depends(get_inbox_service),
) -> CustomerListing:
    _no_store(response)
    filters = CustomerFilters(
        search=search,
        unread_only=parse_flag(unread_only),
        recent_hours=parse_hours(recent_hours),
        tag=tag,
    )
    return inbox.get_customer_list(filters)


# Viewing a conversation marks its incoming messages as read
@router.get("/{customer_id}/messages", response_model=ConversationView)
def customer_messages(
    customer_id: str,
    response: Response,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    unread_only: Optional[str] = None,
    recent_hours: Optional[str] = None,
    tag: Optional[str] = None,
    inbox: InboxService = Depends(get_inbox_service),
) -> ConversationView:
    _no_store(response)
    filters = MessageFilters(
        search=search,
        unread_only=parse_flag(unread_only),
        recent_hours=parse_hours(recent_hours),
        tag=tag,
    )
    return inbox.get_customer_messages(safe_file_name(customer_id), filters, limit)


__all__ = ["router"]
