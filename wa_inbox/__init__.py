"""WhatsApp customer-service inbox: webhook ingestion, unread tracking and operator API."""

from .config import DEFAULT_APP_VERSION as __version__

__all__ = ["__version__"]
