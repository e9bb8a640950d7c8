"""Data ingestors for the OGN beacon service."""

from .feed import FeedConfig, FeedIngestor, build_feed_config

__all__ = [
    "FeedConfig",
    "FeedIngestor",
    "build_feed_config",
]
