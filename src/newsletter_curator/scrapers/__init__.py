"""Feed and article retrieval."""

__all__ = ["content_resolver", "content_resolver_config", "feed_reader"]
