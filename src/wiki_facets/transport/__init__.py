# ABOUTME: Transport layer for the MediaWiki action API
# ABOUTME: Exports the async transport used by the page facade and pagination engine

from .api import DEFAULT_PARAMS, WikiTransport

__all__ = ["DEFAULT_PARAMS", "WikiTransport"]
