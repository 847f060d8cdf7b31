"""GitHub Search API functionality for developer account discovery."""

from .account_discovery import AccountDiscoverer, count_pages

__all__ = ["AccountDiscoverer", "count_pages"]
