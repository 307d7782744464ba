"""Fetchers: the network boundary, with an HTTP and an in-memory implementation."""

from imgcache.fetch.base import Fetcher
from imgcache.fetch.http import HttpFetcher
from imgcache.fetch.static import StaticFetcher

__all__ = ["Fetcher", "HttpFetcher", "StaticFetcher"]
