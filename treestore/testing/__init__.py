"""Testing utilities for TreeStore consumers."""

from .fixtures import CacheTestHelper

__all__ = ['CacheTestHelper']
