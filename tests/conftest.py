# ===============================================================================
# PYTEST CONFIGURATION FOR THE GIFTING STOREFRONT
# ===============================================================================
"""
Global test configuration.

Test Structure:
- tests/ mirrors apps/ structure for app-specific tests
- tests/factories/ holds model factories and the in-memory catalog
- Naming convention: test_{app}_{feature}.py

Run all tests: pytest tests/
"""

import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_cache():
    """DRF throttle counters live in the cache; start every test clean"""
    cache.clear()
    yield
    cache.clear()
