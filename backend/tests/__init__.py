"""
DevPortal Test Suite
====================

Tests for the DevPortal content aggregation backend.

Test Organization:
-----------------
- conftest.py: Pytest fixtures (database, FastAPI client, fake upstream, users)
- factories.py: Test data factories using factory_boy
- test_*.py: One module per area (sources, normalization, favorites, ...)

Running Tests:
--------------
    # Run all tests
    pytest

    # Run specific test file
    pytest backend/tests/test_favorites.py

    # Run with verbose output
    pytest -v

Dependencies:
-------------
    pip install -e ".[test]"
"""
