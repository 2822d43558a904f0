#!/usr/bin/env python3
"""
Test suite for the property matching engine.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Skip database-backed tests
    python -m pytest tests/ -v -m "not db"

Database tests use in-memory SQLite (see conftest.py); no container is needed.
"""
