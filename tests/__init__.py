"""Test suite for bindery.

Test Structure:
- unit/: Unit tests for individual components, one directory per core package
- conftest.py: Shared fixtures (inventories, document snapshots, match service fakes)
"""
