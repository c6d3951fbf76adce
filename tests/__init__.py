"""
Test suite for the range algebra library

Contains:
- tests/unit/          : Unit tests for individual modules
"""
