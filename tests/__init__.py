"""
Test suite for exactmath

Contains:
- tests/unit/          : Unit tests for individual modules
"""
