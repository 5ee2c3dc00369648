"""
Test suite for intfloat

Contains:
- tests/unit/          : Unit tests for individual modules
"""
