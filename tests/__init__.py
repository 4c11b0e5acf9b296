"""
Test suite for the natural arithmetic engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
