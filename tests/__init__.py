"""
Test suite for the SD59x18 fixed-point kernel

Contains:
- tests/unit/          : Unit tests for individual modules
"""
