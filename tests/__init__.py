"""
Test suite for calc-engine

Contains:
- tests/unit/          : Unit tests for core math, contracts and every calculator
"""
