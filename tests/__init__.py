"""
Test suite for the DEX pricing core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
