"""
Test suite for rate_oracle

Contains:
- tests/unit/          : Unit tests for individual modules
"""
