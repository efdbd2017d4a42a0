"""
Test suite for the customer registry

Contains:
- tests/unit/          : Unit tests for the pure core and the service layer
"""
