"""
Core domain models, computation primitives, and wire contracts.

This module contains the foundational building blocks that are independent
of external systems (record stores, mail servers, identity providers, etc.).
"""
