"""
Customer Service - versioned customer resource and operations API integration.

This package exposes a customer resource with version-aware CRUD semantics and
integrates with an external financial-operations API (exchange rates, legal
holidays), normalizing its response envelopes.
"""

__version__ = "0.1.0"
