"""
Infrastructure Module

Adapters for external systems: the Redis store.
"""
