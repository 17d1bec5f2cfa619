"""
Integration tests against a real Redis server.

Enabled with USE_REAL_REDIS=1; the server is taken from REDIS_URL
(default redis://localhost:6379/0).
"""
