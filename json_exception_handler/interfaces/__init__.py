"""
Interface layer.

ASGI interceptor, JSON error response writing and the health router.
"""
