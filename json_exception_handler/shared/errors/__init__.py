"""
Shared error handling package.

Centralizes the wiring of the JSON exception interceptor so that every
unhandled failure is consistently translated into an API response.
"""
