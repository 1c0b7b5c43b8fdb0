"""
Shared module package.

Contains cross-cutting concerns:
- Error handler registration on the web application
- Logging configuration
"""
