"""
User Management Web Application root package.

This package contains the FastAPI app entry point (main.py), the user page
routes, the page state container and the HTTP client for the remote user API.
"""
