"""
REST surface for the portfolio backend.

A FastAPI application exposing the same content, contact and admin operations
as the callable functions, plus the store, storage and auth abstractions both
surfaces share.
"""
