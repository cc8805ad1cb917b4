"""Middleware for the kvshort web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
