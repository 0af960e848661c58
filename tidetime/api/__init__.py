"""API package - re-exports from routes module."""

from tidetime.api.routes import register_routes

__all__ = ["register_routes"]
