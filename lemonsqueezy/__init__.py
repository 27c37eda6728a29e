"""Client for the Lemon Squeezy commerce API: transport, typed documents and catalog services."""

__version__ = "0.1.0"

__all__ = [
    "billing",
    "catalog_services",
    "commerce",
    "response",
    "transport",
]