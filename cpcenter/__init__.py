"""Content-provider centre: qualification materials, their review and storage."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "handler",
    "idgen",
    "messages",
    "models",
    "repository",
    "service",
    "types",
]