"""HTTP API for DressStudio."""

from dress_studio.api.factory import create_app

__all__ = ["create_app"]
