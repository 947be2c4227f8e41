"""Dress rental studio management backend."""

from dress_studio.version import __app_name__, __version__

__all__ = ["__app_name__", "__version__"]
