"""Version metadata for DressStudio."""

__app_name__ = "DressStudio"
__version__ = "1.0.0"
__company__ = "Rachel Studio"
