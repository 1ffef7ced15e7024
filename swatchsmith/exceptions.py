"""Custom exceptions for tile resolution and synthesis"""


class SwatchsmithError(Exception):
    """Base exception for swatchsmith errors"""
    pass


class CatalogError(SwatchsmithError):
    """Corrupt or inconsistent tile table (bad coordinates, duplicate names, dangling aliases)"""
    pass


class DimensionMismatchError(SwatchsmithError, ValueError):
    """Pixel grid has the wrong shape for the requested operation"""
    pass


class TileNotFoundError(SwatchsmithError):
    """Name does not resolve to any catalog slot"""
    pass
