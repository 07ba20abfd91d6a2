"""Exceptions raised for bad arguments and bad boundary files."""


class ArgumentError(RuntimeError):
    """Raised when there is a problem with the command line arguments."""


class ConfigError(RuntimeError):
    """Raised when there is a problem with a configuration or boundary file."""


class GeoJSONError(RuntimeError):
    """Raised when there is a problem with parsing a GeoJSON file."""


class PolyError(RuntimeError):
    """Raised when there is a problem with parsing a poly file."""