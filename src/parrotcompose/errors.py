"""Error taxonomy for parrotcompose.

ConfigError and MisuseError are always fatal. LoadError / DecodeError are
fatal for static overlays and skipped per frame for animated ones.
"""


class ParrotComposeError(Exception):
    """Base class for all parrotcompose errors."""


class ConfigError(ParrotComposeError, ValueError):
    """Missing or invalid base-character configuration."""


class LoadError(ParrotComposeError, OSError):
    """An image source could not be read or fetched."""


class DecodeError(ParrotComposeError, ValueError):
    """An image source was read but could not be decoded."""


class MisuseError(ParrotComposeError, RuntimeError):
    """The encoding lifecycle was driven out of order."""
