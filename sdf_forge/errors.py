"""
Error types raised by SDF Forge.

Every failure the CLI reports derives from SdfError, so callers can catch
one type and print its message.
"""


class SdfError(Exception):
    """Base class for all SDF Forge errors"""


class MissingInputPath(SdfError):
    """No input image path was supplied"""

    def __init__(self, message: str = "No input image specified"):
        super().__init__(message)


class InvalidSpreadArgument(SdfError, ValueError):
    """Spread is not an unsigned 8-bit integer"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid spread {value!r}: expected an integer in 0-255")


class ImageLoadError(SdfError):
    """The input image could not be opened or decoded"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load image {path}: {reason}")


class ImageSaveError(SdfError):
    """The distance field could not be written to disk"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save output image {path}: {reason}")


class ConfigError(SdfError):
    """A configuration file is missing or malformed"""
