"""Errors raised by the quality algorithms."""


class QualityError(Exception):
    """Base class for all errors raised by xquality."""


class InvalidArgumentError(QualityError, ValueError):
    """An input image or argument can not be processed (empty, bad layout, too small)."""


class DimensionMismatchError(QualityError, ValueError):
    """Two inputs that have to agree in shape or length do not."""


class ArtifactIOError(QualityError, OSError):
    """A model or range artifact is missing, unreadable or corrupt."""


class ConfigurationError(QualityError, ValueError):
    """Model, range and feature configuration are inconsistent with each other."""
