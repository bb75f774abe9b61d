"""Errors raised by the feature pipeline and its collaborators."""


class ConfigurationError(ValueError):
    """Pipeline configuration cannot produce a usable window."""


class SignalShapeError(ValueError):
    """Axis arrays that must line up have different lengths."""


class BufferFullError(RuntimeError):
    """A recording buffer reached its capacity and must be flushed."""


class ModelUnavailableError(RuntimeError):
    """The trained classifier could not be loaded or used."""


class ExportError(RuntimeError):
    """Recorded samples could not be written to disk."""
