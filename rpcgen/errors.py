"""Exception types raised by the generator."""


class ConfigurationError(ValueError):
    """Invalid run configuration. Fatal; raised before any output is written."""


class GenerationError(RuntimeError):
    """A generated transfer would break a pool invariant."""
