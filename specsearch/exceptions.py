"""Exception classes for specsearch."""


class SpecSearchError(Exception):
    """Base exception for specsearch errors."""

    pass


class DocumentLoadError(SpecSearchError):
    """Raised when a documents file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        """Initialize with the file path and failure reason."""
        self.path = path
        super().__init__(f"Cannot load documents from {path}: {reason}")


class ConfigError(SpecSearchError, ValueError):
    """Raised when a configuration file is invalid."""

    pass
