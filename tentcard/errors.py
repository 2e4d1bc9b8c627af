"""Exceptions. Everything derived from TentcardError aborts a run."""


class TentcardError(Exception):
    """Base exception for tentcard."""

    pass


class ConfigError(TentcardError):
    """Missing or invalid card configuration."""

    pass


class LinkListError(TentcardError):
    """Link list file missing or unreadable."""

    pass


class MetadataProviderError(TentcardError):
    """Spotify authentication or lookup failed."""

    pass
