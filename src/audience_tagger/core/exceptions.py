"""Exceptions raised by the tagger."""


class AudienceTaggerError(Exception):
    """Base exception for tagger errors."""
    pass


class UnknownProviderError(AudienceTaggerError, ValueError):
    """Provider selector does not name a supported backend."""
    pass


class LibraryError(AudienceTaggerError):
    """Library file could not be read or written."""
    pass
