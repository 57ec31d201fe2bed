"""Exceptions raised by the wiki core."""


class WikiError(Exception):
    """Base class for wiki errors."""


class PersistenceError(WikiError):
    """A page could not be written to storage."""


class RenderError(WikiError):
    """A template could not be found or executed."""
