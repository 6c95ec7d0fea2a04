from __future__ import annotations


class RecipeServiceError(Exception):
    """Base class for errors raised by the recipe service."""


class InvalidInputError(RecipeServiceError):
    """The caller supplied unusable input. Maps to HTTP 400."""


class UpstreamError(RecipeServiceError):
    """A collaborator (file, remote API) failed. Maps to HTTP 500."""


class RecognitionError(UpstreamError):
    pass


class CatalogError(UpstreamError):
    pass


class LedgerCorruptedError(UpstreamError):
    pass
