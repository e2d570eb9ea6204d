from __future__ import annotations


class CatalogLoadError(RuntimeError):
    """The persisted catalog exists but cannot be read or parsed."""


class DistructionsExit(Exception):
    """Expected early termination; reported to the user, exit status 0."""


class GenerationDeclined(DistructionsExit):
    pass


class NotAProjectError(DistructionsExit):
    pass
