"""Errors raised at collaborator boundaries."""


class ExternalServiceError(RuntimeError):
    """An external service failed; the caller may offer a retry."""
