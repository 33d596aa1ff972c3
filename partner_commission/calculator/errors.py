# ==============================================================================
# partner_commission/calculator/errors.py
# ------------------------------------------------------------------------------
# Exception types shared by the engine, the record store and the web layer.
# Row-level problems are recovered or skipped; these are request-level failures.
# ==============================================================================


class CommissionError(Exception):
    """Base class for all errors raised by the commission service."""
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class MalformedRowError(CommissionError):
    """A single upload row could not be mapped. Callers skip the row."""
    status_code = 400


class InvalidInputError(CommissionError):
    """The upload payload or query arguments are structurally unusable."""
    status_code = 400


class AuthenticationError(CommissionError):
    status_code = 401


class NotFoundError(CommissionError):
    """The requested partner is not known to the credential provider."""
    status_code = 404


class StorageError(CommissionError):
    """The persistence collaborator failed; the request is aborted."""
    status_code = 500
