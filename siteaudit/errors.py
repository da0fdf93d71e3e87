"""Exceptions raised by the audit pipeline."""


class AuditError(Exception):
    """Base class for audit failures."""


class InvalidURLError(AuditError):
    pass


class FetchError(AuditError):
    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Could not fetch {url}: {reason}")
