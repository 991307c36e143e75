"""oVirt client exception classes."""


class OvirtError(Exception):
    """Base exception for oVirt API operations."""

    pass


class OvirtAuthenticationError(OvirtError):
    """The engine SSO endpoint refused the credentials."""

    def __init__(self, error, description=None):
        self.error = error
        self.description = description
        message = f"oVirt authentication failed: {error}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)


class OvirtRequestError(OvirtError):
    """The engine answered with a non-2xx status."""

    def __init__(self, status_code, reason=None, detail=None, method=None, url=None):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        self.method = method
        self.url = url
        message = f"{method} {url} failed with {status_code}" if method else f"Request failed with {status_code}"
        if reason:
            message = f"{message}: {reason}"
        if detail and detail != reason:
            message = f"{message} - {detail}"
        super().__init__(message)


class OvirtActionError(OvirtError):
    """An action was accepted but the engine reported it as failed."""

    def __init__(self, action, fault=None):
        self.action = action
        self.fault = fault
        reason = getattr(fault, "reason", None) or "unknown reason"
        detail = getattr(fault, "detail", None)
        message = f"Action '{action}' failed: {reason}"
        if detail:
            message = f"{message} - {detail}"
        super().__init__(message)
