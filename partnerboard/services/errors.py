"""
Exception hierarchy of the Partnerboard services.

Routers translate these into HTTP responses; ``status_code`` carries the status
each error maps to.
"""


class PartnerboardError(Exception):
    """Base class of all service errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PartnerFetchError(PartnerboardError):
    """The partner webhook could not be reached or returned unusable data."""

    status_code = 502


class AuthenticationError(PartnerboardError):
    """Missing, malformed or unresolvable bearer token."""

    status_code = 401


class ForbiddenError(PartnerboardError):
    """The authenticated user may not act on the requested resource."""

    status_code = 403


class InvalidRequestError(PartnerboardError):
    """The request body is malformed."""

    status_code = 400


class MfaStorageError(PartnerboardError):
    """The MFA code could not be persisted."""

    status_code = 500


class MfaDeliveryError(PartnerboardError):
    """The MFA code was stored but the email could not be sent."""

    status_code = 500
