"""Domain exceptions raised by the service layer.

Each carries the HTTP status the API renders it with; routers never build
error responses themselves.
"""


class MarketplaceError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MarketplaceError):
    status_code = 404
    default_message = "Resource not found"


class ForbiddenError(MarketplaceError):
    status_code = 403
    default_message = "Not authorized to perform this action"


class InvalidStateError(MarketplaceError):
    """Action is illegal for the entity's current status."""

    status_code = 400
    default_message = "Action not allowed in the current state"


class ConflictError(MarketplaceError):
    status_code = 409
    default_message = "Conflicting resource already exists"


class DuplicateBidError(ConflictError):
    default_message = "You have already placed a bid on this job"


class AlreadyClaimedError(ConflictError):
    default_message = "Job already claimed"


class DuplicateRatingError(ConflictError):
    default_message = "This job has already been rated"
