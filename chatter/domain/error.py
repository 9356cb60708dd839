"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when an actor lacks the capability an operation requires."""

    def __init__(self, action: str, capability: str, actor: str):
        self.action = action
        self.capability = capability
        super().__init__(f"{actor} needs the '{capability}' capability to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidParentError(DomainError):
    """Raised when a reply names a parent that is missing or on another page."""

    def __init__(self, parent_id: int, page_id: int):
        self.parent_id = parent_id
        self.page_id = page_id
        super().__init__(f"Comment {parent_id} is not a valid parent on page {page_id}")


class StoreUnavailableError(DomainError):
    """Raised on transient I/O failure of the record store or cache backend."""

    pass
