"""Domain exceptions raised by services and translated by the routes."""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DomainError):
    """A required value is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""


class UnauthorizedError(DomainError):
    """Credentials did not match a user."""


class InvalidTransitionError(DomainError):
    """The exchange cannot move from its current status to the target one."""

    def __init__(self, exchange_id: int, current: str, target: str) -> None:
        self.exchange_id = exchange_id
        self.current = current
        self.target = target
        super().__init__(f"Exchange {exchange_id} is {current} and cannot become {target}")
