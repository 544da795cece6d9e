"""Domain exceptions raised by planner services."""


class PlannerError(Exception):
    """Base exception for planner errors."""


class ReferenceNotFoundError(PlannerError):
    """A referenced record does not exist or belongs to another user."""

    def __init__(self, kind: str, reference: object) -> None:
        super().__init__(f"{kind} not found: {reference}")
        self.kind = kind
        self.reference = reference


class PreconditionFailedError(PlannerError):
    """The operation requires state that does not exist."""


class InvalidInputError(PlannerError):
    """Arguments are outside the accepted domain."""
