from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes surfaced to the command layer."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_COMPONENT_OUTPUT = "INVALID_COMPONENT_OUTPUT"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    COMPONENT_ALREADY_STARTED = "COMPONENT_ALREADY_STARTED"
    PREVIOUS_COMPONENT_REQUIRED = "PREVIOUS_COMPONENT_REQUIRED"
    CYCLE_ARCHIVED = "CYCLE_ARCHIVED"
    CANNOT_BRANCH = "CANNOT_BRANCH"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    CYCLE_NOT_FOUND = "CYCLE_NOT_FOUND"


class ProactError(Exception):
    """Base exception for the PrOACT decision engine."""

    pass


class DomainError(ProactError):
    """Deterministic, local rejection of a domain operation."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, **details: str):
        self.message = message
        self.details = {key: str(value) for key, value in details.items()}
        super().__init__(f"[{self.code.value}] {message}")


class ValidationFailed(DomainError):
    """Raised when a component output breaks a completion rule."""

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, field=field)


class InvalidComponentOutput(DomainError):
    """Raised when an output does not match its stage schema."""

    code = ErrorCode.INVALID_COMPONENT_OUTPUT

    def __init__(self, component_type, errors: list[dict]):
        self.component_type = component_type
        self.errors = errors
        super().__init__(
            f"Output for {component_type.value} failed schema validation ({len(errors)} errors)",
            component_type=component_type.value,
        )


class InvalidStateTransition(DomainError):
    """Raised when a component or cycle status change is not allowed."""

    code = ErrorCode.INVALID_STATE_TRANSITION


class ComponentAlreadyStarted(InvalidStateTransition):
    """Raised when starting a component that is not NotStarted."""

    code = ErrorCode.COMPONENT_ALREADY_STARTED


class CycleArchived(InvalidStateTransition):
    """Raised when mutating a completed or archived cycle."""

    code = ErrorCode.CYCLE_ARCHIVED


class PreviousComponentRequired(DomainError):
    """Raised when a component's prerequisite has not been started."""

    code = ErrorCode.PREVIOUS_COMPONENT_REQUIRED


class CannotBranch(DomainError):
    """Raised when branching at a component that was never started."""

    code = ErrorCode.CANNOT_BRANCH


class ConcurrencyConflict(DomainError):
    """Raised when the caller's expected version is stale."""

    code = ErrorCode.CONCURRENCY_CONFLICT

    def __init__(self, component_type, expected: int, actual: int):
        self.component_type = component_type
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{component_type.value} is at version {actual}, expected {expected}",
            component_type=component_type.value,
            expected=expected,
            actual=actual,
        )


class ComponentNotFound(DomainError):
    """Raised when a referenced component or its output is absent."""

    code = ErrorCode.COMPONENT_NOT_FOUND


class CycleNotFound(DomainError):
    """Raised by persistence when no cycle exists for an id."""

    code = ErrorCode.CYCLE_NOT_FOUND

    def __init__(self, cycle_id):
        self.cycle_id = cycle_id
        super().__init__(f"Cycle {cycle_id} not found", cycle_id=cycle_id)
