from __future__ import annotations

from enum import Enum


class TicketStatus(str, Enum):
    """Supported states for a ticket's lifecycle."""

    WAITING = "waiting"
    SERVING = "serving"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TicketTransition(str, Enum):
    """Operator actions that move a ticket between states."""

    CALL = "call"
    COMPLETE = "complete"
    CANCEL = "cancel"


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    INACTIVE = "inactive"


ACTIVE_STATUSES = frozenset({TicketStatus.WAITING, TicketStatus.SERVING})
TERMINAL_STATUSES = frozenset({TicketStatus.COMPLETED, TicketStatus.CANCELLED})


class InvalidTransition(ValueError):
    """Raised when a transition is not permitted from the ticket's current state."""

    def __init__(self, status: TicketStatus, transition: TicketTransition, message: str | None = None) -> None:
        super().__init__(message or f"Invalid ticket transition: {transition.value} from {status.value}")
        self.status = status
        self.transition = transition


class TicketLifecycle:
    """Validate ticket lifecycle transitions."""

    _TRANSITIONS: dict[tuple[TicketStatus, TicketTransition], TicketStatus] = {
        (TicketStatus.WAITING, TicketTransition.CALL): TicketStatus.SERVING,
        (TicketStatus.SERVING, TicketTransition.COMPLETE): TicketStatus.COMPLETED,
        (TicketStatus.WAITING, TicketTransition.CANCEL): TicketStatus.CANCELLED,
        (TicketStatus.SERVING, TicketTransition.CANCEL): TicketStatus.CANCELLED,
    }

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.WAITING

    @classmethod
    def can_apply(cls, current: TicketStatus, transition: TicketTransition) -> bool:
        return (current, transition) in cls._TRANSITIONS

    @classmethod
    def target(cls, current: TicketStatus, transition: TicketTransition) -> TicketStatus:
        try:
            return cls._TRANSITIONS[(current, transition)]
        except KeyError:
            raise InvalidTransition(current, transition) from None

    @classmethod
    def assert_transition(cls, current: TicketStatus, transition: TicketTransition) -> None:
        cls.target(current, transition)


def is_active(status: TicketStatus) -> bool:
    return status in ACTIVE_STATUSES


def is_terminal(status: TicketStatus) -> bool:
    return status in TERMINAL_STATUSES
