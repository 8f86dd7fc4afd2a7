"""Dashboard state, orchestration and live boards."""

from .boards import AttentionBoard, DashboardSummary, WaitingBoard, attention_board, dashboard_summary, waiting_board
from .poller import QueuePoller
from .service import DashboardService
from .store import DashboardState, TicketNotCached

__all__ = [
    "AttentionBoard",
    "attention_board",
    "DashboardService",
    "DashboardState",
    "DashboardSummary",
    "dashboard_summary",
    "QueuePoller",
    "TicketNotCached",
    "WaitingBoard",
    "waiting_board",
]
