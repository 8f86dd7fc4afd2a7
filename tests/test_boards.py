from conftest import at, build_ticket
from turnos.dashboard.boards import attention_board, dashboard_summary, status_counts, waiting_board
from turnos.dashboard.store import DashboardState
from turnos.queue.state import TicketStatus


def build_state(tickets):
    state = DashboardState()
    state.replace_tickets(tickets, at=at(60))
    return state


def test_waiting_board_caps_entries_and_reports_total():
    state = build_state([build_ticket(f"A-{index}", minutes=index) for index in range(15)])

    board = waiting_board(state, limit=12)

    assert len(board.tickets) == 12
    assert board.total_waiting == 15
    assert board.tickets[0].code == "A-0"
    assert board.refreshed_at == at(60)


def test_attention_board_has_uncapped_serving_and_capped_queue():
    serving = [
        build_ticket(f"S-{index}", status=TicketStatus.SERVING, table_id=f"M{index}", called_minutes=index)
        for index in range(10)
    ]
    waiting = [build_ticket(f"W-{index}", minutes=index) for index in range(10)]
    state = build_state(serving + waiting)

    board = attention_board(state, serving_limit=None, waiting_limit=8)

    assert len(board.serving) == 10
    assert board.serving[0].code == "S-9"
    assert [ticket.code for ticket in board.waiting] == [f"W-{index}" for index in range(8)]


def test_summary_counts_every_status():
    state = build_state(
        [
            build_ticket("A-1"),
            build_ticket("A-2", is_priority=True, minutes=3),
            build_ticket("A-3", status=TicketStatus.SERVING, table_id="M1"),
            build_ticket("A-4", status=TicketStatus.COMPLETED, table_id="M1"),
            build_ticket("A-5", status=TicketStatus.CANCELLED),
        ]
    )

    summary = dashboard_summary(state, waiting_limit=10)

    assert (summary.waiting, summary.serving, summary.completed, summary.cancelled, summary.total) == (2, 1, 1, 1, 5)
    assert [ticket.code for ticket in summary.next_waiting] == ["A-2", "A-1"]


def test_status_counts_on_empty_list():
    assert status_counts([]) == {"waiting": 0, "serving": 0, "completed": 0, "cancelled": 0, "total": 0}
