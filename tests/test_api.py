import logging
from datetime import datetime, timedelta

from bookdesk import RequestStatus

from conftest import T0, make_book


def test_request_book_snapshots_user_and_book(sys, employee):
    b = make_book(sys, total=2)
    r = sys.request_book(employee.user_id, b.book_id, "2024-04-01", now=T0)

    assert r.status == RequestStatus.PENDING
    assert (r.user_name, r.user_email) == ("Erin Employee", "erin@company.com")
    assert (r.book_title, r.book_author) == ("Dune", "Frank Herbert")
    assert r.expected_return_date == "2024-04-01"
    assert b.available_copies == 2

    sys.books.update(b.book_id, title="Dune (Deluxe)")
    employee.name = "Erin E."
    assert r.book_title == "Dune"
    assert r.user_name == "Erin Employee"


def test_request_book_default_return_date(sys, employee):
    b = make_book(sys)
    r = sys.request_book(employee.user_id, b.book_id, now=T0)
    assert r.expected_return_date == "2024-03-15"


def test_request_book_refused(sys, employee):
    out = make_book(sys, total=1, available=0)
    assert sys.request_book(employee.user_id, out.book_id) is None
    assert sys.request_book(employee.user_id, "missing") is None
    assert sys.request_book("ghost", out.book_id) is None
    assert sys.requests.list_all() == []


def test_admin_queue_newest_first(sys, employee):
    b = make_book(sys, total=5)
    old = sys.request_book(employee.user_id, b.book_id, now=T0)
    new = sys.request_book(employee.user_id, b.book_id, now=T0 + timedelta(days=1))
    mid = sys.request_book(employee.user_id, b.book_id, now=T0 + timedelta(hours=5))
    sys.transition(mid.request_id, RequestStatus.REJECTED)

    assert sys.admin_queue() == [new, mid, old]
    assert sys.admin_queue("pending") == [new, old]
    assert sys.request_history(employee.user_id)[0] is new


def test_transition_through_facade(sys, employee):
    b = make_book(sys, total=1)
    r = sys.request_book(employee.user_id, b.book_id)
    assert sys.transition(r.request_id, "approved", "ok") is True
    assert b.available_copies == 0
    assert sys.transition("missing", "approved") is False


def test_dashboard_and_inventory(seeded):
    dash = seeded.dashboard()
    assert dash["total_books"] == 6
    assert dash["available_books"] == 5
    assert dash["requests"] == {
        "total": 5, "pending": 1, "approved": 1, "dispatched": 1, "returned": 1,
    }
    assert seeded.dashboard(user_id="1")["requests"]["total"] == 3

    inventory = {b.title: (total, available) for b, total, available in seeded.report_inventory()}
    assert inventory["Sapiens"] == (2, 1)


def test_transition_through_facade_uses_given_time(sys, employee):
    b = make_book(sys, total=1)
    r = sys.request_book(employee.user_id, b.book_id, now=T0)
    sys.transition(r.request_id, "approved")
    assert sys.transition(r.request_id, "dispatched", now=T0 + timedelta(days=1))
    assert r.dispatch_date == T0 + timedelta(days=1)
    assert sys.transition(r.request_id, "returned", now=T0 + timedelta(days=9))
    assert r.return_date == T0 + timedelta(days=9)


def test_request_book_unknown_user_is_logged(sys, caplog):
    b = make_book(sys)
    with caplog.at_level(logging.WARNING, logger="bookdesk.api"):
        assert sys.request_book("ghost", b.book_id) is None
    assert "ghost" in caplog.text
