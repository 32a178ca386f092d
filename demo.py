from __future__ import annotations
import logging

from bookdesk import LibrarySystem, RequestStatus, seed_demo_data, settings


def demo_flow() -> None:
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    sys = LibrarySystem()
    seed_demo_data(sys)

    # Search
    print("\n[demo] search 'code':", [b.title for b in sys.search_books("code")])
    print("[demo] categories:", sorted(sys.catalog.categories()))

    # Report inventory
    print("\n[demo] inventory:")
    for book, total, available in sys.report_inventory():
        print(f"  - {book.title}: total={total}, available={available}")

    # Admin queue, newest first
    print("\n[demo] pending queue:")
    for r in sys.admin_queue(RequestStatus.PENDING):
        print(f"  - {r.request_id} {r.user_name} -> {r.book_title} ({r.request_date:%Y-%m-%d})")

    # Walk the newest pending request through to the end
    pending = sys.admin_queue(RequestStatus.PENDING)
    if pending:
        r = pending[0]
        book = sys.books.get(r.book_id)
        before = book.available_copies if book else None
        for target in (RequestStatus.APPROVED, RequestStatus.DISPATCHED, RequestStatus.RETURNED):
            ok = sys.transition(r.request_id, target)
            print(f"[demo] {r.request_id} -> {target.value}: {'OK' if ok else 'FAILED'}")
        after = book.available_copies if book else None
        print(f"[demo] copies of {r.book_title}: {before} -> {after}")

    # Unknown request id
    print("\n[demo] transition unknown id:", sys.transition("nope", RequestStatus.APPROVED))

    print("\n[demo] dashboard:", sys.dashboard())


if __name__ == "__main__":
    demo_flow()
