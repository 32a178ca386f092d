from __future__ import annotations
from datetime import datetime, timedelta
from typing import Any, List, Optional, Set, Union
import logging

from .domain import Book, BookRequest, RequestStatus, User
from .repositories import BookRepo, RequestRepo
from .validation import BookValidator

logger = logging.getLogger(__name__)


class InvalidTransition(ValueError):
    """Raised in strict mode when a target status does not follow the current one."""

    def __init__(self, request: BookRequest, target: RequestStatus) -> None:
        super().__init__(
            f"request {request.request_id} cannot move from {request.status.value} to {target.value}"
        )
        self.request = request
        self.target = target


class CatalogService:
    def __init__(self, books: BookRepo) -> None:
        self.books = books

    def search(self, text: str, category: Optional[str] = None) -> List[Book]:
        t = (text or "").lower().strip()

        def matches_text(b: Book) -> bool:
            if not t:
                return True
            return (
                t in b.title.lower()
                or t in b.author.lower()
                or (b.category is not None and t in b.category.lower())
            )

        def matches_category(b: Book) -> bool:
            return not category or b.category == category

        return [b for b in self.books.list_all() if matches_text(b) and matches_category(b)]

    def categories(self) -> Set[str]:
        return self.books.categories()

    def available(self) -> List[Book]:
        return self.books.list_available()

    def add_book(self, **values: Any) -> Book:
        BookValidator.validate(values)
        b = self.books.create(**values)
        logger.info(f"Book added: {b.book_id} '{b.title}'")
        return b

    def edit_book(self, book_id: str, **changes: Any) -> bool:
        """Validate the merged record, then apply `changes`. False if the book is gone."""
        b = self.books.get(book_id)
        if b is None:
            return False
        merged = {**vars(b), **changes}
        BookValidator.validate(merged)
        return self.books.update(book_id, **changes)

    def remove_book(self, book_id: str) -> bool:
        # open requests keep pointing at the deleted id
        removed = self.books.delete(book_id)
        if removed:
            logger.info(f"Book removed: {book_id}")
        return removed


class RequestService:
    def __init__(self, books: BookRepo, requests: RequestRepo, default_loan_days: int = 14) -> None:
        self.books = books
        self.requests = requests
        self.default_loan_days = default_loan_days

    def submit(
        self,
        user: User,
        book_id: str,
        expected_return_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[BookRequest]:
        now = now or datetime.utcnow()
        book = self.books.get(book_id)
        if book is None:
            logger.warning(f"Request refused: book {book_id} not found")
            return None
        if not book.is_available:
            logger.warning(f"Request refused: no copies of {book_id} available")
            return None

        if expected_return_date is None:
            expected_return_date = (now + timedelta(days=self.default_loan_days)).date().isoformat()

        r = self.requests.create(
            user.user_id,
            user.name,
            user.email,
            book.book_id,
            book.title,
            book.author,
            expected_return_date,
            now=now,
        )
        logger.info(f"Request {r.request_id} submitted by {user.user_id} for {book.book_id}")
        return r

    def history(self, user_id: str) -> List[BookRequest]:
        return newest_first(self.requests.list_by_user(user_id))


class LifecycleService:
    """
    Applies request status changes and their effect on the catalog's copy
    counts. Holds no state of its own.

    By default any target status is applied to an existing request, and a
    return always adds a copy back even past total_copies. `strict` turns on
    the successor check, `clamp_returns` caps the count at total_copies.
    """

    def __init__(
        self,
        books: BookRepo,
        requests: RequestRepo,
        strict: bool = False,
        clamp_returns: bool = False,
    ) -> None:
        self.books = books
        self.requests = requests
        self.strict = strict
        self.clamp_returns = clamp_returns

    def transition(
        self,
        request_id: str,
        target: Union[RequestStatus, str],
        admin_comments: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        target = RequestStatus(target)
        now = now or datetime.utcnow()

        r = self.requests.get(request_id)
        if r is None:
            logger.warning(f"Transition to {target.value} failed: request {request_id} not found")
            return False

        if self.strict and not r.can_move_to(target):
            raise InvalidTransition(r, target)

        previous = r.status
        if target == RequestStatus.DISPATCHED:
            r.mark_dispatched(now)
        elif target == RequestStatus.RETURNED:
            r.mark_returned(now)
        else:
            r.status = target

        if admin_comments is not None:
            r.admin_comments = admin_comments

        if target == RequestStatus.APPROVED:
            self._take_copy(r)
        elif target == RequestStatus.RETURNED:
            self._give_back_copy(r)

        logger.info(f"Request {r.request_id}: {previous.value} -> {target.value}")
        return True

    def _take_copy(self, r: BookRequest) -> None:
        book = self.books.get(r.book_id)
        if book is None:
            logger.warning(f"Approved {r.request_id} but book {r.book_id} no longer exists")
            return
        if book.available_copies <= 0:
            logger.warning(f"Approved {r.request_id} with no copies of {book.book_id} left")
            return
        self.books.update(book.book_id, available_copies=book.available_copies - 1)

    def _give_back_copy(self, r: BookRequest) -> None:
        book = self.books.get(r.book_id)
        if book is None:
            logger.warning(f"Returned {r.request_id} but book {r.book_id} no longer exists")
            return

        available = book.available_copies + 1
        if available > book.total_copies:
            if self.clamp_returns:
                available = book.total_copies
            else:
                logger.warning(
                    f"Book {book.book_id} now has {available} available of {book.total_copies} total"
                )
        self.books.update(book.book_id, available_copies=available)


def newest_first(requests: List[BookRequest]) -> List[BookRequest]:
    return sorted(requests, key=lambda r: r.request_date, reverse=True)
