from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
import logging

from .config import Settings, settings as default_settings
from .domain import Book, BookRequest, RequestStatus
from .repositories import BookRepo, RequestRepo, UserRepo
from .services import CatalogService, LifecycleService, RequestService, newest_first

logger = logging.getLogger(__name__)


class LibrarySystem:
    """
    A simple facade that wires repos + services and offers a compact API.

    Build one per running application (or per test) and hand it to whatever
    needs the catalog or the request ledger.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings

        # repos
        self.users = UserRepo()
        self.books = BookRepo()
        self.requests = RequestRepo()

        # services
        self.catalog = CatalogService(self.books)
        self.request_service = RequestService(
            self.books, self.requests, self.settings.default_loan_days
        )
        self.lifecycle = LifecycleService(
            self.books,
            self.requests,
            strict=self.settings.strict_transitions,
            clamp_returns=self.settings.clamp_returned_copies,
        )

    # ---- catalog module
    def add_book(self, **values: Any) -> Book:
        return self.catalog.add_book(**values)

    def search_books(self, text: str, category: Optional[str] = None) -> List[Book]:
        return self.catalog.search(text, category)

    # ---- request module
    def request_book(
        self,
        user_id: str,
        book_id: str,
        expected_return_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[BookRequest]:
        user = self.users.get(user_id)
        if user is None:
            logger.warning(f"Request refused: user {user_id} not found")
            return None
        return self.request_service.submit(user, book_id, expected_return_date, now=now)

    def transition(
        self,
        request_id: str,
        target: Union[RequestStatus, str],
        admin_comments: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        return self.lifecycle.transition(request_id, target, admin_comments, now=now)

    def request_history(self, user_id: str) -> List[BookRequest]:
        return self.request_service.history(user_id)

    def admin_queue(self, status: Optional[Union[RequestStatus, str]] = None) -> List[BookRequest]:
        if status is None:
            items = self.requests.list_all()
        else:
            items = self.requests.list_by_status(RequestStatus(status))
        return newest_first(items)

    # ---- reporting
    def report_inventory(self) -> List[tuple[Book, int, int]]:
        """
        Returns tuples of (Book, total_copies, available_copies)
        """
        return [(b, b.total_copies, b.available_copies) for b in self.books.list_all()]

    def dashboard(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        books = self.books.list_all()
        return {
            "total_books": len(books),
            "available_books": len(self.books.list_available()),
            "requests": self.requests.stats(user_id),
        }
