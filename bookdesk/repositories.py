from __future__ import annotations
from dataclasses import fields
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
import uuid

from .domain import Book, BookRequest, RequestStatus, User


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


class UserRepo:
    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def add(self, user: User) -> None:
        self._users[user.user_id] = user

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._users.values():
            if u.email == email:
                return u
        return None

    def list_all(self) -> List[User]:
        return list(self._users.values())


class BookRepo:
    """
    The catalog store. Pure CRUD: no range checks on copy counts happen here,
    callers validate before create/update.
    """

    _BOOK_FIELDS = {f.name for f in fields(Book)} - {"book_id"}

    def __init__(self) -> None:
        self._books: Dict[str, Book] = {}

    def add(self, book: Book) -> None:
        self._books[book.book_id] = book

    def get(self, book_id: str) -> Optional[Book]:
        return self._books.get(book_id)

    def list_all(self) -> List[Book]:
        return list(self._books.values())

    def create(self, **values: Any) -> Book:
        book_id = _new_id("bk")
        while book_id in self._books:
            book_id = _new_id("bk")
        b = Book(book_id=book_id, **values)
        self.add(b)
        return b

    def update(self, book_id: str, **changes: Any) -> bool:
        unknown = set(changes) - self._BOOK_FIELDS
        if unknown:
            raise TypeError(f"unknown book field(s): {', '.join(sorted(unknown))}")

        b = self._books.get(book_id)
        if b is None:
            return False
        for name, value in changes.items():
            setattr(b, name, value)
        return True

    def delete(self, book_id: str) -> bool:
        return self._books.pop(book_id, None) is not None

    def categories(self) -> Set[str]:
        return {b.category for b in self._books.values() if b.category}

    def list_available(self) -> List[Book]:
        return [b for b in self._books.values() if b.is_available]


class RequestRepo:
    """The request ledger. Requests are only ever appended, never removed."""

    def __init__(self) -> None:
        self._requests: Dict[str, BookRequest] = {}

    def add(self, r: BookRequest) -> None:
        self._requests[r.request_id] = r

    def get(self, request_id: str) -> Optional[BookRequest]:
        return self._requests.get(request_id)

    def list_all(self) -> List[BookRequest]:
        return list(self._requests.values())

    def list_by_user(self, user_id: str) -> List[BookRequest]:
        return [r for r in self._requests.values() if r.user_id == user_id]

    def list_by_status(self, status: RequestStatus) -> List[BookRequest]:
        return [r for r in self._requests.values() if r.status == status]

    def create(
        self,
        user_id: str,
        user_name: str,
        user_email: str,
        book_id: str,
        book_title: str,
        book_author: str,
        expected_return_date: str,
        now: Optional[datetime] = None,
    ) -> BookRequest:
        request_id = _new_id("req")
        while request_id in self._requests:
            request_id = _new_id("req")

        r = BookRequest(
            request_id=request_id,
            user_id=user_id,
            user_name=user_name,
            user_email=user_email,
            book_id=book_id,
            book_title=book_title,
            book_author=book_author,
            request_date=now or datetime.utcnow(),
            expected_return_date=expected_return_date,
        )
        self.add(r)
        return r

    def stats(self, user_id: Optional[str] = None) -> Dict[str, int]:
        """
        Counts by status. Rejected requests are not reported on their own,
        they make up whatever `total` has left over.
        """
        items = self.list_by_user(user_id) if user_id is not None else self.list_all()

        def count(status: RequestStatus) -> int:
            return sum(1 for r in items if r.status == status)

        return {
            "total": len(items),
            "pending": count(RequestStatus.PENDING),
            "approved": count(RequestStatus.APPROVED),
            "dispatched": count(RequestStatus.DISPATCHED),
            "returned": count(RequestStatus.RETURNED),
        }
