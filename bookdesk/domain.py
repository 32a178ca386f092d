from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Optional


class Role(Enum):
    EMPLOYEE = auto()
    ADMIN = auto()


@dataclass
class User:
    user_id: str
    name: str
    email: str
    role: Role = Role.EMPLOYEE
    department: Optional[str] = None
    employee_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass
class Book:
    book_id: str
    title: str
    author: str
    isbn: str
    category: Optional[str] = None
    description: str = ""
    total_copies: int = 0
    available_copies: int = 0
    publisher: Optional[str] = None
    published_year: Optional[int] = None
    image_url: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.available_copies > 0


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISPATCHED = "dispatched"
    RETURNED = "returned"


# legal successors; rejected and returned are terminal
NEXT_STATUSES = {
    RequestStatus.PENDING: (RequestStatus.APPROVED, RequestStatus.REJECTED),
    RequestStatus.APPROVED: (RequestStatus.DISPATCHED,),
    RequestStatus.DISPATCHED: (RequestStatus.RETURNED,),
    RequestStatus.REJECTED: (),
    RequestStatus.RETURNED: (),
}


@dataclass
class BookRequest:
    """
    One employee's ask to borrow one copy of one book.

    The user_* and book_* fields are snapshots taken when the request is
    created; later edits to the user or book (or deleting the book) do not
    touch them.
    """

    request_id: str
    user_id: str
    user_name: str
    user_email: str
    book_id: str
    book_title: str
    book_author: str
    request_date: datetime
    expected_return_date: str
    status: RequestStatus = RequestStatus.PENDING
    admin_comments: Optional[str] = None
    dispatch_date: Optional[datetime] = None
    return_date: Optional[datetime] = None

    def can_move_to(self, target: RequestStatus) -> bool:
        return target in NEXT_STATUSES[self.status]

    def mark_dispatched(self, when: datetime) -> None:
        self.status = RequestStatus.DISPATCHED
        self.dispatch_date = when

    def mark_returned(self, when: datetime) -> None:
        self.status = RequestStatus.RETURNED
        self.return_date = when
