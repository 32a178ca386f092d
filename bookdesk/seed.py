"""
Seed data loading.

Seed files are JSON arrays of camelCase records in the shape the catalog and
request screens have always used. Optional book fields (publisher,
publishedYear, imageUrl, even category) may be missing.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union
import json
import logging

from .domain import Book, BookRequest, RequestStatus, Role, User

if TYPE_CHECKING:
    from .api import LibrarySystem

logger = logging.getLogger(__name__)

BOOKS_FILE = "books.json"
USERS_FILE = "users.json"
REQUESTS_FILE = "book_requests.json"


def load_json(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load a JSON array from `path`. A missing file is an empty list."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Seed file {path} not found, starting empty")
        return []
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 string to a naive UTC datetime (the form datetime.utcnow() gives)."""
    if not value:
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def book_from_record(item: Dict[str, Any]) -> Book:
    return Book(
        book_id=str(item["id"]),
        title=item["title"],
        author=item["author"],
        isbn=item.get("isbn", ""),
        category=item.get("category"),
        description=item.get("description", ""),
        total_copies=int(item.get("totalCopies", 0)),
        available_copies=int(item.get("availableCopies", 0)),
        publisher=item.get("publisher"),
        published_year=item.get("publishedYear"),
        image_url=item.get("imageUrl"),
    )


def user_from_record(item: Dict[str, Any]) -> User:
    return User(
        user_id=str(item["id"]),
        name=item["name"],
        email=item["email"],
        role=Role[item.get("role", "employee").upper()],
        department=item.get("department"),
        employee_id=item.get("employeeId"),
    )


def request_from_record(item: Dict[str, Any]) -> BookRequest:
    return BookRequest(
        request_id=str(item["id"]),
        user_id=str(item["userId"]),
        user_name=item["userName"],
        user_email=item["userEmail"],
        book_id=str(item["bookId"]),
        book_title=item["bookTitle"],
        book_author=item["bookAuthor"],
        request_date=parse_timestamp(item["requestDate"]),
        expected_return_date=item["expectedReturnDate"],
        status=RequestStatus(item.get("status", "pending")),
        admin_comments=item.get("adminComments"),
        dispatch_date=parse_timestamp(item.get("dispatchDate")),
        return_date=parse_timestamp(item.get("returnDate")),
    )


def load_seed(sys: "LibrarySystem", seed_dir: Optional[Union[str, Path]] = None) -> None:
    """Fill the system's repositories from the JSON files in `seed_dir`."""
    seed_dir = Path(seed_dir or sys.settings.seed_dir)

    for item in load_json(seed_dir / BOOKS_FILE):
        sys.books.add(book_from_record(item))
    for item in load_json(seed_dir / USERS_FILE):
        sys.users.add(user_from_record(item))
    for item in load_json(seed_dir / REQUESTS_FILE):
        sys.requests.add(request_from_record(item))

    logger.info(
        f"Seeded {len(sys.books.list_all())} books, {len(sys.users.list_all())} users, "
        f"{len(sys.requests.list_all())} requests from {seed_dir}"
    )


def seed_demo_data(sys: "LibrarySystem") -> None:
    """Load the packaged seed, then push a few fresh requests through the lifecycle."""
    load_seed(sys)

    employee = next((u for u in sys.users.list_all() if not u.is_admin), None)
    if employee is None:
        logger.warning("No employee in seed data, skipping demo requests")
        return

    books = sys.catalog.available()[:3]
    now = datetime.utcnow()

    submitted = [
        sys.request_book(employee.user_id, b.book_id, now=now - timedelta(hours=3 - i))
        for i, b in enumerate(books)
    ]
    submitted = [r for r in submitted if r]
    if len(submitted) < 3:
        logger.warning(f"Only {len(submitted)} demo request(s) could be submitted")

    if submitted:
        first = submitted[0]
        sys.transition(first.request_id, RequestStatus.APPROVED, "Enjoy the read")
        sys.transition(first.request_id, RequestStatus.DISPATCHED)
    if len(submitted) > 1:
        sys.transition(submitted[1].request_id, RequestStatus.REJECTED, "Reserved for a team workshop")

    logger.info(f"Demo requests: {[r.request_id for r in submitted]}")
