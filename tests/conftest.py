from datetime import datetime

import pytest

from bookdesk import LibrarySystem, Settings, load_seed
from bookdesk.domain import Role, User

T0 = datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture
def sys():
    # fresh, empty system per test
    return LibrarySystem(settings=Settings())


@pytest.fixture
def seeded():
    s = LibrarySystem(settings=Settings())
    load_seed(s)
    return s


@pytest.fixture
def employee(sys):
    u = User(user_id="u1", name="Erin Employee", email="erin@company.com")
    sys.users.add(u)
    return u


@pytest.fixture
def admin(sys):
    u = User(user_id="a1", name="Ada Admin", email="ada@company.com", role=Role.ADMIN)
    sys.users.add(u)
    return u


def make_book(sys, total=5, available=None, **extra):
    values = dict(
        title="Dune",
        author="Frank Herbert",
        isbn="9780441172719",
        category="Fiction",
        total_copies=total,
        available_copies=total if available is None else available,
    )
    values.update(extra)
    return sys.books.create(**values)


def make_request(sys, book, user_id="u1", now=T0):
    return sys.requests.create(
        user_id, "Erin Employee", "erin@company.com",
        book.book_id, book.title, book.author, "2024-03-15", now=now,
    )
