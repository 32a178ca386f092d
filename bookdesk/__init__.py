"""
BookDesk package.

Exports key modules for convenient imports.
"""

from .domain import (
    Role,
    User,
    Book,
    RequestStatus,
    BookRequest,
)

from .repositories import (
    UserRepo,
    BookRepo,
    RequestRepo,
)

from .services import (
    CatalogService,
    RequestService,
    LifecycleService,
    InvalidTransition,
)

from .config import Settings, settings
from .api import LibrarySystem
from .seed import load_seed, seed_demo_data

__all__ = [
    # domain
    "Role",
    "User",
    "Book",
    "RequestStatus",
    "BookRequest",
    # repos
    "UserRepo",
    "BookRepo",
    "RequestRepo",
    # services
    "CatalogService",
    "RequestService",
    "LifecycleService",
    "InvalidTransition",
    # config
    "Settings",
    "settings",
    # api
    "LibrarySystem",
    # seed
    "load_seed",
    "seed_demo_data",
]
