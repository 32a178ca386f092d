from typing import Any, Dict, Optional


class BookValidator:
    """Field checks the catalog management screens apply before saving a book."""

    REQUIRED = ("title", "author", "isbn", "category")

    @staticmethod
    def _blank(value: Optional[str]) -> bool:
        return value is None or not str(value).strip()

    @staticmethod
    def validate(values: Dict[str, Any]) -> None:
        """Raise ValueError describing the first problem found in `values`."""
        missing = [name for name in BookValidator.REQUIRED if BookValidator._blank(values.get(name))]
        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")

        total = values.get("total_copies", 0)
        available = values.get("available_copies", 0)
        if total < 0 or available < 0:
            raise ValueError("Copy counts cannot be negative")
        if available > total:
            raise ValueError("Available copies cannot exceed total copies")
