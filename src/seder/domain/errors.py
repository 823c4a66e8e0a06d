"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class MoneyError(ValidationError):
    """Non-numeric monetary input or an impossible arithmetic operation."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def invalid_amount(value: object) -> str:
    """Return message for a value that is not a usable amount."""
    return f"Invalid amount {value!r}: expected a finite number"


def division_by_zero(dividend: object) -> str:
    """Return message for a division with a zero divisor."""
    return f"Cannot divide {dividend} by zero"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing income entry."""
    return f"Income entry {entry_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing client by ID."""
    return f"Client {client_id} not found"


def client_name_not_found(name: str) -> str:
    """Return message for missing client by name."""
    return f"Client '{name}' not found"


def duplicate_client_name(name: str) -> str:
    """Return message for a client name that is already taken."""
    return f"Client with name '{name}' already exists"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def duplicate_category_name(name: str) -> str:
    """Return message for a category name that is already taken."""
    return f"Category with name '{name}' already exists"


def unknown_status(status: str) -> str:
    """Return message for an unrecognised display status."""
    return f"Unknown status '{status}'. Supported statuses: done, sent, paid"


def category_in_use(category_id: int, entry_count: int) -> str:
    """Return message for a category that income entries still reference."""
    return (
        f"Category {category_id} is used by {entry_count} income entry(ies); "
        "archive it instead"
    )
