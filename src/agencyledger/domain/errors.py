"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class DocumentReadError(DomainError):
    """An uploaded document could not be read."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def project_not_found(project_id: int) -> str:
    """Return message for missing project."""
    return f"Project {project_id} not found"


def cost_not_found(cost_id: int) -> str:
    """Return message for missing cost."""
    return f"Cost {cost_id} not found"


def report_not_found(report_type: str, fiscal_year: int) -> str:
    """Return message for a missing report in a fiscal year."""
    return f"No {report_type} report for FY {fiscal_year}"


def negative_amount(kind: str, amount) -> str:
    """Return message for a negative entity amount."""
    return f"{kind} amount must not be negative (got {amount})"


def invalid_choice(field: str, value: str, choices) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}"


def unsupported_document(file_name: str) -> str:
    """Return message for an upload with an unknown extension."""
    return f"Unsupported document type for '{file_name}'. Expected a .pdf or .csv file"
