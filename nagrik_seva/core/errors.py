"""
Domain exceptions raised by the store and lifecycle engine.

The request layer maps these onto HTTP responses in main.py:
- ValidationError family -> 400
- IssueNotFoundError -> 404
"""

from typing import List, Optional, Union


class NagrikSevaError(Exception):
    """Base class for all service errors."""


class ValidationError(NagrikSevaError):
    """Input has the wrong shape or would break a record invariant."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class InvalidIssueUpdateError(ValidationError):
    """Supplied status/updates pair would break the issue's update history."""


class InvalidSimulationError(ValidationError):
    """Simulation parameters are out of range."""


class IssueNotFoundError(NagrikSevaError):
    """Referenced issue id does not exist."""

    def __init__(self, issue_id: Union[int, str]):
        super().__init__(f"Issue {issue_id} not found")
        self.issue_id = issue_id
