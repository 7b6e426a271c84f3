"""
Issue Store - In-memory record store for issues and chat messages.

DESIGN NOTE:
- Owns the canonical copies of every issue and message
- Assigns integer IDs from monotonic counters (never reused)
- Default-fills optional fields at creation, nothing more
- Every mutation runs under one re-entrant lock
- Callers always get deep copies back, never the stored record
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Union
import logging
import threading

from nagrik_seva.core.errors import InvalidIssueUpdateError, IssueNotFoundError
from nagrik_seva.models.issue import Issue, IssueCreate, IssueStatus, IssueUpdate
from nagrik_seva.models.message import Message, MessageCreate, MessageRole
from nagrik_seva.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


# Demo state: one issue per lifecycle status, each in a different category
DEMO_ISSUES = [
    {
        "description": "Garbage piled up at the corner of MG Road",
        "category": "Waste",
        "location": "MG Road, Block A",
        "status": IssueStatus.IN_PROGRESS,
        "affected_count": 12,
        "days_unresolved": 3,
    },
    {
        "description": "Street light flickering near community park",
        "category": "Energy",
        "location": "Sector 4 Park",
        "status": IssueStatus.REPORTED,
        "affected_count": 50,
        "days_unresolved": 1,
    },
    {
        "description": "Water pipe leaking, flooding the street",
        "category": "Water",
        "location": "Market Street",
        "status": IssueStatus.FORWARDED,
        "affected_count": 5,
        "days_unresolved": 2,
    },
    {
        "description": "Large pothole causing traffic slowing",
        "category": "Transport",
        "location": "Main Highway Exit",
        "status": IssueStatus.RESOLVED,
        "affected_count": 100,
        "days_unresolved": 0,
    },
]

DEMO_GREETING = (
    "Hello! I am Nagrik Seva, your civic help partner. "
    "Describe your issue, and I'll help you report it."
)


class IssueStore:
    """
    Process-wide store for issues and messages.

    Lifecycle: construct once at startup, optionally seed, live for the
    process lifetime. No teardown.
    """

    def __init__(self, clock: Clock = utc_now, seed: bool = False):
        self._clock = clock
        self._lock = threading.RLock()
        self._issues: Dict[int, Issue] = {}
        self._messages: Dict[int, Message] = {}
        self._next_issue_id = 1
        self._next_message_id = 1

        if seed:
            self.seed_demo_data()

    @contextmanager
    def locked(self) -> Iterator["IssueStore"]:
        """
        Hold the store lock across several calls.

        The lock is re-entrant, so store methods can be called inside.
        """
        with self._lock:
            yield self

    def now(self) -> datetime:
        return self._clock()

    # Issues

    def list_issues(
        self,
        status: Optional[IssueStatus] = None,
        category: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> List[Issue]:
        """
        Get all issues, newest first (descending ID).

        Args:
            status: Only issues currently in this status
            category: Only issues in this category (case-insensitive)
            user_id: Only issues reported by this user

        Returns:
            List of issue copies
        """
        with self._lock:
            issues = sorted(self._issues.values(), key=lambda issue: issue.id, reverse=True)

            if status is not None:
                issues = [issue for issue in issues if issue.status == status]
            if category:
                wanted = category.lower()
                issues = [issue for issue in issues if issue.category.lower() == wanted]
            if user_id:
                issues = [issue for issue in issues if issue.user_id == user_id]

            return [issue.model_copy(deep=True) for issue in issues]

    def get_issue(self, issue_id: int) -> Optional[Issue]:
        """Point lookup. Returns None if the issue does not exist."""
        with self._lock:
            issue = self._issues.get(issue_id)
            return issue.model_copy(deep=True) if issue else None

    def create_issue(self, issue_data: IssueCreate, days_unresolved: int = 0) -> Issue:
        """
        Create a new issue with the next ID.

        Defaults: status Reported, affectedCount 1, daysUnresolved 0.
        The update history always starts with a Reported entry at creation
        time. An issue created in a later status gets a second entry for
        that status so the history ends on the current status.

        Args:
            issue_data: Validated create payload
            days_unresolved: Initial counter (demo seeding only)

        Returns:
            Issue: Copy of the stored issue
        """
        with self._lock:
            issue_id = self._next_issue_id
            self._next_issue_id += 1

            now = self.now()
            status = IssueStatus(issue_data.status)

            updates = [IssueUpdate(status=IssueStatus.REPORTED, date=now)]
            if status != IssueStatus.REPORTED:
                updates.append(IssueUpdate(status=status, date=now))

            issue = Issue(
                id=issue_id,
                description=issue_data.description,
                category=issue_data.category,
                location=issue_data.location,
                status=status,
                affected_count=issue_data.affected_count,
                days_unresolved=days_unresolved,
                created_at=now,
                resolved_at=now if status == IssueStatus.RESOLVED else None,
                updates=updates,
                user_id=issue_data.user_id,
                lat=issue_data.lat,
                lng=issue_data.lng,
            )
            self._issues[issue_id] = issue

            logger.info(f"Issue {issue_id} created: category={issue.category}, status={status.value}")
            return issue.model_copy(deep=True)

    def update_issue_status(
        self,
        issue_id: int,
        status: Union[IssueStatus, str],
        updates: Iterable[Union[IssueUpdate, dict]]
    ) -> Issue:
        """
        Replace an issue's status and update history wholesale.

        Sets resolvedAt the first time the issue becomes Resolved; never
        clears it afterwards.

        Raises:
            IssueNotFoundError: If the issue does not exist
            InvalidIssueUpdateError: If status/updates would break the history
        """
        with self._lock:
            issue = self._issues.get(issue_id)
            if issue is None:
                raise IssueNotFoundError(issue_id)

            try:
                new_status = IssueStatus(status)
                new_updates = [
                    update if isinstance(update, IssueUpdate) else IssueUpdate.model_validate(update)
                    for update in updates
                ]
            except ValueError as e:
                raise InvalidIssueUpdateError("Invalid status update", [str(e)])

            self._check_update_history(new_status, new_updates)

            changes = {
                "status": new_status,
                "updates": [update.model_copy() for update in new_updates],
            }
            if new_status == IssueStatus.RESOLVED and issue.resolved_at is None:
                changes["resolved_at"] = self.now()

            updated = issue.model_copy(update=changes, deep=True)
            self._issues[issue_id] = updated

            logger.info(f"Issue {issue_id} status: {issue.status.value} → {new_status.value}")
            return updated.model_copy(deep=True)

    def add_unresolved_days(self, days: int, statuses: Iterable[IssueStatus]) -> int:
        """
        Add `days` to daysUnresolved of every issue in one of `statuses`.

        Returns:
            Number of issues touched
        """
        affected = set(statuses)
        touched = 0
        with self._lock:
            for issue_id, issue in self._issues.items():
                if issue.status not in affected:
                    continue
                self._issues[issue_id] = issue.model_copy(
                    update={"days_unresolved": issue.days_unresolved + days}
                )
                touched += 1
        return touched

    # Messages

    def list_messages(self) -> List[Message]:
        """Get all messages, oldest first (ascending ID)."""
        with self._lock:
            messages = sorted(self._messages.values(), key=lambda message: message.id)
            return [message.model_copy(deep=True) for message in messages]

    def create_message(self, message_data: MessageCreate) -> Message:
        """Store a chat message under the next message ID."""
        with self._lock:
            message_id = self._next_message_id
            self._next_message_id += 1

            message = Message(
                id=message_id,
                role=message_data.role,
                content=message_data.content,
                created_at=self.now(),
                user_id=message_data.user_id,
            )
            self._messages[message_id] = message
            return message.model_copy(deep=True)

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {"issues": len(self._issues), "messages": len(self._messages)}

    # Seeding

    def seed_demo_data(self) -> None:
        """Insert the fixed demo issues and the assistant greeting."""
        with self._lock:
            for demo in DEMO_ISSUES:
                fields = dict(demo)
                days_unresolved = fields.pop("days_unresolved")
                self.create_issue(IssueCreate(**fields), days_unresolved=days_unresolved)

            self.create_message(MessageCreate(role=MessageRole.ASSISTANT, content=DEMO_GREETING))

        logger.info(f"Seeded {len(DEMO_ISSUES)} demo issues and 1 greeting message")

    @staticmethod
    def _check_update_history(status: IssueStatus, updates: List[IssueUpdate]) -> None:
        errors = []
        if not updates:
            errors.append("updates must not be empty")
        elif updates[-1].status != status:
            errors.append(
                f"last update status {updates[-1].status.value} does not match status {status.value}"
            )
        for earlier, later in zip(updates, updates[1:]):
            if later.date < earlier.date:
                errors.append("updates must be in non-decreasing date order")
                break
        if errors:
            raise InvalidIssueUpdateError("Invalid status update", errors)


# Global store instance (singleton pattern)
_issue_store = None


def get_issue_store() -> IssueStore:
    """
    Get or create the IssueStore singleton instance.

    Seeded with demo data when SEED_DEMO_DATA is enabled.
    """
    global _issue_store
    if _issue_store is None:
        from nagrik_seva.core.settings import settings
        _issue_store = IssueStore(seed=settings.SEED_DEMO_DATA)
    return _issue_store
