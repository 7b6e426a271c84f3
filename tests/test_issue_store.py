import threading
from datetime import datetime, timezone

import pytest

from nagrik_seva.core.errors import InvalidIssueUpdateError, IssueNotFoundError
from nagrik_seva.models.issue import IssueCreate, IssueStatus, IssueUpdate
from nagrik_seva.models.message import MessageCreate, MessageRole


def _create(store, **overrides):
    fields = {"description": "Garbage near park", "category": "Waste", "location": "Park Rd"}
    fields.update(overrides)
    return store.create_issue(IssueCreate(**fields))


def test_create_issue_fills_defaults(store, clock):
    issue = _create(store)

    assert issue.id == 1
    assert issue.status == IssueStatus.REPORTED
    assert issue.affected_count == 1
    assert issue.days_unresolved == 0
    assert issue.created_at == clock.current
    assert issue.resolved_at is None
    assert len(issue.updates) == 1
    assert issue.updates[0].status == IssueStatus.REPORTED
    assert issue.updates[0].date == issue.created_at


def test_create_issue_keeps_optional_fields(store):
    issue = _create(store, affected_count=7, user_id="citizen-42", lat=12.97, lng=77.59)

    assert issue.affected_count == 7
    assert issue.user_id == "citizen-42"
    assert (issue.lat, issue.lng) == (12.97, 77.59)


def test_create_issue_in_later_status_ends_history_on_that_status(store):
    issue = _create(store, status=IssueStatus.IN_PROGRESS)

    assert [update.status for update in issue.updates] == [IssueStatus.REPORTED, IssueStatus.IN_PROGRESS]
    assert issue.resolved_at is None


def test_create_resolved_issue_sets_resolved_at(store):
    issue = _create(store, status=IssueStatus.RESOLVED)

    assert issue.resolved_at == issue.created_at


def test_ids_strictly_increase(store):
    ids = [_create(store).id for _ in range(25)]

    assert ids == list(range(1, 26))


def test_list_issues_newest_first(store):
    for _ in range(3):
        _create(store)

    assert [issue.id for issue in store.list_issues()] == [3, 2, 1]


def test_list_issues_filters(store):
    _create(store, user_id="u1")
    _create(store, category="Water", user_id="u2")
    _create(store, category="water", status=IssueStatus.FORWARDED)

    assert [i.id for i in store.list_issues(category="WATER")] == [3, 2]
    assert [i.id for i in store.list_issues(user_id="u1")] == [1]
    assert [i.id for i in store.list_issues(status=IssueStatus.FORWARDED)] == [3]


def test_get_issue_missing_returns_none(store):
    assert store.get_issue(99) is None


def test_returned_issues_are_copies(store):
    issue = _create(store)
    issue.updates.append(IssueUpdate(status=IssueStatus.RESOLVED, date=issue.created_at))
    issue.days_unresolved = 40

    stored = store.get_issue(issue.id)
    assert len(stored.updates) == 1
    assert stored.days_unresolved == 0


def test_update_issue_status_replaces_history(store, clock):
    issue = _create(store)
    clock.advance(hours=1)
    updates = issue.updates + [IssueUpdate(status=IssueStatus.FORWARDED, date=clock.current, note="sent")]

    updated = store.update_issue_status(issue.id, IssueStatus.FORWARDED, updates)

    assert updated.status == IssueStatus.FORWARDED
    assert updated.updates[-1].note == "sent"
    assert updated.resolved_at is None


def test_update_issue_status_accepts_plain_dicts(store, clock):
    issue = _create(store)
    updates = [u.model_dump() for u in issue.updates] + [{"status": "Forwarded", "date": clock.current}]

    updated = store.update_issue_status(issue.id, "Forwarded", updates)

    assert updated.status == IssueStatus.FORWARDED


def test_resolved_at_set_once(store, clock):
    issue = _create(store)
    clock.advance(days=1)
    resolved = store.update_issue_status(
        issue.id, IssueStatus.RESOLVED,
        issue.updates + [IssueUpdate(status=IssueStatus.RESOLVED, date=clock.current)]
    )
    first_resolved_at = resolved.resolved_at
    assert first_resolved_at == clock.current

    clock.advance(days=1)
    again = store.update_issue_status(
        issue.id, IssueStatus.RESOLVED,
        resolved.updates + [IssueUpdate(status=IssueStatus.RESOLVED, date=clock.current)]
    )
    assert again.resolved_at == first_resolved_at


def test_update_issue_status_unknown_id(store, clock):
    with pytest.raises(IssueNotFoundError):
        store.update_issue_status(
            5, IssueStatus.FORWARDED, [IssueUpdate(status=IssueStatus.FORWARDED, date=clock.current)]
        )


@pytest.mark.parametrize("status, updates", [
    (IssueStatus.FORWARDED, []),
    (IssueStatus.FORWARDED, [{"status": "Reported", "date": "2024-01-15T10:30:00Z"}]),
    ("Closed", [{"status": "Reported", "date": "2024-01-15T10:30:00Z"}]),
    (IssueStatus.FORWARDED, [
        {"status": "Reported", "date": "2024-01-15T10:30:00Z"},
        {"status": "Forwarded", "date": "2024-01-14T10:30:00Z"},
    ]),
    (IssueStatus.FORWARDED, [
        {"status": "Reported", "date": "2024-01-15T10:30:00Z"},
        {"status": "Forwarded", "date": datetime(2024, 1, 14, 10, 30)},
    ]),
])
def test_update_issue_status_rejects_broken_history(store, status, updates):
    issue = _create(store)

    with pytest.raises(InvalidIssueUpdateError):
        store.update_issue_status(issue.id, status, updates)

    assert store.get_issue(issue.id) == issue


def test_add_unresolved_days_only_touches_given_statuses(store):
    open_issue = _create(store)
    closed_issue = _create(store, status=IssueStatus.RESOLVED)

    touched = store.add_unresolved_days(4, [IssueStatus.REPORTED])

    assert touched == 1
    assert store.get_issue(open_issue.id).days_unresolved == 4
    assert store.get_issue(closed_issue.id).days_unresolved == 0


def test_messages_oldest_first(store, clock):
    first = store.create_message(MessageCreate(type="user", content="Road is broken"))
    clock.advance(seconds=5)
    second = store.create_message(MessageCreate(role=MessageRole.ASSISTANT, content="Noted"))

    assert (first.id, second.id) == (1, 2)
    assert second.created_at > first.created_at
    assert [m.id for m in store.list_messages()] == [1, 2]


def test_seed_demo_data(seeded_store):
    issues = seeded_store.list_issues()

    assert len(issues) == 4
    assert {issue.status for issue in issues} == set(IssueStatus)
    assert {issue.category for issue in issues} == {"Waste", "Energy", "Water", "Transport"}
    for issue in issues:
        assert issue.updates[-1].status == issue.status

    resolved = seeded_store.list_issues(status=IssueStatus.RESOLVED)[0]
    assert resolved.resolved_at is not None

    messages = seeded_store.list_messages()
    assert len(messages) == 1
    assert messages[0].role == MessageRole.ASSISTANT
    assert messages[0].content.startswith("Hello! I am Nagrik Seva")


def test_concurrent_creates_never_share_ids(store):
    def worker():
        for _ in range(50):
            _create(store)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [issue.id for issue in store.list_issues()]
    assert len(ids) == 400
    assert sorted(ids) == list(range(1, 401))


def test_update_issue_status_treats_naive_dates_as_utc(store):
    issue = _create(store)
    updates = [u.model_dump() for u in issue.updates] + [{"status": "Forwarded", "date": datetime(2030, 1, 1)}]

    updated = store.update_issue_status(issue.id, "Forwarded", updates)

    assert updated.updates[-1].date == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_update_issue_status_unknown_id_wins_over_bad_history(store):
    with pytest.raises(IssueNotFoundError):
        store.update_issue_status(5, "Closed", [])
