from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.firedrill_board.firedrill_board.absence.service import AbsenceSignal
from src.firedrill_board.firedrill_board.core.enums import PersonCategory
from src.firedrill_board.firedrill_board.core.exceptions import PersonNotLoadedError
from src.firedrill_board.firedrill_board.drill.board import DrillBoard
from src.firedrill_board.firedrill_board.drill.model import Person
from src.firedrill_board.firedrill_board.status.model import StatusRecord
from tests.fakes import InMemoryAbsences, InMemoryRoster, InMemoryStatusStore, checked_in_record, staff, student

TODAY = date(2026, 10, 18)
NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
ADMIN = "admin@x.org"


def make_board(roster, store) -> DrillBoard:
    signal = AbsenceSignal(InMemoryAbsences(), today=lambda: TODAY)
    board = DrillBoard(roster, store, signal, clock=lambda: NOW, today=lambda: TODAY)
    board.load()
    return board


@pytest.fixture
def roster():
    return InMemoryRoster(
        staff=[staff(1, "Ada", "Lovelace"), staff(2, "Grace", "Hopper")],
        students=[student(10, "Maya", "Cohen")],
    )


def test_check_in_clears_out_today_and_stamps_actor(roster):
    store = InMemoryStatusStore([StatusRecord(person_id=1, person_type=PersonCategory.STAFF, out_today=True)])
    board = make_board(roster, store)
    a = board.get(1, PersonCategory.STAFF)
    assert a.out_today is True

    assert board.toggle_check_in(a, ADMIN) is True

    a = board.get(1, PersonCategory.STAFF)
    assert a.checked_in is True
    assert a.out_today is False
    assert a.checked_in_by == ADMIN
    assert a.checked_in_at == NOW

    written = store.upserts[-1]
    assert written["checked_in"] is True
    assert written["out_today"] is False
    assert written["checked_in_by"] == ADMIN
    assert written["updated_at"] == NOW
    assert store.records[(1, PersonCategory.STAFF)].checked_in is True


def test_check_in_twice_returns_to_unchecked_with_stamp_cleared(roster):
    board = make_board(roster, InMemoryStatusStore())
    a = board.get(1, PersonCategory.STAFF)

    board.toggle_check_in(a, ADMIN)
    board.toggle_check_in(board.get(1, PersonCategory.STAFF), ADMIN)

    a = board.get(1, PersonCategory.STAFF)
    assert a.checked_in is False
    assert a.checked_in_at is None
    assert a.checked_in_by is None


def test_check_out_leaves_out_today_untouched(roster):
    store = InMemoryStatusStore([checked_in_record(10, PersonCategory.STUDENT)])
    board = make_board(roster, store)

    board.toggle_check_in(board.get(10, PersonCategory.STUDENT), ADMIN)

    maya = board.get(10, PersonCategory.STUDENT)
    assert maya.checked_in is False
    assert maya.out_today is False


def test_out_today_forces_checked_in_off(roster):
    store = InMemoryStatusStore([checked_in_record(2, PersonCategory.STAFF)])
    board = make_board(roster, store)

    assert board.toggle_out_today(board.get(2, PersonCategory.STAFF)) is True

    grace = board.get(2, PersonCategory.STAFF)
    assert grace.out_today is True
    assert grace.checked_in is False
    assert grace.checked_in_by is None
    assert store.upserts[-1]["checked_in"] is False
    assert store.upserts[-1]["out_today"] is True


def test_flags_are_never_both_true_across_toggle_sequences(roster):
    board = make_board(roster, InMemoryStatusStore())
    key = (1, PersonCategory.STAFF)

    for step in ["in", "out", "in", "in", "out", "out", "in"]:
        person = board.get(*key)
        if step == "in":
            board.toggle_check_in(person, ADMIN)
        else:
            board.toggle_out_today(person)
        person = board.get(*key)
        assert not (person.checked_in and person.out_today)


def test_memory_is_updated_before_the_write_is_issued(roster):
    store = InMemoryStatusStore()
    board = make_board(roster, store)
    seen = {}

    def observe(row):
        seen["checked_in_in_memory"] = board.get(row["person_id"], row["person_type"]).checked_in

    store.before_upsert = observe
    board.toggle_check_in(board.get(1, PersonCategory.STAFF), ADMIN)

    assert seen == {"checked_in_in_memory": True}


def test_failed_write_reverts_by_full_reload(roster):
    store = InMemoryStatusStore()
    board = make_board(roster, store)
    store.fail_writes = True
    calls_before = roster.calls

    assert board.toggle_check_in(board.get(1, PersonCategory.STAFF), ADMIN) is False

    assert roster.calls == calls_before + 1
    assert board.get(1, PersonCategory.STAFF).checked_in is False
    assert board.error is None


def test_failed_out_today_write_reverts(roster):
    store = InMemoryStatusStore([checked_in_record(1, PersonCategory.STAFF)])
    board = make_board(roster, store)
    store.fail_writes = True

    assert board.toggle_out_today(board.get(1, PersonCategory.STAFF)) is False

    a = board.get(1, PersonCategory.STAFF)
    assert a.checked_in is True
    assert a.out_today is False


def test_toggles_on_different_people_are_independent(roster):
    store = InMemoryStatusStore()
    board = make_board(roster, store)

    board.toggle_check_in(board.get(1, PersonCategory.STAFF), ADMIN)
    board.toggle_out_today(board.get(10, PersonCategory.STUDENT))

    assert board.get(1, PersonCategory.STAFF).checked_in is True
    assert board.get(10, PersonCategory.STUDENT).out_today is True
    assert board.get(2, PersonCategory.STAFF).checked_in is False


def test_toggle_uses_current_memory_not_a_stale_snapshot(roster):
    board = make_board(roster, InMemoryStatusStore())
    stale = board.get(1, PersonCategory.STAFF)

    board.toggle_check_in(stale, ADMIN)
    board.toggle_check_in(stale, ADMIN)

    assert board.get(1, PersonCategory.STAFF).checked_in is False


def test_unknown_person_is_a_contract_breach(roster):
    board = make_board(roster, InMemoryStatusStore())
    ghost = Person(person_id=99, category=PersonCategory.STAFF, first_name="No", last_name="One", full_name="One, No", class_name="Staff")

    with pytest.raises(PersonNotLoadedError):
        board.toggle_check_in(ghost, ADMIN)
    with pytest.raises(LookupError):
        board.toggle_out_today(ghost)


def test_reset_all_clears_records_and_writes_one_history_row():
    roster = InMemoryRoster(staff=[staff(i, f"F{i}", f"L{i}") for i in range(1, 6)])
    store = InMemoryStatusStore([checked_in_record(i, PersonCategory.STAFF) for i in range(1, 6)])
    board = make_board(roster, store)
    assert board.get_stats().staff_checked_in == 5

    assert board.reset_all(ADMIN) is True

    assert all(not r.checked_in and not r.out_today and r.checked_in_at is None for r in store.records.values())
    assert len(store.history) == 1
    assert store.history[0].reset_by == ADMIN
    assert store.history[0].drill_date == TODAY
    assert store.history[0].notes == "Manual reset"
    assert all(not p.checked_in for p in board.people)
    assert board.get_stats().overall_percent == 0


def test_reset_failure_reports_false_without_history():
    roster = InMemoryRoster(staff=[staff(1, "Ada", "Lovelace")])
    store = InMemoryStatusStore([checked_in_record(1, PersonCategory.STAFF)])
    board = make_board(roster, store)
    store.fail_reset = True

    assert board.reset_all(ADMIN) is False
    assert store.history == []
    assert board.get(1, PersonCategory.STAFF).checked_in is True


def test_reset_history_failure_reports_false_but_still_reloads():
    roster = InMemoryRoster(staff=[staff(1, "Ada", "Lovelace")])
    store = InMemoryStatusStore([checked_in_record(1, PersonCategory.STAFF)])
    board = make_board(roster, store)
    store.fail_history = True

    assert board.reset_all(ADMIN, notes="Spring drill") is False
    assert board.get(1, PersonCategory.STAFF).checked_in is False
