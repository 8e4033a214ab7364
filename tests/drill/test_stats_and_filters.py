from __future__ import annotations

from src.firedrill_board.firedrill_board.core.constants import STAFF_GROUP_LABEL
from src.firedrill_board.firedrill_board.core.enums import PersonCategory
from src.firedrill_board.firedrill_board.drill.filters import filter_people
from src.firedrill_board.firedrill_board.drill.model import Person
from src.firedrill_board.firedrill_board.drill.presenter import card_state, person_to_dict, stats_to_dict
from src.firedrill_board.firedrill_board.drill.stats import compute_stats, distinct_classes, percent


def make_person(pid, category=PersonCategory.STAFF, *, class_name=None, first="F", last="L", **flags) -> Person:
    if class_name is None and category == PersonCategory.STAFF:
        class_name = STAFF_GROUP_LABEL
    return Person(
        person_id=pid,
        category=category,
        first_name=first,
        last_name=last,
        full_name=f"{last}, {first}",
        class_name=class_name,
        **flags,
    )


def test_empty_list_has_zero_percent():
    stats = compute_stats([])

    assert stats.overall_percent == 0
    assert stats.total_staff == 0
    assert stats.total_students == 0


def test_percent_rounds_half_up():
    assert percent(1, 8) == 13  # 12.5
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(0, 0) == 0


def test_overall_percent_counts_checked_in_and_out_across_categories():
    people = [
        make_person(1, checked_in=True),
        make_person(2, out_today=True),
        make_person(3),
        make_person(4, PersonCategory.STUDENT, class_name="3A", checked_in=True),
        make_person(5, PersonCategory.STUDENT, class_name="3A"),
        make_person(6, PersonCategory.STUDENT, class_name="5B"),
    ]

    stats = compute_stats(people)

    assert stats.total_staff == 3
    assert stats.staff_checked_in == 1
    assert stats.staff_out == 1
    assert stats.total_students == 3
    assert stats.students_checked_in == 1
    assert stats.students_out == 0
    assert stats.overall_percent == 50


def test_external_absence_counts_only_unaccounted_people():
    people = [
        make_person(1, vc_absent=True),
        make_person(2, vc_absent=True, checked_in=True),
        make_person(3, vc_absent=True, out_today=True),
        make_person(4),
        make_person(5, PersonCategory.STUDENT, class_name="3A", vc_absent=True),
    ]

    stats = compute_stats(people)

    assert stats.staff_vc_absent == 1
    assert stats.students_vc_absent == 1
    assert stats.staff_checked_in + stats.staff_out + stats.staff_vc_absent <= stats.total_staff


def test_classes_are_sorted_unique_and_exclude_staff_label():
    people = [
        make_person(1),
        make_person(2, PersonCategory.STUDENT, class_name="5B"),
        make_person(3, PersonCategory.STUDENT, class_name="3A"),
        make_person(4, PersonCategory.STUDENT, class_name="5B"),
        make_person(5, PersonCategory.STUDENT, class_name=None),
    ]

    assert distinct_classes(people) == ["3A", "5B"]


def test_filter_by_tab_class_and_name_query():
    people = [
        make_person(1, first="Ada", last="Lovelace"),
        make_person(2, PersonCategory.STUDENT, class_name="3A", first="Maya", last="Cohen"),
        make_person(3, PersonCategory.STUDENT, class_name="5B", first="Noah", last="Levi"),
    ]

    assert [p.person_id for p in filter_people(people, tab="staff")] == [1]
    assert [p.person_id for p in filter_people(people, tab="students")] == [2, 3]
    assert [p.person_id for p in filter_people(people, tab="students", class_name="5B")] == [3]
    assert [p.person_id for p in filter_people(people, query="cohen maya")] == [2]
    assert [p.person_id for p in filter_people(people, query="ADA LOVE")] == [1]
    assert filter_people(people, tab="staff", query="noah") == []


def test_card_state_prefers_out_then_checked_in_then_absence():
    assert card_state(make_person(1, out_today=True, vc_absent=True)) == "out"
    assert card_state(make_person(2, checked_in=True, vc_absent=True)) == "checked_in"
    assert card_state(make_person(3, vc_absent=True)) == "vc_absent"
    assert card_state(make_person(4)) == "pending"


def test_presenters_use_wire_names():
    person = person_to_dict(make_person(1, checked_in=True, checked_in_by="a@x.org"))
    assert person["person_type"] == "staff"
    assert person["checked_in_by"] == "a@x.org"
    assert person["state"] == "checked_in"

    stats = stats_to_dict(compute_stats([make_person(1, checked_in=True), make_person(2, out_today=True)]))
    assert stats["overallPercent"] == 100
    assert stats["progress"] == {"checked_in_width": 50.0, "out_width": 50.0, "accounted_for": 2, "total": 2}
