from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.enums import PersonCategory
from .model import Person

TAB_CATEGORIES = {
    "staff": PersonCategory.STAFF,
    "students": PersonCategory.STUDENT,
}

ALL_CLASSES = "all"


def matches_query(person: Person, query: str) -> bool:
    query = (query or "").strip().lower()
    if not query:
        return True
    forward = f"{person.first_name} {person.last_name}".lower()
    reverse = f"{person.last_name} {person.first_name}".lower()
    return query in forward or query in reverse


def filter_people(
    people: Iterable[Person],
    *,
    tab: Optional[str] = None,
    class_name: Optional[str] = ALL_CLASSES,
    query: str = "",
) -> List[Person]:
    category = TAB_CATEGORIES.get((tab or "").strip().lower())
    selected_class = class_name or ALL_CLASSES

    result = []
    for person in people:
        if category is not None and person.category != category:
            continue
        if selected_class != ALL_CLASSES and person.class_name != selected_class:
            continue
        if not matches_query(person, query):
            continue
        result.append(person)
    return result
