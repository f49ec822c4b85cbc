"""
Selection policies shared by the review selector and its storage queries.

No database access here; the store builds its SQL from the same cutoff
and ordering defined in this module.
"""

import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .scheduler import as_naive_utc
from .structured import Form, Module, MODULE_DEFAULT_FORMS

EXCLUSION_WINDOW = datetime.timedelta(minutes=30)


def exclusion_cutoff(now: datetime.datetime, window: datetime.timedelta = EXCLUSION_WINDOW) -> datetime.datetime:
    """Records reviewed at or after this instant are held back."""
    return as_naive_utc(now) - window


def is_within_exclusion_window(
    last_reviewed_at: Optional[datetime.datetime],
    now: datetime.datetime,
    window: datetime.timedelta = EXCLUSION_WINDOW,
) -> bool:
    if last_reviewed_at is None:
        return False
    return as_naive_utc(last_reviewed_at) >= exclusion_cutoff(now, window)


def is_due(due_at: Optional[datetime.datetime], now: datetime.datetime) -> bool:
    """Never-scheduled records count as due."""
    if due_at is None:
        return True
    return as_naive_utc(due_at) <= as_naive_utc(now)


def review_priority(due_at: Optional[datetime.datetime], streak: int) -> Tuple[int, datetime.datetime, int]:
    """
    Sort key for candidate reviews, most urgent first:
    never-due before anything else, then earliest due time, then weakest streak.
    """
    if due_at is None:
        return (0, datetime.datetime.min, streak)
    return (1, as_naive_utc(due_at), streak)


def resolve_enabled_forms(
    override: Optional[Iterable[Union[Form, str]]],
    preferred: Optional[Iterable[Union[Form, str]]],
    module: Module,
) -> List[Form]:
    """Explicit override, else preference ∩ module defaults, else module defaults."""
    defaults: Sequence[Form] = MODULE_DEFAULT_FORMS[module]

    explicit = _parse_forms(override)
    if explicit:
        return explicit

    wanted = set(_parse_forms(preferred))
    narrowed = [form for form in defaults if form in wanted]
    if narrowed:
        return narrowed
    return list(defaults)


def _parse_forms(values: Optional[Iterable[Union[Form, str]]]) -> List[Form]:
    if not values:
        return []
    if isinstance(values, str):
        values = values.split(",")
    forms: List[Form] = []
    for value in values:
        form = Form.parse(value)
        if form is not None and form not in forms:
            forms.append(form)
    return forms
