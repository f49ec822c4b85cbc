import datetime
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from sqlalchemy.orm import Session

from . import db
from .policy import resolve_enabled_forms
from .scheduler import as_naive_utc, utcnow
from .structured import (
    DEFAULT_PREFERRED_FORMS,
    MODULE_CATEGORIES,
    Form,
    LexicalItem,
    Module,
    PracticeMode,
)


@dataclass(frozen=True)
class Selection:
    item: LexicalItem
    form: Form
    is_new: bool
    streak: int = 0
    attempts: int = 0


@dataclass(frozen=True)
class NoItemsAvailable:
    """Nothing left to present for this user/module/mode right now."""
    user: str
    module: Module
    mode: PracticeMode
    forms: Tuple[Form, ...] = field(default_factory=tuple)
    message: str = "No more items available"


def select_next(
    session: Session,
    user: str,
    module: Module,
    mode: PracticeMode,
    enabled_forms: Optional[Iterable[Union[Form, str]]] = None,
    due_only: Optional[bool] = None,
    now: Optional[datetime.datetime] = None,
    rng: Optional[random.Random] = None,
) -> Union[Selection, NoItemsAvailable]:
    """Pick the next (item, form) pair to present.

    Priority:
    1. Existing reviews outside the exclusion window, most urgent first
       (optionally only those already due).
    2. A random untracked (item, form) pair from the catalog; its review
       record is created on the spot with streak 0 and due now.

    At most one review row is created or touched. A re-presented review has
    its ``last_reviewed_at`` refreshed so the exclusion window applies to it.
    """
    now = as_naive_utc(now) if now is not None else utcnow()
    settings = db.get_user_settings(session, user)
    preferred = settings.preferred_forms() if settings and settings.enabled_forms else list(DEFAULT_PREFERRED_FORMS)
    forms = resolve_enabled_forms(enabled_forms, preferred, module)
    if due_only is None:
        due_only = bool(settings.due_only) if settings else False

    record = db.find_next_review(session, user, module, mode, forms, now, due_only=due_only)
    if record is not None:
        item = db.get_item(session, record.item_id)
        record.last_reviewed_at = now
        session.flush()
        if db.DEBUG_MODE:
            print(f"🔁 Review {item.headword} [{record.form}] streak={record.streak} due={record.due_at}")
        return Selection(
            item=item,
            form=Form(record.form),
            is_new=False,
            streak=record.streak,
            attempts=record.attempts,
        )

    pairs = db.find_new_pairs(session, user, module, mode, forms, MODULE_CATEGORIES[module], now)
    if not pairs:
        if db.DEBUG_MODE:
            print(f"⚠️ No items available for {user} in {module.value}/{mode.value}")
        return NoItemsAvailable(user=user, module=module, mode=mode, forms=tuple(forms))

    item_id, form = (rng or random).choice(pairs)
    key = db.ReviewKey(user=user, module=module, item_id=item_id, form=form, mode=mode)
    db.upsert_review(
        session,
        key,
        row={"attempts": 0, "correct": 0, "streak": 0, "due_at": now, "last_reviewed_at": now},
        update_values={"due_at": now, "last_reviewed_at": now},
    )
    item = db.get_item(session, item_id)
    if db.DEBUG_MODE:
        print(f"🆕 New {item.headword} [{form.value}] out of {len(pairs)} untracked pairs")
    return Selection(item=item, form=form, is_new=True)
