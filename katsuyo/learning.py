"""
Caller-facing operations: fetch the next question and grade a submission.

Each call runs one short transaction against the store. Two submissions for
the same review key that race each other keep the last writer's streak and
due time; ``attempts`` and ``correct`` are incremented in SQL so neither
count is lost.
"""

import datetime
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Type, TypeVar, Union

from . import db
from .conjugation import canonical_answer, explain_item
from .scheduler import Feedback, as_naive_utc, next_state, utcnow
from .selector import NoItemsAvailable, select_next
from .structured import Form, LexicalItem, Module, PracticeMode
from .validator import validate

E = TypeVar("E", Module, PracticeMode, Form)


@dataclass(frozen=True)
class Question:
    item: LexicalItem
    form: Form
    canonical_answer: str
    is_new: bool
    streak: int = 0
    attempts: int = 0


@dataclass(frozen=True)
class SubmitResult:
    correct: bool
    canonical_answer: str
    explanation: str
    new_streak: int
    due_at: datetime.datetime


def _require(enum_type: Type[E], value: object, label: str) -> E:
    parsed = enum_type.parse(value)
    if parsed is None:
        raise ValueError(f"Unknown {label}: {value!r}")
    return parsed


def _grade(mode: PracticeMode, correct: bool, feedback: Optional[Feedback]) -> Feedback:
    """Feedback fed to the scheduler for one submission."""
    if mode is PracticeMode.FLASHCARD:
        return feedback or Feedback.AGAIN
    if not correct:
        return Feedback.AGAIN
    return feedback or Feedback.GOOD


def get_next_question(
    user: str,
    module: Union[Module, str],
    mode: Union[PracticeMode, str] = PracticeMode.FLASHCARD,
    enabled_forms: Optional[Iterable[Union[Form, str]]] = None,
    now: Optional[datetime.datetime] = None,
    rng: Optional[random.Random] = None,
) -> Union[Question, NoItemsAvailable]:
    """Select the next (item, form) for ``user`` and attach its canonical answer."""
    module_ = _require(Module, module, "module")
    mode_ = _require(PracticeMode, mode, "practice mode")

    with db.session_scope() as session:
        selection = select_next(session, user, module_, mode_, enabled_forms, now=now, rng=rng)

    if isinstance(selection, NoItemsAvailable):
        return selection
    return Question(
        item=selection.item,
        form=selection.form,
        canonical_answer=canonical_answer(selection.item, selection.form),
        is_new=selection.is_new,
        streak=selection.streak,
        attempts=selection.attempts,
    )


def submit_answer(
    user: str,
    module: Union[Module, str],
    item_id: int,
    form: Union[Form, str],
    mode: Union[PracticeMode, str] = PracticeMode.QUIZ,
    user_answer: Optional[str] = None,
    feedback: Union[Feedback, str, None] = None,
    now: Optional[datetime.datetime] = None,
) -> SubmitResult:
    """Grade a submission, reschedule the review and record daily progress.

    Raises:
        ItemNotFoundError: ``item_id`` is not in the catalog.
        ValueError: ``module``, ``form`` or ``mode`` is not a known identifier.
    """
    module_ = _require(Module, module, "module")
    form_ = _require(Form, form, "form")
    mode_ = _require(PracticeMode, mode, "practice mode")
    feedback_ = Feedback.parse(feedback)
    now = as_naive_utc(now) if now is not None else utcnow()

    with db.session_scope() as session:
        item = db.get_item(session, item_id)
        answer = canonical_answer(item, form_)
        correct = validate(mode_, feedback_, user_answer, item, form_)

        key = db.ReviewKey(user=user, module=module_, item_id=item.id, form=form_, mode=mode_)
        record = db.get_review(session, key)
        current_streak = record.streak if record else 0
        previous_attempts = record.attempts if record else 0

        schedule = next_state(current_streak, _grade(mode_, correct, feedback_), now=now)
        hit = 1 if correct else 0
        db.upsert_review(
            session,
            key,
            row={
                "attempts": 1, "correct": hit, "streak": schedule.new_streak,
                "due_at": schedule.due_at, "last_reviewed_at": now,
            },
            update_values={
                "attempts": db.ReviewRecord.attempts + 1,
                "correct": db.ReviewRecord.correct + hit,
                "streak": schedule.new_streak,
                "due_at": schedule.due_at,
                "last_reviewed_at": now,
            },
        )
        db.record_daily_progress(
            session, user, module_, mode_,
            is_new=previous_attempts == 0, correct=correct, today=now.date(),
        )

    if db.DEBUG_MODE:
        print(f"✅ {user} {item.headword} [{form_.value}] correct={correct} "
              f"streak {current_streak}->{schedule.new_streak} due={schedule.due_at}")

    return SubmitResult(
        correct=correct,
        canonical_answer=answer,
        explanation=explain_item(item, form_),
        new_streak=schedule.new_streak,
        due_at=schedule.due_at,
    )
