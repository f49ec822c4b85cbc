"""
End-to-end tests for the caller-facing question/answer operations.
"""

import datetime
import pytest
from sqlalchemy import create_engine
from typing import Any, Generator

from katsuyo import db, learning
from katsuyo.selector import NoItemsAvailable
from katsuyo.structured import Category, Form, Module, PracticeMode

NOW = datetime.datetime(2026, 3, 1, 9, 0, 0)
USER = "learner"


@pytest.fixture(autouse=True)
def setup_db(tmp_path: Any) -> Generator[None, None, None]:
    test_db = str(tmp_path / "test_learning.db")
    db.engine = create_engine(f"sqlite:///{test_db}")
    db.SessionLocal = db.sessionmaker(bind=db.engine, expire_on_commit=False)
    db.init_db()
    yield


@pytest.fixture
def yomu_id() -> int:
    session = db.get_session()
    row, _ = db.add_item(session, "よむ", "読む", Category.VERB, "Group I", "to read")
    session.commit()
    session.close()
    return row.id


def review_for(item_id: int, form: Form = Form.TA, mode: PracticeMode = PracticeMode.QUIZ) -> db.ReviewRecord:
    session = db.get_session()
    record = db.get_review(session, db.ReviewKey(USER, Module.VERB, item_id, form, mode))
    session.close()
    return record


def test_first_question_then_correct_answer(yomu_id: int) -> None:
    question = learning.get_next_question(USER, "verb", "quiz", enabled_forms=["ta"], now=NOW)
    assert isinstance(question, learning.Question)
    assert question.is_new
    assert question.form is Form.TA
    assert question.item.id == yomu_id
    assert question.canonical_answer == "読んだ"

    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "quiz", user_answer="読んだ", now=NOW)
    assert result.correct
    assert result.canonical_answer == "読んだ"
    assert result.new_streak == 1
    assert result.due_at == NOW + datetime.timedelta(minutes=10)
    assert "ta form" in result.explanation

    record = review_for(yomu_id)
    assert record.attempts == 1
    assert record.correct == 1
    assert record.streak == 1
    assert record.last_reviewed_at == NOW


def test_wrong_answer_resets_streak(yomu_id: int) -> None:
    learning.submit_answer(USER, Module.VERB, yomu_id, Form.TA, PracticeMode.QUIZ, user_answer="よんだ", now=NOW)
    later = NOW + datetime.timedelta(hours=1)
    result = learning.submit_answer(USER, Module.VERB, yomu_id, Form.TA, PracticeMode.QUIZ,
                                    user_answer="よんで", now=later)
    assert not result.correct
    assert result.new_streak == 0
    assert result.due_at == later

    record = review_for(yomu_id)
    assert record.attempts == 2
    assert record.correct == 1
    assert record.streak == 0


def test_quiz_feedback_applies_only_to_correct_answers(yomu_id: int) -> None:
    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "quiz", user_answer="読んだ",
                                    feedback="easy", now=NOW)
    assert result.new_streak == 2
    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "quiz", user_answer="読む",
                                    feedback="easy", now=NOW)
    assert result.new_streak == 0


def test_flashcard_uses_self_grading(yomu_id: int) -> None:
    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "flashcard", feedback="easy", now=NOW)
    assert result.correct
    assert result.new_streak == 2
    assert result.due_at == NOW + datetime.timedelta(days=1)

    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "flashcard", feedback="hard", now=NOW)
    assert not result.correct
    assert result.new_streak == 1

    result = learning.submit_answer(USER, "verb", yomu_id, "ta", "flashcard", now=NOW)
    assert not result.correct
    assert result.new_streak == 0
    assert review_for(yomu_id, mode=PracticeMode.FLASHCARD).attempts == 3


def test_submission_updates_daily_progress(yomu_id: int) -> None:
    learning.get_next_question(USER, "verb", "quiz", enabled_forms=["ta"], now=NOW)
    learning.submit_answer(USER, "verb", yomu_id, "ta", "quiz", user_answer="読んだ", now=NOW)
    learning.submit_answer(USER, "verb", yomu_id, "ta", "quiz", user_answer="読んで",
                           now=NOW + datetime.timedelta(minutes=40))

    session = db.get_session()
    row = session.query(db.DailyProgress).filter_by(user=USER, date=NOW.date()).one()
    assert row.module == "verb"
    assert row.mode == "quiz"
    assert row.new_items_completed == 1
    assert row.reviews_completed == 1
    assert row.correct_answers == 1
    session.close()


def test_no_items_available() -> None:
    result = learning.get_next_question(USER, "adj", "flashcard", now=NOW)
    assert isinstance(result, NoItemsAvailable)
    assert result.module is Module.ADJECTIVE


def test_missing_item_raises_not_found() -> None:
    with pytest.raises(db.ItemNotFoundError):
        learning.submit_answer(USER, "verb", 12345, "ta", "quiz", user_answer="x", now=NOW)

    session = db.get_session()
    assert session.query(db.ReviewRecord).count() == 0
    session.close()


def test_unknown_identifiers_are_rejected(yomu_id: int) -> None:
    with pytest.raises(ValueError):
        learning.get_next_question(USER, "nouns", "quiz", now=NOW)
    with pytest.raises(ValueError):
        learning.get_next_question(USER, "verb", "essay", now=NOW)
    with pytest.raises(ValueError):
        learning.submit_answer(USER, "verb", yomu_id, "causative", "quiz", user_answer="x", now=NOW)
