from __future__ import annotations
from sqlalchemy import (
    create_engine, Boolean, CheckConstraint, Date, DateTime, ForeignKey, Index, Integer,
    String, Text, UniqueConstraint, and_, case, select, update,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session, Mapped, mapped_column
from contextlib import contextmanager
import datetime
import json
import os
from typing import Any, Dict, Generator, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .policy import exclusion_cutoff
from .scheduler import as_naive_utc, utcnow
from .structured import Category, Form, LexicalItem, Module, PracticeMode

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"


class Base(DeclarativeBase):
    pass


DB_PATH: str = os.environ.get("KATSUYO_DB", "katsuyo.db")
DATABASE_URL: str = os.environ.get("KATSUYO_DATABASE_URL", f"sqlite:///{DB_PATH}")
engine = create_engine(DATABASE_URL)
# Prevent attribute expiration on commit so returned objects remain accessible
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


class ItemNotFoundError(LookupError):
    """Raised when a lexical item id is absent from the catalog."""

    def __init__(self, item_id: int):
        super().__init__(f"Lexical item {item_id} does not exist")
        self.item_id = item_id


class CatalogItem(Base):
    """Read-only lexical reference data (verbs and adjectives)."""
    __tablename__ = "lexical_items"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kana: Mapped[str] = mapped_column(String, nullable=False)
    kanji: Mapped[Optional[str]] = mapped_column(String)
    category: Mapped[str] = mapped_column(String, nullable=False)  # "verb" | "adjective"
    subtype: Mapped[Optional[str]] = mapped_column(String)  # raw group / adjective type as imported
    meaning: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (Index("ix_lexical_items_category", "category"),)

    def to_lexical_item(self) -> LexicalItem:
        return LexicalItem(
            id=self.id,
            kana=self.kana,
            kanji=self.kanji or None,
            category=Category.parse(self.category) or Category.VERB,
            subtype=self.subtype,
            meaning=self.meaning,
        )


class ReviewRecord(Base):
    __tablename__ = "reviews"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user: Mapped[str] = mapped_column(String, nullable=False)
    module: Mapped[str] = mapped_column(String, nullable=False)  # "verb" | "adj" | "plain" | "polite"
    item_id: Mapped[int] = mapped_column(Integer, ForeignKey("lexical_items.id", ondelete="CASCADE"), nullable=False)
    form: Mapped[str] = mapped_column(String, nullable=False)
    mode: Mapped[str] = mapped_column(String, nullable=False)  # "quiz" | "flashcard"
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    due_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)
    last_reviewed_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)

    __table_args__ = (
        UniqueConstraint("user", "module", "item_id", "form", "mode", name="uq_reviews_key"),
        CheckConstraint("correct <= attempts", name="ck_reviews_correct_le_attempts"),
        CheckConstraint("streak >= 0", name="ck_reviews_streak_non_negative"),
        Index("ix_reviews_user_module_mode", "user", "module", "mode"),
    )


class UserSettings(Base):
    __tablename__ = "user_settings"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    enabled_forms: Mapped[Optional[str]] = mapped_column(Text)  # JSON list of form ids
    due_only: Mapped[bool] = mapped_column(Boolean, default=False)

    def preferred_forms(self) -> List[str]:
        if not self.enabled_forms:
            return []
        try:
            forms = json.loads(self.enabled_forms)
        except ValueError:
            return []
        return [str(form) for form in forms] if isinstance(forms, list) else []


class DailyProgress(Base):
    __tablename__ = "daily_progress"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    module: Mapped[str] = mapped_column(String, nullable=False)
    mode: Mapped[str] = mapped_column(String, nullable=False)
    reviews_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    new_items_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct_answers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user", "date", "module", "mode", name="uq_daily_progress_key"),
    )


class ReviewKey(NamedTuple):
    user: str
    module: Module
    item_id: int
    form: Form
    mode: PracticeMode

    def as_row(self) -> Dict[str, Any]:
        return {
            "user": self.user,
            "module": self.module.value,
            "item_id": self.item_id,
            "form": self.form.value,
            "mode": self.mode.value,
        }


_REVIEW_KEY_COLUMNS = ("user", "module", "item_id", "form", "mode")
_DAILY_KEY_COLUMNS = ("user", "date", "module", "mode")


def is_db_initialized() -> bool:
    """Check if the database is already initialized by checking if tables exist."""
    from sqlalchemy import inspect
    inspector = inspect(engine)
    table_names = inspector.get_table_names()
    required_tables = {"lexical_items", "reviews", "user_settings", "daily_progress"}
    return required_tables.issubset(set(table_names))


def init_db() -> None:
    """Initialize the database by creating all tables."""
    Base.metadata.create_all(bind=engine)


def get_session() -> Session:
    return SessionLocal()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:  # rollback on any error before re-raising
        session.rollback()
        raise
    finally:
        session.close()


# ----------------------------------------------------------------------
# Atomic create-or-update
# ----------------------------------------------------------------------
def _upsert(session: Session, model: Any, key_columns: Sequence[str],
            row: Dict[str, Any], update_values: Dict[str, Any]) -> None:
    """INSERT ... ON CONFLICT DO UPDATE keyed by a unique constraint.

    ``update_values`` may reference the existing row (e.g. ``model.attempts + 1``).
    """
    dialect = session.get_bind().dialect.name
    if dialect in ("sqlite", "postgresql"):
        insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
        stmt = insert(model).values(**row).on_conflict_do_update(
            index_elements=list(key_columns), set_=update_values,
        )
        session.execute(stmt)
        return

    # Other backends: try the insert inside a savepoint, fall back to an update.
    try:
        with session.begin_nested():
            session.add(model(**row))
    except IntegrityError:
        criteria = [getattr(model, column) == row[column] for column in key_columns]
        session.execute(update(model).where(and_(*criteria)).values(**update_values))


def upsert_review(session: Session, key: ReviewKey, row: Dict[str, Any],
                  update_values: Dict[str, Any]) -> None:
    """Create the review identified by ``key`` or update it in place."""
    _upsert(session, ReviewRecord, _REVIEW_KEY_COLUMNS, {**key.as_row(), **row}, update_values)
    if DEBUG_MODE:
        print(f"📝 upsert review {key.user}/{key.module.value}/{key.item_id}/{key.form.value}/{key.mode.value}")


def record_daily_progress(session: Session, user: str, module: Module, mode: PracticeMode,
                          is_new: bool, correct: bool, today: Optional[datetime.date] = None) -> None:
    """Bump today's counters for (user, module, mode)."""
    today = today or utcnow().date()
    new_inc = 1 if is_new else 0
    review_inc = 0 if is_new else 1
    correct_inc = 1 if correct else 0
    row = {
        "user": user, "date": today, "module": module.value, "mode": mode.value,
        "reviews_completed": review_inc,
        "new_items_completed": new_inc,
        "correct_answers": correct_inc,
    }
    _upsert(session, DailyProgress, _DAILY_KEY_COLUMNS, row, {
        "reviews_completed": DailyProgress.reviews_completed + review_inc,
        "new_items_completed": DailyProgress.new_items_completed + new_inc,
        "correct_answers": DailyProgress.correct_answers + correct_inc,
    })


# ----------------------------------------------------------------------
# Catalog
# ----------------------------------------------------------------------
def get_item(session: Session, item_id: int) -> LexicalItem:
    row: Optional[CatalogItem] = session.get(CatalogItem, item_id)
    if row is None:
        raise ItemNotFoundError(item_id)
    return row.to_lexical_item()


def list_catalog_ids(session: Session, categories: Iterable[Category]) -> List[int]:
    values = [category.value for category in categories]
    stmt = select(CatalogItem.id).where(CatalogItem.category.in_(values)).order_by(CatalogItem.id)
    return list(session.scalars(stmt))


def add_item(session: Session, kana: str, kanji: Optional[str], category: Category,
             subtype: Optional[str] = None, meaning: Optional[str] = None) -> Tuple[CatalogItem, bool]:
    """Add a catalog item unless the same (kana, kanji, category) exists. Returns (row, is_new)."""
    kanji = kanji or None
    existing = (
        session.query(CatalogItem)
        .filter_by(kana=kana, kanji=kanji, category=category.value)
        .first()
    )
    if existing:
        return existing, False
    row = CatalogItem(kana=kana, kanji=kanji, category=category.value, subtype=subtype, meaning=meaning)
    session.add(row)
    session.flush()
    return row, True


def import_catalog_csv(csv_path: str) -> int:
    """Import lexical items from a CSV with columns kana, kanji, category, subtype, meaning.
    Skips rows already present. Returns the number of newly imported rows."""
    import csv

    session: Session = get_session()
    imported = 0
    try:
        with open(csv_path, "r", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            for row in reader:
                kana = (row.get("kana") or "").strip()
                category = Category.parse(row.get("category"))
                if not kana or category is None:
                    if DEBUG_MODE:
                        print(f"⚠️ Skipping catalog row without kana/category: {row}")
                    continue
                _, is_new = add_item(
                    session,
                    kana=kana,
                    kanji=(row.get("kanji") or "").strip() or None,
                    category=category,
                    subtype=(row.get("subtype") or "").strip() or None,
                    meaning=(row.get("meaning") or "").strip() or None,
                )
                if is_new:
                    imported += 1
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    print(f"✅ Imported {imported} catalog items")
    return imported


# ----------------------------------------------------------------------
# Review store
# ----------------------------------------------------------------------
def get_review(session: Session, key: ReviewKey) -> Optional[ReviewRecord]:
    """Point lookup by the five-part composite key."""
    row = key.as_row()
    stmt = select(ReviewRecord).where(
        *[getattr(ReviewRecord, column) == row[column] for column in _REVIEW_KEY_COLUMNS]
    )
    return session.scalars(stmt).first()


def get_user_settings(session: Session, user: str) -> Optional[UserSettings]:
    return session.query(UserSettings).filter_by(user=user).first()


def save_user_settings(session: Session, user: str, enabled_forms: Optional[Sequence[str]] = None,
                       due_only: Optional[bool] = None) -> UserSettings:
    settings = get_user_settings(session, user)
    if settings is None:
        settings = UserSettings(user=user, due_only=False)
        session.add(settings)
    if enabled_forms is not None:
        settings.enabled_forms = json.dumps([str(getattr(f, "value", f)) for f in enabled_forms])
    if due_only is not None:
        settings.due_only = due_only
    session.flush()
    return settings


def find_next_review(
    session: Session,
    user: str,
    module: Module,
    mode: PracticeMode,
    forms: Sequence[Form],
    now: datetime.datetime,
    due_only: bool = False,
) -> Optional[ReviewRecord]:
    """Most urgent existing review outside the exclusion window, or None.

    Ordering mirrors ``policy.review_priority``: null due first, then due
    ascending, then streak ascending.
    """
    if not forms:
        return None
    now = as_naive_utc(now)
    cutoff = exclusion_cutoff(now)
    stmt = (
        select(ReviewRecord)
        .where(
            ReviewRecord.user == user,
            ReviewRecord.module == module.value,
            ReviewRecord.mode == mode.value,
            ReviewRecord.form.in_([form.value for form in forms]),
            (ReviewRecord.last_reviewed_at.is_(None)) | (ReviewRecord.last_reviewed_at < cutoff),
        )
    )
    if due_only:
        stmt = stmt.where((ReviewRecord.due_at.is_(None)) | (ReviewRecord.due_at <= now))
    stmt = stmt.order_by(
        case((ReviewRecord.due_at.is_(None), 0), else_=1),
        ReviewRecord.due_at.asc(),
        ReviewRecord.streak.asc(),
        ReviewRecord.id.asc(),
    ).limit(1)
    return session.scalars(stmt).first()


def find_new_pairs(
    session: Session,
    user: str,
    module: Module,
    mode: PracticeMode,
    forms: Sequence[Form],
    categories: Iterable[Category],
    now: datetime.datetime,
) -> List[Tuple[int, Form]]:
    """Catalog (item, form) pairs with no review for this user/module/mode.

    Pairs reviewed inside the exclusion window under any mode are skipped too.
    """
    if not forms:
        return []
    item_ids = list_catalog_ids(session, categories)
    if not item_ids:
        return []

    form_values = [form.value for form in forms]
    tracked = session.execute(
        select(ReviewRecord.item_id, ReviewRecord.form).where(
            ReviewRecord.user == user,
            ReviewRecord.module == module.value,
            ReviewRecord.form.in_(form_values),
            (ReviewRecord.mode == mode.value)
            | (ReviewRecord.last_reviewed_at >= exclusion_cutoff(now)),
        )
    ).all()
    taken: Set[Tuple[int, str]] = {(row.item_id, row.form) for row in tracked}
    return [
        (item_id, form)
        for item_id in item_ids
        for form in forms
        if (item_id, form.value) not in taken
    ]


__all__ = [
    "Base", "CatalogItem", "ReviewRecord", "UserSettings", "DailyProgress",
    "ReviewKey", "ItemNotFoundError",
    "init_db", "is_db_initialized", "get_session", "session_scope",
    "get_item", "list_catalog_ids", "add_item", "import_catalog_csv",
    "get_review", "find_next_review", "find_new_pairs", "upsert_review",
    "get_user_settings", "save_user_settings", "record_daily_progress",
]
