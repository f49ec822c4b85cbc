import re
from typing import List, Optional, Tuple, Union

from .conjugation import PARTICLES, FormLike, conjugate, conjugate_item, split_particle_phrase
from .scheduler import Feedback
from .structured import Category, LexicalItem, PracticeMode

_TRAILING_KANA = re.compile(r"[ぁ-ゖァ-ヺー]*$")

# Set phrases whose particle belongs to the word; the trailing verb alone is wrong.
_FIXED_EXPRESSIONS = frozenset({
    "間に合う", "まにあう", "気に入る", "きにいる", "役に立つ", "やくにたつ",
    "手に入る", "てにはいる", "目に付く", "めにつく", "気にする", "きにする",
})

_SELF_GRADED_PASS = frozenset({Feedback.GOOD, Feedback.EASY})


def _is_fixed_expression(text: Optional[str]) -> bool:
    return bool(text) and any(text.strip().endswith(expr) for expr in _FIXED_EXPRESSIONS)


def _kana_split(kana: str, particle: str, kanji_tail: str) -> Optional[Tuple[str, str]]:
    """
    Split the kana spelling at the boundary the kanji spelling shows:
    the lead must end in the same particle and the tail must read as the
    kanji tail (same okurigana, or identical when the tail has no kanji).
    """
    okurigana = _TRAILING_KANA.search(kanji_tail).group()
    for i in range(len(kana) - 2, 0, -1):
        lead, tail = kana[:i], kana[i:].strip()
        if not lead.endswith(particle) or not lead[: -len(particle)].strip() or len(tail) < 2:
            continue
        if okurigana == kanji_tail:
            if tail == kanji_tail:
                return lead, tail
        elif tail.endswith(okurigana) and len(tail) > len(okurigana):
            return lead, tail
    return None


def _trailing_segment_answers(item: LexicalItem, form: FormLike) -> List[str]:
    # Only the kanji spelling marks a real particle boundary (かんがえる has none).
    if item.category is not Category.VERB or not item.kanji:
        return []
    if _is_fixed_expression(item.kanji) or _is_fixed_expression(item.kana):
        return []
    kanji_parts = split_particle_phrase(item.kanji)
    if kanji_parts is None:
        return []

    lead, kanji_tail = kanji_parts
    particle = next(p for p in PARTICLES if lead.endswith(p))
    tails = [kanji_tail]
    kana_parts = _kana_split(item.kana.strip(), particle, kanji_tail)
    if kana_parts is not None:
        tails.insert(0, kana_parts[1])
    return [conjugate(tail, item.subtype, form, category=Category.VERB) for tail in tails]


def accepted_answers(item: LexicalItem, form: FormLike) -> List[str]:
    """Every rendering a quiz answer may match, primary spelling first."""
    candidates = [conjugate_item(item, form)]
    if item.kanji:
        candidates.append(conjugate_item(item, form, use_kanji=True))
    candidates.extend(_trailing_segment_answers(item, form))

    accepted: List[str] = []
    for candidate in candidates:
        if candidate and candidate not in accepted:
            accepted.append(candidate)
    return accepted


def validate(
    mode: Union[PracticeMode, str],
    feedback: Union[Feedback, str, None],
    user_answer: Optional[str],
    item: LexicalItem,
    form: FormLike,
) -> bool:
    """
    Decide whether a submission counts as a successful recall.

    Flashcards are self-graded: only good/easy pass. Quiz answers pass when the
    trimmed text matches the kana rendering, the kanji-headed rendering, or,
    for particle phrases, the rendering of the trailing verb alone.
    """
    if PracticeMode.parse(mode) is PracticeMode.FLASHCARD:
        return Feedback.parse(feedback) in _SELF_GRADED_PASS

    answer = (user_answer or "").strip()
    if not answer:
        return False
    return answer in accepted_answers(item, form)


__all__ = ["validate", "accepted_answers", "split_particle_phrase"]
