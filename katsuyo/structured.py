from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union


class _ParseableEnum(str, Enum):
    """String-valued enum that can be parsed leniently from caller input."""

    @classmethod
    def parse(cls, value: object) -> Optional["_ParseableEnum"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        return None


class Category(_ParseableEnum):
    VERB = "verb"
    ADJECTIVE = "adjective"


class VerbGroup(_ParseableEnum):
    GROUP_I = "I"
    GROUP_II = "II"
    IRREGULAR = "IRR"


class AdjectiveType(_ParseableEnum):
    I = "i"
    NA = "na"


class Form(_ParseableEnum):
    # Verb forms
    MASU = "masu"
    TE = "te"
    NAI = "nai"
    TA = "ta"
    POTENTIAL = "potential"
    VOLITIONAL = "volitional"
    IMPERATIVE = "imperative"
    # Adjective forms (TE is shared with verbs)
    NEGATIVE = "negative"
    PAST = "past"
    PAST_NEGATIVE = "past_negative"
    ADVERB = "adverb"
    RENTAI = "rentai"
    # Derived plain forms
    PLAIN_PRESENT = "plain_present"
    PLAIN_PAST = "plain_past"
    PLAIN_NEGATIVE = "plain_negative"
    PLAIN_PAST_NEGATIVE = "plain_past_negative"
    # Derived polite forms
    POLITE_PRESENT = "polite_present"
    POLITE_PAST = "polite_past"
    POLITE_NEGATIVE = "polite_negative"
    POLITE_PAST_NEGATIVE = "polite_past_negative"


class Module(_ParseableEnum):
    """Practice deck a review record belongs to."""
    VERB = "verb"
    ADJECTIVE = "adj"
    PLAIN = "plain"
    POLITE = "polite"


class PracticeMode(_ParseableEnum):
    QUIZ = "quiz"
    FLASHCARD = "flashcard"


Classification = Union[VerbGroup, AdjectiveType]


VERB_FORMS: FrozenSet[Form] = frozenset({
    Form.MASU, Form.TE, Form.NAI, Form.TA,
    Form.POTENTIAL, Form.VOLITIONAL, Form.IMPERATIVE,
})

ADJECTIVE_FORMS: FrozenSet[Form] = frozenset({
    Form.NEGATIVE, Form.PAST, Form.PAST_NEGATIVE,
    Form.ADVERB, Form.TE, Form.RENTAI,
})

PLAIN_FORMS: FrozenSet[Form] = frozenset({
    Form.PLAIN_PRESENT, Form.PLAIN_PAST, Form.PLAIN_NEGATIVE, Form.PLAIN_PAST_NEGATIVE,
})

POLITE_FORMS: FrozenSet[Form] = frozenset({
    Form.POLITE_PRESENT, Form.POLITE_PAST, Form.POLITE_NEGATIVE, Form.POLITE_PAST_NEGATIVE,
})

# Ordered so that resolved form lists are stable for callers.
MODULE_DEFAULT_FORMS: Dict[Module, Tuple[Form, ...]] = {
    Module.VERB: (Form.MASU, Form.TE, Form.NAI, Form.TA, Form.IMPERATIVE),
    Module.ADJECTIVE: (Form.NEGATIVE, Form.PAST, Form.PAST_NEGATIVE, Form.ADVERB),
    Module.PLAIN: (Form.PLAIN_PRESENT, Form.PLAIN_PAST, Form.PLAIN_NEGATIVE, Form.PLAIN_PAST_NEGATIVE),
    Module.POLITE: (Form.POLITE_PRESENT, Form.POLITE_PAST, Form.POLITE_NEGATIVE, Form.POLITE_PAST_NEGATIVE),
}

MODULE_CATEGORIES: Dict[Module, Tuple[Category, ...]] = {
    Module.VERB: (Category.VERB,),
    Module.ADJECTIVE: (Category.ADJECTIVE,),
    Module.PLAIN: (Category.VERB, Category.ADJECTIVE),
    Module.POLITE: (Category.VERB, Category.ADJECTIVE),
}

# Used when a user has never saved a form preference.
DEFAULT_PREFERRED_FORMS: Tuple[Form, ...] = (
    Form.MASU, Form.TE, Form.NAI, Form.TA, Form.POTENTIAL, Form.VOLITIONAL,
)


@dataclass(frozen=True)
class LexicalItem:
    """Read-only catalog entry as seen by the engine and validator."""
    id: int
    kana: str
    kanji: Optional[str]
    category: Category
    subtype: Optional[str]
    meaning: Optional[str] = None

    @property
    def headword(self) -> str:
        return self.kanji or self.kana
