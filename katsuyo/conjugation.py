"""
Japanese verb and adjective conjugation engine.

Pure functions only: every public function is deterministic, total and
never raises. Classification values are read exclusively through the
``normalize_*`` helpers so that every textual synonym found in catalog data
("1", "godan", "group_ii", "な" ...) is folded onto the closed enums in one
place.

Rule data lives in static lookup tables keyed by ``Form``:
  - irregular paradigms (する, くる, 来る) are consulted before any rule table
  - godan verbs shift their final mora along a vowel row (a/i/e/o)
  - te/ta forms of godan verbs follow the sound-change table
  - ichidan verbs drop る and append a fixed suffix
  - i-adjectives drop い, na-adjectives drop their copula
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .structured import (
    ADJECTIVE_FORMS,
    PLAIN_FORMS,
    POLITE_FORMS,
    VERB_FORMS,
    AdjectiveType,
    Category,
    Classification,
    Form,
    LexicalItem,
    VerbGroup,
)

FormLike = Union[Form, str, None]


# ----------------------------------------------------------------------
# Classification normalization
# ----------------------------------------------------------------------
_VERB_GROUP_SYNONYMS: Mapping[str, VerbGroup] = MappingProxyType({
    **dict.fromkeys(
        ("I", "1", "TYPE1", "TYPEI", "GROUP1", "GROUPI", "CLASS1", "CLASSI",
         "VERB1", "VERBI", "GODAN", "U", "UVERB", "V5", "五段"),
        VerbGroup.GROUP_I,
    ),
    **dict.fromkeys(
        ("II", "2", "TYPE2", "TYPEII", "GROUP2", "GROUPII", "CLASS2", "CLASSII",
         "VERB2", "VERBII", "ICHIDAN", "RU", "RUVERB", "V1", "一段"),
        VerbGroup.GROUP_II,
    ),
    **dict.fromkeys(
        ("IRR", "IRREGULAR", "III", "3", "TYPE3", "TYPEIII", "GROUP3", "GROUPIII",
         "CLASS3", "CLASSIII", "VERB3", "VERBIII", "VS", "VK", "不規則"),
        VerbGroup.IRREGULAR,
    ),
})

_ADJECTIVE_TYPE_SYNONYMS: Mapping[str, AdjectiveType] = MappingProxyType({
    **dict.fromkeys(
        ("I", "い", "IADJ", "ADJI", "ITYPE", "IADJECTIVE", "KEIYOUSHI", "形容詞"),
        AdjectiveType.I,
    ),
    **dict.fromkeys(
        ("NA", "な", "NAADJ", "ADJNA", "NATYPE", "NAADJECTIVE", "KEIYOUDOUSHI", "形容動詞"),
        AdjectiveType.NA,
    ),
})


def _fold(value: object) -> str:
    return re.sub(r"[\s_\-]+", "", str(value)).upper()


def normalize_verb_group(value: object) -> Optional[VerbGroup]:
    """Fold any textual verb-group synonym onto ``VerbGroup``; None if blank or unknown."""
    if isinstance(value, VerbGroup):
        return value
    if value is None or isinstance(value, AdjectiveType):
        return None
    folded = _fold(value)
    if not folded:
        return None
    return _VERB_GROUP_SYNONYMS.get(folded)


def normalize_adjective_type(value: object) -> Optional[AdjectiveType]:
    """Fold any textual adjective-type synonym onto ``AdjectiveType``; None if blank or unknown."""
    if isinstance(value, AdjectiveType):
        return value
    if value is None or isinstance(value, VerbGroup):
        return None
    folded = _fold(value)
    if not folded:
        return None
    return _ADJECTIVE_TYPE_SYNONYMS.get(folded)


def normalize_classification(value: object, category: Category) -> Optional[Classification]:
    if category is Category.ADJECTIVE:
        return normalize_adjective_type(value)
    return normalize_verb_group(value)


# ----------------------------------------------------------------------
# Static rule tables
# ----------------------------------------------------------------------
_IRREGULAR_VERBS: Mapping[str, Mapping[Form, str]] = MappingProxyType({
    "する": MappingProxyType({
        Form.MASU: "します", Form.TE: "して", Form.NAI: "しない", Form.TA: "した",
        Form.POTENTIAL: "できる", Form.VOLITIONAL: "しよう", Form.IMPERATIVE: "しろ",
    }),
    "くる": MappingProxyType({
        Form.MASU: "きます", Form.TE: "きて", Form.NAI: "こない", Form.TA: "きた",
        Form.POTENTIAL: "こられる", Form.VOLITIONAL: "こよう", Form.IMPERATIVE: "こい",
    }),
    "来る": MappingProxyType({
        Form.MASU: "来ます", Form.TE: "来て", Form.NAI: "来ない", Form.TA: "来た",
        Form.POTENTIAL: "来られる", Form.VOLITIONAL: "来よう", Form.IMPERATIVE: "来い",
    }),
})

# Single-form exceptions on otherwise regular verbs.
_VERB_EXCEPTIONS: Mapping[str, Mapping[Form, str]] = MappingProxyType({
    "ある": MappingProxyType({Form.NAI: "ない"}),
})

# 行く and its compounds take って/った instead of いて/いた.
_IKU_ENDINGS: Tuple[str, ...] = ("行く", "ていく", "でいく")

# (suffix, irregular head) pairs recognised as compound irregular verbs.
_IRREGULAR_COMPOUND_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("する", "する"),
    ("来る", "来る"),
    ("てくる", "くる"),
    ("でくる", "くる"),
)

_GOOD_ADJECTIVES = frozenset({"いい"})

_I_ROW = frozenset("いきぎしじちぢにひびぴみりゐ")
_E_ROW = frozenset("えけげせぜてでねへべぺめれゑ")
_U_ROW = frozenset("うくぐすつぬぶむる")

# Ichidan verbs whose stem is written in kanji, so the i/e-row test cannot see it.
_ICHIDAN_VERBS = frozenset({
    "見る", "寝る", "着る", "似る", "煮る", "居る", "射る", "得る", "経る", "出る", "干る",
    "出来る",
})

# Godan verbs that look ichidan (る after an i/e-row kana) or look like a する compound.
_GODAN_EXCEPTIONS = frozenset({
    "帰る", "かえる", "入る", "はいる", "走る", "はしる", "知る", "しる", "切る",
    "要る", "減る", "へる", "喋る", "しゃべる", "滑る", "すべる", "蹴る", "ける",
    "限る", "かぎる", "握る", "にぎる", "参る", "まいる", "焦る", "あせる",
    "こする", "さする", "かする",
})

# Na-adjectives that happen to end in い.
_NA_ADJECTIVES_ENDING_I = frozenset({
    "きれい", "綺麗", "きらい", "嫌い", "ゆうめい", "ていねい", "しつれい", "失礼",
    "とくい", "得意", "にがて", "あいまい", "曖昧", "さいわい", "幸い",
})

_ROW_SHIFT: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "a": MappingProxyType(dict(zip("うくぐすつぬぶむる", "わかがさたなばまら"))),
    "i": MappingProxyType(dict(zip("うくぐすつぬぶむる", "いきぎしちにびみり"))),
    "e": MappingProxyType(dict(zip("うくぐすつぬぶむる", "えけげせてねべめれ"))),
    "o": MappingProxyType(dict(zip("うくぐすつぬぶむる", "おこごそとのぼもろ"))),
})

# form -> (vowel row of the substituted mora, suffix)
_GODAN_SUFFIXES: Mapping[Form, Tuple[str, str]] = MappingProxyType({
    Form.MASU: ("i", "ます"),
    Form.NAI: ("a", "ない"),
    Form.POTENTIAL: ("e", "る"),
    Form.VOLITIONAL: ("o", "う"),
    Form.IMPERATIVE: ("e", ""),
})

# final mora -> (te suffix, ta suffix)
_TE_TA_SOUND_CHANGES: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "く": ("いて", "いた"),
    "ぐ": ("いで", "いだ"),
    "す": ("して", "した"),
    "つ": ("って", "った"),
    "う": ("って", "った"),
    "る": ("って", "った"),
    "ぬ": ("んで", "んだ"),
    "ぶ": ("んで", "んだ"),
    "む": ("んで", "んだ"),
})

_ICHIDAN_SUFFIXES: Mapping[Form, str] = MappingProxyType({
    Form.MASU: "ます",
    Form.TE: "て",
    Form.NAI: "ない",
    Form.TA: "た",
    Form.POTENTIAL: "られる",
    Form.VOLITIONAL: "よう",
    Form.IMPERATIVE: "ろ",
})

_I_ADJECTIVE_SUFFIXES: Mapping[Form, str] = MappingProxyType({
    Form.NEGATIVE: "くない",
    Form.PAST: "かった",
    Form.PAST_NEGATIVE: "くなかった",
    Form.ADVERB: "く",
    Form.TE: "くて",
})

_NA_ADJECTIVE_SUFFIXES: Mapping[Form, str] = MappingProxyType({
    Form.NEGATIVE: "じゃない",
    Form.PAST: "だった",
    Form.PAST_NEGATIVE: "じゃなかった",
    Form.ADVERB: "に",
    Form.TE: "で",
    Form.RENTAI: "な",
})

_POLITE_VERB_SUFFIXES: Mapping[Form, str] = MappingProxyType({
    Form.POLITE_PRESENT: "ます",
    Form.POLITE_PAST: "ました",
    Form.POLITE_NEGATIVE: "ません",
    Form.POLITE_PAST_NEGATIVE: "ませんでした",
})

_POLITE_NA_SUFFIXES: Mapping[Form, str] = MappingProxyType({
    Form.POLITE_PRESENT: "です",
    Form.POLITE_PAST: "でした",
    Form.POLITE_NEGATIVE: "ではありません",
    Form.POLITE_PAST_NEGATIVE: "ではありませんでした",
})

# Plain adjective forms reuse the base adjective paradigm.
_PLAIN_ADJECTIVE_FORMS: Mapping[Form, Form] = MappingProxyType({
    Form.PLAIN_PAST: Form.PAST,
    Form.PLAIN_NEGATIVE: Form.NEGATIVE,
    Form.PLAIN_PAST_NEGATIVE: Form.PAST_NEGATIVE,
})

_NA_COPULA = re.compile(r"(である|です|だ|な|の)$")
_HOMOGRAPH_SUFFIX = re.compile(r"\s*[(（]?\d+[)）]?\s*$")

# Longer particles first so から/まで win over the single-mora ones.
PARTICLES: Tuple[str, ...] = ("から", "まで", "を", "に", "が", "で", "へ", "と")
_PARTICLE_PHRASE = re.compile(
    r"^(?P<lead>.*\S.*?(?:" + "|".join(PARTICLES) + r"))\s*(?P<tail>\S{2,})$"
)


# ----------------------------------------------------------------------
# Inference
# ----------------------------------------------------------------------
def clean_base(base: Optional[str]) -> str:
    """Strip whitespace and trailing homograph numbering (e.g. あつい2, あつい(1))."""
    if not base:
        return ""
    return _HOMOGRAPH_SUFFIX.sub("", str(base)).strip()


def split_particle_phrase(text: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split 'ドアを開ける' into ('ドアを', '開ける'); None for single words."""
    if not text:
        return None
    match = _PARTICLE_PHRASE.match(text.strip())
    if match is None:
        return None
    return match.group("lead"), match.group("tail")


def _split_irregular_compound(base: str) -> Optional[Tuple[str, str]]:
    """(prefix, irregular head) for …する / …来る / …てくる compounds, whatever group the catalog states."""
    if base in _GODAN_EXCEPTIONS or base in _ICHIDAN_VERBS:
        return None
    for suffix, head in _IRREGULAR_COMPOUND_SUFFIXES:
        if base.endswith(suffix) and base != suffix:
            return base[: -len(suffix)] + suffix[: -len(head)], head
    return None


def _is_iku(base: str) -> bool:
    """行く, いく and phrases ending in them (もっていく, いしゃにいく, 学校へ行く)."""
    if base == "いく" or base.endswith(_IKU_ENDINGS):
        return True
    return base.endswith("いく") and base[:-2].rstrip().endswith(PARTICLES)


def _infer_regular_group(base: str) -> VerbGroup:
    if base in _GODAN_EXCEPTIONS:
        return VerbGroup.GROUP_I
    if base.endswith("る"):
        if base in _ICHIDAN_VERBS:
            return VerbGroup.GROUP_II
        if len(base) >= 2 and (base[-2] in _I_ROW or base[-2] in _E_ROW):
            return VerbGroup.GROUP_II
    return VerbGroup.GROUP_I


def infer_verb_group(base: str) -> VerbGroup:
    """Classify a verb from its orthography alone."""
    base = clean_base(base)
    if base in _IRREGULAR_VERBS:
        return VerbGroup.IRREGULAR
    if _split_irregular_compound(base):
        return VerbGroup.IRREGULAR
    return _infer_regular_group(base)


def infer_adjective_type(base: str) -> AdjectiveType:
    base = clean_base(base)
    if base.endswith("い") and base not in _NA_ADJECTIVES_ENDING_I:
        return AdjectiveType.I
    return AdjectiveType.NA


def infer_category(base: str) -> Category:
    """Dictionary-form verbs always end in a u-row mora; anything else is adjectival."""
    base = clean_base(base)
    if base and base[-1] in _U_ROW:
        return Category.VERB
    return Category.ADJECTIVE


def resolve_category(base: str, classification: object = None,
                     category: Optional[Category] = None) -> Category:
    if category is not None:
        return category
    if isinstance(classification, VerbGroup):
        return Category.VERB
    if isinstance(classification, AdjectiveType):
        return Category.ADJECTIVE
    as_verb = normalize_verb_group(classification)
    as_adjective = normalize_adjective_type(classification)
    if as_verb and not as_adjective:
        return Category.VERB
    if as_adjective and not as_verb:
        return Category.ADJECTIVE
    return infer_category(base)


# ----------------------------------------------------------------------
# Verbs
# ----------------------------------------------------------------------
def _conjugate_godan(base: str, form: Form) -> str:
    stem, last = base[:-1], base[-1:]
    if form in (Form.TE, Form.TA):
        if _is_iku(base):
            te, ta = "って", "った"
        else:
            te, ta = _TE_TA_SOUND_CHANGES.get(last, ("って", "った"))
        return stem + (te if form is Form.TE else ta)
    row, suffix = _GODAN_SUFFIXES[form]
    shifted = _ROW_SHIFT[row]
    return stem + shifted.get(last, shifted["う"]) + suffix


def _conjugate_ichidan(base: str, form: Form) -> str:
    stem = base[:-1] if base.endswith("る") else base
    return stem + _ICHIDAN_SUFFIXES[form]


def _conjugate_verb_form(base: str, group: object, form: Form) -> str:
    irregular = _IRREGULAR_VERBS.get(base)
    if irregular is not None:
        return irregular[form]
    exception = _VERB_EXCEPTIONS.get(base, {}).get(form)
    if exception is not None:
        return exception

    compound = _split_irregular_compound(base)
    if compound is not None:
        prefix, head = compound
        return prefix + _IRREGULAR_VERBS[head][form]

    resolved = normalize_verb_group(group) or _infer_regular_group(base)
    if resolved is VerbGroup.IRREGULAR:
        resolved = _infer_regular_group(base)
    if resolved is VerbGroup.GROUP_II:
        return _conjugate_ichidan(base, form)
    return _conjugate_godan(base, form)


def conjugate_verb(base: str, group: object, form: FormLike) -> str:
    """Conjugate a dictionary-form verb. Unknown forms return the base unchanged."""
    base = clean_base(base)
    target = Form.parse(form)
    if not base or target is None:
        return base

    if target in VERB_FORMS:
        return _conjugate_verb_form(base, group, target)

    if target in PLAIN_FORMS:
        if target is Form.PLAIN_PRESENT:
            return base
        if target is Form.PLAIN_PAST:
            return _conjugate_verb_form(base, group, Form.TA)
        negative = _conjugate_verb_form(base, group, Form.NAI)
        if target is Form.PLAIN_PAST_NEGATIVE and negative.endswith("ない"):
            return negative[:-2] + "なかった"
        return negative

    if target in POLITE_FORMS:
        masu = _conjugate_verb_form(base, group, Form.MASU)
        stem = masu[:-2] if masu.endswith("ます") else masu
        return stem + _POLITE_VERB_SUFFIXES[target]

    return base


# ----------------------------------------------------------------------
# Adjectives
# ----------------------------------------------------------------------
def strip_copula(base: str) -> str:
    return _NA_COPULA.sub("", clean_base(base))


def _i_stem(base: str) -> str:
    return "よ" if base in _GOOD_ADJECTIVES else base[:-1]


def _conjugate_adjective_form(base: str, adjective_type: AdjectiveType, form: Form) -> str:
    if adjective_type is AdjectiveType.I:
        if form is Form.RENTAI:
            return base
        return _i_stem(base) + _I_ADJECTIVE_SUFFIXES[form]
    return strip_copula(base) + _NA_ADJECTIVE_SUFFIXES[form]


def conjugate_adjective(base: str, adjective_type: object, form: FormLike) -> str:
    """Conjugate an i- or na-adjective. Unknown forms return the base unchanged."""
    base = clean_base(base)
    target = Form.parse(form)
    if not base or target is None:
        return base
    resolved = normalize_adjective_type(adjective_type) or infer_adjective_type(base)

    if target in ADJECTIVE_FORMS:
        return _conjugate_adjective_form(base, resolved, target)

    if target in PLAIN_FORMS:
        if target is Form.PLAIN_PRESENT:
            return base if resolved is AdjectiveType.I else strip_copula(base) + "だ"
        return _conjugate_adjective_form(base, resolved, _PLAIN_ADJECTIVE_FORMS[target])

    if target in POLITE_FORMS:
        if resolved is AdjectiveType.NA:
            return strip_copula(base) + _POLITE_NA_SUFFIXES[target]
        if target is Form.POLITE_PRESENT:
            return base + "です"
        if target is Form.POLITE_PAST:
            return _i_stem(base) + "かったです"
        if target is Form.POLITE_NEGATIVE:
            return _i_stem(base) + "くありません"
        return _i_stem(base) + "くありませんでした"

    return base


# ----------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------
def conjugate(base: str, classification: object, form: FormLike,
              category: Optional[Category] = None) -> str:
    """Map (lexical base, classification, target form) to a surface string.

    ``classification`` may be a ``VerbGroup``, an ``AdjectiveType``, any
    textual synonym of either, or blank (inferred from the base).
    """
    category = resolve_category(base, classification, category)
    if category is Category.ADJECTIVE:
        return conjugate_adjective(base, classification, form)
    return conjugate_verb(base, classification, form)


def conjugate_item(item: LexicalItem, form: FormLike, use_kanji: bool = False) -> str:
    """Conjugate a catalog item from its kana spelling, or its kanji-headed one."""
    base = item.kanji if use_kanji and item.kanji else item.kana
    return conjugate(base, item.subtype, form, category=item.category)


def canonical_answer(item: LexicalItem, form: FormLike) -> str:
    """The answer shown to the learner: conjugated from the headword."""
    return conjugate(item.headword, item.subtype, form, category=item.category)


# ----------------------------------------------------------------------
# Explanations
# ----------------------------------------------------------------------
_VERB_EXPLANATIONS = {
    Form.MASU: {
        VerbGroup.GROUP_I: "Group I masu form: shift the final mora to the i-row and add ます (飲む→飲みます).",
        VerbGroup.GROUP_II: "Group II masu form: drop る and add ます (食べる→食べます).",
        VerbGroup.IRREGULAR: "Irregular masu form: する→します, 来る→きます.",
    },
    Form.TE: {
        VerbGroup.GROUP_I: "Group I te form: く→いて, ぐ→いで, す→して, つ/う/る→って, ぬ/ぶ/む→んで (行く→行って).",
        VerbGroup.GROUP_II: "Group II te form: drop る and add て (食べる→食べて).",
        VerbGroup.IRREGULAR: "Irregular te form: する→して, 来る→きて.",
    },
    Form.NAI: {
        VerbGroup.GROUP_I: "Group I nai form: shift the final mora to the a-row (う→わ) and add ない (飲む→飲まない).",
        VerbGroup.GROUP_II: "Group II nai form: drop る and add ない (食べる→食べない).",
        VerbGroup.IRREGULAR: "Irregular nai form: する→しない, 来る→こない.",
    },
    Form.TA: {
        VerbGroup.GROUP_I: "Group I ta form: く→いた, ぐ→いだ, す→した, つ/う/る→った, ぬ/ぶ/む→んだ (作る→作った).",
        VerbGroup.GROUP_II: "Group II ta form: drop る and add た (食べる→食べた).",
        VerbGroup.IRREGULAR: "Irregular ta form: する→した, 来る→きた.",
    },
    Form.POTENTIAL: {
        VerbGroup.GROUP_I: "Group I potential form: shift the final mora to the e-row and add る (飲む→飲める).",
        VerbGroup.GROUP_II: "Group II potential form: drop る and add られる (食べる→食べられる).",
        VerbGroup.IRREGULAR: "Irregular potential form: する→できる, 来る→こられる.",
    },
    Form.VOLITIONAL: {
        VerbGroup.GROUP_I: "Group I volitional form: shift the final mora to the o-row and add う (飲む→飲もう).",
        VerbGroup.GROUP_II: "Group II volitional form: drop る and add よう (食べる→食べよう).",
        VerbGroup.IRREGULAR: "Irregular volitional form: する→しよう, 来る→こよう.",
    },
    Form.IMPERATIVE: {
        VerbGroup.GROUP_I: "Group I imperative form: shift the final mora to the e-row (飲む→飲め).",
        VerbGroup.GROUP_II: "Group II imperative form: drop る and add ろ (食べる→食べろ).",
        VerbGroup.IRREGULAR: "Irregular imperative form: する→しろ, 来る→こい.",
    },
}

_ADJECTIVE_EXPLANATIONS = {
    Form.NEGATIVE: {
        AdjectiveType.I: "i-adjective negative: drop い and add くない (高い→高くない).",
        AdjectiveType.NA: "na-adjective negative: add じゃない (きれい→きれいじゃない).",
    },
    Form.PAST: {
        AdjectiveType.I: "i-adjective past: drop い and add かった (高い→高かった).",
        AdjectiveType.NA: "na-adjective past: add だった (きれい→きれいだった).",
    },
    Form.PAST_NEGATIVE: {
        AdjectiveType.I: "i-adjective past negative: drop い and add くなかった (高い→高くなかった).",
        AdjectiveType.NA: "na-adjective past negative: add じゃなかった (きれい→きれいじゃなかった).",
    },
    Form.ADVERB: {
        AdjectiveType.I: "i-adjective adverb: drop い and add く (高い→高く).",
        AdjectiveType.NA: "na-adjective adverb: add に (きれい→きれいに).",
    },
    Form.TE: {
        AdjectiveType.I: "i-adjective te form: drop い and add くて (高い→高くて).",
        AdjectiveType.NA: "na-adjective te form: add で (きれい→きれいで).",
    },
    Form.RENTAI: {
        AdjectiveType.I: "i-adjective attributive: the dictionary form modifies nouns directly (高い山).",
        AdjectiveType.NA: "na-adjective attributive: add な (きれい→きれいな).",
    },
}

_DERIVED_EXPLANATIONS = {
    Form.PLAIN_PRESENT: "Plain present: the dictionary form (na-adjectives take だ).",
    Form.PLAIN_PAST: "Plain past: the ta form (adjectives: かった / だった).",
    Form.PLAIN_NEGATIVE: "Plain negative: the nai form (adjectives: くない / じゃない).",
    Form.PLAIN_PAST_NEGATIVE: "Plain past negative: change ない to なかった.",
    Form.POLITE_PRESENT: "Polite present: masu form (adjectives: add です).",
    Form.POLITE_PAST: "Polite past: masu stem + ました (adjectives: かったです / でした).",
    Form.POLITE_NEGATIVE: "Polite negative: masu stem + ません (adjectives: くありません / ではありません).",
    Form.POLITE_PAST_NEGATIVE: "Polite past negative: masu stem + ませんでした.",
}


def explain(category: Category, form: FormLike, classification: Optional[Classification] = None) -> str:
    """One-line description of the rule that produces ``form``."""
    target = Form.parse(form)
    if target is None:
        return "Dictionary form."
    if target in _DERIVED_EXPLANATIONS:
        return _DERIVED_EXPLANATIONS[target]
    if category is Category.ADJECTIVE:
        adjective_type = normalize_adjective_type(classification) or AdjectiveType.I
        return _ADJECTIVE_EXPLANATIONS.get(target, {}).get(adjective_type, "Dictionary form.")
    group = normalize_verb_group(classification) or VerbGroup.GROUP_I
    return _VERB_EXPLANATIONS.get(target, {}).get(group, "Dictionary form.")


def explain_item(item: LexicalItem, form: FormLike) -> str:
    if item.category is Category.ADJECTIVE:
        classification: Classification = (
            normalize_adjective_type(item.subtype) or infer_adjective_type(item.headword)
        )
    else:
        classification = normalize_verb_group(item.subtype) or infer_verb_group(item.headword)
    return explain(item.category, form, classification)
