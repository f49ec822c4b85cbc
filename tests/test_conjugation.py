"""
Tests for the conjugation engine: rule tables, irregulars, inference and
classification normalization.
"""

import pytest

from katsuyo import conjugation
from katsuyo.conjugation import conjugate, conjugate_item, canonical_answer
from katsuyo.structured import AdjectiveType, Category, Form, LexicalItem, VerbGroup


@pytest.mark.parametrize("base,classification,form,expected", [
    ("よむ", VerbGroup.GROUP_I, Form.TE, "よんで"),
    ("よむ", VerbGroup.GROUP_I, Form.TA, "よんだ"),
    ("かう", VerbGroup.GROUP_I, Form.TE, "かって"),
    ("たべる", VerbGroup.GROUP_II, Form.MASU, "たべます"),
    ("する", VerbGroup.IRREGULAR, Form.NAI, "しない"),
    ("たかい", AdjectiveType.I, Form.PAST, "たかかった"),
    ("きれい", AdjectiveType.NA, Form.NEGATIVE, "きれいじゃない"),
])
def test_reference_table(base: str, classification: object, form: Form, expected: str) -> None:
    assert conjugate(base, classification, form) == expected


@pytest.mark.parametrize("base,form,expected", [
    ("かく", Form.TE, "かいて"),
    ("いそぐ", Form.TA, "いそいだ"),
    ("はなす", Form.TE, "はなして"),
    ("まつ", Form.TA, "まった"),
    ("つくる", Form.TE, "つくって"),
    ("しぬ", Form.TA, "しんだ"),
    ("あそぶ", Form.TE, "あそんで"),
    ("のむ", Form.MASU, "のみます"),
    ("かう", Form.NAI, "かわない"),
    ("のむ", Form.POTENTIAL, "のめる"),
    ("のむ", Form.VOLITIONAL, "のもう"),
    ("のむ", Form.IMPERATIVE, "のめ"),
])
def test_godan_rows_and_sound_changes(base: str, form: Form, expected: str) -> None:
    assert conjugation.conjugate_verb(base, VerbGroup.GROUP_I, form) == expected


def test_ichidan_paradigm() -> None:
    forms = {
        Form.TE: "たべて",
        Form.NAI: "たべない",
        Form.TA: "たべた",
        Form.POTENTIAL: "たべられる",
        Form.VOLITIONAL: "たべよう",
        Form.IMPERATIVE: "たべろ",
    }
    for form, expected in forms.items():
        assert conjugation.conjugate_verb("たべる", VerbGroup.GROUP_II, form) == expected


def test_irregular_verbs_bypass_rule_tables() -> None:
    assert conjugate("する", "irregular", Form.MASU) == "します"
    assert conjugate("する", "irregular", Form.POTENTIAL) == "できる"
    assert conjugate("くる", "irregular", Form.NAI) == "こない"
    assert conjugate("くる", "irregular", Form.IMPERATIVE) == "こい"
    assert conjugate("来る", "irregular", Form.TE) == "来て"
    # Wrong group in the catalog does not override the fixed paradigm
    assert conjugate("する", VerbGroup.GROUP_I, Form.TA) == "した"


def test_iku_takes_geminate_te_and_ta() -> None:
    assert conjugate("いく", VerbGroup.GROUP_I, Form.TE) == "いって"
    assert conjugate("行く", VerbGroup.GROUP_I, Form.TA) == "行った"
    assert conjugate("もっていく", "", Form.TE) == "もっていって"


def test_aru_negative_exception() -> None:
    assert conjugate("ある", VerbGroup.GROUP_I, Form.NAI) == "ない"
    assert conjugate("ある", VerbGroup.GROUP_I, Form.MASU) == "あります"


def test_compound_irregular_verbs() -> None:
    assert conjugate("勉強する", "", Form.MASU) == "勉強します"
    assert conjugate("べんきょうする", VerbGroup.IRREGULAR, Form.VOLITIONAL) == "べんきょうしよう"
    assert conjugate("持ってくる", "", Form.TA) == "持ってきた"
    assert conjugate("連れて来る", "", Form.NAI) == "連れて来ない"


def test_group_inference() -> None:
    assert conjugation.infer_verb_group("たべる") is VerbGroup.GROUP_II
    assert conjugation.infer_verb_group("おきる") is VerbGroup.GROUP_II
    assert conjugation.infer_verb_group("見る") is VerbGroup.GROUP_II
    assert conjugation.infer_verb_group("のむ") is VerbGroup.GROUP_I
    assert conjugation.infer_verb_group("わかる") is VerbGroup.GROUP_I
    assert conjugation.infer_verb_group("かえる") is VerbGroup.GROUP_I
    assert conjugation.infer_verb_group("はしる") is VerbGroup.GROUP_I
    assert conjugation.infer_verb_group("する") is VerbGroup.IRREGULAR
    assert conjugation.infer_verb_group("運転する") is VerbGroup.IRREGULAR
    # Godan verbs that merely end in する are not compounds
    assert conjugation.infer_verb_group("こする") is VerbGroup.GROUP_I


def test_blank_classification_is_inferred() -> None:
    assert conjugate("たべる", "", Form.TE) == "たべて"
    assert conjugate("たべる", None, Form.TE) == "たべて"
    assert conjugate("かえる", "  ", Form.TE) == "かえって"
    assert conjugate("たかい", None, Form.NEGATIVE) == "たかくない"
    assert conjugate("きれい", None, Form.NEGATIVE, category=Category.ADJECTIVE) == "きれいじゃない"


def test_normalize_synonyms() -> None:
    assert conjugation.normalize_verb_group("godan") is VerbGroup.GROUP_I
    assert conjugation.normalize_verb_group("1") is VerbGroup.GROUP_I
    assert conjugation.normalize_verb_group("Group_II") is VerbGroup.GROUP_II
    assert conjugation.normalize_verb_group("Ichidan") is VerbGroup.GROUP_II
    assert conjugation.normalize_verb_group("irregular") is VerbGroup.IRREGULAR
    assert conjugation.normalize_verb_group("") is None
    assert conjugation.normalize_verb_group("whatever") is None
    assert conjugation.normalize_adjective_type("な") is AdjectiveType.NA
    assert conjugation.normalize_adjective_type("i-adj") is AdjectiveType.I
    assert conjugation.normalize_adjective_type("Na Adjective") is AdjectiveType.NA
    assert conjugation.normalize_adjective_type(VerbGroup.GROUP_I) is None


def test_ambiguous_i_label_follows_the_base() -> None:
    # "I" is both Group I and the i-adjective label
    assert conjugate("たかい", "I", Form.PAST) == "たかかった"
    assert conjugate("のむ", "I", Form.MASU) == "のみます"


def test_adjective_forms() -> None:
    assert conjugate("たかい", AdjectiveType.I, Form.PAST_NEGATIVE) == "たかくなかった"
    assert conjugate("たかい", AdjectiveType.I, Form.ADVERB) == "たかく"
    assert conjugate("たかい", AdjectiveType.I, Form.TE) == "たかくて"
    assert conjugate("しずか", AdjectiveType.NA, Form.ADVERB) == "しずかに"
    assert conjugate("しずか", AdjectiveType.NA, Form.RENTAI) == "しずかな"
    assert conjugate("しずかな", "na", Form.PAST) == "しずかだった"


def test_ii_uses_yo_stem() -> None:
    assert conjugate("いい", AdjectiveType.I, Form.NEGATIVE) == "よくない"
    assert conjugate("いい", AdjectiveType.I, Form.PAST) == "よかった"


def test_plain_and_polite_derivations() -> None:
    assert conjugate("のむ", VerbGroup.GROUP_I, Form.PLAIN_PRESENT) == "のむ"
    assert conjugate("のむ", VerbGroup.GROUP_I, Form.PLAIN_PAST) == "のんだ"
    assert conjugate("のむ", VerbGroup.GROUP_I, Form.PLAIN_PAST_NEGATIVE) == "のまなかった"
    assert conjugate("たべる", VerbGroup.GROUP_II, Form.POLITE_PAST) == "たべました"
    assert conjugate("する", VerbGroup.IRREGULAR, Form.POLITE_PAST_NEGATIVE) == "しませんでした"
    assert conjugate("たかい", AdjectiveType.I, Form.POLITE_NEGATIVE) == "たかくありません"
    assert conjugate("たかい", AdjectiveType.I, Form.POLITE_PAST) == "たかかったです"
    assert conjugate("きれい", AdjectiveType.NA, Form.POLITE_PRESENT) == "きれいです"
    assert conjugate("きれい", AdjectiveType.NA, Form.PLAIN_PRESENT) == "きれいだ"


def test_unknown_form_returns_base() -> None:
    assert conjugate("たべる", VerbGroup.GROUP_II, "bogus") == "たべる"
    assert conjugate("たべる", VerbGroup.GROUP_II, None) == "たべる"
    assert conjugate("たかい", AdjectiveType.I, Form.MASU) == "たかい"
    assert conjugate("", VerbGroup.GROUP_I, Form.TE) == ""


def test_homograph_numbering_is_stripped() -> None:
    assert conjugation.clean_base("あつい2") == "あつい"
    assert conjugation.clean_base("あつい（1）") == "あつい"
    assert conjugate("あつい2", "i", Form.NEGATIVE) == "あつくない"


def test_item_helpers_use_headword() -> None:
    item = LexicalItem(id=1, kana="よむ", kanji="読む", category=Category.VERB, subtype="Group I")
    assert conjugate_item(item, Form.TA) == "よんだ"
    assert conjugate_item(item, Form.TA, use_kanji=True) == "読んだ"
    assert canonical_answer(item, Form.TA) == "読んだ"
    kana_only = LexicalItem(id=2, kana="たべる", kanji=None, category=Category.VERB, subtype=None)
    assert canonical_answer(kana_only, "masu") == "たべます"


def test_explanations() -> None:
    item = LexicalItem(id=1, kana="よむ", kanji="読む", category=Category.VERB, subtype="I")
    assert "Group I ta form" in conjugation.explain_item(item, Form.TA)
    adjective = LexicalItem(id=2, kana="きれい", kanji=None, category=Category.ADJECTIVE, subtype="na")
    assert "na-adjective negative" in conjugation.explain_item(adjective, Form.NEGATIVE)
    assert conjugation.explain(Category.VERB, "bogus") == "Dictionary form."


def test_iku_after_particle_in_kana() -> None:
    assert conjugate("いしゃにいく", "I", Form.TE) == "いしゃにいって"
    assert conjugate("いしゃにいく", "I", Form.TA) == "いしゃにいった"
    assert conjugate("がっこうへいく", "I", Form.TA) == "がっこうへいった"
    # Ordinary く verbs keep the いて sound change
    assert conjugate("かく", "I", Form.TE) == "かいて"


def test_compound_irregular_wins_over_stated_group() -> None:
    assert conjugate("べんきょうする", "godan", Form.TE) == "べんきょうして"
    assert conjugate("勉強する", VerbGroup.GROUP_II, Form.MASU) == "勉強します"
    assert conjugate("持ってくる", "I", Form.NAI) == "持ってこない"
    # Real godan verbs ending in する are untouched
    assert conjugate("こする", "godan", Form.TE) == "こすって"
    # 出来る is an ordinary ichidan verb, not a 来る compound
    assert conjugation.infer_verb_group("出来る") is VerbGroup.GROUP_II
