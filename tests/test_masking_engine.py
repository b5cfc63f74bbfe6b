"""
Unit-tests for app.services.masking_engine – pure text in, text out.
"""
import pytest

from app.errors import MaskingFailedError, ValidationError
from app.services import masking_engine
from app.services.masking_engine import MaskingService, mask

SQL = ("SELECT", "FROM", "WHERE")


# --------------------------------------------------------------------------- #
# matching semantics                                                          #
# --------------------------------------------------------------------------- #
def test_masks_sql_keywords():
    assert (
        mask("SELECT * FROM users WHERE id = 1", SQL)
        == "****** * **** users ***** id = 1"
    )


def test_case_insensitive():
    assert mask("select * from users", ("SELECT", "FROM")) == "****** * **** users"


def test_mixed_case_match_keeps_length():
    assert mask("SeLeCt it", ("SELECT",)) == "****** it"


def test_asterisk_between_tokens_is_a_boundary():
    # "*" is not a word character, so both keywords stand alone
    assert mask("SELECT*FROM users", ("SELECT", "FROM")) == "*********** users"


def test_embedded_substring_untouched():
    assert mask("selection", ("SELECT",)) == "selection"


def test_underscore_and_digits_are_word_chars():
    assert mask("my_select select2 select", ("SELECT",)) == "my_select select2 ******"


@pytest.mark.parametrize("text", ["", "   ", "plain text", "SELECT * FROM x"])
def test_empty_dictionary_is_noop(text):
    assert mask(text, ()) == text


def test_empty_input_is_valid():
    assert mask("", ("SELECT",)) == ""


def test_every_occurrence_masked():
    assert mask("from a, FROM b; From c", ("FROM",)) == "**** a, **** b; **** c"


def test_case_folding_is_ascii_only():
    # long s and Kelvin sign fold to S and K under Unicode rules
    assert mask("\u017fecret", ("SECRET",)) == "\u017fecret"
    assert mask("\u212aey key", ("KEY",)) == "\u212aey ***"


def test_surrounded_by_punctuation():
    assert mask("(secret)", ("SECRET",)) == "(******)"


def test_longer_keyword_first():
    # "A*" also matches here (boundary between "*" and "B"), so order matters
    assert mask("x A*B y", ("A*", "A*B")) == "x *** y"
    assert mask("x A*B y", ("A*",)) == "x **B y"


def test_remasking_is_noop():
    once = mask("SELECT * FROM users WHERE id = 1", SQL)
    assert mask(once, SQL) == once


def test_surrounding_text_preserved():
    text = "  Tabs\tand\nnewlines FROM here  "
    assert mask(text, ("FROM",)) == "  Tabs\tand\nnewlines **** here  "


def test_empty_keyword_ignored():
    assert mask("a b", ("",)) == "a b"


# --------------------------------------------------------------------------- #
# validation & failures                                                       #
# --------------------------------------------------------------------------- #
def test_null_input_rejected():
    with pytest.raises(ValidationError):
        mask(None, SQL)


def test_oversize_input_rejected():
    with pytest.raises(ValidationError):
        mask("a" * 10_001, SQL)


def test_max_size_input_accepted():
    text = "a" * 10_000
    assert mask(text, SQL) == text


def test_null_input_rejected_even_without_keywords():
    with pytest.raises(ValidationError):
        mask(None, ())


def test_internal_fault_wrapped(monkeypatch):
    def boom(_keyword):
        raise RuntimeError("regex exploded")

    monkeypatch.setattr(masking_engine, "whole_word", boom)
    with pytest.raises(MaskingFailedError) as info:
        mask("SELECT", ("SELECT",))
    assert isinstance(info.value.cause, RuntimeError)
    assert info.value.__cause__ is info.value.cause


# --------------------------------------------------------------------------- #
# service over a store                                                        #
# --------------------------------------------------------------------------- #
def test_service_reads_current_snapshot(store):
    service = MaskingService(store)
    assert service.mask("drop table") == "drop table"

    store.create("drop")
    assert service.mask("drop table") == "**** table"


def test_service_mask_document(sql_store):
    service = MaskingService(sql_store)
    out = service.mask_document("query.txt", b"select name from t")
    assert out == "****** name **** t"


def test_service_mask_document_oversize(sql_store):
    service = MaskingService(sql_store)
    with pytest.raises(ValidationError):
        service.mask_document("big.txt", b"x" * 10_001)
