"""Answer-format validation gate."""

import pytest

from nazorun.validation import (
    AnswerFormat,
    is_submittable,
    parse_format,
    placeholder,
    validation_message,
)


@pytest.mark.parametrize("text", ["", "   ", "\n"])
def test_blank_never_submittable(text):
    assert not is_submittable(text, [])
    assert not is_submittable(text, ["文字列"])
    assert not is_submittable(text, ["数字"])


def test_number_format():
    assert is_submittable("42", ["数字"])
    assert is_submittable(" 42 ", ["数字"])
    assert not is_submittable("4.2", ["数字"])
    assert not is_submittable("四十二", ["数字"])
    assert not is_submittable("-1", ["数字"])


def test_hiragana_format():
    assert is_submittable("なぞとき", ["ひらがな"])
    assert is_submittable("すいか ばたけ", ["ひらがな"])
    assert not is_submittable("ナゾトキ", ["ひらがな"])
    assert not is_submittable("謎", ["ひらがな"])


def test_katakana_format():
    assert is_submittable("カギ", ["カタカナ"])
    assert is_submittable("ルーム", ["カタカナ"])
    assert not is_submittable("かぎ", ["カタカナ"])


def test_english_format():
    assert is_submittable("Hexagon", ["英語"])
    assert not is_submittable("hex4gon", ["英語"])


def test_multi_tag_formats_only_require_content():
    assert is_submittable("ナゾトキ", ["ひらがな", "カタカナ"])
    assert is_submittable("なぞ解き", ["ひらがな", "カタカナ"])


@pytest.mark.parametrize("tags", [["漢字"], ["文字列"], ["unknown"], []])
def test_unconstrained_tags(tags):
    assert is_submittable("anything 123 謎", tags)


def test_parse_format():
    assert parse_format("数字") is AnswerFormat.NUMBER
    assert parse_format("nope") is None


def test_messages_and_placeholders():
    assert "Digits" in validation_message(["数字"])
    assert validation_message(["ひらがな", "カタカナ"]) == "Answer must not be empty"
    assert placeholder(["数字"]) == "e.g. 42"
    assert placeholder(["ひらがな", "カタカナ"]) == "Type your answer"
