"""Tests for the local keyword enhancement rewrite."""

from resume_studio.domain.keyword_enhancer import ENHANCEMENT_KEYWORDS, SUGGESTED_KEYWORD_COUNT, enhance_text


def test_rewrites_each_sentence():
    result = enhance_text("Managed a team of 5. Developed APIs! Worked with designers")
    assert result.text == (
        "Strategically managed a team of 5. Innovatively developed APIs. Collaborated with designers."
    )
    assert result.keywords[:3] == ["strategic", "innovative", "collaborative"]
    assert len(result.keywords) == SUGGESTED_KEYWORD_COUNT
    assert len(set(result.keywords)) == len(result.keywords)
    assert result.source == "local"


def test_sentence_with_keyword_is_left_alone():
    result = enhance_text("Strategic leader who manages budgets.")
    assert result.text == "Strategic leader who manages budgets."
    assert result.keywords == ENHANCEMENT_KEYWORDS[:SUGGESTED_KEYWORD_COUNT]


def test_longer_words_are_not_rewritten():
    assert enhance_text("Led project management").text == "Led project management."


def test_blank_text():
    result = enhance_text("  ...  ")
    assert result.text == ""
    assert result.keywords == []
