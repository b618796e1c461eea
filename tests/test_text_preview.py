"""Tests for explainer preview and the expansion rule."""

import pytest

from utils.text_preview import is_expandable, preview_text, split_sentences


class TestSplitSentences:
    def test_keeps_terminators(self):
        assert split_sentences('Да! Нет? Может быть...') == ['Да!', 'Нет?', 'Может быть...']

    def test_trailing_fragment_is_not_a_sentence(self):
        assert split_sentences('Один. Два. хвост') == ['Один.', 'Два.']

    @pytest.mark.parametrize('text', [None, ''])
    def test_empty(self, text):
        assert split_sentences(text) == []


class TestPreviewText:
    def test_first_three_sentences(self):
        assert preview_text('A.B.C.D.') == 'A. B. C.'

    def test_first_three_sentences_with_spaces(self):
        assert preview_text('A. B. C. D.') == 'A. B. C.'

    def test_short_text_unchanged(self):
        assert preview_text('Одно предложение.') == 'Одно предложение.'

    def test_no_terminator_returns_raw_text(self):
        assert preview_text('без точки в конце') == 'без точки в конце'

    @pytest.mark.parametrize('text', [None, ''])
    def test_missing_text(self, text):
        assert preview_text(text) == ''


class TestIsExpandable:
    def test_three_sentences_not_expandable(self):
        assert is_expandable('Раз. Два. Три.') is False

    def test_four_sentences_expandable(self):
        assert is_expandable('Раз. Два. Три. Четыре.') is True

    def test_repeated_terminators_count_once(self):
        assert is_expandable('Ого!! Правда?? Да. Нет.') is True
        assert is_expandable('Ого!!! Правда???') is False

    @pytest.mark.parametrize('text', [None, '', 'без точки'])
    def test_missing_or_unterminated(self, text):
        assert is_expandable(text) is False


class TestNonStringExplainer:
    def test_number_is_treated_as_text(self):
        assert split_sentences(42) == []
        assert preview_text(42) == '42'
        assert is_expandable(42) is False

    def test_number_with_decimal_point(self):
        assert preview_text(3.5) == '3.'
