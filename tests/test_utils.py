"""Tests for the note formatter and the speech helpers."""

from breathmarks.utils import (
    ChineseTextFormatter,
    extract_title,
    format_chinese_text,
    split_for_speech,
    spoken_form,
)


class TestChineseTextFormatter:
    """Tests for note formatting."""

    def test_ascii_comma_between_han(self):
        """Test that ASCII punctuation next to Han characters becomes Chinese."""
        assert format_chinese_text("你好,世界") == "你好，世界。"

    def test_full_width_comma_kept(self):
        """Test that full-width punctuation survives the half-width round trip."""
        assert format_chinese_text("你好，世界") == "你好，世界。"

    def test_full_width_letters_and_digits(self):
        """Test folding full-width letters, digits and spaces."""
        assert format_chinese_text("ＡＢＣ　１２３") == "ABC 123。"

    def test_spaces_next_to_han_removed(self):
        """Test that spaces around Han characters are dropped."""
        assert format_chinese_text("你 好") == "你好。"
        assert format_chinese_text("hello world") == "hello world。"

    def test_blank_lines_removed(self):
        """Test that blank lines disappear and lines end with punctuation."""
        assert format_chinese_text("第一行\n\n  \n第二行！") == "第一行。\n第二行！"

    def test_empty_text(self):
        """Test that empty input stays empty."""
        assert format_chinese_text("") == ""

    def test_character_classes(self):
        """Test the character helpers."""
        assert ChineseTextFormatter.is_han("中")
        assert not ChineseTextFormatter.is_han("a")
        assert not ChineseTextFormatter.is_han("")
        assert ChineseTextFormatter.is_punctuation("，")
        assert ChineseTextFormatter.should_keep_space("a", "1")
        assert not ChineseTextFormatter.should_keep_space("1", "2")


class TestSpeech:
    """Tests for the speech helpers."""

    def test_split_for_speech(self):
        """Test that empty segments are dropped."""
        assert split_for_speech("今天▼天气好。▼") == ["今天", "天气好。"]
        assert split_for_speech("▼") == []

    def test_spoken_form(self):
        """Test that punctuation right before a mark is removed."""
        assert spoken_form("今天，▼天气好。▼") == "今天▼天气好▼"
        assert spoken_form("苹果、香蕉▼") == "苹果、香蕉▼"


class TestExtractTitle:
    """Tests for default note titles."""

    def test_first_sentence(self):
        """Test that the title ends at the first sentence end."""
        assert extract_title("今天天气很好。我们去公园。") == "今天天气很好"
        assert extract_title("  你好吗？我很好") == "你好吗"
        assert extract_title("Hello. World") == "Hello"
        assert extract_title("第一行\n第二行。") == "第一行"

    def test_cut_to_max_length(self):
        """Test that long first sentences are cut."""
        text = "甲乙丙丁戊己庚辛壬癸子丑寅卯辰巳午未申酉戌亥。"
        assert extract_title(text) == "甲乙丙丁戊己庚辛壬癸子丑寅卯辰巳午未申酉"
        assert extract_title(text, max_length=5) == "甲乙丙丁戊"

    def test_default_title(self):
        """Test the fallback for a blank first sentence."""
        assert extract_title("。后面的内容") == "无标题"
        assert extract_title("   \n内容") == "无标题"
        assert extract_title("") == ""
