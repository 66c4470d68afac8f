"""Text normalization utilities for Chinese notes."""

import re
import logging

logger = logging.getLogger(__name__)


class ChineseTextFormatter:
    """Tidy up pasted Chinese text before it is marked."""

    HAN_PATTERN = re.compile(r'[\u4e00-\u9fa5]')
    LETTER_PATTERN = re.compile(r'[a-zA-Z]')
    DIGIT_PATTERN = re.compile(r'[0-9]')

    PUNCTUATION = frozenset(
        '，。！？；：“”‘’（）【】《》、…—'
        ',.!?;:"\'()[]<>/-~`·@#$%^&*_+=|\\'
    )

    # Full-width forms folded to ASCII; 。、…— have no ASCII twin and stay
    FULL_TO_HALF = {
        '，': ',', '．': '.', '？': '?', '！': '!',
        '；': ';', '：': ':', '＂': '"', '＇': "'",
        '（': '(', '）': ')', '［': '[', '］': ']',
        '＜': '<', '＞': '>', '／': '/', '－': '-',
        '～': '~', '｀': '`', '＠': '@', '＃': '#',
        '＄': '$', '％': '%', '＾': '^', '＆': '&',
        '＊': '*', '＿': '_', '＋': '+', '＝': '=',
        '｜': '|', '＼': '\\', '　': ' ',
    }
    # Full-width digits and Latin letters
    FULL_TO_HALF.update({chr(c): chr(c - 0xFEE0) for c in range(0xFF10, 0xFF1A)})
    FULL_TO_HALF.update({chr(c): chr(c - 0xFEE0) for c in range(0xFF21, 0xFF3B)})
    FULL_TO_HALF.update({chr(c): chr(c - 0xFEE0) for c in range(0xFF41, 0xFF5B)})

    # ASCII punctuation next to Han characters (quotes are left alone)
    HALF_TO_CHINESE = {
        ',': '，', '.': '。', '?': '？', '!': '！',
        ';': '；', ':': '：',
        '(': '（', ')': '）', '[': '【', ']': '】',
        '<': '《', '>': '》', '/': '、', '-': '—',
        '~': '～', '`': '｀', '@': '＠', '#': '＃',
        '$': '＄', '%': '％', '^': '＾', '&': '＆',
        '*': '＊', '_': '＿', '+': '＋', '=': '＝',
        '|': '｜', '\\': '＼',
    }

    @classmethod
    def is_han(cls, char: str) -> bool:
        return bool(char) and bool(cls.HAN_PATTERN.fullmatch(char))

    @classmethod
    def is_punctuation(cls, char: str) -> bool:
        return char in cls.PUNCTUATION

    @classmethod
    def should_keep_space(cls, prev: str, next_char: str) -> bool:
        """Spaces only survive between letters, or between letters and digits."""
        if not prev or not next_char:
            return False
        if cls.is_han(prev) or cls.is_han(next_char):
            return False
        prev_letter = bool(cls.LETTER_PATTERN.fullmatch(prev))
        next_letter = bool(cls.LETTER_PATTERN.fullmatch(next_char))
        prev_digit = bool(cls.DIGIT_PATTERN.fullmatch(prev))
        next_digit = bool(cls.DIGIT_PATTERN.fullmatch(next_char))
        if prev_letter and next_letter:
            return True
        return (prev_letter and next_digit) or (prev_digit and next_letter)

    @classmethod
    def to_half_width(cls, text: str) -> str:
        return ''.join(cls.FULL_TO_HALF.get(char, char) for char in text)

    @classmethod
    def convert_punctuation_between_han(cls, text: str) -> str:
        """Turn ASCII punctuation touching a Han character into Chinese punctuation."""
        result = []
        for i, char in enumerate(text):
            prev_char = text[i - 1] if i > 0 else ''
            next_char = text[i + 1] if i < len(text) - 1 else ''
            if (
                char in cls.HALF_TO_CHINESE
                and (cls.is_han(prev_char) or cls.is_han(next_char))
            ):
                result.append(cls.HALF_TO_CHINESE[char])
            else:
                result.append(char)
        return ''.join(result)

    @classmethod
    def clean_line(cls, line: str) -> str:
        """Drop superfluous spaces and make sure the line ends with punctuation."""
        line = line.strip()
        if not line:
            return ''

        result = []
        in_space = False
        for i, char in enumerate(line):
            if char != ' ':
                result.append(char)
                in_space = False
                continue

            prev_char = line[i - 1] if i > 0 else ''
            next_char = line[i + 1] if i < len(line) - 1 else ''
            if cls.is_han(prev_char) or cls.is_punctuation(prev_char):
                in_space = False
                continue
            if cls.is_han(next_char) or cls.is_punctuation(next_char):
                in_space = False
                continue
            if cls.should_keep_space(prev_char, next_char) and not in_space:
                result.append(' ')
                in_space = True

        if result and not cls.is_punctuation(result[-1]):
            result.append('。')
        return ''.join(result)

    @classmethod
    def format_text(cls, text: str) -> str:
        """
        Format a note the way the editor's format mode does.

        1. Fold full-width characters to half-width
        2. Restore Chinese punctuation next to Han characters
        3. Keep spaces only between letters and digits
        4. Remove blank lines
        5. End every line with punctuation

        Args:
            text: Raw note text

        Returns:
            Formatted text
        """
        if not text:
            return ''

        formatted = cls.to_half_width(text)
        formatted = cls.convert_punctuation_between_han(formatted)

        lines = [cls.clean_line(line) for line in formatted.split('\n')]
        return '\n'.join(line for line in lines if line)


def format_chinese_text(text: str) -> str:
    """
    Convenience function for formatting Chinese note text.

    Args:
        text: Input text

    Returns:
        Formatted text
    """
    return ChineseTextFormatter.format_text(text)
