"""Utility functions."""

from .speech import split_for_speech, spoken_form
from .text_normalizer import ChineseTextFormatter, format_chinese_text
from .title import extract_title

__all__ = [
    "ChineseTextFormatter",
    "extract_title",
    "format_chinese_text",
    "split_for_speech",
    "spoken_form",
]
