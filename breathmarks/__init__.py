"""Breath-mark insertion for Chinese read-along practice."""

from .config import Config
from .dictionary import CATEGORY_IDS, DictionaryService, Lexicon
from .pipeline import BreathMarkPipeline, mark_text

__version__ = "0.1.0"

__all__ = [
    "BreathMarkPipeline",
    "CATEGORY_IDS",
    "Config",
    "DictionaryService",
    "Lexicon",
    "mark_text",
]
