"""Shared fixtures: a small, explicit dictionary."""

from pathlib import Path

import pytest

from breathmarks.data.store import MemoryStore
from breathmarks.dictionary import DictionaryService, Lexicon

FIXTURE_WORDS = {
    "proper": ["北京大学", "粤港澳大湾区", "德、智、体"],
    "pause_proper": ["投、编、评"],
    "no_split_before": ["和", "在"],
    "no_split_after": ["的", "了"],
    "number": ["三", "五", "十"],
    "no_number_after": ["个", "年"],
    "no_number_before": ["第", "每"],
}


def write_dict_dir(path: Path, words: dict[str, list[str]]) -> Path:
    """Write one <category>.txt file per category."""
    path.mkdir(parents=True, exist_ok=True)
    for category, category_words in words.items():
        (path / f"{category}.txt").write_text("\n".join(category_words) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon(FIXTURE_WORDS)


@pytest.fixture
def dict_dir(tmp_path) -> Path:
    return write_dict_dir(tmp_path / "dict", FIXTURE_WORDS)


@pytest.fixture
def service(dict_dir) -> DictionaryService:
    return DictionaryService(store=MemoryStore(), default_dir=dict_dir)
