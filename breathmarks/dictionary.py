"""Word dictionaries that steer where breath marks may be placed."""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional

from .config import DictionaryConfig
from .data.store import JsonFileStore, MemoryStore
from .models import PrefixMatch
from .stages.punctuation import PAUSE_MARK

logger = logging.getLogger(__name__)


# Category id -> (display name, description)
DICT_CATEGORIES = {
    "proper": ("专有词", "专有名词，如人名、地名等"),
    "pause_proper": ("顿号专有词", "含顿号的专有词，顿号处不拆，如“投、编、评”"),
    "no_split_before": ("之前不拆", "这些词之后不添加换气点，如“和”、“把”"),
    "no_split_after": ("之后不拆", "这些词之前不添加换气点，如“的”、“了”"),
    "number": ("数字", "能跟序数或量词接在一起的"),
    "no_number_after": ("数字后不拆", "这些词在数字后面不能添加换气点，如“个”、“只”等"),
    "no_number_before": ("数字前不拆", "这些词在数字前面不能添加换气点，如“第”、“每”等"),
}

CATEGORY_IDS = tuple(DICT_CATEGORIES)

DEFAULT_DICT_DIR = Path(__file__).parent / "data" / "dict"


def store_key(category: str) -> str:
    return f"dict_{category}"


def check_category(category: str) -> None:
    if category not in DICT_CATEGORIES:
        raise ValueError(f"Unknown dictionary category: {category}")


def unique_words(words: Iterable[str]) -> list[str]:
    """Strip entries, drop empty ones and duplicates, keep first-seen order."""
    seen = set()
    result = []
    for word in words:
        word = word.strip()
        if word and word not in seen:
            seen.add(word)
            result.append(word)
    return result


def expand_pause_variants(words: Iterable[str]) -> list[str]:
    """Register every entry containing 、 a second time without it.

    Proper nouns are entered inconsistently ("投、编、评" vs "投编评"), so
    both forms have to match.
    """
    expanded = []
    for word in words:
        expanded.append(word)
        if PAUSE_MARK in word:
            expanded.append(word.replace(PAUSE_MARK, ""))
    return unique_words(expanded)


def normalize_category(category: str, words: Iterable[str]) -> list[str]:
    if category == "proper":
        return expand_pause_variants(words)
    return unique_words(words)


def match_prefix_in(
    words: Iterable[str], text: str, pos: int = 0
) -> Optional[PrefixMatch]:
    """Match dictionary words, longest first, against text at pos.

    A word containing 、 that does not match literally is retried without
    its 、 characters; when both the text and the word start with 、, the
    stripped word is matched right after the text's leading 、.

    Args:
        words: Candidate dictionary words
        text: Text to match against
        pos: Offset in text where the match must start

    Returns:
        The first (longest) match, or None
    """
    for word in sorted(words, key=len, reverse=True):
        if text.startswith(word, pos):
            return PrefixMatch(word=word, length=len(word))
        if PAUSE_MARK not in word:
            continue
        stripped = word.replace(PAUSE_MARK, "")
        if not stripped:
            continue
        if text.startswith(stripped, pos):
            return PrefixMatch(word=word, length=len(stripped))
        if (
            text.startswith(PAUSE_MARK, pos)
            and word.startswith(PAUSE_MARK)
            and text.startswith(stripped, pos + 1)
        ):
            return PrefixMatch(word=word, length=len(stripped) + 1)
    return None


class Lexicon:
    """Read-only snapshot of every dictionary category.

    The marking stages only ever read from a lexicon, so one snapshot is
    fetched per document instead of awaiting the store at every lookup.
    """

    def __init__(self, categories: Optional[dict[str, Iterable[str]]] = None):
        categories = categories or {}
        for category in categories:
            check_category(category)
        self._words = {
            category: tuple(normalize_category(category, categories.get(category, ())))
            for category in CATEGORY_IDS
        }
        self._sets = {category: frozenset(words) for category, words in self._words.items()}
        union = unique_words(w for words in self._words.values() for w in words)
        self._by_length = tuple(sorted(union, key=len, reverse=True))

    @classmethod
    def empty(cls) -> "Lexicon":
        return cls()

    def words(self, category: str) -> tuple[str, ...]:
        check_category(category)
        return self._words[category]

    def contains(self, category: str, word: str) -> bool:
        check_category(category)
        return word in self._sets[category]

    def prefix_candidates(self, category: str) -> tuple[str, ...]:
        """Words tried by match_prefix; proper nouns include pause_proper."""
        if category in ("proper", "pause_proper"):
            return self._words["proper"] + self._words["pause_proper"]
        return self.words(category)

    def match_prefix(
        self, category: str, text: str, pos: int = 0
    ) -> Optional[PrefixMatch]:
        return match_prefix_in(self.prefix_candidates(category), text, pos)

    def longest_match(self, text: str, pos: int = 0) -> Optional[PrefixMatch]:
        """Longest word of any category starting at pos."""
        best = None
        for word in self._by_length:
            if text.startswith(word, pos):
                best = PrefixMatch(word=word, length=len(word))
                break
        # Proper nouns may also match with their 、 dropped
        proper = self.match_prefix("proper", text, pos)
        if proper is not None and (best is None or proper.length > best.length):
            best = proper
        return best

    def __len__(self) -> int:
        return sum(len(words) for words in self._words.values())


class DictionaryService:
    """Dictionary provider: packaged defaults plus user overrides.

    Default lists are read from ``<default_dir>/<category>.txt`` (one word
    per line) on first use and cached for the lifetime of the service. An
    override in the store, keyed ``dict_<category>``, replaces the default.
    """

    def __init__(
        self,
        store: Optional[MemoryStore] = None,
        default_dir: Optional[str | Path] = None,
    ):
        """Initialize dictionary service.

        Args:
            store: Override store (defaults to an empty in-memory store)
            default_dir: Directory holding the default word lists
        """
        self.store = store if store is not None else MemoryStore()
        self.default_dir = Path(default_dir) if default_dir else DEFAULT_DICT_DIR
        self._default_cache: dict[str, list[str]] = {}

    @classmethod
    def from_config(cls, config: DictionaryConfig) -> "DictionaryService":
        """Build a service from a DictionaryConfig."""
        store = JsonFileStore(config.override_path) if config.override_path else None
        return cls(store=store, default_dir=config.default_dir)

    def _read_default_file(self, category: str) -> list[str]:
        path = self.default_dir / f"{category}.txt"
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load default dictionary %s: %s", path, e)
            return []
        return text.splitlines()

    async def get_default(self, category: str) -> list[str]:
        """Return the packaged word list of a category."""
        check_category(category)
        cached = self._default_cache.get(category)
        if cached is None:
            # Concurrent first loads just read the same file twice
            words = await asyncio.to_thread(self._read_default_file, category)
            cached = normalize_category(category, words)
            self._default_cache[category] = cached
            logger.debug("Loaded %d default words for %s", len(cached), category)
        return list(cached)

    async def get(self, category: str) -> list[str]:
        """Return the effective word list of a category."""
        check_category(category)
        saved = self.store.get(store_key(category))
        if saved is None:
            return await self.get_default(category)
        if not isinstance(saved, list) or not all(isinstance(w, str) for w in saved):
            logger.warning("Ignoring malformed override for %s", category)
            return await self.get_default(category)
        return normalize_category(category, saved)

    async def contains(self, category: str, word: str) -> bool:
        return word in await self.get(category)

    async def match_prefix(self, category: str, text: str) -> Optional[PrefixMatch]:
        check_category(category)
        words = await self.get(category)
        if category in ("proper", "pause_proper"):
            other = "pause_proper" if category == "proper" else "proper"
            words = words + await self.get(other)
        return match_prefix_in(words, text)

    async def get_all(self) -> dict[str, list[str]]:
        lists = await asyncio.gather(*(self.get(c) for c in CATEGORY_IDS))
        return dict(zip(CATEGORY_IDS, lists))

    async def load_lexicon(self) -> Lexicon:
        """Fetch every category at once into a snapshot for the stages."""
        return Lexicon(await self.get_all())

    def save(self, category: str, words: Iterable[str]) -> None:
        check_category(category)
        self.store.set(store_key(category), unique_words(words))

    def reset(self, category: str) -> None:
        """Drop the override so the default list applies again."""
        check_category(category)
        self.store.remove(store_key(category))

    def reset_all(self) -> None:
        for category in CATEGORY_IDS:
            self.reset(category)
