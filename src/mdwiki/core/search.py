"""Search index: lightweight per-article projection for client-side fuzzy search"""

import json
import logging
from pathlib import Path

from mdwiki.core.models import ArticleRecord, SearchEntry
from mdwiki.core.parse import extract_headings
from mdwiki.core.repository import ContentRepository
from mdwiki.core.utils.text import WORDS_PER_MINUTE


logger = logging.getLogger(__name__)

INDEX_FILE = "search-index.json"


def build_entry(record: ArticleRecord, max_headings: int = 10, words_per_minute: int = WORDS_PER_MINUTE) -> SearchEntry:
    """Project one article; headings are h2-h4 only, capped at max_headings (0 = no cap)."""
    fm = record.frontmatter
    minutes = record.reading_time(words_per_minute)
    return SearchEntry(
        category=record.category,
        slug=record.slug,
        title=fm.title,
        description=fm.description,
        tags=list(fm.tags),
        difficulty=fm.difficulty.value,
        reading_time=minutes or None,
        updated=fm.updated,
        headings=extract_headings(record.body, 2, 4, max_headings),
    )


def build_search_index(
    repo: ContentRepository,
    max_headings: int = 10,
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> list[SearchEntry]:
    """One entry per loadable article, in corpus discovery order."""
    return [build_entry(r, max_headings, words_per_minute) for r in repo.load_all()]


def dump_search_index(entries: list[SearchEntry]) -> str:
    """Compact JSON array; absent optional fields are omitted."""
    payload = [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in entries]
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def write_search_index(entries: list[SearchEntry], output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / INDEX_FILE
    text = dump_search_index(entries)
    path.write_text(text, encoding="utf-8")
    logger.info("search index written: %s (%d entries, %.2f KB)", path, len(entries), len(text) / 1024)
    return path
