from dataclasses import dataclass, field

from mdwiki.core.errors import NotFound
from mdwiki.store.base import ContentStore


@dataclass
class MemoryStore(ContentStore):
    """Dict-backed store; categories and slugs keep insertion order."""
    _records: dict[str, dict[str, str]] = field(default_factory=dict)

    def put(self, category: str, slug: str, raw: str) -> None:
        self._records.setdefault(category, {})[slug] = raw

    def list_categories(self) -> list[str]:
        return list(self._records)

    def list_slugs(self, category: str) -> list[str]:
        return list(self._records.get(category, {}))

    def get(self, category: str, slug: str) -> str:
        try:
            return self._records[category][slug]
        except KeyError:
            raise NotFound(category, slug) from None
