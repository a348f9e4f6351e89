"""Backing store contract: category-partitioned key-value records"""

from abc import ABC, abstractmethod


class ContentStore(ABC):
    """Maps (category, slug) to a raw record (metadata block + body)."""

    @abstractmethod
    def list_categories(self) -> list[str]:
        """Category identifiers in store-defined order."""
        raise NotImplementedError

    @abstractmethod
    def list_slugs(self, category: str) -> list[str]:
        """Slugs within category; empty when the category has no entries."""
        raise NotImplementedError

    @abstractmethod
    def get(self, category: str, slug: str) -> str:
        """Raw record text. Raises NotFound when absent, InvalidFrontmatter when undecodable."""
        raise NotImplementedError
