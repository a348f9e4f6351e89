"""Filesystem store: one directory per category, one .mdx/.md file per article"""

from pathlib import Path

from mdwiki.core.errors import InvalidFrontmatter, NotFound, Violation
from mdwiki.store.base import ContentStore


MD_EXTENSIONS = ('.mdx', '.md')


class FileSystemStore(ContentStore):
    def __init__(self, root: Path | str, extensions: tuple[str, ...] = MD_EXTENSIONS):
        self.root = Path(root)
        self.extensions = extensions

    def __repr__(self) -> str:
        return f"FileSystemStore({str(self.root)!r})"

    def list_categories(self) -> list[str]:
        """Alphabetical subdirectory names; hidden directories are skipped."""
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir() and not p.name.startswith('.'))

    def list_slugs(self, category: str) -> list[str]:
        """Sorted file stems; a stem present under several extensions is listed once."""
        path = self.root / category
        if not path.is_dir():
            return []
        stems = (p.stem for p in sorted(path.iterdir()) if p.is_file() and p.suffix in self.extensions)
        return list(dict.fromkeys(stems))

    def _find(self, category: str, slug: str) -> Path | None:
        if '/' in slug or '\\' in slug or slug.startswith('.'):
            return None
        for ext in self.extensions:
            p = self.root / category / f"{slug}{ext}"
            if p.is_file():
                return p
        return None

    def get(self, category: str, slug: str) -> str:
        path = self._find(category, slug)
        if path is None:
            raise NotFound(category, slug)
        try:
            return path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise InvalidFrontmatter(f"{category}/{slug}", [Violation("<record>", "encoding", f"Not valid UTF-8: {e}")]) from e
