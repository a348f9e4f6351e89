"""Root test configuration: sample corpus fixtures and session-level cleanup"""

import shutil
from pathlib import Path

import pytest
import yaml

from mdwiki.core.repository import ContentRepository
from mdwiki.store.memory import MemoryStore


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["mdwiki.db", "test.db"]
_CLEANUP_DIRS = ["public"]


HASHING_BODY = """\
# Hashing

A hash function maps data of any size to a fixed-size digest.

## Properties

Hashes are deterministic. See [Merkle trees](/concepts/merkle-trees) and
[a page that moved](/concepts/gone#intro) or [the spec](https://example.com/hash).

### Collision resistance

Finding two inputs with the same digest is hard.

##### Too deep to index

```
## not a heading inside a fence
```
"""

ACCOUNTS_BODY = """\
# Accounts

Ethereum accounts hold [money](/background/money) and are tagged [crypto](/tags/crypto).

## Externally owned accounts

Controlled by private keys.
"""


def make_raw(frontmatter: dict, body: str = "Body text.\n") -> str:
    """Render a record the way authors write them: YAML header then markdown."""
    return "---\n" + yaml.safe_dump(frontmatter, sort_keys=False) + "---\n\n" + body


# (category, slug, frontmatter, body), alphabetical like the filesystem store lists them
CORPUS = [
    ("background", "banking", {
        "title": "Banking", "updated": "2024-02-01", "tags": ["economics"], "parent": "money",
    }, "# Banking\n\nBanks lend.\n"),
    ("background", "money", {
        "title": "Money", "updated": "2024-03-01", "tags": ["economics", "history"],
        "description": "Where money comes from.",
    }, "# Money\n\n## Origins\n\nBarter came first.\n"),
    ("concepts", "broken", {
        "updated": "2024-01-01", "tags": ["crypto"],
    }, "# Missing title\n"),
    ("concepts", "hashing", {
        "title": "Hashing", "updated": "2024-01-10", "tags": ["crypto", "basics"],
        "description": "One-way functions and digests.",
    }, HASHING_BODY),
    ("concepts", "merkle-trees", {
        "title": "Merkle Trees", "updated": "2024-01-20", "tags": ["crypto", "data-structures"],
        "parent": "hashing", "related": ["signatures"], "difficulty": "intermediate",
    }, "# Merkle Trees\n\n## Structure\n\nA tree of hashes.\n"),
    ("concepts", "signatures", {
        "title": "Digital Signatures", "updated": "2024-01-15", "tags": ["crypto"],
        "related": ["ethereum/accounts", "does-not-exist", "signatures"],
    }, "# Digital Signatures\n\nSign and verify.\n"),
    ("concepts", "zk-proofs", {
        "title": "Zero Knowledge Proofs", "updated": "2024-01-05", "tags": ["crypto", "basics", "advanced"],
        "parent": "nonexistent", "difficulty": "advanced", "readingTime": 12,
    }, "# Zero Knowledge Proofs\n\nProve without revealing.\n"),
    ("ethereum", "accounts", {
        "title": "Accounts", "updated": "2024-04-01", "tags": ["basics", "crypto"],
        "related": ["money"], "prerequisites": ["hashing", "ghost"],
    }, ACCOUNTS_BODY),
]

VALID_KEYS = [
    ("background", "banking"), ("background", "money"),
    ("concepts", "hashing"), ("concepts", "merkle-trees"), ("concepts", "signatures"), ("concepts", "zk-proofs"),
    ("ethereum", "accounts"),
]


@pytest.fixture(name="store")
def store_fixture() -> MemoryStore:
    """MemoryStore holding the sample corpus."""
    store = MemoryStore()
    for category, slug, fm, body in CORPUS:
        store.put(category, slug, make_raw(fm, body))
    return store


@pytest.fixture(name="repo")
def repo_fixture(store) -> ContentRepository:
    return ContentRepository(store)


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path) -> Path:
    """The sample corpus written as content/<category>/<slug>.mdx."""
    root = tmp_path / "content"
    for category, slug, fm, body in CORPUS:
        (root / category).mkdir(parents=True, exist_ok=True)
        (root / category / f"{slug}.mdx").write_text(make_raw(fm, body), encoding="utf-8")
    return root


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and output directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="raw")
def raw_fixture():
    """Factory rendering (frontmatter, body) into raw record text."""
    return make_raw
