"""Article records, validated frontmatter, and derived navigation models"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from mdwiki.core.utils.text import WORDS_PER_MINUTE, reading_time


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}"


class Category(str, Enum):
    """Top-level partitions of the content corpus"""
    background = "background"
    concepts = "concepts"
    ethereum = "ethereum"


class Difficulty(str, Enum):
    intro = "intro"
    intermediate = "intermediate"
    advanced = "advanced"


class Source(BaseModel):
    """A cited reference listed under an article."""
    model_config = ConfigDict(frozen=True)
    title: StrictStr = Field(..., min_length=1)
    url: StrictStr = Field(..., pattern=r"^https?://[^\s/$.?#][^\s]*$")
    author: Optional[StrictStr] = None


class Frontmatter(BaseModel):
    """Validated article metadata.

    Unknown keys are kept as extras so newer or legacy fields pass through.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    title:        StrictStr = Field(..., min_length=1)
    description:  Optional[StrictStr] = Field(default=None, min_length=10)
    category:     Optional[Category] = None
    subcategory:  Optional[list[StrictStr]] = None
    tags:         list[StrictStr] = Field(default_factory=list)
    difficulty:   Difficulty = Difficulty.intro
    parent:       Optional[StrictStr] = None              # slug of parent article, same category
    updated:      StrictStr = Field(..., pattern=DATE_PATTERN)
    reading_time: Optional[float] = Field(default=None, gt=0, alias="readingTime")
    sources:      Optional[list[Source]] = None
    related:      list[StrictStr] = Field(default_factory=list)   # 'slug' or 'category/slug'
    prerequisites: Optional[list[StrictStr]] = None
    hero:         Optional[StrictStr] = None
    infobox:      Optional[dict[StrictStr, StrictStr]] = None
    toc:          StrictBool = True

    # legacy wiki migration fields
    published:    Optional[StrictBool] = None
    date_created: Optional[StrictStr] = Field(default=None, alias="dateCreated")
    editor:       Optional[StrictStr] = None

    @field_validator("updated", "date_created", mode="before")
    @classmethod
    def _iso_date(cls, v: Any) -> Any:
        """YAML decodes bare dates natively; validate them as ISO strings."""
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v

    @field_validator("reading_time", mode="before")
    @classmethod
    def _number(cls, v: Any) -> Any:
        if isinstance(v, (bool, str)):
            raise ValueError("Input should be a number")
        return v

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def to_dict(self) -> dict[str, Any]:
        """Wire-format dict: aliased keys, defaults filled, absent optionals omitted."""
        data = self.model_dump(mode="json", by_alias=True)
        for name, field in type(self).model_fields.items():
            key = field.alias or name
            if name not in self.model_fields_set and data.get(key) is None:
                data.pop(key, None)
        return data


class PartialFrontmatter(Frontmatter):
    """Relaxed metadata for bulk migration: only title and category are required."""
    category: Category
    updated:  Optional[StrictStr] = Field(default=None, pattern=DATE_PATTERN)


class ArticleRecord(BaseModel):
    """One loaded article. (category, slug) is the primary key."""
    model_config = ConfigDict(frozen=True)
    category: str
    slug: str
    frontmatter: Frontmatter
    body: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return self.category, self.slug

    @property
    def path(self) -> str:
        return f"{self.category}/{self.slug}"

    @property
    def title(self) -> str:
        return self.frontmatter.title

    @property
    def tags(self) -> list[str]:
        return self.frontmatter.tags

    def reading_time(self, words_per_minute: int = WORDS_PER_MINUTE) -> float:
        """Declared readingTime, else estimated from the body word count."""
        if self.frontmatter.reading_time is not None:
            return self.frontmatter.reading_time
        return reading_time(self.body, words_per_minute)


class ArticleNode(BaseModel):
    """Navigation tree node; children already sorted by title."""
    model_config = ConfigDict(frozen=True)
    title: str
    slug: str
    difficulty: Difficulty
    children: tuple["ArticleNode", ...] = ()


class CategoryTree(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: str
    slug: str
    count: int
    articles: tuple[ArticleNode, ...] = ()


class TagInfo(BaseModel):
    tag: str
    count: int                      # distinct articles carrying the tag
    articles: list[ArticleRecord] = []


class RelatedTag(TagInfo):
    co_occurrence: int


class PrevNext(BaseModel):
    prev: Optional[ArticleRecord] = None
    next: Optional[ArticleRecord] = None


class SearchEntry(BaseModel):
    """Lightweight search projection; excludes the article body."""
    model_config = ConfigDict(populate_by_name=True)
    category: str
    slug: str
    title: str
    description: Optional[str] = None
    tags: list[str] = []
    difficulty: Optional[str] = None
    reading_time: Optional[float] = Field(default=None, alias="readingTime")
    updated: str
    headings: list[str] = []


class Breadcrumb(BaseModel):
    label: str
    path: str


class BrokenLink(BaseModel):
    category: str
    slug: str
    link: str


class GraphNode(BaseModel):
    id: str
    category: str
    slug: str
    title: str
    difficulty: str
    tags: list[str] = []


class GraphEdge(BaseModel):
    source: str
    target: str
    kind: str                       # 'parent' or 'related'


class ArticleGraph(BaseModel):
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
