"""Article graph for visualization: one node per article, parent and related edges"""

import json
from pathlib import Path

from mdwiki.core.models import ArticleGraph, GraphEdge, GraphNode
from mdwiki.core.relations import resolve_reference
from mdwiki.core.repository import ContentRepository


GRAPH_FILE = "graph.json"


def build_graph(repo: ContentRepository) -> ArticleGraph:
    """Nodes in corpus order; edges only for references that resolve, de-duplicated."""
    records = repo.load_all()
    nodes = [
        GraphNode(
            id=r.path,
            category=r.category,
            slug=r.slug,
            title=r.title,
            difficulty=r.frontmatter.difficulty.value,
            tags=list(r.tags),
        )
        for r in records
    ]

    edges: list[GraphEdge] = []
    seen: set[tuple[str, str, str]] = set()

    def _add(source: str, target: str, kind: str) -> None:
        if source != target and (source, target, kind) not in seen:
            seen.add((source, target, kind))
            edges.append(GraphEdge(source=source, target=target, kind=kind))

    for r in records:
        parent = r.frontmatter.parent
        if parent and repo.find(r.category, parent) is not None:
            _add(f"{r.category}/{parent}", r.path, "parent")
        for ref in r.frontmatter.related:
            target = resolve_reference(repo, ref, r.category)
            if target is not None:
                _add(r.path, target.path, "related")
    return ArticleGraph(nodes=nodes, edges=edges)


def write_graph(graph: ArticleGraph, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / GRAPH_FILE
    path.write_text(json.dumps(graph.model_dump(mode="json"), indent=2, ensure_ascii=False), encoding="utf-8")
    return path
