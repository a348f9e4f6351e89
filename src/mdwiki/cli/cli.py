"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdwiki.cli.commands import (
    breadcrumbs_cmd, db_import_cmd, graph_cmd, links_cmd, prev_next_cmd,
    related_cmd, search_index_cmd, tags_cmd, tree_cmd, validate_cmd,
)


app = typer.Typer(name="mdwiki", no_args_is_help=True, help="Article content engine: validation, navigation, and search index")

app.command(name="validate")(validate_cmd)
app.command(name="tree")(tree_cmd)
app.command(name="related")(related_cmd)
app.command(name="prev-next")(prev_next_cmd)
app.command(name="breadcrumbs")(breadcrumbs_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="search-index")(search_index_cmd)
app.command(name="graph")(graph_cmd)
app.command(name="links")(links_cmd)
app.command(name="db-import")(db_import_cmd)
