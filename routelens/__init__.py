import os

from routelens.context import AnalysisContext
from routelens.ingestion.extractor import extract_routes
from routelens.ingestion.loader import load_source_graph
from routelens.ingestion.prefixes import collect_route_prefixes
from routelens.models import BranchDetail, RoutePrefix, RouteResult, routes_to_json


def analyze_routes(entry_path: str, ctx: AnalysisContext = None) -> list[RouteResult]:
    """
    Statically analyze the Express app whose entry file is `entry_path`.

    Loads every file the entry reaches through relative imports, collects
    app.use() prefixes across them, then finds and analyzes each route in
    file order. Raises FileNotFoundError if the entry file doesn't exist;
    every other problem is logged and skipped.
    """
    if ctx is None:
        ctx = AnalysisContext()
    if not os.path.isfile(entry_path):
        raise FileNotFoundError(f"Entry file not found: {entry_path}")

    ctx.logger.info(f"Loading source graph from: {entry_path}")
    files = load_source_graph(entry_path, ctx)
    ctx.logger.info(f"Parsed {len(files)} files")

    prefixes = collect_route_prefixes(files, ctx)
    ctx.logger.info(f"Found {len(prefixes)} route prefixes")

    results = []
    for parsed in files:
        routes = extract_routes(parsed, prefixes, ctx)
        if routes:
            ctx.logger.debug(f"{parsed.path}: {len(routes)} routes")
        results.extend(routes)

    ctx.logger.info(f"Extracted {len(results)} routes")
    for r in results:
        ctx.logger.debug(f"  {r.method} {r.path} | branches: {list(r.branches)}")
    return results


__all__ = [
    'AnalysisContext',
    'BranchDetail',
    'RoutePrefix',
    'RouteResult',
    'analyze_routes',
    'routes_to_json',
]
