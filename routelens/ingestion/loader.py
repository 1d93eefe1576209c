# Loads the files an Express app is made of.
# Starting from the entry file it follows relative import/require specifiers,
# parses every JS/TS file it reaches and hands back the parsed files in
# dependency order. Anything that fails to read or parse is left out.

import os
import re

import esprima

from routelens.context import AnalysisContext
from routelens.ingestion.nodes import node_type, string_value, walk, identifier_name, key_name
from routelens.ingestion.ts_parser import parse_typescript
from routelens.models import ParsedFile

SHEBANG = re.compile(r'^#!.*\r?\n')
JS_EXTENSIONS = ('.js', '.mjs', '.cjs')
TS_EXTENSIONS = ('.ts', '.tsx')
SOURCE_EXTENSIONS = JS_EXTENSIONS + TS_EXTENSIONS


def parse_file(path: str, ctx: AnalysisContext):
    """
    Read and parse one file, memoized per absolute path.
    Returns a ParsedFile, or None if the file can't be read or parsed.
    """
    path = os.path.abspath(path)
    if path in ctx.parse_cache:
        return ctx.parse_cache[path]

    parsed = None
    try:
        with open(path, 'r', encoding='utf-8', errors='ignore') as f:
            source = f.read()
    except OSError as e:
        ctx.logger.debug(f"Skipping unreadable file {path}: {e}")
    else:
        parsed = _parse_source(path, SHEBANG.sub('', source, count=1), ctx)

    ctx.parse_cache[path] = parsed
    return parsed


def _parse_source(path: str, source: str, ctx: AnalysisContext):
    ext = os.path.splitext(path)[1].lower()

    if ext in TS_EXTENSIONS:
        try:
            ast = parse_typescript(source, tsx=(ext == '.tsx'))
        except Exception as e:
            ctx.logger.warning(f"Skipping {path}: {e}")
            return None
        return ParsedFile(path, source, ast, 'ts')

    for parse in (esprima.parseModule, esprima.parseScript):
        try:
            return ParsedFile(path, source, parse(source, tolerant=True, range=True), 'js')
        except Exception:
            continue

    # esprima stops at ES2017; retry newer syntax with tree-sitter
    try:
        ast = parse_typescript(source, tsx=True)
    except Exception as e:
        ctx.logger.warning(f"Skipping {path}: {e}")
        return None
    ctx.logger.debug(f"Parsed {path} with the TypeScript front end")
    return ParsedFile(path, source, ast, 'js')


# ─────────────────────────────────────────────
# Module resolution
# ─────────────────────────────────────────────

def collect_specifiers(parsed: ParsedFile) -> list[str]:
    """All static module specifiers of a file, in source order."""
    specifiers = []

    def visitor(node, ancestors):
        kind = node_type(node)
        source = None
        if kind in ('ImportDeclaration', 'ExportNamedDeclaration', 'ExportAllDeclaration'):
            source = getattr(node, 'source', None)
        elif kind == 'ImportExpression':
            source = node.source
        elif kind == 'CallExpression':
            callee = node.callee
            if identifier_name(callee) == 'require' or node_type(callee) == 'Import':
                args = node.arguments or []
                source = args[0] if args else None
        value = string_value(source) if source is not None else None
        if value and value not in specifiers:
            specifiers.append(value)

    walk(parsed.ast, visitor)
    return specifiers


def resolve_module(specifier: str, from_file: str, ctx: AnalysisContext):
    """
    Resolve a relative specifier the way Node/TypeScript would.
    Bare package names are never followed.
    """
    if not specifier.startswith(('.', '/')):
        return None

    base = os.path.normpath(os.path.join(os.path.dirname(from_file), specifier))
    candidates = []
    if base.endswith(SOURCE_EXTENSIONS):
        candidates.append(base)
    candidates.extend(base + ext for ext in ctx.extensions)
    candidates.extend(os.path.join(base, 'index' + ext) for ext in ctx.extensions)
    if base.endswith('.js'):
        # ESM-style TypeScript imports name the compiled .js file
        candidates.extend([base[:-3] + '.ts', base[:-3] + '.tsx'])

    for candidate in candidates:
        if os.path.isfile(candidate) and not ctx.is_excluded(candidate):
            return os.path.abspath(candidate)
    return None


def import_bindings(parsed: ParsedFile) -> dict:
    """
    Map each imported local name to (specifier, imported_name).

    imported_name is 'default' for default imports and '*' for namespace
    imports or whole-module require() calls.
    """
    bindings = {}

    def bind(local, specifier, imported):
        if local and specifier and local not in bindings:
            bindings[local] = (specifier, imported)

    def visitor(node, ancestors):
        kind = node_type(node)
        if kind == 'ImportDeclaration':
            specifier = string_value(node.source)
            for spec in node.specifiers or []:
                local = identifier_name(spec.local)
                spec_kind = node_type(spec)
                if spec_kind == 'ImportSpecifier':
                    bind(local, specifier, identifier_name(spec.imported) or local)
                elif spec_kind == 'ImportDefaultSpecifier':
                    bind(local, specifier, 'default')
                elif spec_kind == 'ImportNamespaceSpecifier':
                    bind(local, specifier, '*')
        elif kind == 'VariableDeclarator' and node.init is not None:
            specifier, member = _required_module(node.init)
            if specifier is None:
                return
            if node_type(node.id) == 'Identifier':
                bind(node.id.name, specifier, member or '*')
            elif node_type(node.id) == 'ObjectPattern' and member is None:
                for prop in node.id.properties or []:
                    if node_type(prop) != 'Property':
                        continue
                    imported = key_name(prop.key, getattr(prop, 'computed', False))
                    value = prop.value
                    if node_type(value) == 'AssignmentPattern':
                        value = value.left
                    bind(identifier_name(value), specifier, imported)

    walk(parsed.ast, visitor)
    return bindings


def _required_module(node):
    """require('x') -> ('x', None); require('x').y -> ('x', 'y'); otherwise (None, None)."""
    member = None
    if node_type(node) == 'MemberExpression' and not node.computed:
        member = identifier_name(node.property)
        node = node.object
    if node_type(node) == 'AwaitExpression':
        node = node.argument
    if node_type(node) != 'CallExpression' or identifier_name(node.callee) != 'require':
        return None, None
    args = node.arguments or []
    specifier = string_value(args[0]) if args else None
    if specifier is None:
        return None, None
    return specifier, member


def find_binding_module(name: str, parsed: ParsedFile, ctx: AnalysisContext):
    """
    Locate the file a local name is imported from.
    Returns (parsed_file, imported_name) or None.
    """
    binding = import_bindings(parsed).get(name)
    if binding is None:
        return None
    specifier, imported = binding
    target = resolve_module(specifier, parsed.path, ctx)
    if target is None:
        return None
    target_parsed = parse_file(target, ctx)
    if target_parsed is None:
        return None
    return target_parsed, imported


# ─────────────────────────────────────────────
# Source graph
# ─────────────────────────────────────────────

def load_source_graph(entry_path: str, ctx: AnalysisContext) -> list[ParsedFile]:
    """
    Parse the entry file and everything it reaches through relative
    imports, depth-first, entry first. Each file appears once.
    """
    ordered = []
    seen = set()

    def visit(path):
        if path in seen:
            return
        seen.add(path)
        if ctx.is_excluded(path) or not path.endswith(SOURCE_EXTENSIONS):
            return
        parsed = parse_file(path, ctx)
        if parsed is None:
            return
        ordered.append(parsed)
        for specifier in collect_specifiers(parsed):
            target = resolve_module(specifier, path, ctx)
            if target is not None:
                visit(target)

    visit(os.path.abspath(entry_path))
    ctx.logger.debug(f"Source graph: {[p.path for p in ordered]}")
    return ordered
