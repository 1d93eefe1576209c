from routelens.context import AnalysisContext
from routelens.ingestion.loader import find_binding_module
from routelens.ingestion.nodes import (
    identifier_name,
    is_function,
    key_name,
    member_parts,
    node_type,
    string_value,
    walk,
)
from routelens.ingestion.prefixes import build_full_path, collect_exported_routers, determine_route_prefix
from routelens.models import ParsedFile, RoutePrefix, RouteResult
from routelens.symbolic import analyze_handler

ROUTER_OBJECTS = {'app', 'router', 'server', 'express'}
HTTP_METHODS = {'get', 'post', 'put', 'delete', 'patch', 'all', 'use', 'head', 'options'}

# Path reported when the route path is not a literal string
DYNAMIC_PATH = '<dynamic>'

CLASS_TYPES = {'ClassDeclaration', 'ClassExpression'}


def extract_routes(parsed: ParsedFile, prefixes: list[RoutePrefix], ctx: AnalysisContext) -> list[RouteResult]:
    """Every route registered in one file, each with its analyzed handler."""
    exported = collect_exported_routers(parsed)
    results = []

    def visitor(node, ancestors):
        if node_type(node) == 'CallExpression':
            results.extend(analyze_route_definition(node, parsed, exported, prefixes, ctx))

    try:
        walk(parsed.ast, visitor)
    except RecursionError:
        ctx.logger.warning(f"Stopped early in {parsed.path}: nesting too deep to walk")

    return results


def analyze_route_definition(call, parsed: ParsedFile, exported: list[str],
                             prefixes: list[RoutePrefix], ctx: AnalysisContext) -> list[RouteResult]:
    """
    Handle one `<object>.<method>(path, ...handlers)` call.
    Returns one RouteResult per handler argument that resolves to a function.
    """
    callee = call.callee
    if node_type(callee) != 'MemberExpression' or getattr(callee, 'computed', False):
        return []

    obj = identifier_name(callee.object)
    prop = identifier_name(callee.property)
    if obj not in ROUTER_OBJECTS or prop not in HTTP_METHODS:
        return []

    args = call.arguments or []
    method = prop.upper()
    route_path = string_value(args[0]) if args else None
    if route_path is None:
        route_path = DYNAMIC_PATH

    prefix = determine_route_prefix(obj, parsed, exported, prefixes)
    full_path = build_full_path(prefix, route_path)

    results = []
    for arg in args[1:]:
        resolved = resolve_handler(arg, parsed, ctx)
        if resolved is None:
            continue
        function, defining = resolved
        ctx.logger.debug(f"  {method} {full_path} -> handler in {defining.path}")
        results.append(analyze_handler(function, defining, method, full_path, ctx))

    return results


# ─────────────────────────────────────────────
# Handler resolution
# ─────────────────────────────────────────────

def resolve_handler(node, parsed: ParsedFile, ctx: AnalysisContext, visited: set = None):
    """
    Resolve a handler argument to (function_node, defining_file), or None.

    Inline functions are used as-is. Identifiers and `controller.method`
    references are looked up in the file, then through its imports.
    """
    if visited is None:
        visited = set()

    if is_function(node):
        return node, parsed

    name = identifier_name(node)
    if name is not None:
        return find_function_definition(name, parsed, ctx, visited)

    parts = member_parts(node)
    if parts and len(parts) == 2:
        return find_member_function(parts[0], parts[1], parsed, ctx, visited)

    return None


def find_function_definition(name: str, parsed: ParsedFile, ctx: AnalysisContext, visited: set):
    key = (parsed.path, name)
    if key in visited:
        return None
    visited.add(key)

    # (a) function declaration or function-valued variable
    func = _local_function(name, parsed.ast)
    # (b) method of an object literal
    if func is None:
        func = _object_literal_method(name, parsed.ast)
    if func is None:
        exported = _commonjs_export(name, parsed.ast)
        if is_function(exported):
            func = exported
        elif identifier_name(exported) not in (None, name):
            return find_function_definition(exported.name, parsed, ctx, visited)
    if func is not None:
        return func, parsed

    # (c) export { local as name }
    local = _export_alias(name, parsed.ast)
    if local is not None:
        return find_function_definition(local, parsed, ctx, visited)

    # (d) follow the import of `name`
    found = find_binding_module(name, parsed, ctx)
    if found is None:
        return None
    target, imported = found
    if imported in ('default', '*'):
        return _default_export_function(target, ctx, visited)
    return find_function_definition(imported, target, ctx, visited)


def find_member_function(obj: str, prop: str, parsed: ParsedFile, ctx: AnalysisContext, visited: set):
    """Resolve `obj.prop` where obj is an object literal, a class or an instance of one."""
    key = (parsed.path, f'{obj}.{prop}')
    if key in visited:
        return None
    visited.add(key)

    container = _local_container(obj, parsed.ast)
    if container is not None:
        resolved = _resolve_member_value(_member_value(container, prop), parsed, ctx, visited)
        if resolved is not None:
            return resolved

    found = find_binding_module(obj, parsed, ctx)
    if found is None:
        return None
    target, imported = found

    if imported not in ('default', '*'):
        return find_member_function(imported, prop, target, ctx, visited)

    default = _default_export(target.ast)
    resolved = None
    if default is not None:
        default_name = identifier_name(default)
        if default_name is not None:
            resolved = find_member_function(default_name, prop, target, ctx, visited)
        else:
            container = _container_of(default, target.ast)
            if container is not None:
                resolved = _resolve_member_value(_member_value(container, prop), target, ctx, visited)
    if resolved is None:
        # import * as c from ... / exports.prop = ...
        resolved = find_function_definition(prop, target, ctx, visited)
    return resolved


def _resolve_member_value(value, parsed, ctx, visited):
    if is_function(value):
        return value, parsed
    name = identifier_name(value)
    if name is not None:
        return find_function_definition(name, parsed, ctx, visited)
    return None


def _default_export_function(target: ParsedFile, ctx: AnalysisContext, visited: set):
    default = _default_export(target.ast)
    if is_function(default):
        return default, target
    name = identifier_name(default)
    if name is not None:
        return find_function_definition(name, target, ctx, visited)
    return None


# ─────────────────────────────────────────────
# AST lookups
# ─────────────────────────────────────────────

def _find_first(ast, match):
    """First node (pre-order) for which match(node) returns something truthy; returns that value."""
    found = []

    def visitor(node, ancestors):
        if found:
            return 'stop'
        value = match(node)
        if value is not None:
            found.append(value)
            return 'stop'

    walk(ast, visitor)
    return found[0] if found else None


def _local_function(name: str, ast):
    def match(node):
        kind = node_type(node)
        if kind == 'FunctionDeclaration' and identifier_name(node.id) == name:
            return node
        if kind == 'VariableDeclarator' and identifier_name(node.id) == name and is_function(node.init):
            return node.init
        return None

    return _find_first(ast, match)


def _object_literal_method(name: str, ast):
    def match(node):
        kind = node_type(node)
        obj = None
        if kind == 'VariableDeclarator':
            obj = node.init
        elif kind == 'AssignmentExpression':
            obj = node.right
        if node_type(obj) != 'ObjectExpression':
            return None
        value = _member_value(obj, name)
        return value if is_function(value) else None

    return _find_first(ast, match)


def _commonjs_export(name: str, ast):
    """Value assigned to exports.name / module.exports.name, or the `name` key of module.exports = {...}."""
    def match(node):
        if node_type(node) != 'AssignmentExpression':
            return None
        target = member_parts(node.left)
        if target in (['exports', name], ['module', 'exports', name]):
            return node.right
        if target == ['module', 'exports'] and node_type(node.right) == 'ObjectExpression':
            return _member_value(node.right, name)
        return None

    return _find_first(ast, match)


def _export_alias(name: str, ast):
    def match(node):
        if node_type(node) != 'ExportNamedDeclaration' or getattr(node, 'source', None) is not None:
            return None
        for spec in node.specifiers or []:
            local = identifier_name(spec.local)
            if identifier_name(spec.exported) == name and local != name:
                return local
        return None

    return _find_first(ast, match)


def _default_export(ast):
    """Expression exported by `export default` or `module.exports =`."""
    def match(node):
        kind = node_type(node)
        if kind == 'ExportDefaultDeclaration':
            return node.declaration
        if kind == 'AssignmentExpression' and member_parts(node.left) == ['module', 'exports']:
            return node.right
        return None

    return _find_first(ast, match)


def _local_container(name: str, ast):
    """Object literal or class that `name` refers to in this file."""
    def match(node):
        kind = node_type(node)
        if kind == 'VariableDeclarator' and identifier_name(node.id) == name and node.init is not None:
            return _container_of(node.init, ast)
        if kind in CLASS_TYPES and identifier_name(node.id) == name:
            return node
        return None

    return _find_first(ast, match)


def _container_of(node, ast):
    kind = node_type(node)
    if kind == 'ObjectExpression' or kind in CLASS_TYPES:
        return node
    if kind == 'NewExpression':
        class_name = identifier_name(node.callee)
        if class_name is not None:
            return _find_first(
                ast,
                lambda n: n if node_type(n) in CLASS_TYPES and identifier_name(n.id) == class_name else None,
            )
    return None


def _member_value(container, name: str):
    """Value of key `name` in an object literal, or the method/field `name` of a class."""
    if node_type(container) == 'ObjectExpression':
        for prop in container.properties or []:
            if node_type(prop) == 'Property' and key_name(prop.key, getattr(prop, 'computed', False)) == name:
                return prop.value
        return None

    body = getattr(getattr(container, 'body', None), 'body', None) or []
    for member in body:
        if node_type(member) in ('MethodDefinition', 'PropertyDefinition', 'ClassProperty'):
            if key_name(member.key, getattr(member, 'computed', False)) == name:
                return member.value
    return None
