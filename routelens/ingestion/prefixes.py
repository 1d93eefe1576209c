from routelens.context import AnalysisContext
from routelens.ingestion.loader import import_bindings, resolve_module
from routelens.ingestion.nodes import identifier_name, member_parts, node_type, string_value, walk
from routelens.models import ParsedFile, RoutePrefix


def collect_route_prefixes(files: list[ParsedFile], ctx: AnalysisContext) -> list[RoutePrefix]:
    """
    Find every app.use('<prefix>', <router>) call across the files.

    When the same router name is mounted more than once, the first
    prefix found (file order, then source order) is the one lookups use.
    """
    prefixes = []

    for parsed in files:
        bindings = None

        def visitor(node, ancestors):
            nonlocal bindings
            if node_type(node) != 'CallExpression':
                return
            callee = node.callee
            if node_type(callee) != 'MemberExpression' or callee.computed:
                return
            if identifier_name(callee.object) != 'app' or identifier_name(callee.property) != 'use':
                return

            args = node.arguments or []
            if len(args) < 2:
                return
            prefix = string_value(args[0])
            router_name = identifier_name(args[1])
            if prefix is None or router_name is None:
                return

            if bindings is None:
                bindings = import_bindings(parsed)
            router_file = None
            if router_name in bindings:
                router_file = resolve_module(bindings[router_name][0], parsed.path, ctx)

            prefixes.append(RoutePrefix(prefix, router_name, parsed.path, router_file))
            ctx.logger.debug(f"  prefix {prefix} -> {router_name} ({parsed.path})")

        walk(parsed.ast, visitor)

    return prefixes


def collect_exported_routers(parsed: ParsedFile) -> list[str]:
    """
    Names a file exports, in source order. Covers ES module exports and
    the CommonJS module.exports / exports.x forms.
    """
    names = []

    def add(name):
        if name and name not in names:
            names.append(name)

    def visitor(node, ancestors):
        kind = node_type(node)
        if kind == 'ExportNamedDeclaration':
            declaration = node.declaration
            if node_type(declaration) == 'VariableDeclaration':
                for decl in declaration.declarations or []:
                    add(identifier_name(decl.id))
            for spec in node.specifiers or []:
                add(identifier_name(spec.local))
        elif kind == 'ExportDefaultDeclaration':
            add(identifier_name(node.declaration))
        elif kind == 'AssignmentExpression':
            target = member_parts(node.left)
            if target == ['module', 'exports']:
                if node_type(node.right) == 'ObjectExpression':
                    for prop in node.right.properties or []:
                        if node_type(prop) == 'Property':
                            add(identifier_name(prop.value))
                else:
                    add(identifier_name(node.right))
            elif target and len(target) == 3 and target[:2] == ['module', 'exports']:
                add(identifier_name(node.right))
            elif target and len(target) == 2 and target[0] == 'exports':
                add(identifier_name(node.right))

    walk(parsed.ast, visitor)
    return names


def determine_route_prefix(obj: str, parsed: ParsedFile, exported: list[str], prefixes: list[RoutePrefix]) -> str:
    if obj == 'app':
        return ''

    if obj == 'router':
        for router_name in exported:
            match = next((p for p in prefixes if p.router_name == router_name), None)
            if match:
                return match.prefix
        match = next((p for p in prefixes if p.router_file == parsed.path), None)
        if match:
            return match.prefix
        match = next((p for p in prefixes if p.router_name == obj and p.file_path == parsed.path), None)
        if match:
            return match.prefix

    return ''


def build_full_path(prefix: str, route_path: str) -> str:
    if not prefix:
        return route_path
    if prefix.endswith('/'):
        return prefix + _strip_leading_slash(route_path)
    return prefix + route_path


def _strip_leading_slash(path: str) -> str:
    return path[1:] if path.startswith('/') else path
