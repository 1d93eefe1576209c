"""
Cross-file return value lookup.

`const user = await userService.getUser(id)` tells us nothing about the
shape of `user` until we find `getUser` and read its return statement.
This module guesses where that function lives (the module the object is
imported from, then the usual services/ locations) and extracts what it
returns. Not finding anything is a normal outcome.
"""

import os

from routelens.context import AnalysisContext
from routelens.ingestion.loader import collect_specifiers, find_binding_module, parse_file, resolve_module
from routelens.ingestion.nodes import identifier_name, is_function, key_name, node_type, walk
from routelens.models import ParsedFile
from routelens.symbolic.type_sampler import merge_partial_with_type_sample, type_sample_for_function
from routelens.symbolic.values import extract_value, is_symbolic

CANDIDATE_EXTENSIONS = ('.ts', '.js')


def resolve_call_return(descriptor: dict, file_path: str, ctx: AnalysisContext):
    """
    Return value of the function a function_call descriptor names, or None.
    The first file that defines the function decides the outcome.
    """
    method = descriptor.get('method')
    if not method:
        return None

    for parsed in candidate_files(descriptor.get('object'), file_path, ctx):
        func = find_function_definition(method, parsed.ast)
        if func is None:
            continue
        ctx.logger.debug(f"    {descriptor['identifier']} defined in {parsed.path}")
        value = extract_return_from_function(func, parsed)
        return complete_with_type_sample(value, func, parsed, ctx)

    return None


def candidate_paths(name: str, file_path: str) -> list[str]:
    """Conventional locations of a service object's module, most likely first."""
    directory = os.path.dirname(file_path)
    variants = []
    for variant in (name, name.lower(), name[:1].lower() + name[1:]):
        if variant not in variants:
            variants.append(variant)

    paths = []
    for base in (directory, os.path.join(directory, 'services'), os.path.join(directory, '..', 'services')):
        for variant in variants:
            for ext in CANDIDATE_EXTENSIONS:
                paths.append(os.path.normpath(os.path.join(base, variant + ext)))
    return paths


def candidate_files(obj, file_path: str, ctx: AnalysisContext):
    """Yield the parsed files worth searching, each once."""
    seen = set()
    current = parse_file(file_path, ctx)

    def emit(parsed):
        if parsed is not None and parsed.path not in seen:
            seen.add(parsed.path)
            return True
        return False

    if obj:
        parts = obj.split('.')
        binding = parts[1] if parts[0] == 'this' and len(parts) > 1 else parts[0]
        if current is not None:
            found = find_binding_module(binding, current, ctx)
            if found is not None and emit(found[0]):
                yield found[0]
        for path in candidate_paths(parts[-1], file_path):
            if os.path.isfile(path) and not ctx.is_excluded(path):
                parsed = parse_file(path, ctx)
                if emit(parsed):
                    yield parsed
        return

    if current is None:
        return
    if emit(current):
        yield current
    for specifier in collect_specifiers(current):
        target = resolve_module(specifier, current.path, ctx)
        if target is None:
            continue
        parsed = parse_file(target, ctx)
        if emit(parsed):
            yield parsed


def find_function_definition(name: str, ast):
    """First class method, object-literal method, function declaration or function-valued variable called `name`."""
    found = []

    def visitor(node, ancestors):
        if found:
            return 'stop'
        kind = node_type(node)
        candidate = None
        if kind in ('MethodDefinition', 'PropertyDefinition', 'ClassProperty', 'Property'):
            if key_name(node.key, getattr(node, 'computed', False)) == name:
                candidate = node.value
        elif kind == 'FunctionDeclaration' and identifier_name(node.id) == name:
            candidate = node
        elif kind == 'VariableDeclarator' and identifier_name(node.id) == name:
            candidate = node.init
        if is_function(candidate):
            found.append(candidate)
            return 'stop'

    walk(ast, visitor)
    return found[0] if found else None


def collect_return_statements(node, found: list = None) -> list:
    """Return statements reachable through blocks, if/else and try/catch/finally."""
    if found is None:
        found = []
    kind = node_type(node)

    if kind == 'ReturnStatement':
        found.append(node)
    elif kind == 'BlockStatement':
        for statement in node.body or []:
            collect_return_statements(statement, found)
    elif kind == 'IfStatement':
        collect_return_statements(node.consequent, found)
        collect_return_statements(getattr(node, 'alternate', None), found)
    elif kind == 'TryStatement':
        collect_return_statements(node.block, found)
        handler = getattr(node, 'handler', None)
        if handler is not None:
            collect_return_statements(handler.body, found)
        collect_return_statements(getattr(node, 'finalizer', None), found)

    return found


def _is_empty_return(argument) -> bool:
    if argument is None or identifier_name(argument) == 'undefined':
        return True
    return node_type(argument) == 'Literal' and argument.value is None and not getattr(argument, 'regex', None)


def extract_return_from_function(func, parsed: ParsedFile):
    body = func.body
    if node_type(body) != 'BlockStatement':
        return extract_value(body, {}, {}, parsed.ast)

    returns = collect_return_statements(body)
    if not returns:
        return None
    chosen = next((r for r in returns if not _is_empty_return(r.argument)), returns[0])
    if chosen.argument is None:
        return None
    return extract_value(chosen.argument, {}, {}, parsed.ast)


def has_partial_nulls(value) -> bool:
    """True if a dict/list value has a None or symbolic leaf somewhere inside."""
    if isinstance(value, list):
        return any(item is None or is_symbolic(item) or has_partial_nulls(item) for item in value)
    if isinstance(value, dict) and not is_symbolic(value):
        return any(item is None or is_symbolic(item) or has_partial_nulls(item) for item in value.values())
    return False


def _missing_keys(value, sample) -> bool:
    return isinstance(value, dict) and isinstance(sample, dict) and any(k not in value for k in sample)


def complete_with_type_sample(value, func, parsed: ParsedFile, ctx: AnalysisContext):
    """Fill in what extraction could not recover from the function's declared return type."""
    if not (value is None or is_symbolic(value) or has_partial_nulls(value)
            or isinstance(value, dict)):
        return value

    sample = type_sample_for_function(func, parsed, ctx)
    if sample is None:
        return value
    if value is None or is_symbolic(value):
        return sample
    if has_partial_nulls(value) or _missing_keys(value, sample):
        return merge_partial_with_type_sample(value, sample)
    return value
