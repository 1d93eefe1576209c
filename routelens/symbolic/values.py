"""
Static value extraction.

Turns literal-ish AST nodes into plain Python values (str, int, float,
bool, list, dict). Values that only exist at runtime come back as symbolic
descriptors; anything the extractor does not understand comes back as
None. Nothing in here ever raises on an unexpected node shape.
"""

from routelens.ingestion.nodes import (
    SPREAD_TYPES,
    identifier_name,
    key_name,
    member_parts,
    node_type,
    range_of,
    string_value,
    walk,
)

SYMBOLIC_TYPES = ('function_call', 'member_access')


def is_symbolic(value) -> bool:
    return isinstance(value, dict) and value.get('type') in SYMBOLIC_TYPES and 'identifier' in value


def member_access(obj: str, prop: str) -> dict:
    return {
        'type': 'member_access',
        'object': obj,
        'property': prop,
        'identifier': f'{obj}.{prop}',
    }


def call_descriptor(node):
    """req.db.find() -> {'type': 'function_call', 'object': 'req.db', 'method': 'find', ...}"""
    callee = getattr(node, 'callee', None)
    kind = node_type(callee)

    if kind == 'MemberExpression':
        parts = member_parts(callee)
        if parts:
            obj, method = '.'.join(parts[:-1]), parts[-1]
        else:
            obj = describe(callee.object)
            method = key_name(callee.property, getattr(callee, 'computed', False))
        if method is None:
            return None
        return {
            'type': 'function_call',
            'object': obj,
            'method': method,
            'identifier': f'{obj}.{method}()',
        }

    if kind == 'Identifier':
        return {
            'type': 'function_call',
            'method': callee.name,
            'identifier': f'{callee.name}()',
        }

    return None


def describe(node) -> str:
    """Short human-readable name for a node, used in placeholders."""
    name = identifier_name(node)
    if name is not None:
        return name
    parts = member_parts(node)
    if parts:
        return '.'.join(parts)
    if node_type(node) == 'CallExpression':
        descriptor = call_descriptor(node)
        if descriptor:
            return descriptor['identifier']
    if node_type(node) == 'AwaitExpression':
        return describe(node.argument)
    return node_type(node) or 'unknown'


def _number(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _literal(node):
    if getattr(node, 'regex', None):
        return None
    value = getattr(node, 'value', None)
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return _number(value)
    return None


def extract_value(node, local_arrays: dict, variable_map: dict = None, ast=None, visited: set = None):
    """
    Convert an AST node into a concrete value.

    Identifiers resolve through local_arrays, then variable_map, then (when
    the file AST is given) the declaration or assignment of that name
    nearest before the reference. `visited` holds the names currently
    being resolved; meeting one again resolves to None.
    """
    if variable_map is None:
        variable_map = {}
    if visited is None:
        visited = set()

    kind = node_type(node)

    if kind == 'Literal':
        return _literal(node)

    if kind == 'TemplateLiteral':
        return string_value(node)

    if kind == 'UnaryExpression':
        if node.operator == '-' and node_type(node.argument) == 'Literal':
            value = _literal(node.argument)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return -value
        return None

    if kind == 'AwaitExpression':
        return extract_value(node.argument, local_arrays, variable_map, ast, visited)

    if kind == 'ObjectExpression':
        return _extract_object(node, local_arrays, variable_map, ast, visited)

    if kind == 'ArrayExpression':
        return _extract_array(node, local_arrays, variable_map, ast, visited)

    if kind == 'Identifier':
        return _extract_identifier(node, local_arrays, variable_map, ast, visited)

    if kind == 'CallExpression':
        return call_descriptor(node)

    return None


def _resolve_spread(argument, local_arrays, variable_map, ast, visited):
    resolved = extract_value(argument, local_arrays, variable_map, ast, visited)
    if is_symbolic(resolved):
        return resolved.get('sample')
    return resolved


def _extract_object(node, local_arrays, variable_map, ast, visited):
    result = {}

    for prop in node.properties or []:
        kind = node_type(prop)

        if kind in SPREAD_TYPES:
            resolved = _resolve_spread(prop.argument, local_arrays, variable_map, ast, visited)
            if isinstance(resolved, dict):
                result.update(resolved)
            elif isinstance(resolved, list):
                result.update({str(i): item for i, item in enumerate(resolved)})
            else:
                placeholder = f'...{describe(prop.argument)}'
                result[placeholder] = placeholder
            continue

        if kind != 'Property' or getattr(prop, 'kind', 'init') not in ('init', None):
            continue

        key = key_name(prop.key, getattr(prop, 'computed', False))
        if key is None:
            continue
        value = extract_value(prop.value, local_arrays, variable_map, ast, visited)
        if value is not None:
            result[key] = value

    return result or None


def _extract_array(node, local_arrays, variable_map, ast, visited):
    items = []

    for element in node.elements or []:
        if element is None:
            items.append(None)
        elif node_type(element) in SPREAD_TYPES:
            resolved = _resolve_spread(element.argument, local_arrays, variable_map, ast, visited)
            if isinstance(resolved, list):
                items.extend(resolved)
            else:
                items.append(f'<spread:{describe(element.argument)}>')
        else:
            items.append(extract_value(element, local_arrays, variable_map, ast, visited))

    return items


def _extract_identifier(node, local_arrays, variable_map, ast, visited):
    name = node.name
    if name == 'undefined':
        return None

    if name in local_arrays:
        return list(local_arrays[name])

    if name in variable_map:
        mapping = variable_map[name]
        if isinstance(mapping, dict) and mapping.get('sample') is not None:
            return mapping['sample']
        return mapping

    if ast is None or name in visited:
        return None

    target = find_binding_init(ast, name, node)
    if target is None:
        return None

    visited.add(name)
    try:
        return extract_value(target, local_arrays, variable_map, ast, visited)
    finally:
        visited.discard(name)


def find_binding_init(ast, name: str, reference=None):
    """
    Initializer of the `name` declarator or assignment nearest before the
    reference. Falls back to the first one in the file.
    """
    candidates = []

    def visitor(node, ancestors):
        kind = node_type(node)
        if kind == 'VariableDeclarator' and identifier_name(node.id) == name and node.init is not None:
            candidates.append((node, node.init))
        elif (kind == 'AssignmentExpression' and getattr(node, 'operator', '=') == '='
              and identifier_name(node.left) == name):
            candidates.append((node, node.right))

    walk(ast, visitor)
    if not candidates:
        return None

    ref_range = range_of(reference) if reference is not None else None
    if ref_range is not None:
        before = [c for c in candidates if range_of(c[0]) and range_of(c[0])[0] < ref_range[0]]
        if before:
            return max(before, key=lambda c: range_of(c[0])[0])[1]
    return candidates[0][1]
