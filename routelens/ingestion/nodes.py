"""
Helpers shared by everything that reads an ESTree AST.

esprima hands back node objects whose attributes are the ESTree field
names; the TypeScript front end builds `Node` objects of the same shape,
so the rest of the analyzer never needs to know which parser ran.
"""

FUNCTION_TYPES = {'FunctionExpression', 'ArrowFunctionExpression', 'FunctionDeclaration'}
SPREAD_TYPES = {'SpreadElement', 'ExperimentalSpreadProperty', 'SpreadProperty'}


class Node:
    """ESTree-shaped node built by the TypeScript front end."""

    def __init__(self, type, range=None, **fields):
        self.type = type
        for key, value in fields.items():
            setattr(self, key, value)
        self.range = range

    def __repr__(self):
        return f'Node({self.type})'


def node_type(node):
    return getattr(node, 'type', None)


def walk(node, visitor, ancestors=None):
    """
    Pre-order walk over every node of an AST.

    visitor(node, ancestors) is called on each node, where ancestors is the
    list of enclosing nodes, outermost first. The visitor can return 'stop'
    to skip a node's children.
    """
    if ancestors is None:
        ancestors = []
    if node is None or not hasattr(node, '__dict__'):
        return

    if visitor(node, ancestors) == 'stop':
        return

    ancestors.append(node)
    try:
        for key, value in list(node.__dict__.items()):
            if isinstance(value, list):
                for item in value:
                    if hasattr(item, '__dict__'):
                        walk(item, visitor, ancestors)
            elif hasattr(value, '__dict__'):
                walk(value, visitor, ancestors)
    finally:
        ancestors.pop()


def iter_nodes(root, wanted):
    """Collect every node under root whose type is in `wanted`, in source order."""
    found = []

    def visitor(node, ancestors):
        if node_type(node) in wanted:
            found.append(node)

    walk(root, visitor)
    return found


def is_function(node) -> bool:
    return node_type(node) in FUNCTION_TYPES


def identifier_name(node):
    if node_type(node) == 'Identifier':
        return node.name
    return None


def string_value(node):
    """Value of a string literal, or of a template literal with no substitutions."""
    kind = node_type(node)
    if kind == 'Literal' and isinstance(getattr(node, 'value', None), str):
        return node.value
    if kind == 'TemplateLiteral' and not getattr(node, 'expressions', None):
        quasis = getattr(node, 'quasis', None) or []
        return ''.join(_cooked(q) for q in quasis)
    return None


def _cooked(quasi):
    value = getattr(quasi, 'value', None)
    if isinstance(value, dict):
        cooked = value.get('cooked')
        return cooked if cooked is not None else value.get('raw', '')
    cooked = getattr(value, 'cooked', None)
    if cooked is None:
        cooked = getattr(value, 'raw', '')
    return cooked or ''


def key_name(node, computed=False):
    """
    Name of an object key or member property.
    Computed keys only count when they are string/number literals.
    """
    kind = node_type(node)
    if kind == 'Identifier' and not computed:
        return node.name
    if kind == 'Literal':
        value = getattr(node, 'value', None)
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    if computed:
        return string_value(node)
    return None


def member_parts(node):
    """
    Split a static member chain into names: req.body.name -> ['req', 'body', 'name'].
    Returns None for anything that is not a plain chain.
    """
    parts = []
    while node_type(node) == 'MemberExpression':
        name = key_name(node.property, getattr(node, 'computed', False))
        if name is None:
            return None
        parts.append(name)
        node = node.object
    if node_type(node) == 'Identifier':
        parts.append(node.name)
    elif node_type(node) == 'ThisExpression':
        parts.append('this')
    else:
        return None
    return list(reversed(parts))


def function_params(func) -> list:
    return list(getattr(func, 'params', None) or [])


def range_of(node):
    rng = getattr(node, 'range', None)
    if rng is None or len(rng) < 2:
        return None
    return rng[0], rng[1]
