from routelens.ingestion.nodes import identifier_name, key_name, member_parts, node_type, string_value
from routelens.symbolic.values import member_access

REQUEST_SECTIONS = ('headers', 'params', 'query', 'body')

# req.get('X-Token') / req.header('X-Token')
HEADER_GETTERS = {'get', 'header'}


def record_field(state, section: str, field: str) -> str:
    """Add a field to the request section's ordered set. Header names are case-insensitive."""
    if section == 'headers':
        field = field.lower()
    fields = state.req[section]
    if field not in fields:
        fields.append(field)
    return field


def request_section(node, state):
    """'body' for req.body (likewise params/query/headers), otherwise None."""
    parts = member_parts(node)
    if parts and len(parts) == 2 and parts[0] == state.req_name and parts[1] in REQUEST_SECTIONS:
        return parts[1]
    return None


def request_member(node, state):
    """(section, field) for req.<section>.<field> and req.headers['x-y'], otherwise None."""
    if node_type(node) != 'MemberExpression':
        return None
    section = request_section(node.object, state)
    if section is None:
        return None
    field = key_name(node.property, getattr(node, 'computed', False))
    if field is None:
        return None
    return section, field


def analyze_member_expression(node, state):
    access = request_member(node, state)
    if access is not None:
        record_field(state, *access)


def analyze_destructuring(declarator, state) -> bool:
    """
    const { id, name: userName = 'x' } = req.params

    Records each destructured field and maps the local name to a
    member-access descriptor. Returns False if the declarator is not a
    destructuring of a request section.
    """
    pattern = declarator.id
    init = declarator.init
    if node_type(init) == 'AwaitExpression':
        init = init.argument
    if node_type(pattern) != 'ObjectPattern':
        return False
    section = request_section(init, state)
    if section is None:
        return False

    for prop in pattern.properties or []:
        if node_type(prop) != 'Property':
            continue
        field = key_name(prop.key, getattr(prop, 'computed', False))
        if field is None:
            continue
        recorded = record_field(state, section, field)

        local = prop.value
        if node_type(local) == 'AssignmentPattern':
            local = local.left
        local_name = identifier_name(local) or field
        state.variable_map[local_name] = member_access(f'{state.req_name}.{section}', recorded)

    return True


def analyze_request_call(call, state) -> bool:
    """req.get('H') / req.header('H') read header h."""
    parts = member_parts(call.callee)
    if not parts or len(parts) != 2 or parts[0] != state.req_name or parts[1] not in HEADER_GETTERS:
        return False
    args = call.arguments or []
    name = string_value(args[0]) if args else None
    if name is None:
        return False
    record_field(state, 'headers', name)
    return True
