from routelens.context import AnalysisContext
from routelens.ingestion.nodes import identifier_name, key_name, node_type, string_value
from routelens.symbolic.branches import determine_branch_key, get_branch_detail

STATUS_METHODS = {'status', 'sendStatus'}
BODY_METHODS = {'json', 'send'}
HEADER_METHODS = {'setHeader', 'header', 'set'}
RESPONSE_METHODS = STATUS_METHODS | BODY_METHODS | HEADER_METHODS


def response_base(callee):
    """Root object of a (possibly chained) call: res.status(200).json -> res."""
    base = callee.object
    while node_type(base) == 'CallExpression':
        inner = base.callee
        if node_type(inner) != 'MemberExpression':
            return None
        base = inner.object
    return base


def analyze_response_call(call, ancestors: list, state, ctx: AnalysisContext) -> bool:
    """
    Record one call rooted at the response object into the branch it
    belongs to. Returns False when the call is not a response call.
    """
    callee = call.callee
    if node_type(callee) != 'MemberExpression':
        return False
    if identifier_name(response_base(callee)) != state.res_name:
        return False

    method = key_name(callee.property, getattr(callee, 'computed', False))
    if method not in RESPONSE_METHODS:
        return False

    branch_key = determine_branch_key(call, ancestors, state.parsed)
    target = get_branch_detail(branch_key, state)
    args = call.arguments or []

    if method in STATUS_METHODS:
        code = state.extract(args[0]) if args and node_type(args[0]) == 'Literal' else None
        if isinstance(code, (int, float)) and not isinstance(code, bool):
            target.status.append(code)

    elif method in BODY_METHODS:
        if args:
            value = state.extract(args[0])
            if value is not None:
                getattr(target, method).append(value)

    elif method in HEADER_METHODS:
        if len(args) >= 2:
            name = string_value(args[0])
            if name is not None:
                target.headers.append({'key': name, 'value': state.extract(args[1])})
        elif method == 'set' and args and node_type(args[0]) == 'ObjectExpression':
            for prop in args[0].properties or []:
                if node_type(prop) != 'Property':
                    continue
                name = key_name(prop.key, getattr(prop, 'computed', False))
                if name is not None:
                    target.headers.append({'key': name, 'value': state.extract(prop.value)})

    ctx.logger.debug(f"    [{branch_key}] {state.res_name}.{method}()")
    return True
