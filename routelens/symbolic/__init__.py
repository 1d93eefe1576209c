from routelens.context import AnalysisContext
from routelens.ingestion.nodes import (
    function_params,
    identifier_name,
    key_name,
    member_parts,
    node_type,
    walk,
)
from routelens.models import BranchDetail, ParsedFile, RouteResult
from routelens.symbolic.requests import (
    REQUEST_SECTIONS,
    analyze_destructuring,
    analyze_member_expression,
    analyze_request_call,
    record_field,
    request_member,
)
from routelens.symbolic.responses import analyze_response_call, response_base
from routelens.symbolic.returns import resolve_call_return
from routelens.symbolic.values import extract_value, member_access

# ─────────────────────────────────────────────
# Per-handler state
# ─────────────────────────────────────────────


class HandlerState:
    """
    Everything learned while walking one handler body.

    Owned by a single analyze_handler() call and turned into an immutable
    RouteResult by build(); never shared between handlers.
    """

    def __init__(self, parsed: ParsedFile, req_name: str = 'req', res_name: str = 'res'):
        self.parsed = parsed
        self.req_name = req_name
        self.res_name = res_name

        # section -> field names in first-seen order
        self.req: dict[str, list] = {section: [] for section in REQUEST_SECTIONS}
        self.default = BranchDetail()
        self.branches: dict[str, BranchDetail] = {}

        # name -> literal value or symbolic descriptor
        self.variable_map: dict = {}
        # name -> values accumulated through push()
        self.local_arrays: dict[str, list] = {}
        # keys of inline res.json({...}) literals
        self.json_fields: dict = {}

    def extract(self, node):
        return extract_value(node, self.local_arrays, self.variable_map, self.parsed.ast)

    def build(self, method: str, path: str) -> RouteResult:
        return RouteResult(
            method=method,
            path=path,
            req={section: list(fields) for section, fields in self.req.items()},
            default=self.default,
            branches=dict(self.branches),
            source_file=self.parsed.path,
        )


# ─────────────────────────────────────────────
# Handler body walker
# ─────────────────────────────────────────────

class HandlerBodyAnalyzer:
    """
    Walks a handler body once, in source order, and feeds each node to
    the matching analyzer:

        VariableDeclarator  ->  locals, request destructuring
        MemberExpression    ->  req.<section>.<field> reads
        CallExpression      ->  push(), req.get(), res.*()
    """

    def __init__(self, state: HandlerState, ctx: AnalysisContext):
        self.state = state
        self.ctx = ctx

    def run(self, body):
        walk(body, self.visit)

    def visit(self, node, ancestors):
        kind = node_type(node)
        if kind == 'VariableDeclarator':
            self.on_declarator(node)
        elif kind == 'MemberExpression':
            analyze_member_expression(node, self.state)
            self.on_inline_json(node, ancestors)
        elif kind == 'CallExpression':
            self.on_call(node, ancestors)

    def on_declarator(self, node):
        state = self.state
        if node.init is None:
            return
        if analyze_destructuring(node, state):
            return

        name = identifier_name(node.id)
        if name is None:
            return

        if node_type(node.init) == 'ArrayExpression':
            value = state.extract(node.init)
            state.local_arrays[name] = value if isinstance(value, list) else []
            return

        access = request_member(node.init, state)
        if access is not None:
            section, field = access
            recorded = record_field(state, section, field)
            state.variable_map[name] = member_access(f'{state.req_name}.{section}', recorded)
            return

        value = state.extract(node.init)
        if value is None:
            return
        if isinstance(value, dict) and value.get('type') == 'function_call':
            sample = resolve_call_return(value, state.parsed.path, self.ctx)
            if sample is not None:
                value = dict(value, sample=sample)
        state.variable_map[name] = value
        self.ctx.logger.debug(f"    [var] {name} = {value}")

    def on_call(self, node, ancestors):
        state = self.state
        callee = node.callee

        parts = member_parts(callee)
        if parts and len(parts) == 2 and parts[1] == 'push' and parts[0] in state.local_arrays:
            args = node.arguments or []
            if args:
                state.local_arrays[parts[0]].append(state.extract(args[0]))
            return

        if analyze_request_call(node, state):
            return

        analyze_response_call(node, ancestors, state, self.ctx)

    def on_inline_json(self, node, ancestors):
        """Collect the keys of res.json({...}) / res.status(n).json({...}) literals."""
        if key_name(node.property, getattr(node, 'computed', False)) != 'json':
            return
        if identifier_name(response_base(node)) != self.state.res_name:
            return
        parent = ancestors[-1] if ancestors else None
        if node_type(parent) != 'CallExpression' or parent.callee is not node:
            return
        args = parent.arguments or []
        if not args or node_type(args[0]) != 'ObjectExpression':
            return
        for prop in args[0].properties or []:
            if node_type(prop) != 'Property':
                continue
            key = key_name(prop.key, getattr(prop, 'computed', False))
            value = self.state.extract(prop.value) if key is not None else None
            if value is not None:
                self.state.json_fields[key] = value


# ─────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────

def analyze_handler(function, parsed: ParsedFile, method: str, path: str, ctx: AnalysisContext) -> RouteResult:
    """
    Analyze one handler function defined in `parsed` and return the
    route it implements.
    """
    params = function_params(function)
    req_name = identifier_name(params[0]) if len(params) > 0 else None
    res_name = identifier_name(params[1]) if len(params) > 1 else None

    state = HandlerState(parsed, req_name or 'req', res_name or 'res')
    HandlerBodyAnalyzer(state, ctx).run(function.body)

    ctx.logger.debug(f"    req fields: {state.req}")
    ctx.logger.debug(f"    json fields: {state.json_fields}")
    ctx.logger.debug(f"    branches: {list(state.branches)}")

    return state.build(method, path)
