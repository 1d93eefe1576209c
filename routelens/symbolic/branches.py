from routelens.ingestion.nodes import node_type
from routelens.models import BranchDetail, ParsedFile

DEFAULT_BRANCH = 'default'
TRY_BRANCH = 'try'
CATCH_BRANCH = 'catch'
ELSE_BRANCH = 'else'


def determine_branch_key(call, ancestors: list, parsed: ParsedFile) -> str:
    """
    Branch a response call belongs to, decided by the nearest enclosing
    if/try statement only:

        try { HERE }          -> 'try'
        catch (e) { HERE }    -> 'catch'
        if (cond) { HERE }    -> 'if cond'
        else { HERE }         -> 'else'

    Anything else (finally blocks, the if test itself, no enclosing
    statement) is 'default'.
    """
    for i in range(len(ancestors) - 1, -1, -1):
        node = ancestors[i]
        kind = node_type(node)
        if kind not in ('IfStatement', 'TryStatement'):
            continue

        # the child of the statement on the path down to the call
        child = ancestors[i + 1] if i + 1 < len(ancestors) else call

        if kind == 'TryStatement':
            if child is node.block:
                return TRY_BRANCH
            if child is node.handler:
                return CATCH_BRANCH
            return DEFAULT_BRANCH

        if child is node.consequent:
            return f'if {parsed.snippet(node.test)}'
        if child is getattr(node, 'alternate', None):
            return ELSE_BRANCH
        return DEFAULT_BRANCH

    return DEFAULT_BRANCH


def get_branch_detail(branch_key: str, state) -> BranchDetail:
    """Response facts for a branch, created on first use. 'try' shares the default slot."""
    if branch_key in (DEFAULT_BRANCH, TRY_BRANCH):
        return state.default
    if branch_key not in state.branches:
        state.branches[branch_key] = BranchDetail()
    return state.branches[branch_key]
