import os

from routelens import analyze_routes
from routelens.ingestion.loader import parse_file
from routelens.symbolic.returns import (
    candidate_paths,
    collect_return_statements,
    extract_return_from_function,
    find_function_definition,
    has_partial_nulls,
    resolve_call_return,
)
from routelens.symbolic.type_sampler import merge_partial_with_type_sample


def test_service_return_value_feeds_the_response(write_project, ctx):
    root = write_project({
        'app.js': """
            const productService = require('./services/productService');
            app.get('/products', async (req, res) => {
              const products = await productService.getProducts(req.query.category);
              res.json(products);
            });
        """,
        'services/productService.js': """
            const PRODUCTS = [{ id: 1, name: 'Pen', price: 2 }];
            function getProducts(category) {
              if (!category) return null;
              return PRODUCTS;
            }
            module.exports = { getProducts };
        """,
    })

    results = analyze_routes(str(root / 'app.js'), ctx)

    assert len(results) == 1
    assert results[0].req['query'] == ['category']
    assert results[0].default.json == [[{'id': 1, 'name': 'Pen', 'price': 2}]]


def test_unknown_function_keeps_the_descriptor(write_project, ctx):
    root = write_project({
        'app.js': """
            app.get('/x', async (req, res) => {
              const data = await remote.fetchAll();
              res.json(data);
            });
        """,
    })

    results = analyze_routes(str(root / 'app.js'), ctx)

    assert results[0].default.json == [{
        'type': 'function_call',
        'object': 'remote',
        'method': 'fetchAll',
        'identifier': 'remote.fetchAll()',
    }]


def test_resolve_call_return_without_object_searches_current_file(write_project, ctx):
    root = write_project({
        'app.js': """
            const load = () => ({ ready: true });
        """,
    })
    descriptor = {'type': 'function_call', 'method': 'load', 'identifier': 'load()'}

    assert resolve_call_return(descriptor, str(root / 'app.js'), ctx) == {'ready': True}


def test_candidate_paths_order():
    paths = candidate_paths('UserService', '/proj/src/routes/users.js')

    assert paths[:6] == [
        '/proj/src/routes/UserService.ts',
        '/proj/src/routes/UserService.js',
        '/proj/src/routes/userservice.ts',
        '/proj/src/routes/userservice.js',
        '/proj/src/routes/userService.ts',
        '/proj/src/routes/userService.js',
    ]
    assert '/proj/src/routes/services/userService.ts' in paths
    assert paths[-1] == os.path.normpath('/proj/src/services/userService.js')


def test_find_function_definition_forms(write_project, ctx):
    root = write_project({
        'svc.js': """
            class Repo { byId(id) { return { id }; } }
            const api = { list() { return []; } };
            function count() { return 3; }
            const total = () => 4;
            const notAFunction = 5;
        """,
    })
    ast = parse_file(str(root / 'svc.js'), ctx).ast

    assert find_function_definition('byId', ast) is not None
    assert find_function_definition('list', ast) is not None
    assert find_function_definition('count', ast).type == 'FunctionDeclaration'
    assert find_function_definition('total', ast).type == 'ArrowFunctionExpression'
    assert find_function_definition('notAFunction', ast) is None


def test_first_non_empty_return_is_used(write_project, ctx):
    root = write_project({
        'svc.js': """
            function pick(flag) {
              if (!flag) { return; }
              try {
                return { picked: true };
              } catch (e) {
                return null;
              }
            }
        """,
    })
    parsed = parse_file(str(root / 'svc.js'), ctx)
    func = find_function_definition('pick', parsed.ast)

    assert len(collect_return_statements(func.body)) == 3
    assert extract_return_from_function(func, parsed) == {'picked': True}


def test_has_partial_nulls():
    symbolic = {'type': 'member_access', 'object': 'req.body', 'property': 'x', 'identifier': 'req.body.x'}

    assert has_partial_nulls({'a': None}) is True
    assert has_partial_nulls({'a': {'b': symbolic}}) is True
    assert has_partial_nulls([1, [2, None]]) is True
    assert has_partial_nulls({'a': 1, 'b': [1, 2]}) is False
    assert has_partial_nulls(symbolic) is False
    assert has_partial_nulls('text') is False


def test_merge_keeps_concrete_values():
    symbolic = {'type': 'function_call', 'method': 'f', 'identifier': 'f()'}
    sample = {'id': 1, 'name': 'Sample name', 'tags': ['Sample tags']}

    merged = merge_partial_with_type_sample({'id': 7, 'name': symbolic, 'extra': True}, sample)

    assert merged == {'id': 7, 'name': 'Sample name', 'tags': ['Sample tags'], 'extra': True}
    assert merge_partial_with_type_sample(None, sample) == sample
    assert merge_partial_with_type_sample([], ['x']) == ['x']
    assert merge_partial_with_type_sample([1], ['x']) == [1]
    assert merge_partial_with_type_sample('kept', sample) == 'kept'
