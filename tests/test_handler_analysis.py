import pytest

from routelens import analyze_routes, routes_to_json
from routelens.context import AnalysisContext


def _single_route(write_project, ctx, handler_source):
    root = write_project({'app.js': handler_source})
    results = analyze_routes(str(root / 'app.js'), ctx)
    assert len(results) == 1
    return results[0]


def test_users_by_id_scenario(write_project, ctx):
    root = write_project({
        'app.js': """
            const express = require('express');
            const router = require('./routes');
            const app = express();
            app.use('/api', router);
            module.exports = app;
        """,
        'routes.js': """
            const express = require('express');
            const router = express.Router();
            router.get("/users/:id", (req, res) => {
              const { id } = req.params;
              if (!id) return res.status(400).json({ error: "missing id" });
              res.status(200).json({ id, name: "a" });
            });
            module.exports = router;
        """,
    })

    results = analyze_routes(str(root / 'app.js'), ctx)

    assert len(results) == 1
    route = results[0]
    assert route.method == 'GET'
    assert route.path == '/api/users/:id'
    assert route.req['params'] == ['id']
    assert route.branches['if !id'].status == [400]
    assert route.branches['if !id'].json == [{'error': 'missing id'}]
    assert route.default.status == [200]
    body = route.default.json[0]
    assert body['name'] == 'a'
    assert body['id']['type'] == 'member_access'
    assert body['id']['identifier'] == 'req.params.id'


def test_branch_exclusivity(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/x', (req, res) => {
          if (a) { res.status(200); } else { res.status(400); }
        });
    """)

    assert route.branches['if a'].status == [200]
    assert route.branches['else'].status == [400]
    assert route.default.status == []


def test_try_counts_as_default_and_catch_is_a_branch(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/t', async (req, res) => {
          try {
            const data = await load();
            res.status(200).json({ ok: true });
          } catch (err) {
            res.status(500).json({ error: 'boom' });
          } finally {
            res.setHeader('X-Done', 'yes');
          }
        });
    """)

    assert route.default.status == [200]
    assert route.default.json == [{'ok': True}]
    assert route.default.headers == [{'key': 'X-Done', 'value': 'yes'}]
    assert list(route.branches) == ['catch']
    assert route.branches['catch'].status == [500]


def test_only_nearest_if_is_used(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/n', (req, res) => {
          if (outer) {
            if (inner) { res.status(401); }
            res.status(403);
          }
        });
    """)

    assert route.branches['if inner'].status == [401]
    assert route.branches['if outer'].status == [403]


def test_request_fields_are_a_union_across_branches(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.post('/users', (req, res) => {
          const { name } = req.body;
          if (req.body.age < 0) {
            return res.status(400).json({ error: 'bad age' });
          }
          const page = req.query.page;
          res.json({ name, email: req.body.email });
        });
    """)

    assert route.req['body'] == ['name', 'age', 'email']
    assert route.req['query'] == ['page']
    assert route.branches['if req.body.age < 0'].json == [{'error': 'bad age'}]
    assert route.default.json[0]['name']['identifier'] == 'req.body.name'


def test_headers_and_response_header_calls(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/h', (req, res) => {
          const token = req.headers['X-Token'];
          const agent = req.get('User-Agent');
          const { Authorization } = req.headers;
          res.setHeader('Cache-Control', 'no-store');
          res.set({ 'X-A': 'a' });
          res.header('X-B', 'b');
          res.sendStatus(204);
        });
    """)

    assert route.req['headers'] == ['x-token', 'user-agent', 'authorization']
    assert route.default.headers == [
        {'key': 'Cache-Control', 'value': 'no-store'},
        {'key': 'X-A', 'value': 'a'},
        {'key': 'X-B', 'value': 'b'},
    ]
    assert route.default.status == [204]


def test_custom_parameter_names(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/p', (request, response) => {
          const id = request.params.id;
          response.status(200).send({ id });
        });
    """)

    assert route.req['params'] == ['id']
    assert route.default.status == [200]
    assert route.default.send[0]['id']['identifier'] == 'request.params.id'


def test_local_array_push_accumulates(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/list', (req, res) => {
          const items = [];
          items.push({ id: 1 });
          items.push({ id: 2 });
          res.json(items);
        });
    """)

    assert route.default.json == [[{'id': 1}, {'id': 2}]]


def test_local_variables_and_spread(write_project, ctx):
    route = _single_route(write_project, ctx, """
        const defaults = { version: 1 };
        app.get('/v', (req, res) => {
          const message = 'hello';
          const payload = { ...defaults, message };
          res.json(payload);
        });
    """)

    assert route.default.json == [{'version': 1, 'message': 'hello'}]


def test_repeated_calls_accumulate(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/r', (req, res) => {
          res.status(200);
          res.status(201);
          res.send('one');
          res.send('two');
        });
    """)

    assert route.default.status == [200, 201]
    assert route.default.send == ['one', 'two']


def test_to_dict_shape(write_project, ctx):
    route = _single_route(write_project, ctx, """
        app.get('/s', (req, res) => res.status(200).json({ ok: true }));
    """)

    assert route.to_dict() == {
        'method': 'GET',
        'path': '/s',
        'req': {'headers': [], 'params': [], 'query': [], 'body': []},
        'responses': {
            'default': {'status': [200], 'json': [{'ok': True}], 'send': [], 'headers': []},
            'branches': {},
        },
    }


def test_analysis_is_idempotent(write_project):
    root = write_project({
        'app.js': """
            app.get('/a', (req, res) => {
              const { q } = req.query;
              if (!q) { return res.status(400).send('missing'); }
              res.json({ q, results: [] });
            });
        """,
    })

    first = routes_to_json(analyze_routes(str(root / 'app.js'), AnalysisContext()))
    second = routes_to_json(analyze_routes(str(root / 'app.js'), AnalysisContext()))
    shared = AnalysisContext()
    third = routes_to_json(analyze_routes(str(root / 'app.js'), shared))
    fourth = routes_to_json(analyze_routes(str(root / 'app.js'), shared))

    assert first == second == third == fourth


def test_missing_entry_raises(tmp_path, ctx):
    with pytest.raises(FileNotFoundError):
        analyze_routes(str(tmp_path / 'nope.js'), ctx)
