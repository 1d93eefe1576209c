import pytest

from routelens.ingestion.loader import load_source_graph, parse_file
from routelens.ingestion.prefixes import (
    build_full_path,
    collect_exported_routers,
    collect_route_prefixes,
    determine_route_prefix,
)
from routelens.models import RoutePrefix


@pytest.mark.parametrize('prefix, path, expected', [
    ('', '/users', '/users'),
    ('/api', '/users', '/api/users'),
    ('/api/', '/users', '/api/users'),
    ('/api/', 'users', '/api/users'),
    ('/api', '<dynamic>', '/api<dynamic>'),
])
def test_build_full_path(prefix, path, expected):
    assert build_full_path(prefix, path) == expected


def test_collect_route_prefixes_records_router_file(write_project, ctx):
    root = write_project({
        'app.js': """
            const express = require('express');
            const users = require('./routes/users');
            const app = express();
            app.use(express.json());
            app.use('/api/users', users);
            app.use('/health', healthRouter);
        """,
        'routes/users.js': "module.exports = router;\n",
    })
    files = load_source_graph(str(root / 'app.js'), ctx)

    prefixes = collect_route_prefixes(files, ctx)

    assert [(p.prefix, p.router_name) for p in prefixes] == [
        ('/api/users', 'users'),
        ('/health', 'healthRouter'),
    ]
    assert prefixes[0].router_file == str(root / 'routes' / 'users.js')
    assert prefixes[1].router_file is None


def test_collect_exported_routers(write_project, ctx):
    root = write_project({
        'esm.js': """
            export const adminRouter = makeRouter();
            const other = makeRouter();
            export { other };
            export default mainRouter;
        """,
        'cjs.js': """
            module.exports = { usersRouter };
            module.exports.extra = extraRouter;
            exports.more = moreRouter;
        """,
    })

    esm = parse_file(str(root / 'esm.js'), ctx)
    cjs = parse_file(str(root / 'cjs.js'), ctx)

    assert collect_exported_routers(esm) == ['adminRouter', 'other', 'mainRouter']
    assert collect_exported_routers(cjs) == ['usersRouter', 'extraRouter', 'moreRouter']


def test_determine_route_prefix_order(write_project, ctx):
    root = write_project({'routes.js': "const router = x;\n"})
    parsed = parse_file(str(root / 'routes.js'), ctx)
    prefixes = [
        RoutePrefix('/by-name', 'usersRouter', 'app.js'),
        RoutePrefix('/by-file', 'anything', 'app.js', router_file=parsed.path),
        RoutePrefix('/same-file', 'router', parsed.path),
    ]

    assert determine_route_prefix('app', parsed, ['usersRouter'], prefixes) == ''
    assert determine_route_prefix('server', parsed, ['usersRouter'], prefixes) == ''
    assert determine_route_prefix('router', parsed, ['usersRouter'], prefixes) == '/by-name'
    assert determine_route_prefix('router', parsed, [], prefixes) == '/by-file'
    assert determine_route_prefix('router', parsed, [], prefixes[2:]) == '/same-file'
    assert determine_route_prefix('router', parsed, [], []) == ''


def test_first_prefix_wins_for_duplicate_router_names(write_project, ctx):
    root = write_project({'routes.js': "export const api = x;\n"})
    parsed = parse_file(str(root / 'routes.js'), ctx)
    prefixes = [RoutePrefix('/v1', 'api', 'a.js'), RoutePrefix('/v2', 'api', 'b.js')]

    assert determine_route_prefix('router', parsed, ['api'], prefixes) == '/v1'
