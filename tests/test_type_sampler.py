import logging

from routelens import analyze_routes
from routelens.ingestion.loader import parse_file
from routelens.symbolic.returns import find_function_definition
from routelens.symbolic.type_sampler import (
    TypeSampler,
    smart_default_value,
    smart_number_value,
    smart_string_value,
    type_sample_for_function,
)


def test_property_name_heuristics():
    assert smart_string_value('firstName') == 'Sample firstName'
    assert smart_string_value('email') == 'sample@example.com'
    assert smart_string_value('avatarUrl') == 'https://example.com'
    assert smart_string_value('status') == 'active'
    assert smart_string_value('title') == 'Sample title'
    assert smart_number_value('userId') == 1
    assert smart_number_value('price') == 99.99
    assert smart_number_value('count') == 10
    assert smart_number_value('age') == 25
    assert smart_number_value('weight') == 100
    assert smart_default_value('Item[]') == []
    assert smart_default_value('Order') == {'sampleOrderField': 'Sample Order value'}
    assert smart_default_value('thing') == 'Sample thing'


def test_sample_from_declared_return_type(write_project, ctx):
    root = write_project({
        'items.ts': """
            type Status = 'active' | 'archived';

            interface Tag {
              label: string;
            }

            interface Item {
              id: number;
              title: string;
              price: number;
              tags: Tag[];
              status: Status;
              owner?: Item | null;
              meta: { count: number };
              flags: Array<boolean>;
              createdAt: Date;
            }

            export function getItem(id: string): Promise<Item | undefined> {
              return fetchItem(id);
            }
        """,
    })
    parsed = parse_file(str(root / 'items.ts'), ctx)
    func = find_function_definition('getItem', parsed.ast)

    sample = type_sample_for_function(func, parsed, ctx)

    assert sample == {
        'id': 1,
        'title': 'Sample title',
        'price': 99.99,
        'tags': [{'label': 'Sample label'}],
        'status': 'active',
        'owner': {'sampleItemField': 'Sample Item value'},
        'meta': {'count': 10},
        'flags': [True],
        'createdAt': '2024-01-01T12:00:00.000Z',
    }


def test_types_resolve_through_imports(write_project, ctx):
    root = write_project({
        'types.ts': """
            export interface Account {
              accountId: number;
              email: string;
            }
        """,
        'service.ts': """
            import { Account } from './types';

            export function listAccounts(): Account[] {
              return repo.all();
            }
        """,
    })
    parsed = parse_file(str(root / 'service.ts'), ctx)
    func = find_function_definition('listAccounts', parsed.ast)

    assert type_sample_for_function(func, parsed, ctx) == [{'accountId': 1, 'email': 'sample@example.com'}]


def test_functions_without_usable_return_type(write_project, ctx):
    root = write_project({
        'svc.ts': """
            function plain() { return x; }
            function text(): string { return x; }
        """,
    })
    parsed = parse_file(str(root / 'svc.ts'), ctx)

    assert type_sample_for_function(find_function_definition('plain', parsed.ast), parsed, ctx) is None
    assert type_sample_for_function(find_function_definition('text', parsed.ast), parsed, ctx) is None


def test_unsupported_type_falls_back_with_warning(write_project, ctx, caplog):
    root = write_project({
        'svc.ts': """
            interface Box {
              dataBlob: () => void;
            }
        """,
    })
    parsed = parse_file(str(root / 'svc.ts'), ctx)

    with caplog.at_level(logging.WARNING, logger='routelens'):
        sample = TypeSampler(ctx).sample_named('Box', parsed)

    assert sample == {'dataBlob': {'sampleField': 'sample value'}}
    assert 'unsupported type' in caplog.text


def test_typescript_service_end_to_end(write_project, ctx):
    root = write_project({
        'app.ts': """
            import express from 'express';
            import userRoutes from './routes/user.routes';

            const app = express();
            app.use('/api/users', userRoutes);

            export default app;
        """,
        'routes/user.routes.ts': """
            import { Router, Request, Response } from 'express';
            import { userService } from '../services/userService';

            const router = Router();

            router.get('/:id', async (req: Request, res: Response) => {
              const user = await userService.getUser(req.params.id);
              res.status(200).json(user);
            });

            export default router;
        """,
        'services/userService.ts': """
            export interface User {
              id: number;
              name: string;
              email: string;
            }

            export const userService = {
              async getUser(id: string): Promise<User> {
                return db.find(id);
              },
            };
        """,
    })

    results = analyze_routes(str(root / 'app.ts'), ctx)

    assert len(results) == 1
    route = results[0]
    assert route.method == 'GET'
    assert route.path == '/api/users/:id'
    assert route.req['params'] == ['id']
    assert route.default.status == [200]
    assert route.default.json == [{'id': 1, 'name': 'Sample name', 'email': 'sample@example.com'}]
