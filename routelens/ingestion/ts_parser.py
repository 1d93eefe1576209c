"""
TypeScript front end.

esprima only understands JavaScript up to ES2017, so .ts/.tsx files (and
newer JavaScript esprima rejects) are parsed with tree-sitter and the
concrete syntax tree is converted into ESTree-shaped `Node` objects.
Type-level syntax the analyzer reads (interfaces, type aliases, return
types) becomes typescript-estree style TS* nodes; everything the analyzer
never inspects is kept as a generic node so walks still reach the calls
nested inside it.
"""

import codecs

import tree_sitter_typescript
from tree_sitter import Language, Parser

from routelens.ingestion.nodes import Node

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_parsers = {}

KEYWORD_TYPES = {
    'string': 'TSStringKeyword',
    'number': 'TSNumberKeyword',
    'boolean': 'TSBooleanKeyword',
    'any': 'TSAnyKeyword',
    'unknown': 'TSUnknownKeyword',
    'void': 'TSVoidKeyword',
    'null': 'TSNullKeyword',
    'undefined': 'TSUndefinedKeyword',
    'never': 'TSNeverKeyword',
    'object': 'TSObjectKeyword',
    'symbol': 'TSSymbolKeyword',
    'bigint': 'TSBigIntKeyword',
}

LOGICAL_OPERATORS = {'&&', '||', '??'}


def _get_parser(tsx: bool) -> Parser:
    key = 'tsx' if tsx else 'ts'
    if key not in _parsers:
        _parsers[key] = Parser(TSX_LANGUAGE if tsx else TS_LANGUAGE)
    return _parsers[key]


def parse_typescript(source: str, tsx: bool = False) -> Node:
    """
    Parse TypeScript (or modern JavaScript) into an ESTree Program node.
    Raises SyntaxError when tree-sitter had to recover from errors.
    """
    data = source.encode('utf-8')
    tree = _get_parser(tsx).parse(data)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        line = bad.start_point[0] + 1 if bad is not None else 0
        raise SyntaxError(f'unparsable TypeScript near line {line}')
    return _Converter(source, data).convert(root)


def _first_error(ts):
    if ts.type == 'ERROR' or ts.is_missing:
        return ts
    for child in ts.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _char_offsets(text: str) -> list:
    table = []
    for index, ch in enumerate(text):
        table.extend([index] * len(ch.encode('utf-8')))
    table.append(len(text))
    return table


def _decode_escape(raw: str) -> str:
    try:
        return codecs.decode(raw, 'unicode_escape')
    except (UnicodeDecodeError, ValueError):
        return raw


def _parse_number(text: str):
    text = text.replace('_', '').rstrip('n')
    lower = text.lower()
    try:
        if lower.startswith('0x'):
            return int(lower, 16)
        if lower.startswith('0o'):
            return int(lower[2:], 8)
        if lower.startswith('0b'):
            return int(lower[2:], 2)
        if any(c in lower for c in '.e'):
            return float(lower)
        return int(lower)
    except ValueError:
        return None


class _Converter:

    def __init__(self, source: str, data: bytes):
        self.data = data
        # byte offset -> char offset; identity for pure ASCII sources
        self.offsets = None if len(data) == len(source) else _char_offsets(source)

    # ─────────────────────────────────────────────
    # plumbing
    # ─────────────────────────────────────────────

    def range(self, ts):
        if self.offsets is None:
            return [ts.start_byte, ts.end_byte]
        return [self.offsets[ts.start_byte], self.offsets[ts.end_byte]]

    def text(self, ts) -> str:
        return self.data[ts.start_byte:ts.end_byte].decode('utf-8', errors='replace')

    def node(self, type, ts, **fields):
        return Node(type, range=self.range(ts), **fields)

    @staticmethod
    def named(ts) -> list:
        return [c for c in ts.named_children if c.type != 'comment']

    def first_named(self, ts):
        children = self.named(ts)
        return children[0] if children else None

    @staticmethod
    def has_token(ts, token: str) -> bool:
        return any(not c.is_named and c.type == token for c in ts.children)

    def convert(self, ts):
        if ts is None:
            return None
        handler = getattr(self, '_' + ts.type, None)
        if handler is None:
            return self.generic(ts)
        return handler(ts)

    def convert_all(self, children) -> list:
        return [self.convert(c) for c in children]

    def generic(self, ts):
        return self.node(ts.type, ts, children=self.convert_all(self.named(ts)))

    def identifier(self, ts):
        return self.node('Identifier', ts, name=self.text(ts))

    # ─────────────────────────────────────────────
    # statements
    # ─────────────────────────────────────────────

    def _program(self, ts):
        return self.node('Program', ts, body=self.convert_all(self.named(ts)), sourceType='module')

    def _statement_block(self, ts):
        return self.node('BlockStatement', ts, body=self.convert_all(self.named(ts)))

    def _expression_statement(self, ts):
        return self.node('ExpressionStatement', ts, expression=self.convert(self.first_named(ts)))

    def _lexical_declaration(self, ts):
        kind = ts.children[0].type if ts.children else 'const'
        declarations = [self.convert(c) for c in self.named(ts) if c.type == 'variable_declarator']
        return self.node('VariableDeclaration', ts, declarations=declarations, kind=kind)

    _variable_declaration = _lexical_declaration

    def _variable_declarator(self, ts):
        return self.node(
            'VariableDeclarator', ts,
            id=self.convert(ts.child_by_field_name('name')),
            init=self.convert(ts.child_by_field_name('value')),
        )

    def _return_statement(self, ts):
        return self.node('ReturnStatement', ts, argument=self.convert(self.first_named(ts)))

    def _throw_statement(self, ts):
        return self.node('ThrowStatement', ts, argument=self.convert(self.first_named(ts)))

    def _if_statement(self, ts):
        alternate = ts.child_by_field_name('alternative')
        if alternate is not None and alternate.type == 'else_clause':
            alternate = self.first_named(alternate)
        return self.node(
            'IfStatement', ts,
            test=self.convert(ts.child_by_field_name('condition')),
            consequent=self.convert(ts.child_by_field_name('consequence')),
            alternate=self.convert(alternate),
        )

    def _try_statement(self, ts):
        handler = ts.child_by_field_name('handler')
        finalizer = ts.child_by_field_name('finalizer')
        catch_clause = None
        if handler is not None:
            catch_clause = self.node(
                'CatchClause', handler,
                param=self.convert(handler.child_by_field_name('parameter')),
                body=self.convert(handler.child_by_field_name('body')),
            )
        return self.node(
            'TryStatement', ts,
            block=self.convert(ts.child_by_field_name('body')),
            handler=catch_clause,
            finalizer=self.convert(finalizer.child_by_field_name('body')) if finalizer is not None else None,
        )

    # ─────────────────────────────────────────────
    # modules
    # ─────────────────────────────────────────────

    def _import_statement(self, ts):
        source = ts.child_by_field_name('source')
        specifiers = []
        for child in self.named(ts):
            if child.type == 'import_clause':
                specifiers.extend(self._import_clause(child))
            elif child.type == 'import_require_clause':
                # import x = require('y')
                local = self.first_named(child)
                specifiers.append(self.node('ImportDefaultSpecifier', child, local=self.identifier(local)))
                source = child.child_by_field_name('source') or source
        return self.node(
            'ImportDeclaration', ts,
            specifiers=specifiers,
            source=self.convert(source) if source is not None else None,
        )

    def _import_clause(self, ts) -> list:
        specifiers = []
        for child in self.named(ts):
            if child.type == 'identifier':
                specifiers.append(self.node('ImportDefaultSpecifier', child, local=self.identifier(child)))
            elif child.type == 'namespace_import':
                local = self.first_named(child)
                specifiers.append(self.node('ImportNamespaceSpecifier', child, local=self.identifier(local)))
            elif child.type == 'named_imports':
                for spec in self.named(child):
                    if spec.type != 'import_specifier':
                        continue
                    name = spec.child_by_field_name('name')
                    alias = spec.child_by_field_name('alias') or name
                    specifiers.append(self.node(
                        'ImportSpecifier', spec,
                        imported=self.identifier(name),
                        local=self.identifier(alias),
                    ))
        return specifiers

    def _export_statement(self, ts):
        declaration = ts.child_by_field_name('declaration')
        value = ts.child_by_field_name('value')
        source = ts.child_by_field_name('source')
        clause = next((c for c in self.named(ts) if c.type == 'export_clause'), None)

        if self.has_token(ts, 'default'):
            return self.node('ExportDefaultDeclaration', ts, declaration=self.convert(declaration or value))

        if clause is None and source is not None:
            return self.node('ExportAllDeclaration', ts, source=self.convert(source))

        specifiers = []
        if clause is not None:
            for spec in self.named(clause):
                if spec.type != 'export_specifier':
                    continue
                name = spec.child_by_field_name('name')
                alias = spec.child_by_field_name('alias') or name
                specifiers.append(self.node(
                    'ExportSpecifier', spec,
                    local=self.identifier(name),
                    exported=self.identifier(alias),
                ))
        return self.node(
            'ExportNamedDeclaration', ts,
            declaration=self.convert(declaration),
            specifiers=specifiers,
            source=self.convert(source) if source is not None else None,
        )

    # ─────────────────────────────────────────────
    # functions and classes
    # ─────────────────────────────────────────────

    def params(self, ts) -> list:
        single = ts.child_by_field_name('parameter')
        if single is not None:
            return [self.pattern(single)]
        parameters = ts.child_by_field_name('parameters')
        if parameters is None:
            return []
        result = []
        for param in self.named(parameters):
            if param.type in ('required_parameter', 'optional_parameter'):
                target = self.pattern(param.child_by_field_name('pattern'))
                default = param.child_by_field_name('value')
                if default is not None:
                    target = self.node('AssignmentPattern', param, left=target, right=self.convert(default))
                result.append(target)
            elif param.type not in ('this_type', 'decorator'):
                result.append(self.pattern(param))
        return result

    def return_type(self, ts):
        annotation = ts.child_by_field_name('return_type')
        return self.convert_type(annotation) if annotation is not None else None

    def function(self, type, ts, name=None):
        body = ts.child_by_field_name('body')
        converted = self.convert(body)
        return self.node(
            type, ts,
            id=self.convert(name) if name is not None else None,
            params=self.params(ts),
            body=converted,
            returnType=self.return_type(ts),
            isAsync=self.has_token(ts, 'async'),
            expression=body is not None and body.type != 'statement_block',
        )

    def _function_declaration(self, ts):
        return self.function('FunctionDeclaration', ts, ts.child_by_field_name('name'))

    _generator_function_declaration = _function_declaration

    def _function_expression(self, ts):
        return self.function('FunctionExpression', ts, ts.child_by_field_name('name'))

    _function = _function_expression
    _generator_function = _function_expression

    def _arrow_function(self, ts):
        return self.function('ArrowFunctionExpression', ts)

    def _class_declaration(self, ts):
        return self.klass('ClassDeclaration', ts)

    _abstract_class_declaration = _class_declaration

    def _class(self, ts):
        return self.klass('ClassExpression', ts)

    def klass(self, type, ts):
        name = ts.child_by_field_name('name')
        body = ts.child_by_field_name('body')
        members = []
        if body is not None:
            for member in self.named(body):
                if member.type == 'method_definition':
                    members.append(self.node(
                        'MethodDefinition', member,
                        key=self.property_key(member.child_by_field_name('name')),
                        computed=False,
                        value=self.function('FunctionExpression', member),
                        kind='method',
                        static=self.has_token(member, 'static'),
                    ))
                elif member.type == 'public_field_definition':
                    members.append(self.node(
                        'PropertyDefinition', member,
                        key=self.property_key(member.child_by_field_name('name')),
                        value=self.convert(member.child_by_field_name('value')),
                        static=self.has_token(member, 'static'),
                    ))
                else:
                    members.append(self.convert(member))
        return self.node(
            type, ts,
            id=self.identifier(name) if name is not None else None,
            body=self.node('ClassBody', body if body is not None else ts, body=members),
        )

    # ─────────────────────────────────────────────
    # expressions
    # ─────────────────────────────────────────────

    def _identifier(self, ts):
        return self.identifier(ts)

    _property_identifier = _identifier
    _shorthand_property_identifier = _identifier
    _shorthand_property_identifier_pattern = _identifier
    _private_property_identifier = _identifier
    _statement_identifier = _identifier

    def _undefined(self, ts):
        return self.node('Identifier', ts, name='undefined')

    def _this(self, ts):
        return self.node('ThisExpression', ts)

    def _super(self, ts):
        return self.node('Super', ts)

    def _string(self, ts):
        parts = []
        for child in ts.named_children:
            if child.type == 'escape_sequence':
                parts.append(_decode_escape(self.text(child)))
            else:
                parts.append(self.text(child))
        return self.node('Literal', ts, value=''.join(parts), raw=self.text(ts))

    def _template_string(self, ts):
        quasis, expressions, current = [], [], []
        for child in ts.named_children:
            if child.type == 'template_substitution':
                quasis.append(self._template_element(child, ''.join(current), tail=False))
                current = []
                expressions.append(self.convert(self.first_named(child)))
            elif child.type == 'escape_sequence':
                current.append(_decode_escape(self.text(child)))
            else:
                current.append(self.text(child))
        quasis.append(self._template_element(ts, ''.join(current), tail=True))
        return self.node('TemplateLiteral', ts, quasis=quasis, expressions=expressions)

    def _template_element(self, ts, text, tail):
        return self.node('TemplateElement', ts, value={'raw': text, 'cooked': text}, tail=tail)

    def _number(self, ts):
        return self.node('Literal', ts, value=_parse_number(self.text(ts)), raw=self.text(ts))

    def _true(self, ts):
        return self.node('Literal', ts, value=True, raw='true')

    def _false(self, ts):
        return self.node('Literal', ts, value=False, raw='false')

    def _null(self, ts):
        return self.node('Literal', ts, value=None, raw='null')

    def _regex(self, ts):
        pattern = ts.child_by_field_name('pattern')
        flags = ts.child_by_field_name('flags')
        return self.node(
            'Literal', ts, value=None, raw=self.text(ts),
            regex={
                'pattern': self.text(pattern) if pattern is not None else '',
                'flags': self.text(flags) if flags is not None else '',
            },
        )

    def property_key(self, ts):
        if ts is None:
            return None
        if ts.type == 'computed_property_name':
            return self.convert(self.first_named(ts))
        return self.convert(ts)

    def _object(self, ts):
        properties = []
        for child in self.named(ts):
            if child.type == 'pair':
                key = child.child_by_field_name('key')
                properties.append(self.node(
                    'Property', child,
                    key=self.property_key(key),
                    computed=key is not None and key.type == 'computed_property_name',
                    value=self.convert(child.child_by_field_name('value')),
                    kind='init', method=False, shorthand=False,
                ))
            elif child.type == 'shorthand_property_identifier':
                properties.append(self.node(
                    'Property', child,
                    key=self.identifier(child), computed=False,
                    value=self.identifier(child),
                    kind='init', method=False, shorthand=True,
                ))
            elif child.type == 'method_definition':
                key = child.child_by_field_name('name')
                properties.append(self.node(
                    'Property', child,
                    key=self.property_key(key),
                    computed=key is not None and key.type == 'computed_property_name',
                    value=self.function('FunctionExpression', child),
                    kind='init', method=True, shorthand=False,
                ))
            else:
                properties.append(self.convert(child))
        return self.node('ObjectExpression', ts, properties=properties)

    def _array(self, ts):
        return self.node('ArrayExpression', ts, elements=self.convert_all(self.named(ts)))

    def _spread_element(self, ts):
        return self.node('SpreadElement', ts, argument=self.convert(self.first_named(ts)))

    def arguments(self, ts) -> list:
        if ts is None:
            return []
        if ts.type == 'template_string':
            # tagged template: tag`...`
            return [self.convert(ts)]
        return self.convert_all(self.named(ts))

    def _call_expression(self, ts):
        function = ts.child_by_field_name('function')
        args = self.arguments(ts.child_by_field_name('arguments'))
        if function is not None and function.type == 'import':
            return self.node('ImportExpression', ts, source=args[0] if args else None)
        return self.node(
            'CallExpression', ts,
            callee=self.convert(function),
            arguments=args,
            optional=any(c.type == 'optional_chain' for c in ts.children),
        )

    def _new_expression(self, ts):
        return self.node(
            'NewExpression', ts,
            callee=self.convert(ts.child_by_field_name('constructor')),
            arguments=self.arguments(ts.child_by_field_name('arguments')),
        )

    def _await_expression(self, ts):
        return self.node('AwaitExpression', ts, argument=self.convert(self.first_named(ts)))

    def _member_expression(self, ts):
        prop = ts.child_by_field_name('property')
        return self.node(
            'MemberExpression', ts,
            computed=False,
            object=self.convert(ts.child_by_field_name('object')),
            property=self.identifier(prop) if prop is not None else None,
            optional=any(c.type == 'optional_chain' for c in ts.children),
        )

    def _subscript_expression(self, ts):
        return self.node(
            'MemberExpression', ts,
            computed=True,
            object=self.convert(ts.child_by_field_name('object')),
            property=self.convert(ts.child_by_field_name('index')),
            optional=any(c.type == 'optional_chain' for c in ts.children),
        )

    def _assignment_expression(self, ts):
        return self.node(
            'AssignmentExpression', ts,
            operator='=',
            left=self.pattern(ts.child_by_field_name('left')),
            right=self.convert(ts.child_by_field_name('right')),
        )

    def _augmented_assignment_expression(self, ts):
        operator = ts.child_by_field_name('operator')
        return self.node(
            'AssignmentExpression', ts,
            operator=self.text(operator) if operator is not None else '=',
            left=self.convert(ts.child_by_field_name('left')),
            right=self.convert(ts.child_by_field_name('right')),
        )

    def _binary_expression(self, ts):
        operator = ts.child_by_field_name('operator')
        op = self.text(operator) if operator is not None else ''
        return self.node(
            'LogicalExpression' if op in LOGICAL_OPERATORS else 'BinaryExpression', ts,
            operator=op,
            left=self.convert(ts.child_by_field_name('left')),
            right=self.convert(ts.child_by_field_name('right')),
        )

    def _unary_expression(self, ts):
        operator = ts.child_by_field_name('operator')
        return self.node(
            'UnaryExpression', ts,
            operator=self.text(operator) if operator is not None else '',
            argument=self.convert(ts.child_by_field_name('argument')),
            prefix=True,
        )

    def _ternary_expression(self, ts):
        return self.node(
            'ConditionalExpression', ts,
            test=self.convert(ts.child_by_field_name('condition')),
            consequent=self.convert(ts.child_by_field_name('consequence')),
            alternate=self.convert(ts.child_by_field_name('alternative')),
        )

    def _sequence_expression(self, ts):
        expressions = []
        for child in self.named(ts):
            converted = self.convert(child)
            if getattr(converted, 'type', None) == 'SequenceExpression':
                expressions.extend(converted.expressions)
            else:
                expressions.append(converted)
        return self.node('SequenceExpression', ts, expressions=expressions)

    def _parenthesized_expression(self, ts):
        return self.convert(self.first_named(ts))

    def _as_expression(self, ts):
        return self.convert(self.first_named(ts))

    _satisfies_expression = _as_expression
    _non_null_expression = _as_expression

    def _type_assertion(self, ts):
        children = self.named(ts)
        return self.convert(children[-1]) if children else None

    # ─────────────────────────────────────────────
    # patterns
    # ─────────────────────────────────────────────

    def pattern(self, ts):
        if ts is None:
            return None
        if ts.type == 'object_pattern':
            return self.object_pattern(ts)
        if ts.type == 'array_pattern':
            return self.node('ArrayPattern', ts, elements=[self.pattern(c) for c in self.named(ts)])
        if ts.type == 'assignment_pattern':
            return self.node(
                'AssignmentPattern', ts,
                left=self.pattern(ts.child_by_field_name('left')),
                right=self.convert(ts.child_by_field_name('right')),
            )
        if ts.type == 'rest_pattern':
            return self.node('RestElement', ts, argument=self.pattern(self.first_named(ts)))
        return self.convert(ts)

    def object_pattern(self, ts):
        properties = []
        for child in self.named(ts):
            if child.type == 'pair_pattern':
                key = child.child_by_field_name('key')
                properties.append(self.node(
                    'Property', child,
                    key=self.property_key(key),
                    computed=key is not None and key.type == 'computed_property_name',
                    value=self.pattern(child.child_by_field_name('value')),
                    kind='init', method=False, shorthand=False,
                ))
            elif child.type == 'shorthand_property_identifier_pattern':
                properties.append(self.node(
                    'Property', child,
                    key=self.identifier(child), computed=False,
                    value=self.identifier(child),
                    kind='init', method=False, shorthand=True,
                ))
            elif child.type == 'object_assignment_pattern':
                left = child.child_by_field_name('left')
                properties.append(self.node(
                    'Property', child,
                    key=self.identifier(left), computed=False,
                    value=self.node(
                        'AssignmentPattern', child,
                        left=self.identifier(left),
                        right=self.convert(child.child_by_field_name('right')),
                    ),
                    kind='init', method=False, shorthand=True,
                ))
            elif child.type == 'rest_pattern':
                properties.append(self.node('RestElement', child, argument=self.pattern(self.first_named(child))))
        return self.node('ObjectPattern', ts, properties=properties)

    _object_pattern = object_pattern

    # ─────────────────────────────────────────────
    # type declarations
    # ─────────────────────────────────────────────

    def _interface_declaration(self, ts):
        body = ts.child_by_field_name('body')
        members = self.type_members(body) if body is not None else []
        return self.node(
            'TSInterfaceDeclaration', ts,
            id=self.identifier(ts.child_by_field_name('name')),
            body=self.node('TSInterfaceBody', body if body is not None else ts, body=members),
        )

    def _type_alias_declaration(self, ts):
        return self.node(
            'TSTypeAliasDeclaration', ts,
            id=self.identifier(ts.child_by_field_name('name')),
            typeAnnotation=self.convert_type(ts.child_by_field_name('value')),
        )

    def type_members(self, ts) -> list:
        members = []
        for member in self.named(ts):
            if member.type == 'property_signature':
                annotation = next((c for c in self.named(member) if c.type == 'type_annotation'), None)
                members.append(self.node(
                    'TSPropertySignature', member,
                    key=self.property_key(member.child_by_field_name('name')),
                    optional=self.has_token(member, '?'),
                    typeAnnotation=self.convert_type(annotation) if annotation is not None else None,
                ))
            else:
                members.append(self.node(member.type, member))
        return members

    def convert_type(self, ts):
        if ts is None:
            return None
        kind = ts.type
        if kind in ('type_annotation', 'parenthesized_type'):
            return self.convert_type(self.first_named(ts))
        if kind == 'predefined_type':
            text = self.text(ts)
            return self.node(KEYWORD_TYPES.get(text, 'TSUnknownKeyword'), ts, name=text)
        if kind in ('type_identifier', 'nested_type_identifier'):
            return self.node('TSTypeReference', ts, typeName=self.identifier(ts), typeParameters=None)
        if kind == 'generic_type':
            name = ts.child_by_field_name('name')
            arguments = ts.child_by_field_name('type_arguments')
            params = [self.convert_type(c) for c in self.named(arguments)] if arguments is not None else []
            return self.node(
                'TSTypeReference', ts,
                typeName=self.identifier(name) if name is not None else None,
                typeParameters=params,
            )
        if kind == 'array_type':
            return self.node('TSArrayType', ts, elementType=self.convert_type(self.first_named(ts)))
        if kind == 'union_type':
            types = []
            for child in self.named(ts):
                converted = self.convert_type(child)
                if getattr(converted, 'type', None) == 'TSUnionType':
                    types.extend(converted.types)
                else:
                    types.append(converted)
            return self.node('TSUnionType', ts, types=types)
        if kind == 'literal_type':
            return self.literal_type(ts)
        if kind in ('null', 'undefined'):
            return self.node(KEYWORD_TYPES[kind], ts, name=kind)
        if kind == 'object_type':
            return self.node('TSTypeLiteral', ts, members=self.type_members(ts))
        return self.node(kind, ts)

    def literal_type(self, ts):
        inner = self.first_named(ts)
        if inner is None:
            return self.node('TSUnknownKeyword', ts, name=self.text(ts))
        if inner.type in ('null', 'undefined'):
            return self.node(KEYWORD_TYPES[inner.type], ts, name=inner.type)
        if inner.type == 'unary_expression':
            argument = inner.child_by_field_name('argument')
            value = _parse_number(self.text(argument)) if argument is not None else None
            literal = self.node('Literal', inner, value=-value if value is not None else None, raw=self.text(inner))
            return self.node('TSLiteralType', ts, literal=literal)
        return self.node('TSLiteralType', ts, literal=self.convert(inner))
