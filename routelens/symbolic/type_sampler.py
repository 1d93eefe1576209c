"""
Sample values synthesized from TypeScript declarations.

When a function's return value can't be recovered from its body, its
declared return type usually can: `Promise<User>` plus `interface User`
is enough to build a plausible example object. Property names drive the
sample values (an `email: string` field gets an address, `price: number`
gets a price).
"""

from routelens.context import AnalysisContext
from routelens.ingestion.loader import find_binding_module
from routelens.ingestion.nodes import identifier_name, key_name, node_type, walk
from routelens.models import ParsedFile
from routelens.symbolic.values import is_symbolic

TYPE_DECLARATIONS = {'TSInterfaceDeclaration', 'TSTypeAliasDeclaration'}
NULLISH_TYPES = {'TSNullKeyword', 'TSUndefinedKeyword', 'TSVoidKeyword'}

KNOWN_TYPES = {
    'Date': '2024-01-01T12:00:00.000Z',
    'Buffer': 'base64encodeddata',
    'ObjectId': '507f1f77bcf86cd799439011',
    'UUID': '550e8400-e29b-41d4-a716-446655440000',
}


def smart_string_value(prop_name: str) -> str:
    lower = prop_name.lower()
    if 'name' in lower:
        return f'Sample {prop_name}'
    if 'email' in lower:
        return 'sample@example.com'
    if 'url' in lower:
        return 'https://example.com'
    if 'description' in lower:
        return f'Sample {prop_name} description'
    if 'date' in lower:
        return '2024-01-01'
    if 'time' in lower:
        return '12:00:00'
    if 'status' in lower:
        return 'active'
    return f'Sample {prop_name}'


def smart_number_value(prop_name: str):
    lower = prop_name.lower()
    if 'id' in lower:
        return 1
    if 'price' in lower:
        return 99.99
    if 'count' in lower:
        return 10
    if 'age' in lower:
        return 25
    if 'year' in lower:
        return 2024
    return 100


def smart_default_value(type_name: str):
    """Placeholder for a named type with no declaration in reach."""
    if type_name.endswith('[]') or 'Array' in type_name:
        return []
    if type_name.endswith(('Type', 'Interface')) or type_name[:1].isupper():
        return {f'sample{type_name}Field': f'Sample {type_name} value'}
    return f'Sample {type_name}'


def _literal_type_value(node):
    value = getattr(getattr(node, 'literal', None), 'value', None)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _type_name(node):
    name = identifier_name(getattr(node, 'typeName', None))
    return name.split('.')[-1] if name else None


def _type_params(node) -> list:
    params = getattr(node, 'typeParameters', None)
    # typescript-estree wraps them in a TSTypeParameterInstantiation
    if params is not None and not isinstance(params, list):
        params = getattr(params, 'params', None)
    return list(params or [])


class TypeSampler:
    """
    Builds samples for type annotations of one file. Named types resolve
    through interface/type declarations in that file, then through the
    module the name is imported from.
    """

    def __init__(self, ctx: AnalysisContext):
        self.ctx = ctx
        # (path, type name) pairs currently being expanded
        self.resolving: set = set()

    def find_declaration(self, name: str, parsed: ParsedFile, seen: set = None):
        if seen is None:
            seen = set()
        if (parsed.path, name) in seen:
            return None
        seen.add((parsed.path, name))

        found = []

        def visitor(node, ancestors):
            if found:
                return 'stop'
            if node_type(node) in TYPE_DECLARATIONS and identifier_name(node.id) == name:
                found.append(node)
                return 'stop'

        walk(parsed.ast, visitor)
        if found:
            return found[0], parsed

        imported = find_binding_module(name, parsed, self.ctx)
        if imported is None:
            return None
        target, imported_name = imported
        if imported_name in ('default', '*'):
            imported_name = name
        return self.find_declaration(imported_name, target, seen)

    def sample_named(self, name: str, parsed: ParsedFile):
        found = self.find_declaration(name, parsed)
        if found is None:
            return None
        declaration, defining = found

        key = (defining.path, name)
        if key in self.resolving:
            return None
        self.resolving.add(key)
        try:
            if node_type(declaration) == 'TSInterfaceDeclaration':
                return self.sample_members(declaration.body.body, defining)
            return self.sample(declaration.typeAnnotation, name, defining)
        finally:
            self.resolving.discard(key)

    def sample_members(self, members: list, parsed: ParsedFile) -> dict:
        sample = {}
        for member in members or []:
            if node_type(member) != 'TSPropertySignature' or member.typeAnnotation is None:
                continue
            prop_name = key_name(member.key, getattr(member, 'computed', False))
            if prop_name is None:
                continue
            sample[prop_name] = self.sample(member.typeAnnotation, prop_name, parsed)
        return sample

    def sample(self, annotation, prop_name: str, parsed: ParsedFile):
        kind = node_type(annotation)

        if kind == 'TSTypeAnnotation':
            return self.sample(annotation.typeAnnotation, prop_name, parsed)

        if kind == 'TSStringKeyword':
            return smart_string_value(prop_name)

        if kind == 'TSNumberKeyword':
            return smart_number_value(prop_name)

        if kind == 'TSBooleanKeyword':
            return True

        if kind in NULLISH_TYPES:
            return None

        if kind == 'TSArrayType':
            return [self.sample(annotation.elementType, prop_name, parsed)]

        if kind == 'TSTypeReference':
            return self.sample_reference(annotation, prop_name, parsed)

        if kind == 'TSUnionType':
            types = annotation.types or []
            for member in types:
                if node_type(member) == 'TSLiteralType':
                    return _literal_type_value(member)
            for member in types:
                if node_type(member) not in NULLISH_TYPES:
                    return self.sample(member, prop_name, parsed)
            return None

        if kind == 'TSLiteralType':
            return _literal_type_value(annotation)

        if kind == 'TSTypeLiteral':
            return self.sample_members(annotation.members, parsed)

        return self.fallback_value(prop_name, kind)

    def sample_reference(self, annotation, prop_name: str, parsed: ParsedFile):
        name = _type_name(annotation)
        if name is None:
            return self.fallback_value(prop_name, node_type(annotation))
        params = _type_params(annotation)

        if name in ('Array', 'ReadonlyArray') and params:
            return [self.sample(params[0], prop_name, parsed)]
        if name == 'Promise' and params:
            return self.sample(params[0], prop_name, parsed)
        if name in KNOWN_TYPES:
            return KNOWN_TYPES[name]

        nested = self.sample_named(name, parsed)
        if nested is not None:
            return nested
        return smart_default_value(name)

    def fallback_value(self, prop_name: str, kind):
        self.ctx.logger.warning(f"Using fallback for unsupported type: {kind}")
        lower = prop_name.lower()
        if 'array' in lower or 'list' in lower:
            return []
        if 'object' in lower or 'data' in lower:
            return {'sampleField': 'sample value'}
        return f'Sample {prop_name}'


def unwrap_return_type(annotation):
    """Promise<T> -> T, then T | null | undefined -> T."""
    if node_type(annotation) == 'TSTypeAnnotation':
        annotation = annotation.typeAnnotation

    if node_type(annotation) == 'TSTypeReference' and _type_name(annotation) == 'Promise':
        params = _type_params(annotation)
        if params:
            annotation = params[0]

    if node_type(annotation) == 'TSUnionType':
        members = [t for t in annotation.types or [] if node_type(t) not in NULLISH_TYPES]
        references = [t for t in members if node_type(t) == 'TSTypeReference']
        if references:
            annotation = references[0]
        elif members:
            annotation = members[0]

    return annotation


def type_sample_for_function(func, parsed: ParsedFile, ctx: AnalysisContext):
    """Sample built from the function's declared return type, or None without a usable one."""
    annotation = unwrap_return_type(getattr(func, 'returnType', None))
    if node_type(annotation) not in ('TSTypeReference', 'TSArrayType', 'TSTypeLiteral'):
        return None
    sample = TypeSampler(ctx).sample(annotation, 'value', parsed)
    if sample is not None:
        ctx.logger.debug(f"    type sample from {parsed.path}: {sample}")
    return sample


def merge_partial_with_type_sample(partial, sample):
    """
    Fill the gaps of a partially recovered value from a type sample.
    Concrete values in `partial` always win; None and symbolic
    placeholders are replaced where the sample has something.
    """
    if partial is None or is_symbolic(partial):
        return sample if sample is not None else partial

    if isinstance(partial, list) and isinstance(sample, list):
        return partial if partial else sample

    if not isinstance(partial, dict) or not isinstance(sample, dict):
        return partial

    merged = dict(sample)
    for key, value in partial.items():
        if key in sample:
            merged[key] = merge_partial_with_type_sample(value, sample[key])
        elif value is not None:
            merged[key] = value
    return merged
