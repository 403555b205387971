import json
from collections.abc import Mapping
from typing import NamedTuple

from theme_helper.services.schema import (
    ValidationContext,
    attach_language,
    build_node,
    validate_node,
    validate_sub_entities,
)
from theme_helper.services.schema_types import SchemaType
from theme_helper.utils.helpers import get_logger

SCHEMA_CONTEXT = 'https://schema.org'

DEFAULT_OPTIONS = {
    'use_alternate': True,
    'on_invalid': 'skip',
    'attach_language': True,
}

# Option names accepted in an ``options`` mapping
OPTION_ALIASES = {
    'use_alternate': 'use_alternate',
    'on_invalid': 'on_invalid',
    'attach_language': 'attach_language',
    'attach_inLanguage': 'attach_language',
}


class StructuredDataResult(NamedTuple):
    script: str
    graph: list
    errors: list


def to_script(payload) -> str:
    """Serialize ``payload`` into a JSON-LD script tag"""
    body = json.dumps(payload, ensure_ascii=False, indent=4)
    # keep a literal "</script>" inside a value from closing the tag
    body = body.replace('</', '<\\/')
    return f'<script type="application/ld+json">{body}</script>'


class StructuredData:
    """
    Entry point for JSON-LD generation.

    ``generate`` picks one of three modes:

    1. ``data["schemas"]`` holds ready nodes: they are emitted as a raw
       @graph, validated but not re-normalized,
    2. an alternate strategy is registered and enabled: it builds the node,
       then the regular validators check it,
    3. otherwise (or when the strategy fails) the regular builder runs.

    Validation messages of every call are appended to this instance's buffer
    and drained with ``pull_errors``.
    """

    def __init__(self, alternate=None, locale=None, defaults=None):
        self.alternate = alternate
        self.locale = locale
        self.defaults = {**DEFAULT_OPTIONS, **(defaults or {})}
        self._errors = []

    def pull_errors(self):
        errors, self._errors = self._errors, []
        return errors

    def resolve_options(self, options=None, **overrides):
        resolved = dict(self.defaults)
        for key, value in (options or {}).items():
            if key not in OPTION_ALIASES:
                raise ValueError(f"Unknown structured data option: {key}")
            resolved[OPTION_ALIASES[key]] = value
        resolved.update({k: v for k, v in overrides.items() if v is not None})
        resolved['use_alternate'] = bool(resolved['use_alternate'])
        resolved['attach_language'] = bool(resolved['attach_language'])
        return resolved

    def generate(self, data, options=None, *, use_alternate=None, on_invalid=None,
                 attach_language=None) -> str:
        return self.generate_result(
            data, options,
            use_alternate=use_alternate, on_invalid=on_invalid, attach_language=attach_language,
        ).script

    def generate_result(self, data, options=None, *, use_alternate=None, on_invalid=None,
                        attach_language=None) -> StructuredDataResult:
        opts = self.resolve_options(
            options, use_alternate=use_alternate, on_invalid=on_invalid, attach_language=attach_language,
        )
        context = ValidationContext(opts['on_invalid'])
        data = data or {}

        try:
            schemas = data.get('schemas')
            if isinstance(schemas, (list, tuple)) and schemas:
                graph = self._raw_graph(schemas, opts, context)
            else:
                graph = [self._build(data, opts, context)]
        finally:
            self._errors.extend(context.errors)

        script = to_script({'@context': SCHEMA_CONTEXT, '@graph': graph})
        return StructuredDataResult(script, graph, list(context.errors))

    def _raw_graph(self, schemas, opts, context):
        graph = []
        for index, node in enumerate(schemas):
            if not isinstance(node, Mapping):
                context.note(f"@graph entry {index} is not a mapping and was skipped")
                continue
            node = dict(node)
            if opts['attach_language']:
                attach_language(node, self.locale)
            if '@type' in node:
                node = validate_node(node['@type'], node, context)
            graph.append(node)
        return graph

    def _build(self, data, opts, context):
        schema_type = data.get('type') or SchemaType.ORGANIZATION

        if opts['use_alternate'] and self.alternate is not None:
            try:
                built = self.alternate.build_node(schema_type, data)
            except Exception as e:
                get_logger().warning(f"Alternate JSON-LD builder failed for {schema_type}: {e}")
                context.note(f"Alternate builder fallback: {e}")
                built = None
            if built is not None:
                if opts['attach_language']:
                    attach_language(built, self.locale)
                built = validate_sub_entities(built, context)
                return validate_node(schema_type, built, context)

        return build_node(
            schema_type, data,
            attach_lang=opts['attach_language'], context=context, locale=self.locale,
        )
