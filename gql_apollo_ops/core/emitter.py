"""Operation emitter for Apollo client wrappers.

Renders one exported async TypeScript function per query or mutation
definition, calling into an Apollo client, plus a fixed preamble that
imports the client types and holds the default client instance.

Supports custom templates via the template_dir parameter:
    emitter = OperationEmitter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from graphql import (
    DocumentNode,
    FieldNode,
    OperationDefinitionNode,
    OperationType,
    SelectionNode,
)
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .ir import DocumentFile, EmitResult, EmittedUnit, PluginOutput
from .naming import NamingConfig, convert_factory

logger = logging.getLogger(__name__)

PREAMBLE = (
    "import { ApolloClient } from '@apollo/client';",
    "import { MutationOptions, QueryOptions } from '@apollo/client/core/watchQueryOptions';",
    "let __client: ApolloClient<any>;",
    "export const setDefaultApolloClient = <T = any>(client: ApolloClient<T>) => { __client = client; }",
)

# operation kind -> (function template, input type template, generated type suffix)
OPERATION_TEMPLATES = {
    OperationType.QUERY: ("query.ts.j2", "query_input.ts.j2", "Query"),
    OperationType.MUTATION: ("mutation.ts.j2", "mutation_input.ts.j2", "Mutation"),
}


class OperationEmitError(ValueError):
    """Base error for definitions that cannot be turned into a wrapper."""


class EmptySelectionSetError(OperationEmitError):
    """Raised when an operation selects no top-level fields."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        super().__init__(
            f"Operation '{operation_name}' has an empty selection set; "
            "cannot derive a data accessor"
        )


class AnonymousOperationError(OperationEmitError):
    """Raised when a query or mutation has no name to export it under."""

    def __init__(self, operation_type: str):
        self.operation_type = operation_type
        super().__init__(f"Anonymous {operation_type} cannot be emitted; give it a name")


def data_accessor(operation_name: str, selections: Sequence[SelectionNode]) -> str:
    """Return the expression that unwraps the response payload.

    A single top-level field narrows to that field with optional chaining,
    so a response without data does not throw on access.
    """
    if not selections:
        raise EmptySelectionSetError(operation_name)
    if len(selections) > 1:
        return "data"
    selection = selections[0]
    if not isinstance(selection, FieldNode):
        # Fragment spreads have no single response key to narrow to
        return "data"
    return f"data?.{selection.name.value}"


class OperationEmitter:
    """Emits Apollo wrapper functions from GraphQL operation definitions.

    Available templates to override:
        - query.ts.j2: query wrapper function
        - mutation.ts.j2: mutation wrapper function
        - query_input.ts.j2: `input` parameter type for queries
        - mutation_input.ts.j2: `input` parameter type for mutations

    Example:
        emitter = OperationEmitter()
        result = emitter.emit(schema, [parse("query GetUser { user { id } }")])
        print("\\n".join(result.preamble))
        print(result.content)
    """

    def __init__(self, template_dir: str | None = None):
        """Initialize the emitter.

        Args:
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.template_dir = template_dir

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s not found, using defaults", template_dir)
        loaders.append(PackageLoader("gql_apollo_ops", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            keep_trailing_newline=True,
        )

    def emit(
        self,
        schema: Any,
        documents: Iterable[DocumentNode],
        config: NamingConfig | Mapping[str, Any] | None = None,
    ) -> EmitResult:
        """Render wrappers for every query and mutation in the documents.

        Args:
            schema: The GraphQL schema. Not inspected; kept for parity with
                    the host plugin signature.
            documents: Parsed documents, walked in order.
            config: Naming options for the referenced generated type names.

        Returns:
            EmitResult with the fixed preamble and newline-joined blocks
        """
        convert = convert_factory(config)
        units: list[EmittedUnit] = []

        for document in documents:
            for definition in document.definitions:
                unit = self._emit_definition(definition, convert)
                if unit is not None:
                    units.append(unit)

        logger.debug("Emitted %d operation wrappers", len(units))
        return EmitResult(
            preamble=list(PREAMBLE),
            content="\n".join(unit.text for unit in units),
            units=units,
        )

    def _emit_definition(self, definition, convert) -> EmittedUnit | None:
        if not isinstance(definition, OperationDefinitionNode):
            logger.debug("Skipping %s definition", definition.kind)
            return None

        templates = OPERATION_TEMPLATES.get(definition.operation)
        if templates is None:
            logger.warning(
                "Skipping %s '%s': only queries and mutations are emitted",
                definition.operation.value,
                definition.name.value if definition.name else "<anonymous>",
            )
            return None
        template_name, input_template_name, suffix = templates

        if definition.name is None:
            raise AnonymousOperationError(definition.operation.value)
        name = definition.name.value
        type_name = convert(definition.name, use_types_prefix=False, use_types_suffix=False)
        selection_set = definition.selection_set
        data_name = data_accessor(name, selection_set.selections if selection_set else ())
        has_variables = bool(definition.variable_definitions)

        input_type = self.env.get_template(input_template_name).render(
            variables=f",\n  variables: {type_name}{suffix}Variables" if has_variables else "",
            variable_undefined="" if has_variables else " = {}",
        )
        text = self.env.get_template(template_name).render(
            name=name,
            type_name=type_name,
            data_name=data_name,
            input_type=input_type,
            input_variables=",\n      variables: input.variables" if has_variables else "",
        )

        return EmittedUnit(
            name=name,
            type_name=type_name,
            data_name=data_name,
            has_variables=has_variables,
            operation_type=definition.operation.value,
            text=text,
        )


def emit(
    schema: Any,
    documents: Iterable[DocumentNode],
    config: NamingConfig | Mapping[str, Any] | None = None,
) -> EmitResult:
    """Emit wrappers with the built-in templates."""
    return OperationEmitter().emit(schema, documents, config)


def plugin(
    schema: Any,
    documents: Iterable[DocumentFile],
    config: NamingConfig | Mapping[str, Any] | None = None,
    info: Any = None,
) -> PluginOutput:
    """Host entry point: returns statements to prepend and the body content.

    `info` is accepted for signature compatibility and ignored.
    """
    result = emit(schema, (doc.document for doc in documents), config)
    return PluginOutput(prepend=result.preamble, content=result.content)
