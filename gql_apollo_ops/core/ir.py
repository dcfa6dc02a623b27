"""Intermediate Representation (IR) for operation emission.

This module defines the dataclasses passed between the host side (loading
documents, writing output) and the operation emitter.
"""

from dataclasses import dataclass, field

from graphql import DocumentNode


@dataclass
class DocumentFile:
    """A parsed GraphQL document together with where it was loaded from."""
    document: DocumentNode
    location: str | None = None


@dataclass
class EmittedUnit:
    """One rendered wrapper function for a query or mutation definition."""
    name: str
    type_name: str
    data_name: str
    has_variables: bool
    operation_type: str  # 'query' or 'mutation'
    text: str


@dataclass
class EmitResult:
    """Preamble statements plus the concatenated function bodies."""
    preamble: list[str]
    content: str
    units: list[EmittedUnit] = field(default_factory=list)

    @property
    def operation_names(self) -> list[str]:
        """Return the names of emitted functions in output order."""
        return [unit.name for unit in self.units]


@dataclass
class PluginOutput:
    """Host-facing result: statements to prepend and the body content."""
    prepend: list[str]
    content: str

    def render(self) -> str:
        """Join prepend statements and content into the final file text."""
        return "\n".join([*self.prepend, self.content])

    def to_dict(self) -> dict[str, object]:
        return {"prepend": list(self.prepend), "content": self.content}
