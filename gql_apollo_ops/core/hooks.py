"""Emission hooks for customizing generated output.

Provides protocols for pre- and post-emit hooks that can filter the parsed
documents before emission or transform the rendered file afterwards.

Example usage:
    from gql_apollo_ops.core.hooks import PreEmitHook, PostEmitHook

    # Pre-emit hook to drop internal operations
    class DropInternal(PreEmitHook):
        def pre_emit(self, documents):
            return [d for d in documents if "internal" not in (d.location or "")]

    # Post-emit hook to add headers
    class AddLicenseHeader(PostEmitHook):
        def post_emit(self, filename, content):
            header = "// Copyright 2024 My Company\\n\\n"
            return header + content
"""

from dataclasses import replace
from typing import Protocol, runtime_checkable

from graphql import DocumentNode, OperationDefinitionNode

from .ir import DocumentFile


@runtime_checkable
class PreEmitHook(Protocol):
    """Protocol for pre-emit hooks.

    Pre-emit hooks receive the parsed documents before emission and can
    filter or replace them. The returned documents are then emitted.
    """

    def pre_emit(self, documents: list[DocumentFile]) -> list[DocumentFile]:
        """Called before emission.

        Args:
            documents: The parsed documents in load order

        Returns:
            The (possibly modified) documents to emit
        """
        ...


@runtime_checkable
class PostEmitHook(Protocol):
    """Protocol for post-emit hooks.

    Post-emit hooks receive the rendered file and can transform it before
    it's written to disk.

    Example:
        class StripBlankLines(PostEmitHook):
            def post_emit(self, filename: str, content: str) -> str:
                return "\\n".join(line for line in content.splitlines() if line)
    """

    def post_emit(self, filename: str, content: str) -> str:
        """Called after emission.

        Args:
            filename: The name of the output file (e.g., "operations.ts")
            content: The rendered code

        Returns:
            The (possibly transformed) code to write
        """
        ...


COMMENT_MARKERS = ("//", "/*", "*")


class AddHeaderHook:
    """Built-in hook to put a comment banner above the generated file.

    Lines that are not already TypeScript comments are prefixed with
    `// `, so a plain string such as "Generated - do not edit" stays valid
    in the emitted `.ts` file.

    Example:
        hook = AddHeaderHook("Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    @property
    def banner(self) -> str:
        lines = self.header.rstrip("\n").splitlines() or [""]
        commented = [
            line if line.lstrip().startswith(COMMENT_MARKERS) else f"// {line}".rstrip()
            for line in lines
        ]
        return "\n".join(commented)

    def post_emit(self, _filename: str, content: str) -> str:
        """Prepend the banner followed by one blank line."""
        return f"{self.banner}\n\n{content}"


class FilterOperationsHook:
    """Built-in hook to filter operations by name prefix/suffix.

    Only operation definitions are filtered; fragments pass through so
    that remaining operations can still reference them. Exclusions win
    over inclusions.

    Example:
        # Drop all operations starting with "Internal"
        hook = FilterOperationsHook(exclude_prefix="Internal")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    @property
    def is_active(self) -> bool:
        return any(
            (self.exclude_prefix, self.exclude_suffix, self.include_prefix, self.include_suffix)
        )

    def _should_include(self, name: str) -> bool:
        """Check an operation name against the configured affixes."""
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        # str.startswith("") is always true, so unset includes match everything
        return name.startswith(self.include_prefix or "") and name.endswith(self.include_suffix or "")

    def _keep(self, definition) -> bool:
        if not isinstance(definition, OperationDefinitionNode) or definition.name is None:
            return True
        return self._should_include(definition.name.value)

    def pre_emit(self, documents: list[DocumentFile]) -> list[DocumentFile]:
        """Filter operation definitions out of each document."""
        result = []
        for doc in documents:
            definitions = tuple(d for d in doc.document.definitions if self._keep(d))
            result.append(replace(doc, document=DocumentNode(definitions=definitions, loc=doc.document.loc)))
        return result


class HookRunner:
    """Dispatches registered hooks to the pre- and post-emit phases.

    A hook object implementing both protocols takes part in both phases.
    Hooks run in registration order.
    """

    def __init__(self, hooks=()):
        self.pre_hooks: list[PreEmitHook] = []
        self.post_hooks: list[PostEmitHook] = []
        for hook in hooks:
            self.add(hook)

    def add(self, hook):
        """Register a hook for every phase whose protocol it implements."""
        matched = False
        if isinstance(hook, PreEmitHook):
            self.pre_hooks.append(hook)
            matched = True
        if isinstance(hook, PostEmitHook):
            self.post_hooks.append(hook)
            matched = True
        if not matched:
            raise TypeError(
                f"{type(hook).__name__} implements neither pre_emit nor post_emit"
            )

    def run_pre_hooks(self, documents: list[DocumentFile]) -> list[DocumentFile]:
        for hook in self.pre_hooks:
            documents = hook.pre_emit(documents)
        return documents

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_emit(filename, content)
        return content
