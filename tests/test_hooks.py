"""Tests for emission hooks."""

import pytest
from graphql import parse

from gql_apollo_ops.core.hooks import (
    AddHeaderHook,
    FilterOperationsHook,
    HookRunner,
    PostEmitHook,
    PreEmitHook,
)
from gql_apollo_ops.core.ir import DocumentFile


def operation_names(documents):
    return [
        d.name.value
        for doc in documents
        for d in doc.document.definitions
        if d.name is not None
    ]


@pytest.fixture
def sample_documents():
    """Create sample documents for testing."""
    return [
        DocumentFile(
            document=parse(
                """
                query GetUser { user { id } }
                query InternalStats { stats }
                fragment UserFields on User { id }
                """
            ),
            location="user.graphql",
        ),
        DocumentFile(
            document=parse("mutation UpdateUserMutation { updateUser { id } }"),
            location="update.graphql",
        ),
    ]


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("// Auto-generated")
        result = hook.post_emit("operations.ts", "export const A = 1;")
        assert result.startswith("// Auto-generated\n\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("// Header")
        content = "export const A = 1;"
        result = hook.post_emit("operations.ts", content)
        assert content in result

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("// Header\n")
        result = hook.post_emit("operations.ts", "code")
        # Should not double-up newlines
        assert result == "// Header\n\ncode"

    def test_plain_header_is_commented(self):
        hook = AddHeaderHook("Generated - do not edit")
        result = hook.post_emit("operations.ts", "code")
        assert result == "// Generated - do not edit\n\ncode"

    def test_multiline_header(self):
        hook = AddHeaderHook("/*\n * License\n */\nGenerated\n\nby gql-apollo-ops")
        assert hook.banner == "/*\n * License\n */\n// Generated\n//\n// by gql-apollo-ops"


class TestFilterOperationsHook:
    """Tests for FilterOperationsHook."""

    def test_exclude_prefix(self, sample_documents):
        hook = FilterOperationsHook(exclude_prefix="Internal")
        result = hook.pre_emit(sample_documents)
        assert operation_names(result) == ["GetUser", "UserFields", "UpdateUserMutation"]

    def test_exclude_suffix(self, sample_documents):
        hook = FilterOperationsHook(exclude_suffix="Mutation")
        result = hook.pre_emit(sample_documents)
        assert "UpdateUserMutation" not in operation_names(result)
        assert "GetUser" in operation_names(result)

    def test_include_prefix(self, sample_documents):
        hook = FilterOperationsHook(include_prefix="Get")
        result = hook.pre_emit(sample_documents)
        # Fragments are never filtered
        assert operation_names(result) == ["GetUser", "UserFields"]

    def test_include_suffix(self, sample_documents):
        hook = FilterOperationsHook(include_suffix="Mutation")
        result = hook.pre_emit(sample_documents)
        assert operation_names(result) == ["UserFields", "UpdateUserMutation"]

    def test_exclusion_wins_over_inclusion(self, sample_documents):
        hook = FilterOperationsHook(include_prefix="Get", exclude_suffix="User")
        result = hook.pre_emit(sample_documents)
        assert operation_names(result) == ["UserFields"]

    def test_is_active(self):
        assert not FilterOperationsHook().is_active
        assert FilterOperationsHook(include_suffix="Query").is_active

    def test_keeps_documents_and_locations(self, sample_documents):
        hook = FilterOperationsHook(include_prefix="Nothing")
        result = hook.pre_emit(sample_documents)
        assert [doc.location for doc in result] == ["user.graphql", "update.graphql"]
        assert len(result[1].document.definitions) == 0

    def test_does_not_mutate_input(self, sample_documents):
        hook = FilterOperationsHook(exclude_prefix="Internal")
        hook.pre_emit(sample_documents)
        assert "InternalStats" in operation_names(sample_documents)


class TestHookRunner:
    """Tests for HookRunner."""

    def test_runs_pre_hooks_in_order(self, sample_documents):
        runner = HookRunner()
        runner.add(FilterOperationsHook(exclude_prefix="Internal"))
        runner.add(FilterOperationsHook(exclude_prefix="Update"))

        result = runner.run_pre_hooks(sample_documents)

        assert operation_names(result) == ["GetUser", "UserFields"]

    def test_runs_post_hooks_in_order(self):
        runner = HookRunner()
        runner.add(AddHeaderHook("// First"))
        runner.add(AddHeaderHook("// Second"))

        result = runner.run_post_hooks("operations.ts", "code")

        # Second header is added last, so it appears first
        assert result.startswith("// Second")
        assert "// First" in result

    def test_empty_runner(self, sample_documents):
        runner = HookRunner()
        assert runner.run_pre_hooks(sample_documents) is sample_documents
        assert runner.run_post_hooks("operations.ts", "code") == "code"


class TestProtocols:
    """Tests for protocol compliance."""

    def test_add_header_is_post_emit_hook(self):
        assert isinstance(AddHeaderHook("x"), PostEmitHook)

    def test_filter_is_pre_emit_hook(self):
        assert isinstance(FilterOperationsHook(), PreEmitHook)

    def test_custom_pre_hook(self, sample_documents):
        class KeepFirst:
            def pre_emit(self, documents):
                return documents[:1]

        hook = KeepFirst()
        assert isinstance(hook, PreEmitHook)
        assert len(hook.pre_emit(sample_documents)) == 1


class TestHookRegistration:
    """Tests for HookRunner.add dispatch."""

    def test_constructor_registers_hooks(self):
        runner = HookRunner([FilterOperationsHook(), AddHeaderHook("x")])
        assert len(runner.pre_hooks) == 1
        assert len(runner.post_hooks) == 1

    def test_hook_with_both_phases(self, sample_documents):
        class Both:
            def pre_emit(self, documents):
                return documents[1:]

            def post_emit(self, filename, content):
                return content.upper()

        runner = HookRunner([Both()])

        assert operation_names(runner.run_pre_hooks(sample_documents)) == ["UpdateUserMutation"]
        assert runner.run_post_hooks("operations.ts", "code") == "CODE"

    def test_rejects_non_hook(self):
        runner = HookRunner()
        with pytest.raises(TypeError, match="neither pre_emit nor post_emit"):
            runner.add(object())
