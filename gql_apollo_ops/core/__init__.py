"""Core modules for Apollo operation wrapper generation."""

from .emitter import (
    PREAMBLE,
    AnonymousOperationError,
    EmptySelectionSetError,
    OperationEmitError,
    OperationEmitter,
    data_accessor,
    emit,
    plugin,
)
from .hooks import (
    AddHeaderHook,
    FilterOperationsHook,
    HookRunner,
    PostEmitHook,
    PreEmitHook,
)
from .ir import DocumentFile, EmitResult, EmittedUnit, PluginOutput
from .loader import DocumentLoader, extract_archive, load_schema
from .naming import NamingConfig, convert_factory

__all__ = [
    # Emitter
    "PREAMBLE",
    "OperationEmitter",
    "data_accessor",
    "emit",
    "plugin",
    # Errors
    "OperationEmitError",
    "EmptySelectionSetError",
    "AnonymousOperationError",
    # Hooks
    "PreEmitHook",
    "PostEmitHook",
    "AddHeaderHook",
    "FilterOperationsHook",
    "HookRunner",
    # IR types
    "DocumentFile",
    "EmitResult",
    "EmittedUnit",
    "PluginOutput",
    # Loading
    "DocumentLoader",
    "extract_archive",
    "load_schema",
    # Naming
    "NamingConfig",
    "convert_factory",
]
