"""Command-line interface for gql-apollo-ops."""

import click
import logging
import shutil
import sys
from pathlib import Path

from pydantic import ValidationError

from .core.emitter import OperationEmitError, OperationEmitter
from .core.hooks import AddHeaderHook, FilterOperationsHook, HookRunner
from .core.ir import PluginOutput
from .core.loader import DocumentLoader, extract_archive, is_archive, load_schema
from .core.naming import NamingConfig


def _resolve_path(path: Path, temp_dirs: list[str], verbose: bool) -> Path:
    """Return path, or the directory an archive was extracted to."""
    if not is_archive(path):
        return path
    click.echo(f"Extracting archive {path.name}...")
    temp_dir = extract_archive(path)
    temp_dirs.append(temp_dir)
    if verbose:
        click.echo(f"  Extracted to: {temp_dir}")
    return Path(temp_dir)


def _build_config(
    config_path: str | None,
    naming_convention: str | None,
    types_prefix: str | None,
    types_suffix: str | None,
    transform_underscore: bool | None,
) -> NamingConfig:
    """Merge the JSON config file with command-line overrides."""
    config = NamingConfig.from_file(config_path) if config_path else NamingConfig()
    overrides = {
        "naming_convention": naming_convention,
        "types_prefix": types_prefix,
        "types_suffix": types_suffix,
        "transform_underscore": transform_underscore,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return config
    return NamingConfig.model_validate({**config.model_dump(), **overrides})


@click.group()
@click.version_option(package_name="gql-apollo-ops")
def main():
    """Apollo client wrapper generator for GraphQL operations.

    Generate typed TypeScript functions from GraphQL queries and mutations.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--documents",
    "-d",
    required=True,
    multiple=True,
    type=click.Path(exists=True),
    help="Operation document file, directory, or archive. Repeatable.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for generated wrappers (e.g., operations.ts).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with naming options (namingConvention, typesPrefix, ...).",
)
@click.option("--naming-convention", default=None, help="Naming convention for type names (default: pascalCase).")
@click.option("--types-prefix", default=None, help="Types prefix from the codegen config; operation type references never carry it.")
@click.option("--types-suffix", default=None, help="Types suffix from the codegen config; operation type references never carry it.")
@click.option(
    "--transform-underscore/--keep-underscore",
    default=None,
    help="Convert names as a whole instead of per underscore-separated part.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option("--header", default=None, help="Header comment added to the top of the output.")
@click.option("--exclude-prefix", default=None, help="Skip operations whose name starts with this prefix.")
@click.option("--exclude-suffix", default=None, help="Skip operations whose name ends with this suffix.")
@click.option("--include-prefix", default=None, help="Only emit operations whose name starts with this prefix.")
@click.option("--include-suffix", default=None, help="Only emit operations whose name ends with this suffix.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str | None,
    documents: tuple[str, ...],
    output: str,
    config_path: str | None,
    naming_convention: str | None,
    types_prefix: str | None,
    types_suffix: str | None,
    transform_underscore: bool | None,
    template_dir: str | None,
    header: str | None,
    exclude_prefix: str | None,
    exclude_suffix: str | None,
    include_prefix: str | None,
    include_suffix: str | None,
    verbose: bool,
):
    """Generate Apollo wrapper functions from GraphQL operations.

    Examples:

        gql-apollo-ops generate --documents ./queries --output ./src/operations.ts

        gql-apollo-ops generate -s ./schema.graphql -d ./queries -o ./operations.ts

        gql-apollo-ops generate -d ./queries.tgz -o ./operations.ts --types-prefix I
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    output_path = Path(output).resolve()
    temp_dirs: list[str] = []

    try:
        try:
            config = _build_config(
                config_path, naming_convention, types_prefix, types_suffix, transform_underscore
            )
        except ValidationError as e:
            raise click.ClickException(f"Invalid naming config: {e}")

        hooks = HookRunner()
        operation_filter = FilterOperationsHook(
            exclude_prefix=exclude_prefix,
            exclude_suffix=exclude_suffix,
            include_prefix=include_prefix,
            include_suffix=include_suffix,
        )
        if operation_filter.is_active:
            hooks.add(operation_filter)
        if header:
            hooks.add(AddHeaderHook(header))

        # Parse schema
        parsed_schema = None
        if schema:
            schema_path = _resolve_path(Path(schema).resolve(), temp_dirs, verbose)
            click.echo("Parsing schema...")
            parsed_schema = load_schema(str(schema_path))
            if verbose:
                click.echo(f"  Types: {len(parsed_schema.type_map)}")

        # Parse documents
        click.echo("Parsing documents...")
        document_files = []
        for documents_path in documents:
            path = _resolve_path(Path(documents_path).resolve(), temp_dirs, verbose)
            document_files.extend(DocumentLoader(str(path)).load_all())
        document_files = hooks.run_pre_hooks(document_files)
        if verbose:
            click.echo(f"  Documents: {len(document_files)}")

        # Emit wrappers
        click.echo("Generating wrappers...")
        emitter = OperationEmitter(template_dir=template_dir)
        try:
            result = emitter.emit(
                parsed_schema, (doc.document for doc in document_files), config
            )
        except OperationEmitError as e:
            raise click.ClickException(str(e))

        if verbose:
            for unit in result.units:
                click.echo(f"  {unit.operation_type} {unit.name} -> {unit.data_name}")

        code = PluginOutput(prepend=result.preamble, content=result.content).render()
        code = hooks.run_post_hooks(output_path.name, code)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        click.echo(f"Writing to {output_path}...")
        with open(output_path, "w") as f:
            f.write(code)

        click.echo(f"Done! Generated {len(result.units)} operation wrappers.")
    finally:
        # Clean up temp directories
        for temp_dir in temp_dirs:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
