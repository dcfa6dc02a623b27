"""GraphQL document and schema loading using graphql-core.

Collects .graphql files and parses them into DocumentFile objects
(operations) or a GraphQLSchema (type definitions).
"""

import logging
import os
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

from graphql import GraphQLSchema, build_ast_schema, parse

from .ir import DocumentFile

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".graphql", ".gql")
SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")
ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")
# Extraction filters arrived in 3.10.12 / 3.11.4
TAR_FILTERS = hasattr(tarfile, "data_filter")


def is_archive(path: Path) -> bool:
    return path.is_file() and path.name.lower().endswith(ARCHIVE_SUFFIXES)


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            if TAR_FILTERS:
                tar_ref.extractall(temp_dir, filter="data")
            else:
                tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def collect_files(path: str, extensions: tuple[str, ...]) -> list[str]:
    """Collect files with the given extensions from a file or directory."""
    files = []
    if os.path.isfile(path):
        if path.endswith(extensions):
            files.append(path)
    else:
        for root, _, filenames in os.walk(path):
            for filename in filenames:
                if filename.endswith(extensions):
                    files.append(os.path.join(root, filename))
    return sorted(files)


class DocumentLoader:
    """Parses GraphQL operation documents into DocumentFile objects."""

    def __init__(self, documents_path: str):
        """Initialize a loader with a path to a document file or directory."""
        self.documents_path = documents_path

    def load_all(self) -> list[DocumentFile]:
        """Parse all document files in sorted path order."""
        documents = []
        for file_path in collect_files(self.documents_path, DOCUMENT_EXTENSIONS):
            with open(file_path) as f:
                content = f.read()
            try:
                document = parse(content)
            except Exception as e:
                logger.error("Error parsing %s: %s", file_path, e)
                raise
            documents.append(DocumentFile(document=document, location=file_path))
        logger.debug("Loaded %d documents from %s", len(documents), self.documents_path)
        return documents


def load_schema(schema_path: str) -> GraphQLSchema:
    """Build a schema from every schema file under schema_path."""
    files = collect_files(schema_path, SCHEMA_EXTENSIONS)
    if not files:
        raise ValueError(f"No schema files found in {schema_path}")

    sources = []
    for file_path in files:
        with open(file_path) as f:
            sources.append(f.read())
    try:
        return build_ast_schema(parse("\n".join(sources)), assume_valid_sdl=True)
    except Exception as e:
        logger.error("Error building schema from %s: %s", schema_path, e)
        raise
