"""Naming conventions for generated type references.

Converts raw GraphQL operation names into the identifier stems used by the
separately generated `{Name}Query` / `{Name}Document` symbols. Word splitting
matches the change-case rules used by graphql-codegen, so the stems line up
with what the type generation step produced.

Example:
    convert = convert_factory(NamingConfig(types_prefix="I"))
    convert("getUser")                          # "IGetUser"
    convert("getUser", use_types_prefix=False)  # "GetUser"
"""

import json
import re
from pathlib import Path
from typing import Callable

from graphql import NameNode
from pydantic import BaseModel, ConfigDict, Field, field_validator

SPLIT_PATTERNS = (
    re.compile(r"([a-z0-9])([A-Z])"),
    re.compile(r"([A-Z])([A-Z][a-z])"),
)
STRIP_PATTERN = re.compile(r"[^A-Za-z0-9]+")

KEEP = "keep"
DEFAULT_CONVENTION = "pascalCase"


def split_words(name: str) -> list[str]:
    """Split an identifier into words on case and punctuation boundaries."""
    result = name
    for pattern in SPLIT_PATTERNS:
        result = pattern.sub("\\1\0\\2", result)
    result = STRIP_PATTERN.sub("\0", result)
    return [word for word in result.strip("\0").split("\0") if word]


def _pascal_word(word: str, index: int) -> str:
    first, rest = word[0], word[1:].lower()
    if index > 0 and first.isdigit():
        return f"_{first}{rest}"
    return f"{first.upper()}{rest}"


def pascal_case(name: str) -> str:
    """Convert to PascalCase, e.g. 'getHTTPStatus' -> 'GetHttpStatus'."""
    return "".join(_pascal_word(word, i) for i, word in enumerate(split_words(name)))


def camel_case(name: str) -> str:
    """Convert to camelCase, e.g. 'GetUser' -> 'getUser'."""
    return "".join(
        word.lower() if i == 0 else _pascal_word(word, i)
        for i, word in enumerate(split_words(name))
    )


def snake_case(name: str) -> str:
    """Convert to snake_case."""
    return "_".join(word.lower() for word in split_words(name))


def constant_case(name: str) -> str:
    """Convert to CONSTANT_CASE."""
    return "_".join(word.upper() for word in split_words(name))


CONVENTIONS: dict[str, Callable[[str], str]] = {
    KEEP: lambda name: name,
    "pascalCase": pascal_case,
    "camelCase": camel_case,
    "snakeCase": snake_case,
    "constantCase": constant_case,
    "upperCase": str.upper,
    "lowerCase": str.lower,
}


def resolve_convention(convention: str) -> Callable[[str], str]:
    """Look up a convention by name, accepting the 'change-case-all#' prefix."""
    key = convention.split("#", 1)[1] if "#" in convention else convention
    if key not in CONVENTIONS:
        raise ValueError(
            f"Unknown naming convention '{convention}'. "
            f"Supported: {', '.join(sorted(CONVENTIONS))}"
        )
    return CONVENTIONS[key]


class NamingConfig(BaseModel):
    """Naming options, accepted in snake_case or codegen camelCase spelling."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    naming_convention: str | dict[str, str | bool] | None = Field(
        default=None, alias="namingConvention"
    )
    types_prefix: str = Field(default="", alias="typesPrefix")
    types_suffix: str = Field(default="", alias="typesSuffix")
    transform_underscore: bool = Field(default=False, alias="transformUnderscore")

    @field_validator("naming_convention")
    @classmethod
    def _check_convention(cls, value):
        if isinstance(value, str):
            resolve_convention(value)
        elif isinstance(value, dict):
            for kind, convention in value.items():
                if kind == "transformUnderscore":
                    continue
                if not isinstance(convention, str):
                    raise ValueError(f"Naming convention for '{kind}' must be a string")
                resolve_convention(convention)
        return value

    @classmethod
    def from_file(cls, path: str | Path) -> "NamingConfig":
        """Load a config from a JSON file."""
        with open(path) as f:
            return cls.model_validate(json.load(f))

    def convention_for(self, kind: str) -> Callable[[str], str]:
        """Return the case function for a name kind such as 'typeNames'."""
        convention = self.naming_convention
        if isinstance(convention, dict):
            convention = convention.get(kind)
        return resolve_convention(convention or DEFAULT_CONVENTION)

    def underscore_transformed(self) -> bool:
        if isinstance(self.naming_convention, dict):
            flag = self.naming_convention.get("transformUnderscore")
            if flag is not None:
                return str(flag).lower() == "true"
        return self.transform_underscore


def convert_name_parts(name: str, func: Callable[[str], str], transform_underscore: bool) -> str:
    """Apply func to the whole name, or to each underscore-separated part."""
    if transform_underscore:
        return func(name)
    return "_".join(func(part) for part in name.split("_"))


def convert_factory(config: NamingConfig | dict | None = None):
    """Build a name converter bound to a naming configuration.

    Args:
        config: NamingConfig, a mapping accepted by NamingConfig, or None
            for the defaults (PascalCase, no prefix or suffix).

    Returns:
        convert(name, *, kind="typeNames", use_types_prefix=True,
        use_types_suffix=True) -> str
    """
    if not isinstance(config, NamingConfig):
        config = NamingConfig.model_validate(config or {})

    def convert(
        name: str | NameNode,
        *,
        kind: str = "typeNames",
        use_types_prefix: bool = True,
        use_types_suffix: bool = True,
    ) -> str:
        raw = name.value if isinstance(name, NameNode) else name
        func = config.convention_for(kind)
        if func is CONVENTIONS[KEEP]:
            converted = raw
        else:
            converted = convert_name_parts(raw, func, config.underscore_transformed())
        prefix = config.types_prefix if use_types_prefix else ""
        suffix = config.types_suffix if use_types_suffix else ""
        return f"{prefix}{converted}{suffix}"

    return convert
