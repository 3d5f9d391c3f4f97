from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "callback-return.toml"

DEFAULT_CALLBACK_NAMES = ("callback",)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class CallbackReturnOptions(BaseModel):
    """Options for the callback-return rule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    names: tuple[str, ...] = Field(
        default=DEFAULT_CALLBACK_NAMES,
        description="Identifiers treated as callback-style calls",
    )

    @field_validator("names", mode="before")
    @classmethod
    def validate_names(cls, v: Any) -> Any:
        """Require plain identifiers and drop duplicates, keeping first order.

        An empty list is accepted and simply matches nothing.
        """

        if v is None:
            return ()

        if isinstance(v, str) or not isinstance(v, (list, tuple)):
            msg = "names must be a list of identifiers"
            raise ValueError(msg)

        unique: list[str] = []
        for name in v:
            if not isinstance(name, str):
                msg = "names must be a list of str"
                raise ValueError(msg)
            if not _IDENTIFIER_RE.match(name):
                msg = (
                    f"Invalid callback name '{name}': only plain identifiers "
                    "are matched (no member paths or wildcards)"
                )
                raise ValueError(msg)
            if name not in unique:
                unique.append(name)

        return tuple(unique)


class RulesConfig(BaseModel):
    """Per-rule option tables."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    callback_return: CallbackReturnOptions = Field(
        default_factory=CallbackReturnOptions,
        alias="callback-return",
        description="Options for the callback-return rule",
    )


class LintConfig(BaseModel):
    """Configuration for a callback-return lint run."""

    model_config = ConfigDict(extra="forbid")

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all JS files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    rules: RulesConfig = Field(
        default_factory=RulesConfig,
        description="Rule options",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> LintConfig:
    """Load configuration from callback-return.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        return LintConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return LintConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
