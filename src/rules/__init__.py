"""Rule definitions for callback-return."""

from rules.callback_return import (
    CallbackReturnRule,
    Placement,
    Verdict,
    classify,
    placement_of,
)
from rules.config import (
    CallbackReturnOptions,
    ConfigError,
    LintConfig,
    load_config,
)
from rules.diagnostics import Diagnostic
from rules.engine import run_rule, walk

__all__ = [
    "CallbackReturnOptions",
    "CallbackReturnRule",
    "ConfigError",
    "Diagnostic",
    "LintConfig",
    "Placement",
    "Verdict",
    "classify",
    "load_config",
    "placement_of",
    "run_rule",
    "walk",
]
