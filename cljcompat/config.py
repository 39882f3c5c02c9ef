from __future__ import annotations
import os
from dataclasses import dataclass, field, replace

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{var} must be a boolean flag, got {raw!r}")


def strict_keywords_default() -> bool:
    return flag_from_env('CLJCOMPAT_STRICT_KEYWORDS', False)


@dataclass(frozen=True)
class BindOptions:
    """Options consulted by bind_call.

    ``strict_keywords``: reject keywords outside the keyword-spec instead of
    ignoring them. Defaults to the CLJCOMPAT_STRICT_KEYWORDS environment flag,
    read when the options object is created.
    """

    strict_keywords: bool = field(default_factory=strict_keywords_default)

    def with_overrides(self, **changes) -> BindOptions:
        return replace(self, **changes)


def get_bind_options(strict_keywords: bool | None = None) -> BindOptions:
    if strict_keywords is None:
        return BindOptions()
    return BindOptions(strict_keywords=strict_keywords)
