"""ContextVar-based parse configuration for Feast.

Combinators are pure functions of their Pass, so the few knobs that affect
diagnostics (tracing, rendering width) live in a ContextVar rather than on
every parser.

Thread Safety:
    ContextVars are isolated per thread and per asyncio context, so no locks
    are needed.

Usage:
    from feast.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(trace=True)):
        outcome = parser(SlicePass.from_source(b"hello"))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        trace: Log combinator diagnostics (such as the first-branch error
            discarded by or_) at DEBUG level
        preview_tokens: Maximum number of tokens rendered when describing
            an expected or observed sequence

    """

    trace: bool = False
    preview_tokens: int = 16

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> ParseConfig.from_dict({"trace": True, "colour": "red"}).trace
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "feast_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration for this context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(preview_tokens=4)):
        ...     get_parse_config().preview_tokens
        4

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
