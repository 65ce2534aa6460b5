from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

_DEFAULT_BRANCH_BITS = 5
_MIN_BRANCH_BITS = 1
_MAX_BRANCH_BITS = 8
_SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc


def normalise_branch_bits(value: int | None) -> int:
    if value is None:
        return _DEFAULT_BRANCH_BITS
    if not _MIN_BRANCH_BITS <= value <= _MAX_BRANCH_BITS:
        raise ValueError(
            f"Unsupported branch bits '{value}'. Expected {_MIN_BRANCH_BITS}..{_MAX_BRANCH_BITS}."
        )
    return value


def _normalise_log_level(value: str | None) -> str:
    if value is None:
        return "INFO"
    value = value.strip().upper()
    if value not in _SUPPORTED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level '{value}'. Expected one of {sorted(_SUPPORTED_LOG_LEVELS)}.")
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    branch_bits: int
    log_level: str
    check_invariants: bool

    @property
    def branching_factor(self) -> int:
        return 1 << self.branch_bits

    def describe(self) -> dict[str, object]:
        return {
            "branch_bits": self.branch_bits,
            "branching_factor": self.branching_factor,
            "log_level": self.log_level,
            "check_invariants": self.check_invariants,
        }


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("triearray")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    branch_bits = normalise_branch_bits(_parse_optional_int(os.getenv("TRIEARRAY_BRANCH_BITS")))
    log_level = _normalise_log_level(os.getenv("TRIEARRAY_LOG_LEVEL"))
    check_invariants = _bool_from_env(os.getenv("TRIEARRAY_CHECK_INVARIANTS"), default=False)

    config = RuntimeConfig(
        branch_bits=branch_bits,
        log_level=log_level,
        check_invariants=check_invariants,
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
