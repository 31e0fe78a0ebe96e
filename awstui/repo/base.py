from __future__ import annotations

import logging
from typing import Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError
from result import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

SDK_ERRORS: tuple[type[Exception], ...] = (BotoCoreError, ClientError)


def error_code(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return str(exc.response.get("Error", {}).get("Code", ""))
    return ""


def call(operation: str, fn: Callable[[], T], extra: tuple[type[Exception], ...] = ()) -> Result[T, str]:
    """Run one SDK round trip and turn its failure into an ``Err``."""
    try:
        return Ok(fn())
    except (*SDK_ERRORS, *extra) as exc:
        logger.warning("%s failed: %s", operation, exc)
        return Err(f"{operation} failed: {exc}")
