"""Validate incoming tick messages against the RawTick model."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from zscore_monitor.metrics.prometheus import INVALID_MESSAGES
from zscore_monitor.models.tick import RawTick

logger = logging.getLogger(__name__)


def validate_tick(raw: dict[str, Any], source: str) -> RawTick | None:
    """Parse and validate a decoded JSON dict as a RawTick.

    The tick's ``source`` is forced to the streamer name so the multiplexer
    can key on it. Returns None on validation failure.
    """
    try:
        tick = RawTick.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Validation failed for tick from %s: %s", source, exc)
        INVALID_MESSAGES.labels(source=source).inc()
        return None
    tick.source = source
    return tick


def parse_tick(raw_text: str | bytes, source: str) -> RawTick | None:
    """Decode a JSON text message and validate it. Returns None on failure."""
    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON from %s: %s", source, exc)
        INVALID_MESSAGES.labels(source=source).inc()
        return None
    if not isinstance(raw, dict):
        logger.warning("Unexpected message type from %s: %s", source, type(raw).__name__)
        INVALID_MESSAGES.labels(source=source).inc()
        return None
    return validate_tick(raw, source)
