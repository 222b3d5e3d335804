"""Writing assembled bundles to disk under a timestamped name."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "bundle-annexes"


def bundle_filename(now: Optional[datetime] = None) -> str:
    """``bundle-annexes-YYYYMMDDThhmmss.pdf`` in UTC."""
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{FILENAME_PREFIX}-{moment.strftime('%Y%m%dT%H%M%S')}.pdf"


def write_bundle(data: bytes, directory: Union[str, Path], now: Optional[datetime] = None) -> Path:
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / bundle_filename(now)
    path.write_bytes(data)
    logger.info("Bundle written to %s (%d bytes)", path, len(data))
    return path
