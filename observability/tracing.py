"""Simple span helper for recording provider call timings."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

logger = logging.getLogger("interview.spans")


@contextmanager
def span(name: str, sink: Optional[Dict[str, int]] = None) -> Iterator[None]:
    """Log the wall time of the wrapped block; optionally store it in ``sink[name]``."""

    start = time.time()
    try:
        yield
    finally:
        elapsed_ms = int((time.time() - start) * 1000)
        if sink is not None:
            sink[name] = elapsed_ms
        logger.debug("span=%s ms=%d", name, elapsed_ms)


__all__ = ["span"]
