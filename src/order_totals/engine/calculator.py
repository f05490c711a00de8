"""
Memoized totals derivation for call sites that recompute on every edit.

The cache is keyed on the resolved numeric value of every line plus the
options, never on object identity, so a list mutated in place and passed
again is recomputed. Results are frozen Totals, safe to hand out twice.
"""
import logging
import threading
from collections import OrderedDict
from typing import Iterable, Optional

from .models import ComputeOptions, Totals
from .totals_engine import LineInput, as_line_item, compute, resolve_options

logger = logging.getLogger(__name__)


def cache_key(lines: Optional[Iterable[LineInput]], options: ComputeOptions) -> tuple:
    """Structural key for (lines, options)."""
    resolved = tuple(as_line_item(line).resolved().as_key() for line in (lines or []))
    return (options.include_line_level_calculations, resolved)


class TotalsCalculator:
    """LRU-memoized wrapper around ``compute``."""

    def __init__(self, max_entries: int = 128, options: Optional[ComputeOptions] = None):
        self.max_entries = max(1, int(max_entries))
        self.options = options or ComputeOptions()
        self.hits = 0
        self.misses = 0
        self._cache: OrderedDict[tuple, Totals] = OrderedDict()
        self._lock = threading.Lock()

    def calculate(
        self,
        lines: Optional[Iterable[LineInput]],
        options: Optional[ComputeOptions] = None,
        *,
        include_line_level_calculations: Optional[bool] = None,
    ) -> Totals:
        opts = resolve_options(options or self.options, include_line_level_calculations)
        # Materialize once so generators are not consumed by the key
        items = [as_line_item(line) for line in (lines or [])]
        key = cache_key(items, opts)

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self.hits += 1
                return cached

        totals = compute(items, opts)

        with self._lock:
            self.misses += 1
            self._cache[key] = totals
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)
            size = len(self._cache)

        logger.debug("totals cache miss size=%d", size)
        return totals

    def clear(self):
        """Drop all cached results and reset counters."""
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._cache),
                "max_entries": self.max_entries,
                "hits": self.hits,
                "misses": self.misses,
            }
