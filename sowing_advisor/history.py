"""
Historical outcome store: running average yield and success rate per (crop, region).

Update rule (per record):
    first sample  → avg_yield = yield, success_rate = 1.0 if success else 0.0
    later samples → avg_yield    = (avg_yield + yield) / 2
                    success_rate = (success_rate + (1.0 | 0.0)) / 2

The success rate is used only as a multiplier when ranking future sowing
windows (0.8 when no record exists). Updates are read-modify-write on one
record, so each (crop, region) key has its own lock.

Persistence is an optional CSV (data/processed/historical_outcomes.csv):
    crop, region, avg_yield, success_rate, samples
"""

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from sowing_advisor.config import (
    PROCESSED_DATA_DIR,
    HISTORY_FNAME,
    DEFAULT_SUCCESS_MULTIPLIER,
)
from sowing_advisor.reference_data import (
    ReferenceData,
    default_reference_data,
    normalise_crop,
)

log = logging.getLogger(__name__)

HISTORY_COLUMNS = ["crop", "region", "avg_yield", "success_rate", "samples"]


@dataclass(frozen=True)
class HistoricalOutcome:
    avg_yield: float
    success_rate: float
    samples: int = 1


class HistoryStore:
    """
    Thread-safe keyed store of HistoricalOutcome records.

    Parameters
    ----------
    reference : ReferenceData or None
        Supplies the seed records and crop-name aliases.
    path : Path or None
        CSV used by load()/save(). None disables persistence.
    seed : bool
        Start from the reference's historical seed records.
    """

    def __init__(
        self,
        reference: ReferenceData | None = None,
        path: Path | None = None,
        seed: bool = True,
    ):
        self._reference = reference or default_reference_data()
        self._path = path
        self._records: dict[tuple[str, str], HistoricalOutcome] = {}
        self._key_locks: dict[tuple[str, str], threading.Lock] = {}
        self._registry_lock = threading.Lock()
        if seed:
            for (crop, region), rec in self._reference.historical_seed.items():
                self._records[(crop, region)] = HistoricalOutcome(
                    avg_yield=float(rec["avg_yield"]),
                    success_rate=float(rec["success_rate"]),
                )

    # ------------------------------------------------------------------
    # Keys and locks
    # ------------------------------------------------------------------

    def _key(self, crop: str, region: str) -> tuple[str, str]:
        return normalise_crop(crop, self._reference), (region or "").strip()

    def _lock_for(self, key: tuple[str, str]) -> threading.Lock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, crop: str, region: str) -> HistoricalOutcome | None:
        return self._records.get(self._key(crop, region))

    def success_multiplier(self, crop: str, region: str) -> float:
        """Historical success rate for the pair, or the default multiplier."""
        rec = self.get(crop, region)
        return rec.success_rate if rec is not None else DEFAULT_SUCCESS_MULTIPLIER

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def record_outcome(
        self,
        crop: str,
        region: str,
        yield_value: float,
        success: bool,
    ) -> HistoricalOutcome:
        """
        Fold one observed season into the (crop, region) record.
        Returns the updated record.
        """
        try:
            value = float(yield_value)
        except (TypeError, ValueError):
            raise ValueError(f"Yield must be numeric, got {yield_value!r}") from None
        if math.isnan(value) or math.isinf(value) or value < 0:
            raise ValueError(f"Yield must be a non-negative finite number, got {yield_value!r}")
        key = self._key(crop, region)
        if not key[0] or not key[1]:
            raise ValueError("Crop and region are required to record an outcome")

        hit = 1.0 if success else 0.0
        with self._lock_for(key):
            existing = self._records.get(key)
            if existing is None:
                updated = HistoricalOutcome(avg_yield=value, success_rate=hit, samples=1)
            else:
                updated = HistoricalOutcome(
                    avg_yield=(existing.avg_yield + value) / 2,
                    success_rate=(existing.success_rate + hit) / 2,
                    samples=existing.samples + 1,
                )
            self._records[key] = updated
        log.info(
            "Recorded outcome for %s/%s: avg_yield=%.3f success_rate=%.3f",
            key[0], key[1], updated.avg_yield, updated.success_rate,
        )
        return updated

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "crop": crop,
                "region": region,
                "avg_yield": rec.avg_yield,
                "success_rate": rec.success_rate,
                "samples": rec.samples,
            }
            for (crop, region), rec in sorted(self._records.items())
        ]
        return pd.DataFrame(rows, columns=HISTORY_COLUMNS)

    def load(self, path: Path | None = None) -> int:
        """
        Merge records from CSV (file rows win over seed records).
        Returns the number of rows loaded; 0 if the file is absent or malformed.
        """
        path = path or self._path
        if path is None or not Path(path).exists():
            log.debug("History file not found at %s; keeping seed records.", path)
            return 0
        try:
            df = pd.read_csv(path)
        except Exception as exc:
            log.warning("Could not read history (%s): %s", path, exc)
            return 0
        df.columns = [c.strip().lower() for c in df.columns]
        missing = [c for c in HISTORY_COLUMNS[:4] if c not in df.columns]
        if missing:
            log.warning("History CSV missing columns %s. Available: %s", missing, list(df.columns))
            return 0
        if "samples" not in df.columns:
            df["samples"] = 1
        df["avg_yield"] = pd.to_numeric(df["avg_yield"], errors="coerce")
        df["success_rate"] = pd.to_numeric(df["success_rate"], errors="coerce")
        df["samples"] = pd.to_numeric(df["samples"], errors="coerce").fillna(1)
        df = df.dropna(subset=["crop", "region", "avg_yield", "success_rate"])

        loaded = 0
        for row in df.itertuples(index=False):
            key = self._key(row.crop, row.region)
            with self._lock_for(key):
                self._records[key] = HistoricalOutcome(
                    avg_yield=float(row.avg_yield),
                    success_rate=max(0.0, min(1.0, float(row.success_rate))),
                    samples=int(row.samples),
                )
            loaded += 1
        log.info("Loaded %d historical outcome rows from %s.", loaded, path)
        return loaded

    def save(self, path: Path | None = None) -> Path:
        path = Path(path or self._path or PROCESSED_DATA_DIR / HISTORY_FNAME)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(path, index=False)
        log.info("Saved %d historical outcome rows to %s.", len(self), path)
        return path


# ---------------------------------------------------------------------------
# Process-wide default store
# ---------------------------------------------------------------------------
_default_store: HistoryStore | None = None
_default_store_lock = threading.Lock()


def get_history_store() -> HistoryStore:
    """Default store, seeded and merged with the history CSV on first use."""
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            store = HistoryStore(path=PROCESSED_DATA_DIR / HISTORY_FNAME)
            store.load()
            _default_store = store
        return _default_store


def reset_history_store() -> None:
    """Drop the default store; the next get_history_store() rebuilds it."""
    global _default_store
    with _default_store_lock:
        _default_store = None


def record_outcome(crop: str, region: str, yield_value: float, success: bool) -> HistoricalOutcome:
    """Record an observed season into the default store."""
    return get_history_store().record_outcome(crop, region, yield_value, success)
