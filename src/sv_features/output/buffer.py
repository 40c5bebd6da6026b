"""
Named, typed, append-only container for per-jet features.

Features are declared once, either as a scalar slot or as a multi-valued slot
holding one entry per selected secondary vertex. Each jet is written as one
record between :meth:`FeatureBuffer.begin_jet` and :meth:`FeatureBuffer.end_jet`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from sv_features.data.schema import MULTI, SCALAR
from sv_features.errors import SchemaError, SchemaMismatchError

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Mapping

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Slot:
    arity: str
    dtype: np.dtype
    default: Any = None


class FeatureBuffer:
    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}
        self._columns: dict[str, list] = {}
        self._current: dict[str, Any] | None = None
        self._n_jets = 0

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------
    def _declare(self, name: str, slot: _Slot) -> None:
        if name in self._slots:
            raise SchemaError(f"Feature '{name}' is already declared")
        if self._n_jets or self._current is not None:
            raise SchemaError(f"Cannot declare '{name}' after filling has started")
        self._slots[name] = slot
        self._columns[name] = []

    def declare_scalar(self, name: str, dtype=np.float32, default=0) -> None:
        self._declare(name, _Slot(SCALAR, np.dtype(dtype), np.dtype(dtype).type(default)))

    def declare_multi(self, name: str, dtype=np.float32) -> None:
        self._declare(name, _Slot(MULTI, np.dtype(dtype)))

    @property
    def names(self) -> list[str]:
        return list(self._slots)

    @property
    def scalar_names(self) -> list[str]:
        return [name for name, slot in self._slots.items() if slot.arity == SCALAR]

    @property
    def multi_names(self) -> list[str]:
        return [name for name, slot in self._slots.items() if slot.arity == MULTI]

    def _slot(self, name: str, arity: str) -> _Slot:
        try:
            slot = self._slots[name]
        except KeyError:
            raise SchemaError(f"Feature '{name}' is not declared") from None
        if slot.arity != arity:
            raise SchemaError(f"Feature '{name}' is {slot.arity}, not {arity}")
        return slot

    # ------------------------------------------------------------------
    # Filling
    # ------------------------------------------------------------------
    def begin_jet(self) -> None:
        if self._current is not None:
            raise RuntimeError("Previous jet record was not committed or discarded")
        self._current = {
            name: (slot.default if slot.arity == SCALAR else [])
            for name, slot in self._slots.items()
        }

    def _record(self) -> dict[str, Any]:
        if self._current is None:
            raise RuntimeError("No open jet record; call begin_jet() first")
        return self._current

    def set_scalar(self, name: str, value) -> None:
        slot = self._slot(name, SCALAR)
        self._record()[name] = slot.dtype.type(value)

    def append_multi(self, name: str, value) -> None:
        slot = self._slot(name, MULTI)
        self._record()[name].append(slot.dtype.type(value))

    def end_jet(self, expected_count: int | None = None) -> None:
        """Validate and commit the open record.

        Raises:
            SchemaMismatchError: if multi-valued features hold different entry
                counts, or a count other than ``expected_count``.
        """
        record = self._record()
        try:
            counts = {name: len(record[name]) for name in self.multi_names}
            distinct = set(counts.values())
            if len(distinct) > 1 or (expected_count is not None and distinct - {expected_count}):
                raise SchemaMismatchError(counts, expected_count)

            converted = {
                name: np.asarray(record[name], dtype=slot.dtype)
                if slot.arity == MULTI
                else record[name]
                for name, slot in self._slots.items()
            }
        finally:
            self._current = None

        for name, value in converted.items():
            self._columns[name].append(value)
        self._n_jets += 1

    def discard_jet(self) -> None:
        self._current = None

    def fill_record(self, record: Mapping[str, Any], expected_count: int | None = None) -> None:
        """Write a full jet record in one step; nothing is kept if it is rejected."""
        self.begin_jet()
        try:
            for name, value in record.items():
                slot = self._slots.get(name)
                if slot is not None and slot.arity == MULTI:
                    for entry in value:
                        self.append_multi(name, entry)
                else:
                    self.set_scalar(name, value)
        except Exception:
            self.discard_jet()
            raise
        self.end_jet(expected_count)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._n_jets

    def to_frame(self) -> pd.DataFrame:
        """One row per committed jet; multi-valued cells hold numpy arrays."""
        data = {}
        for name, slot in self._slots.items():
            if slot.arity == SCALAR:
                data[name] = pd.Series(self._columns[name], dtype=slot.dtype)
            else:
                cells = np.empty(self._n_jets, dtype=object)
                for row, values in enumerate(self._columns[name]):
                    cells[row] = values
                data[name] = pd.Series(cells, dtype=object)
        frame = pd.DataFrame(data, index=pd.RangeIndex(self._n_jets))
        LOGGER.debug("Exported %d jet records with %d features", len(frame), len(data))
        return frame
