from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np


class PhysicalType(Enum):
    """FITS physical types used by OIFITS columns and keywords."""

    CHAR = ("A", np.str_)
    INT = ("I", np.int16)
    REAL = ("E", np.float32)
    DBL = ("D", np.float64)
    LOGICAL = ("L", np.bool_)
    COMPLEX = ("C", np.float32)

    def __init__(self, code: str, dtype: type) -> None:
        self.code = code
        self.dtype = np.dtype(dtype)

    def __str__(self) -> str:
        return self.code

    def accepts_dtype(self, dtype: np.dtype) -> bool:
        kind = np.dtype(dtype).kind
        if self is PhysicalType.CHAR:
            return kind in ("U", "S", "O")
        if self is PhysicalType.INT:
            return kind in ("i", "u")
        if self is PhysicalType.LOGICAL:
            return kind == "b"
        # REAL, DBL and COMPLEX (stored as float pairs)
        return kind == "f"

    def accepts_value(self, value: Any) -> bool:
        if self is PhysicalType.CHAR:
            return isinstance(value, str)
        if self is PhysicalType.LOGICAL:
            return isinstance(value, (bool, np.bool_))
        if isinstance(value, (bool, np.bool_)):
            return False
        if self is PhysicalType.INT:
            return isinstance(value, numbers.Integral)
        if self is PhysicalType.COMPLEX:
            return isinstance(value, numbers.Complex)
        return isinstance(value, numbers.Real)


class Unit(Enum):
    NO_UNIT = ""
    METER = "m"
    DEG = "deg"
    MJD = "day"
    SECOND = "s"
    HZ = "Hz"
    PER_METER = "m-1"
    RADIAN = "rad"
    YEAR = "yr"
    DEG_PER_YEAR = "deg/yr"
    METER_PER_SECOND = "m/s"
    ARCSEC = "arcsec"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: Optional[str]) -> "Unit":
        text = (text or "").strip()
        for unit in cls:
            if unit.value.lower() == text.lower():
                return unit
        raise ValueError(f"Unknown unit {text!r}")


class ValidationResult(Enum):
    OK = "ok"
    TYPE_MISMATCH = "type mismatch"
    NOT_IN_WHITELIST = "not in accepted values"
    BLANK_STRING = "blank string"


class ResolverContext(Protocol):
    """Lookups a descriptor needs from the file owning the checked table.

    Every method returns ``None`` when the answer cannot be resolved (for
    instance a missing OI_ARRAY); callers skip the dependent check then.
    """

    def nwave(self) -> Optional[int]: ...

    def nstations(self) -> Optional[int]: ...

    def accepted_ins_names(self) -> Optional[List[str]]: ...

    def accepted_arr_names(self) -> Optional[List[str]]: ...

    def accepted_corr_names(self) -> Optional[List[str]]: ...

    def accepted_sta_indexes(self) -> Optional[List[int]]: ...

    def accepted_target_ids(self) -> Optional[List[int]]: ...


@dataclass(frozen=True)
class Cardinality:
    """Per-row width of an array column, possibly bound to a sibling table."""

    kind: str
    n: int = 1

    def resolve(self, context: Optional[ResolverContext] = None) -> Optional[int]:
        if self.kind == "fixed":
            return self.n
        if context is None:
            return None
        if self.kind == "nwave":
            return context.nwave()
        if self.kind == "nwave2":
            nwave = context.nwave()
            return None if nwave is None else nwave * nwave
        if self.kind == "nstations":
            return context.nstations()
        raise ValueError(f"Unknown cardinality {self.kind!r}")

    def __str__(self) -> str:
        return {
            "fixed": str(self.n),
            "nwave": "NWAVE",
            "nwave2": "NWAVE^2",
            "nstations": "NSTATIONS",
        }[self.kind]


def Fixed(n: int) -> Cardinality:
    return Cardinality("fixed", int(n))


NWAVE = Cardinality("nwave")
NWAVE_SQUARED = Cardinality("nwave2")
NSTATIONS = Cardinality("nstations")


def _lossless(arr: np.ndarray, dtype: np.dtype) -> bool:
    if np.can_cast(arr.dtype, dtype, "safe"):
        return True
    # wider integers are narrowed only when every value fits
    if arr.dtype.kind in ("i", "u") and dtype.kind == "i":
        info = np.iinfo(dtype)
        return arr.size == 0 or (info.min <= arr.min() and arr.max() <= info.max)
    return False


@dataclass(frozen=True)
class KeywordDescriptor:
    """Schema atom describing one header keyword.

    ``accepted_values`` is a static whitelist. ``accepted_from`` names a
    ``ResolverContext`` method giving a whitelist computed at check time
    (e.g. ``"accepted_ins_names"``); it is never cached.

    ``optional`` keywords may be absent. ``required_revision`` makes an
    optional keyword mandatory from that OI_REVN on, while ``min_revision``
    ignores the descriptor entirely below that revision.
    """

    name: str
    description: str
    ptype: PhysicalType
    unit: Unit = Unit.NO_UNIT
    accepted_values: Optional[Tuple[Any, ...]] = None
    accepted_from: Optional[str] = None
    optional: bool = False
    min_revision: int = 1
    required_revision: Optional[int] = None

    @property
    def type_code(self) -> str:
        return self.ptype.code

    def is_required(self, revision: int) -> bool:
        if revision < self.min_revision:
            return False
        if self.optional:
            return self.required_revision is not None and revision >= self.required_revision
        return True

    def accepted(self, context: Optional[ResolverContext] = None) -> Optional[Sequence[Any]]:
        if self.accepted_values is not None:
            return self.accepted_values
        if self.accepted_from is not None and context is not None:
            return getattr(context, self.accepted_from)()
        return None

    def validate(self, value: Any, context: Optional[ResolverContext] = None) -> ValidationResult:
        if not self.ptype.accepts_value(value):
            return ValidationResult.TYPE_MISMATCH
        if self.ptype is PhysicalType.CHAR and len(value.strip()) == 0:
            return ValidationResult.BLANK_STRING
        accepted = self.accepted(context)
        if accepted is not None:
            if self.ptype is PhysicalType.CHAR:
                value = value.strip()
            if value not in accepted:
                return ValidationResult.NOT_IN_WHITELIST
        return ValidationResult.OK


@dataclass(frozen=True)
class ColumnDescriptor(KeywordDescriptor):
    """Schema atom describing one binary table column.

    For ``CHAR`` columns ``repeat`` is the maximum string width; otherwise it
    is the per-row element count of an ``is_array`` column.
    """

    repeat: Cardinality = Fixed(1)
    is_array: bool = False

    def expected_width(self, context: Optional[ResolverContext] = None) -> Optional[int]:
        return self.repeat.resolve(context)

    def coerce(self, values: Any) -> np.ndarray:
        """Convert raw values into the dense row-major layout of this column.

        Only lossless casts to the physical dtype are applied. Values of
        another kind (floats in an INT column, integers in a LOGICAL one...)
        keep their source dtype so the checker reports the wrong format.
        """
        arr = np.asarray(values)
        if self.ptype is PhysicalType.CHAR:
            if arr.dtype.kind == "S":
                arr = np.char.decode(arr, "ascii", "replace")
            if arr.dtype.kind == "U":
                arr = np.char.rstrip(arr)
            return arr

        if self.ptype is PhysicalType.COMPLEX and np.iscomplexobj(arr):
            arr = np.stack([arr.real, arr.imag], axis=-1)
        if not self.ptype.accepts_dtype(arr.dtype):
            return arr
        if _lossless(arr, self.ptype.dtype):
            arr = arr.astype(self.ptype.dtype)

        if self.is_array:
            if self.ptype is PhysicalType.COMPLEX and arr.ndim == 2:
                arr = arr.reshape(arr.shape[0], 1, 2)
            elif self.ptype is not PhysicalType.COMPLEX and arr.ndim == 1:
                arr = arr.reshape(-1, 1)
        return arr

    def observed_width(self, data: np.ndarray) -> int:
        if self.ptype is PhysicalType.COMPLEX:
            return int(data.shape[1]) if data.ndim >= 3 else 1
        if data.ndim >= 2:
            return int(np.prod(data.shape[1:]))
        return 1

    def has_valid_layout(self, data: np.ndarray) -> bool:
        if not self.ptype.accepts_dtype(data.dtype):
            return False
        if self.ptype is PhysicalType.COMPLEX:
            return data.ndim >= 2 and data.shape[-1] == 2
        return True

    def invalid_values(self, data: np.ndarray, context: Optional[ResolverContext] = None) -> Dict[Any, List[int]]:
        """Map each value outside the accepted set to the rows holding it."""
        accepted = self.accepted(context)
        if accepted is None:
            return {}
        accepted = set(accepted)
        invalid: Dict[Any, List[int]] = {}
        for row, cell in enumerate(data):
            for value in np.atleast_1d(cell):
                value = value.item() if hasattr(value, "item") else value
                if isinstance(value, str):
                    value = value.strip()
                if value not in accepted:
                    rows = invalid.setdefault(value, [])
                    if not rows or rows[-1] != row:
                        rows.append(row)
        return invalid
