from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .meta import ColumnDescriptor, KeywordDescriptor, PhysicalType, ResolverContext, ValidationResult
from .schema import TableKind, TableSchema, schema_for

if TYPE_CHECKING:
    from .checker import OIFitsChecker

log = logging.getLogger(__name__)

# identifiers whose blank value is always an error
IDENTIFIER_KEYWORDS = ("ARRNAME", "INSNAME", "CORRNAME")


@dataclass(frozen=True)
class HeaderCard:
    """Header card kept verbatim (not described by the table schema)."""

    key: str
    value: Any = None
    comment: Optional[str] = None


class Table:
    """Generic OIFITS table: keyword map, column map and row count.

    The table kind selects the schema (keyword and column descriptors);
    columns are stored as dense numpy arrays with ``len == row_count`` and
    are reachable as lower-case attributes (``STA_INDEX`` -> ``table.sta_index``).
    """

    kind: TableKind
    keywords: Dict[str, Any]
    columns: Dict[str, np.ndarray]
    row_count: int
    ext_number: Optional[int]
    ext_version: Optional[int]
    header_cards: List[HeaderCard]

    def __init__(self, kind: TableKind, row_count: int = 0, extname: Optional[str] = None) -> None:
        self.kind = kind
        self.keywords = {}
        self.columns = {}
        self.row_count = int(row_count)
        self.ext_number = None
        self.ext_version = None
        self.header_cards = []
        self._extname = extname

    @classmethod
    def from_attrs(
        cls,
        kind: TableKind,
        *,
        keywords: Optional[Mapping[str, Any]] = None,
        header_cards: Optional[Sequence[HeaderCard]] = None,
        **attrs: Any,
    ) -> "Table":
        """Construct a table from already-available column arrays.

        Parameters
        ----------
        kind :
            Table kind selecting the schema.
        keywords :
            Keyword values keyed by FITS name (``INSNAME``, ``DATE-OBS``...).
        header_cards :
            Extra header cards passed through verbatim.
        **attrs :
            Column arrays keyed by either lower-case attribute names
            (e.g. ``vis2data``) or FITS column names (e.g. ``VIS2DATA``).
        """
        table = cls(kind)
        for name, value in (keywords or {}).items():
            table.set_keyword(name, value)
        for card in header_cards or ():
            table.header_cards.append(card)
        for attr, values in attrs.items():
            arr = np.asarray(values)
            if not table.columns and table.row_count == 0:
                table.row_count = int(arr.shape[0]) if arr.ndim else 0
            table.set_column(attr.upper(), values)
        return table

    # --- schema ---

    @property
    def schema(self) -> TableSchema:
        return schema_for(self.kind)

    @property
    def keyword_descriptors(self) -> Sequence[KeywordDescriptor]:
        return self.schema.keywords

    @property
    def column_descriptors(self) -> Sequence[ColumnDescriptor]:
        return self.schema.columns

    @property
    def ext_name(self) -> str:
        if self.kind is TableKind.UNKNOWN:
            return self._extname or ""
        return self.kind.value

    @property
    def revision(self) -> int:
        value = self.keywords.get("OI_REVN")
        try:
            return int(value) if value is not None else 1
        except (TypeError, ValueError):
            return 1

    # --- keywords ---

    def get_keyword(self, name: str) -> Any:
        return self.keywords.get(name)

    def set_keyword(self, name: str, value: Any) -> None:
        if isinstance(value, np.generic):
            value = value.item()
        if value is None:
            self.keywords.pop(name, None)
        else:
            self.keywords[name] = value

    @property
    def arr_name(self) -> Optional[str]:
        return self.keywords.get("ARRNAME")

    @property
    def ins_name(self) -> Optional[str]:
        return self.keywords.get("INSNAME")

    @property
    def corr_name(self) -> Optional[str]:
        return self.keywords.get("CORRNAME")

    # --- columns ---

    def get_column(self, name: str) -> Optional[np.ndarray]:
        return self.columns.get(name)

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def set_column(self, name: str, values: Any) -> None:
        desc = self.schema.column(name)
        arr = desc.coerce(values) if desc is not None else np.asarray(values)
        if arr.ndim < 1:
            raise ValueError(f"Column {name} must have at least 1 dimension (rows)")
        if int(arr.shape[0]) != self.row_count:
            raise ValueError(
                f"Column {name} has {arr.shape[0]} rows, expected {self.row_count} in {self.ext_name}"
            )
        self.columns[name] = arr

    @property
    def nwave(self) -> Optional[int]:
        if self.kind is TableKind.OI_WAVELENGTH:
            return self.row_count
        return None

    def __getattr__(self, attr: str) -> Any:
        columns = self.__dict__.get("columns", {})
        name = attr.upper()
        if name in columns:
            return columns[name]
        if self.__dict__.get("kind") is not None and self.schema.column(name) is not None:
            return None
        raise AttributeError(f"{type(self).__name__} has no attribute {attr!r}")

    # --- checks ---

    def check_syntax(self, checker: "OIFitsChecker", context: Optional[ResolverContext] = None) -> None:
        """Verify keywords and columns against the descriptors of this kind."""
        if self.kind is TableKind.UNKNOWN:
            return

        revision = self.revision
        if revision < self.schema.min_revision:
            checker.severe(f"{self.ext_name} table requires OI_REVN >= {self.schema.min_revision}",
                           table=self, name="OI_REVN")

        for desc in self.keyword_descriptors:
            self._check_keyword(checker, desc, revision, context)

        for desc in self.column_descriptors:
            self._check_column(checker, desc, revision, context)

    def _check_keyword(self, checker: "OIFitsChecker", desc: KeywordDescriptor,
                       revision: int, context: Optional[ResolverContext]) -> None:
        value = self.keywords.get(desc.name)
        if value is None:
            if desc.is_required(revision):
                checker.severe(f"{desc.name} keyword is missing", table=self, name=desc.name)
            return

        result = desc.validate(value, context)
        if result is ValidationResult.OK:
            return
        if result is ValidationResult.BLANK_STRING:
            if desc.name in IDENTIFIER_KEYWORDS:
                checker.severe(f"{desc.name} identifier has blank value", table=self, name=desc.name)
            elif desc.is_required(revision):
                checker.warning(f"{desc.name} keyword has blank value", table=self, name=desc.name)
        elif result is ValidationResult.TYPE_MISMATCH:
            checker.severe(f"{desc.name} keyword has wrong type: expected '{desc.type_code}', "
                           f"found {type(value).__name__}", table=self, name=desc.name)
        else:
            checker.severe(f"{desc.name}={value!r} is not in accepted values "
                           f"{list(desc.accepted(context) or ())}", table=self, name=desc.name)

    def _check_column(self, checker: "OIFitsChecker", desc: ColumnDescriptor,
                      revision: int, context: Optional[ResolverContext]) -> None:
        data = self.columns.get(desc.name)
        if data is None:
            if desc.is_required(revision):
                checker.severe(f"{desc.name} column is missing", table=self, name=desc.name)
            return

        if not desc.has_valid_layout(data):
            checker.severe(f"{desc.name} column has wrong format: expected '{desc.type_code}', "
                           f"found {data.dtype} {data.shape}", table=self, name=desc.name)
            return

        if desc.ptype is PhysicalType.CHAR:
            width = desc.expected_width(context)
            # object arrays have no fixed width to compare
            if width is not None and data.dtype.kind == "U" and data.size \
                    and int(np.char.str_len(data).max()) > width:
                checker.warning(f"{desc.name} column has values longer than {width} characters",
                                table=self, name=desc.name)
        else:
            expected = desc.expected_width(context)
            if expected is None:
                if not self.row_count:
                    return
                log.debug("Unresolved cardinality %s for %s.%s", desc.repeat, self.ext_name, desc.name)
                checker.warning(f"Can't check repeat for column '{desc.name}'", table=self, name=desc.name)
            elif self.row_count and desc.observed_width(data) != expected:
                checker.severe(f"{desc.name} column has wrong repeat: expected {expected} ({desc.repeat}), "
                               f"found {desc.observed_width(data)}", table=self, name=desc.name)

        for value, rows in desc.invalid_values(data, context).items():
            checker.severe(f"{desc.name}={value} is not in accepted values (rows {rows})",
                           table=self, name=desc.name)

    def __repr__(self) -> str:
        parts: list[str] = []

        # identity
        parts.append(f"{type(self).__name__}({self.ext_name}")

        for attr in ["ext_number", "ext_version", "row_count"]:
            parts.append(f"  {attr:12s}= {getattr(self, attr)!r},")
        for name, value in self.keywords.items():
            parts.append(f"  {name:12s}= {value!r},")

        # columns: show dtype/shape only
        for name, a in self.columns.items():
            if a.ndim == 1 and a.size <= 8:
                parts.append(f"  {name.lower():12s}= {a!r},")
            else:
                shape = str(a.shape) + ","
                dtype = "'" + str(a.dtype) + "'"
                parts.append(f"  {name.lower():12s}= array(shape={shape:10s}dtype={dtype:6s}),")

        parts.append(")")

        return "\n".join(parts)
