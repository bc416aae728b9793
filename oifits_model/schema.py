from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .meta import NWAVE, ColumnDescriptor, Fixed, KeywordDescriptor, PhysicalType, Unit


class TableKind(Enum):
    OI_TARGET = "OI_TARGET"
    OI_ARRAY = "OI_ARRAY"
    OI_WAVELENGTH = "OI_WAVELENGTH"
    OI_CORR = "OI_CORR"
    OI_INSPOL = "OI_INSPOL"
    OI_VIS = "OI_VIS"
    OI_VIS2 = "OI_VIS2"
    OI_T3 = "OI_T3"
    OI_SPECTRUM = "OI_SPECTRUM"
    OI_FLUX = "OI_FLUX"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_extname(cls, extname: Optional[str]) -> "TableKind":
        name = (extname or "").strip().upper()
        for kind in cls:
            if kind.value == name and kind is not cls.UNKNOWN:
                return kind
        return cls.UNKNOWN

    @property
    def is_data(self) -> bool:
        return self in DATA_KINDS


DATA_KINDS = frozenset({
    TableKind.OI_VIS,
    TableKind.OI_VIS2,
    TableKind.OI_T3,
    TableKind.OI_SPECTRUM,
    TableKind.OI_FLUX,
})


@dataclass(frozen=True)
class TableSchema:
    """Keyword and column descriptors registered for one table kind."""

    kind: TableKind
    keywords: Tuple[KeywordDescriptor, ...]
    columns: Tuple[ColumnDescriptor, ...]
    min_revision: int = 1

    def keyword(self, name: str) -> Optional[KeywordDescriptor]:
        for desc in self.keywords:
            if desc.name == name:
                return desc
        return None

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        for desc in self.columns:
            if desc.name == name:
                return desc
        return None


SCHEMAS: Dict[TableKind, TableSchema] = {}

EMPTY_SCHEMA = TableSchema(TableKind.UNKNOWN, (), ())


def register(schema: TableSchema) -> TableSchema:
    if schema.kind in SCHEMAS:
        raise KeyError(f"Schema already registered for {schema.kind.value}")
    SCHEMAS[schema.kind] = schema
    return schema


def schema_for(kind: TableKind) -> TableSchema:
    return SCHEMAS.get(kind, EMPTY_SCHEMA)


# Descriptors shared by several kinds

def oi_revn(*accepted: int) -> KeywordDescriptor:
    return KeywordDescriptor("OI_REVN", "revision number of the table definition",
                             PhysicalType.INT, accepted_values=accepted or (1, 2))


KEYWORD_DATE_OBS = KeywordDescriptor("DATE-OBS", "UTC start date of observations", PhysicalType.CHAR)
KEYWORD_ARRNAME_REF = KeywordDescriptor("ARRNAME", "name of corresponding array", PhysicalType.CHAR,
                                        optional=True, required_revision=2)
KEYWORD_INSNAME_REF = KeywordDescriptor("INSNAME", "name of corresponding detector", PhysicalType.CHAR)
KEYWORD_CORRNAME_REF = KeywordDescriptor("CORRNAME", "name of corresponding correlation table",
                                         PhysicalType.CHAR, optional=True, min_revision=2)

COLUMN_TARGET_ID_REF = ColumnDescriptor("TARGET_ID", "target number as index into OI_TARGET table",
                                        PhysicalType.INT, accepted_from="accepted_target_ids")


def sta_index_ref(count: int, optional: bool = False) -> ColumnDescriptor:
    return ColumnDescriptor("STA_INDEX", "station numbers contributing to the data", PhysicalType.INT,
                            accepted_from="accepted_sta_indexes", optional=optional,
                            repeat=Fixed(count), is_array=count > 1)


DATA_KEYWORDS = (
    oi_revn(),
    KEYWORD_DATE_OBS,
    KEYWORD_ARRNAME_REF,
    KEYWORD_INSNAME_REF,
    KEYWORD_CORRNAME_REF,
)

COLUMN_TIME = ColumnDescriptor("TIME", "UTC time of observation", PhysicalType.DBL, Unit.SECOND)
COLUMN_MJD = ColumnDescriptor("MJD", "modified Julian Day", PhysicalType.DBL, Unit.MJD)
COLUMN_INT_TIME = ColumnDescriptor("INT_TIME", "integration time", PhysicalType.DBL, Unit.SECOND)
COLUMN_FLAG = ColumnDescriptor("FLAG", "flag", PhysicalType.LOGICAL, repeat=NWAVE, is_array=True)


def wave_column(name: str, description: str, unit: Unit = Unit.NO_UNIT,
                ptype: PhysicalType = PhysicalType.DBL, **kwargs: Any) -> ColumnDescriptor:
    return ColumnDescriptor(name, description, ptype, unit, repeat=NWAVE, is_array=True, **kwargs)


def corrindx(name: str) -> ColumnDescriptor:
    return ColumnDescriptor(f"CORRINDX_{name}", f"index into correlation matrix for 1st {name} element",
                            PhysicalType.INT, optional=True, min_revision=2)
