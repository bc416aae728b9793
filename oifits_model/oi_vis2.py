from __future__ import annotations

from .meta import ColumnDescriptor, PhysicalType, Unit
from .schema import (COLUMN_FLAG, COLUMN_INT_TIME, COLUMN_MJD, COLUMN_TARGET_ID_REF, COLUMN_TIME,
                     DATA_KEYWORDS, TableKind, TableSchema, corrindx, register, sta_index_ref, wave_column)

OI_VIS2 = register(TableSchema(
    TableKind.OI_VIS2,
    keywords=DATA_KEYWORDS,
    columns=(
        COLUMN_TARGET_ID_REF,
        COLUMN_TIME,
        COLUMN_MJD,
        COLUMN_INT_TIME,
        wave_column("VIS2DATA", "squared visibility"),
        wave_column("VIS2ERR", "error in squared visibility"),
        corrindx("VIS2DATA"),
        ColumnDescriptor("UCOORD", "U coordinate of the data", PhysicalType.DBL, Unit.METER),
        ColumnDescriptor("VCOORD", "V coordinate of the data", PhysicalType.DBL, Unit.METER),
        sta_index_ref(2),
        COLUMN_FLAG,
    ),
))
