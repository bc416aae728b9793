from __future__ import annotations

from .meta import NWAVE, ColumnDescriptor, Fixed, KeywordDescriptor, PhysicalType, Unit
from .schema import COLUMN_TARGET_ID_REF, TableKind, TableSchema, oi_revn, register, sta_index_ref


def _jones(name: str, description: str) -> ColumnDescriptor:
    return ColumnDescriptor(name, description, PhysicalType.COMPLEX, repeat=NWAVE, is_array=True)


OI_INSPOL = register(TableSchema(
    TableKind.OI_INSPOL,
    keywords=(
        oi_revn(),
        KeywordDescriptor("NPOL", "number of polarisation types in this table", PhysicalType.INT),
        KeywordDescriptor("ARRNAME", "identifies corresponding OI_ARRAY", PhysicalType.CHAR),
        KeywordDescriptor("ORIENT", "orientation of the Jones matrix: NORTH (on-sky) or LABORATORY",
                          PhysicalType.CHAR, accepted_values=("NORTH", "LABORATORY")),
        KeywordDescriptor("MODEL", "describes the way the Jones matrix is estimated", PhysicalType.CHAR),
    ),
    columns=(
        COLUMN_TARGET_ID_REF,
        ColumnDescriptor("INSNAME", "name of corresponding detector", PhysicalType.CHAR,
                         repeat=Fixed(70), accepted_from="accepted_ins_names"),
        ColumnDescriptor("MJD_OBS", "modified Julian day, start of time lapse", PhysicalType.DBL, Unit.MJD),
        ColumnDescriptor("MJD_END", "modified Julian day, end of time lapse", PhysicalType.DBL, Unit.MJD),
        _jones("JXX", "complex Jones matrix component along X axis"),
        _jones("JYY", "complex Jones matrix component along Y axis"),
        _jones("JXY", "complex Jones matrix component between X and Y axis"),
        _jones("JYX", "complex Jones matrix component between Y and X axis"),
        sta_index_ref(1),
    ),
    min_revision=2,
))

__doc__ = """Instrumental polarisation table (``OI_INSPOL``, OIFITS 2 only).

Unlike data tables, ``INSNAME`` is a column here: each row may refer to a
different OI_WAVELENGTH table, so the NWAVE width of the Jones columns is
resolved per file at check time.
"""
