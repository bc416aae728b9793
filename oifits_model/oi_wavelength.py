from __future__ import annotations

from .meta import ColumnDescriptor, KeywordDescriptor, PhysicalType, Unit
from .schema import TableKind, TableSchema, oi_revn, register

KEYWORD_INSNAME = KeywordDescriptor("INSNAME", "name of detector for cross-referencing", PhysicalType.CHAR)

OI_WAVELENGTH = register(TableSchema(
    TableKind.OI_WAVELENGTH,
    keywords=(
        oi_revn(),
        KEYWORD_INSNAME,
    ),
    columns=(
        ColumnDescriptor("EFF_WAVE", "effective wavelength of channel", PhysicalType.REAL, Unit.METER),
        ColumnDescriptor("EFF_BAND", "effective bandpass of channel", PhysicalType.REAL, Unit.METER),
    ),
))

__doc__ = """Wavelength table (``OI_WAVELENGTH``).

Its row count is NWAVE for every data table sharing its ``INSNAME``.
"""
