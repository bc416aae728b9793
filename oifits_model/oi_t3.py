from __future__ import annotations

from .meta import ColumnDescriptor, PhysicalType, Unit
from .schema import (COLUMN_FLAG, COLUMN_INT_TIME, COLUMN_MJD, COLUMN_TARGET_ID_REF, COLUMN_TIME,
                     DATA_KEYWORDS, TableKind, TableSchema, corrindx, register, sta_index_ref, wave_column)


def _coord(name: str, description: str) -> ColumnDescriptor:
    return ColumnDescriptor(name, description, PhysicalType.DBL, Unit.METER)


OI_T3 = register(TableSchema(
    TableKind.OI_T3,
    keywords=DATA_KEYWORDS,
    columns=(
        COLUMN_TARGET_ID_REF,
        COLUMN_TIME,
        COLUMN_MJD,
        COLUMN_INT_TIME,
        wave_column("T3AMP", "triple product amplitude"),
        wave_column("T3AMPERR", "error in triple product amplitude"),
        corrindx("T3AMP"),
        wave_column("T3PHI", "triple product phase", Unit.DEG),
        wave_column("T3PHIERR", "error in triple product phase", Unit.DEG),
        corrindx("T3PHI"),
        _coord("U1COORD", "U coordinate of baseline AB of the triangle"),
        _coord("V1COORD", "V coordinate of baseline AB of the triangle"),
        _coord("U2COORD", "U coordinate of baseline BC of the triangle"),
        _coord("V2COORD", "V coordinate of baseline BC of the triangle"),
        sta_index_ref(3),
        COLUMN_FLAG,
    ),
))

__doc__ = """Triple product table (``OI_T3``).

Closure phase (``T3PHI``) and amplitude (``T3AMP``) per triangle of stations.
"""
