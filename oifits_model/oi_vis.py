from __future__ import annotations

from .meta import NWAVE_SQUARED, ColumnDescriptor, KeywordDescriptor, PhysicalType, Unit
from .schema import (COLUMN_FLAG, COLUMN_INT_TIME, COLUMN_MJD, COLUMN_TARGET_ID_REF, COLUMN_TIME,
                     DATA_KEYWORDS, TableKind, TableSchema, corrindx, register, sta_index_ref, wave_column)

OI_VIS = register(TableSchema(
    TableKind.OI_VIS,
    keywords=DATA_KEYWORDS + (
        KeywordDescriptor("AMPTYP", "type for amplitude measurement", PhysicalType.CHAR,
                          accepted_values=("absolute", "differential", "correlated flux"),
                          optional=True, min_revision=2),
        KeywordDescriptor("PHITYP", "type for phase measurement", PhysicalType.CHAR,
                          accepted_values=("absolute", "differential"), optional=True, min_revision=2),
        KeywordDescriptor("AMPORDER", "polynomial fit order for differential chromatic amplitudes",
                          PhysicalType.INT, optional=True, min_revision=2),
        KeywordDescriptor("PHIORDER", "polynomial fit order for differential chromatic phases",
                          PhysicalType.INT, optional=True, min_revision=2),
    ),
    columns=(
        COLUMN_TARGET_ID_REF,
        COLUMN_TIME,
        COLUMN_MJD,
        COLUMN_INT_TIME,
        wave_column("VISAMP", "visibility amplitude"),
        wave_column("VISAMPERR", "error in visibility amplitude"),
        corrindx("VISAMP"),
        wave_column("VISPHI", "visibility phase", Unit.DEG),
        wave_column("VISPHIERR", "error in visibility phase", Unit.DEG),
        corrindx("VISPHI"),
        ColumnDescriptor("VISREFMAP", "matrix of indexes for building the reference channel",
                         PhysicalType.LOGICAL, repeat=NWAVE_SQUARED, is_array=True,
                         optional=True, min_revision=2),
        wave_column("RVIS", "complex coherent flux (real part)", optional=True, min_revision=2),
        wave_column("RVISERR", "error on RVIS", optional=True, min_revision=2),
        wave_column("IVIS", "complex coherent flux (imaginary part)", optional=True, min_revision=2),
        wave_column("IVISERR", "error on IVIS", optional=True, min_revision=2),
        ColumnDescriptor("UCOORD", "U coordinate of the data", PhysicalType.DBL, Unit.METER),
        ColumnDescriptor("VCOORD", "V coordinate of the data", PhysicalType.DBL, Unit.METER),
        sta_index_ref(2),
        COLUMN_FLAG,
    ),
))

__doc__ = """Visibility table (``OI_VIS``).

Complex visibilities as amplitude / phase pairs, one row per baseline and
exposure, with NWAVE channels per row.
"""
