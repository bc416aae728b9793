from __future__ import annotations

from dataclasses import replace

from .schema import (COLUMN_FLAG, COLUMN_INT_TIME, COLUMN_MJD, COLUMN_TARGET_ID_REF, DATA_KEYWORDS,
                     TableKind, TableSchema, register, sta_index_ref, wave_column)

# pre-standard spectrum table, kept for files written before OI_FLUX existed
OI_SPECTRUM = register(TableSchema(
    TableKind.OI_SPECTRUM,
    keywords=DATA_KEYWORDS,
    columns=(
        COLUMN_TARGET_ID_REF,
        COLUMN_MJD,
        COLUMN_INT_TIME,
        wave_column("FLUXDATA", "flux"),
        wave_column("FLUXERR", "flux error"),
        sta_index_ref(1, optional=True),
        replace(COLUMN_FLAG, optional=True),
    ),
))
