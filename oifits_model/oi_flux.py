from __future__ import annotations

from .meta import KeywordDescriptor, PhysicalType, Unit
from .schema import (COLUMN_FLAG, COLUMN_INT_TIME, COLUMN_MJD, COLUMN_TARGET_ID_REF, DATA_KEYWORDS,
                     TableKind, TableSchema, corrindx, register, sta_index_ref, wave_column)

OI_FLUX = register(TableSchema(
    TableKind.OI_FLUX,
    keywords=DATA_KEYWORDS + (
        KeywordDescriptor("CALSTAT", "'C': spectrum is calibrated, 'U': uncalibrated", PhysicalType.CHAR,
                          accepted_values=("C", "U")),
        KeywordDescriptor("FOV", "area on sky over which flux is integrated", PhysicalType.DBL,
                          Unit.ARCSEC, optional=True),
        KeywordDescriptor("FOVTYPE", "model for FOV: FWHM or RADIUS", PhysicalType.CHAR,
                          accepted_values=("FWHM", "RADIUS"), optional=True),
    ),
    columns=(
        COLUMN_TARGET_ID_REF,
        COLUMN_MJD,
        COLUMN_INT_TIME,
        wave_column("FLUXDATA", "flux"),
        wave_column("FLUXERR", "corresponding flux error"),
        corrindx("FLUXDATA"),
        sta_index_ref(1, optional=True),
        COLUMN_FLAG,
    ),
    min_revision=2,
))

__doc__ = """Flux table decoder (``OI_FLUX``).

Calibrated or uncalibrated spectra per target (OIFITS 2 replacement of
``OI_SPECTRUM``).
"""
