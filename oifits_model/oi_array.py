from __future__ import annotations

from .meta import ColumnDescriptor, Fixed, KeywordDescriptor, PhysicalType, Unit
from .schema import TableKind, TableSchema, oi_revn, register

KEYWORD_ARRNAME = KeywordDescriptor("ARRNAME", "array name for cross-referencing", PhysicalType.CHAR)
KEYWORD_FRAME = KeywordDescriptor("FRAME", "coordinate frame", PhysicalType.CHAR,
                                  accepted_values=("GEOCENTRIC", "SKY"))

OI_ARRAY = register(TableSchema(
    TableKind.OI_ARRAY,
    keywords=(
        oi_revn(),
        KEYWORD_ARRNAME,
        KEYWORD_FRAME,
        KeywordDescriptor("ARRAYX", "[m] array center X-coordinate", PhysicalType.DBL, Unit.METER),
        KeywordDescriptor("ARRAYY", "[m] array center Y-coordinate", PhysicalType.DBL, Unit.METER),
        KeywordDescriptor("ARRAYZ", "[m] array center Z-coordinate", PhysicalType.DBL, Unit.METER),
    ),
    columns=(
        ColumnDescriptor("TEL_NAME", "telescope name", PhysicalType.CHAR, repeat=Fixed(16)),
        ColumnDescriptor("STA_NAME", "station name", PhysicalType.CHAR, repeat=Fixed(16)),
        ColumnDescriptor("STA_INDEX", "station index", PhysicalType.INT),
        ColumnDescriptor("DIAMETER", "element diameter", PhysicalType.REAL, Unit.METER),
        ColumnDescriptor("STAXYZ", "station coordinates relative to array center",
                         PhysicalType.DBL, Unit.METER, repeat=Fixed(3), is_array=True),
        ColumnDescriptor("FOV", "photometric field of view", PhysicalType.DBL, Unit.ARCSEC,
                         optional=True, min_revision=2),
        ColumnDescriptor("FOVTYPE", "model for FOV: FWHM or RADIUS", PhysicalType.CHAR, repeat=Fixed(6),
                         accepted_values=("FWHM", "RADIUS"), optional=True, min_revision=2),
    ),
))

__doc__ = """Array geometry table (``OI_ARRAY``).

Contains station indices, names and positions used by data tables to relate
baselines to physical stations; ``ARRNAME`` is its cross-reference key.
"""
