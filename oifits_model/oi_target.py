"""Target table (``OI_TARGET``).

One row per observed target; ``TARGET_ID`` is the key data tables refer to.
Only one OI_TARGET table may exist in a file.
"""
from __future__ import annotations

from .meta import ColumnDescriptor, Fixed, PhysicalType, Unit
from .schema import TableKind, TableSchema, oi_revn, register

OI_TARGET = register(TableSchema(
    TableKind.OI_TARGET,
    keywords=(
        oi_revn(),
    ),
    columns=(
        ColumnDescriptor("TARGET_ID", "index number", PhysicalType.INT),
        ColumnDescriptor("TARGET", "target name", PhysicalType.CHAR, repeat=Fixed(16)),
        ColumnDescriptor("RAEP0", "RA at mean equinox", PhysicalType.DBL, Unit.DEG),
        ColumnDescriptor("DECEP0", "DEC at mean equinox", PhysicalType.DBL, Unit.DEG),
        ColumnDescriptor("EQUINOX", "equinox", PhysicalType.REAL, Unit.YEAR),
        ColumnDescriptor("RA_ERR", "error in RA at mean equinox", PhysicalType.DBL, Unit.DEG),
        ColumnDescriptor("DEC_ERR", "error in DEC at mean equinox", PhysicalType.DBL, Unit.DEG),
        ColumnDescriptor("SYSVEL", "systemic radial velocity", PhysicalType.DBL, Unit.METER_PER_SECOND),
        ColumnDescriptor("VELTYP", "reference for radial velocity", PhysicalType.CHAR, repeat=Fixed(8)),
        ColumnDescriptor("VELDEF", "definition of radial velocity", PhysicalType.CHAR, repeat=Fixed(8)),
        ColumnDescriptor("PMRA", "proper motion in RA", PhysicalType.DBL, Unit.DEG_PER_YEAR),
        ColumnDescriptor("PMDEC", "proper motion in DEC", PhysicalType.DBL, Unit.DEG_PER_YEAR),
        ColumnDescriptor("PMRA_ERR", "error of proper motion in RA", PhysicalType.DBL, Unit.DEG_PER_YEAR),
        ColumnDescriptor("PMDEC_ERR", "error of proper motion in DEC", PhysicalType.DBL, Unit.DEG_PER_YEAR),
        ColumnDescriptor("PARALLAX", "parallax", PhysicalType.REAL, Unit.DEG),
        ColumnDescriptor("PARA_ERR", "error in parallax", PhysicalType.REAL, Unit.DEG),
        ColumnDescriptor("SPECTYP", "spectral type", PhysicalType.CHAR, repeat=Fixed(16)),
        ColumnDescriptor("CATEGORY", "CALibrator or SCIence target", PhysicalType.CHAR, repeat=Fixed(3),
                         accepted_values=("CAL", "SCI"), optional=True, min_revision=2),
    ),
))
