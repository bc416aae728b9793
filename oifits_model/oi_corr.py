from __future__ import annotations

from .meta import ColumnDescriptor, KeywordDescriptor, PhysicalType
from .schema import TableKind, TableSchema, oi_revn, register

OI_CORR = register(TableSchema(
    TableKind.OI_CORR,
    keywords=(
        oi_revn(),
        KeywordDescriptor("CORRNAME", "name of correlated data set", PhysicalType.CHAR),
        KeywordDescriptor("NDATA", "number of correlated data", PhysicalType.INT),
    ),
    columns=(
        ColumnDescriptor("IINDX", "first index of correlation matrix element", PhysicalType.INT),
        ColumnDescriptor("JINDX", "second index of correlation matrix element", PhysicalType.INT),
        ColumnDescriptor("CORR", "matrix element", PhysicalType.DBL),
    ),
    min_revision=2,
))
