from .meta import (NSTATIONS, NWAVE, NWAVE_SQUARED, Cardinality, ColumnDescriptor, Fixed,
                   KeywordDescriptor, PhysicalType, Unit, ValidationResult)
from .schema import DATA_KINDS, SCHEMAS, TableKind, TableSchema, schema_for
from .oi_target import OI_TARGET
from .oi_array import OI_ARRAY
from .oi_wavelength import OI_WAVELENGTH
from .oi_corr import OI_CORR
from .oi_inspol import OI_INSPOL
from .oi_vis import OI_VIS
from .oi_vis2 import OI_VIS2
from .oi_t3 import OI_T3
from .oi_spectrum import OI_SPECTRUM
from .oi_flux import OI_FLUX
from .base import HeaderCard, Table
from .checker import Diagnostic, OIFitsChecker, Severity
from .file import DuplicateTargetError, OIFitsFile, TableResolver, TargetSummary
from .formatting import beautify
from .loader import OIFitsLoadError, load_hdulist, load_oifits
from .xml_output import XmlOutputVisitor, get_table_xml_desc, get_xml_desc
from .csv_output import CSV_COLUMNS, CsvOutputVisitor, get_csv_desc

__version__ = "0.2.0"

__all__ = [
    "PhysicalType", "Unit", "Cardinality", "Fixed", "NWAVE", "NWAVE_SQUARED", "NSTATIONS",
    "KeywordDescriptor", "ColumnDescriptor", "ValidationResult",
    "TableKind", "TableSchema", "SCHEMAS", "DATA_KINDS", "schema_for",
    "OI_TARGET", "OI_ARRAY", "OI_WAVELENGTH", "OI_CORR", "OI_INSPOL",
    "OI_VIS", "OI_VIS2", "OI_T3", "OI_SPECTRUM", "OI_FLUX",
    "HeaderCard", "Table",
    "Diagnostic", "OIFitsChecker", "Severity",
    "DuplicateTargetError", "OIFitsFile", "TableResolver", "TargetSummary",
    "beautify",
    "OIFitsLoadError", "load_hdulist", "load_oifits",
    "XmlOutputVisitor", "get_xml_desc", "get_table_xml_desc",
    "CsvOutputVisitor", "CSV_COLUMNS", "get_csv_desc",
]
