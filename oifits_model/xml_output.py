from __future__ import annotations

import logging
from typing import List, Optional
from xml.sax.saxutils import escape

import numpy as np

from .base import Table
from .checker import OIFitsChecker
from .file import OIFitsFile
from .formatting import to_text
from .meta import ColumnDescriptor, PhysicalType
from .schema import TableKind

log = logging.getLogger(__name__)


class XmlOutputVisitor:
    """Render an OIFITS file (or a single table) as an ``<oifits>`` XML tree.

    OI_ARRAY, OI_WAVELENGTH and OI_TARGET tables always dump their rows;
    other tables only when ``verbose`` is set. ``format`` switches numbers to
    the beautified notation.
    """

    def __init__(self, format: bool = False, verbose: bool = False,
                 checker: Optional[OIFitsChecker] = None) -> None:
        self.format = format
        self.verbose = verbose
        self.checker = checker
        self._buffer: List[str] = []

    def reset(self) -> None:
        self._buffer = []

    def getvalue(self) -> str:
        result = "".join(self._buffer)
        self.reset()
        return result

    def _append(self, *parts: str) -> None:
        self._buffer.extend(parts)

    # --- file ---

    def visit_file(self, oifits: OIFitsFile) -> None:
        self._enter_file(oifits)

        for arr_name in oifits.accepted_arr_names():
            table = oifits.get_oi_array(arr_name)
            if table is not None:
                self.visit_table(table, verbose=True)

        for ins_name in oifits.accepted_ins_names():
            table = oifits.get_oi_wavelength(ins_name)
            if table is not None:
                self.visit_table(table, verbose=True)

        if oifits.oi_target is not None:
            self.visit_table(oifits.oi_target, verbose=True)

        for table in oifits.tables:
            if table.kind in (TableKind.OI_CORR, TableKind.OI_INSPOL) or table.kind.is_data:
                self.visit_table(table)

        if self.checker is not None:
            self._append("<checkReport>\n", escape(self.checker.get_report()), "\n</checkReport>\n")

        self._exit_file()

    def _enter_file(self, oifits: Optional[OIFitsFile]) -> None:
        self._append("<oifits>\n")
        if oifits is not None and oifits.absolute_path is not None:
            self._append("<filename>", escape(oifits.absolute_path), "</filename>\n")

    def _exit_file(self) -> None:
        self._append("</oifits>\n")

    # --- tables ---

    def visit_table(self, table: Table, verbose: Optional[bool] = None) -> None:
        standalone = not self._buffer
        if standalone:
            self._enter_file(None)
        verbose = self.verbose if verbose is None else verbose

        self._append("<", table.ext_name, ">\n")
        self._keywords(table)
        columns = [desc for desc in table.column_descriptors if table.has_column(desc.name)]
        self._columns(columns)
        if verbose:
            self._rows(table, columns)
        self._append("</", table.ext_name, ">\n")

        if standalone:
            self._exit_file()

    def _keywords(self, table: Table) -> None:
        self._append("<keywords>\n")
        for desc in table.keyword_descriptors:
            value = table.get_keyword(desc.name)
            # skip missing keywords
            if value is None:
                continue
            self._append(
                "<keyword><name>", desc.name, "</name><value>", escape(str(value)),
                "</value><description>", escape(desc.description), "</description><type>",
                desc.type_code, "</type><unit>", str(desc.unit), "</unit></keyword>\n",
            )
        for card in table.header_cards:
            value = "" if card.value is None else escape(str(card.value))
            comment = "" if card.comment is None else escape(card.comment)
            self._append(
                "<keyword><name>", escape(card.key), "</name><value>", value,
                "</value><description>", comment, "</description><type>A</type><unit></unit></keyword>\n",
            )
        self._append("</keywords>\n")

    def _columns(self, columns: List[ColumnDescriptor]) -> None:
        self._append("<columns>\n")
        for desc in columns:
            self._append(
                "<column><name>", desc.name, "</name>",
                "<description>", escape(desc.description), "</description>",
                "<type>", desc.type_code, "</type>",
                "<unit>", str(desc.unit), "</unit>",
                "</column>\n",
            )
        self._append("</columns>\n")

    def _rows(self, table: Table, columns: List[ColumnDescriptor]) -> None:
        self._append("<table>\n<tr>\n")
        for desc in columns:
            self._append("<th>", desc.name, "</th>")
        self._append("</tr>\n")

        for row in range(table.row_count):
            self._append("<tr>")
            for desc in columns:
                self._append("<td>", self._cell(desc, table.get_column(desc.name)[row]), "</td>")
            self._append("</tr>\n")

        self._append("</table>\n")

    def _cell(self, desc: ColumnDescriptor, cell: np.ndarray) -> str:
        if desc.ptype is PhysicalType.CHAR:
            return escape(str(cell))
        if desc.ptype is PhysicalType.COMPLEX:
            # real,imag pattern for complex values
            pairs = np.asarray(cell).reshape(-1, 2)
            return " ".join(f"{to_text(re, self.format)},{to_text(im, self.format)}" for re, im in pairs)
        return " ".join(to_text(value, self.format) for value in np.atleast_1d(cell).ravel())


def get_xml_desc(oifits: OIFitsFile, format: bool = False, verbose: bool = False,
                 checker: Optional[OIFitsChecker] = None) -> str:
    visitor = XmlOutputVisitor(format, verbose, checker)
    visitor.visit_file(oifits)
    return visitor.getvalue()


def get_table_xml_desc(table: Table, format: bool = False, verbose: bool = False) -> str:
    visitor = XmlOutputVisitor(format, verbose)
    visitor.visit_table(table)
    return visitor.getvalue()
