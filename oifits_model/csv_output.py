"""Tab-separated per-target summary of an OIFITS file."""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable

from .file import OIFitsFile, TargetSummary
from .formatting import to_text

SEP = "\t"

CSV_COLUMNS: tuple[str, ...] = (
    "target_name",
    "s_ra",
    "s_dec",
    "t_exptime",
    "t_min",
    "t_max",
    "em_res_power",
    "em_min",
    "em_max",
    "facility_name",
    "instrument_name",
    "nb_vis",
    "nb_vis2",
    "nb_t3",
    "nb_channels",
)


class CsvOutputVisitor:
    def __init__(self, format: bool = False, verbose: bool = False) -> None:
        self.format = format
        self.verbose = verbose
        self._buffer = io.StringIO()

    def reset(self) -> None:
        self._buffer = io.StringIO()

    def getvalue(self) -> str:
        result = self._buffer.getvalue()
        self.reset()
        return result

    def visit_file(self, oifits: OIFitsFile) -> None:
        if self.verbose and oifits.absolute_path is not None:
            self._buffer.write(f"# filename       {oifits.absolute_path}\n")
            self._buffer.write(f"# local_filename {oifits.absolute_path}\n")

        if oifits.oi_target is None:
            return
        writer = csv.writer(self._buffer, delimiter=SEP, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        writer.writerows(self._record(summary) for summary in oifits.analyze())

    def _text(self, value: Any) -> str:
        return to_text(value, self.format)

    def _record(self, summary: TargetSummary) -> Iterable[Any]:
        return [
            summary.target_name,
            self._text(summary.ra),
            self._text(summary.dec),
            self._text(summary.int_time),
            self._text(summary.t_min),
            self._text(summary.t_max),
            self._text(summary.res_power),
            self._text(summary.em_min),
            self._text(summary.em_max),
            summary.facility_name or "",
            summary.instrument_name,
            summary.nb_vis,
            summary.nb_vis2,
            summary.nb_t3,
            summary.nb_channels,
        ]


def get_csv_desc(oifits: OIFitsFile, format: bool = False, verbose: bool = False) -> str:
    visitor = CsvOutputVisitor(format, verbose)
    visitor.visit_file(oifits)
    return visitor.getvalue()
