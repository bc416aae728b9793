from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

import numpy as np

from .base import HeaderCard, Table
from .checker import OIFitsChecker
from .schema import TableKind

log = logging.getLogger(__name__)

# data tables summarised per target by analyze()
SUMMARY_KINDS = (TableKind.OI_VIS, TableKind.OI_VIS2, TableKind.OI_T3)

# removal is limited to the summarised kinds
REMOVABLE_KINDS = SUMMARY_KINDS


class DuplicateTargetError(ValueError):
    """Raised when a second OI_TARGET table is added to a file."""


@dataclass
class TargetSummary:
    """Per (target, instrument) aggregate used by the CSV summary."""

    target_name: str
    ra: float
    dec: float
    instrument_name: str
    facility_name: Optional[str] = None
    int_time: float = np.nan
    t_min: float = np.nan
    t_max: float = np.nan
    res_power: float = np.nan
    em_min: float = np.nan
    em_max: float = np.nan
    nb_vis: int = 0
    nb_vis2: int = 0
    nb_t3: int = 0
    nb_channels: int = 0
    mjds: List[float] = field(default_factory=list, repr=False)
    int_times: List[float] = field(default_factory=list, repr=False)


class TableResolver:
    """Cross-reference lookups for one table, evaluated lazily at check time."""

    def __init__(self, oifits: "OIFitsFile", table: Table) -> None:
        self.oifits = oifits
        self.table = table

    def _oi_array(self) -> Optional[Table]:
        arr_name = self.table.arr_name
        if arr_name is None:
            return None
        return self.oifits.get_oi_array(arr_name)

    def nwave(self) -> Optional[int]:
        if self.table.kind is TableKind.OI_INSPOL:
            names = self.table.get_column("INSNAME")
            if names is None:
                return None
            widths = []
            for name in dict.fromkeys(str(n).strip() for n in names):
                oi_wavelength = self.oifits.get_oi_wavelength(name)
                if oi_wavelength is None:
                    return None
                widths.append(oi_wavelength.row_count)
            return max(widths) if widths else None

        ins_name = self.table.ins_name
        if ins_name is None:
            return None
        oi_wavelength = self.oifits.get_oi_wavelength(ins_name)
        return None if oi_wavelength is None else oi_wavelength.nwave

    def nstations(self) -> Optional[int]:
        oi_array = self._oi_array()
        return None if oi_array is None else oi_array.row_count

    def accepted_ins_names(self) -> List[str]:
        return self.oifits.accepted_ins_names()

    def accepted_arr_names(self) -> List[str]:
        return self.oifits.accepted_arr_names()

    def accepted_corr_names(self) -> List[str]:
        return self.oifits.accepted_corr_names()

    def accepted_sta_indexes(self) -> Optional[List[int]]:
        oi_array = self._oi_array()
        if oi_array is None or not oi_array.has_column("STA_INDEX"):
            return None
        return self.oifits.accepted_sta_indexes(oi_array)

    def accepted_target_ids(self) -> Optional[List[int]]:
        if self.oifits.oi_target is None:
            return None
        return self.oifits.accepted_target_ids()


class OIFitsFile:
    """In-memory OIFITS file: owns its tables and the cross-reference indexes.

    The ARRNAME / INSNAME / CORRNAME indexes only hold weak references to
    tables owned by ``tables``; lookups return the first registered match.
    """

    def __init__(self, absolute_path: Optional[str] = None) -> None:
        self.absolute_path = absolute_path
        self.tables: List[Table] = []
        self.primary_header: List[HeaderCard] = []
        self.target_summaries: List[TargetSummary] = []
        self._arr_names: Dict[str, List[weakref.ref]] = {}
        self._ins_names: Dict[str, List[weakref.ref]] = {}
        self._corr_names: Dict[str, List[weakref.ref]] = {}

    # --- registration ---

    def add_table(self, table: Table) -> Table:
        """Append ``table``, assigning its extension number and version."""
        if table.kind is TableKind.OI_TARGET and self.oi_target is not None:
            raise DuplicateTargetError("OI_TARGET is already defined !")

        table.ext_number = len(self.tables)
        table.ext_version = 1 + sum(1 for t in self.tables if t.ext_name == table.ext_name)
        self.tables.append(table)
        log.debug("Registering object for %s", table.ext_name)

        if table.kind is TableKind.OI_ARRAY:
            self._register(self._arr_names, table, table.arr_name, "ARRNAME")
        elif table.kind is TableKind.OI_WAVELENGTH:
            self._register(self._ins_names, table, table.ins_name, "INSNAME")
        elif table.kind is TableKind.OI_CORR:
            self._register(self._corr_names, table, table.corr_name, "CORRNAME")
        return table

    @staticmethod
    def _register(index: Dict[str, List[weakref.ref]], table: Table, name: Optional[str], keyword: str) -> None:
        if name is None:
            log.warning("%s of %s table is null during building step", keyword, table.ext_name)
            return
        index.setdefault(name, []).append(weakref.ref(table))

    def remove_table(self, table: Table) -> None:
        """Remove an OI_VIS, OI_VIS2 or OI_T3 table; indexes are untouched."""
        if table.kind not in REMOVABLE_KINDS:
            raise ValueError(f"Only OI_VIS, OI_VIS2 and OI_T3 tables can be removed, not {table.ext_name}")
        for i, t in enumerate(self.tables):
            if t is table:
                del self.tables[i]
                log.debug("Unregistering object for %s", table.ext_name)
                return
        raise ValueError(f"{table.ext_name} table is not part of this file")

    # --- lookups ---

    @staticmethod
    def _first(index: Dict[str, List[weakref.ref]], name: str) -> Optional[Table]:
        refs = index.get(name)
        if not refs:
            return None
        return refs[0]()

    def get_oi_array(self, arr_name: str) -> Optional[Table]:
        return self._first(self._arr_names, arr_name)

    def get_oi_wavelength(self, ins_name: str) -> Optional[Table]:
        return self._first(self._ins_names, ins_name)

    def get_oi_corr(self, corr_name: str) -> Optional[Table]:
        return self._first(self._corr_names, corr_name)

    def accepted_arr_names(self) -> List[str]:
        return list(self._arr_names)

    def accepted_ins_names(self) -> List[str]:
        return list(self._ins_names)

    def accepted_corr_names(self) -> List[str]:
        return list(self._corr_names)

    def accepted_sta_indexes(self, oi_array: Optional[Table]) -> List[int]:
        if oi_array is None:
            return []
        sta_index = oi_array.get_column("STA_INDEX")
        return [] if sta_index is None else [int(i) for i in sta_index]

    def accepted_target_ids(self) -> List[int]:
        oi_target = self.oi_target
        if oi_target is None:
            return []
        target_id = oi_target.get_column("TARGET_ID")
        return [] if target_id is None else [int(i) for i in target_id]

    def tables_of(self, kind: TableKind) -> List[Table]:
        return [t for t in self.tables if t.kind is kind]

    @property
    def oi_target(self) -> Optional[Table]:
        for table in self.tables:
            if table.kind is TableKind.OI_TARGET:
                return table
        return None

    @property
    def oi_arrays(self) -> List[Table]:
        return self.tables_of(TableKind.OI_ARRAY)

    @property
    def oi_wavelengths(self) -> List[Table]:
        return self.tables_of(TableKind.OI_WAVELENGTH)

    @property
    def oi_data(self) -> List[Table]:
        return [t for t in self.tables if t.kind.is_data]

    def resolver(self, table: Table) -> TableResolver:
        return TableResolver(self, table)

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    # --- checks ---

    def check(self, checker: OIFitsChecker) -> None:
        """Check table presence, identifier unicity, syntax and references."""
        if self.oi_target is None:
            checker.severe("No OI_TARGET table found: one and only one must be present")
        if not self._ins_names:
            checker.severe("No OI_WAVELENGTH table found: one or more must be present")

        self._check_unicity(checker, self._arr_names, TableKind.OI_ARRAY, "ARRNAME")
        self._check_unicity(checker, self._ins_names, TableKind.OI_WAVELENGTH, "INSNAME")
        self._check_unicity(checker, self._corr_names, TableKind.OI_CORR, "CORRNAME")

        for table in self.tables:
            table.check_syntax(checker, self.resolver(table))
            self.check_cross_references(table, checker)

    @staticmethod
    def _check_unicity(checker: OIFitsChecker, index: Dict[str, List[weakref.ref]],
                       kind: TableKind, keyword: str) -> None:
        for name, refs in index.items():
            if len(refs) > 1:
                ext_numbers = "|".join(str(ref().ext_number) for ref in refs)
                checker.severe(f"{kind.value} tables [{ext_numbers}] are identified by same {keyword}='{name}'")

    def check_cross_references(self, table: Table, checker: OIFitsChecker) -> None:
        kind = table.kind
        if kind is TableKind.OI_TARGET:
            if table.row_count < 1:
                checker.severe("No target defined", table=table)
            return

        if not (kind.is_data or kind is TableKind.OI_INSPOL):
            return

        if kind is not TableKind.OI_INSPOL:
            ins_name = table.ins_name
            if ins_name and ins_name.strip() and self.get_oi_wavelength(ins_name) is None:
                checker.severe(f"unresolved INSNAME reference '{ins_name}'", table=table, name="INSNAME")

        arr_name = table.arr_name
        if arr_name and arr_name.strip() and self.get_oi_array(arr_name) is None:
            checker.severe(f"unresolved ARRNAME reference '{arr_name}'", table=table, name="ARRNAME")

        corr_name = table.corr_name
        if corr_name and corr_name.strip() and self.get_oi_corr(corr_name) is None:
            checker.severe(f"unresolved CORRNAME reference '{corr_name}'", table=table, name="CORRNAME")

        if kind is TableKind.OI_INSPOL:
            mjd_obs = table.get_column("MJD_OBS")
            mjd_end = table.get_column("MJD_END")
            if mjd_obs is not None and mjd_end is not None and mjd_obs.shape == mjd_end.shape:
                rows = [int(i) for i in np.flatnonzero(mjd_obs > mjd_end)]
                if rows:
                    checker.warning(f"MJD_OBS is greater than MJD_END (rows {rows})", table=table, name="MJD_OBS")

    # --- analysis ---

    def analyze(self) -> List[TargetSummary]:
        """Aggregate data tables per (target, instrument).

        Recomputed from scratch on every call.
        """
        summaries: List[TargetSummary] = []
        oi_target = self.oi_target
        target_ids = None if oi_target is None else oi_target.get_column("TARGET_ID")
        if target_ids is None:
            self.target_summaries = summaries
            return summaries

        names = oi_target.get_column("TARGET")
        ras = oi_target.get_column("RAEP0")
        decs = oi_target.get_column("DECEP0")

        for row, target_id in enumerate(target_ids):
            per_ins: Dict[str, TargetSummary] = {}
            for data in self.oi_data:
                if data.kind not in SUMMARY_KINDS:
                    continue
                ids = data.get_column("TARGET_ID")
                if ids is None:
                    continue
                mask = ids == target_id
                count = int(np.count_nonzero(mask))
                if count == 0:
                    continue

                ins_name = data.ins_name or ""
                summary = per_ins.get(ins_name)
                if summary is None:
                    summary = TargetSummary(
                        target_name=str(names[row]) if names is not None else "",
                        ra=ras[row] if ras is not None else np.nan,
                        dec=decs[row] if decs is not None else np.nan,
                        instrument_name=ins_name,
                    )
                    per_ins[ins_name] = summary

                if data.kind is TableKind.OI_VIS:
                    summary.nb_vis += count
                elif data.kind is TableKind.OI_VIS2:
                    summary.nb_vis2 += count
                else:
                    summary.nb_t3 += count
                if summary.facility_name is None:
                    summary.facility_name = data.arr_name

                mjd = data.get_column("MJD")
                if mjd is not None:
                    summary.mjds.extend(mjd[mask])
                int_time = data.get_column("INT_TIME")
                if int_time is not None:
                    summary.int_times.extend(int_time[mask])

            for summary in per_ins.values():
                self._finish_summary(summary)
                summaries.append(summary)

        self.target_summaries = summaries
        return summaries

    def _finish_summary(self, summary: TargetSummary) -> None:
        if summary.mjds:
            summary.t_min = min(summary.mjds)
            summary.t_max = max(summary.mjds)
        if summary.int_times:
            summary.int_time = min(summary.int_times)

        oi_wavelength = self.get_oi_wavelength(summary.instrument_name)
        if oi_wavelength is None:
            return
        summary.nb_channels = oi_wavelength.row_count
        eff_wave = oi_wavelength.get_column("EFF_WAVE")
        if eff_wave is None or eff_wave.size == 0:
            return
        summary.em_min = eff_wave.min()
        summary.em_max = eff_wave.max()
        eff_band = oi_wavelength.get_column("EFF_BAND")
        if eff_band is not None and eff_band.size and eff_band.mean() > 0:
            summary.res_power = eff_wave.mean() / eff_band.mean()

    def __repr__(self) -> str:
        return (f"OIFitsFile({self.absolute_path!r}, tables={[t.ext_name for t in self.tables]}, "
                f"arrnames={self.accepted_arr_names()}, insnames={self.accepted_ins_names()})")
