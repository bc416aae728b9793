import gc

import numpy as np
import pytest

from oifits_model import DuplicateTargetError, OIFitsFile, Table, TableKind

from conftest import make_array, make_scenario, make_target, make_vis2, make_wavelength


def test_ext_numbers_and_versions():
    oifits = OIFitsFile()
    tables = [make_target(), make_wavelength("A"), make_vis2(), make_wavelength("B"), make_vis2()]
    for table in tables:
        oifits.add_table(table)
    assert [t.ext_number for t in tables] == [0, 1, 2, 3, 4]
    assert [t.ext_version for t in tables] == [1, 1, 1, 2, 2]


def test_duplicate_target_rejected(scenario):
    with pytest.raises(DuplicateTargetError):
        scenario.add_table(make_target())
    assert len(scenario.tables_of(TableKind.OI_TARGET)) == 1


def test_index_lookups(scenario):
    assert scenario.accepted_arr_names() == ["VLTI"]
    assert scenario.accepted_ins_names() == ["GRAVITY"]
    assert scenario.accepted_corr_names() == []
    for name in scenario.accepted_arr_names():
        assert scenario.get_oi_array(name).arr_name == name
    assert scenario.get_oi_wavelength("PIONIER") is None
    assert scenario.accepted_target_ids() == [1]
    assert scenario.accepted_sta_indexes(scenario.get_oi_array("VLTI")) == [1, 2, 3, 4]


def test_first_registered_match_wins():
    oifits = OIFitsFile()
    first = oifits.add_table(make_wavelength())
    oifits.add_table(make_wavelength())
    assert oifits.get_oi_wavelength("GRAVITY") is first


def test_index_holds_weak_references():
    oifits = OIFitsFile()
    oifits.add_table(make_array())
    oifits.tables.clear()
    gc.collect()
    assert oifits.get_oi_array("VLTI") is None


def test_null_identifier_is_not_indexed(caplog):
    wavelength = make_wavelength()
    wavelength.set_keyword("INSNAME", None)
    oifits = OIFitsFile()
    oifits.add_table(wavelength)
    assert oifits.accepted_ins_names() == []
    assert "INSNAME of OI_WAVELENGTH table is null during building step" in caplog.text


def test_remove_table(scenario):
    vis2 = scenario.oi_data[0]
    scenario.remove_table(vis2)
    assert scenario.oi_data == []
    with pytest.raises(ValueError):
        scenario.remove_table(vis2)
    with pytest.raises(ValueError, match="Only data tables"):
        scenario.remove_table(scenario.oi_target)


def test_resolver(scenario):
    vis2 = scenario.oi_data[0]
    resolver = scenario.resolver(vis2)
    assert resolver.nwave() == 3
    assert resolver.nstations() == 4
    assert resolver.accepted_sta_indexes() == [1, 2, 3, 4]

    orphan = make_vis2(arr_name="CHARA", ins_name="MIRC")
    scenario.add_table(orphan)
    resolver = scenario.resolver(orphan)
    assert resolver.nwave() is None
    assert resolver.accepted_sta_indexes() is None


def test_inspol_nwave_is_resolved_per_file(scenario):
    scenario.add_table(make_wavelength("PIONIER"))
    inspol = Table.from_attrs(TableKind.OI_INSPOL, insname=["GRAVITY", "PIONIER"])
    scenario.add_table(inspol)
    assert scenario.resolver(inspol).nwave() == 3

    inspol.set_column("INSNAME", ["GRAVITY", "AMBER"])
    assert scenario.resolver(inspol).nwave() is None


def test_container_protocol(scenario):
    assert len(scenario) == 4
    assert [t.ext_name for t in scenario] == ["OI_TARGET", "OI_ARRAY", "OI_WAVELENGTH", "OI_VIS2"]
    assert "GRAVITY" in repr(scenario)


def test_analyze(scenario):
    (summary,) = scenario.analyze()
    assert summary.target_name == "Vega"
    assert summary.instrument_name == "GRAVITY"
    assert summary.facility_name == "VLTI"
    assert summary.nb_vis2 == 2
    assert summary.nb_vis == 0
    assert summary.nb_channels == 3
    assert summary.t_min == pytest.approx(58604.1)
    assert summary.t_max == pytest.approx(58604.2)
    assert summary.int_time == pytest.approx(10.0)
    assert summary.em_min == pytest.approx(2.0e-6)
    assert summary.em_max == pytest.approx(2.2e-6)
    assert summary.res_power == pytest.approx(21.0, rel=1e-5)
    assert scenario.target_summaries == [summary]


def test_analyze_is_idempotent(scenario):
    assert scenario.analyze() == scenario.analyze()


def test_analyze_without_band():
    oifits = make_scenario()
    del oifits.get_oi_wavelength("GRAVITY").columns["EFF_BAND"]
    (summary,) = oifits.analyze()
    assert np.isnan(summary.res_power)


def test_analyze_without_target():
    oifits = OIFitsFile()
    oifits.add_table(make_vis2())
    assert oifits.analyze() == []


def test_only_summary_data_tables_are_removable(scenario):
    flux = Table.from_attrs(TableKind.OI_FLUX, keywords={"OI_REVN": 2, "INSNAME": "GRAVITY"},
                            mjd=[58604.1])
    scenario.add_table(flux)
    with pytest.raises(ValueError, match="Only OI_VIS, OI_VIS2 and OI_T3"):
        scenario.remove_table(flux)
    assert flux in scenario.oi_data
