import xml.etree.ElementTree as ET

import numpy as np

from oifits_model import OIFitsChecker, Table, TableKind, get_table_xml_desc, get_xml_desc, load_oifits

from conftest import make_scenario


def column_cells(table_element, name):
    rows = table_element.find("table").findall("tr")
    header = [th.text for th in rows[0].findall("th")]
    index = header.index(name)
    return [tr.findall("td")[index].text for tr in rows[1:]]


def test_wavelength_cells_are_beautified(scenario):
    root = ET.fromstring(get_xml_desc(scenario, format=True, verbose=True))
    wavelength = root.find("OI_WAVELENGTH")
    assert column_cells(wavelength, "EFF_WAVE") == ["2E-6", "2.1E-6", "2.2E-6"]


def test_document_layout(scenario):
    root = ET.fromstring(get_xml_desc(scenario))
    assert root.tag == "oifits"
    assert root.find("filename").text == "/data/vega.fits"
    assert [child.tag for child in root][1:] == ["OI_ARRAY", "OI_WAVELENGTH", "OI_TARGET", "OI_VIS2"]
    assert root.find("checkReport") is None
    # data rows only when verbose, support tables always
    assert root.find("OI_VIS2/table") is None
    assert root.find("OI_TARGET/table") is not None


def test_column_schema(scenario):
    root = ET.fromstring(get_xml_desc(scenario))
    columns = {c.find("name").text: c for c in root.iterfind("OI_VIS2/columns/column")}
    assert "CORRINDX_VIS2DATA" not in columns
    assert columns["UCOORD"].find("unit").text == "m"
    assert columns["FLAG"].find("type").text == "L"


def test_array_cells(scenario):
    root = ET.fromstring(get_xml_desc(scenario, verbose=True))
    vis2 = root.find("OI_VIS2")
    assert column_cells(vis2, "STA_INDEX") == ["1 2", "3 4"]
    assert column_cells(vis2, "FLAG") == ["false false false"] * 2


def test_keywords_round_trip(scenario_path):
    oifits = load_oifits(scenario_path)
    root = ET.fromstring(get_xml_desc(oifits))
    for table in oifits.oi_data + oifits.oi_wavelengths + oifits.oi_arrays:
        element = root.find(table.ext_name)
        parsed = {k.find("name").text: k.find("value").text for k in element.iterfind("keywords/keyword")}
        for name, value in table.keywords.items():
            assert parsed[name] == str(value)
    wavelength = root.find("OI_WAVELENGTH")
    extra = [k for k in wavelength.iterfind("keywords/keyword") if k.find("name").text == "ESO DET DIT"]
    assert extra[0].find("type").text == "A"
    assert extra[0].find("unit").text is None


def test_check_report_is_appended():
    oifits = make_scenario(sta_index=((1, 7), (3, 4)))
    checker = OIFitsChecker().run(oifits)
    root = ET.fromstring(get_xml_desc(oifits, checker=checker))
    assert "STA_INDEX=7" in root.find("checkReport").text


def test_complex_cells():
    inspol = Table.from_attrs(TableKind.OI_INSPOL, jxx=np.array([[1 + 2j, 0.5 - 1j]], dtype=np.complex64))
    root = ET.fromstring(get_table_xml_desc(inspol, verbose=True))
    assert column_cells(root.find("OI_INSPOL"), "JXX") == ["1.0,2.0 0.5,-1.0"]


def test_standalone_table(scenario):
    text = get_table_xml_desc(scenario.oi_target)
    root = ET.fromstring(text)
    assert root.tag == "oifits"
    assert root.find("OI_TARGET/keywords/keyword/name").text == "OI_REVN"
