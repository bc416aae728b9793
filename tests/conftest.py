import numpy as np
import pytest
from astropy.io import fits

from oifits_model import HeaderCard, OIFitsFile, Table, TableKind

EFF_WAVE = [2.0e-6, 2.1e-6, 2.2e-6]
EFF_BAND = [1.0e-7, 1.0e-7, 1.0e-7]


def make_target(rows=1):
    """OI_TARGET with ``rows`` targets (Vega first)."""
    names = np.array(["Vega", "Altair", "Deneb"][:rows], dtype=str)
    zeros = np.zeros(rows)
    return Table.from_attrs(
        TableKind.OI_TARGET,
        keywords={"OI_REVN": 1},
        target_id=np.arange(1, rows + 1, dtype=np.int16),
        target=names,
        raep0=np.array([279.2347, 297.6958, 310.3580])[:rows],
        decep0=np.array([38.7837, 8.8683, 45.2803])[:rows],
        equinox=np.full(rows, 2000.0, dtype=np.float32),
        ra_err=zeros,
        dec_err=zeros,
        sysvel=zeros,
        veltyp=np.full(rows, "LSR"),
        veldef=np.full(rows, "OPTICAL"),
        pmra=zeros,
        pmdec=zeros,
        pmra_err=zeros,
        pmdec_err=zeros,
        parallax=np.zeros(rows, dtype=np.float32),
        para_err=np.zeros(rows, dtype=np.float32),
        spectyp=np.full(rows, "A0V"),
    )


def make_array(arr_name="VLTI"):
    return Table.from_attrs(
        TableKind.OI_ARRAY,
        keywords={"OI_REVN": 1, "ARRNAME": arr_name, "FRAME": "GEOCENTRIC",
                  "ARRAYX": 1942014.1, "ARRAYY": -5455311.0, "ARRAYZ": -2654243.9},
        tel_name=["UT1", "UT2", "UT3", "UT4"],
        sta_name=["U1", "U2", "U3", "U4"],
        sta_index=np.array([1, 2, 3, 4], dtype=np.int16),
        diameter=np.full(4, 8.2, dtype=np.float32),
        staxyz=np.zeros((4, 3)),
    )


def make_wavelength(ins_name="GRAVITY"):
    return Table.from_attrs(
        TableKind.OI_WAVELENGTH,
        keywords={"OI_REVN": 1, "INSNAME": ins_name},
        eff_wave=np.array(EFF_WAVE, dtype=np.float32),
        eff_band=np.array(EFF_BAND, dtype=np.float32),
    )


def make_vis2(sta_index=((1, 2), (3, 4)), arr_name="VLTI", ins_name="GRAVITY"):
    return Table.from_attrs(
        TableKind.OI_VIS2,
        keywords={"OI_REVN": 1, "DATE-OBS": "2019-05-01", "ARRNAME": arr_name, "INSNAME": ins_name},
        target_id=np.array([1, 1], dtype=np.int16),
        time=np.array([0.0, 60.0]),
        mjd=np.array([58604.1, 58604.2]),
        int_time=np.array([30.0, 10.0]),
        vis2data=np.array([[0.9, 0.8, 0.7], [0.6, 0.5, 0.4]]),
        vis2err=np.full((2, 3), 0.01),
        ucoord=np.array([10.0, 20.0]),
        vcoord=np.array([5.0, -5.0]),
        sta_index=np.array(sta_index, dtype=np.int16),
        flag=np.zeros((2, 3), dtype=bool),
    )


def make_scenario(sta_index=((1, 2), (3, 4))):
    """Target, array, wavelength and one OI_VIS2 with two rows."""
    oifits = OIFitsFile("/data/vega.fits")
    oifits.add_table(make_target())
    oifits.add_table(make_array())
    oifits.add_table(make_wavelength())
    oifits.add_table(make_vis2(sta_index=sta_index))
    return oifits


@pytest.fixture
def scenario():
    return make_scenario()


def scenario_hdulist():
    """The same scenario as FITS HDUs, plus an extra card and an unknown extension."""
    primary = fits.PrimaryHDU()
    primary.header["ORIGIN"] = ("ESO-PARANAL", "observatory")

    target = fits.BinTableHDU.from_columns([
        fits.Column(name="TARGET_ID", format="I", array=np.array([1])),
        fits.Column(name="TARGET", format="16A", array=np.array(["Vega"])),
        fits.Column(name="RAEP0", format="D", unit="deg", array=np.array([279.2347])),
        fits.Column(name="DECEP0", format="D", unit="deg", array=np.array([38.7837])),
        fits.Column(name="EQUINOX", format="E", array=np.array([2000.0])),
        fits.Column(name="RA_ERR", format="D", array=np.zeros(1)),
        fits.Column(name="DEC_ERR", format="D", array=np.zeros(1)),
        fits.Column(name="SYSVEL", format="D", array=np.zeros(1)),
        fits.Column(name="VELTYP", format="8A", array=np.array(["LSR"])),
        fits.Column(name="VELDEF", format="8A", array=np.array(["OPTICAL"])),
        fits.Column(name="PMRA", format="D", array=np.zeros(1)),
        fits.Column(name="PMDEC", format="D", array=np.zeros(1)),
        fits.Column(name="PMRA_ERR", format="D", array=np.zeros(1)),
        fits.Column(name="PMDEC_ERR", format="D", array=np.zeros(1)),
        fits.Column(name="PARALLAX", format="E", array=np.zeros(1)),
        fits.Column(name="PARA_ERR", format="E", array=np.zeros(1)),
        fits.Column(name="SPECTYP", format="16A", array=np.array(["A0V"])),
    ], name="OI_TARGET")
    target.header["OI_REVN"] = 1

    array = fits.BinTableHDU.from_columns([
        fits.Column(name="TEL_NAME", format="16A", array=np.array(["UT1", "UT2", "UT3", "UT4"])),
        fits.Column(name="STA_NAME", format="16A", array=np.array(["U1", "U2", "U3", "U4"])),
        fits.Column(name="STA_INDEX", format="I", array=np.array([1, 2, 3, 4])),
        fits.Column(name="DIAMETER", format="E", array=np.full(4, 8.2)),
        fits.Column(name="STAXYZ", format="3D", array=np.zeros((4, 3))),
    ], name="OI_ARRAY")
    array.header["OI_REVN"] = 1
    array.header["ARRNAME"] = "VLTI"
    array.header["FRAME"] = "GEOCENTRIC"
    array.header["ARRAYX"] = 1942014.1
    array.header["ARRAYY"] = -5455311.0
    array.header["ARRAYZ"] = -2654243.9

    wavelength = fits.BinTableHDU.from_columns([
        fits.Column(name="EFF_WAVE", format="E", unit="m", array=np.array(EFF_WAVE)),
        fits.Column(name="EFF_BAND", format="E", unit="m", array=np.array(EFF_BAND)),
    ], name="OI_WAVELENGTH")
    wavelength.header["OI_REVN"] = 1
    wavelength.header["INSNAME"] = "GRAVITY"
    wavelength.header["HIERARCH ESO DET DIT"] = 1.0

    vis2 = fits.BinTableHDU.from_columns([
        fits.Column(name="TARGET_ID", format="I", array=np.array([1, 1])),
        fits.Column(name="TIME", format="D", array=np.array([0.0, 60.0])),
        fits.Column(name="MJD", format="D", array=np.array([58604.1, 58604.2])),
        fits.Column(name="INT_TIME", format="D", array=np.array([30.0, 10.0])),
        fits.Column(name="VIS2DATA", format="3D", array=np.array([[0.9, 0.8, 0.7], [0.6, 0.5, 0.4]])),
        fits.Column(name="VIS2ERR", format="3D", array=np.full((2, 3), 0.01)),
        fits.Column(name="UCOORD", format="D", array=np.array([10.0, 20.0])),
        fits.Column(name="VCOORD", format="D", array=np.array([5.0, -5.0])),
        fits.Column(name="STA_INDEX", format="2I", array=np.array([[1, 2], [3, 4]])),
        fits.Column(name="FLAG", format="3L", array=np.zeros((2, 3), dtype=bool)),
    ], name="OI_VIS2")
    vis2.header["OI_REVN"] = 1
    vis2.header["DATE-OBS"] = "2019-05-01"
    vis2.header["ARRNAME"] = "VLTI"
    vis2.header["INSNAME"] = "GRAVITY"

    unknown = fits.ImageHDU(np.zeros((2, 2)), name="PSF")

    return fits.HDUList([primary, target, array, wavelength, vis2, unknown])


@pytest.fixture
def scenario_path(tmp_path):
    path = tmp_path / "vega.fits"
    scenario_hdulist().writeto(path)
    return path


@pytest.fixture
def extra_card():
    return HeaderCard("OBSERVER", "J. Doe", "who acquired the data")
