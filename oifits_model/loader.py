from __future__ import annotations

import logging
import os
import re
from typing import List, Union

import numpy as np
from astropy.io import fits
from astropy.io.fits.card import Undefined
from astropy.io.fits.hdu.base import ExtensionHDU

from .base import HeaderCard, Table
from .file import OIFitsFile
from .schema import TableKind

log = logging.getLogger(__name__)

# cards describing the HDU layout itself; never kept as extra cards
STRUCTURAL_KEYS = re.compile(
    r"^(SIMPLE|EXTEND|XTENSION|BITPIX|NAXIS\d*|PCOUNT|GCOUNT|TFIELDS|EXTNAME|EXTVER"
    r"|T(TYPE|FORM|UNIT|DIM|NULL|SCAL|ZERO|DISP)\d+)$"
)


class OIFitsLoadError(OSError):
    """Failure to read an OIFITS file; ``cause`` is the underlying error."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Unable to load OIFITS file '{path}': {cause}")
        self.path = path
        self.cause = cause


def header_cards(hdr: fits.Header) -> List[HeaderCard]:
    cards: List[HeaderCard] = []
    for card in hdr.cards:
        key = card.keyword
        if not key or STRUCTURAL_KEYS.match(key):
            continue
        value = card.value
        if isinstance(value, Undefined):
            value = None
        cards.append(HeaderCard(key, value, card.comment or None))
    return cards


def load_table(hdu: ExtensionHDU) -> Table:
    """Translate one extension HDU into a table.

    HDUs that are not binary tables of a known OI_* kind become ``UNKNOWN``
    tables carrying their header cards only.
    """
    hdr = hdu.header
    extname = (hdr.get("EXTNAME") or hdu.name or "").strip().upper()
    kind = TableKind.from_extname(extname)

    if kind is TableKind.UNKNOWN or not isinstance(hdu, fits.BinTableHDU):
        log.debug("Passing through HDU %s", extname)
        table = Table(TableKind.UNKNOWN, extname=extname)
        table.header_cards.extend(header_cards(hdr))
        return table

    data = hdu.data
    table = Table(kind, row_count=len(data) if data is not None else int(hdr.get("NAXIS2", 0)))
    schema = table.schema

    for card in header_cards(hdr):
        if schema.keyword(card.key) is not None and card.value is not None:
            table.set_keyword(card.key, card.value)
        else:
            table.header_cards.append(card)

    if data is not None:
        for name in hdu.columns.names:
            if schema.column(name) is None:
                log.info("Unknown column %s in %s", name, extname)
            table.set_column(name, np.asarray(data[name]))

    return table


def load_hdulist(hdul: fits.HDUList, absolute_path: Union[str, None] = None) -> OIFitsFile:
    oifits = OIFitsFile(absolute_path)
    for i, hdu in enumerate(hdul):
        if i == 0:
            oifits.primary_header = header_cards(hdu.header)
            continue
        oifits.add_table(load_table(hdu))
    return oifits


def load_oifits(source: Union[str, os.PathLike, fits.HDUList]) -> OIFitsFile:
    """Load an OIFITS file from a path or an already-open ``HDUList``.

    Raises
    ------
    OIFitsLoadError
        When the file cannot be opened or one of its HDUs cannot be decoded.
    """
    if isinstance(source, fits.HDUList):
        path = source.filename()
        path = os.path.abspath(path) if path else None
        try:
            return load_hdulist(source, absolute_path=path)
        except (ValueError, TypeError, KeyError, IndexError) as e:
            raise OIFitsLoadError(path or "<HDUList>", e) from e

    path = os.path.abspath(os.fspath(source))
    log.info("Loading %s", path)
    try:
        with fits.open(path, memmap=False) as hdul:
            return load_hdulist(hdul, absolute_path=path)
    except (OSError, ValueError, TypeError, KeyError, IndexError) as e:
        raise OIFitsLoadError(path, e) from e
