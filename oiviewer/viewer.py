"""
Load, check and render OIFITS files for the command line.
"""

import logging
import os
from typing import Union

from oifits_model import OIFitsChecker, load_oifits

from . import COMMANDS, ViewerContext

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SEVERE = 1
EXIT_LOAD = 2
EXIT_USAGE = 3


class OIFitsViewer:
    """
    Render files according to a ``ViewerContext``.

    ``status`` keeps the highest exit code met so far: ``EXIT_SEVERE``
    when a checked file has SEVERE diagnostics, ``EXIT_LOAD`` when a file
    could not be read (set by the caller catching ``OIFitsLoadError``).
    """

    def __init__(self, ctx: ViewerContext):
        self.ctx = ctx
        self.status = EXIT_OK

    def fail(self, code: int) -> None:
        self.status = max(self.status, code)

    def process(self, path: Union[str, os.PathLike]) -> str:
        oifits = load_oifits(path)
        checker = OIFitsChecker().run(oifits)
        if checker.n_severe:
            log.warning(f"{oifits.absolute_path}: {checker.n_severe} severe issue(s)")
            self.fail(EXIT_SEVERE)
        return COMMANDS[self.ctx.output](self.ctx, oifits, checker)
