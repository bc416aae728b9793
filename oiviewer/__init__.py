#!/usr/bin/env python
import importlib
import logging
import pkgutil
import functools
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import colorlog
import yaml

# --- 0. Setup Logging ---
log = logging.getLogger(__name__)
FMT = "[%(filename)-12s:%(lineno)-4s %(log_color)s%(levelname)5s%(reset)s] %(message)s"
LOGGERS = (log, logging.getLogger("oifits_model"))
handler = logging.StreamHandler()
handler.setFormatter(colorlog.ColoredFormatter(FMT))
for _logger in LOGGERS:
    _logger.addHandler(handler)


def set_log_level(level: Union[str, int]) -> None:
    for logger in LOGGERS:
        logger.setLevel(level.upper() if isinstance(level, str) else level)


# --- 1. Configuration & Context ---
@dataclass
class ViewerContext:
    """
    Output settings of the viewer, optionally read from a YAML file.

    Keys recognised in the file: ``output``, ``format``, ``verbose``,
    ``check_report`` and ``log_level``. Command-line flags override them.
    """

    conf_path: Optional[Union[str, Path]] = None
    output: str = "xml"
    format: bool = False
    verbose: bool = False
    check_report: bool = False
    log_level: str = "WARNING"

    # Internal configuration state
    conf: Dict[str, Any] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self):
        """Load config when a path is given."""
        if self.conf_path is None:
            return
        self.conf_path = Path(self.conf_path)
        if not self.conf_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.conf_path}")

        with open(self.conf_path, "r") as f:
            self.conf = yaml.safe_load(f) or {}
        if not isinstance(self.conf, dict):
            raise ValueError(f"Config file must hold a mapping: {self.conf_path}")

        self.override(**{k: v for k, v in self.conf.items() if k in self.settings()})

    @staticmethod
    def settings() -> Tuple[str, ...]:
        return ("output", "format", "verbose", "check_report", "log_level")

    def override(self, **kwargs: Any) -> "ViewerContext":
        """Apply settings, ignoring ``None`` (i.e. unset command-line flags)."""
        for key, value in kwargs.items():
            if key not in self.settings():
                raise KeyError(f"Unknown viewer setting: {key}")
            if value is not None:
                setattr(self, key, value)
        if self.output not in COMMANDS:
            raise ValueError(f"Unknown output '{self.output}', expected one of {sorted(COMMANDS)}")
        return self


# --- 2. Registry of output commands ---
COMMANDS: Dict[str, Callable[..., str]] = {}


def command(name: str, help_msg: str, flags: Tuple[str, ...] = ()):
    """Decorator to register an output mode selected by the given CLI flags."""

    def deco(func):
        meta = {
            "name": name,
            "help": help_msg,
            "flags": tuple(flags),
        }

        @functools.wraps(func)
        def runner(ctx, oifits, checker) -> str:
            log.debug(f"Rendering {oifits.absolute_path} as {name}")
            return func(ctx, oifits, checker)

        runner.meta = meta
        COMMANDS[name] = runner
        return runner

    return deco


# --- 3. Load Registered Outputs ---
for loader, module_name, is_pkg in pkgutil.walk_packages(__path__):
    if module_name in ("__init__", "cli", "viewer"):
        continue
    importlib.import_module(f".{module_name}", package=__name__)
    log.debug(f"Load output: {module_name}")
