"""Logging utilities."""

# Americano Pairing
# Copyright (C) 2025  Americano Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from americanopairing.constants import LOG_DIR_ENV

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"
LOG_FILE_NAME = "americano-pairing.log"


def _create_file_handler(formatter: logging.Formatter) -> Optional[RotatingFileHandler]:
    """Create the rotating file handler if a log folder is configured."""
    log_folder = os.environ.get(LOG_DIR_ENV)
    if not log_folder:
        return None
    try:
        os.makedirs(log_folder, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_folder, LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Warning: could not open log file in {log_folder}: {e}")
        return None
    file_handler.setFormatter(formatter)
    return file_handler


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up loger for a python module.

    Sets up a console handler, and a rotating file handler when
    ``AMERICANO_PAIRING_LOG_DIR`` names a folder.

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(logging.INFO)  # Set minimum level
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.WARNING)
    lgr.addHandler(console_handler)

    file_handler = _create_file_handler(log_formatter)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def set_verbose(verbose: bool = True) -> None:
    """Lower the package loggers (and their console handlers) to DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.DEBUG if verbose else logging.WARNING
    for name, lgr in logging.Logger.manager.loggerDict.items():
        if not name.startswith("americanopairing") or not isinstance(
            lgr, logging.Logger
        ):
            continue
        lgr.setLevel(level)
        for handler in lgr.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(
                handler, RotatingFileHandler
            ):
                handler.setLevel(console_level)
