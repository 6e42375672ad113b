"""Composition root: builds a VendingMachine from configuration.

This is the only place that knows where configuration comes from.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vending.application.machine_config import MachineConfig
from vending.application.vending_machine import VendingMachine
from vending.infrastructure.config_loader import load_config

CONFIG_ENV = "VENDING_CONFIG"

logger = logging.getLogger(__name__)


def machine_config(config_path: Path | None = None) -> MachineConfig:
    """Resolve config from an explicit path, then $VENDING_CONFIG, then defaults."""
    if config_path is None and os.environ.get(CONFIG_ENV):
        config_path = Path(os.environ[CONFIG_ENV])
    if config_path is None:
        logger.debug("Using default machine configuration")
        return MachineConfig.default()
    logger.debug("Loading machine configuration from %s", config_path)
    return load_config(config_path)


def build_machine(config_path: Path | None = None) -> VendingMachine:
    return VendingMachine(machine_config(config_path))
