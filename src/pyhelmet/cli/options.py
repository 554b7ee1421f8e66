# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Option loading shared by the CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from pyhelmet.core.config import Config
from pyhelmet.helmet.middleware import HELMET_CONFIG_PREFIX
from pyhelmet.logging.structlog_adapter import StructlogAdapter

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML configuration file.",
)
profile_option = click.option(
    "--profile",
    "profiles",
    multiple=True,
    help="Profile overlay to merge (repeatable).",
)


def load_config(config_path: Path | None, profiles: tuple[str, ...]) -> Config:
    """Load configuration and set up logging from it."""
    if config_path is not None and not config_path.is_file():
        raise click.BadParameter(f"{config_path} does not exist", param_hint="--config")
    config = Config.from_file(config_path, active_profiles=list(profiles))
    StructlogAdapter().configure(config)
    return config


def parse_override(item: str) -> tuple[str, Any]:
    """Parse ``KEY=JSON`` (``hsts=false``, ``xFrameOptions={"action": "DENY"}``)."""
    key, sep, raw = item.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected KEY=JSON, got {item!r}", param_hint="--option")
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{key}: invalid JSON ({exc.msg})", param_hint="--option") from exc


def helmet_options(config: Config, overrides: tuple[str, ...]) -> dict[str, Any]:
    """Options bag from config, with command-line overrides replacing keys."""
    options = dict(config.get_section(HELMET_CONFIG_PREFIX))
    for item in overrides:
        key, value = parse_override(item)
        options[key] = value
    return options
