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
"""'pyhelmet headers': preview the headers a configuration produces."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from pyhelmet.cli.console import console
from pyhelmet.cli.options import config_option, helmet_options, load_config, profile_option
from pyhelmet.helmet.middleware import HelmetMiddleware
from pyhelmet.http.message import Response
from pyhelmet.kernel.exceptions import ConfigurationException


@click.command()
@config_option
@profile_option
@click.option("--option", "-o", "overrides", multiple=True, metavar="KEY=JSON", help="Override one option.")
@click.option("--json", "as_json", is_flag=True, help="Print the resulting headers as JSON.")
def headers_command(
    config_path: Path | None,
    profiles: tuple[str, ...],
    overrides: tuple[str, ...],
    as_json: bool,
) -> None:
    """Apply the configured rules to a bare 200 response and show the headers."""
    config = load_config(config_path, profiles)

    try:
        helmet = HelmetMiddleware(helmet_options(config, overrides))
    except ConfigurationException as exc:
        console.print(f"[error]{escape(str(exc))}[/error]")
        raise SystemExit(1) from None

    response = helmet.apply(Response(status_code=200))

    if as_json:
        click.echo(json.dumps(dict(response.headers), indent=2))
        return

    table = Table(title="[pyhelmet]Security headers[/pyhelmet]", border_style="dim")
    table.add_column("Option", style="dim")
    table.add_column("Header", style="bold")
    table.add_column("Value")

    for rule in helmet.rules:
        value = response.get_header(rule.header_name)
        table.add_row(rule.key, rule.header_name, escape(value) if value is not None else "[dim](removed)[/dim]")

    console.print(table)
