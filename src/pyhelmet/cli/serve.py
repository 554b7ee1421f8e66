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
"""'pyhelmet serve': run the demo application with uvicorn."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from pyhelmet.cli.console import console
from pyhelmet.cli.options import config_option, helmet_options, load_config, profile_option
from pyhelmet.config.properties.server import ServerProperties
from pyhelmet.kernel.exceptions import ConfigurationException


@click.command()
@click.option("--host", default=None, help="Bind address (default: pyhelmet.server.host).")
@click.option("--port", default=None, type=int, help="Port number (default: pyhelmet.server.port).")
@config_option
@profile_option
def serve_command(
    host: str | None,
    port: int | None,
    config_path: Path | None,
    profiles: tuple[str, ...],
) -> None:
    """Serve a hello-world app with every response passing through helmet."""
    import uvicorn

    from pyhelmet.web.adapters.starlette.app import create_app

    config = load_config(config_path, profiles)
    server = config.bind(ServerProperties)
    host = host or server.host
    port = port or server.port

    try:
        app = create_app(helmet_options(config, ()))
    except ConfigurationException as exc:
        console.print(f"[error]{escape(str(exc))}[/error]")
        raise SystemExit(1) from None

    console.print(f"[success]Server running at http://{host}:{port}[/success]")
    uvicorn.run(app, host=host, port=port, log_level="warning", log_config=None)
