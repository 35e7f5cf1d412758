# Copyright 2026 Justin Cook
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

import typer
from rich.console import Console
from rich.markup import escape

from headache import __version__
from headache.core.config import DEFAULT_CONFIGURATION_PATH, ConfigurationLoader
from headache.core.environment import default_environment
from headache.core.errors import HeadacheError
from headache.core.logger import configure_logging, get_logger
from headache.core.resolver import ChangeSetResolver
from headache.core.rewriter import HeaderRewriter
from headache.core.tracker import ExecutionTracker
from headache.fs.path_matcher import PathMatcher

console = Console(stderr=True)
logger = get_logger("main")

app = typer.Typer(
    name="headache",
    help="Keeps license headers in sync with a template",
    add_completion=False,
    pretty_exceptions_enable=False,  # Disable stack traces for users
)


def version_callback(value: bool):
    if value:
        console.print(f"headache {__version__}")
        raise typer.Exit()


@app.command()
def main(
    configuration: str = typer.Option(
        DEFAULT_CONFIGURATION_PATH,
        "--configuration",
        "-c",
        envvar="HEADACHE_CONFIGURATION",
        help="Path to configuration file",
    ),
    check: bool = typer.Option(False, "--check", help="Checks if headers are up-to-date, without writing"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv, -vvv)"),
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Inserts or updates the license header of the configured files.
    Only files changed since the last tracked execution are visited, unless
    the header template or its parameters changed.
    """
    configure_logging(verbose)

    # dependency graph
    environment = default_environment()
    config_loader = ConfigurationLoader(environment.file_system)
    tracker = ExecutionTracker(environment, config_loader)
    resolver = ChangeSetResolver(environment, tracker, PathMatcher())
    rewriter = HeaderRewriter(environment)

    try:
        change_set = resolver.resolve(config_loader.load_file(configuration))
        if not change_set.files:
            logger.info("No files to process")
            return

        if check:
            diff = rewriter.check(change_set)
            if diff:
                console.print("[red]Headers are not up-to-date![/red]")
                console.print(escape(diff), highlight=False, soft_wrap=True, end="")
                raise typer.Exit(code=1)
            console.print("[green]Check successful![/green]")
            return

        count = rewriter.run(change_set)
        logger.info(f"Processed {count} file(s)")
    except HeadacheError as e:
        console.print(f"[red]headache {e.stage} error[/red]\n\t{escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)

    try:
        tracker.track_execution(configuration)
    except HeadacheError as e:
        console.print(
            f"[yellow]headache warning, could not save current execution[/yellow]\n\t{escape(str(e))}",
            soft_wrap=True,
        )


if __name__ == "__main__":
    app()
