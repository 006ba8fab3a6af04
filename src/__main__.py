#!/usr/bin/env python3
"""
pagerender - Terminal renderer for command-line help pages

Renders tldr-style pages with styled titles, descriptions, bullets and
command examples. Links, inline code and {{placeholders}} are highlighted.

Page format:
    # tar

    > Archiving utility.
    > More information: <https://www.gnu.org/software/tar>.

    - Create an archive from files:

    `tar cf {{target.tar}} {{file1}} {{file2}}`

Usage:
    pagerender pages/linux/tar.md

    When several pages are given (the same command for several platforms),
    the first one is rendered and the others are listed as warnings.

Examples:
    # Render without blank lines between sections
    pagerender pages/common/git.md --compact

    # Custom styles, no colours when piping
    pagerender pages/common/git.md --config styles.yaml --color never

    # Print the page source unchanged
    pagerender pages/common/git.md --raw
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Any, Dict, List, Optional

from .config.settings import AppSettings, ConfigError
from .lib import candidates_print, RenderError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    prog="pagerender",
    description="pagerender - Terminal renderer for command-line help pages",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "pages", nargs="+", type=str, help="Page file(s); the first is rendered, others are listed"
)

parser.add_argument(
    "--config", dest="configFile", default=None, type=str, help="YAML settings file"
)

parser.add_argument(
    "--compact", action="store_true", help="Do not print blank lines between sections"
)

parser.add_argument(
    "--raw", action="store_true", help="Print the page source without rendering it"
)

parser.add_argument(
    "--platform-title",
    dest="platformTitle",
    action="store_true",
    help="Prefix the title with the page's platform",
)

parser.add_argument(
    "--show-hyphens",
    dest="showHyphens",
    action="store_true",
    help="Keep a marker in front of bullet lines",
)

parser.add_argument(
    "--no-title", dest="noTitle", action="store_true", help="Do not print the page title"
)

parser.add_argument(
    "--color",
    choices=["auto", "always", "never"],
    default=None,
    help="Use ANSI styles (default: from settings, 'auto')",
)

parser.add_argument(
    "-q", "--quiet", action="store_true", help="Do not list pages found for other platforms"
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Increase diagnostic output on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Verify that every page given on the command line is a file.

    Returns:
        ProgramState with added fields:
            - pagePaths: Resolved page paths, in command line order
            - envOK: True if all pages exist

    Exits:
        1 if a page is missing
    """
    state = inputstate.copy()

    LOG("Checking pages...", level=2)

    paths = [Path(page) for page in state.pages]

    for path in paths:
        if not path.is_file():
            print(f"Error: page not found: {path}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Page: {path}", level=2)

    state.pagePaths = paths
    state.envOK = True
    return state


def settings_overrides(state: ProgramState, settings: AppSettings) -> Dict[str, Any]:
    """Collect the settings changed by command line flags"""
    output: Dict[str, Any] = {}
    if state.compact:
        output["compact"] = True
    if state.raw:
        output["raw_markdown"] = True
    if state.platformTitle:
        output["platform_title"] = True
    if state.showHyphens:
        output["show_hyphens"] = True
    if state.noTitle:
        output["show_title"] = False

    overrides: Dict[str, Any] = {}
    if output:
        overrides["output"] = settings.output.model_copy(update=output)
    if state.quiet:
        overrides["quiet"] = True
    if state.color:
        overrides["color"] = state.color
    return overrides


def settings_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Load settings from the environment and --config, then apply CLI flags.

    Returns:
        ProgramState with added field:
            - settings: AppSettings used for rendering

    Exits:
        1 if the settings file cannot be loaded
    """
    state = inputstate.copy()

    try:
        if state.configFile:
            LOG(f"Loading settings from {state.configFile}", level=2)
            settings = AppSettings.settings_loadFromYAML(state.configFile)
        else:
            settings = AppSettings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = settings_overrides(state, settings)
    if overrides:
        LOG(f"Command line overrides: {', '.join(overrides)}", level=3)
        settings = settings.model_copy(update=overrides)

    state.settings = settings
    return state


def page_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the first page to stdout and list the others on stderr.

    Returns:
        ProgramState with added field:
            - renderOK: True once the page was written

    Exits:
        1 if the page cannot be read or violates the page grammar
    """
    state = inputstate.copy()

    LOG(f"Rendering {state.pagePaths[0]}", level=1)
    try:
        candidates_print(state.pagePaths, state.settings)
    except RenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.renderOK = False
        sys.exit(1)

    state.renderOK = True
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - render a help page to the terminal.

    Orchestrates the pipeline:
        1. env_check: Validate page paths
        2. settings_resolve: Merge settings file, environment and flags
        3. page_render: Render the first page, warn about the others

    Args:
        argv: Command line arguments (default: sys.argv[1:])
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, settings_resolve, page_render)


if __name__ == "__main__":
    main()
