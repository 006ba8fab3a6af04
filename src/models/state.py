"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing CLI stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field, fields, replace

from ..lib.log import LOG


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Each stage receives a state, copies it and adds the fields it produces.

    Pipeline stages and their state additions:
        - Initial: pages, configFile, verbosity and the layout flags
        - env_check: pagePaths, envOK
        - settings_resolve: settings
        - page_render: renderOK

    Attributes:
        pages: Page files given on the command line, in priority order
        configFile: Optional YAML settings file
        verbosity: Logging verbosity level (0-3)
        compact: --compact flag
        raw: --raw flag
        platformTitle: --platform-title flag
        showHyphens: --show-hyphens flag
        noTitle: --no-title flag
        color: --color choice, None to keep the configured value
        quiet: --quiet flag
        envOK: All page files exist
        pagePaths: Resolved page files
        settings: AppSettings after files, environment and flags are merged
        renderOK: First page rendered successfully
    """

    # CLI arguments
    pages: List[str] = field(default_factory=list)
    configFile: Optional[str] = field(default=None)
    verbosity: int = field(default=0)
    compact: bool = field(default=False)
    raw: bool = field(default=False)
    platformTitle: bool = field(default=False)
    showHyphens: bool = field(default=False)
    noTitle: bool = field(default=False)
    color: Optional[str] = field(default=None)
    quiet: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    pagePaths: List[Path] = field(default_factory=list)
    settings: Optional[Any] = field(default=None)  # AppSettings at runtime
    renderOK: bool = field(default=False)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options without a matching field are ignored.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Shallow copy for the next CLI stage.

        pagePaths and settings are shared with the original; stages replace
        them instead of mutating them.
        """
        return replace(self)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Run CLI stages left to right, feeding each the state returned by the last.

    The CLI runs env_check -> settings_resolve -> page_render. A stage that
    cannot continue exits the process, so later stages always see a state
    with the fields of every earlier stage filled in.
    """
    state = initial_state
    for stage in stages:
        LOG(f"Stage: {stage.__name__}", level=3)
        state = stage(state)
    return state
