"""
Verbosity-gated logging on top of Loguru.

Diagnostics go to stderr so they never mix with a rendered page on stdout.
Whether a message is shown depends on the verbosity of the ProgramState
connected to the current context, so library code can log without being
handed the state:

    from pagerender.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)            # once, in the CLI pipeline
    LOG("Rendering tar.md", level=2)        # shown with -v
    LOG("line 3: bullet", level=3)          # shown with -vv

Without a connected state (plain library use) nothing is logged.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running pipeline, if any
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make a state's verbosity govern LOG() calls in the current context.

    Args:
        state: Object with an integer ``verbosity`` attribute (ProgramState)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity is at least level.

    Args:
        message: Log message
        level: Minimum verbosity (1=normal, 2=verbose, 3=trace)
        **kwargs: Passed through to loguru
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
