"""Entry point configuration.

RunConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import signal
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Configuration for ``clir.execute`` and ``clir.run``.

    All fields have sensible defaults. Override what you need::

        config = RunConfig(error_prefix="fatal:", log_level="debug")
    """

    # Signals that set the context's cancel event while a command runs
    signals: tuple[int, ...] = (signal.SIGTERM, signal.SIGINT)

    # Failure reporting
    exit_code: int = 1
    error_prefix: str = "Error:"

    # Logging. None leaves logging configuration to the program
    log_level: str | None = None
    log_format: str = "%(levelname)s %(name)s: %(message)s"
