"""Hidden, synchronous process execution for external print tools."""
from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

LOGGER = logging.getLogger(__name__)

LAUNCH_FAILURE = 127
TIMEOUT_FAILURE = 124


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _hidden_window_kwargs() -> dict:
    if os.name != "nt":
        return {}
    startupinfo = subprocess.STARTUPINFO()
    startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
    startupinfo.wShowWindow = subprocess.SW_HIDE
    return {
        "creationflags": subprocess.CREATE_NO_WINDOW,
        "startupinfo": startupinfo,
    }


def run_hidden(
        args: Sequence[str],
        timeout: Optional[float] = None,
        env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """Run ``args`` without a console window and capture stdout+stderr together.

    A non-zero exit is reported through ``CommandResult.returncode`` instead of an
    exception. Launch failures and timeouts are folded into the result as well,
    with returncodes 127 and 124. ``env`` is layered over the current environment.
    """
    argv = tuple(str(arg) for arg in args)
    LOGGER.debug("Running %s", argv)
    try:
        proc = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            timeout=timeout or None,
            env={**os.environ, **env} if env else None,
            **_hidden_window_kwargs(),
        )
    except subprocess.TimeoutExpired as exc:
        partial = exc.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode(errors="replace")
        return CommandResult(argv, TIMEOUT_FAILURE, f"{partial}timed out after {timeout}s".strip())
    except OSError as exc:
        return CommandResult(argv, LAUNCH_FAILURE, f"failed to launch {argv[0]}: {exc}")
    return CommandResult(argv, proc.returncode, proc.stdout or "")


__all__ = ["CommandResult", "run_hidden", "LAUNCH_FAILURE", "TIMEOUT_FAILURE"]
