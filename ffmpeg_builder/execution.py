"""
External command execution.

Runs configure/make/git synchronously with event emission and turns any
failure into a BuildError. There are no timeouts and no retries: the first
failing command aborts the build.
"""
import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from ffmpeg_builder.common import BuildError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class ExecutionResult:
    """Result of one external command."""
    command: List[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass
class ExecutionEvent:
    """An event emitted during execution."""
    type: str  # "started", "completed", "failed"
    data: object = None


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def format_command(command: Sequence[str]) -> str:
    return " ".join(str(arg) for arg in command)


def _prepend(directory: Path, search_path: str) -> str:
    return os.pathsep.join(p for p in (str(directory), search_path) if p)


class CommandRunner:
    """Runs build commands one at a time."""

    def __init__(
        self,
        tool_dir: Optional[PathLike] = None,
        pkg_config_dir: Optional[PathLike] = None,
    ) -> None:
        self._callbacks: List[Callable[[ExecutionEvent], None]] = []
        self._tool_dir = Path(tool_dir) if tool_dir is not None else None
        self._pkg_config_dir = Path(pkg_config_dir) if pkg_config_dir is not None else None

    def on_event(self, callback: Callable[[ExecutionEvent], None]) -> None:
        """Register an event listener."""
        self._callbacks.append(callback)

    def _emit(self, event: ExecutionEvent) -> None:
        for cb in self._callbacks:
            cb(event)

    def environment(self) -> Optional[Dict[str, str]]:
        """Child environment; tools and .pc files built into the build tree win."""
        if self._tool_dir is None and self._pkg_config_dir is None:
            return None
        env = dict(os.environ)
        if self._tool_dir is not None:
            env["PATH"] = _prepend(self._tool_dir, env.get("PATH", ""))
        if self._pkg_config_dir is not None:
            env["PKG_CONFIG_PATH"] = _prepend(self._pkg_config_dir, env.get("PKG_CONFIG_PATH", ""))
        return env

    def run(
        self,
        command: Sequence[PathLike],
        cwd: Optional[PathLike] = None,
        capture: bool = False,
    ) -> ExecutionResult:
        """Run a command to completion.

        Args:
            command: Program and arguments.
            cwd: Working directory for the child.
            capture: Collect stdout/stderr instead of passing them through.

        Returns:
            ExecutionResult with the exit code (and output when captured).

        Raises:
            ValueError: If command is empty.
            FileNotFoundError: If the program does not exist.
        """
        if not command:
            raise ValueError("Command list must not be empty")
        args = [str(arg) for arg in command]

        logger.info("Running: %s (cwd=%s)", format_command(args), cwd or os.getcwd())
        self._emit(ExecutionEvent(type="started", data=args))

        pipe = subprocess.PIPE if capture else None
        process = subprocess.Popen(
            args,
            cwd=str(cwd) if cwd is not None else None,
            env=self.environment(),
            stdout=pipe,
            stderr=pipe,
            universal_newlines=True,
        )
        stdout, stderr = process.communicate()

        result = ExecutionResult(
            command=args,
            stdout=stdout or "",
            stderr=stderr or "",
            exit_code=process.returncode,
        )

        if result.success:
            self._emit(ExecutionEvent(type="completed", data=result))
        else:
            logger.error("%s exited with code %d", args[0], result.exit_code)
            self._emit(ExecutionEvent(type="failed", data=result))

        return result

    def check(
        self,
        command: Sequence[PathLike],
        step: str,
        cwd: Optional[PathLike] = None,
        capture: bool = False,
    ) -> ExecutionResult:
        """Run a command and raise BuildError unless it succeeds."""
        try:
            result = self.run(command, cwd=cwd, capture=capture)
        except FileNotFoundError as exc:
            raise BuildError(
                f"{step} failed - make sure {command[0]} is installed"
            ) from exc

        if not result.success:
            message = f"{step} failed"
            if result.stderr.strip():
                message = f"{message} {result.stderr.strip()}"
            raise BuildError(message, result=result)
        return result
