import asyncio
import logging
import os
import signal
import time
from dataclasses import dataclass

from playground.core.config import Settings
from playground.core.errors import IoFailure, RuntimeFailure
from playground.languages import LanguageProfile
from playground.services.classify import classify
from playground.services.rewrite import rewrite_endpoints
from playground.services.workspace import WorkspaceManager, write_source

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = (
    "Execution timed out after {seconds} seconds. Your code took too long to run."
)


@dataclass
class ExecutionOutcome:
    success: bool
    stdout: str
    stderr: str
    returncode: int


async def _spawn(argv, cwd=None) -> asyncio.subprocess.Process:
    # own session so a timeout can take down everything the toolchain started
    return await asyncio.create_subprocess_exec(
        *argv,
        cwd=cwd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=True,
    )


async def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    await proc.wait()


class Executor:
    """Runs snippets through a language's toolchain inside its workspace."""

    def __init__(self, settings: Settings, workspaces: WorkspaceManager | None = None):
        self.settings = settings
        self.workspaces = workspaces or WorkspaceManager(
            settings.WORKSPACE_MODE, settings.WORKSPACE_TMP_DIR
        )

    async def execute(self, profile: LanguageProfile, code: str) -> ExecutionOutcome:
        code = rewrite_endpoints(
            code, self.settings.SOLANA_URL, self.settings.SOLANA_WS_URL
        )
        async with self.workspaces.checkout(profile) as ws:
            await write_source(ws, code)
            outcome = await self._run(ws)

        if outcome.success:
            return outcome
        error = classify(profile, outcome.stderr)
        logger.info(
            "Run failed, classified as %s",
            type(error).__name__,
            extra={"language": profile.name, "returncode": outcome.returncode},
        )
        raise error

    async def _run(self, profile: LanguageProfile) -> ExecutionOutcome:
        try:
            proc = await _spawn(profile.command, cwd=str(profile.workspace))
        except OSError as e:
            logger.error("Failed to launch %s: %s", " ".join(profile.command), e)
            raise IoFailure(str(e)) from e

        logger.info(
            "Started %s in %s",
            " ".join(profile.command),
            profile.workspace,
            extra={"language": profile.name, "pid": proc.pid},
        )
        start = time.monotonic()
        timeout = self.settings.EXECUTION_TIMEOUT_S
        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Run exceeded %ss, killing process group",
                timeout,
                extra={"language": profile.name, "pid": proc.pid},
            )
            await _kill(proc)
            raise RuntimeFailure(TIMEOUT_MESSAGE.format(seconds=timeout))
        except asyncio.CancelledError:
            await _kill(proc)
            raise

        wall_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Run finished",
            extra={
                "language": profile.name,
                "pid": proc.pid,
                "returncode": proc.returncode,
                "wall_ms": wall_ms,
            },
        )
        return ExecutionOutcome(
            success=proc.returncode == 0,
            stdout=out.decode("utf-8", errors="replace"),
            stderr=err.decode("utf-8", errors="replace"),
            returncode=proc.returncode,
        )

    async def check_toolchain(self, profile: LanguageProfile) -> bool:
        """Report whether the profile's toolchain answers a version query."""
        try:
            proc = await _spawn(profile.version_command)
        except OSError as e:
            logger.warning("%s toolchain unavailable: %s", profile.name, e)
            return False
        try:
            await asyncio.wait_for(
                proc.communicate(), timeout=self.settings.HEALTH_TIMEOUT_S
            )
        except asyncio.TimeoutError:
            logger.warning("%s version check timed out", profile.name)
            await _kill(proc)
            return False
        except asyncio.CancelledError:
            await _kill(proc)
            raise
        return proc.returncode == 0
