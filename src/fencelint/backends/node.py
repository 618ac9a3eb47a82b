"""Node.js runtime for the JavaScript grammar parsers.

Mermaid and KaTeX only exist as JavaScript packages; both are reached
through small bridge scripts executed by Node.js.

Architecture:
    - NodeSettings: executable, package directory, start-up timeout
    - NodeSession: one long-lived bridge process speaking JSON lines
    - NodeRuntime: owns the lazily started session; start-up is memoized
      as the in-flight task so concurrent first callers share it
    - run_node_script(): one-shot synchronous bridge invocation

Bridge protocol (JSON lines over stdin/stdout):
    session start-up  <- {"ready": true} | {"ready": false, "message": ...}
    request           -> {"id": n, ...}
    reply             <- {"id": n, "ok": true} | {"id": n, "ok": false, ...}

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import subprocess
from collections import deque
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from fencelint.diagnostics.errors import BackendError, BackendUnavailableError, ConfigError

__all__ = [
    "NodeRuntime",
    "NodeSession",
    "NodeSettings",
    "Session",
    "resolve_settings",
    "run_node_script",
]

logger = logging.getLogger(__name__)

# Per-line read limit for bridge replies (bytes).
_STREAM_LIMIT = 2**20

# Seconds to wait for a session to exit after stdin is closed.
_SHUTDOWN_GRACE = 5.0

# Number of stderr lines kept for error messages.
_STDERR_TAIL = 20

# Console output of the parsers must not reach the protocol stream.
BRIDGE_PRELUDE = """
const util = require('node:util');
for (const level of ['log', 'info', 'debug', 'warn', 'trace']) {
  console[level] = (...args) => process.stderr.write(util.format(...args) + '\\n');
}
const send = (payload) => process.stdout.write(JSON.stringify(payload) + '\\n');
"""


@dataclass(frozen=True, slots=True)
class NodeSettings:
    """Immutable settings for launching Node.js bridge processes.

    Attributes:
        executable: Node.js executable name or path (default: "node")
        package_dir: Directory whose node_modules provides the parser
            packages; bridge scripts resolve imports from here
            (default: current working directory)
        startup_timeout: Seconds allowed for the handshake of a long-lived
            session; None waits forever (default: 60). Parse calls and
            one-shot scripts are not timed out

    Example:
        >>> settings = NodeSettings(package_dir="/opt/lint-tools")
        >>> settings.executable
        'node'
    """

    executable: str = "node"
    package_dir: str | None = None
    startup_timeout: float | None = 60.0

    def __post_init__(self) -> None:
        """Validate settings at construction time.

        Raises:
            ConfigError: If executable is empty or startup_timeout is not positive.
        """
        if not self.executable:
            msg = "NodeSettings.executable must not be empty"
            raise ConfigError(msg)
        if self.startup_timeout is not None and self.startup_timeout <= 0:
            msg = f"NodeSettings.startup_timeout must be positive, got {self.startup_timeout}"
            raise ConfigError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> NodeSettings:
        """Read settings from environment variables.

        Variables:
            FENCELINT_NODE: Node.js executable
            FENCELINT_NODE_PACKAGE_DIR: Directory holding node_modules
            FENCELINT_NODE_TIMEOUT: Start-up timeout in seconds ("0" disables it)

        Args:
            environ: Mapping to read (default: os.environ)

        Raises:
            ConfigError: If FENCELINT_NODE_TIMEOUT is not a number.
        """
        env = os.environ if environ is None else environ
        timeout_text = env.get("FENCELINT_NODE_TIMEOUT")
        timeout: float | None = 60.0
        if timeout_text is not None:
            try:
                timeout = float(timeout_text)
            except ValueError as e:
                msg = f"FENCELINT_NODE_TIMEOUT must be a number, got {timeout_text!r}"
                raise ConfigError(msg) from e
            if timeout == 0:
                timeout = None
        return cls(
            executable=env.get("FENCELINT_NODE") or "node",
            package_dir=env.get("FENCELINT_NODE_PACKAGE_DIR") or None,
            startup_timeout=timeout,
        )


class Session(Protocol):
    """Request/reply channel to a running bridge."""

    async def request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one request and wait for its reply."""
        ...

    async def aclose(self) -> None:
        """Terminate the bridge."""
        ...

    def kill(self) -> None:
        """Kill the bridge without awaiting it."""
        ...


class NodeSession:
    """Long-lived Node.js bridge process.

    Requests are serialized over the process pipes; callers may issue
    them concurrently.
    """

    def __init__(
        self, process: asyncio.subprocess.Process, *, shutdown_grace: float = _SHUTDOWN_GRACE
    ) -> None:
        """Wrap a started bridge process (use NodeSession.start())."""
        self._process = process
        self._shutdown_grace = shutdown_grace
        self._lock = asyncio.Lock()
        self._next_id = 0
        self._stderr_tail: deque[str] = deque(maxlen=_STDERR_TAIL)
        self._stderr_task = asyncio.get_running_loop().create_task(self._drain_stderr())

    @classmethod
    async def start(cls, script: str, settings: NodeSettings) -> NodeSession:
        """Launch a bridge script and wait for its ready handshake.

        Args:
            script: JavaScript source run with `node -e`
            settings: Launch settings

        Returns:
            Ready session

        Raises:
            BackendUnavailableError: Node.js is missing, the bridge could
                not load its packages, or the handshake timed out
        """
        logger.info("Starting Node.js bridge (%s)", settings.executable)
        try:
            process = await asyncio.create_subprocess_exec(
                settings.executable,
                "-e",
                BRIDGE_PRELUDE + script,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=settings.package_dir,
                limit=_STREAM_LIMIT,
            )
        except OSError as e:
            msg = f"Cannot run Node.js executable {settings.executable!r}: {e}"
            raise BackendUnavailableError(msg) from e

        session = await cls.connect(process, timeout=settings.startup_timeout)
        logger.debug("Node.js bridge ready (pid %s)", process.pid)
        return session

    @classmethod
    async def connect(
        cls,
        process: asyncio.subprocess.Process,
        *,
        timeout: float | None,
        shutdown_grace: float = _SHUTDOWN_GRACE,
    ) -> NodeSession:
        """Wait for the ready handshake of an already started bridge process.

        Args:
            process: Bridge process created with stdin, stdout and stderr pipes
            timeout: Seconds allowed for the handshake; None waits forever
            shutdown_grace: Seconds aclose() waits before killing the process

        Returns:
            Ready session

        Raises:
            BackendUnavailableError: The bridge exited, reported a load
                failure, or did not shake hands in time
        """
        session = cls(process, shutdown_grace=shutdown_grace)
        try:
            handshake = await asyncio.wait_for(session._read_message(), timeout=timeout)
        except (TimeoutError, BackendError) as e:
            await session.aclose()
            msg = f"Node.js bridge did not start: {str(e) or 'timed out'}"
            raise BackendUnavailableError(msg) from e

        if not handshake.get("ready"):
            await session.aclose()
            msg = f"Node.js bridge failed to load: {handshake.get('message', 'unknown error')}"
            raise BackendUnavailableError(msg)
        return session

    async def request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one request and wait for its reply.

        Args:
            payload: JSON-serializable request body (an "id" is added)

        Returns:
            Reply object

        Raises:
            BackendError: The bridge exited or replied out of order
        """
        async with self._lock:
            if self._process.returncode is not None:
                msg = f"Node.js bridge exited with code {self._process.returncode}"
                raise BackendError(msg)
            self._next_id += 1
            request_id = self._next_id
            line = json.dumps({**payload, "id": request_id}) + "\n"
            stdin = self._process.stdin
            assert stdin is not None  # noqa: S101 - created with PIPE
            try:
                stdin.write(line.encode("utf-8"))
                await stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                msg = f"Node.js bridge closed its input: {e}"
                raise BackendError(msg) from e
            reply = await self._read_message()
            if reply.get("id") != request_id:
                msg = f"Node.js bridge replied to {reply.get('id')!r}, expected {request_id}"
                raise BackendError(msg)
            return reply

    async def aclose(self) -> None:
        """Close stdin and wait for the bridge to exit (kill after a grace period)."""
        process = self._process
        if process.returncode is None:
            if process.stdin is not None and not process.stdin.is_closing():
                process.stdin.close()
            try:
                await asyncio.wait_for(process.wait(), timeout=self._shutdown_grace)
            except TimeoutError:
                logger.warning("Node.js bridge (pid %s) did not exit; killing it", process.pid)
                process.kill()
                await process.wait()
        if not self._stderr_task.done():
            self._stderr_task.cancel()
        logger.debug("Node.js bridge closed (exit code %s)", process.returncode)

    def kill(self) -> None:
        """Kill the bridge process without waiting for it.

        For sessions whose event loop has finished and can no longer
        run aclose().
        """
        if self._process.returncode is not None:
            return
        logger.debug("Killing Node.js bridge (pid %s)", self._process.pid)
        # Already exited or its transport is closed
        with contextlib.suppress(ProcessLookupError):
            self._process.kill()

    async def _read_message(self) -> dict[str, Any]:
        """Read the next JSON object from stdout, skipping stray lines."""
        stdout = self._process.stdout
        assert stdout is not None  # noqa: S101 - created with PIPE
        while True:
            raw = await stdout.readline()
            if not raw:
                await self._process.wait()
                # Let the drain task collect the final stderr lines
                await asyncio.wait({self._stderr_task}, timeout=1.0)
                stderr = " | ".join(self._stderr_tail) or "no output"
                msg = (
                    f"Node.js bridge exited with code {self._process.returncode}: {stderr}"
                )
                raise BackendError(msg)
            text = raw.decode("utf-8", errors="replace").strip()
            if not text:
                continue
            try:
                message = json.loads(text)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-protocol bridge output: %.200s", text)
                continue
            if isinstance(message, dict):
                return message
            logger.debug("Ignoring non-object bridge output: %.200s", text)

    async def _drain_stderr(self) -> None:
        """Keep the stderr pipe flowing and remember its last lines."""
        stderr = self._process.stderr
        if stderr is None:
            return
        while raw := await stderr.readline():
            text = raw.decode("utf-8", errors="replace").rstrip()
            if text:
                self._stderr_tail.append(text)
                logger.debug("node: %s", text)


SessionFactory: TypeAlias = Callable[[NodeSettings], Awaitable[Session]]


class NodeRuntime:
    """Lazily started, shared bridge session.

    The start-up task itself is memoized, not only its result: every
    caller that arrives while start-up is in flight awaits the same
    task, so the bridge is launched once. A failed start-up is memoized
    too; later callers receive the same error.

    The task belongs to the event loop that created it. When the runtime
    is used from a different loop, a new session is started there and
    the session of the previous loop is killed.

    Example:
        >>> runtime = NodeRuntime(MERMAID_BRIDGE_SCRIPT)
        >>> session = await runtime.session()   # starts the bridge
        >>> session is await runtime.session()  # reuses it
        True
        >>> await runtime.aclose()
    """

    def __init__(
        self,
        script: str,
        settings: NodeSettings | None = None,
        *,
        session_factory: SessionFactory | None = None,
    ) -> None:
        """Initialize runtime without starting anything.

        Args:
            script: Bridge script executed by the session
            settings: Launch settings (default: NodeSettings.from_env() at first start)
            session_factory: Coroutine function creating a session
                (default: NodeSession.start with script)
        """
        self._script = script
        self._settings = settings
        self._session_factory = session_factory
        self._loop: asyncio.AbstractEventLoop | None = None
        self._startup: asyncio.Task[Session] | None = None

    @property
    def started(self) -> bool:
        """Whether a start-up has been initiated in the current event loop."""
        return self._startup is not None

    async def session(self) -> Session:
        """Return the running session, starting it on first use.

        Raises:
            BackendUnavailableError: The session could not be started
        """
        loop = asyncio.get_running_loop()
        if self._startup is None or self._loop is not loop:
            if self._startup is not None:
                self._abandon(self._startup)
            self._loop = loop
            self._startup = loop.create_task(self._start())
        return await asyncio.shield(self._startup)

    @staticmethod
    def _abandon(startup: asyncio.Task[Session]) -> None:
        """Kill the session of a previous event loop, which can no longer be closed."""
        if not startup.done() or startup.cancelled() or startup.exception() is not None:
            logger.debug("Discarding bridge start-up from a previous event loop")
            return
        logger.warning(
            "Killing the bridge session of a previous event loop; "
            "call NodeRuntime.aclose() in the loop that used it"
        )
        startup.result().kill()

    async def aclose(self) -> None:
        """Terminate the session (killed when it belongs to another event loop)."""
        startup, self._startup = self._startup, None
        loop, self._loop = self._loop, None
        if startup is None:
            return
        if loop is not asyncio.get_running_loop():
            self._abandon(startup)
            return
        try:
            session = await startup
        except BackendError:
            return
        await session.aclose()

    async def _start(self) -> Session:
        settings = resolve_settings(self._settings)
        if self._session_factory is not None:
            return await self._session_factory(settings)
        return await NodeSession.start(self._script, settings)


def resolve_settings(settings: NodeSettings | None) -> NodeSettings:
    """Return settings, reading the environment when none were given.

    Raises:
        BackendUnavailableError: The environment holds invalid settings
    """
    if settings is not None:
        return settings
    try:
        return NodeSettings.from_env()
    except ConfigError as e:
        msg = f"Invalid Node.js settings: {e}"
        raise BackendUnavailableError(msg) from e


def run_node_script(script: str, payload: dict[str, Any], settings: NodeSettings) -> dict[str, Any]:
    """Run a one-shot bridge script synchronously.

    The payload is written to stdin as one JSON document; the last JSON
    object printed on stdout is the reply.

    Args:
        script: JavaScript source run with `node -e`
        payload: JSON-serializable request
        settings: Launch settings

    Returns:
        Reply object

    Raises:
        BackendUnavailableError: Node.js is missing or the script failed to load
        BackendError: The script produced no reply
    """
    try:
        completed = subprocess.run(  # noqa: S603 - executable comes from settings
            [settings.executable, "-e", BRIDGE_PRELUDE + script],
            input=json.dumps(payload),
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=settings.package_dir,
            check=False,
        )
    except OSError as e:
        msg = f"Cannot run Node.js executable {settings.executable!r}: {e}"
        raise BackendUnavailableError(msg) from e

    for line in reversed(completed.stdout.splitlines()):
        try:
            reply = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(reply, dict):
            return reply

    stderr = completed.stderr.strip().splitlines()
    detail = stderr[-1] if stderr else "no output"
    msg = f"Node.js bridge exited with code {completed.returncode}: {detail}"
    if completed.returncode != 0:
        raise BackendUnavailableError(msg)
    raise BackendError(msg)
