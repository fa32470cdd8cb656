"""Lifecycle of the static file server child process.

The server runs in its own process group so teardown can signal the whole
tree it spawned (a shell wrapper, ``npx``, a node child, ...). Teardown is
two-phase: SIGTERM to the group, then SIGKILL once the grace window expires.
"""
from __future__ import annotations

import asyncio
import os
import signal
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, List, Optional, Union

import httpx

from prerender.core.errors import ConfigError, ServerStartTimeoutError

DEFAULT_READY_ATTEMPTS = 30
DEFAULT_READY_INTERVAL = 1.0
DEFAULT_STOP_GRACE = 2.0


class StaticServer:
    """Owns one static-server child process bound to ``port``.

    ``command`` is an optional shell template with ``{directory}``, ``{port}``
    and ``{host}`` placeholders; without it the bundled FastAPI server is used.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        port: int,
        *,
        host: str = "localhost",
        command: Optional[str] = None,
        debug: bool = False,
        stop_grace_seconds: float = DEFAULT_STOP_GRACE,
    ):
        self.directory = Path(directory)
        self.port = port
        self.host = host
        self.command = command
        self.debug = debug
        self.stop_grace_seconds = stop_grace_seconds
        self.ready = False
        self._process: Optional[subprocess.Popen] = None
        self._pumps: List[threading.Thread] = []

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def process(self) -> Optional[subprocess.Popen]:
        return self._process

    def build_command(self) -> Union[str, List[str]]:
        if self.command:
            try:
                return self.command.format(directory=str(self.directory), port=self.port, host=self.host)
            except (KeyError, IndexError, ValueError) as exc:
                raise ConfigError(
                    f"Invalid serve command template {self.command!r}: "
                    "only {directory}, {port} and {host} placeholders are supported"
                ) from exc
        return [
            sys.executable,
            "-m",
            "prerender.server.static_app",
            "--dir",
            str(self.directory),
            "--port",
            str(self.port),
            "--host",
            self.host,
        ]

    def start(self) -> subprocess.Popen:
        if self._process is not None:
            raise RuntimeError("server already started")
        cmd = self.build_command()
        kwargs = {}
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP  # type: ignore[attr-defined]
        else:
            kwargs["start_new_session"] = True
        self._process = subprocess.Popen(
            cmd,
            shell=isinstance(cmd, str),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            **kwargs,
        )
        self._pumps = [
            self._start_pump(self._process.stdout, sys.stdout),
            self._start_pump(self._process.stderr, sys.stderr),
        ]
        return self._process

    def _start_pump(self, stream: Optional[IO[bytes]], sink) -> threading.Thread:
        # Pipes are always drained so a chatty server never blocks on a full buffer.
        def _pump():
            if stream is None:
                return
            for raw in iter(stream.readline, b""):
                if self.debug:
                    sink.write(f"[serve] {raw.decode('utf-8', errors='replace')}")
                    sink.flush()
            stream.close()

        thread = threading.Thread(target=_pump, daemon=True)
        thread.start()
        return thread

    async def await_ready(
        self,
        max_attempts: int = DEFAULT_READY_ATTEMPTS,
        interval: float = DEFAULT_READY_INTERVAL,
    ) -> None:
        """Poll the server root until it answers with a 2xx status."""
        async with httpx.AsyncClient(timeout=max(interval, 1.0), trust_env=False) as client:
            for attempt in range(max_attempts):
                if self._process is not None and self._process.poll() is not None:
                    raise ServerStartTimeoutError(
                        self.port, attempt, f"server exited with code {self._process.returncode}"
                    )
                try:
                    resp = await client.get(self.url)
                    if resp.is_success:
                        self.ready = True
                        return
                except httpx.HTTPError:
                    pass
                if attempt < max_attempts - 1:
                    await asyncio.sleep(interval)
        raise ServerStartTimeoutError(self.port, max_attempts)

    def _signal_group(self, proc: subprocess.Popen, force: bool) -> None:
        if os.name == "nt":
            if force:
                proc.kill()
            else:
                proc.terminate()
            return
        os.killpg(proc.pid, signal.SIGKILL if force else signal.SIGTERM)

    @staticmethod
    def _sweep_group(pgid: int) -> bool:
        """SIGKILL members left in the group after its leader exited.

        Grandchildren that ignored SIGTERM may still hold the port. The kernel
        never hands out a pid equal to a live process-group id, so while any
        member remains ``pgid`` still names our group. Returns True when
        stragglers were signalled.
        """
        try:
            os.killpg(pgid, 0)
        except OSError:
            return False
        try:
            os.killpg(pgid, signal.SIGKILL)
        except OSError:
            return False
        return True

    def stop(self) -> None:
        """Terminate the process group. Idempotent and never raises."""
        proc = self._process
        if proc is None:
            return
        try:
            if proc.poll() is None:
                try:
                    self._signal_group(proc, force=False)
                except OSError:
                    pass
                try:
                    proc.wait(timeout=self.stop_grace_seconds)
                except subprocess.TimeoutExpired:
                    try:
                        self._signal_group(proc, force=True)
                    except OSError:
                        pass
                    try:
                        proc.wait(timeout=self.stop_grace_seconds)
                    except subprocess.TimeoutExpired:
                        print(f"[warn] server process {proc.pid} still running after SIGKILL")
            if os.name != "nt":
                self._sweep_group(proc.pid)
        finally:
            for thread in self._pumps:
                thread.join(timeout=1.0)
            self._pumps = []
            self._process = None
            self.ready = False

    def __enter__(self) -> "StaticServer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


__all__ = ["StaticServer", "DEFAULT_READY_ATTEMPTS", "DEFAULT_READY_INTERVAL", "DEFAULT_STOP_GRACE"]
