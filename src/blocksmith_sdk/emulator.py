from __future__ import annotations

import logging
import subprocess
import time
from typing import Callable, List, Optional

from .transport.errors import AccessApiError, EmulatorError
from .transport.http import HttpTransport

log = logging.getLogger(__name__)


class Emulator:
    """
    A `flow emulator` child process with in-memory state.

    Every start is a fresh chain; `on_stop` callbacks let the client drop
    whatever it remembered about the previous one.
    """

    def __init__(
        self,
        http: HttpTransport,
        *,
        flow_bin: str = "flow",
        cwd: Optional[str] = None,
        config_path: Optional[str] = None,
        grpc_port: int = 3569,
        rest_port: int = 8888,
        admin_port: int = 8080,
        logging_enabled: bool = False,
        ready_timeout: float = 30.0,
        poll_interval: float = 0.25,
    ):
        self._http = http
        self.flow_bin = flow_bin
        self.cwd = cwd
        self.config_path = config_path
        self.grpc_port = grpc_port
        self.rest_port = rest_port
        self.admin_port = admin_port
        self.logging_enabled = logging_enabled
        self.ready_timeout = ready_timeout
        self.poll_interval = poll_interval
        self._proc: Optional[subprocess.Popen] = None
        self._on_stop: List[Callable[[], None]] = []

    def command(self) -> List[str]:
        cmd = [
            self.flow_bin, "emulator",
            "--port", str(self.grpc_port),
            "--rest-port", str(self.rest_port),
            "--admin-port", str(self.admin_port),
            "--skip-version-check",
        ]
        if self.config_path:
            cmd += ["--config-path", self.config_path]
        if self.logging_enabled:
            cmd += ["--verbose"]
        return cmd

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def on_stop(self, callback: Callable[[], None]) -> None:
        self._on_stop.append(callback)

    def start(self) -> None:
        if self.running:
            raise EmulatorError(message="emulator already running")

        out = None if self.logging_enabled else subprocess.DEVNULL
        try:
            self._proc = subprocess.Popen(self.command(), cwd=self.cwd, stdout=out, stderr=out)
        except FileNotFoundError as e:
            raise EmulatorError(message=f"flow binary not found: {self.flow_bin}") from e

        log.info("emulator started (pid=%s, rest=%s)", self._proc.pid, self.rest_port)
        self.wait_until_ready()

    def wait_until_ready(self) -> None:
        deadline = time.monotonic() + self.ready_timeout
        last_error: Optional[Exception] = None

        while time.monotonic() < deadline:
            if self._proc is not None and self._proc.poll() is not None:
                raise EmulatorError(message=f"emulator exited with {self._proc.returncode} during startup")
            try:
                self._http.latest_sealed_block()
                return
            except AccessApiError as e:
                last_error = e
            time.sleep(self.poll_interval)

        self.stop()
        raise EmulatorError(message=f"emulator not ready after {self.ready_timeout}s", output=str(last_error))

    def stop(self, grace: float = 10.0) -> None:
        proc, self._proc = self._proc, None
        if proc is not None and proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=grace)
            except subprocess.TimeoutExpired:
                log.warning("emulator did not exit after %ss, killing", grace)
                proc.kill()
                proc.wait()
            log.info("emulator stopped")

        for cb in self._on_stop:
            cb()

    def __enter__(self) -> "Emulator":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
