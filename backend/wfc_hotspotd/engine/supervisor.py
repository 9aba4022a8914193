import logging
import queue
import signal
import subprocess
import threading
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional, Tuple

from wfc_hotspotd.errors import ProcessError

log = logging.getLogger("wfc_hotspotd.engine.supervisor")

OUTPUT_TAIL_MAX_LINES = 50
STOP_TIMEOUT_S = 2.0
POLL_INTERVAL_S = 0.5

DHCP = "dnsmasq"
AP = "hostapd"


def _reader_thread(stream, tail: Deque[str], child_log: logging.Logger) -> None:
    try:
        for line in iter(stream.readline, ""):
            if not line:
                break
            line = line.rstrip("\n")
            tail.append(line)
            child_log.info("%s", line)
    except (OSError, ValueError):
        tail.append("[supervisor] reader error")
    finally:
        try:
            stream.close()
        except OSError:
            pass


@dataclass
class ManagedProcess:
    name: str
    cmd: List[str]
    stdin_payload: Optional[str] = None
    proc: Optional[subprocess.Popen] = None
    tail: Deque[str] = field(default_factory=lambda: deque(maxlen=OUTPUT_TAIL_MAX_LINES))
    threads: List[threading.Thread] = field(default_factory=list)

    def is_running(self) -> bool:
        return self.proc is not None and self.proc.poll() is None

    def join_threads(self, timeout_s: float = 1.0) -> None:
        for t in self.threads:
            if t is not threading.current_thread():
                t.join(timeout=timeout_s)


def exit_status(rc: int) -> int:
    """Map a Popen returncode to a shell-style exit status."""
    if rc < 0:
        return 128 - rc
    return rc


class ServiceSupervisor:
    """
    Runs dnsmasq in the background and hostapd in the foreground.

    The program lives exactly as long as hostapd. dnsmasq is a dependent
    child: it is torn down whenever hostapd goes away, and if it exits on its
    own first the whole run fails with ProcessError. Nothing is restarted.
    """

    def __init__(
        self,
        dhcp_cmd: List[str],
        ap_cmd: List[str],
        dhcp_input: Optional[str] = None,
        ap_input: Optional[str] = None,
        stop_timeout_s: float = STOP_TIMEOUT_S,
        poll_interval_s: float = POLL_INTERVAL_S,
        dhcp_banner: str = "*** Starting DHCP server ***",
        ap_banner: str = "*** Creating access point ***",
    ):
        self.dhcp_banner = dhcp_banner
        self.ap_banner = ap_banner
        self.dhcp = ManagedProcess(DHCP, list(dhcp_cmd), dhcp_input)
        self.ap = ManagedProcess(AP, list(ap_cmd), ap_input)
        self._exits: "queue.Queue[Tuple[str, int]]" = queue.Queue()
        self._stopping = threading.Event()
        self._stop_timeout_s = stop_timeout_s
        self._poll_interval_s = poll_interval_s

    @property
    def stopping(self) -> bool:
        return self._stopping.is_set()

    def _watch(self, mp: ManagedProcess) -> None:
        assert mp.proc is not None
        rc = mp.proc.wait()
        self._exits.put((mp.name, rc))

    def _spawn(self, mp: ManagedProcess) -> None:
        stdin = subprocess.PIPE if mp.stdin_payload is not None else subprocess.DEVNULL
        try:
            mp.proc = subprocess.Popen(
                mp.cmd,
                stdin=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                # daemons echo raw SSIDs and query names; one bad byte must not stop the reader
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                close_fds=True,
            )
        except OSError as exc:
            mp.proc = None
            raise ProcessError(f"{mp.name}_spawn_failed: {exc}") from exc

        log.debug("%s started pid=%s cmd=%s", mp.name, mp.proc.pid, " ".join(mp.cmd), extra={"op": "spawn", "cmd": mp.cmd})

        if mp.stdin_payload is not None:
            assert mp.proc.stdin is not None
            # A child that dies before reading its config is reported by the watcher.
            try:
                mp.proc.stdin.write(mp.stdin_payload)
                mp.proc.stdin.close()
            except BrokenPipeError:
                log.debug("%s closed stdin before reading its config", mp.name)

        assert mp.proc.stdout is not None
        mp.threads = [
            threading.Thread(
                target=_reader_thread,
                args=(mp.proc.stdout, mp.tail, logging.getLogger(f"wfc_hotspotd.{mp.name}")),
                name=f"{mp.name}-output",
                daemon=True,
            ),
            threading.Thread(target=self._watch, args=(mp,), name=f"{mp.name}-watch", daemon=True),
        ]
        for t in mp.threads:
            t.start()

    def start_dhcp(self) -> None:
        log.info("%s", self.dhcp_banner)
        self._spawn(self.dhcp)

    def start_access_point(self) -> None:
        log.info("%s", self.ap_banner)
        self._spawn(self.ap)

    def request_stop(self) -> None:
        """Ask both children to exit; run() returns once hostapd is gone."""
        if self._stopping.is_set():
            # second request: stop waiting politely
            for mp in (self.ap, self.dhcp):
                if mp.is_running():
                    mp.proc.kill()
            return
        self._stopping.set()
        for mp in (self.ap, self.dhcp):
            if mp.is_running():
                mp.proc.terminate()

    @contextmanager
    def _signal_handlers(self) -> Iterator[None]:
        # signal.signal only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        def _handler(signum, _frame):
            try:
                sig_name = signal.Signals(signum).name
            except ValueError:
                sig_name = str(signum)
            log.info("shutdown_signal:%s", sig_name)
            self.request_stop()

        previous = {}
        for sig in (signal.SIGTERM, signal.SIGINT):
            previous[sig] = signal.signal(sig, _handler)
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

    def _wait(self) -> int:
        while True:
            try:
                name, rc = self._exits.get(timeout=self._poll_interval_s)
            except queue.Empty:
                continue

            if name == AP:
                log.info("hostapd exited rc=%s", rc, extra={"op": "exit", "rc": rc})
                if self._stopping.is_set() and rc == -signal.SIGTERM:
                    return 0
                return exit_status(rc)

            if self._stopping.is_set():
                continue

            self.dhcp.join_threads()
            tail = "\n".join(self.dhcp.tail)
            msg = f"a process unexpectedly died! {name} rc={rc}"
            if tail:
                msg += f"\n{tail}"
            raise ProcessError(msg)

    def run(self) -> int:
        """Start dnsmasq, then hostapd, and block until hostapd exits."""
        try:
            self.start_dhcp()
            self.start_access_point()
            with self._signal_handlers():
                return self._wait()
        finally:
            self.stop()

    def _terminate(self, mp: ManagedProcess) -> None:
        if mp.proc is None:
            return
        if mp.proc.poll() is None:
            mp.proc.terminate()
            try:
                mp.proc.wait(timeout=self._stop_timeout_s)
            except subprocess.TimeoutExpired:
                log.warning("%s ignored SIGTERM; killing pid=%s", mp.name, mp.proc.pid)
                mp.proc.kill()
                mp.proc.wait()
        mp.join_threads()

    def stop(self) -> None:
        self._stopping.set()
        for mp in (self.ap, self.dhcp):
            self._terminate(mp)
