import logging
import os
import shutil
import subprocess
from typing import List, Optional, Tuple

from wfc_hotspotd.errors import CommandError

log = logging.getLogger("wfc_hotspotd.engine.commands")

_CMD_TIMEOUT_S = 10.0
_SYSTEM_SBIN = ("/usr/sbin", "/sbin")


def run(cmd: List[str], check: bool = True, timeout_s: float = _CMD_TIMEOUT_S) -> Tuple[int, str]:
    """
    Run a host command to completion. Returns (rc, combined_output).

    With check=True a non-zero exit raises CommandError; a timeout always does.
    """
    log.debug("run: %s", " ".join(cmd), extra={"op": "run", "cmd": cmd})
    try:
        p = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout_s)
    except subprocess.TimeoutExpired as exc:
        out = (exc.stdout or "") if isinstance(exc.stdout, str) else ""
        raise CommandError(
            f"cmd_timeout cmd={' '.join(cmd)} out={out.strip()}", cmd=cmd, rc=None, output=out
        ) from exc
    except OSError as exc:
        raise CommandError(f"cmd_spawn_failed cmd={' '.join(cmd)} err={exc}", cmd=cmd) from exc
    out = (p.stdout or "") + ("\n" + p.stderr if p.stderr else "")
    if check and p.returncode != 0:
        raise CommandError(
            f"cmd_failed rc={p.returncode} cmd={' '.join(cmd)} out={out.strip()}",
            cmd=cmd,
            rc=p.returncode,
            output=out,
        )
    return p.returncode, out


def resolve_binary(name: str, env_key: Optional[str] = None) -> Optional[str]:
    """
    Locate an executable. An env override wins when it points at something
    executable; otherwise PATH, then the sbin directories non-root PATHs
    often lack.
    """
    if env_key:
        override = os.environ.get(env_key)
        if override and os.path.isfile(override) and os.access(override, os.X_OK):
            return override
    p = shutil.which(name)
    if p:
        return p
    for d in _SYSTEM_SBIN:
        cand = os.path.join(d, name)
        if os.path.isfile(cand) and os.access(cand, os.X_OK):
            return cand
    return None


def binary(name: str, env_key: Optional[str] = None) -> str:
    """resolve_binary, falling back to the bare name so the spawn error names it."""
    return resolve_binary(name, env_key) or name
