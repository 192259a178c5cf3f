"""Bounded external command execution."""

import atexit
import logging
import os
import signal
import subprocess
import threading

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 2.0

# Seconds to wait for a signalled child to be reaped.
REAP_TIMEOUT = 1.0

_POSIX = os.name == "posix"

_running: set[subprocess.Popen] = set()
_running_lock = threading.Lock()


def run_command(args: list[str], timeout: float = DEFAULT_TIMEOUT) -> str | None:
    """Run a command and return its captured stdout.

    A missing binary, a non-zero exit and an expired timeout all count as
    failure. On timeout, or when the caller is interrupted, the child's
    whole process group is killed so no helper outlives the call.

    Args:
        args: Command and its arguments.
        timeout: Seconds to wait before killing the child.

    Returns:
        Decoded stdout, or None if the command failed.
    """
    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            start_new_session=_POSIX,
        )
    except OSError as e:
        logger.debug(f"Could not start {args[0]}: {e}")
        return None

    with _running_lock:
        _running.add(proc)
    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.debug(f"{args[0]} timed out after {timeout}s, killing PID {proc.pid}")
        _abandon(proc)
        return None
    except BaseException:
        _abandon(proc)
        raise
    finally:
        # Anything still alive stays visible to terminate_running()
        if proc.poll() is not None:
            with _running_lock:
                _running.discard(proc)

    if proc.returncode != 0:
        err = stderr.decode(errors="replace").strip() if stderr else ""
        logger.debug(f"{args[0]} exited with code {proc.returncode}: {err[:200]}")
        return None

    return stdout.decode(errors="replace")


def _signal_group(proc: subprocess.Popen, force: bool) -> None:
    """Signal the child and everything in its session."""
    if _POSIX:
        try:
            os.killpg(proc.pid, signal.SIGKILL if force else signal.SIGTERM)
            return
        except ProcessLookupError:
            return
        except OSError as e:
            logger.debug(f"killpg failed for PID {proc.pid}: {e}")
    if force:
        proc.kill()
    else:
        proc.terminate()


def _stop(proc: subprocess.Popen, force: bool) -> bool:
    """Signal the child's group and wait for the child to exit.

    Returns:
        True if the child has exited.
    """
    _signal_group(proc, force)
    try:
        proc.wait(timeout=REAP_TIMEOUT)
    except subprocess.TimeoutExpired:
        return False
    return True


def _abandon(proc: subprocess.Popen) -> None:
    """Kill a child whose output is no longer wanted and reap it."""
    # A helper that escaped the group may still hold the write end
    for stream in (proc.stdout, proc.stderr):
        if stream is not None:
            stream.close()
    if not _stop(proc, force=True):
        logger.warning(f"PID {proc.pid} did not exit after SIGKILL")


def terminate_running() -> int:
    """Terminate every child process still in flight.

    Returns:
        Number of processes that were signalled.
    """
    with _running_lock:
        procs = list(_running)
        _running.clear()

    signalled = 0
    for proc in procs:
        if proc.poll() is not None:
            continue
        signalled += 1
        logger.info("Terminating command PID %d", proc.pid)
        if not _stop(proc, force=False):
            logger.warning("Command PID %d ignored SIGTERM, killing", proc.pid)
            _stop(proc, force=True)
    return signalled


atexit.register(terminate_running)
