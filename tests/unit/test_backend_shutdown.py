import os
import queue
import signal
import subprocess
import sys
import textwrap
import threading
import time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]

BACKEND_PROCESS = textwrap.dedent(
    """
    from backend.app.infrastructure.persistence.mongo import mongo_connection
    from backend.app.main import main
    from tests.conftest import fake_motor_client_class

    mongo_connection.AsyncIOMotorClient = fake_motor_client_class()
    main()
    """
)


def _pump(stream, lines: "queue.Queue[str]") -> None:
    for line in stream:
        lines.put(line)
    lines.put("")


def _run_until_started(env: dict) -> tuple[subprocess.Popen, "queue.Queue[str]", list[str]]:
    proc = subprocess.Popen(
        [sys.executable, "-c", BACKEND_PROCESS],
        cwd=ROOT,
        env=env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
        text=True,
    )
    lines: "queue.Queue[str]" = queue.Queue()
    threading.Thread(target=_pump, args=(proc.stderr, lines), daemon=True).start()

    seen: list[str] = []
    deadline = time.monotonic() + 30
    while time.monotonic() < deadline:
        line = lines.get(timeout=max(deadline - time.monotonic(), 0.1))
        if line == "":
            break
        seen.append(line)
        if "Application startup complete" in line:
            return proc, lines, seen
    proc.kill()
    pytest.fail("backend did not start:\n" + "".join(seen))


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
def test_signal_closes_database_and_exits_0(sig):
    env = {
        **os.environ,
        "MONGODB_URI": "mongodb://db.example.net:27017/remotecyberhelp",
        "HOST": "127.0.0.1",
        "PORT": "0",
        "LOG_LEVEL": "INFO",
    }
    proc, lines, seen = _run_until_started(env)

    proc.send_signal(sig)
    returncode = proc.wait(timeout=30)
    while True:
        line = lines.get(timeout=5)
        if line == "":
            break
        seen.append(line)
    output = "".join(seen)

    assert returncode == 0, output
    assert "db_closed" in output
    assert "db_session_closed" in output
