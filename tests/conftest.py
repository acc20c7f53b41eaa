import os
import re

# keep test runs from writing log files or reading a stray history.json
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("HISTORY_FILE", os.path.join(os.path.dirname(__file__), ".history-test.json"))

import pytest
from fastapi.testclient import TestClient

from anjasmara import store as history_store
from anjasmara import upstream
from anjasmara.main import app
from anjasmara.store import HistoryLog


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.json"


@pytest.fixture
def log(history_path, monkeypatch):
    log = HistoryLog(str(history_path))
    log.load()
    monkeypatch.setattr(history_store, "store", log)
    return log


class FakeUpstream:
    def __init__(self):
        self.reply = "Halo dari AI"
        self.error = None
        self.prompts = []

    async def __call__(self, prompt, transport=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(upstream, "complete", fake)
    return fake


@pytest.fixture
def client(log, fake_upstream, monkeypatch):
    monkeypatch.setenv("STREAM_DELAY_MS", "0")
    monkeypatch.delenv("DEMO_MOCK", raising=False)
    return TestClient(app)


def parse_sse(body: str):
    """[(event, data)] from a raw event-stream body; event is None for plain data.

    Lines end at CRLF, CR or LF and unknown lines are dropped, as an
    EventSource client does.
    """
    events = []
    event, data = None, []
    for line in re.split(r"\r\n|\r|\n", body):
        if line == "":
            if data or event:
                events.append((event, "\n".join(data)))
            event, data = None, []
        elif line.startswith("event: "):
            event = line[len("event: "):]
        elif line.startswith("data: "):
            data.append(line[len("data: "):])
    return events
