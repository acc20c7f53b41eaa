import json

from anjasmara.store import HistoryLog


def read_doc(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_append_persists_whole_list(log, history_path):
    log.append(log.new_record("r1", prompt="p1"))
    log.append(log.new_record("r2", prompt="p2"))

    doc = read_doc(history_path)
    assert [r["prompt"] for r in doc] == ["p1", "p2"]
    assert [r["reply"] for r in doc] == ["r1", "r2"]


def test_list_is_newest_first(log):
    for i in range(5):
        log.append(log.new_record(f"r{i}", prompt=f"p{i}"))

    assert [r["prompt"] for r in log.list()] == ["p4", "p3", "p2", "p1", "p0"]


def test_list_returns_copies(log):
    log.append(log.new_record("r", prompt="p"))
    log.list()[0]["reply"] = "changed"
    assert log.list()[0]["reply"] == "r"


def test_record_fields(log):
    item = log.append(log.new_record("caption", type="ig_caption", text="pantai", tone="lucu"))

    assert item["type"] == "ig_caption"
    assert item["text"] == "pantai"
    assert item["tone"] == "lucu"
    assert "prompt" not in item
    assert isinstance(item["id"], int)
    assert item["timestamp"].endswith("Z")


def test_ids_strictly_increase(log):
    ids = [log.next_id() for _ in range(50)]
    assert ids == sorted(set(ids))


def test_clear_empties_memory_and_disk(log, history_path):
    log.append(log.new_record("r", prompt="p"))
    log.clear()

    assert log.list() == []
    assert read_doc(history_path) == []


def test_load_existing_document(history_path):
    history_path.write_text(json.dumps([{"id": 5, "prompt": "a", "reply": "b", "timestamp": "t"}]), encoding="utf-8")
    log = HistoryLog(str(history_path))
    log.load()

    assert len(log) == 1
    assert log.next_id() > 5


def test_load_corrupt_document_resets_to_empty(history_path):
    history_path.write_text("{not json", encoding="utf-8")
    log = HistoryLog(str(history_path))
    log.load()

    assert log.list() == []


def test_load_missing_file(tmp_path):
    log = HistoryLog(str(tmp_path / "nope.json"))
    log.load()
    assert len(log) == 0


def test_save_failure_keeps_record_in_memory(tmp_path):
    # parent directory does not exist, so every write fails
    log = HistoryLog(str(tmp_path / "missing" / "history.json"))
    item = log.append(log.new_record("r", prompt="p"))

    assert log.list() == [item]


def test_load_non_object_records_resets_to_empty(history_path):
    history_path.write_text(json.dumps([1, "x", {"id": 2, "reply": "r"}]), encoding="utf-8")
    log = HistoryLog(str(history_path))
    log.load()

    assert log.list() == []
    assert len(log) == 0
