import csv
import json

from orrery.core.logging_utils import RunLogger


def test_creates_run_folder_with_headers(tmp_path):
    with RunLogger(tmp_path, run_id="demo") as logger:
        logger.write_meta({"seed": 4})
    assert logger.closed
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo"
    assert json.loads(logger.meta_path.read_text(encoding="utf-8")) == {"seed": 4}
    header = logger.timeseries_path.read_text().splitlines()[0]
    assert header == ",".join(RunLogger.TIMESERIES_HEADER)
    assert logger.events_path.read_text().splitlines() == ["t,type,body,zoom,details"]


def test_run_ids_never_collide(tmp_path):
    first = RunLogger(tmp_path, run_id="demo")
    second = RunLogger(tmp_path, run_id="demo")
    first.close()
    second.close()
    assert first.run_dir != second.run_dir
    assert second.run_id == "demo_1"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo_1"


def test_rows_are_buffered_until_threshold(tmp_path):
    logger = RunLogger(tmp_path, timeseries_flush_threshold=3)
    logger.log_ts([0.5, 1, 1.0, 0.0, 0.0, 1.0, 0.0, 0.0, "", 1.0])
    assert len(logger.timeseries_path.read_text().splitlines()) == 1
    logger.log_ts([1.0, 2, 1.1, 0.0, 0.0, 2.0, 0.0, 0.0, "earth", 1.0])
    logger.log_ts([1.5, 3, 1.2, 0.0, 0.0, 2.0, 0.0, 0.0, "earth", 1.0])
    assert len(logger.timeseries_path.read_text().splitlines()) == 4
    logger.close()
    logger.close()


def test_event_details_stay_in_one_field(tmp_path):
    logger = RunLogger(tmp_path)
    logger.log_event(1.25, "speed", details={"multiplier": 2.0, "note": "a, b"})
    logger.log_event(2.0, "focus", "earth", 4.0)
    logger.close()
    with logger.events_path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert json.loads(rows[0]["details"]) == {"multiplier": 2.0, "note": "a, b"}
    assert rows[0]["body"] == ""
    assert rows[1] == {"t": "2", "type": "focus", "body": "earth", "zoom": "4", "details": ""}
