import json
import logging
import threading
from io import StringIO
from typing import List

from pingsim.simulator.logging_setup import (
    RESERVED,
    coerce_level,
    configure_json_logging,
    log_event,
)


def _json_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_pingsim_json", False)]


def test_single_handler_and_level_update():
    logger = configure_json_logging(level="WARNING")
    assert len(_json_handlers(logger)) == 1
    assert logger.level == logging.WARNING

    logger2 = configure_json_logging(level="DEBUG")
    assert logger is logger2
    assert len(_json_handlers(logger2)) == 1
    assert logger2.level == logging.DEBUG


def test_json_shape_and_timezone():
    buf = StringIO()
    logger = configure_json_logging(level="INFO", stream=buf, force=True)
    logger.info("hello", extra={"event": "say_hello", "fields": {"a": 1}})
    payload = json.loads(buf.getvalue().strip().splitlines()[-1])

    assert payload["msg"] == "hello"
    assert payload["level"] == "info"
    assert payload["event"] == "say_hello"
    assert payload["fields"] == {"a": 1}
    assert payload["ts"].endswith("Z")
    ms_part = payload["ts"].split(".")[-1].rstrip("Z")
    assert len(ms_part) == 3


def test_log_event_does_not_duplicate_event_name():
    buf = StringIO()
    logger = configure_json_logging(level="INFO", stream=buf, force=True)
    log_event(logger, "session_finished", transmitted=4, received=3)
    payload = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert payload["msg"] == "session_finished"
    assert "event" not in payload
    assert payload["fields"] == {"transmitted": 4, "received": 3}


def test_child_loggers_share_handler():
    buf = StringIO()
    configure_json_logging(level="DEBUG", stream=buf, force=True)
    logging.getLogger("pingsim.simulator.session").debug("probe", extra={"fields": {"seq": 1}})
    payload = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert payload["logger"] == "pingsim.simulator.session"
    assert payload["fields"] == {"seq": 1}


def test_non_serializable_field_is_stringified():
    class X: ...

    buf = StringIO()
    logger = configure_json_logging(level="INFO", stream=buf, force=True)
    logger.info("obj", extra={"fields": {"obj": X()}})
    payload = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert isinstance(payload["fields"]["obj"], str)


def test_reserved_keys_not_overwritten():
    buf = StringIO()
    logger = configure_json_logging(level="INFO", stream=buf, force=True)
    keys = sorted(RESERVED)[:3]
    logger.info("reserve", extra={"fields": {k: f"bad_{k}" for k in keys}})
    payload = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert payload["msg"] == "reserve"
    for k in keys:
        assert k in payload["fields"]


def test_level_below_threshold_is_dropped():
    buf = StringIO()
    logger = configure_json_logging(level="WARNING", stream=buf, force=True)
    logger.info("quiet")
    assert buf.getvalue() == ""


def test_coerce_level():
    assert coerce_level("debug") == logging.DEBUG
    assert coerce_level(logging.ERROR) == logging.ERROR
    assert coerce_level("nonsense") == logging.WARNING
    assert coerce_level(None) == logging.WARNING


def test_propagation_disabled():
    logger = configure_json_logging(level="INFO")
    assert logger.propagate is False


def test_threadsafe_config_race():
    results: List[logging.Logger] = []

    def worker():
        results.append(configure_json_logging(level="INFO"))

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(_json_handlers(results[0])) == 1


def test_force_replaces_handler_and_stream():
    first, second = StringIO(), StringIO()
    configure_json_logging(level="INFO", stream=first, force=True)
    logger = configure_json_logging(level="INFO", stream=second, force=True)
    assert len(_json_handlers(logger)) == 1
    logger.info("routed")
    assert first.getvalue() == ""
    assert "routed" in second.getvalue()
