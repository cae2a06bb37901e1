from __future__ import annotations

from loguru import logger as loguru_logger

from infrastructure.logging.loguru_logger import LoguruLogger


def test_loguru_logger_passes_fields_as_extra() -> None:
    records = []
    sink_id = loguru_logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    try:
        LoguruLogger().bind(component="test").warning("dump.chain_truncated", hops=3)
    finally:
        loguru_logger.remove(sink_id)

    assert len(records) == 1
    record = records[0]
    assert record["message"] == "dump.chain_truncated"
    assert record["level"].name == "WARNING"
    assert record["extra"]["component"] == "test"
    assert record["extra"]["hops"] == 3
