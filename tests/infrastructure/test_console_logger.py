from __future__ import annotations

import json

from infrastructure.logging.console_logger import ConsoleLogger


def test_console_logger_emits_type_field(capsys) -> None:
    logger = ConsoleLogger()

    logger.info("dump.chain", hops=2)

    captured = capsys.readouterr()
    line = captured.out.strip()

    assert line.startswith("dump.chain ")
    payload = json.loads(line.replace("dump.chain ", "", 1))
    assert payload["type"] == "dump.chain"
    assert payload["level"] == "info"
    assert payload["hops"] == 2


def test_console_logger_bind_and_level_filter(capsys) -> None:
    logger = ConsoleLogger(level="warning").bind(url="http://x/")

    logger.debug("hidden")
    logger.warning("dump.chain_truncated", hops=1)

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0].split(" ", 1)[1])
    assert payload["url"] == "http://x/"
