"""
Tests for structured log output.
"""

import json
import logging

from sweetshop.core.config import settings
from sweetshop.core.logging import ServiceJsonFormatter


def test_json_records_carry_service_identity() -> None:
    formatter = ServiceJsonFormatter("%(asctime)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord(
        name="sweetshop.services.sweet_service",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Purchase rejected",
        args=None,
        exc_info=None,
    )

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Purchase rejected"
    assert payload["level"] == "WARNING"
    assert payload["name"] == "sweetshop.services.sweet_service"
    assert payload["service"] == settings.PROJECT_NAME
    assert payload["version"] == settings.VERSION
