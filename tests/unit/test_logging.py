"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

from acm_ingress_operator.logging import log_resource_event, setup_structured_logging


def _log(logger, message="Reconciling", **kwargs):
    log_resource_event(
        logger,
        controller="acm-ingress-operator",
        resource_kind="Ingress",
        resource_name="web",
        namespace="apps",
        uid="uid-1",
        event="info",
        reason="Reconciling",
        message=message,
        **kwargs,
    )


class TestLogResourceEvent:
    """Test cases for log_resource_event."""

    def test_emits_json_with_extras(self):
        """Test the JSON document and extra fields."""
        logger = MagicMock()

        _log(logger, domain="foo.example.com")

        level, payload = logger.log.call_args[0]
        entry = json.loads(payload)
        assert level == logging.INFO
        assert entry["resource"] == "Ingress"
        assert entry["namespace"] == "apps"
        assert entry["domain"] == "foo.example.com"

    def test_none_extras_are_dropped(self):
        """Test that unset extra fields are omitted."""
        logger = MagicMock()

        _log(logger, certificate_arn=None)

        assert "certificate_arn" not in json.loads(logger.log.call_args[0][1])

    def test_message_is_redacted(self):
        """Test that account IDs in messages are redacted."""
        logger = MagicMock()

        _log(logger, message="Using arn:aws:acm:us-east-1:123456789012:certificate/abc")

        assert "123456789012" not in logger.log.call_args[0][1]

    def test_disabled_level_is_skipped(self):
        """Test that nothing is serialized below the logger's level."""
        logger = MagicMock()
        logger.isEnabledFor.return_value = False

        _log(logger, level=logging.DEBUG)

        logger.log.assert_not_called()


class TestSetupStructuredLogging:
    """Test cases for setup_structured_logging."""

    @patch("acm_ingress_operator.logging.logging.basicConfig")
    def test_level_from_environment(self, mock_basic_config, monkeypatch):
        """Test that LOG_LEVEL picks the root level."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        setup_structured_logging()

        assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.WARNING
