import logging

import pytest

from docanalyzer.ingestion.notifications import LogNotifier, Notification


class TestNotification:
    def test_default_variant_is_not_error(self) -> None:
        assert not Notification(title="t", description="d").is_error

    def test_destructive_variant_is_error(self) -> None:
        assert Notification(title="t", description="d", variant="destructive").is_error


class TestLogNotifier:
    def test_success_logged_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docanalyzer"):
            LogNotifier().notify(
                Notification(title="File processed successfully", description="a.txt done")
            )
        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == "File processed successfully: a.txt done"

    def test_error_logged_at_error(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docanalyzer"):
            LogNotifier().notify(
                Notification(
                    title="Processing failed",
                    description="Failed to process a.txt.",
                    variant="destructive",
                )
            )
        assert caplog.records[-1].levelno == logging.ERROR
