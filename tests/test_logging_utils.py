import logging

from shared.logging_utils import RedactingFormatter, collect_secrets, configure_logging


def test_collect_secrets_reads_sensitive_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live-123")
    monkeypatch.setenv("HARMLESS_SETTING", "visible")
    secrets = collect_secrets(["extra-secret", None, ""])
    assert "sk-live-123" in secrets
    assert "extra-secret" in secrets
    assert "visible" not in secrets


def test_redacting_formatter_masks_values():
    formatter = RedactingFormatter(logging.Formatter("%(message)s"), ["sk-live-123"])
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "key=%s", ("sk-live-123",), None)
    assert formatter.format(record) == "key=[REDACTED]"


def test_configure_logging_wraps_root_handlers(monkeypatch):
    handler = logging.StreamHandler()
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        configure_logging(level="DEBUG", extra_values=["hunter2"])
        assert isinstance(handler.formatter, RedactingFormatter)
        assert root.level == logging.DEBUG
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "pw hunter2", None, None)
        assert "hunter2" not in handler.format(record)
    finally:
        root.removeHandler(handler)
        configure_logging(level="INFO")


def test_redacting_formatter_shortens_image_data_urls():
    payload = "A" * 120
    formatter = RedactingFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord(
        "x", logging.INFO, __file__, 1, "posting %s", (f"data:image/png;base64,{payload}",), None
    )
    assert formatter.format(record) == "posting data:image/png;base64,<120 chars>"


def test_redacting_formatter_keeps_short_data_urls():
    formatter = RedactingFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "data:image/png;base64,AAAA", None, None)
    assert formatter.format(record) == "data:image/png;base64,AAAA"
