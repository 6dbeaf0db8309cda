import structlog

from avsgen.avsgen_logging import configure_logging, get_logger


def test_loggers_are_stdlib_bound():
    configure_logging("WARNING", include_timestamp=False)
    logger = get_logger("avsgen.test").bind(step="bind")
    assert isinstance(logger, structlog.stdlib.BoundLogger)


def test_json_output_goes_to_stderr(capsys):
    configure_logging("INFO", format_json=True, include_timestamp=False)
    try:
        get_logger("avsgen.test").info("catalog_loaded", filters=3)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert '"event": "catalog_loaded"' in captured.err
        assert '"filters": 3' in captured.err
    finally:
        configure_logging("WARNING", include_timestamp=False)
