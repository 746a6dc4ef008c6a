import logging

import pytest

from popopt.foundation.logging import resolve_logger


def test_none_selects_library_logger():
    logger = resolve_logger(None)
    assert logger.name == "popopt"


def test_default_name_is_used_for_none():
    logger = resolve_logger(None, default_name="popopt.engine.algorithm.ga")
    assert logger.name == "popopt.engine.algorithm.ga"


def test_logger_instance_is_used_as_is():
    custom = logging.getLogger("popopt.tests.custom")
    assert resolve_logger(custom, "debug") is custom
    assert custom.level == logging.DEBUG


def test_console_selector_installs_single_handler():
    first = resolve_logger("stdout")
    second = resolve_logger("STDOUT")
    other = resolve_logger("stdout", default_name="popopt.engine.algorithm.gwo")

    assert first is second
    assert first.name == "popopt.console.stdout.popopt"
    assert other.name == "popopt.console.stdout.gwo"
    assert first.parent is other.parent
    assert first.parent.propagate is False
    assert len(first.parent.handlers) == 1
    assert not first.handlers


def test_console_owners_keep_independent_levels():
    gwo = resolve_logger("stdout", "DEBUG", default_name="popopt.engine.algorithm.gwo")
    ga = resolve_logger("stdout", default_name="popopt.engine.algorithm.ga", default_level=logging.WARNING)

    assert gwo.level == logging.DEBUG
    assert ga.level == logging.WARNING


def test_console_handler_follows_stream_redirects(capsys):
    logger = resolve_logger("stdout", logging.INFO, default_name="popopt.tests.redirect")

    logger.info("hello console")

    out, err = capsys.readouterr()
    assert "hello console" in out
    assert "hello console" not in err


def test_console_selector_default_level():
    logger = resolve_logger("stderr", default_level=logging.WARNING)
    assert logger.level == logging.WARNING
    logger = resolve_logger("stderr", logging.INFO, default_level=logging.WARNING)
    assert logger.level == logging.INFO


def test_unknown_selector_or_level_is_rejected():
    with pytest.raises(ValueError, match="Unknown logger selector"):
        resolve_logger("syslog")
    with pytest.raises(ValueError, match="Unknown log level"):
        resolve_logger(None, "loud")
