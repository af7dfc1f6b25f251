"""Tests for log routing: stdout carries only the command's result."""

import logging

import pytest
import structlog

from pyaccount import CreateAccountCommand, FaucetError
from pyaccount.log import configure_logging

TARGET_PUBLIC_KEY = "0xd75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"


class FailingFaucet:
    async def create_account(self, address):
        raise FaucetError("Faucet issue: 503", status_code=503)


@pytest.fixture
def clean_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _command():
    return CreateAccountCommand(
        TARGET_PUBLIC_KEY, use_faucet=True, faucet=FailingFaucet()
    )


@pytest.mark.asyncio
async def test_unconfigured_logging_keeps_stdout_empty(clean_logging, capsys):
    result = await _command().run()

    assert result.message == "Error: Faucet issue: 503"
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_configured_logging_writes_to_stderr(clean_logging, capsys):
    configure_logging("DEBUG")

    await _command().run()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "address_derived" in captured.err
    assert "command_failed" in captured.err


def test_unknown_level():
    with pytest.raises(ValueError, match="unknown log level"):
        configure_logging("chatty")
