"""Tests for the process entry point."""

import pytest

from pyaccount.__main__ import main

TARGET_PUBLIC_KEY = "0xd75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"


@pytest.fixture
def environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("PUBLIC_KEY", "PRIVATE_KEY", "USE_FAUCET", "CHAIN_ID", "KEY_SCHEME"):
        monkeypatch.delenv(f"PYACCOUNT_{name}", raising=False)
    return monkeypatch


@pytest.mark.asyncio
async def test_missing_sender_key(environment):
    environment.setenv("PYACCOUNT_PUBLIC_KEY", TARGET_PUBLIC_KEY)
    environment.setenv("PYACCOUNT_NODE_URL", "http://127.0.0.1:9/v1")

    result = await main()

    assert not result.success
    assert result.message.startswith("Error: One of")


@pytest.mark.asyncio
async def test_malformed_setting(environment):
    environment.setenv("PYACCOUNT_CHAIN_ID", "not-a-number")

    result = await main()

    assert not result.success
    assert "CHAIN_ID" in result.message
