"""
Shared fixtures: loguru capture and mock deployment providers
"""

import sys
import asyncio
import pytest
from unittest.mock import Mock, AsyncMock
from loguru import logger


SIGNER_ADDRESS = '0xABC0000000000000000000000000000000000001'
DEPLOYED_ADDRESS = '0xDEF0000000000000000000000000000000000002'
ONE_UNIT = 1000000000000000000
TX_HASH = '0x' + 'ab' * 32


@pytest.fixture(autouse=True)
def loguru_to_stderr():
    """Route loguru through whatever sys.stderr is at write time (capsys-friendly)"""
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")
    yield
    logger.remove()


async def never_confirms():
    """Confirmation that never resolves"""
    await asyncio.Event().wait()


def build_provider(
    signers=None,
    balance=ONE_UNIT,
    deployed_address=DEPLOYED_ADDRESS,
    factory_error=None,
    confirmation=None
):
    """
    Mock provider shaped like Web3DeploymentProvider

    Args:
        signers: Signers to expose (None = one signer at SIGNER_ADDRESS)
        balance: Balance returned for any address
        deployed_address: Address of the confirmed contract
        factory_error: Exception raised by get_contract_factory
        confirmation: Replacement for pending.wait_for_deployment
    """
    if signers is None:
        signers = [Mock(address=SIGNER_ADDRESS)]

    pending = Mock(tx_hash=TX_HASH)
    pending.wait_for_deployment = confirmation or AsyncMock(return_value=Mock(address=deployed_address))

    factory = Mock()
    factory.deploy = AsyncMock(return_value=pending)

    provider = Mock()
    provider.get_signers = AsyncMock(return_value=signers)
    provider.get_balance = AsyncMock(return_value=balance)

    if factory_error is not None:
        provider.get_contract_factory = AsyncMock(side_effect=factory_error)
    else:
        provider.get_contract_factory = AsyncMock(return_value=factory)

    provider.factory = factory
    provider.pending = pending
    return provider


@pytest.fixture
def provider():
    """Provider that deploys successfully"""
    return build_provider()
