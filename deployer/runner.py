"""
Deploy Runner
Resolves the deployer, deploys the named contract and reports its address
"""

import math
import asyncio
from dataclasses import dataclass
from typing import Optional
from loguru import logger

from .config import DEFAULT_CONTRACT_NAME
from .errors import DeploymentFailure


@dataclass
class DeploymentResult:
    """Outcome of a single deploy run"""

    ok: bool
    address: Optional[str] = None
    error: Optional[DeploymentFailure] = None
    deployer: Optional[str] = None
    balance: Optional[int] = None
    tx_hash: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class DeployRunner:
    """
    Sequences signer resolution, contract deployment and confirmation

    The provider is any object exposing async get_signers(), get_balance(address)
    and get_contract_factory(name, signer); the factory's deploy() returns a
    pending deployment whose wait_for_deployment() yields the confirmed contract.
    """

    def __init__(
        self,
        provider,
        contract_name: str = DEFAULT_CONTRACT_NAME,
        confirmation_timeout: float = 300.0
    ):
        """
        Initialize Deploy Runner

        Args:
            provider: Deployment/network provider
            contract_name: Artifact name of the contract to deploy
            confirmation_timeout: Seconds to wait for the deployment to confirm
        """
        if not math.isfinite(confirmation_timeout) or confirmation_timeout <= 0:
            raise ValueError(f"confirmation_timeout must be a positive finite number, got {confirmation_timeout}")

        self.provider = provider
        self.contract_name = contract_name
        self.confirmation_timeout = confirmation_timeout

    async def run(self) -> DeploymentResult:
        """
        Run the deployment once

        Returns:
            DeploymentResult; failures are returned, never raised
        """
        result = DeploymentResult(ok=False)

        try:
            await self._deploy(result)
            result.ok = True
            return result

        except Exception as e:
            failure = e if isinstance(e, DeploymentFailure) else DeploymentFailure(_describe(e))
            if failure is not e:
                failure.__cause__ = e

            logger.opt(exception=e).error(f"Deployment failed: {failure}")
            result.error = failure
            return result

    async def _deploy(self, result: DeploymentResult):
        signers = await self.provider.get_signers()
        if not signers:
            raise DeploymentFailure("No signer available: configure DEPLOYER_PRIVATE_KEY or unlock a node account")

        deployer = signers[0]
        result.deployer = deployer.address
        print(f"Deploying contract with account: {deployer.address}", flush=True)

        balance = await self.provider.get_balance(deployer.address)
        result.balance = balance
        print(f"Account balance: {balance}", flush=True)

        factory = await self.provider.get_contract_factory(self.contract_name, deployer)

        pending = await factory.deploy()
        result.tx_hash = getattr(pending, 'tx_hash', None)
        logger.info(f"Waiting up to {self.confirmation_timeout}s for {self.contract_name} to confirm...")

        try:
            contract = await asyncio.wait_for(
                pending.wait_for_deployment(),
                timeout=self.confirmation_timeout
            )
        except asyncio.TimeoutError:
            raise DeploymentFailure(
                f"{self.contract_name} deployment not confirmed within {self.confirmation_timeout}s"
            )

        result.address = contract.address
        print(f"{self.contract_name} deployed at: {contract.address}", flush=True)


def _describe(error: Exception) -> str:
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__
