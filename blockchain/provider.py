"""
Deployment Provider
Web3-backed source of signers, balances and contract factories
"""

from typing import List, Optional
from web3 import Web3
from loguru import logger

from deployer.config import DeployConfig
from deployer.errors import DeploymentFailure
from .contract_factory import ContractFactory, load_artifact
from .signers import Signer, load_signers


class Web3DeploymentProvider:
    """
    Connects to a single RPC endpoint and hands out deployment handles
    """

    def __init__(self, config: DeployConfig, w3: Optional[Web3] = None):
        """
        Initialize provider

        Args:
            config: Deployment configuration
            w3: Existing Web3 instance (None = HTTP connection to config.rpc_url)
        """
        self.config = config
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(config.rpc_url))
        self._signers: Optional[List[Signer]] = None

    def _ensure_connected(self):
        if not self.w3.is_connected():
            raise DeploymentFailure("Failed to connect to network (check DEPLOY_RPC_URL)")

    async def get_signers(self) -> List[Signer]:
        """
        List available signing identities

        Returns:
            Signers, in priority order (may be empty)
        """
        if self._signers is None:
            self._ensure_connected()
            self._signers = load_signers(self.w3, self.config.private_keys)
        return self._signers

    async def get_balance(self, address: str) -> int:
        """Native balance of an address, in wei"""
        return self.w3.eth.get_balance(Web3.to_checksum_address(address))

    async def get_contract_factory(self, contract_name: str, signer: Optional[Signer] = None) -> ContractFactory:
        """
        Bind a factory to a compiled contract

        Args:
            contract_name: Artifact name
            signer: Deploying signer (None = first available signer)

        Returns:
            ContractFactory
        """
        if signer is None:
            signers = await self.get_signers()
            if not signers:
                raise DeploymentFailure("No signer available for contract factory")
            signer = signers[0]

        artifact = load_artifact(self.config.artifacts_dir, contract_name)
        logger.info(f"Resolved {contract_name} artifact: {artifact['path']}")

        return ContractFactory(
            self.w3,
            contract_name,
            artifact['abi'],
            artifact['bytecode'],
            signer,
            gas_buffer=self.config.gas_buffer,
            default_gas_limit=self.config.default_gas_limit,
            chain_id=self.config.chain_id,
            poll_interval=self.config.poll_interval
        )
