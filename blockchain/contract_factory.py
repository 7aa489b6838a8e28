"""
Contract Factory
Loads Hardhat artifacts and deploys them, signing locally or through the node
"""

import os
import json
import asyncio
from typing import Dict, List, Optional
from web3 import Web3
from web3.exceptions import TransactionNotFound
from loguru import logger

from deployer.errors import DeploymentFailure


def artifact_path(artifacts_dir: str, contract_name: str) -> str:
    """Hardhat layout: artifacts/contracts/<Name>.sol/<Name>.json"""
    return os.path.join(
        artifacts_dir, 'contracts', f"{contract_name}.sol", f"{contract_name}.json"
    )


def find_artifact(artifacts_dir: str, contract_name: str) -> Optional[str]:
    """
    Locate a contract's artifact file

    Args:
        artifacts_dir: Hardhat artifacts root
        contract_name: Contract name

    Returns:
        Path or None

    Raises:
        DeploymentFailure: several source files define the same contract name
    """
    # contract may live in a differently named source file
    target = f"{contract_name}.json"
    matches = sorted(
        os.path.join(root, target)
        for root, _, files in os.walk(artifacts_dir)
        if target in files
    )

    if len(matches) > 1:
        raise DeploymentFailure(
            f"Contract name {contract_name} is ambiguous, found in: {', '.join(matches)}"
        )

    return matches[0] if matches else None


def load_artifact(artifacts_dir: str, contract_name: str) -> Dict:
    """
    Load ABI and bytecode for a compiled contract

    Raises:
        DeploymentFailure: artifact missing or not deployable
    """
    path = find_artifact(artifacts_dir, contract_name)

    if path is None:
        raise DeploymentFailure(
            f"Contract artifact not found for {contract_name} "
            f"(expected {artifact_path(artifacts_dir, contract_name)}, run 'npx hardhat compile' first)"
        )

    try:
        with open(path, 'r') as f:
            contract_json = json.load(f)
    except (OSError, ValueError) as e:
        raise DeploymentFailure(f"Could not read artifact {path}: {e}") from e

    abi = contract_json.get('abi')
    bytecode = contract_json.get('bytecode')

    if abi is None:
        raise DeploymentFailure(f"Artifact {path} has no ABI")
    if not bytecode or bytecode == '0x':
        raise DeploymentFailure(f"Artifact {path} has no bytecode (abstract contract or interface?)")

    logger.debug(f"Loaded artifact {path}")
    return {'abi': abi, 'bytecode': bytecode, 'path': path}


def apply_gas_buffer(gas_estimate: int, buffer: float) -> int:
    """Pad a gas estimate by a fractional buffer (0.2 = 20%)"""
    return int(gas_estimate * (1 + buffer))


class DeployedContract:
    """A confirmed contract instance"""

    def __init__(self, address: str, tx_hash: str, gas_used: int):
        self.address = address
        self.tx_hash = tx_hash
        self.gas_used = gas_used


class PendingDeployment:
    """
    A submitted deployment transaction

    The contract address is unknown until wait_for_deployment() returns.
    """

    def __init__(self, w3: Web3, contract_name: str, tx_hash: str, poll_interval: float = 2.0):
        self.w3 = w3
        self.contract_name = contract_name
        self.tx_hash = tx_hash
        self.poll_interval = poll_interval
        self._deployed: Optional[DeployedContract] = None

    @property
    def address(self) -> str:
        if self._deployed is None:
            raise DeploymentFailure(f"{self.contract_name} deployment {self.tx_hash} is not confirmed yet")
        return self._deployed.address

    async def wait_for_deployment(self) -> DeployedContract:
        """
        Poll for the receipt until the deployment is mined

        Returns:
            DeployedContract

        Raises:
            DeploymentFailure: transaction reverted
        """
        if self._deployed is not None:
            return self._deployed

        while True:
            try:
                # blocking HTTP call, kept off the event loop
                receipt = await asyncio.to_thread(self.w3.eth.get_transaction_receipt, self.tx_hash)
                break
            except TransactionNotFound:
                await asyncio.sleep(self.poll_interval)

        if receipt['status'] != 1:
            raise DeploymentFailure(f"{self.contract_name} deployment reverted (tx {self.tx_hash})")

        address = receipt['contractAddress']
        if not address:
            raise DeploymentFailure(f"Receipt for {self.tx_hash} carries no contract address")

        address = Web3.to_checksum_address(address)
        self._deployed = DeployedContract(address, self.tx_hash, receipt['gasUsed'])

        logger.success(f"✅ {self.contract_name} confirmed at {address}")
        logger.info(f"Transaction hash: {self.tx_hash}")
        logger.info(f"Gas used: {receipt['gasUsed']}")

        return self._deployed


class ContractFactory:
    """
    Deploys a compiled contract from a given signer
    """

    def __init__(
        self,
        w3: Web3,
        contract_name: str,
        abi: List[Dict],
        bytecode: str,
        signer,
        gas_buffer: float = 0.2,
        default_gas_limit: int = 3_000_000,
        chain_id: Optional[int] = None,
        poll_interval: float = 2.0
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            contract_name: Contract name, for messages
            abi: Contract ABI
            bytecode: Creation bytecode
            signer: Deploying Signer
            gas_buffer: Fraction added to the gas estimate
            default_gas_limit: Gas limit used when estimation fails
            chain_id: Chain id for local signing (None = ask the node)
            poll_interval: Seconds between receipt polls
        """
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode
        self.signer = signer
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit
        self.chain_id = chain_id
        self.poll_interval = poll_interval

        self.contract = w3.eth.contract(abi=abi, bytecode=bytecode)

    async def deploy(self) -> PendingDeployment:
        """
        Submit the deployment transaction (no constructor arguments)

        Returns:
            PendingDeployment
        """
        constructor = self.contract.constructor()

        if self.signer.is_local:
            tx_hash = self._send_signed(constructor)
        else:
            logger.info(f"Sending {self.contract_name} deployment via node account {self.signer.address}...")
            tx_hash = constructor.transact({'from': self.signer.address})

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash}")

        return PendingDeployment(self.w3, self.contract_name, tx_hash, self.poll_interval)

    def _send_signed(self, constructor):
        address = self.signer.address

        try:
            gas_estimate = constructor.estimate_gas({'from': address})
            gas_limit = apply_gas_buffer(gas_estimate, self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.default_gas_limit

        logger.info(f"Gas limit: {gas_limit}")

        chain_id = self.chain_id if self.chain_id is not None else self.w3.eth.chain_id

        transaction = constructor.build_transaction({
            'from': address,
            'nonce': self.w3.eth.get_transaction_count(address, 'pending'),
            'gas': gas_limit,
            'chainId': chain_id
        })

        logger.info("Signing transaction...")
        signed_tx = self.signer.sign_transaction(transaction)

        logger.info(f"Sending {self.contract_name} deployment transaction...")
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
