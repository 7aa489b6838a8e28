"""
Signer Discovery
Turns configured private keys (or node-managed accounts) into deployer identities
"""

from typing import Dict, List, Optional
from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger


class Signer:
    """
    An account able to authorize transactions

    Local signers hold a private key and sign client-side; node-managed
    signers (unlocked accounts on e.g. a Hardhat node) are signed by the node.
    """

    def __init__(self, address: str, account: Optional[LocalAccount] = None):
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if not self.is_local:
            raise ValueError(f"Signer {self.address} is node-managed and cannot sign locally")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def __repr__(self):
        kind = 'local' if self.is_local else 'node'
        return f"Signer({self.address}, {kind})"


def load_signers(w3: Web3, private_keys: List[str]) -> List[Signer]:
    """
    Resolve the available signers, first one is the deployer

    Args:
        w3: Web3 instance
        private_keys: Hex private keys, in priority order

    Returns:
        List of signers (empty when nothing is configured)
    """
    if private_keys:
        signers = [_local_signer(index, key) for index, key in enumerate(private_keys)]
        logger.debug(f"Loaded {len(signers)} local signer(s)")
        return signers

    accounts = w3.eth.accounts
    logger.debug(f"No private key configured, node exposes {len(accounts)} account(s)")
    return [Signer(address) for address in accounts]


def _local_signer(index: int, private_key: str) -> Signer:
    try:
        account = Account.from_key(private_key)
    except Exception as e:
        # never echo the key itself
        raise ValueError(f"Private key #{index + 1} is invalid: {type(e).__name__}") from None
    return Signer(account.address, account)
