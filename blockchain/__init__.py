"""
Blockchain Interaction Package
Handles signer discovery, artifact loading and contract deployment
"""

from .contract_factory import ContractFactory, PendingDeployment, DeployedContract
from .provider import Web3DeploymentProvider
from .signers import Signer

__all__ = ['ContractFactory', 'PendingDeployment', 'DeployedContract', 'Web3DeploymentProvider', 'Signer']
