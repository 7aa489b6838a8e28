"""
Deployment Configuration
Builds an explicit DeployConfig from config/deploy_config.json and .env
"""

import os
import json
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "config/deploy_config.json"
DEFAULT_CONTRACT_NAME = "RealEstateTokenization"
DEFAULT_RPC_URL = "http://127.0.0.1:8545"


@dataclass
class DeployConfig:
    """Everything the provider and runner need, passed explicitly"""

    rpc_url: str = DEFAULT_RPC_URL
    private_keys: List[str] = field(default_factory=list)
    contract_name: str = DEFAULT_CONTRACT_NAME
    artifacts_dir: str = "artifacts"
    confirmation_timeout: float = 300.0
    poll_interval: float = 2.0
    gas_buffer: float = 0.2
    default_gas_limit: int = 3_000_000
    chain_id: Optional[int] = None

    def __post_init__(self):
        if not math.isfinite(self.confirmation_timeout) or self.confirmation_timeout <= 0:
            raise ValueError(f"confirmation_timeout must be a positive finite number, got {self.confirmation_timeout}")
        if not math.isfinite(self.poll_interval) or self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be a positive finite number, got {self.poll_interval}")
        if self.gas_buffer < 0:
            raise ValueError(f"gas_buffer cannot be negative, got {self.gas_buffer}")
        if not self.contract_name:
            raise ValueError("contract_name must not be empty")

    @classmethod
    def from_env(cls, config_path: Optional[str] = None) -> "DeployConfig":
        """
        Load configuration: JSON file defaults, overridden by environment

        Args:
            config_path: JSON config file (None = DEPLOY_CONFIG_PATH or the default)

        Returns:
            DeployConfig

        Raises:
            ValueError: if a value is malformed
        """
        load_dotenv()

        path = config_path or os.getenv('DEPLOY_CONFIG_PATH', DEFAULT_CONFIG_PATH)
        file_config = _load_config_file(path)

        network = file_config.get('network', {})
        contract = file_config.get('contract', {})
        deployment = file_config.get('deployment', {})

        rpc_url = (
            os.getenv('DEPLOY_RPC_URL')
            or os.getenv('ALCHEMY_RPC_URL')
            or network.get('rpc_url')
            or DEFAULT_RPC_URL
        )

        chain_id = _env_or(network, 'CHAIN_ID', 'chain_id', None)

        return cls(
            rpc_url=rpc_url,
            private_keys=parse_private_keys(os.getenv('DEPLOYER_PRIVATE_KEY', '')),
            contract_name=_env_or(contract, 'CONTRACT_NAME', 'name', DEFAULT_CONTRACT_NAME),
            artifacts_dir=_env_or(contract, 'ARTIFACTS_DIR', 'artifacts_dir', 'artifacts'),
            confirmation_timeout=_to_number(
                _env_or(deployment, 'CONFIRMATION_TIMEOUT', 'confirmation_timeout', 300),
                'confirmation_timeout', float
            ),
            poll_interval=_to_number(
                _env_or(deployment, 'POLL_INTERVAL', 'poll_interval', 2),
                'poll_interval', float
            ),
            gas_buffer=_to_number(deployment.get('gas_buffer', 0.2), 'gas_buffer', float),
            default_gas_limit=_to_number(
                deployment.get('default_gas_limit', 3_000_000), 'default_gas_limit', int
            ),
            chain_id=_to_number(chain_id, 'chain_id', int) if chain_id is not None else None,
        )


def parse_private_keys(raw: str) -> List[str]:
    """Split a comma-separated key list, dropping blanks"""
    return [key.strip() for key in raw.split(',') if key.strip()]


def _load_config_file(path: str) -> Dict:
    if not os.path.exists(path):
        logger.debug(f"Config file {path} not found, using built-in defaults")
        return {}

    with open(path, 'r') as f:
        return json.load(f)


def _env_or(section: Dict, env_name: str, key: str, default):
    value = os.getenv(env_name)
    if value:
        return value
    value = section.get(key)
    return default if value is None else value


def _to_number(value, name: str, kind):
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}")
