"""
Deployment CLI
Entry point: deploys RealEstateTokenization and exits 0 on success, 1 on failure
"""

import os
import sys
import asyncio
from loguru import logger

from blockchain.provider import Web3DeploymentProvider
from .config import DeployConfig
from .runner import DeployRunner, DeploymentResult


def configure_logging(level: str = "INFO"):
    """Send log output to stderr, leaving stdout for the deployment report"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )


async def deploy(config: DeployConfig) -> DeploymentResult:
    """Run one deployment against the configured network"""
    provider = Web3DeploymentProvider(config)
    runner = DeployRunner(
        provider,
        contract_name=config.contract_name,
        confirmation_timeout=config.confirmation_timeout
    )
    return await runner.run()


def main() -> int:
    level = os.getenv('LOG_LEVEL', 'INFO').upper()
    try:
        configure_logging(level)
    except ValueError:
        configure_logging("INFO")
        logger.warning(f"Unknown LOG_LEVEL {level!r}, falling back to INFO")

    try:
        config = DeployConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid deployment configuration: {e}")
        return 1

    logger.info(f"Deploying {config.contract_name}...")

    result = asyncio.run(deploy(config))
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
