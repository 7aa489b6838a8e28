"""
Deployer Package
Configuration, runner and CLI for the RealEstateTokenization deployment
"""

from .config import DeployConfig
from .errors import DeploymentFailure
from .runner import DeployRunner, DeploymentResult

__all__ = ['DeployConfig', 'DeploymentFailure', 'DeployRunner', 'DeploymentResult']
