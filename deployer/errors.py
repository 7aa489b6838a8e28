"""
Deployment Errors
Single failure type for every fault on the deploy path
"""


class DeploymentFailure(Exception):
    """
    Raised (or returned inside a failed DeploymentResult) for any fault:
    missing signer, missing artifact, network error, revert or timeout
    """
    pass
