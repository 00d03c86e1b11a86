"""
Deployment Errors
Failure taxonomy for the deployment sequence
"""


class DeploymentError(Exception):
    """Base class for every failure that aborts a deployment"""


class NetworkUnavailable(DeploymentError):
    """RPC endpoint missing, unreachable, or on the wrong chain"""


class NoSignerAvailable(DeploymentError):
    """No account is configured that can authorize the deployment"""


class UnknownContractType(DeploymentError):
    """Contract name does not match a deployable compiled artifact"""


class DeploymentRejected(DeploymentError):
    """Deployment transaction refused by encoding, the node, or the constructor"""


class ConfirmationTimeout(DeploymentError):
    """Deployment transaction was not confirmed in time"""
