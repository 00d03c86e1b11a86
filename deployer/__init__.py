"""
Deployer Package
Runs the contract deployment and resolves its signing accounts
"""

from .deployer import Deployer
from .wallet_manager import WalletManager, Signer
from blockchain.errors import (
    DeploymentError,
    NetworkUnavailable,
    NoSignerAvailable,
    UnknownContractType,
    DeploymentRejected,
    ConfirmationTimeout
)

__all__ = [
    'Deployer',
    'WalletManager',
    'Signer',
    'DeploymentError',
    'NetworkUnavailable',
    'NoSignerAvailable',
    'UnknownContractType',
    'DeploymentRejected',
    'ConfirmationTimeout'
]
