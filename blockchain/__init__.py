"""
Blockchain Interaction Package
Handles artifact resolution, contract deployment, and transaction building
"""

from .contract_manager import ContractManager, ContractFactory, DeployedContract
from .transaction_builder import TransactionBuilder

__all__ = ['ContractManager', 'ContractFactory', 'DeployedContract', 'TransactionBuilder']
