"""
Transaction Builder
Constructs contract deployment transactions
"""

from typing import Dict
from web3 import Web3
from web3.exceptions import Web3Exception
from loguru import logger

from blockchain.errors import DeploymentRejected

GAS_BUFFER = 1.2  # 20% over the node's estimate


class TransactionBuilder:
    """
    Builds deployment transactions for a signer
    """

    def __init__(self, w3: Web3):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
        """
        self.w3 = w3

    def estimate_gas_limit(self, constructor, from_address: str) -> int:
        """
        Estimate the deployment gas limit with buffer

        A failed estimate means the constructor would revert, so it is
        reported as a rejection rather than papered over with a default.

        Args:
            constructor: web3 ContractConstructor
            from_address: Deployer address

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': from_address})
        except (Web3Exception, ValueError) as e:
            raise DeploymentRejected(f"Gas estimation failed, constructor would revert: {e}") from e

        return int(gas_estimate * GAS_BUFFER)

    def build_deployment_tx(self, constructor, signer) -> Dict:
        """
        Build the deployment transaction

        Args:
            constructor: web3 ContractConstructor with arguments bound
            signer: Signer that will submit the transaction

        Returns:
            Transaction dict
        """
        gas_limit = self.estimate_gas_limit(constructor, signer.address)

        tx_params = {
            'from': signer.address,
            'gas': gas_limit
        }

        # Node-managed accounts let the node fill nonce and fees
        if signer.is_local:
            tx_params['nonce'] = self.w3.eth.get_transaction_count(signer.address, 'pending')
            tx_params['gasPrice'] = self.w3.eth.gas_price
            tx_params['chainId'] = self.w3.eth.chain_id

            logger.info(f"Gas price: {self.w3.from_wei(tx_params['gasPrice'], 'gwei')} gwei")

        logger.info(f"Gas limit: {gas_limit}")

        try:
            return constructor.build_transaction(tx_params)
        except (Web3Exception, ValueError) as e:
            raise DeploymentRejected(f"Could not build deployment transaction: {e}") from e
