"""
Deployer
Runs a single contract deployment: signer -> factory -> deploy -> confirm -> report
"""

from typing import Dict, Optional, Sequence
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractManager
from deployer.wallet_manager import WalletManager
from utils.rpc_manager import RPCManager


class Deployer:
    """
    One-shot deployment of one contract type with fixed constructor arguments
    """

    def __init__(
        self,
        contract_name: str,
        constructor_args: Sequence = (),
        rpc_manager: Optional[RPCManager] = None,
        wallet_manager: Optional[WalletManager] = None,
        contract_manager: Optional[ContractManager] = None,
        confirmation_timeout: Optional[float] = None
    ):
        """
        Initialize Deployer

        Collaborators not given are built from the environment on first use,
        so connection failures surface inside run().

        Args:
            contract_name: Contract type to deploy
            constructor_args: Constructor arguments, passed unmodified
            rpc_manager: Network connection provider
            wallet_manager: Signer provider
            contract_manager: Artifact resolver
            confirmation_timeout: Seconds to wait for the receipt (None = web3 default)
        """
        self.contract_name = contract_name
        self.constructor_args = tuple(constructor_args)
        self.rpc_manager = rpc_manager
        self.wallet_manager = wallet_manager
        self.contract_manager = contract_manager
        self.confirmation_timeout = confirmation_timeout

    def _get_web3(self) -> Web3:
        if self.rpc_manager is None:
            self.rpc_manager = RPCManager()
        return self.rpc_manager.get_web3()

    def _ensure_collaborators(self):
        """Build whichever managers were not injected"""
        if self.wallet_manager is None:
            self.wallet_manager = WalletManager(self._get_web3())
        if self.contract_manager is None:
            self.contract_manager = ContractManager(self._get_web3())

    async def deploy(self) -> Dict:
        """
        Deploy the contract; errors propagate

        Returns:
            Deployment summary dict
        """
        self._ensure_collaborators()

        signer = self.wallet_manager.get_signer()
        print(f"Deploying contracts with the account: {signer.address}")

        try:
            logger.info(f"Account balance: {signer.get_balance()} ETH")
        except Exception as e:
            logger.warning(f"Could not read deployer balance: {e}")

        factory = await self.contract_manager.get_contract_factory(self.contract_name, signer)

        contract = await factory.deploy(*self.constructor_args)
        await contract.deployed(timeout=self.confirmation_timeout)

        print(f"{self.contract_name} deployed to: {contract.address}")

        return {
            'contract_name': self.contract_name,
            'deployer': signer.address,
            'address': contract.address,
            'tx_hash': Web3.to_hex(contract.tx_hash),
            'gas_used': contract.receipt['gasUsed'],
            'block_number': contract.receipt['blockNumber']
        }

    async def run(self) -> int:
        """
        Deploy and convert the outcome to a process exit code

        Returns:
            0 on success, 1 on any failure
        """
        try:
            result = await self.deploy()
        except Exception as e:
            logger.error(f"{type(e).__name__}: {e}")
            logger.opt(exception=e).debug("Deployment traceback")
            return 1

        logger.success(f"Transaction hash: {result['tx_hash']}")
        logger.success(f"Gas used: {result['gas_used']}")
        return 0
