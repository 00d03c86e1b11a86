"""
Wallet Manager
Resolves the accounts that can sign the deployment transaction
"""

import os
from typing import Dict, List, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import NoSignerAvailable

load_dotenv()


class Signer:
    """
    An account able to authorize transactions

    Local signers hold a private key and sign client-side. Node signers
    are accounts the RPC node manages itself (e.g. a Hardhat node's
    unlocked test accounts) and are sent with eth_sendTransaction.
    """

    def __init__(self, w3: Web3, address: str, account=None):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def get_balance(self) -> Decimal:
        """Get native balance in ether units"""
        balance_wei = self.w3.eth.get_balance(self.address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))

    def send_transaction(self, transaction: Dict) -> bytes:
        """
        Sign (if local) and submit a transaction

        Args:
            transaction: Transaction dict, 'from' must be this signer

        Returns:
            Transaction hash
        """
        if not self.is_local:
            return self.w3.eth.send_transaction(transaction)

        signed_tx = self.account.sign_transaction(transaction)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def __repr__(self):
        kind = 'local' if self.is_local else 'node'
        return f"Signer({self.address}, {kind})"


class WalletManager:
    """
    Provides signers the way a Hardhat network config does:
    - DEPLOYER_PRIVATE_KEY set: one local signer per comma-separated key
    - otherwise: the accounts managed by the connected node
    """

    def __init__(self, w3: Web3, private_keys: Optional[List[str]] = None):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance
            private_keys: Explicit keys (None = read DEPLOYER_PRIVATE_KEY)
        """
        self.w3 = w3

        if private_keys is None:
            raw_keys = os.getenv('DEPLOYER_PRIVATE_KEY', '')
            private_keys = [key.strip() for key in raw_keys.split(',') if key.strip()]

        self.private_keys = private_keys

    def get_signers(self) -> List[Signer]:
        """
        Get all available signers, in configuration order

        Returns:
            List of signers (may be empty)
        """
        if self.private_keys:
            signers = []
            for index, private_key in enumerate(self.private_keys):
                try:
                    account = Account.from_key(private_key)
                except (ValueError, TypeError) as e:
                    raise NoSignerAvailable(f"DEPLOYER_PRIVATE_KEY entry {index} is not a valid private key") from e
                signers.append(Signer(self.w3, account.address, account))
            return signers

        return [Signer(self.w3, address) for address in self.w3.eth.accounts]

    def get_signer(self) -> Signer:
        """
        Get the first available signer

        Returns:
            Signer used for the deployment
        """
        signers = self.get_signers()

        if not signers:
            raise NoSignerAvailable(
                "No signer available: set DEPLOYER_PRIVATE_KEY or connect to a node with managed accounts"
            )

        signer = signers[0]
        logger.debug(f"Using signer {signer}")
        return signer
