"""
Contract Manager
Resolves compiled Hardhat artifacts into deployable contract factories
"""

import os
import json
import asyncio
from typing import Dict, List, Optional
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception
from loguru import logger
from dotenv import load_dotenv

from blockchain.transaction_builder import TransactionBuilder
from blockchain.errors import ConfirmationTimeout, DeploymentRejected, UnknownContractType

load_dotenv()


class DeployedContract:
    """
    Handle to a submitted deployment

    Carries the transaction hash right away; address and receipt are
    available once deployed() has observed confirmation.
    """

    def __init__(self, w3: Web3, name: str, abi: List[Dict], tx_hash: bytes):
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.tx_hash = tx_hash
        self.receipt = None
        self.address = None

    async def deployed(self, timeout: Optional[float] = None) -> 'DeployedContract':
        """
        Wait for the deployment transaction to be mined

        Args:
            timeout: Seconds to wait (None = web3 default)

        Returns:
            self, with address and receipt set
        """
        logger.info("Waiting for confirmation...")

        wait_kwargs = {} if timeout is None else {'timeout': timeout}

        try:
            # Sync web3 call; polled off the event loop
            receipt = await asyncio.to_thread(
                self.w3.eth.wait_for_transaction_receipt, self.tx_hash, **wait_kwargs
            )
        except TimeExhausted as e:
            raise ConfirmationTimeout(f"{self.name} deployment {Web3.to_hex(self.tx_hash)} not confirmed: {e}") from e

        if receipt['status'] != 1:
            raise DeploymentRejected(f"{self.name} deployment reverted in transaction {Web3.to_hex(self.tx_hash)}")

        self.receipt = receipt
        self.address = receipt['contractAddress']

        logger.success(f"{self.name} confirmed in block {receipt['blockNumber']}")
        logger.debug(f"Gas used: {receipt['gasUsed']}")
        return self


class ContractFactory:
    """
    Deploys new instances of one compiled contract
    """

    def __init__(self, w3: Web3, name: str, abi: List[Dict], bytecode: str, signer):
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.signer = signer
        self.transaction_builder = TransactionBuilder(w3)

    def _constructor_input_types(self) -> List[str]:
        """ABI types of the constructor inputs, in order"""
        for entry in self.abi:
            if entry.get('type') == 'constructor':
                return [item['type'] for item in entry.get('inputs', [])]
        return []

    def _normalize_args(self, args) -> tuple:
        """
        Checksum single-case hex strings passed for address inputs

        web3.py refuses non-checksummed addresses, while all-lowercase and
        all-uppercase hex carry no checksum to violate. Mixed-case values
        and every other argument are left as given.
        """
        input_types = self._constructor_input_types()
        normalized = []

        for index, value in enumerate(args):
            if (
                index < len(input_types)
                and input_types[index] == 'address'
                and isinstance(value, str)
                and Web3.is_address(value)
                and value[-40:] in (value[-40:].lower(), value[-40:].upper())
            ):
                value = Web3.to_checksum_address(value)
            normalized.append(value)

        return tuple(normalized)

    async def deploy(self, *args) -> DeployedContract:
        """
        Submit a deployment transaction

        Args:
            *args: Constructor arguments; single-case address strings are
                checksummed, everything else is passed through unmodified

        Returns:
            Handle to the pending deployment
        """
        contract = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

        try:
            constructor = contract.constructor(*self._normalize_args(args))
        except (Web3Exception, ValueError, TypeError) as e:
            raise DeploymentRejected(f"Invalid constructor arguments for {self.name}: {e}") from e

        logger.info(f"Building {self.name} deployment transaction...")
        transaction = self.transaction_builder.build_deployment_tx(constructor, self.signer)

        logger.info("Sending deployment transaction...")
        try:
            tx_hash = self.signer.send_transaction(transaction)
        except (Web3Exception, ValueError) as e:
            raise DeploymentRejected(f"{self.name} deployment rejected by the node: {e}") from e

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        return DeployedContract(self.w3, self.name, self.abi, tx_hash)


class ContractManager:
    """
    Looks up Hardhat build artifacts

    Layout: <artifacts_dir>/contracts/<Source>.sol/<Name>.json
    Names may be bare ("InvoiceNFT") or fully qualified
    ("contracts/InvoiceNFT.sol:InvoiceNFT").
    """

    def __init__(self, w3: Web3, artifacts_dir: Optional[str] = None):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            artifacts_dir: Artifacts root (None = ARTIFACTS_DIR or ./artifacts)
        """
        self.w3 = w3
        self.artifacts_dir = artifacts_dir or os.getenv('ARTIFACTS_DIR', 'artifacts')

    def _find_artifact_paths(self, name: str) -> List[str]:
        """Find artifact files for a contract name"""
        if ':' in name:
            source, contract_name = name.rsplit(':', 1)
            path = os.path.join(self.artifacts_dir, source, f"{contract_name}.json")
            return [path] if os.path.isfile(path) else []

        # Hardhat writes a <Name>.dbg.json beside every artifact
        if name.endswith('.dbg'):
            return []

        matches = []
        for root, dirs, files in os.walk(self.artifacts_dir):
            dirs[:] = [d for d in dirs if d != 'build-info']
            if f"{name}.json" in files:
                matches.append(os.path.join(root, f"{name}.json"))

        return sorted(matches)

    def load_artifact(self, name: str) -> Dict:
        """
        Load the compiled artifact for a contract

        Args:
            name: Bare or fully-qualified contract name

        Returns:
            Artifact dict with 'abi' and 'bytecode'
        """
        paths = self._find_artifact_paths(name)

        if not paths:
            raise UnknownContractType(
                f"No artifact for contract '{name}' under {self.artifacts_dir} (run 'npx hardhat compile' first)"
            )

        if len(paths) > 1:
            raise UnknownContractType(
                f"Contract name '{name}' is ambiguous, use a fully-qualified name: {', '.join(paths)}"
            )

        with open(paths[0], 'r') as f:
            artifact = json.load(f)

        if 'abi' not in artifact or 'bytecode' not in artifact:
            raise UnknownContractType(f"{paths[0]} is not a contract artifact")

        if artifact['bytecode'] in ('', '0x'):
            raise UnknownContractType(f"Contract '{name}' has no bytecode (abstract contract or interface)")

        logger.debug(f"Loaded artifact {paths[0]}")
        return artifact

    async def get_contract_factory(self, name: str, signer) -> ContractFactory:
        """
        Get a factory for deploying a contract

        Args:
            name: Contract name
            signer: Signer that will pay for deployments

        Returns:
            ContractFactory
        """
        artifact = self.load_artifact(name)
        contract_name = artifact.get('contractName', name.rsplit(':', 1)[-1])

        return ContractFactory(self.w3, contract_name, artifact['abi'], artifact['bytecode'], signer)
