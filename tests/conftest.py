"""
Shared test fixtures
"""

import json
import pytest
from unittest.mock import Mock, AsyncMock
from loguru import logger
from web3 import Web3

from blockchain.contract_manager import ContractFactory

DEPLOYER_ADDRESS = '0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1'
CONTRACT_ADDRESS = '0xe78A0F7E598Cc8b0Bb87894B0F60dD2a88d6a8Ab'
TX_HASH = b'\x11' * 32

INVOICE_NFT_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "_paymentToken", "type": "address"}],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "inputs": [],
        "name": "paymentToken",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during a test"""
    messages = []
    handler_id = logger.add(messages.append, format="{level} | {message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def w3():
    """Mock Web3 instance"""
    w3 = Mock()
    w3.eth = Mock()
    w3.eth.chain_id = 31337
    w3.eth.gas_price = 2_000_000_000
    w3.eth.get_transaction_count.return_value = 7
    w3.from_wei = lambda value, unit: value / (10**9 if unit == 'gwei' else 10**18)
    return w3


def write_artifact(artifacts_dir, source, name, bytecode='0x6080604052', abi=None):
    """Write a Hardhat-style artifact and return its path"""
    artifact_dir = artifacts_dir / 'contracts' / source
    artifact_dir.mkdir(parents=True, exist_ok=True)
    path = artifact_dir / f'{name}.json'
    path.write_text(json.dumps({
        '_format': 'hh-sol-artifact-1',
        'contractName': name,
        'sourceName': f'contracts/{source}',
        'abi': INVOICE_NFT_ABI if abi is None else abi,
        'bytecode': bytecode,
        'deployedBytecode': bytecode,
        'linkReferences': {},
        'deployedLinkReferences': {}
    }))
    (artifact_dir / f'{name}.dbg.json').write_text(json.dumps({
        '_format': 'hh-sol-dbg-1',
        'buildInfo': '../../build-info/abc123.json'
    }))
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts tree containing a compiled InvoiceNFT"""
    root = tmp_path / 'artifacts'
    write_artifact(root, 'InvoiceNFT.sol', 'InvoiceNFT')
    (root / 'build-info').mkdir()
    (root / 'build-info' / 'abc123.json').write_text('{}')
    return root


@pytest.fixture
def signer():
    """Node-managed signer stub"""
    signer = Mock()
    signer.address = DEPLOYER_ADDRESS
    signer.is_local = False
    signer.get_balance.return_value = 10000
    signer.send_transaction.return_value = TX_HASH
    return signer


@pytest.fixture
def deployed_contract():
    """Confirmed deployment handle stub"""
    contract = Mock()
    contract.address = CONTRACT_ADDRESS
    contract.tx_hash = TX_HASH
    contract.receipt = {'status': 1, 'contractAddress': CONTRACT_ADDRESS, 'gasUsed': 1234567, 'blockNumber': 3}
    contract.deployed = AsyncMock(return_value=contract)
    return contract


@pytest.fixture
def encoding_factory(signer):
    """
    ContractFactory on a real Web3 codec

    Only gas estimation and submission are stubbed: the transaction
    carries the constructor calldata web3 actually encoded.
    """
    factory = ContractFactory(Web3(), 'InvoiceNFT', INVOICE_NFT_ABI, '0x6080604052', signer)
    factory.transaction_builder = Mock()
    factory.transaction_builder.build_deployment_tx.side_effect = lambda constructor, signer: {
        'from': signer.address,
        'gas': 1_200_000,
        'data': constructor.data_in_transaction
    }
    return factory
