"""
RPC Manager
Resolves the target network and opens the Web3 connection for deployments
"""

import os
import json
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import NetworkUnavailable

load_dotenv()

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'config',
    'networks.json'
)


class RPCManager:
    """
    Network selection for deployments

    The active network comes from DEPLOY_NETWORK (or the config's
    default_network). Each network entry names the environment variable
    holding its RPC URL and, optionally, a default URL and expected chain id.
    """

    def __init__(self, network: Optional[str] = None, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize RPC Manager

        Args:
            network: Network key (None = DEPLOY_NETWORK or config default)
            config_path: Path to networks.json
        """
        with open(config_path, 'r') as f:
            self.config = json.load(f)

        self.network = network or os.getenv('DEPLOY_NETWORK') or self.config.get('default_network', 'localhost')
        self.w3 = None

        logger.debug(f"RPC Manager initialized for network: {self.network}")

    def get_network_config(self) -> Dict:
        """Get the config entry for the active network"""
        networks = self.config.get('networks', {})

        if self.network not in networks:
            raise NetworkUnavailable(
                f"Unknown network '{self.network}' (configured: {', '.join(sorted(networks))})"
            )

        return networks[self.network]

    def get_rpc_url(self) -> str:
        """Resolve the RPC URL from the environment or the network default"""
        network_config = self.get_network_config()
        url_env = network_config.get('rpc_url_env')

        url = os.getenv(url_env) if url_env else None
        url = url or network_config.get('default_url')

        if not url:
            raise NetworkUnavailable(f"{url_env} must be set to deploy to {self.network}")

        return url

    def get_web3(self) -> Web3:
        """
        Connect to the active network

        Returns:
            Connected Web3 instance
        """
        if self.w3 is not None:
            return self.w3

        network_config = self.get_network_config()
        rpc_url = self.get_rpc_url()

        w3 = Web3(Web3.HTTPProvider(rpc_url))

        if not w3.is_connected():
            raise NetworkUnavailable(f"Failed to connect to {network_config.get('name', self.network)} at {rpc_url}")

        expected_chain_id = network_config.get('chain_id')
        if expected_chain_id is not None:
            chain_id = w3.eth.chain_id
            if chain_id != expected_chain_id:
                raise NetworkUnavailable(
                    f"{rpc_url} reports chain id {chain_id}, expected {expected_chain_id} for {self.network}"
                )

        logger.info(f"Connected to {network_config.get('name', self.network)}")
        self.w3 = w3
        return w3
