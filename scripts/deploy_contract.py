"""
Smart Contract Deployment Script
Deploys the InvoiceNFT contract to the network selected by DEPLOY_NETWORK
"""

import sys
import asyncio

from dotenv import load_dotenv

from deployer import Deployer
from utils.logging_setup import configure_logging

load_dotenv()

CONTRACT_NAME = "InvoiceNFT"

# Kept as written; the factory checksums single-case address arguments
CONSTRUCTOR_ARG = "0xf08a50178dfcde18524640ea6618a1f965821715"


async def main() -> int:
    """Deploy InvoiceNFT"""
    deployer = Deployer(CONTRACT_NAME, [CONSTRUCTOR_ARG])
    return await deployer.run()


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))
