"""
Utilities Package
Network connection and logging setup
"""

from .rpc_manager import RPCManager
from .logging_setup import configure_logging

__all__ = ['RPCManager', 'configure_logging']
