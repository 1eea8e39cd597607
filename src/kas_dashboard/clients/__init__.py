from .base import BaseClient, parse_list
from .modal_client import ModalClient
from .transfer_client import TransferClient
from .users_client import UsersClient

__all__ = [
    "BaseClient",
    "ModalClient",
    "TransferClient",
    "UsersClient",
    "parse_list",
]
