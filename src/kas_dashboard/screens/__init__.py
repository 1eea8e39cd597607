from .modal_input import ModalInputScreen
from .transfer import ActionResult, TransferScreen

__all__ = ["ActionResult", "ModalInputScreen", "TransferScreen"]
