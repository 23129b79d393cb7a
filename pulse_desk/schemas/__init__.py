from .activity import Activity
from .client import Client, ClientCreate, ClientStatus, STATUS_LABELS
from .contract import ContractData, Plan, PLANS

__all__ = [
    "Activity",
    "Client",
    "ClientCreate",
    "ClientStatus",
    "STATUS_LABELS",
    "ContractData",
    "Plan",
    "PLANS",
]
