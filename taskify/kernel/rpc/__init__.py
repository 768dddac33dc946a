"""gRPC plumbing shared by the services and the gateway."""

from .client import RpcClient
from .errors import RpcStatusError, http_status_for_rpc, rpc_status_for
from .server import add_servicer
from .service import Empty, RpcMethod, RpcService

__all__ = [
    "Empty",
    "RpcClient",
    "RpcMethod",
    "RpcService",
    "RpcStatusError",
    "add_servicer",
    "http_status_for_rpc",
    "rpc_status_for",
]
