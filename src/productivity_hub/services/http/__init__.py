"""HTTP services for Productivity Hub."""

from .server import app, invoke_api_function, list_api_functions, maps_key, run_local_server

__all__ = [
    "app",
    "invoke_api_function",
    "list_api_functions",
    "maps_key",
    "run_local_server",
]
