__version__ = "0.1.0"

from .config import GitLabConfig, ServerConfig
from .server import GitLabMCPServer, main

__all__ = [
    "GitLabConfig",
    "ServerConfig",
    "GitLabMCPServer",
    "main",
]
