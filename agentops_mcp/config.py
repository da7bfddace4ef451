"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agentops_mcp import __version__

if TYPE_CHECKING:
    from collections.abc import Mapping

PROTOCOLS = ("stdio", "sse", "streamable-http")


@dataclass(frozen=True)
class Settings:
    """Immutable server settings, built once at startup."""

    application_name: str = "agentops-mcp"
    host: str = "0.0.0.0"
    server_port: int = 8080
    mcp_server_name: str = "agentops-mcp-server"
    mcp_server_version: str = __version__
    mcp_server_protocol: str = "streamable-http"
    log_level: str = "INFO"
    log_file: str | None = None
    data_file: str | None = None

    def __post_init__(self) -> None:
        if self.mcp_server_protocol not in PROTOCOLS:
            raise ValueError(
                f"Invalid AGENTOPS_MCP_PROTOCOL: {self.mcp_server_protocol}. Must be one of {', '.join(PROTOCOLS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from ``AGENTOPS_*`` environment variables.

        Raises:
            ValueError: If the port is not an integer or the protocol is unknown
        """
        env = os.environ if environ is None else environ

        port = env.get("AGENTOPS_PORT", "8080")
        try:
            server_port = int(port)
        except ValueError as e:
            raise ValueError(f"Invalid AGENTOPS_PORT: {port}. Must be an integer") from e

        return cls(
            application_name=env.get("AGENTOPS_APP_NAME", "agentops-mcp"),
            host=env.get("AGENTOPS_HOST", "0.0.0.0"),
            server_port=server_port,
            mcp_server_name=env.get("AGENTOPS_MCP_NAME", "agentops-mcp-server"),
            mcp_server_version=env.get("AGENTOPS_MCP_VERSION", __version__),
            mcp_server_protocol=env.get("AGENTOPS_MCP_PROTOCOL", "streamable-http").lower(),
            log_level=env.get("AGENTOPS_LOG_LEVEL", "INFO").upper(),
            log_file=env.get("AGENTOPS_LOG_FILE") or None,
            data_file=env.get("AGENTOPS_DATA_FILE") or None,
        )
