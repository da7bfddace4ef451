"""FastAPI application serving the diagnostic dashboard and the mounted MCP endpoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from agentops_mcp.dashboard.presenter import DiagnosticPresenter, ServerInfo
from agentops_mcp.dashboard.schemas import CatalogResponse, HealthResponse, ToolInfo, ToolTestResponse
from agentops_mcp.dispatcher import ToolDispatcher

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from agentops_mcp.config import Settings
    from agentops_mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
MCP_MOUNT_PATH = "/mcp-server"
TOOL_NAME_FIELD = "toolName"


def create_app(settings: Settings, registry: ToolRegistry, mcp: FastMCP | None = None) -> FastAPI:
    """Build the dashboard app.

    Args:
        settings: Server settings shown on the status page
        registry: Live tool registration table
        mcp: FastMCP server to mount under ``/mcp-server`` (streamable HTTP at ``/mcp-server/mcp``)

    Returns:
        The FastAPI application
    """
    mcp_app = mcp.http_app(path="/mcp") if mcp is not None else None
    app = FastAPI(
        title=settings.application_name,
        description="Diagnostic dashboard for the AgentOps MCP tool server",
        version=settings.mcp_server_version,
        lifespan=mcp_app.lifespan if mcp_app is not None else None,
    )
    if mcp_app is not None:
        app.mount(MCP_MOUNT_PATH, mcp_app)
        logger.info(f"MCP endpoint mounted at {MCP_MOUNT_PATH}/mcp")

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    presenter = DiagnosticPresenter(registry, ToolDispatcher(registry), ServerInfo.from_settings(settings))
    app.state.presenter = presenter

    @app.get("/", response_class=HTMLResponse)
    async def status_page(request: Request) -> HTMLResponse:
        """Render the status page with the grouped tool catalog."""
        view = presenter.present()
        return templates.TemplateResponse(request, "status.html", {"view": view})

    @app.get("/api/tools", response_model=CatalogResponse)
    async def list_tools() -> CatalogResponse:
        tools = [ToolInfo(**descriptor.to_dict()) for descriptor in registry.scan()]
        return CatalogResponse(tool_count=len(tools), tools=tools)

    @app.post("/test-tool-connection", response_model=ToolTestResponse)
    async def test_tool_connection(request: Request) -> ToolTestResponse | JSONResponse:
        """Invoke a tool with the submitted form fields as raw arguments."""
        form = await request.form()
        tool_name = form.get(TOOL_NAME_FIELD)
        if not isinstance(tool_name, str) or not tool_name:
            logger.warning("Tool test requested without a tool name")
            return JSONResponse(
                status_code=400,
                content=ToolTestResponse(success=False, message=f"Missing form field: {TOOL_NAME_FIELD}").model_dump(),
            )

        raw_args = {key: value for key, value in form.items() if key != TOOL_NAME_FIELD and isinstance(value, str)}
        logger.info(f"Testing tool {tool_name} with arguments {raw_args}")
        outcome = await presenter.test_invoke(tool_name, raw_args)
        return ToolTestResponse(success=outcome.success, message=outcome.message)

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy", tool_count=len(registry.scan()), version=settings.mcp_server_version
        )

    return app
