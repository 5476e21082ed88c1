"""
MCP server for album data.

Exposes the album data pipeline as an MCP tool so assistants can request
per-track audio features and lyrics for an artist's albums.
"""

import asyncio
import json
from typing import List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData, TextContent, Tool
from pydantic import BaseModel, Field

from .config_loader import load_config
from .engine import AlbumDataEngine
from .errors import AlbumDataError, InvalidInputError


class AlbumDataInput(BaseModel):
    """Input for the album data tool."""

    artist: str
    albums: List[str] = Field(default_factory=list)
    parallel: bool = True
    concurrency_strategy: str = "default"


class AlbumDataResult(BaseModel):
    """Result from the album data tool."""

    artist: str
    albums: List[str]
    rows: List[dict]
    provider_misses: List[dict]


class AlbumDataServer:
    """MCP server for album data."""

    def __init__(self, engine: Optional[AlbumDataEngine] = None):
        """Initialize the MCP server."""
        self.server = Server("album-data-server")
        self._engine = engine

    @property
    def engine(self) -> AlbumDataEngine:
        if self._engine is None:
            self._engine = AlbumDataEngine.from_config(load_config())
        return self._engine

    async def get_album_data(self, input_data: AlbumDataInput) -> AlbumDataResult:
        """Run the pipeline off the event loop and convert the table to records."""
        album_data = await asyncio.to_thread(
            self.engine.get_album_data,
            input_data.artist,
            input_data.albums,
            input_data.parallel,
            input_data.concurrency_strategy,
        )
        return AlbumDataResult(
            artist=input_data.artist,
            albums=input_data.albums,
            rows=json.loads(album_data.to_json(orient="records")),
            provider_misses=album_data.attrs.get("provider_misses", []),
        )

    async def call_tool(self, name: str, arguments: dict) -> List[TextContent]:
        """Handle a tool call."""
        if name != "get_album_data":
            raise McpError(ErrorData(code=INVALID_PARAMS, message=f"Unknown tool: {name}"))

        try:
            result = await self.get_album_data(AlbumDataInput(**arguments))
        except InvalidInputError as e:
            raise McpError(ErrorData(code=INVALID_PARAMS, message=str(e))) from e
        except AlbumDataError as e:
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=f"Failed to fetch album data: {e}")) from e

        return [TextContent(type="text", text=json.dumps(result.model_dump(), indent=2))]

    async def serve(self) -> None:
        """Run the MCP server."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name="get_album_data",
                    description="Fetch every track of an artist's albums with audio features and lyrics",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "artist": {"type": "string", "description": "The artist name"},
                            "albums": {
                                "type": "array",
                                "items": {"type": "string"},
                                "description": "Album names (at least one)",
                            },
                            "parallel": {"type": "boolean", "description": "Fetch albums concurrently"},
                            "concurrency_strategy": {
                                "type": "string",
                                "description": "default, threads, asyncio or sequential",
                            },
                        },
                        "required": ["artist", "albums"],
                    },
                )
            ]

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Handle tool calls."""
            return await self.call_tool(name, arguments)

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())


async def serve_mcp():
    """Entry point for running the MCP server."""
    await AlbumDataServer().serve()
