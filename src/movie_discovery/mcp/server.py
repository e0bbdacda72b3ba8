"""MCP server exposing an interactive movie discovery session."""

import asyncio
import json

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from ..config import configure_logging, get_settings
from ..session import MovieSession


def create_mcp_server(session: MovieSession | None = None) -> Server:
    """Create and configure the MCP server."""
    server = Server("movie-discovery")
    if session is None:
        session = MovieSession.from_settings(get_settings())
    mounted = False

    async def ensure_mounted() -> None:
        nonlocal mounted
        if not mounted:
            mounted = True
            session.mount()
            await session.wait_idle()

    def state_text() -> list[TextContent]:
        return [
            TextContent(type="text", text=json.dumps(session.state.to_dict(), indent=2))
        ]

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="type_search_term",
                description="Update the search box. The search runs once typing pauses; returns the view state after it settles.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "text": {
                            "type": "string",
                            "description": "Current contents of the search box",
                        },
                        "wait": {
                            "type": "boolean",
                            "description": "Wait for the debounced search to finish (default true)",
                        },
                    },
                    "required": ["text"],
                },
            ),
            Tool(
                name="search_movies",
                description="Search TMDb immediately. An empty query lists popular movies.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Movie title to search for",
                        },
                    },
                },
            ),
            Tool(
                name="get_view_state",
                description="Get the current search results, loading flag, error message and trending list",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="get_trending_movies",
                description="Reload and return the most searched terms",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="get_movie_details",
                description="Get TMDb details for a single movie",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "movie_id": {
                            "type": "integer",
                            "description": "TMDb movie ID",
                        },
                    },
                    "required": ["movie_id"],
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        try:
            await ensure_mounted()

            if name == "type_search_term":
                session.type(arguments["text"])
                if arguments.get("wait", True):
                    await asyncio.sleep(session.debouncer.delay)
                    await session.wait_idle()
                return state_text()

            elif name == "search_movies":
                await session.controller.search(arguments.get("query", ""))
                return state_text()

            elif name == "get_view_state":
                return state_text()

            elif name == "get_trending_movies":
                state = await session.controller.load_trending()
                result = state.to_dict()["trending_movies"]
                return [TextContent(type="text", text=json.dumps(result, indent=2))]

            elif name == "get_movie_details":
                movie = await session.controller.catalog.get_movie(arguments["movie_id"])
                if not movie:
                    return [
                        TextContent(
                            type="text",
                            text=f"Movie {arguments['movie_id']} not found on TMDb",
                        )
                    ]
                result = {
                    "id": movie.id,
                    "title": movie.title,
                    "poster_url": movie.poster_url,
                    "popularity": movie.popularity,
                    "vote_average": movie.vote_average,
                    "release_date": movie.release_date,
                    "original_language": movie.original_language,
                }
                return [TextContent(type="text", text=json.dumps(result, indent=2))]

            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]

        except Exception as e:
            return [TextContent(type="text", text=f"Error: {str(e)}")]

    return server


async def main():
    """Run the MCP server."""
    configure_logging(get_settings().log_level)
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
