#!/usr/bin/env python3
"""
MCP server for repo-flattener: hands a GitHub repository to an LLM as CXML text.
"""

import asyncio
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    TextContent,
    Tool,
)

from .config import Settings
from .errors import FlattenError
from .pipeline import flatten_repo

logger = logging.getLogger(__name__)

PROMPT_NAME = "flatten-repo"
TOOL_NAME = "flatten_repo"

server = Server("repo-flattener-mcp")


def flatten_to_text(repo_url: str) -> str:
    logger.info("Processing repository: %s", repo_url)
    result = flatten_repo(repo_url, Settings.from_env())
    doc = result.document
    logger.info("Rendered %d of %d files", doc.rendered_count, doc.total_files)
    return f"Repository {result.reference.url} flattened into CXML format:\n\n{result.cxml_text}"


@server.list_prompts()
async def list_prompts() -> List[Prompt]:
    return [
        Prompt(
            name=PROMPT_NAME,
            description="Flatten a GitHub repository into text format for LLM context",
            arguments=[
                PromptArgument(
                    name="repo_url",
                    description="GitHub repository URL to flatten",
                    required=True,
                )
            ],
        )
    ]


@server.get_prompt()
async def get_prompt(name: str, arguments: Dict[str, str] | None) -> GetPromptResult:
    if name != PROMPT_NAME:
        raise ValueError(f"Unknown prompt: {name}")
    if not arguments or "repo_url" not in arguments:
        raise ValueError("Missing required argument: repo_url")

    repo_url = arguments["repo_url"]
    text = flatten_to_text(repo_url)
    return GetPromptResult(
        description=f"Flattened repository {repo_url}",
        messages=[PromptMessage(role="user", content=TextContent(type="text", text=text))],
    )


@server.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(
            name=TOOL_NAME,
            description="Flatten a GitHub repository into text format for LLM context",
            inputSchema={
                "type": "object",
                "properties": {
                    "repo_url": {
                        "type": "string",
                        "description": "GitHub repository URL to flatten",
                    }
                },
                "required": ["repo_url"],
            },
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    if name != TOOL_NAME:
        raise ValueError(f"Unknown tool: {name}")
    if "repo_url" not in arguments:
        raise ValueError("Missing required argument: repo_url")

    repo_url = arguments["repo_url"]
    try:
        text = flatten_to_text(repo_url)
    except FlattenError as e:
        logger.error("Error processing repository %s: %s", repo_url, e)
        text = f"Error processing repository {repo_url}: {e}"
    return [TextContent(type="text", text=text)]


async def serve() -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    logging.basicConfig(level=Settings.from_env().log_level)
    asyncio.run(serve())


if __name__ == "__main__":
    main()
