"""Example provider prompts - demonstrates the prompt template pattern."""

from typing import Any

from mcp_catalog.mcp.decorators import prompt
from mcp_catalog.mcp.models import GetPromptResult, PromptMessage, TextContent
from mcp_catalog.mcp.registry import CatalogRegistry


def _required(arguments: dict[str, Any], name: str) -> str:
    value = arguments.get(name)
    if not value:
        raise ValueError(f"Missing required argument: {name}")
    return str(value)


@prompt(
    name="greeting",
    description="Asks the assistant to greet someone by name.",
    arguments=[
        {"name": "name", "description": "Who to greet", "required": True},
    ],
)
def greeting(arguments: dict[str, Any]) -> dict[str, Any]:
    """Render the greeting prompt."""
    name = _required(arguments, "name")
    return GetPromptResult(
        description=f"Greeting for {name}",
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(text=f"Please write a short, friendly greeting for {name}."),
            ),
        ],
    ).model_dump()


@prompt(
    name="code-review",
    description="Asks the assistant to review a piece of code.",
    arguments=[
        {"name": "code", "description": "The code to review", "required": True},
        {"name": "language", "description": "Programming language of the code", "required": False},
    ],
)
async def code_review(arguments: dict[str, Any]) -> dict[str, Any]:
    """Render the code-review prompt."""
    code = _required(arguments, "code")
    language = arguments.get("language") or "the given language"
    return GetPromptResult(
        description="Code review request",
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(
                    text=(
                        f"Review the following code written in {language}. "
                        f"Point out bugs, unclear naming and missing error handling.\n\n{code}"
                    )
                ),
            ),
        ],
    ).model_dump()


def register_prompts(registry: CatalogRegistry) -> None:
    """Register all example provider prompts with the registry."""
    for renderer in (greeting, code_review):
        registry.add(renderer)
