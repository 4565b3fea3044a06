"""LLM response parsing utilities."""

import json
from typing import Any, Optional


def extract_json_from_response(content: str, default: Optional[dict] = None) -> Any:
    """Parse JSON from an LLM response, handling markdown code blocks.

    Raises json.JSONDecodeError when the content is not JSON and no
    default is given.
    """
    content = content.strip()

    if "```json" in content:
        content = content.split("```json")[1].split("```")[0]
    elif "```" in content:
        lines = content.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines)

    try:
        return json.loads(content)
    except json.JSONDecodeError:
        if default is not None:
            return default
        raise


def extract_response_content(response: Any) -> str:
    """Extract text content from various LLM response formats."""
    content = getattr(response, "content", response)
    if content is None:
        return ""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, dict):
                if block.get("type", "text") == "text":
                    parts.append(block.get("text", ""))
            elif hasattr(block, "text"):
                parts.append(block.text)
            else:
                parts.append(str(block))
        return "".join(parts).strip()
    return str(content).strip()
