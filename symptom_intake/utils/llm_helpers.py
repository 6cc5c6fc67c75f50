"""Utility functions for LLM invocations and reply parsing."""

import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional
from langchain_core.messages import BaseMessage
from langchain_core.language_models.chat_models import BaseChatModel
from symptom_intake.config.settings import settings

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", re.DOTALL)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class LLMResponseError(ValueError):
    """The LLM reply does not contain a usable JSON object."""


async def invoke_llm_with_timeout(
    llm: BaseChatModel,
    messages: List[BaseMessage],
    timeout: Optional[float] = None,
) -> str:
    """
    Invoke an LLM with timeout protection and return the reply text.

    Args:
        llm: The language model to invoke
        messages: List of messages to send to the LLM
        timeout: Timeout in seconds (defaults to settings.llm_invoke_timeout)

    Returns:
        Reply content as a string

    Raises:
        asyncio.TimeoutError: If the model does not answer in time
    """
    if timeout is None:
        timeout = settings.llm_invoke_timeout

    logger.info(f"📤 Invoking LLM with timeout: {timeout}s")

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"⏱️ LLM invocation timed out after {timeout}s")
        raise

    logger.info("✅ LLM responded successfully")
    content = response.content
    return content if isinstance(content, str) else str(content)


def strip_md_fences(text: str) -> str:
    """Strip markdown code fences that the LLM sometimes wraps JSON in.

    Handles patterns like:
        ```json\\n{...}\\n```
        ```\\n{...}\\n```
    """
    stripped = text.strip()
    match = _FENCE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the outermost JSON object found in an LLM reply.

    Raises:
        LLMResponseError: if no object is present or it is not valid JSON
    """
    match = _JSON_OBJECT.search(strip_md_fences(text))
    if not match:
        raise LLMResponseError("Reply does not contain a JSON object")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Invalid JSON in reply: {e}") from e

    if not isinstance(parsed, dict):
        raise LLMResponseError("Reply JSON is not an object")
    return parsed
