import logging
import os
from typing import Dict, List, Optional, Union

import requests
from ollama import Client, ResponseError

from config import LLM_PROVIDER, LLM_TIMEOUT, PROVIDERS, SYSTEM_PROMPT
from normalizer import extract_tool_payload
from prompts import get_tool

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base error for anything that goes wrong talking to an LLM provider."""


class LLMConfigError(LLMError):
    pass


class RateLimitError(LLMError):
    def __init__(self, message="请求过于频繁，请稍后再试"):
        super().__init__(message)


class QuotaExceededError(LLMError):
    def __init__(self, message="额度已用完，请充值"):
        super().__init__(message)


class LLMResponseError(LLMError):
    pass


def build_messages(prompt: Union[str, list], system_prompt: Optional[str] = SYSTEM_PROMPT) -> List[Dict]:
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    if isinstance(prompt, list):
        messages.extend(prompt)
    else:
        messages.append({"role": "user", "content": prompt})
    return messages


def _post_chat(provider: str, body: Dict, session=None) -> Dict:
    conf = PROVIDERS[provider]
    api_key = os.getenv(conf["key_env"])
    if not api_key:
        logger.error(f"{conf['key_env']} is not configured")
        raise LLMConfigError(f"{conf['key_env']} is not configured")

    http = session or requests
    try:
        response = http.post(
            conf["url"],
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=body,
            timeout=LLM_TIMEOUT,
        )
    except requests.RequestException as e:
        raise LLMError(f"{provider} request failed: {str(e)}") from e

    if response.status_code == 429:
        raise RateLimitError()
    if response.status_code == 402:
        raise QuotaExceededError()
    if not response.ok:
        logger.error(f"{provider} API error: {response.status_code} {response.text}")
        raise LLMResponseError(f"{provider} API error: {response.status_code} - {response.text}")

    try:
        return response.json()
    except ValueError as e:
        raise LLMResponseError(f"{provider} returned a non-JSON body") from e


def _chat_ollama(messages: List[Dict], tools: Optional[List[Dict]], client=None) -> Dict:
    conf = PROVIDERS["ollama"]
    client = client or Client(host=conf["host"])
    try:
        response = client.chat(model=conf["model"], messages=messages, tools=tools)
    except (ResponseError, ConnectionError) as e:
        raise LLMError(f"ollama request failed: {str(e)}") from e
    message = response.model_dump()["message"]
    # Same envelope as the OpenAI-compatible providers
    return {"choices": [{"message": message}], "usage": None}


def query_llm(
    prompt: Union[str, list],
    tool_name: Optional[str] = None,
    provider: Optional[str] = None,
    client=None,
    system_prompt: Optional[str] = SYSTEM_PROMPT,
) -> Dict:
    """
    Send a chat completion and return the provider's raw response body.

    Args:
        prompt: a user prompt string, or a list of chat messages
        tool_name: name of a function in prompts.TOOLS; when set the model is
            forced to answer through that function
        provider: "kimi", "tuzi" or "ollama" (defaults to LLM_PROVIDER)
        client: requests session for the HTTP providers, ollama Client otherwise
        system_prompt: prepended as the system message unless None

    Raises:
        LLMError: on configuration, transport or HTTP failures
    """
    provider = provider or LLM_PROVIDER
    if provider not in PROVIDERS:
        raise LLMConfigError(f"Unknown LLM provider: {provider}")

    messages = build_messages(prompt, system_prompt)
    tools = [get_tool(tool_name)] if tool_name else None
    logger.info(f"Calling {provider} ({tool_name or 'chat'}), {len(messages)} messages")

    if provider == "ollama":
        return _chat_ollama(messages, tools, client)

    body = {"model": PROVIDERS[provider]["model"], "messages": messages}
    if tools:
        body["tools"] = tools
        body["tool_choice"] = {"type": "function", "function": {"name": tool_name}}
    return _post_chat(provider, body, client)


def query_tool(
    prompt: Union[str, list],
    tool_name: str,
    provider: Optional[str] = None,
    client=None,
    system_prompt: Optional[str] = SYSTEM_PROMPT,
) -> Dict:
    """
    Call the LLM with a forced function call.

    Returns a dict with ``arguments`` (parsed JSON or None when nothing could
    be parsed), ``raw`` (the argument string or free-text content, kept for
    salvage) and ``usage``.
    """
    response = query_llm(prompt, tool_name, provider, client, system_prompt)
    arguments, raw = extract_tool_payload(response)
    logger.info(f"{tool_name} response received, parsed={arguments is not None}")
    return {"arguments": arguments, "raw": raw, "usage": response.get("usage")}
