"""
Shared construction and request building for the Azure OpenAI chat models.
"""

from typing import Any, Dict, List, Optional

from llmkit.config import settings
from llmkit.data.message import ChatMessage
from llmkit.data.tool import ToolSpecification
from llmkit.internal.utils import get_or_default, is_null_or_empty
from llmkit.logger import get_logger
from llmkit.model.azure.client import AzureOpenAiClient
from llmkit.model.azure.helper import to_openai_messages, to_tools, tool_choice
from llmkit.model.tokenizer import OpenAiTokenizer, Tokenizer

logger = get_logger(__name__)

DEFAULT_DEPLOYMENT = "gpt-35-turbo"
DEFAULT_TOKENIZER_MODEL = "gpt-3.5-turbo"


class AzureOpenAiChatModelBase:
    """
    Holds the client and generation parameters common to both chat models.

    Either pass a ready `client`, or the endpoint and one credential
    (`api_key`, `non_azure_api_key` or `token_credential`).
    """

    def __init__(
        self,
        client: Optional[AzureOpenAiClient] = None,
        endpoint: Optional[str] = None,
        service_version: Optional[str] = None,
        api_key: Optional[str] = None,
        non_azure_api_key: Optional[str] = None,
        token_credential: Any = None,
        deployment_name: Optional[str] = None,
        tokenizer: Optional[Tokenizer] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
        stop: Optional[List[str]] = None,
        presence_penalty: Optional[float] = None,
        frequency_penalty: Optional[float] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        proxies: Optional[Dict[str, str]] = None,
        log_requests_and_responses: Optional[bool] = None,
    ):
        if client is None:
            client = AzureOpenAiClient(
                endpoint=endpoint,
                service_version=service_version,
                api_key=api_key,
                key_credential=non_azure_api_key,
                token_credential=token_credential,
                timeout=timeout,
                max_retries=max_retries,
                proxies=proxies,
                log_requests_and_responses=log_requests_and_responses,
            )
        self.client = client

        self.deployment_name = get_or_default(deployment_name, settings.azure.chat_deployment or DEFAULT_DEPLOYMENT)
        self.tokenizer = get_or_default(tokenizer, lambda: OpenAiTokenizer(DEFAULT_TOKENIZER_MODEL))
        self.temperature = get_or_default(temperature, settings.llm.temperature)
        self.top_p = get_or_default(top_p, settings.llm.top_p)
        self.max_tokens = get_or_default(max_tokens, settings.llm.max_tokens)
        self.stop = stop
        self.presence_penalty = get_or_default(presence_penalty, settings.llm.presence_penalty)
        self.frequency_penalty = get_or_default(frequency_penalty, settings.llm.frequency_penalty)

        logger.info(
            f"Initialized {type(self).__name__}: deployment={self.deployment_name}, "
            f"temperature={self.temperature}, max_tokens={self.max_tokens}"
        )

    def _build_body(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]],
        tool_that_must_be_executed: Optional[ToolSpecification],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "messages": to_openai_messages(messages),
            "temperature": self.temperature,
        }
        optional = {
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "stop": self.stop,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
        }
        body.update({key: value for key, value in optional.items() if value is not None})

        if tool_that_must_be_executed is not None:
            body["tools"] = to_tools([tool_that_must_be_executed])
            body["tool_choice"] = tool_choice(tool_that_must_be_executed)
        elif not is_null_or_empty(tool_specifications):
            body["tools"] = to_tools(tool_specifications)

        return body

    def _estimate_input_token_count(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]],
        tool_that_must_be_executed: Optional[ToolSpecification],
    ) -> Optional[int]:
        if self.tokenizer is None:
            return None
        token_count = self.tokenizer.estimate_token_count_in_messages(messages)
        if tool_that_must_be_executed is not None:
            token_count += self.tokenizer.estimate_token_count_in_forceful_tool_specification(
                tool_that_must_be_executed
            )
        elif not is_null_or_empty(tool_specifications):
            token_count += self.tokenizer.estimate_token_count_in_tool_specifications(tool_specifications)
        return token_count

    def estimate_token_count(self, messages: List[ChatMessage]) -> int:
        return self.tokenizer.estimate_token_count_in_messages(messages)
