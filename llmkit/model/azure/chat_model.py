"""
Azure OpenAI chat model returning the whole response in one call.
"""

from typing import List, Optional

from llmkit.data.message import AiMessage, ChatMessage
from llmkit.data.tool import ToolSpecification
from llmkit.model.azure.base import AzureOpenAiChatModelBase
from llmkit.model.azure.helper import ai_message_from, finish_reason_from, token_usage_from
from llmkit.model.chat import ChatLanguageModel, TokenCountEstimator
from llmkit.model.output import Response


class AzureOpenAiChatModel(AzureOpenAiChatModelBase, ChatLanguageModel, TokenCountEstimator):
    """
    Example:
        model = AzureOpenAiChatModel(deployment_name="gpt-4")
        response = model.generate([UserMessage.from_text("Hello!")])
        print(response.content.text, response.token_usage.total_token_count)
    """

    def generate(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> Response[AiMessage]:
        body = self._build_body(messages, tool_specifications, tool_specification)
        data = self.client.chat_completions(self.deployment_name, body)

        choice = data["choices"][0]
        return Response(
            content=ai_message_from(choice["message"]),
            token_usage=token_usage_from(data.get("usage")),
            finish_reason=finish_reason_from(choice.get("finish_reason")),
        )
