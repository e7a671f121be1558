"""
Chat completion request/response shapes (OpenAI-compatible).

Unknown fields are kept on both sides so provider-specific parameters and
response extras pass through untouched.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ROLE_USER = "user"
ROLE_SYSTEM = "system"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"


class ChatMessage(BaseModel):
    role: str = Field(..., description="user | system | assistant | tool")
    content: Optional[Union[str, List[Dict[str, Any]]]] = Field(
        None,
        description="Text, or multipart content parts (text / image_url)"
    )
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    model_config = ConfigDict(extra="allow")


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False
    response_format: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    transforms: Optional[List[str]] = None
    provider: Optional[Dict[str, Any]] = None
    user: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class ChatCompletionChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    model_config = ConfigDict(extra="allow")


class ChatCompletionResponse(BaseModel):
    id: str = ""
    object: Optional[str] = None
    created: int = 0
    model: str = ""
    choices: List[ChatCompletionChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    model_config = ConfigDict(extra="allow")

    @property
    def text(self) -> str:
        """Content of the first choice, or "" when absent."""
        if not self.choices:
            return ""
        content = self.choices[0].message.content
        return content if isinstance(content, str) else ""
