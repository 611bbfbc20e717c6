from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.shared.config import config


class RelayChatCommand(BaseModel):
    """
    The body sent upstream. Field values are taken from the caller unchecked;
    only missing or falsy values are replaced by the configured defaults.
    """
    model: Any
    messages: Optional[Any] = None
    temperature: Any
    max_completion_tokens: Any
    stream: bool = False

    @classmethod
    def from_body(cls, body: Any) -> "RelayChatCommand":
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")

        defaults = config["openai"]
        return cls(
            model=body.get("model") or defaults["default_model"],
            messages=body.get("messages"),
            temperature=body.get("temperature") or defaults["default_temperature"],
            max_completion_tokens=(
                body.get("max_completion_tokens") or defaults["default_max_completion_tokens"]
            ),
            stream=bool(body.get("stream")),
        )

    def to_request_data(self) -> Dict[str, Any]:
        data = self.model_dump()
        if data["messages"] is None:
            del data["messages"]
        return data
