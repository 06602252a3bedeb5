from pydantic import BaseModel, ConfigDict, field_validator

class ChatMessage(BaseModel):
    """One chat line as it travels over the wire in both directions."""

    username: str = ""
    content: str = ""

    # Immutable value; unknown fields are dropped on decode
    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("username", "content", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        # JSON null reads the same as a missing field
        return "" if value is None else value
