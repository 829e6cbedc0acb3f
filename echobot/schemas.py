from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ChatRequest(BaseModel):
    message: StrictStr = Field(..., description="User input message")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        # reject blank input but hand the original text through untouched
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bot_response: str = Field(..., alias="botResponse")


class ErrorResponse(BaseModel):
    error: str
