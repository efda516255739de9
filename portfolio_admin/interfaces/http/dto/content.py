from __future__ import annotations

from pydantic import BaseModel


class DeleteContentRequestDTO(BaseModel):
    # Checked by the content filename rules, not here, so the error codes stay specific
    filename: str | None = None


class DeleteContentResponseDTO(BaseModel):
    success: bool = True
    message: str


class ContentListDTO(BaseModel):
    files: list[str]
