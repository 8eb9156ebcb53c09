"""Data carriers produced by the response pipeline."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class FileResponse:
    """
    Файл, полученный из ответа с заголовком Content-Disposition.

    Attributes:
        file_name: Имя файла без кавычек и граничных не-алфавитно-цифровых символов
        file_content: Содержимое файла
    """
    file_name: str
    file_content: bytes

    def __repr__(self) -> str:
        return f"FileResponse(file_name={self.file_name!r}, size={len(self.file_content)})"


class Problem(BaseModel):
    """Problem details entry (RFC 7807) found in JSON error bodies."""

    model_config = ConfigDict(extra="allow")

    detail: Optional[str] = None
    title: Optional[str] = None
    status: Optional[int] = None
    type: Optional[str] = None
    instance: Optional[str] = None
