"""
Интерфейс хранилища готовых документов
"""
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class StoredDocument(BaseModel):
    """Сведения о сохраненном документе"""
    file_name: str = Field(..., description="Имя файла")
    path: str = Field(..., description="Путь или ключ в хранилище")
    size: int = Field(..., description="Размер в байтах")
    checksum: str = Field(..., description="SHA-256 содержимого")


class IDocumentStorage(ABC):
    """Интерфейс хранилища"""

    @abstractmethod
    async def save(self, file_name: str, content: bytes) -> StoredDocument:
        """Сохраняет документ целиком или не сохраняет ничего"""
        pass
