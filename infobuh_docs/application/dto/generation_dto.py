from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from ...domain.enums.template_id import TemplateId


class GenerateActDto(BaseModel):
    """DTO запроса на формирование акта"""
    payload: Any = Field(..., description="Тело запроса без проверки")
    caller_id: str = Field(..., min_length=1, description="Идентификатор вызывающего пользователя")
    template_id: str = Field(TemplateId.KAZAKH_ACT.value, description="Идентификатор шаблона")
    timeout: Optional[float] = Field(default=None, gt=0, description="Срок выполнения, секунды")


class GenerationResultDto(BaseModel):
    """DTO результата: документ и метаданные для аудита"""
    file_name: str = Field(..., description="Имя файла")
    file_path: str = Field(..., description="Путь в хранилище")
    size: int = Field(..., description="Размер в байтах")
    checksum: str = Field(..., description="SHA-256 документа")
    template_id: str = Field(..., description="Шаблон")
    caller_id: str = Field(..., description="Кто сформировал документ")
    total: Decimal = Field(..., description="Итоговая сумма")
    total_in_words: str = Field(..., description="Итоговая сумма прописью")
    vat_total: Decimal = Field(Decimal(0), description="В том числе НДС")
    pdf_bytes: bytes = Field(..., description="Документ")
