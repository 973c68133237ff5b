from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TemplateInfo(BaseModel):
    """Описание шаблона документа"""
    id: str = Field(..., description="Идентификатор шаблона")
    title: str = Field(..., description="Название документа")


class TemplatesResponse(BaseModel):
    """Список доступных шаблонов"""
    templates: List[TemplateInfo] = Field(default_factory=list, description="Шаблоны")


class GeneratedDocumentResponse(BaseModel):
    """Сформированный документ и его метаданные"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = Field(..., description="Имя файла")
    file_path: str = Field(..., description="Путь в хранилище")
    size: int = Field(..., description="Размер в байтах")
    checksum: str = Field(..., description="SHA-256 документа")
    total: str = Field(..., description="Итоговая сумма")
    total_in_words: str = Field(..., description="Итоговая сумма прописью")
    vat_total: str = Field(..., description="В том числе НДС")
    template_id: str = Field(..., description="Шаблон")
    document: str = Field(..., description="PDF документ в формате base64")


class ErrorResponse(BaseModel):
    """Ответ с описанием ошибки"""
    error: str = Field(..., description="Код ошибки")
    message: str = Field(..., description="Сообщение")
    details: Dict[str, Any] = Field(default_factory=dict, description="Подробности")
