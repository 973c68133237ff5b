"""
Доменные исключения генерации документов
"""

from typing import Optional, Iterable

from ...shared.exceptions.base_exceptions import BusinessLogicError, TechnicalError


class DocumentError(BusinessLogicError):
    """Базовое исключение для ошибок документов"""
    pass


class ResolutionError(DocumentError):
    """Ссылка на юр. лицо или сотрудника не найдена"""

    def __init__(self, field: str, entity_id: str, entity_kind: str, required: bool):
        kind = "Обязательная" if required else "Необязательная"
        super().__init__(
            f"{kind} сторона не найдена: {entity_kind} '{entity_id}' (поле: {field})",
            details={
                "field": field,
                "entity_id": entity_id,
                "entity_kind": entity_kind,
                "required": required,
            }
        )
        self.field = field
        self.entity_id = entity_id
        self.entity_kind = entity_kind
        self.required = required


class AmountTooLargeError(DocumentError):
    """Итоговая сумма не помещается в запись прописью"""

    def __init__(self, total):
        super().__init__(
            f"Итоговая сумма {total} слишком велика для записи прописью",
            details={"total": str(total)}
        )
        self.total = total


class RenderError(TechnicalError):
    """Ошибка рендеринга документа"""

    def __init__(self, reason: str, template_id: Optional[str] = None):
        message = f"Ошибка рендеринга документа: {reason}"
        if template_id:
            message += f" (шаблон: {template_id})"
        super().__init__(message, details={"template_id": template_id})
        self.reason = reason
        self.template_id = template_id


class UnknownTemplateError(RenderError):
    """Запрошен неизвестный шаблон"""

    def __init__(self, template_id: str, available: Iterable[str] = ()):
        self.available = sorted(available)
        super().__init__("неизвестный шаблон", template_id=template_id)
        self.details["available"] = self.available


class StorageError(TechnicalError):
    """Ошибка сохранения документа"""

    def __init__(self, file_name: str, reason: str):
        super().__init__(
            f"Не удалось сохранить документ '{file_name}': {reason}",
            details={"file_name": file_name}
        )
        self.file_name = file_name
        self.reason = reason


class GenerationTimeoutError(TechnicalError):
    """Превышен срок выполнения запроса на генерацию"""

    def __init__(self, stage: str, timeout: Optional[float]):
        super().__init__(
            f"Превышено время генерации документа на этапе '{stage}' (лимит: {timeout} с)",
            details={"stage": stage, "timeout": timeout}
        )
        self.stage = stage
        self.timeout = timeout
