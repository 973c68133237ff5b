"""
Базовые исключения для сервиса генерации документов

Иерархия исключений для единообразной обработки ошибок
"""

from typing import Optional, Dict, Any, List


class InfobuhDocsError(Exception):
    """Базовое исключение для всех ошибок сервиса"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.code = code or self.__class__.__name__

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Преобразование в словарь для API ответов"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class BusinessLogicError(InfobuhDocsError):
    """Ошибки бизнес-логики"""
    pass


class ValidationError(InfobuhDocsError):
    """Ошибки валидации входных данных.

    Содержит полный список ошибок по полям, а не только первую.
    """

    def __init__(self, errors: List[Any], message: str = "Некорректные входные данные"):
        self.errors = list(errors)
        super().__init__(
            message,
            details={"fields": [self._error_to_dict(e) for e in self.errors]}
        )

    @staticmethod
    def _error_to_dict(error: Any) -> Dict[str, Any]:
        if hasattr(error, "to_dict"):
            return error.to_dict()
        return dict(error)

    @property
    def fields(self) -> List[str]:
        """Пути полей, не прошедших проверку"""
        return [item["field"] for item in self.details["fields"]]


class TechnicalError(InfobuhDocsError):
    """Технические ошибки системы"""
    pass


class ExternalServiceError(TechnicalError):
    """Ошибки внешних сервисов"""
    pass


class ConfigurationError(TechnicalError):
    """Ошибки конфигурации"""
    pass
