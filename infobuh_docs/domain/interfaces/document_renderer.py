"""
Интерфейс рендеринга документов
"""
from abc import ABC, abstractmethod
from typing import Dict, List

from ..entities.document_model import DocumentModel


class IDocumentRenderer(ABC):
    """Интерфейс сервиса рендеринга"""

    @abstractmethod
    def render(self, document: DocumentModel, template_id: str) -> bytes:
        """
        Рендерит документ по шаблону

        Одинаковые документ и шаблон всегда дают побайтно одинаковый результат.

        Args:
            document: Модель документа
            template_id: Идентификатор шаблона

        Returns:
            bytes: Готовый документ

        Raises:
            UnknownTemplateError: Шаблон не зарегистрирован
            RenderError: Внутренняя ошибка рендеринга
        """
        pass

    @abstractmethod
    def available_templates(self) -> List[str]:
        """Идентификаторы зарегистрированных шаблонов"""
        pass

    @abstractmethod
    def describe_templates(self) -> Dict[str, str]:
        """Названия зарегистрированных шаблонов по идентификатору"""
        pass
