from abc import ABC, abstractmethod

from ....domain.entities.document_model import DocumentModel
from ..canvas import PdfCanvas


class PdfTemplate(ABC):
    """Шаблон печатной формы"""

    template_id: str = ""
    title: str = ""

    @abstractmethod
    def draw(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        """Рисует документ, создавая страницы по мере необходимости"""
        pass

    def metadata_title(self, document: DocumentModel) -> str:
        return f"{self.title} № {document.act_number}"
