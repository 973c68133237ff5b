"""
Рендеринг моделей документов в PDF с использованием pymupdf
"""
import logging
from typing import Dict, Iterable, List, Optional

import pymupdf

from ...domain.entities.document_model import DocumentModel
from ...domain.exceptions.document_exceptions import RenderError, UnknownTemplateError
from ...domain.interfaces.document_renderer import IDocumentRenderer
from .canvas import PdfCanvas, PdfFont
from .templates.base import PdfTemplate
from .templates.kazakh_act import KazakhActTemplate

PRODUCER = "Infobuh"


def default_templates() -> List[PdfTemplate]:
    return [KazakhActTemplate()]


class PdfDocumentRenderer(IDocumentRenderer):
    """Реализация сервиса рендеринга PDF"""

    def __init__(self, templates: Optional[Iterable[PdfTemplate]] = None, font_file: Optional[str] = None):
        self._templates: Dict[str, PdfTemplate] = {
            template.template_id: template
            for template in (templates if templates is not None else default_templates())
        }
        self._font_file = font_file
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    def available_templates(self) -> List[str]:
        return sorted(self._templates)

    def describe_templates(self) -> Dict[str, str]:
        return {key: self._templates[key].title for key in self.available_templates()}

    def get_template(self, template_id: str) -> PdfTemplate:
        key = getattr(template_id, "value", template_id)
        template = self._templates.get(key)
        if template is None:
            raise UnknownTemplateError(str(key), self._templates.keys())
        return template

    def render(self, document: DocumentModel, template_id: str) -> bytes:
        template = self.get_template(template_id)

        try:
            self._logger.debug(f"Рендеринг документа {document.act_number} по шаблону {template.template_id}")

            pdf_doc = pymupdf.open()
            try:
                canvas = PdfCanvas(pdf_doc, PdfFont(self._font_file))
                template.draw(canvas, document)
                self._draw_page_numbers(canvas)
                canvas.flush()
                pdf_doc.set_metadata(self._metadata(template, document))
                # no_new_id: без случайного /ID, иначе байты отличаются между вызовами
                pdf_bytes = pdf_doc.tobytes(garbage=3, deflate=True, no_new_id=True)
                page_count = pdf_doc.page_count
            finally:
                pdf_doc.close()

            self._logger.debug(f"Создан PDF размером {len(pdf_bytes)} байт, страниц: {page_count}")
            return pdf_bytes

        except RenderError:
            raise
        except Exception as e:
            self._logger.exception(f"Ошибка при рендеринге документа {document.act_number}")
            raise RenderError(str(e), template_id=template.template_id) from e

    @staticmethod
    def _draw_page_numbers(canvas: PdfCanvas) -> None:
        total = canvas.doc.page_count
        for index, page in enumerate(canvas.doc, start=1):
            label = f"Страница {index} из {total}"
            x = canvas.right - canvas.font.text_length(label, 7)
            canvas.write_at(page, x, canvas.height - canvas.margin, label, size=7)

    @staticmethod
    def _metadata(template: PdfTemplate, document: DocumentModel) -> Dict[str, str]:
        # даты берутся из акта, а не из текущего времени
        stamp = document.act_date.strftime("D:%Y%m%d000000")
        return {
            "title": template.metadata_title(document),
            "author": document.seller.name,
            "subject": template.title,
            "keywords": f"{template.template_id}, {document.contract_number}",
            "creator": PRODUCER,
            "producer": PRODUCER,
            "creationDate": stamp,
            "modDate": stamp,
        }
