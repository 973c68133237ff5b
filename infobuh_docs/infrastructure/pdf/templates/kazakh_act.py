"""
Акт выполненных работ (оказанных услуг), форма Р-1
"""
from typing import List, Optional, Tuple

from ....domain.entities.document_model import DocumentModel, DocumentLine, Signatory
from ....domain.enums.template_id import TemplateId
from ....shared.utils.formatting import format_amount, format_date, format_quantity
from ..canvas import PdfCanvas
from .base import PdfTemplate

REGULATORY_HEADER = [
    "Приложение 50",
    "к приказу Министра финансов",
    "Республики Казахстан",
    "от 20 декабря 2012 года № 562",
    "Форма Р-1",
]

COLUMNS: List[Tuple[str, float, str]] = [
    ("№", 25, "center"),
    ("Наименование работ (услуг)", 150, "left"),
    ("Дата выполнения работ (оказания услуг)", 60, "center"),
    ("Ед. изм.", 40, "center"),
    ("Кол-во", 45, "right"),
    ("Цена за единицу", 65, "right"),
    ("Стоимость", 70, "right"),
    ("в том числе НДС, в КЗТ", 60, "right"),
]

BODY_SIZE = 9
TABLE_SIZE = 8


class KazakhActTemplate(PdfTemplate):
    """Печатная форма акта выполненных работ для Республики Казахстан"""

    template_id = TemplateId.KAZAKH_ACT.value
    title = "Акт выполненных работ (оказанных услуг)"

    def draw(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        canvas.new_page()
        self._draw_header(canvas, document)
        self._draw_table(canvas, document)
        self._draw_totals(canvas, document)
        self._draw_signatures(canvas, document)

    def _draw_header(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        for line in REGULATORY_HEADER:
            canvas.text(line, size=7, align="right")
        canvas.skip(10)

        self._labeled(canvas, "Заказчик:", document.client.to_string())
        self._labeled(canvas, "Исполнитель:", document.seller.to_string())
        bank_details = self._bank_details(document)
        if bank_details:
            self._labeled(canvas, "Реквизиты:", bank_details)
        self._labeled(
            canvas,
            "Договор (контракт):",
            f"№ {document.contract_number} от {format_date(document.contract_date)}",
        )
        canvas.skip(12)

        canvas.text("АКТ ВЫПОЛНЕННЫХ РАБОТ (ОКАЗАННЫХ УСЛУГ)", size=12, bold=True, align="center")
        canvas.text(
            f"Номер документа: {document.act_number}    Дата составления: {format_date(document.act_date)}",
            size=BODY_SIZE,
            align="center",
        )
        canvas.skip(10)

    @staticmethod
    def _bank_details(document: DocumentModel) -> str:
        parts = []
        bank = document.seller_bank
        if bank is not None:
            if bank.account:
                parts.append(f"ИИК {bank.account}")
            if bank.bik:
                parts.append(f"БИК {bank.bik}")
            parts.append(f"Банк {bank.name}")
        if document.seller.kbe:
            parts.append(f"КБе {document.seller.kbe}")
        return ", ".join(parts)

    @staticmethod
    def _labeled(canvas: PdfCanvas, label: str, value: str) -> None:
        label_width = 110
        top = canvas.y
        canvas.text(label, size=BODY_SIZE, bold=True, width=label_width)
        after_label = canvas.y
        canvas.y = top
        canvas.text(value, size=BODY_SIZE, x=canvas.left + label_width,
                    width=canvas.content_width - label_width)
        canvas.y = max(canvas.y, after_label)

    def _draw_table(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        headers = [title for title, _, _ in COLUMNS]
        widths = [width for _, width, _ in COLUMNS]
        header_aligns = ["center"] * len(COLUMNS)
        aligns = [align for _, _, align in COLUMNS]
        header_height = canvas.row_height(headers, widths, TABLE_SIZE, bold=True)

        def draw_header() -> None:
            canvas.table_row(headers, widths, header_aligns, TABLE_SIZE, bold=True)

        # шапка не остается на странице без единой строки
        canvas.ensure_space(header_height + canvas.row_height([""], widths[:1], TABLE_SIZE))
        draw_header()

        for line in document.lines:
            # шапка таблицы повторяется на каждой странице
            canvas.table_row(self._line_cells(line, document), widths, aligns, TABLE_SIZE,
                             on_page_break=draw_header)

    @staticmethod
    def _line_cells(line: DocumentLine, document: DocumentModel) -> List[str]:
        return [
            str(line.position),
            line.description,
            format_date(document.date_of_completion),
            line.unit,
            format_quantity(line.quantity),
            format_amount(line.price),
            format_amount(line.amount),
            format_amount(line.vat),
        ]

    def _draw_totals(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        widths = [width for _, width, _ in COLUMNS]
        label_width = sum(widths[:-2])
        canvas.ensure_space(TABLE_SIZE * 1.25 + 6)
        canvas.table_row(
            ["Итого:", format_amount(document.total), format_amount(document.vat_total)],
            [label_width, widths[-2], widths[-1]],
            ["right", "right", "right"],
            TABLE_SIZE,
            bold=True,
        )
        canvas.skip(10)
        canvas.text(
            f"Всего на сумму: {document.total_in_words}",
            size=BODY_SIZE,
        )
        canvas.text(
            f"в том числе НДС: {format_amount(document.vat_total)}",
            size=BODY_SIZE,
        )
        canvas.skip(16)

    def _draw_signatures(self, canvas: PdfCanvas, document: DocumentModel) -> None:
        if not document.has_signatures:
            return

        column_width = canvas.content_width / 2
        block_height = BODY_SIZE * 1.3 * 4
        canvas.ensure_space(block_height)
        top = canvas.y
        bottom = top

        blocks: List[Tuple[str, Optional[Signatory], float]] = [
            ("Сдал (Исполнитель)", document.executor, canvas.left),
            ("Принял (Заказчик)", document.customer, canvas.left + column_width),
        ]
        for caption, signatory, x in blocks:
            if signatory is None:
                continue
            canvas.y = top
            canvas.text(caption, size=BODY_SIZE, bold=True, x=x, width=column_width - 10)
            role = signatory.role or "Подпись"
            canvas.text(f"{role} ____________ {signatory.full_name}", size=BODY_SIZE,
                        x=x, width=column_width - 10)
            canvas.text("М.П.", size=BODY_SIZE, x=x, width=column_width - 10)
            bottom = max(bottom, canvas.y)
        canvas.y = bottom
