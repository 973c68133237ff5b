"""
Низкоуровневая отрисовка текста и таблиц на страницах PDF (pymupdf)
"""
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pymupdf

# Размеры A4 в пунктах (1 пункт = 1/72 дюйма)
A4_WIDTH, A4_HEIGHT = pymupdf.paper_size("a4")

_BLACK = (0, 0, 0)


class PdfFont:
    """
    Шрифты для вывода текста.

    По умолчанию Noto Sans из пакета pymupdf-fonts: покрывает кириллицу
    вместе с казахскими буквами (ә, ғ, қ, ң, ө, ұ, ү, һ, і). Файл шрифта
    из конфигурации используется и для обычного, и для жирного начертания.
    """

    def __init__(self, font_file: Optional[str] = None):
        self.font_file = font_file
        if font_file:
            self.regular = pymupdf.Font(fontfile=font_file)
            self.bold = self.regular
        else:
            self.regular = pymupdf.Font("notos")
            self.bold = pymupdf.Font("notosbo")

    def get(self, bold: bool = False) -> pymupdf.Font:
        return self.bold if bold else self.regular

    def text_length(self, text: str, size: float, bold: bool = False) -> float:
        return self.get(bold).text_length(text, fontsize=size)


class PdfCanvas:
    """Последовательная запись блоков сверху вниз с переносом на новые страницы"""

    def __init__(
        self,
        doc: pymupdf.Document,
        font: PdfFont,
        margin: float = 40,
        width: float = A4_WIDTH,
        height: float = A4_HEIGHT,
    ):
        self.doc = doc
        self.font = font
        self.margin = margin
        self.width = width
        self.height = height
        self.page: Optional[pymupdf.Page] = None
        self.y = margin
        # текст копится по страницам и выводится в flush()
        self._writers: Dict[int, pymupdf.TextWriter] = {}

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def bottom(self) -> float:
        # место под колонтитул с номером страницы
        return self.height - self.margin - 15

    def new_page(self) -> pymupdf.Page:
        self.page = self.doc.new_page(width=self.width, height=self.height)
        self.y = self.margin
        return self.page

    def fits(self, block_height: float) -> bool:
        return self.page is not None and self.y + block_height <= self.bottom

    def ensure_space(self, block_height: float) -> bool:
        """Начинает новую страницу, если блок не помещается. True - страница новая"""
        if self.fits(block_height):
            return False
        self.new_page()
        return True

    def skip(self, points: float) -> None:
        self.y += points

    def write_at(
        self,
        page: pymupdf.Page,
        x: float,
        baseline: float,
        text: str,
        size: float = 9,
        bold: bool = False,
    ) -> None:
        writer = self._writers.get(page.number)
        if writer is None:
            writer = pymupdf.TextWriter(page.rect)
            self._writers[page.number] = writer
        writer.append((x, baseline), text, font=self.font.get(bold), fontsize=size)

    def flush(self) -> None:
        """Переносит накопленный текст на страницы"""
        for number in sorted(self._writers):
            self._writers[number].write_text(self.doc[number], color=_BLACK)
        self._writers.clear()

    def text(
        self,
        text: str,
        size: float = 9,
        bold: bool = False,
        align: str = "left",
        x: Optional[float] = None,
        width: Optional[float] = None,
        leading: float = 1.3,
    ) -> None:
        """Абзац с переносом строк по ширине, сдвигает курсор вниз"""
        x = self.left if x is None else x
        width = self.content_width if width is None else width
        line_height = size * leading

        for line in self.wrap(text, width, size, bold):
            self.ensure_space(line_height)
            self.write_at(self.page, self._aligned_x(line, x, width, size, bold, align),
                          self.y + size, line, size, bold)
            self.y += line_height

    def table_row(
        self,
        cells: Sequence[str],
        widths: Sequence[float],
        aligns: Sequence[str],
        size: float = 8,
        bold: bool = False,
        padding: float = 3,
        on_page_break: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Строка таблицы с рамками; высота по самой высокой ячейке.

        Если строка не помещается, она переносится на новую страницу;
        строка выше страницы делится по строкам текста. После каждого
        переноса вызывается on_page_break (например, для повтора шапки).
        """
        line_height = size * 1.25
        wrapped = [
            self.wrap(text, width - 2 * padding, size, bold)
            for text, width in zip(cells, widths)
        ]
        line_count = max(len(lines) for lines in wrapped)
        row_height = line_count * line_height + 2 * padding

        if not self.fits(row_height):
            # строка выше страницы начинается на текущей, если там есть место
            if row_height <= self.bottom - self.margin or not self.fits(line_height + 2 * padding):
                self._break_page(on_page_break)

        start = 0
        while start < line_count:
            capacity = max(int((self.bottom - self.y - 2 * padding) // line_height), 1)
            end = min(start + capacity, line_count)
            self._draw_row([lines[start:end] for lines in wrapped], widths, aligns,
                           size, bold, padding, (end - start) * line_height + 2 * padding)
            start = end
            if start < line_count:
                self._break_page(on_page_break)

    def _break_page(self, on_page_break: Optional[Callable[[], None]]) -> None:
        self.new_page()
        if on_page_break is not None:
            on_page_break()

    def _draw_row(
        self,
        wrapped: Sequence[Sequence[str]],
        widths: Sequence[float],
        aligns: Sequence[str],
        size: float,
        bold: bool,
        padding: float,
        row_height: float,
    ) -> None:
        line_height = size * 1.25
        x = self.left
        for lines, width, align in zip(wrapped, widths, aligns):
            self.page.draw_rect(pymupdf.Rect(x, self.y, x + width, self.y + row_height),
                                color=_BLACK, width=0.5)
            baseline = self.y + padding + size
            for line in lines:
                line_x = self._aligned_x(line, x + padding, width - 2 * padding, size, bold, align)
                self.write_at(self.page, line_x, baseline, line, size, bold)
                baseline += line_height
            x += width
        self.y += row_height

    def row_height(
        self,
        cells: Sequence[str],
        widths: Sequence[float],
        size: float = 8,
        bold: bool = False,
        padding: float = 3,
    ) -> float:
        line_height = size * 1.25
        lines = max(len(self.wrap(text, width - 2 * padding, size, bold)) for text, width in zip(cells, widths))
        return lines * line_height + 2 * padding

    def wrap(self, text: str, width: float, size: float, bold: bool = False) -> List[str]:
        """Разбивает текст на строки не шире width; длинные слова режутся по символам"""
        lines: List[str] = []
        for paragraph in (text or "").split("\n"):
            current = ""
            for word in paragraph.split():
                candidate = f"{current} {word}" if current else word
                if self.font.text_length(candidate, size, bold) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                current, chunks = self._split_word(word, width, size, bold)
                lines.extend(chunks)
            lines.append(current)
        return lines or [""]

    def _split_word(self, word: str, width: float, size: float, bold: bool) -> Tuple[str, List[str]]:
        chunks = []
        current = ""
        for char in word:
            if current and self.font.text_length(current + char, size, bold) > width:
                chunks.append(current)
                current = char
            else:
                current += char
        return current, chunks

    def _aligned_x(self, line: str, x: float, width: float, size: float, bold: bool, align: str) -> float:
        if align == "left":
            return x
        line_width = self.font.text_length(line, size, bold)
        if align == "right":
            return x + width - line_width
        return x + (width - line_width) / 2
