import asyncio
import logging
from typing import Optional

from ..dto.generation_dto import GenerateActDto, GenerationResultDto
from ..services.act_assembler import ActAssembler
from ..services.deadline import Deadline
from ..validation.act_validator import validate_act_input
from ...domain.entities.act import ActInput
from ...domain.exceptions.document_exceptions import RenderError, UnknownTemplateError
from ...domain.interfaces.document_renderer import IDocumentRenderer
from ...domain.interfaces.document_storage import IDocumentStorage
from ...domain.interfaces.entity_lookup import IEntityLookup


class GenerateActUseCase:
    """Случай использования: формирование акта выполненных работ

    Этапы выполняются строго последовательно: проверка, сборка, рендеринг,
    сохранение. Все этапы укладываются в один общий срок.
    """

    def __init__(
        self,
        lookups: IEntityLookup,
        assembler: ActAssembler,
        renderer: IDocumentRenderer,
        storage: IDocumentStorage,
        default_timeout: Optional[float] = None,
    ):
        self._lookups = lookups
        self._assembler = assembler
        self._renderer = renderer
        self._storage = storage
        self._default_timeout = default_timeout
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    async def execute(self, dto: GenerateActDto) -> GenerationResultDto:
        """Формирует документ и возвращает его вместе с метаданными"""
        deadline = Deadline(dto.timeout if dto.timeout is not None else self._default_timeout)
        self._logger.info(f"Запрос на формирование акта от {dto.caller_id}, шаблон {dto.template_id}")

        deadline.check("validate")
        act = validate_act_input(dto.payload).unwrap()

        # неизвестный шаблон отклоняется до обращений к БД
        available = self._renderer.available_templates()
        if dto.template_id not in available:
            raise UnknownTemplateError(dto.template_id, available)

        document = await deadline.run("assemble", self._assembler.assemble(act, self._lookups))

        try:
            pdf_bytes = await deadline.run(
                "render",
                asyncio.to_thread(self._renderer.render, document, dto.template_id),
            )
        except UnknownTemplateError:
            raise
        except RenderError:
            self._logger.error(f"Ошибка рендеринга акта {act.act_number} по шаблону {dto.template_id}")
            raise

        stored = await deadline.run("store", self._storage.save(self._file_name(act), pdf_bytes))

        self._logger.info(
            f"Акт {act.act_number} сформирован для {dto.caller_id}: {stored.file_name}, "
            f"sha256={stored.checksum}"
        )
        return GenerationResultDto(
            file_name=stored.file_name,
            file_path=stored.path,
            size=stored.size,
            checksum=stored.checksum,
            template_id=dto.template_id,
            caller_id=dto.caller_id,
            total=document.total,
            total_in_words=document.total_in_words,
            vat_total=document.vat_total,
            pdf_bytes=pdf_bytes,
        )

    @staticmethod
    def _file_name(act: ActInput) -> str:
        return f"act-{act.seller_legal_entity_id}-{act.client_legal_entity_id}-{act.act_number}.pdf"
