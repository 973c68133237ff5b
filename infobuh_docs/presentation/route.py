import base64
import logging
from typing import Any, Optional, Tuple
from urllib.parse import quote

from fastapi import APIRouter, Body, Header, Query, status
from fastapi.responses import JSONResponse, Response

from .models import ErrorResponse, GeneratedDocumentResponse, TemplateInfo, TemplatesResponse
from ..application.dto.generation_dto import GenerateActDto, GenerationResultDto
from ..application.use_case.generate_act import GenerateActUseCase
from ..domain.enums.template_id import TemplateId
from ..domain.exceptions import (
    AmountTooLargeError,
    GenerationTimeoutError,
    RenderError,
    ResolutionError,
    StorageError,
    UnknownTemplateError,
)
from ..domain.interfaces.document_renderer import IDocumentRenderer
from ..shared.exceptions import ExternalServiceError, InfobuhDocsError, ValidationError
from ..shared.utils.money import round_money

# порядок важен: подклассы раньше базовых классов
ERROR_STATUSES: Tuple[Tuple[type, int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ResolutionError, status.HTTP_404_NOT_FOUND),
    (UnknownTemplateError, status.HTTP_400_BAD_REQUEST),
    (AmountTooLargeError, status.HTTP_400_BAD_REQUEST),
    (GenerationTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
    (RenderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse},
}


def error_status(error: InfobuhDocsError) -> int:
    for error_type, http_status in ERROR_STATUSES:
        if isinstance(error, error_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: InfobuhDocsError) -> JSONResponse:
    return JSONResponse(content=error.to_dict(), status_code=error_status(error))


class DocumentTemplatesController:
    """Контроллер для формирования документов по шаблонам"""

    def __init__(self, generate_act_use_case: GenerateActUseCase, renderer: IDocumentRenderer):
        self._generate_act_use_case = generate_act_use_case
        self._renderer = renderer
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

        # Создаем роутер
        self.router = APIRouter(prefix="/document-templates", tags=["Document templates"])
        self._setup_routes()

    async def _generate(
        self,
        payload: Any,
        caller_id: Optional[str],
        template_id: str,
        timeout: Optional[float],
    ) -> Tuple[Optional[GenerationResultDto], Optional[JSONResponse]]:
        if not caller_id or not caller_id.strip():
            return None, JSONResponse(
                content=ErrorResponse(
                    error="Unauthorized",
                    message="Не указан идентификатор пользователя",
                ).model_dump(),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        dto = GenerateActDto(
            payload=payload,
            caller_id=caller_id.strip(),
            template_id=template_id,
            timeout=timeout,
        )
        try:
            return await self._generate_act_use_case.execute(dto), None
        except (ValidationError, ResolutionError, UnknownTemplateError, AmountTooLargeError) as e:
            self._logger.info(f"Запрос от {dto.caller_id} отклонен: {e}")
            return None, error_response(e)
        except InfobuhDocsError as e:
            self._logger.error(f"Ошибка формирования документа для {dto.caller_id}: {e}")
            return None, error_response(e)
        except Exception:
            self._logger.exception("Непредвиденная ошибка при формировании документа")
            return None, JSONResponse(
                content=ErrorResponse(
                    error="InternalError",
                    message="Внутренняя ошибка сервера",
                ).model_dump(),
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    def _setup_routes(self):
        """Настраивает маршруты API"""

        @self.router.get("", response_model=TemplatesResponse)
        async def list_templates():
            """Возвращает список доступных шаблонов"""
            return TemplatesResponse(
                templates=[
                    TemplateInfo(id=template_id, title=title)
                    for template_id, title in self._renderer.describe_templates().items()
                ]
            )

        @self.router.post(
            "/kazakh-act",
            response_model=GeneratedDocumentResponse,
            response_model_by_alias=True,
            responses=ERROR_RESPONSES,
        )
        async def generate_kazakh_act(
            payload: Any = Body(None),
            x_user_id: Optional[str] = Header(None),
            template_id: str = Query(TemplateId.KAZAKH_ACT.value, alias="templateId"),
            timeout: Optional[float] = Query(None, gt=0),
        ):
            """Формирует акт выполненных работ и возвращает его в base64"""
            result, error = await self._generate(payload, x_user_id, template_id, timeout)
            if error is not None:
                return error

            return GeneratedDocumentResponse(
                file_name=result.file_name,
                file_path=result.file_path,
                size=result.size,
                checksum=result.checksum,
                total=str(round_money(result.total)),
                total_in_words=result.total_in_words,
                vat_total=str(result.vat_total),
                template_id=result.template_id,
                document=base64.b64encode(result.pdf_bytes).decode("utf-8"),
            )

        @self.router.post(
            "/kazakh-act/pdf",
            response_class=Response,
            responses={
                status.HTTP_200_OK: {"content": {"application/pdf": {}}},
                **ERROR_RESPONSES,
            },
        )
        async def generate_kazakh_act_pdf(
            payload: Any = Body(None),
            x_user_id: Optional[str] = Header(None),
            template_id: str = Query(TemplateId.KAZAKH_ACT.value, alias="templateId"),
            timeout: Optional[float] = Query(None, gt=0),
        ):
            """Формирует акт выполненных работ и возвращает PDF"""
            result, error = await self._generate(payload, x_user_id, template_id, timeout)
            if error is not None:
                return error

            return Response(
                content=result.pdf_bytes,
                media_type="application/pdf",
                headers={
                    "Content-Disposition": f"inline; filename*=UTF-8''{quote(result.file_name)}",
                    "X-Checksum-SHA256": result.checksum,
                },
            )
