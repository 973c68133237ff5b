import logging
from typing import Optional

from ...application.services.act_assembler import ActAssembler
from ...application.use_case.generate_act import GenerateActUseCase
from ...domain.interfaces.database import IDatabase
from ...domain.interfaces.document_renderer import IDocumentRenderer
from ...domain.interfaces.document_storage import IDocumentStorage
from ...domain.interfaces.entity_lookup import IEntityLookup
from ..database.postgres import PostgresDatabase
from ..lookups.database_lookup import DatabaseEntityLookup
from ..pdf.rendering_service import PdfDocumentRenderer
from ..storage.local_storage import LocalDocumentStorage
from ...config import AppConfig


class ServiceFactory:
    """Фабрика для создания сервисов и их зависимостей"""

    def __init__(self, config: AppConfig, database: Optional[IDatabase] = None):
        self._config = config
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

        # Создаем инфраструктурные компоненты
        self._database = database or self._create_database()
        self._lookups = self._create_lookups()
        self._renderer = self._create_renderer()
        self._storage = self._create_storage()

        self._logger.info("ServiceFactory инициализирована")

    def _create_database(self) -> IDatabase:
        """Создает доступ к БД (пул открывается при первом запросе)"""
        return PostgresDatabase(
            conninfo=self._config.database.url,
            min_size=self._config.database.min_size,
            max_size=self._config.database.max_size,
        )

    def _create_lookups(self) -> IEntityLookup:
        return DatabaseEntityLookup(self._database)

    def _create_renderer(self) -> IDocumentRenderer:
        """Создает сервис рендеринга"""
        return PdfDocumentRenderer(font_file=self._config.rendering.font_file)

    def _create_storage(self) -> IDocumentStorage:
        return LocalDocumentStorage(self._config.storage.directory)

    def create_generate_act_use_case(self) -> GenerateActUseCase:
        """Создает use case для формирования акта"""
        return GenerateActUseCase(
            lookups=self._lookups,
            assembler=ActAssembler(
                currency=self._config.rendering.currency,
                vat_rate=self._config.rendering.vat_rate,
            ),
            renderer=self._renderer,
            storage=self._storage,
            default_timeout=self._config.pipeline.timeout_seconds,
        )

    def get_renderer(self) -> IDocumentRenderer:
        """Возвращает сервис рендеринга"""
        return self._renderer

    async def shutdown(self) -> None:
        """Корректно останавливает все сервисы"""
        self._logger.info("Остановка всех сервисов...")

        close = getattr(self._database, "close", None)
        if close is not None:
            try:
                await close()
            except Exception as e:
                self._logger.error(f"Ошибка при закрытии пула соединений: {e}")

        self._logger.info("Все сервисы остановлены")
