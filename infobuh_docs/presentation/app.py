import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..presentation.models import ErrorResponse
from ..presentation.route import DocumentTemplatesController
from ..infrastructure.factories.service_factory import ServiceFactory
from ..config import AppConfig, load_config


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    logger = logging.getLogger("app.lifespan")
    logger.info("Запуск приложения...")

    try:
        yield
    finally:
        # Shutdown
        logger.info("Завершение работы приложения...")
        service_factory: Optional[ServiceFactory] = getattr(app.state, "service_factory", None)
        if service_factory:
            await service_factory.shutdown()
        logger.info("Приложение остановлено")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ошибки разбора запроса (JSON, параметры) отдаются как 400"""
    fields = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "code": error.get("type", "invalid"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        content=ErrorResponse(
            error="ValidationError",
            message="Некорректный запрос",
            details={"fields": fields},
        ).model_dump(),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def create_app(config: AppConfig, service_factory: Optional[ServiceFactory] = None) -> FastAPI:
    """Создает и настраивает FastAPI приложение"""

    # Создаем фабрику сервисов
    if service_factory is None:
        service_factory = ServiceFactory(config)

    # Создаем FastAPI приложение
    app = FastAPI(
        lifespan=lifespan,
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
    )
    app.state.service_factory = service_factory

    # Настраиваем CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Создаем контроллер
    templates_controller = DocumentTemplatesController(
        generate_act_use_case=service_factory.create_generate_act_use_case(),
        renderer=service_factory.get_renderer(),
    )
    app.include_router(templates_controller.router)

    return app


def get_app() -> FastAPI:
    """Точка входа для uvicorn"""
    config = load_config()
    return create_app(config)


# Создаем приложение для uvicorn
app = get_app()
