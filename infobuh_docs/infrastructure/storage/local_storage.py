import asyncio
import hashlib
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Optional

from ...domain.exceptions.document_exceptions import StorageError
from ...domain.interfaces.document_storage import IDocumentStorage, StoredDocument

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


def safe_file_name(name: str) -> str:
    """Заменяет символы, недопустимые в имени файла, на '_'"""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not cleaned:
        raise ValueError("Пустое имя файла")
    return cleaned


class LocalDocumentStorage(IDocumentStorage):
    """Хранилище документов в локальном каталоге"""

    def __init__(self, directory: str):
        self._directory = Path(directory)
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    async def save(self, file_name: str, content: bytes) -> StoredDocument:
        name = safe_file_name(file_name)
        cancelled = threading.Event()
        write = asyncio.ensure_future(asyncio.to_thread(self._write, name, content, cancelled))
        try:
            path = await asyncio.shield(write)
        except asyncio.CancelledError:
            # поток записи не прерывается: дожидаемся его и убираем результат
            cancelled.set()
            await self._discard(name, write)
            raise
        except OSError as e:
            self._logger.exception(f"Ошибка при сохранении документа {name}")
            raise StorageError(name, str(e)) from e

        stored = StoredDocument(
            file_name=name,
            path=str(path),
            size=len(content),
            checksum=hashlib.sha256(content).hexdigest(),
        )
        self._logger.info(f"Документ сохранен: {stored.path} ({stored.size} байт)")
        return stored

    async def _discard(self, name: str, write: "asyncio.Future[Optional[Path]]") -> None:
        try:
            path = await write
        except OSError as e:
            self._logger.warning(f"Отмененная запись документа {name} завершилась ошибкой: {e}")
            return
        if path is not None:
            path.unlink(missing_ok=True)
        self._logger.warning(f"Сохранение документа {name} отменено")

    def _write(self, name: str, content: bytes, cancelled: threading.Event) -> Optional[Path]:
        """Записывает файл; None, если сохранение отменено до замены файла"""
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / name

        # запись во временный файл и атомарная замена
        fd, tmp_path = tempfile.mkstemp(dir=self._directory, prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            if cancelled.is_set():
                os.unlink(tmp_path)
                return None
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        return target
