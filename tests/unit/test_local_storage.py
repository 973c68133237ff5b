"""Тестирование локального хранилища документов"""

import asyncio
import hashlib
import threading
import time

import pytest

from infobuh_docs.domain.exceptions import StorageError
from infobuh_docs.infrastructure.storage.local_storage import LocalDocumentStorage, safe_file_name


class TestSafeFileName:
    """Очистка имени файла"""

    @pytest.mark.parametrize("name, expected", [
        ("act-S1-C1-A-100.pdf", "act-S1-C1-A-100.pdf"),
        ("act-S1-C1-A/100.pdf", "act-S1-C1-A_100.pdf"),
        ("../../etc/passwd", "etc_passwd"),
        ("акт 5.pdf", "акт_5.pdf"),
    ])
    def test_names(self, name, expected):
        assert safe_file_name(name) == expected

    def test_empty_name(self):
        with pytest.raises(ValueError):
            safe_file_name("///")


class TestLocalDocumentStorage:
    """Сохранение документов"""

    def test_save(self, tmp_path):
        storage = LocalDocumentStorage(str(tmp_path / "documents"))
        content = b"%PDF-1.7 test"

        stored = asyncio.run(storage.save("act-S1-C1-A-100.pdf", content))

        assert stored.file_name == "act-S1-C1-A-100.pdf"
        assert stored.size == len(content)
        assert stored.checksum == hashlib.sha256(content).hexdigest()
        saved = tmp_path / "documents" / "act-S1-C1-A-100.pdf"
        assert saved.read_bytes() == content
        assert stored.path == str(saved)

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = LocalDocumentStorage(str(tmp_path))

        asyncio.run(storage.save("act.pdf", b"first"))
        asyncio.run(storage.save("act.pdf", b"second"))

        assert [p.name for p in tmp_path.iterdir()] == ["act.pdf"]
        assert (tmp_path / "act.pdf").read_bytes() == b"second"

    def test_write_failure_is_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_bytes(b"")
        storage = LocalDocumentStorage(str(blocker))

        with pytest.raises(StorageError):
            asyncio.run(storage.save("act.pdf", b"content"))


class SlowStorage(LocalDocumentStorage):
    def _write(self, name: str, content: bytes, cancelled: threading.Event):
        time.sleep(0.3)
        return super()._write(name, content, cancelled)


def stored_files(directory):
    return [p for p in directory.rglob("*") if p.is_file()]


class TestCancelledSave:
    """Отмена сохранения по истечении срока"""

    def test_timeout_leaves_no_file(self, tmp_path):
        storage = SlowStorage(str(tmp_path / "documents"))

        async def save_with_deadline():
            await asyncio.wait_for(storage.save("act.pdf", b"content"), timeout=0.05)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(save_with_deadline())

        assert stored_files(tmp_path) == []

    def test_cancelled_write_keeps_previous_version(self, tmp_path):
        storage = LocalDocumentStorage(str(tmp_path))
        asyncio.run(storage.save("act.pdf", b"first"))
        cancelled = threading.Event()
        cancelled.set()

        assert storage._write("act.pdf", b"second", cancelled) is None
        assert [p.name for p in tmp_path.iterdir()] == ["act.pdf"]
        assert (tmp_path / "act.pdf").read_bytes() == b"first"
