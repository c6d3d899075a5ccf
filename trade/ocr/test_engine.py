import asyncio
import threading
import time

import pytest

from trade.exceptions import EngineError
from trade.ocr import engine as engine_module
from trade.ocr.engine import EngineHandle


class DummyEngine:
    def recognize(self, image_bytes):
        return "text"


def test_concurrent_first_calls_share_one_initialization():
    created = []

    def factory():
        time.sleep(0.05)
        created.append(DummyEngine())
        return created[-1]

    handle = EngineHandle(factory)

    async def run():
        return await asyncio.gather(*(handle.get() for _ in range(5)))

    engines = asyncio.run(run())

    assert handle.initializations == 1
    assert len(created) == 1
    assert all(e is created[0] for e in engines)


def test_threads_racing_on_first_use_create_one_engine():
    handle = EngineHandle(lambda: time.sleep(0.05) or DummyEngine())
    results = []

    threads = [threading.Thread(target=lambda: results.append(handle.get_sync())) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert handle.initializations == 1
    assert len({id(r) for r in results}) == 1


def test_failed_initialization_is_retried_on_next_call():
    attempts = []

    def factory():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("model files missing")
        return DummyEngine()

    handle = EngineHandle(factory)

    with pytest.raises(EngineError, match="model files missing"):
        handle.get_sync()
    assert not handle.is_ready

    engine = handle.get_sync()

    assert isinstance(engine, DummyEngine)
    assert handle.initializations == 2
    assert handle.get_sync() is engine


def test_engine_errors_from_factory_pass_through_unchanged():
    error = EngineError("Tesseract OCR binary not found")

    def factory():
        raise error

    with pytest.raises(EngineError) as excinfo:
        EngineHandle(factory).get_sync()

    assert excinfo.value is error


def test_reset_recreates_engine():
    handle = EngineHandle(DummyEngine)
    first = handle.get_sync()

    handle.reset()
    second = handle.get_sync()

    assert first is not second
    assert handle.initializations == 2


def test_process_wide_handle_is_a_singleton(monkeypatch):
    monkeypatch.setattr(engine_module, "_engine_handle", None)

    assert engine_module.get_engine_handle() is engine_module.get_engine_handle()
