import os
import asyncio

# Widgets are created in every UI test; no display is needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from loguru import logger
from PySide6.QtWidgets import QApplication

from navext.core.container import ContainerProvider
from navext.core.logging import LoggerFactory
from navext.ui.elements import Page
from navext.ui.navigation.result import NavigationResult
from navext.ui.navigation.service import INavigationService


@pytest.fixture(scope="session")
def qapp():
    """Ensure a QApplication exists for tests that create widgets."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def log_records():
    """Records of every loguru message emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)


class FakeNavigationService(INavigationService):
    """
    Records calls. ``result`` is returned, or raised when it is an exception.
    Set ``gate`` to an asyncio.Event to hold calls in flight.
    """

    def __init__(self, result=None):
        self.calls = []
        self.result = result if result is not None else NavigationResult.ok()
        self.gate = None

    async def _complete(self, call):
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result

    async def navigate_async(self, name, parameters=None):
        return await self._complete(("navigate", name, parameters))

    async def go_back_async(self, parameters=None):
        return await self._complete(("go_back", parameters))

    async def go_back_to_root_async(self, parameters=None):
        return await self._complete(("go_back_to_root", parameters))


@pytest.fixture
def navigation_service():
    return FakeNavigationService()


@pytest.fixture
def root_container():
    root = ContainerProvider(name="test")
    root.register_instance(LoggerFactory, LoggerFactory())
    return root


@pytest.fixture
def page(qapp, root_container, navigation_service):
    scope = root_container.create_scope("page")
    scope.register_instance(INavigationService, navigation_service)
    return Page(container=scope, title="Main")


@pytest.fixture
def wait_idle():
    """Let scheduled navigation tasks run until the command is idle again."""
    async def wait_until_idle(command, attempts: int = 100):
        for _ in range(attempts):
            if not command.is_navigating:
                return
            await asyncio.sleep(0)
        raise AssertionError("command still navigating")
    return wait_until_idle
