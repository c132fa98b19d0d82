"""
Bootstrap helpers for navext applications.

Simplifies application setup: configuration, logging, the root
container and the qasync event loop that lets navigation commands
run coroutines from Qt signal handlers.
"""
import sys
import asyncio
from typing import Callable, Optional

from PySide6.QtWidgets import QApplication, QWidget
from qasync import QEventLoop
from loguru import logger

from .config import ConfigManager
from .container import ContainerProvider
from .logging import LoggerFactory, setup_logging


class ApplicationBuilder:
    """
    Fluent builder for the root container.

    Example:
        root = (ApplicationBuilder("Shop", "config.json")
                .with_logging()
                .register_instance(INavigationService, service)
                .build())
    """

    def __init__(self, name: str = "navext", config_path: str = "config.json"):
        self.name = name
        self.config_path = config_path
        self._logging_configured = False
        self._registrations = []

    def with_logging(self, enable: bool = True):
        """
        Configure loguru sinks from the loaded config during build().

        Returns:
            Self for chaining
        """
        self._logging_configured = enable
        return self

    def register_instance(self, service_type: type, instance):
        self._registrations.append((service_type, instance))
        return self

    def build(self) -> ContainerProvider:
        """
        Load config, configure logging and create the root container.

        The root always provides ConfigManager and LoggerFactory.
        """
        config = ConfigManager(self.config_path)

        if self._logging_configured:
            setup_logging(config.data)
            logger.info(f"Starting {self.name}")

        root = ContainerProvider(name=self.name)
        root.register_instance(ConfigManager, config)
        root.register_instance(LoggerFactory, LoggerFactory(app=self.name))

        for service_type, instance in self._registrations:
            root.register_instance(service_type, instance)

        return root


def run_app(
    window_factory: Callable[[ContainerProvider], QWidget],
    builder: Optional[ApplicationBuilder] = None,
) -> int:
    """
    Run a Qt application on a qasync event loop.

    Navigation commands schedule their coroutines on the running asyncio
    loop; qasync makes the Qt event loop that loop.

    Args:
        window_factory: Builds the main window from the root container.
        builder: Optional pre-configured ApplicationBuilder.

    Returns:
        Process exit code.
    """
    if builder is None:
        builder = ApplicationBuilder().with_logging()

    app = QApplication.instance() or QApplication(sys.argv)
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    root = builder.build()
    window = window_factory(root)
    window.show()
    logger.info(f"{builder.name} started successfully")

    app_close_event = asyncio.Event()
    app.aboutToQuit.connect(app_close_event.set)

    with loop:
        loop.run_until_complete(app_close_event.wait())

    logger.info(f"{builder.name} stopped")
    return 0
