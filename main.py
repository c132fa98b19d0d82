"""
Demo: two pages on a QStackedWidget, wired with navigation extensions.

    python main.py
"""
import sys
from typing import Callable, Dict, List, Optional

from PySide6.QtWidgets import QLabel, QStackedWidget, QVBoxLayout
from loguru import logger

from navext.core.bootstrap import ApplicationBuilder, run_app
from navext.core.container import ContainerProvider
from navext.ui.elements import Button, Page
from navext.ui.markup import apply_extension
from navext.ui.navigation import (
    GoBackExtension,
    INavigationService,
    NavigateToExtension,
    NavigationParameters,
    NavigationResult,
)


class StackNavigationService(INavigationService):
    """Minimal page stack on a QStackedWidget. Each page gets its own container scope."""

    def __init__(self, host: QStackedWidget, root: ContainerProvider,
                 routes: Dict[str, Callable[[Page, NavigationParameters], None]]):
        self.host = host
        self.root = root
        self.routes = routes
        self._stack: List[Page] = []

    def push(self, name: str, parameters: Optional[NavigationParameters] = None) -> Page:
        scope = self.root.create_scope(name)
        scope.register_instance(INavigationService, self)
        page = Page(container=scope, title=name)
        self.routes[name](page, parameters or NavigationParameters())
        self.host.addWidget(page)
        self.host.setCurrentWidget(page)
        self._stack.append(page)
        return page

    async def navigate_async(self, name, parameters=None):
        if name not in self.routes:
            return NavigationResult.failed(KeyError(f"No page registered as '{name}'"))
        self.push(name, parameters)
        return NavigationResult.ok()

    async def go_back_async(self, parameters=None):
        if len(self._stack) < 2:
            return NavigationResult.failed(RuntimeError("Already at the root page"))
        page = self._stack.pop()
        self.host.removeWidget(page)
        page.deleteLater()
        self.host.setCurrentWidget(self._stack[-1])
        return NavigationResult.ok()

    async def go_back_to_root_async(self, parameters=None):
        while len(self._stack) > 1:
            await self.go_back_async(parameters)
        return NavigationResult.ok()


def build_catalog(page: Page, parameters: NavigationParameters) -> None:
    layout = QVBoxLayout(page)
    layout.addWidget(QLabel("Catalog"))
    for product_id in (1, 2, 3):
        button = Button(f"Product {product_id}", parent=page)
        apply_extension(button, "command", NavigateToExtension("Details"))
        button.command_parameter = {"id": product_id}
        layout.addWidget(button)


def build_details(page: Page, parameters: NavigationParameters) -> None:
    layout = QVBoxLayout(page)
    layout.addWidget(QLabel(f"Details of product {parameters.get('id')}"))
    back = Button("Back", parent=page)
    apply_extension(back, "command", GoBackExtension())
    layout.addWidget(back)


def create_window(root: ContainerProvider) -> QStackedWidget:
    host = QStackedWidget()
    host.setWindowTitle("navext demo")
    host.resize(320, 240)
    service = StackNavigationService(host, root, {"Catalog": build_catalog, "Details": build_details})
    service.push("Catalog")
    logger.info("Demo window ready")
    return host


if __name__ == "__main__":
    sys.exit(run_app(create_window, ApplicationBuilder("navext-demo").with_logging()))
