"""
Tests for bindable elements: binding context inheritance, page lookup,
the one-shot attachment listener and command buttons.
"""
from unittest.mock import MagicMock
from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtWidgets import QWidget

from navext.ui.elements import (
    Button,
    Element,
    ElementParentedCallbackBehavior,
    Page,
    find_parent_page,
)


class ProductViewModel:
    def __init__(self, name):
        self.name = name


class FakeCommand(QObject):
    canExecuteChanged = Signal()

    def __init__(self):
        super().__init__()
        self.enabled = True
        self.executed = []

    def can_execute(self, parameter=None):
        return self.enabled

    def execute(self, parameter=None):
        self.executed.append(parameter)


class TestBindingContext:

    def test_inherited_from_page(self, qapp):
        page = Page()
        vm = ProductViewModel("shoes")
        page.binding_context = vm

        element = Element(page)

        assert element.binding_context is vm

    def test_inherited_through_plain_widgets(self, qapp):
        page = Page()
        vm = ProductViewModel("shoes")
        page.binding_context = vm
        plain = QWidget(page)

        element = Element(plain)

        assert element.parent_element() is page
        assert element.binding_context is vm

    def test_local_value_overrides_and_clear_restores(self, qapp):
        page = Page()
        page_vm = ProductViewModel("page")
        local_vm = ProductViewModel("local")
        page.binding_context = page_vm
        element = Element(page)

        element.binding_context = local_vm
        assert element.binding_context is local_vm

        element.clear_binding_context()
        assert element.binding_context is page_vm

    def test_explicit_none_does_not_inherit(self, qapp):
        page = Page()
        page.binding_context = ProductViewModel("page")
        element = Element(page)

        element.binding_context = None

        assert element.binding_context is None

    def test_ancestor_change_notifies_descendants(self, qapp):
        page = Page()
        element = Element(QWidget(page))
        callback = MagicMock()
        element.bindingContextChanged.connect(callback)

        vm = ProductViewModel("shoes")
        page.binding_context = vm

        callback.assert_called_once_with(vm)

    def test_no_notification_when_effective_value_is_unchanged(self, qapp):
        page = Page()
        vm = ProductViewModel("shoes")
        page.binding_context = vm
        element = Element(page)
        callback = MagicMock()
        element.bindingContextChanged.connect(callback)

        element.binding_context = vm
        page.binding_context = vm

        callback.assert_not_called()

    def test_reparenting_notifies(self, qapp):
        page = Page()
        vm = ProductViewModel("shoes")
        page.binding_context = vm
        element = Element()
        callback = MagicMock()
        element.bindingContextChanged.connect(callback)

        element.setParent(page)

        callback.assert_called_once_with(vm)
        assert element.binding_context is vm

    def test_reparenting_container_notifies_nested_elements(self, qapp):
        page = Page()
        vm = ProductViewModel("shoes")
        page.binding_context = vm
        container = Element()
        element = Element(container)
        callback = MagicMock()
        element.bindingContextChanged.connect(callback)

        container.setParent(page)

        callback.assert_called_once_with(vm)


class TestFindParentPage:

    def test_page_is_its_own_page(self, qapp):
        page = Page()
        assert find_parent_page(page) is page

    def test_nested_element(self, qapp):
        page = Page()
        element = Element(QWidget(Element(page)))
        assert find_parent_page(element) is page

    def test_detached_element(self, qapp):
        assert find_parent_page(Element(QWidget())) is None
        assert find_parent_page(None) is None


class TestNavigationParameters:

    def test_inherited_from_ancestor(self, qapp):
        page = Page()
        page.navigation_parameters = {"source": "home"}
        element = Element(QWidget(page))

        assert element.navigation_parameters == {"source": "home"}

    def test_local_value_wins(self, qapp):
        page = Page()
        page.navigation_parameters = {"source": "home"}
        element = Element(page)
        element.navigation_parameters = {"source": "card"}

        assert element.navigation_parameters == {"source": "card"}

    def test_default_is_none(self, qapp):
        assert Element().navigation_parameters is None


class TestElementParentedCallbackBehavior:

    def test_fires_once_on_direct_attachment(self, qapp):
        page = Page()
        element = Element()
        callback = MagicMock()
        behavior = ElementParentedCallbackBehavior(callback)
        element.behaviors.add(behavior)

        element.setParent(page)

        callback.assert_called_once_with()
        assert behavior.fired
        assert behavior not in element.behaviors
        assert behavior.associated_object is None

    def test_does_not_fire_again(self, qapp):
        page = Page()
        other_page = Page()
        element = Element()
        callback = MagicMock()
        element.behaviors.add(ElementParentedCallbackBehavior(callback))

        element.setParent(page)
        element.setParent(None)
        element.setParent(other_page)

        assert callback.call_count == 1

    def test_fires_when_container_is_attached(self, qapp):
        page = Page()
        container = QWidget()
        element = Element(container)
        callback = MagicMock()
        element.behaviors.add(ElementParentedCallbackBehavior(callback))

        container.setParent(page)

        callback.assert_called_once_with()

    def test_follows_intermediate_roots(self, qapp):
        page = Page()
        outer = QWidget()
        inner = QWidget()
        element = Element(inner)
        callback = MagicMock()
        element.behaviors.add(ElementParentedCallbackBehavior(callback))

        inner.setParent(outer)
        callback.assert_not_called()

        outer.setParent(page)
        callback.assert_called_once_with()

    def test_page_known_when_callback_runs(self, qapp):
        page = Page()
        element = Element()
        seen = []
        element.behaviors.add(ElementParentedCallbackBehavior(lambda: seen.append(find_parent_page(element))))

        element.setParent(page)

        assert seen == [page]

    def test_removed_listener_never_fires(self, qapp):
        page = Page()
        element = Element()
        callback = MagicMock()
        behavior = ElementParentedCallbackBehavior(callback)
        element.behaviors.add(behavior)

        element.behaviors.remove(behavior)
        element.setParent(page)

        callback.assert_not_called()
        assert not behavior.fired

    def test_fires_when_moved_out_of_container_onto_page(self, qapp):
        page = Page()
        container = QWidget()
        element = Element(container)
        callback = MagicMock()
        behavior = ElementParentedCallbackBehavior(callback)
        element.behaviors.add(behavior)

        element.setParent(page)

        callback.assert_called_once_with()
        assert behavior.watched_count == 0

    def test_fires_when_middle_ancestor_is_attached(self, qapp):
        page = Page()
        outer = QWidget()
        inner = Element(outer)
        element = Element(inner)
        callback = MagicMock()
        element.behaviors.add(ElementParentedCallbackBehavior(callback))

        inner.setParent(page)

        callback.assert_called_once_with()

    def test_rearms_when_moved_between_off_page_containers(self, qapp):
        page = Page()
        first = QWidget()
        second = QWidget()
        element = Element(first)
        callback = MagicMock()
        behavior = ElementParentedCallbackBehavior(callback)
        element.behaviors.add(behavior)
        assert behavior.watched_count == 2

        element.setParent(second)
        first.setParent(page)
        callback.assert_not_called()

        second.setParent(page)
        callback.assert_called_once_with()


class TestButton:

    def test_enabled_follows_command(self, qapp):
        command = FakeCommand()
        command.enabled = False
        button = Button("Details")

        button.command = command
        assert not button.isEnabled()

        command.enabled = True
        command.canExecuteChanged.emit()
        assert button.isEnabled()

    def test_click_passes_command_parameter(self, qtbot):
        command = FakeCommand()
        button = Button("Details")
        qtbot.addWidget(button)
        button.show()
        button.command = command
        button.command_parameter = {"id": 42}

        qtbot.mouseClick(button, Qt.MouseButton.LeftButton)

        assert command.executed == [{"id": 42}]

    def test_replacing_command_detaches_previous(self, qapp):
        first = FakeCommand()
        second = FakeCommand()
        button = Button()
        button.command = first
        button.command = second

        button.click()

        assert first.executed == []
        assert second.executed == [None]

    def test_clearing_command_reenables(self, qapp):
        command = FakeCommand()
        command.enabled = False
        button = Button()
        button.command = command

        button.command = None

        assert button.isEnabled()
