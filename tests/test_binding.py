"""
Unit Tests for WPF-Style Data Binding System.

Tests for:
- BindableProperty descriptor
- BindableObject binding slots
- bind() / Binding.detach()
- bind_command()
"""
import pytest
from unittest.mock import MagicMock
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QPushButton

from navext.ui.mvvm.bindable import BindableObject, BindableProperty
from navext.ui.mvvm.binding import BindingMode, bind, bind_command


class ProductViewModel(BindableObject):
    titleChanged = Signal(object)
    title = BindableProperty(default="")
    count = BindableProperty(default=0, coerce=lambda x: max(0, int(x)))


class Sink(BindableObject):
    titleChanged = Signal(object)
    title = BindableProperty(default=None)


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


# =============================================================================
# BindableProperty Tests
# =============================================================================

class TestBindableProperty:
    """Tests for BindableProperty descriptor."""

    def test_default_value(self, qapp):
        vm = ProductViewModel()
        assert vm.title == ""

    def test_emits_property_changed(self, qapp):
        vm = ProductViewModel()
        callback = MagicMock()
        vm.propertyChanged.connect(callback)

        vm.title = "Shoes"

        callback.assert_called_once_with("title", "Shoes")

    def test_emits_specific_signal(self, qapp):
        vm = ProductViewModel()
        callback = MagicMock()
        vm.titleChanged.connect(callback)

        vm.title = "Boots"

        callback.assert_called_once_with("Boots")

    def test_no_emit_on_same_value(self, qapp):
        vm = ProductViewModel()
        callback = MagicMock()
        vm.propertyChanged.connect(callback)

        vm.title = ""

        callback.assert_not_called()

    def test_coerce_function(self, qapp):
        vm = ProductViewModel()
        vm.count = -5
        assert vm.count == 0

        vm.count = "25"
        assert vm.count == 25

    def test_identity_comparison_for_binding_context(self, qapp):
        """Equal but distinct contexts still count as a change."""
        obj = BindableObject()
        callback = MagicMock()
        obj.bindingContextChanged.connect(callback)

        first = {"id": 1}
        obj.binding_context = first
        obj.binding_context = {"id": 1}
        obj.binding_context = obj.binding_context

        assert callback.call_count == 2

    def test_on_property_changed_hook(self, qapp):
        seen = []

        class Hooked(BindableObject):
            title = BindableProperty(default="")

            def on_property_changed(self, property_name, value):
                seen.append((property_name, value))
                super().on_property_changed(property_name, value)

        Hooked().title = "x"

        assert seen == [("title", "x")]


# =============================================================================
# bind() Function Tests
# =============================================================================

class TestBindFunction:
    """Tests for bind() helper function."""

    def test_one_way_binding_initial_sync_and_updates(self, qapp):
        vm = ProductViewModel()
        vm.title = "Initial"
        sink = Sink()

        bind(vm, "title", sink, "title", mode=BindingMode.ONE_WAY)
        assert sink.title == "Initial"

        vm.title = "Hello"
        assert sink.title == "Hello"

    def test_one_way_does_not_write_back(self, qapp):
        vm = ProductViewModel()
        sink = Sink()
        bind(vm, "title", sink, "title")

        sink.title = "local"

        assert vm.title == ""

    def test_one_time_binding(self, qapp):
        vm = ProductViewModel()
        vm.title = "Initial"
        sink = Sink()

        binding = bind(vm, "title", sink, "title", mode=BindingMode.ONE_TIME)
        vm.title = "Updated"

        assert sink.title == "Initial"
        assert not binding.is_attached

    def test_two_way_binding(self, qapp):
        vm = ProductViewModel()
        sink = Sink()

        bind(vm, "title", sink, "title", mode=BindingMode.TWO_WAY)

        vm.title = "From VM"
        assert sink.title == "From VM"

        sink.title = "From Sink"
        assert vm.title == "From Sink"

    def test_converter(self, qapp):
        vm = ProductViewModel()
        sink = Sink()

        bind(vm, "title", sink, "title", converter=lambda x: f"Title: {x}")

        vm.title = "Hat"
        assert sink.title == "Title: Hat"

    def test_detach_stops_updates(self, qapp):
        vm = ProductViewModel()
        sink = Sink()
        binding = bind(vm, "title", sink, "title")

        binding.detach()
        binding.detach()
        vm.title = "ignored"

        assert sink.title == ""
        assert binding.source is vm

    def test_qt_setter_is_used_for_widgets(self, qapp):
        vm = ProductViewModel()
        vm.title = "Buy"
        button = QPushButton()

        bind(vm, "title", button, "text")
        assert button.text() == "Buy"

        vm.title = "Sold out"
        assert button.text() == "Sold out"


class TestBindingSlots:
    """Tests for BindableObject.set_binding()."""

    def test_set_binding_replaces_previous(self, qapp):
        first = ProductViewModel()
        second = ProductViewModel()
        first.title = "first"
        second.title = "second"
        sink = Sink()

        sink.set_binding("title", first, "title")
        assert sink.title == "first"

        sink.set_binding("title", second, "title")
        assert sink.title == "second"

        first.title = "stale"
        assert sink.title == "second"

        second.title = "fresh"
        assert sink.title == "fresh"
        assert sink.get_binding("title").source is second

    def test_clear_binding(self, qapp):
        vm = ProductViewModel()
        sink = Sink()
        sink.set_binding("title", vm, "title")

        sink.clear_binding("title")
        vm.title = "ignored"

        assert sink.title == ""
        assert sink.get_binding("title") is None


# =============================================================================
# bind_command() Tests
# =============================================================================

class TestBindCommand:
    """Tests for bind_command() function."""

    def test_click_executes_with_parameter(self, qapp):
        command = FakeCommand()
        button = QPushButton()

        bind_command(command, button, parameter=lambda: {"id": 7})
        button.click()

        assert command.executed == [{"id": 7}]

    def test_enabled_state_follows_can_execute(self, qapp):
        command = FakeCommand()
        command.enabled = False
        button = QPushButton()

        bind_command(command, button)
        assert not button.isEnabled()

        command.enabled = True
        command.canExecuteChanged.emit()
        assert button.isEnabled()

    def test_disabled_command_is_not_executed(self, qapp):
        command = FakeCommand()
        button = QPushButton()
        bind_command(command, button)

        command.enabled = False
        button.clicked.emit(False)

        assert command.executed == []

    def test_detach(self, qapp):
        command = FakeCommand()
        button = QPushButton()
        binding = bind_command(command, button)

        binding.detach()
        button.click()

        assert command.executed == []

    def test_missing_signal_raises(self, qapp):
        with pytest.raises(ValueError):
            bind_command(FakeCommand(), QPushButton(), "tapped")
