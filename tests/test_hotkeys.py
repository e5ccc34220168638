"""
Tests for the combo parser, the default binding table and hotkey
registration.
"""

from unittest.mock import MagicMock

import pytest

from stackwm.config.hotkeys import (
    MOD_ALT,
    MOD_CONTROL,
    MOD_NOREPEAT,
    MOD_SHIFT,
    MOD_WIN,
    Binding,
    ComboParseError,
    default_bindings,
    parse_combo,
    register_all_hotkeys,
)
from stackwm.config.settings import DEFAULT_WORKSPACES
from stackwm.core.commands import CommandDispatcher


class TestParseCombo:
    @pytest.mark.parametrize(
        "combo, expected",
        [
            ("alt+h", (MOD_ALT, 0x48)),
            ("alt+shift+h", (MOD_ALT | MOD_SHIFT, 0x48)),
            ("Ctrl+Win+F5", (MOD_CONTROL | MOD_WIN, 0x74)),
            ("alt + space", (MOD_ALT, 0x20)),
            ("alt+u", (MOD_ALT, 0x55)),
            ("alt+7", (MOD_ALT, 0x37)),
            ("alt+backquote", (MOD_ALT, 0xC0)),
            ("option+shift+`", (MOD_ALT | MOD_SHIFT, 0xC0)),
            ("return", (0, 0x0D)),
        ],
    )
    def test_valid(self, combo, expected):
        assert parse_combo(combo) == expected

    @pytest.mark.parametrize(
        "combo, message",
        [
            ("", "Empty"),
            ("   ", "Empty"),
            ("alt+shift", "No key"),
            ("alt+h+j", "Multiple key"),
            ("alt+alt+h", "Duplicate modifier"),
            ("hyper+h", "Unknown key"),
        ],
    )
    def test_invalid(self, combo, message):
        with pytest.raises(ComboParseError, match=message):
            parse_combo(combo)

    def test_error_is_value_error(self):
        assert issubclass(ComboParseError, ValueError)


class TestDefaultBindings:
    def test_every_combo_parses(self):
        for binding in default_bindings(DEFAULT_WORKSPACES):
            parse_combo(binding.combo)

    def test_combos_are_unique(self):
        combos = [parse_combo(b.combo) for b in default_bindings(DEFAULT_WORKSPACES)]
        assert len(combos) == len(set(combos))

    def test_workspace_bindings(self):
        bindings = {b.combo: b.command for b in default_bindings(("U", "7"))}

        assert bindings["alt+u"] == "switch_workspace_U"
        assert bindings["alt+shift+u"] == "send_to_workspace_U"
        assert bindings["alt+7"] == "switch_workspace_7"

    def test_fixed_bindings(self):
        bindings = {b.combo: b.command for b in default_bindings(("U",))}

        assert bindings["alt+h"] == "focus_left"
        assert bindings["alt+shift+k"] == "move_window_up"
        assert bindings["alt+w"] == "close_window"
        assert bindings["alt+space"] == "toggle_float"
        assert bindings["alt+e"] == "toggle_enlarge"
        assert bindings["alt+backquote"] == "switcher_next"
        assert bindings["alt+shift+backquote"] == "switcher_previous"
        assert bindings["alt+shift+q"] == "quit_wm"


class TestRegisterAllHotkeys:
    def test_registers_known_commands(self):
        dispatcher = CommandDispatcher()
        action = MagicMock()
        dispatcher.register("toggle_float", action)
        hk_manager = MagicMock()
        hk_manager.register.return_value = 1

        count = register_all_hotkeys(
            hk_manager,
            dispatcher,
            [Binding("alt+space", "toggle_float", "Toggle floating")],
        )

        assert count == 1
        modifiers, vk, callback, description = hk_manager.register.call_args.args
        assert modifiers == MOD_ALT | MOD_NOREPEAT
        assert vk == 0x20
        assert description == "Toggle floating"

        callback()
        action.assert_called_once_with()

    def test_skips_unknown_command_and_bad_combo(self):
        dispatcher = CommandDispatcher()
        dispatcher.register("toggle_float", MagicMock())
        hk_manager = MagicMock()
        hk_manager.register.return_value = 1

        count = register_all_hotkeys(
            hk_manager,
            dispatcher,
            [
                Binding("alt+x", "does_not_exist"),
                Binding("alt+nope", "toggle_float"),
            ],
        )

        assert count == 0
        hk_manager.register.assert_not_called()

    def test_os_refusal_is_not_counted(self):
        dispatcher = CommandDispatcher()
        dispatcher.register("toggle_float", MagicMock())
        hk_manager = MagicMock()
        hk_manager.register.return_value = None

        count = register_all_hotkeys(
            hk_manager, dispatcher, [Binding("alt+space", "toggle_float")]
        )

        assert count == 0

    def test_callbacks_bind_their_own_command(self):
        dispatcher = CommandDispatcher()
        first, second = MagicMock(), MagicMock()
        dispatcher.register("one", first)
        dispatcher.register("two", second)
        hk_manager = MagicMock()
        hk_manager.register.return_value = 1

        register_all_hotkeys(
            hk_manager,
            dispatcher,
            [Binding("alt+1", "one"), Binding("alt+2", "two")],
        )
        callbacks = [c.args[2] for c in hk_manager.register.call_args_list]
        callbacks[0]()

        first.assert_called_once_with()
        second.assert_not_called()
