import unittest
from unittest.mock import MagicMock
import curses
import sys
import os
from pathlib import Path

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from deskforge_app.errors import FormInvariantError, PersistenceError
from deskforge_app.fields import CATEGORY_OPTIONS, TYPE_OPTIONS, FieldId
from deskforge_app.form import handle_key, normalize_key, save_form
from deskforge_app.state import Dropdown, FormState, Mode, PendingSequence, form_from_record


class FakeProbe:
    def __init__(self, files=(), executables=()):
        self.executables = set(executables)
        self.files = set(files) | self.executables

    def exists(self, path):
        return path in self.files

    def is_executable(self, path):
        return path in self.executables


APPS = Path("/apps")
ESC = 27
ENTER = 10


class FormTestCase(unittest.TestCase):

    def setUp(self):
        self.state = FormState(applications_dir=APPS)
        self.probe = FakeProbe(executables={"/usr/bin/foo"})
        self.persist = MagicMock()

    def press(self, *keys):
        for key in keys:
            handle_key(self.state, normalize_key(key), self.probe, self.persist)
        return self.state

    def type_text(self, text):
        self.press(*text)


class TestNavigation(FormTestCase):

    def test_down_clamps_at_cancel_from_every_start(self):
        for start in FieldId:
            self.state.focus = start
            previous = start
            for _ in range(len(FieldId) + 3):
                self.press("j")
                self.assertGreaterEqual(self.state.focus, previous)
                previous = self.state.focus
            self.assertEqual(self.state.focus, FieldId.CANCEL)

    def test_up_clamps_at_name_from_every_start(self):
        for start in FieldId:
            self.state.focus = start
            previous = start
            for _ in range(len(FieldId) + 3):
                self.press("k")
                self.assertLessEqual(self.state.focus, previous)
                previous = self.state.focus
            self.assertEqual(self.state.focus, FieldId.NAME)

    def test_arrow_keys_move_like_j_and_k(self):
        self.press(curses.KEY_DOWN, curses.KEY_DOWN)
        self.assertEqual(self.state.focus, FieldId.ICON)
        self.press(curses.KEY_UP)
        self.assertEqual(self.state.focus, FieldId.EXEC)

    def test_gg_jumps_to_name(self):
        self.state.focus = FieldId.COMMENT
        self.press("g")
        self.assertEqual(self.state.pending, PendingSequence.AWAITING_SECOND_G)
        self.press("g")
        self.assertEqual(self.state.focus, FieldId.NAME)
        self.assertEqual(self.state.pending, PendingSequence.IDLE)

        self.press("x")
        self.assertEqual(self.state.focus, FieldId.NAME)

    def test_interrupted_g_sequence_does_not_jump(self):
        self.state.focus = FieldId.VERSION
        self.press("g", "j", "g")
        self.assertEqual(self.state.focus, FieldId.COMMENT)
        self.assertEqual(self.state.pending, PendingSequence.AWAITING_SECOND_G)

    def test_shift_g_jumps_to_save(self):
        self.press("G")
        self.assertEqual(self.state.focus, FieldId.SAVE)
        self.state.focus = FieldId.CANCEL
        self.press("G")
        self.assertEqual(self.state.focus, FieldId.SAVE)

    def test_unknown_key_clears_pending_sequence(self):
        self.press("d", "z")
        self.assertEqual(self.state.pending, PendingSequence.IDLE)


class TestNormalCommands(FormTestCase):

    def test_dd_clears_focused_field(self):
        self.state.set_text(FieldId.NAME, "Foo")
        self.press("d", "d")
        self.assertEqual(self.state.name, "")

    def test_d_then_other_key_keeps_text(self):
        self.state.set_text(FieldId.NAME, "Foo")
        self.press("d", "x", "d")
        self.assertEqual(self.state.name, "Foo")

    def test_dd_on_choice_row_keeps_value(self):
        self.state.focus = FieldId.TYPE
        self.press("d", "d")
        self.assertEqual(self.state.type_value, "Application")

    def test_quit_keys(self):
        self.press("q")
        self.assertTrue(self.state.exit)

        self.state = FormState(applications_dir=APPS)
        self.press(3)  # Ctrl+C
        self.assertTrue(self.state.exit)
        self.persist.assert_not_called()

    def test_activate_toggle_flips_and_advances(self):
        self.state.focus = FieldId.NO_DISPLAY
        self.press("i")
        self.assertTrue(self.state.toggles[FieldId.NO_DISPLAY])
        self.assertEqual(self.state.focus, FieldId.STARTUP_NOTIFY)
        self.assertEqual(self.state.mode, Mode.NORMAL)

        self.press(ENTER)
        self.assertFalse(self.state.toggles[FieldId.STARTUP_NOTIFY])
        self.assertEqual(self.state.focus, FieldId.TERMINAL)

    def test_activate_text_row_enters_insert(self):
        self.state.focus = FieldId.ICON
        self.press("i")
        self.assertEqual(self.state.mode, Mode.INSERT)
        self.assertEqual(self.state.focus, FieldId.ICON)
        self.assertIsNone(self.state.dropdown)

    def test_cancel_exits_without_saving(self):
        self.state.set_text(FieldId.NAME, "Foo")
        self.state.focus = FieldId.CANCEL
        self.press("i")
        self.assertTrue(self.state.exit)
        self.persist.assert_not_called()


class TestInsertMode(FormTestCase):

    def test_typing_and_escape_preserves_text(self):
        self.press("i")
        self.type_text("Foo bar")
        self.assertEqual(self.state.name, "Foo bar")
        self.press(ESC)
        self.assertEqual(self.state.mode, Mode.NORMAL)
        self.assertEqual(self.state.name, "Foo bar")

    def test_unicode_text_in_comment(self):
        self.state.focus = FieldId.COMMENT
        self.press("i")
        self.type_text("Café ñandú")
        self.assertEqual(self.state.text(FieldId.COMMENT), "Café ñandú")
        self.press(ENTER)
        self.assertEqual(self.state.mode, Mode.NORMAL)

    def test_unicode_characters_do_nothing_in_normal_mode(self):
        self.press("d", "é")
        self.assertEqual(self.state.pending, PendingSequence.IDLE)
        self.assertEqual(self.state.focus, FieldId.NAME)
        self.assertEqual(self.state.name, "")

    def test_normalize_key(self):
        self.assertEqual(normalize_key("j"), ord("j"))
        self.assertEqual(normalize_key("\n"), 10)
        self.assertEqual(normalize_key("\x1b"), 27)
        self.assertEqual(normalize_key("\x03"), 3)
        self.assertEqual(normalize_key("é"), "é")
        self.assertEqual(normalize_key(curses.KEY_DOWN), curses.KEY_DOWN)

    def test_navigation_letters_are_text_in_insert_mode(self):
        self.press("i")
        self.type_text("jkqgG")
        self.assertEqual(self.state.name, "jkqgG")
        self.assertFalse(self.state.exit)
        self.assertEqual(self.state.focus, FieldId.NAME)

    def test_enter_advances_and_stays_in_insert(self):
        self.press("i", ENTER)
        self.assertEqual(self.state.focus, FieldId.EXEC)
        self.assertEqual(self.state.mode, Mode.INSERT)

    def test_enter_on_comment_returns_to_normal(self):
        self.state.focus = FieldId.COMMENT
        self.press("i", ENTER)
        self.assertEqual(self.state.focus, FieldId.ACTION)
        self.assertEqual(self.state.mode, Mode.NORMAL)

    def test_enter_on_checkbox_rows_flips_them(self):
        self.state.focus = FieldId.ACTION
        self.press("i", ENTER)
        self.assertEqual(self.state.focus, FieldId.NO_DISPLAY)
        self.assertFalse(self.state.toggles[FieldId.NO_DISPLAY])

        self.press(ENTER)
        self.assertTrue(self.state.toggles[FieldId.NO_DISPLAY])
        self.press(ENTER)
        self.assertFalse(self.state.toggles[FieldId.STARTUP_NOTIFY])
        self.press(ENTER)
        self.assertTrue(self.state.toggles[FieldId.TERMINAL])
        self.assertEqual(self.state.focus, FieldId.TYPE)
        self.assertEqual(self.state.mode, Mode.INSERT)

    def test_enter_on_choice_row_without_dropdown_is_noop(self):
        self.state.focus = FieldId.TERMINAL
        self.state.mode = Mode.INSERT
        self.press(ENTER)
        self.assertEqual(self.state.focus, FieldId.TYPE)
        self.press(ENTER, "x")
        self.assertEqual(self.state.focus, FieldId.TYPE)
        self.assertEqual(self.state.type_value, "Application")
        self.assertEqual(self.state.mode, Mode.INSERT)

    def test_checkbox_rows_ignore_typed_text(self):
        self.state.focus = FieldId.TERMINAL
        self.state.mode = Mode.INSERT
        self.press("a")
        self.assertFalse(self.state.toggles[FieldId.TERMINAL])


class TestDropdown(FormTestCase):

    def test_open_type_dropdown(self):
        self.state.focus = FieldId.TYPE
        self.press("i")
        self.assertEqual(self.state.mode, Mode.INSERT)
        self.assertEqual(self.state.dropdown.target, FieldId.TYPE)
        self.assertEqual(self.state.dropdown.options, TYPE_OPTIONS)
        self.assertEqual(self.state.dropdown.highlighted, 0)

    def test_down_wraps_around(self):
        self.state.focus = FieldId.TYPE
        self.press("i")
        for _ in TYPE_OPTIONS:
            self.press("j")
        self.assertEqual(self.state.dropdown.highlighted, 0)

    def test_up_clamps_at_first_option(self):
        self.state.focus = FieldId.CATEGORY
        self.press("i", "k", curses.KEY_UP)
        self.assertEqual(self.state.dropdown.highlighted, 0)
        self.assertEqual(self.state.dropdown.options, CATEGORY_OPTIONS)

    def test_scrolling_only_previews(self):
        self.state.focus = FieldId.TYPE
        self.press("i", "j", curses.KEY_DOWN)
        self.assertEqual(self.state.display_text(FieldId.TYPE), "Link")
        self.assertEqual(self.state.type_value, "Application")

    def test_confirm_commits_and_advances(self):
        self.state.focus = FieldId.TYPE
        self.press("i", "j", "j", ENTER)
        self.assertEqual(self.state.type_value, "Link")
        self.assertIsNone(self.state.dropdown)
        self.assertEqual(self.state.mode, Mode.NORMAL)
        self.assertEqual(self.state.focus, FieldId.CATEGORY)

    def test_confirm_with_i(self):
        self.state.focus = FieldId.CATEGORY
        self.press("i", "j", "j", "i")
        self.assertEqual(self.state.category, "Video")
        self.assertEqual(self.state.focus, FieldId.SAVE)
        self.assertEqual(self.state.mode, Mode.NORMAL)
        self.persist.assert_not_called()

    def test_escape_discards_preview(self):
        self.state.focus = FieldId.TYPE
        self.press("i", "j", "j", ESC)
        self.assertEqual(self.state.type_value, "Application")
        self.assertIsNone(self.state.dropdown)
        self.assertEqual(self.state.mode, Mode.NORMAL)
        self.assertEqual(self.state.focus, FieldId.TYPE)

    def test_other_keys_are_ignored(self):
        self.state.focus = FieldId.TYPE
        self.press("i", "x", curses.KEY_BACKSPACE)
        self.assertEqual(self.state.dropdown.highlighted, 0)
        self.assertEqual(self.state.type_value, "Application")

    def test_dropdown_on_wrong_row_is_an_invariant_violation(self):
        self.state.mode = Mode.INSERT
        self.state.dropdown = Dropdown(FieldId.TYPE, TYPE_OPTIONS)
        with self.assertRaises(FormInvariantError):
            self.press("j")


class TestSave(FormTestCase):

    def test_save_refused_when_name_empty(self):
        self.state.focus = FieldId.SAVE
        self.state.set_text(FieldId.EXEC, "/usr/bin/foo")
        self.press("i")
        self.persist.assert_not_called()
        self.assertFalse(self.state.exit)
        self.assertEqual(self.state.focus, FieldId.SAVE)
        self.assertEqual(self.state.mode, Mode.NORMAL)

    def test_save_refused_when_exec_missing(self):
        self.state.set_text(FieldId.NAME, "Foo")
        self.state.set_text(FieldId.EXEC, "/usr/bin/missing")
        self.state.focus = FieldId.SAVE
        self.press("i")
        self.persist.assert_not_called()
        self.assertFalse(self.state.exit)

    def test_save_writes_record_and_exits(self):
        self.state.set_text(FieldId.NAME, "Foo")
        self.state.set_text(FieldId.EXEC, "/usr/bin/foo")
        self.press("G", "i")

        self.persist.assert_called_once()
        path, lines = self.persist.call_args[0]
        self.assertEqual(path, APPS / "Foo.desktop")
        self.assertIn("Exec=/usr/bin/foo", list(lines))
        self.assertTrue(self.state.exit)
        self.assertEqual(self.state.saved_path, APPS / "Foo.desktop")

    def test_save_link(self):
        self.state.set_text(FieldId.NAME, "Example")
        self.state.set_text(FieldId.TYPE, "Link")
        self.state.set_text(FieldId.EXEC, "https://example.com")
        self.assertTrue(save_form(self.state, self.probe, self.persist))
        lines = self.persist.call_args[0][1]
        self.assertIn("URL=https://example.com", lines)

    def test_edit_mode_writes_back_to_source_file(self):
        source = APPS / "foo.desktop"
        self.probe.files.add(str(source))
        self.state = form_from_record(
            APPS,
            {"Name": "Foo Browser", "Exec": "/usr/bin/foo"},
            name="foo.desktop",
            source_path=source,
        )
        self.state.focus = FieldId.SAVE
        self.press("i")
        self.assertEqual(self.persist.call_args[0][0], source)

    def test_persistence_failure_propagates(self):
        self.persist.side_effect = PersistenceError(APPS / "Foo.desktop", "Permission denied")
        self.state.set_text(FieldId.NAME, "Foo")
        self.state.set_text(FieldId.EXEC, "/usr/bin/foo")
        self.state.focus = FieldId.SAVE
        with self.assertRaises(PersistenceError):
            self.press("i")
        self.assertFalse(self.state.exit)


if __name__ == '__main__':
    unittest.main()
