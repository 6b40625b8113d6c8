import importlib
import sys
import types
import unittest
from unittest import mock

from tests._support import make_fake_curses

_MODULES = (
    "twinpane.utils",
    "twinpane.core.key_router",
)


class KeyRouterTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._prev_curses = sys.modules.get("curses")
        sys.modules["curses"] = make_fake_curses()
        for mod_name in _MODULES:
            sys.modules.pop(mod_name, None)
        cls.key_router = importlib.import_module("twinpane.core.key_router")
        cls.curses = sys.modules["curses"]

    @classmethod
    def tearDownClass(cls):
        for mod_name in _MODULES:
            sys.modules.pop(mod_name, None)
        if cls._prev_curses is not None:
            sys.modules["curses"] = cls._prev_curses
        else:
            sys.modules.pop("curses", None)

    def _screen(self, *keys):
        def get_wch():
            if not pending:
                raise self.curses.error()
            key = pending.pop(0)
            if key is None:
                raise self.curses.error()
            return key

        pending = list(keys)
        return types.SimpleNamespace(get_wch=mock.Mock(side_effect=get_wch), nodelay=mock.Mock())

    def test_key_name_printable_and_control(self):
        name = self.key_router.key_name
        self.assertEqual(name("a"), "a")
        self.assertEqual(name("D"), "D")
        self.assertEqual(name(" "), " ")
        self.assertEqual(name("\n"), "enter")
        self.assertEqual(name("\t"), "tab")
        self.assertEqual(name("\x7f"), "backspace")
        self.assertEqual(name("\x14"), "ctrl+t")
        self.assertEqual(name("\x03"), "ctrl+c")
        self.assertIsNone(name("\x01"))
        self.assertIsNone(name(None))

    def test_key_name_special_codes(self):
        name = self.key_router.key_name
        self.assertEqual(name(self.curses.KEY_UP), "up")
        self.assertEqual(name(self.curses.KEY_RIGHT), "right")
        self.assertEqual(name(self.curses.KEY_BACKSPACE), "backspace")
        self.assertEqual(name(self.curses.KEY_RESIZE), "resize")
        self.assertEqual(name(113), "q")

    def test_key_name_modified_arrows_from_terminfo(self):
        name = self.key_router.key_name
        self.assertEqual(name(566), "ctrl+up")
        self.assertEqual(name(525), "ctrl+down")
        self.assertEqual(name(567), "alt+up")
        self.assertEqual(name(546), "alt+left")
        self.assertEqual(name(561), "alt+right")
        self.assertIsNone(name(999))

    def test_combine_escape(self):
        combine = self.key_router.combine_escape
        self.assertEqual(combine(None), "esc")
        self.assertEqual(combine("x"), "alt+x")
        self.assertEqual(combine(self.curses.KEY_DOWN), "alt+down")
        self.assertEqual(combine("\x1b"), "esc")

    def test_read_key_plain_and_timeout(self):
        self.assertEqual(self.key_router.read_key(self._screen("q")), ("q", "q"))
        self.assertEqual(self.key_router.read_key(self._screen()), (None, None))

    def test_read_key_lone_escape(self):
        screen = self._screen("\x1b", None)
        self.assertEqual(self.key_router.read_key(screen), ("esc", "\x1b"))
        screen.nodelay.assert_any_call(True)
        self.assertEqual(screen.nodelay.call_args, mock.call(False))

    def test_read_key_alt_arrow_from_escape_prefix(self):
        screen = self._screen("\x1b", self.curses.KEY_UP)
        self.assertEqual(self.key_router.read_key(screen)[0], "alt+up")

    def test_read_key_csi_modifiers(self):
        read = self.key_router.read_key
        self.assertEqual(read(self._screen("\x1b", "[", "1", ";", "5", "A"))[0], "ctrl+up")
        self.assertEqual(read(self._screen("\x1b", "[", "1", ";", "3", "B"))[0], "alt+down")
        self.assertEqual(read(self._screen("\x1b", "[", "D"))[0], "left")
        self.assertIsNone(read(self._screen("\x1b", "[", "2", "~"))[0])


if __name__ == "__main__":
    unittest.main()
