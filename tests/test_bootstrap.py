import importlib
import os
import sys
import types
import unittest
from unittest import mock

from tests._support import make_fake_curses


class BootstrapTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._prev_curses = sys.modules.get("curses")
        cls.fake_curses = make_fake_curses()
        cls.fake_curses.curs_set = mock.Mock()
        cls.fake_curses.noecho = mock.Mock()
        cls.fake_curses.raw = mock.Mock()
        sys.modules["curses"] = cls.fake_curses
        sys.modules.pop("twinpane.core.bootstrap", None)
        cls.bootstrap = importlib.import_module("twinpane.core.bootstrap")

    @classmethod
    def tearDownClass(cls):
        sys.modules.pop("twinpane.core.bootstrap", None)
        if cls._prev_curses is not None:
            sys.modules["curses"] = cls._prev_curses
        else:
            sys.modules.pop("curses", None)

    def test_prepare_environment_sets_escdelay_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.bootstrap.prepare_environment()
            self.assertEqual(os.environ["ESCDELAY"], "25")

        with mock.patch.dict(os.environ, {"ESCDELAY": "100"}, clear=True):
            self.bootstrap.prepare_environment()
            self.assertEqual(os.environ["ESCDELAY"], "100")

    def test_configure_terminal(self):
        stdscr = types.SimpleNamespace(keypad=mock.Mock(), nodelay=mock.Mock(), timeout=mock.Mock())

        self.bootstrap.configure_terminal(stdscr, timeout_ms=40)

        self.fake_curses.curs_set.assert_called_with(0)
        self.fake_curses.noecho.assert_called_once_with()
        self.fake_curses.raw.assert_called_once_with()
        stdscr.keypad.assert_called_once_with(True)
        stdscr.timeout.assert_called_once_with(40)

    def test_resolve_start_directory(self):
        with mock.patch.object(self.bootstrap.os, "getcwd", return_value="/work"):
            self.assertEqual(self.bootstrap.resolve_start_directory(), "/work")

        with mock.patch.object(self.bootstrap.os, "getcwd", side_effect=FileNotFoundError(2, "gone")):
            with self.assertRaises(SystemExit) as ctx:
                self.bootstrap.resolve_start_directory()
        self.assertIn("cannot resolve working directory", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
