import importlib
import os
import sys
import types
import unittest
from unittest import mock

from tests._support import make_fake_curses, make_repo_tmpdir, write_file

_MODULES = (
    "twinpane.constants",
    "twinpane.utils",
    "twinpane.ui.rendering",
    "twinpane.core.bootstrap",
    "twinpane.core.key_router",
    "twinpane.core.event_loop",
    "twinpane.core.app",
)


class TwinpaneAppTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._prev_curses = sys.modules.get("curses")
        sys.modules["curses"] = make_fake_curses()
        for mod_name in _MODULES:
            sys.modules.pop(mod_name, None)
        cls.app_mod = importlib.import_module("twinpane.core.app")
        cls.events = importlib.import_module("twinpane.core.events")
        cls.config = importlib.import_module("twinpane.core.config")

    @classmethod
    def tearDownClass(cls):
        for mod_name in _MODULES:
            sys.modules.pop(mod_name, None)
        if cls._prev_curses is not None:
            sys.modules["curses"] = cls._prev_curses
        else:
            sys.modules.pop("curses", None)

    def setUp(self):
        self.tmp = make_repo_tmpdir()
        self.addCleanup(self.tmp.cleanup)
        self.root = self.tmp.name
        self.now = 50.0
        self.jobs = mock.Mock()

    def _make_app(self, stdscr=None, **config):
        return self.app_mod.Twinpane(
            stdscr,
            config=self.config.AppConfig(**config),
            start_dir=self.root,
            jobs=self.jobs,
            clock=lambda: self.now,
        )

    def test_config_flows_into_state(self):
        write_file(os.path.join(self.root, ".hidden"))
        app = self._make_app(show_hidden=True, compact_height=4, tick_ms=30,
                             sync_system_clipboard=True)

        self.assertIn(".hidden", app.state.left.entries)
        self.assertEqual(app.state.console_height, 4)
        self.assertEqual(app.scheduler.interval, 0.03)
        self.assertTrue(app.state.clipboard.sync_system)
        self.assertTrue(app.running)

    def test_stdscr_setup_dispatches_initial_resize(self):
        stdscr = types.SimpleNamespace(
            getmaxyx=mock.Mock(return_value=(30, 100)),
            keypad=mock.Mock(),
            nodelay=mock.Mock(),
            timeout=mock.Mock(),
        )
        app = self._make_app(stdscr)
        self.assertEqual((app.state.width, app.state.height), (100, 30))
        stdscr.keypad.assert_called_once_with(True)

    def test_arm_tick_effect_arms_scheduler(self):
        app = self._make_app()
        app.handle_event(self.events.ResizeEvent(80, 24))

        app.handle_event(self.events.KeyEvent("ctrl+t"))

        self.assertTrue(app.scheduler.armed)
        self.assertTrue(app.scheduler.due(now=self.now + 1))

    def test_job_effects_are_submitted(self):
        write_file(os.path.join(self.root, "a.txt"), "A")
        os.mkdir(os.path.join(self.root, "sub"))
        app = self._make_app()
        app.handle_event(self.events.KeyEvent("c"))
        app.handle_event(self.events.KeyEvent("alt+right"))
        app.handle_event(self.events.KeyEvent("down"))
        app.handle_event(self.events.KeyEvent("right"))

        app.handle_event(self.events.KeyEvent("p"))

        self.jobs.submit.assert_called_once_with(self.events.CopyJob(
            os.path.join(self.root, "a.txt"),
            os.path.join(self.root, "sub", "a.txt"),
        ))

    def test_command_submission_reaches_job_engine(self):
        app = self._make_app()
        for key in ["alt+up", *"pwd", "enter"]:
            app.handle_event(self.events.KeyEvent(key))

        self.jobs.submit.assert_called_once_with(self.events.CommandJob("pwd", self.root))

    def test_cleanup_shuts_down_jobs(self):
        app = self._make_app()
        app.cleanup()
        self.jobs.shutdown.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
