import os
import unittest

from tests._support import make_repo_tmpdir, write_file

from twinpane.core.errors import DirectoryListFailure
from twinpane.core.panel import PanelState, is_within, list_entries, visible_rows


class PanelListingTests(unittest.TestCase):
    def setUp(self):
        self.tmp = make_repo_tmpdir()
        self.addCleanup(self.tmp.cleanup)
        self.root = self.tmp.name
        for name in ('b.txt', 'A.txt', '.hidden', 'c.txt'):
            write_file(os.path.join(self.root, name), name)
        os.mkdir(os.path.join(self.root, 'dir'))

    def test_hidden_entries_filtered_unless_enabled(self):
        names, error = list_entries(self.root, show_hidden=False)
        self.assertIsNone(error)
        self.assertEqual(names, ['A.txt', 'b.txt', 'c.txt', 'dir'])

        names, _ = list_entries(self.root, show_hidden=True)
        self.assertIn('.hidden', names)

    def test_listing_failure_becomes_single_sentinel_entry(self):
        def failing(path):
            raise DirectoryListFailure(path, PermissionError(13, 'Permission denied'))

        panel = PanelState.open(self.root, lister=failing)

        self.assertEqual(len(panel.entries), 1)
        self.assertTrue(panel.entries[0].startswith('Error: '))
        self.assertIsNotNone(panel.listing_error)
        self.assertIsNone(panel.highlighted())
        panel.toggle_selection()
        self.assertEqual(panel.selected, set())
        self.assertEqual(panel.target_paths(), [])

    def test_missing_directory_lists_error(self):
        panel = PanelState.open(os.path.join(self.root, 'missing'))
        self.assertEqual(len(panel.entries), 1)
        self.assertTrue(panel.entries[0].startswith('Error:'))

    def test_toggle_hidden_refreshes(self):
        panel = PanelState.open(self.root)
        panel.toggle_hidden()
        self.assertTrue(panel.show_hidden)
        self.assertIn('.hidden', panel.entries)


class PanelSelectionTests(unittest.TestCase):
    def setUp(self):
        self.tmp = make_repo_tmpdir()
        self.addCleanup(self.tmp.cleanup)
        self.root = self.tmp.name
        for name in ('a', 'b', 'c', 'd'):
            write_file(os.path.join(self.root, name))
        self.panel = PanelState.open(self.root)

    def test_selection_is_items_toggled_odd_number_of_times(self):
        toggles = [0, 1, 0, 2, 2, 2, 3, 1]
        counts = {}
        for index in toggles:
            self.panel.cursor = index
            self.panel.toggle_selection()
            name = self.panel.entries[index]
            counts[name] = counts.get(name, 0) + 1

        expected = {name for name, count in counts.items() if count % 2}
        self.assertEqual(self.panel.selected, expected)
        self.assertTrue(self.panel.selected <= set(self.panel.entries))

    def test_target_paths_prefers_selection_in_listing_order(self):
        self.panel.cursor = 3
        self.panel.toggle_selection()
        self.panel.cursor = 1
        self.panel.toggle_selection()

        self.assertEqual(
            self.panel.target_paths(),
            [os.path.join(self.root, 'b'), os.path.join(self.root, 'd')],
        )

    def test_target_paths_falls_back_to_highlighted(self):
        self.panel.cursor = 2
        self.assertEqual(self.panel.target_paths(), [os.path.join(self.root, 'c')])

    def test_refresh_clears_selection_and_resets_cursor(self):
        self.panel.cursor = 2
        self.panel.scroll = 1
        self.panel.toggle_selection()

        self.panel.refresh()

        self.assertEqual(self.panel.selected, set())
        self.assertEqual((self.panel.cursor, self.panel.scroll), (0, 0))

    def test_move_cursor_clamps_and_scrolls(self):
        self.panel.move_cursor(1, rows=2)
        self.panel.move_cursor(1, rows=2)
        self.assertEqual((self.panel.cursor, self.panel.scroll), (2, 1))

        self.panel.move_cursor(10, rows=2)
        self.assertEqual(self.panel.cursor, 3)
        self.assertLessEqual(self.panel.scroll, self.panel.cursor)

        self.panel.move_cursor(-10, rows=2)
        self.assertEqual((self.panel.cursor, self.panel.scroll), (0, 0))

    def test_move_cursor_on_empty_panel_stays_at_zero(self):
        panel = PanelState(directory=self.root)
        panel.move_cursor(1)
        self.assertEqual((panel.cursor, panel.scroll), (0, 0))


class PanelHelperTests(unittest.TestCase):
    def test_is_within(self):
        self.assertTrue(is_within('/a/b/c', '/a/b'))
        self.assertTrue(is_within('/a/b', '/a/b'))
        self.assertFalse(is_within('/a/bc', '/a/b'))
        self.assertTrue(is_within('/a', '/'))

    def test_visible_rows_never_below_one(self):
        self.assertEqual(visible_rows(24, 6), 14)
        self.assertEqual(visible_rows(0, 0), 1)


if __name__ == '__main__':
    unittest.main()
