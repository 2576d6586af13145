"""Navigation controller behavior against an in-memory filesystem."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from rfd.errors import DeleteError, DirectoryAccessError, ReadError
from rfd.item import NAME_COLUMN_WIDTH, format_display_line
from rfd.listing import DirectoryListing
from rfd.mode import Mode, ModeStateMachine
from rfd.navigation import NavigationController
from rfd.regions import Bounds, Region
from rfd.terminal import ScreenBuffer
from rfd.ui_theme import PLAIN_THEME
from rfd.views import ViewerContent
from tests.fakes import MemoryFileSystem, scenario_filesystem

REGION_TOP = 8
REGION_LEFT = 1


def build_controller(
    fs: MemoryFileSystem,
    path: str = "/data",
    *,
    height: int = 11,
) -> tuple[NavigationController, ScreenBuffer]:
    screen = ScreenBuffer(rows=REGION_TOP + height + 1, columns=60)
    root = Region.root(screen)
    region = root.child(Bounds(REGION_TOP, REGION_LEFT, height, 58), border=True)
    controller = NavigationController(
        DirectoryListing(fs),
        region,
        ModeStateMachine(),
        PLAIN_THEME,
        no_color=True,
        trash_dir=Path("/trash"),
    )
    controller.change_directory(path)
    return controller, screen


def names(controller: NavigationController) -> list[str]:
    return [item.name for item in controller.items]


class CursorTests(unittest.TestCase):
    def test_move_down_n_times_returns_to_start(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        size = len(controller.items)
        for start in range(size):
            controller.row = start
            for _ in range(size):
                self.assertTrue(controller.move_down())
            self.assertEqual(controller.row, start)

    def test_move_up_wraps_from_row_zero_and_row_one(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())

        controller.move_up()
        self.assertEqual(controller.row, 2)

        controller.row = 1
        controller.move_up()
        self.assertEqual(controller.row, 2)

        controller.move_up()
        self.assertEqual(controller.row, 1)

    def test_row_stays_in_range(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        for step in ["up", "down", "down", "down", "up", "up", "up", "down"]:
            getattr(controller, f"move_{step}")()
            self.assertTrue(0 <= controller.row < len(controller.items))

    def test_cursor_is_parked_on_selected_row(self) -> None:
        controller, screen = build_controller(scenario_filesystem())
        self.assertEqual(screen.cursor, (REGION_TOP, REGION_LEFT))

        controller.move_down()

        self.assertEqual(screen.cursor, (REGION_TOP + 1, REGION_LEFT))
        self.assertTrue(screen.line(REGION_TOP + 1)[REGION_LEFT:].startswith("a.txt"))

    def test_long_listing_scrolls_to_keep_cursor_visible(self) -> None:
        files = [f"f{index:02d}" for index in range(30)]
        tree: dict[str, list[str] | str] = {"/": ["big"], "/big": files}
        tree.update({f"/big/{name}": name for name in files})
        controller, screen = build_controller(MemoryFileSystem(tree), "/big", height=5)

        for _ in range(7):
            controller.move_down()

        self.assertEqual(controller.row, 7)
        self.assertEqual(controller.content.top, 3)
        self.assertEqual(screen.cursor, (REGION_TOP + 4, REGION_LEFT))
        self.assertTrue(screen.line(REGION_TOP)[REGION_LEFT:].startswith("f03"))
        self.assertTrue(screen.line(REGION_TOP + 4)[REGION_LEFT:].startswith("f07"))

        controller.move_down()
        controller.row = 28
        controller.move_down()
        controller.move_down()
        self.assertEqual(controller.row, 0)
        self.assertEqual(controller.content.top, 0)


class ControlCharacterNameTests(unittest.TestCase):
    def test_newline_in_name_keeps_rows_aligned(self) -> None:
        fs = MemoryFileSystem({"/d": ["..", "evil\nname", "z.txt"], "/d/evil\nname": "x", "/d/z.txt": "z", "/": ["d"]})
        controller, screen = build_controller(fs, "/d")

        controller.move_down()
        controller.move_down()

        self.assertEqual(controller.row, 2)
        self.assertEqual(screen.cursor, (REGION_TOP + 2, REGION_LEFT))
        self.assertTrue(screen.line(REGION_TOP + 1)[REGION_LEFT:].startswith("evil\\x0aname"))
        self.assertTrue(screen.line(REGION_TOP + 2)[REGION_LEFT:].startswith("z.txt"))

    def test_escape_sequence_in_name_is_not_written_raw(self) -> None:
        fs = MemoryFileSystem({"/d": ["..", "a\x1b[2Jb"], "/d/a\x1b[2Jb": "x", "/": ["d"]})
        with mock.patch.object(ScreenBuffer, "write", autospec=True, side_effect=ScreenBuffer.write) as write:
            controller, screen = build_controller(fs, "/d")

        written = "".join(call.args[1] for call in write.call_args_list)
        self.assertNotIn("\x1b[2J", written)
        self.assertTrue(screen.line(REGION_TOP + 1)[REGION_LEFT:].startswith("a\\x1b[2Jb"))
        self.assertEqual(len(controller.items), 2)


class DirectoryTests(unittest.TestCase):
    def test_select_directory_enters_it_and_resets_row(self) -> None:
        controller, screen = build_controller(scenario_filesystem())
        controller.row = 2

        self.assertTrue(controller.select_or_enter())

        self.assertEqual(controller.listing.current_path, Path("/data/sub"))
        self.assertEqual(controller.row, 0)
        self.assertEqual(names(controller), ["..", "inner.txt"])
        self.assertTrue(screen.line(REGION_TOP + 1)[REGION_LEFT:].startswith("inner.txt"))

    def test_parent_entry_goes_up(self) -> None:
        controller, _screen = build_controller(scenario_filesystem(), "/data/sub")
        controller.select_or_enter()
        self.assertEqual(controller.listing.current_path, Path("/data"))

    def test_inaccessible_directory_preserves_state(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        controller.row = 1
        before = controller.items

        with self.assertRaises(DirectoryAccessError):
            controller.change_directory("/missing")

        self.assertEqual(controller.listing.current_path, Path("/data"))
        self.assertIs(controller.items, before)
        self.assertEqual(controller.row, 1)

    def test_entry_with_failed_stat_is_still_listed(self) -> None:
        fs = scenario_filesystem()
        fs.broken_stat.add("/data/a.txt")
        controller, screen = build_controller(fs)

        self.assertEqual(names(controller), ["..", "a.txt", "sub"])
        row_text = screen.line(REGION_TOP + 1)[REGION_LEFT:REGION_LEFT + NAME_COLUMN_WIDTH + 1]
        self.assertEqual(row_text, format_display_line("a.txt", "?"))
        controller.move_down()
        controller.move_down()
        self.assertEqual(controller.row, 2)


class ViewerTests(unittest.TestCase):
    def test_viewing_a_file_then_going_back(self) -> None:
        controller, screen = build_controller(scenario_filesystem())
        controller.move_down()
        self.assertEqual(controller.current_item().name, "a.txt")

        self.assertTrue(controller.select_or_enter())

        self.assertIs(controller.mode.mode, Mode.VIEWING)
        self.assertIsNotNone(controller.viewer)
        self.assertEqual(controller.viewer.bounds, controller.region.bounds)
        self.assertEqual(screen.line(REGION_TOP)[REGION_LEFT:REGION_LEFT + 10], "0123456789")
        self.assertEqual(screen.line(REGION_TOP + 1)[REGION_LEFT:].strip(), "|")

        before = controller.items
        self.assertTrue(controller.close_viewer())

        self.assertIs(controller.mode.mode, Mode.NAVIGATION)
        self.assertIsNone(controller.viewer)
        self.assertEqual(controller.row, 1)
        self.assertIsNot(controller.items, before)
        self.assertTrue(screen.line(REGION_TOP + 1)[REGION_LEFT:].startswith("a.txt"))

    def test_back_resets_row_when_it_no_longer_exists(self) -> None:
        fs = scenario_filesystem()
        controller, _screen = build_controller(fs)
        controller.row = 1
        controller.view()
        fs.tree["/data"] = [".."]
        controller.close_viewer()
        self.assertEqual(controller.row, 0)

    def test_navigation_commands_are_noops_while_viewing(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        controller.row = 1
        controller.view()

        self.assertFalse(controller.move_down())
        self.assertFalse(controller.move_up())
        self.assertFalse(controller.select_or_enter())
        self.assertFalse(controller.view())
        self.assertFalse(controller.delete())
        self.assertEqual(controller.row, 1)
        self.assertIs(controller.mode.mode, Mode.VIEWING)

    def test_close_viewer_is_noop_while_navigating(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        self.assertFalse(controller.close_viewer())
        self.assertIs(controller.mode.mode, Mode.NAVIGATION)

    def test_read_failure_rolls_back_to_navigation(self) -> None:
        fs = scenario_filesystem()
        fs.broken_stat.add("/data/a.txt")
        controller, _screen = build_controller(fs)
        controller.row = 1

        with self.assertRaises(ReadError):
            controller.view()

        self.assertIs(controller.mode.mode, Mode.NAVIGATION)
        self.assertIsNone(controller.viewer)
        self.assertEqual(controller.region.parent.children, [controller.region])

    def test_draw_failure_rolls_back_to_navigation(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        controller.row = 1

        with mock.patch.object(ViewerContent, "render", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                controller.view()

        self.assertIs(controller.mode.mode, Mode.NAVIGATION)
        self.assertIsNone(controller.viewer)
        self.assertEqual(controller.region.parent.children, [controller.region])


class DeleteTests(unittest.TestCase):
    def test_delete_removes_entry_from_next_listing(self) -> None:
        fs = scenario_filesystem()
        controller, _screen = build_controller(fs)
        controller.row = 1

        self.assertTrue(controller.delete())

        self.assertEqual(fs.trashed, [Path("/data/a.txt")])
        self.assertNotIn("a.txt", names(controller))
        self.assertEqual(controller.row, 1)

    def test_delete_of_last_row_resets_cursor(self) -> None:
        controller, _screen = build_controller(scenario_filesystem())
        controller.row = 2
        controller.delete()
        self.assertEqual(names(controller), ["..", "a.txt"])
        self.assertEqual(controller.row, 0)

    def test_failed_delete_still_refreshes(self) -> None:
        fs = scenario_filesystem()
        fs.fail_delete = True
        controller, _screen = build_controller(fs)
        controller.row = 1
        before = controller.items

        with self.assertRaises(DeleteError):
            controller.delete()

        self.assertIsNot(controller.items, before)
        self.assertIn("a.txt", names(controller))

    def test_failed_delete_is_reported_when_refresh_also_fails(self) -> None:
        fs = scenario_filesystem()
        fs.fail_delete = True
        controller, _screen = build_controller(fs)
        controller.row = 1
        gone = DirectoryAccessError(Path("/data"), "no such directory")

        with mock.patch.object(fs, "list_names", side_effect=gone), self.assertLogs("rfd.navigation", "WARNING"):
            with self.assertRaises(DeleteError):
                controller.delete()

        self.assertEqual(names(controller), ["..", "a.txt", "sub"])

    def test_directory_references_are_never_deleted(self) -> None:
        fs = scenario_filesystem()
        controller, _screen = build_controller(fs)

        with self.assertRaises(DeleteError):
            controller.delete()

        self.assertEqual(fs.trashed, [])
        self.assertEqual(names(controller), ["..", "a.txt", "sub"])


if __name__ == "__main__":
    unittest.main()
