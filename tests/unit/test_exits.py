"""Tests for roommap.ir.exits: direction resolution and connection labels."""

from roommap.ir.exits import CROSS_GROUP, extract_label, is_script, resolve_direction
from roommap.ir.room import Room
from roommap.types import Direction


def _room(wayto: dict[str, str], dirto: dict[str, str] | None = None) -> Room:
    return Room(id=1, wayto=wayto, dirto=dirto or {})


class TestResolveDirection:
    def test_exact_direction(self):
        assert resolve_direction(_room({"2": "north"}), "2") == Direction.North

    def test_case_and_whitespace_ignored(self):
        assert resolve_direction(_room({"2": "  NorthEast "}), "2") == Direction.NorthEast

    def test_abbreviation(self):
        assert resolve_direction(_room({"2": "sw"}), "2") == Direction.SouthWest

    def test_substring_prefers_compound_direction(self):
        assert resolve_direction(_room({"2": "go northeast gate"}), "2") == Direction.NorthEast

    def test_substring_plain_direction(self):
        assert resolve_direction(_room({"2": "climb up"}), "2") == Direction.Up

    def test_substring_matches_inside_words(self):
        assert resolve_direction(_room({"2": "go supply"}), "2") == Direction.Up
        assert resolve_direction(_room({"2": "go outhouse"}), "2") == Direction.Out

    def test_non_directional_command(self):
        assert resolve_direction(_room({"2": "go ladder"}), "2") is None

    def test_cross_group_sentinel_wins_over_wayto(self):
        room = _room({"2": "north"}, {"2": "cross-group"})
        assert resolve_direction(room, "2") == CROSS_GROUP

    def test_dirto_override_wins(self):
        room = _room({"2": "go stairs"}, {"2": "Up"})
        assert resolve_direction(room, "2") == Direction.Up

    def test_dirto_override_beats_plain_direction(self):
        room = _room({"2": "north"}, {"2": "down"})
        assert resolve_direction(room, "2") == Direction.Down

    def test_none_and_skip_fall_through_to_wayto(self):
        assert resolve_direction(_room({"2": "south"}, {"2": "none"}), "2") == Direction.South
        assert resolve_direction(_room({"2": "south"}, {"2": " SKIP "}), "2") == Direction.South

    def test_script_without_override_has_no_direction(self):
        assert resolve_direction(_room({"2": ";e move 'northeast'; waitrt?"}), "2") is None

    def test_script_with_override(self):
        room = _room({"2": ";e move 'northeast'; waitrt?"}, {"2": "northeast"})
        assert resolve_direction(room, "2") == Direction.NorthEast

    def test_unknown_target(self):
        assert resolve_direction(_room({"2": "north"}), "3") is None

    def test_pure(self):
        room = _room({"2": "go northwest"})
        assert resolve_direction(room, "2") == resolve_direction(room, "2")


class TestIsScript:
    def test_marker(self):
        assert is_script(";e true")
        assert is_script("  ;E fput 'search'")

    def test_plain_command(self):
        assert not is_script("go arch")


class TestExtractLabel:
    def test_plain_direction_has_no_label(self):
        assert extract_label(_room({"2": "north"}), "2") is None

    def test_plain_direction_with_same_override(self):
        assert extract_label(_room({"2": "north"}, {"2": "north"}), "2") is None

    def test_plain_direction_with_different_override(self):
        assert extract_label(_room({"2": "north"}, {"2": "up"}), "2") == "up"

    def test_action_phrase(self):
        assert extract_label(_room({"2": "go ladder"}), "2") == "ladder"
        assert extract_label(_room({"2": "climb rope bridge"}), "2") == "rope bridge"

    def test_short_command_verbatim(self):
        assert extract_label(_room({"2": "swim river"}), "2") == "swim river"

    def test_long_command_has_no_label(self):
        assert extract_label(_room({"2": "knock loudly on the oak door thrice"}), "2") is None

    def test_bare_script_has_no_label(self):
        assert extract_label(_room({"2": ";e true"}), "2") is None

    def test_script_with_override_uses_move_token(self):
        room = _room({"2": ";e fput 'look tool'; sleep 0.5; move 'go panel'"}, {"2": "east"})
        assert extract_label(room, "2") == "panel"

    def test_script_move_token_skips_directions(self):
        room = _room({"2": ";e move 'northeast'; waitrt?"}, {"2": "northeast"})
        assert extract_label(room, "2") is None

    def test_script_multifput_go(self):
        room = _room({"2": ";e multifput 'search', 'go passage'"}, {"2": "west"})
        assert extract_label(room, "2") == "passage"

    def test_missing_target(self):
        assert extract_label(_room({}), "2") is None
