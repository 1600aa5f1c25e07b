"""Tests for puzzle catalogue loading and navigation."""

import json
from pathlib import Path

import pytest

from puzzler.catalogue.loader import (
    PuzzleCatalogue,
    load_bundled_puzzles,
    load_puzzles,
    parse_puzzles,
)
from puzzler.core.errors import PuzzleFormatError
from puzzler.rules.board_rules import BoardRules

_GOOD = {
    "id": "a",
    "fen": "start",
    "solution": ["e2e4"],
    "playerColor": "white",
}


class TestParsePuzzles:
    def test_valid(self) -> None:
        puzzles = parse_puzzles(json.dumps([_GOOD, dict(_GOOD, id="b")]))
        assert [p.id for p in puzzles] == ["a", "b"]

    def test_invalid_record_skipped(self) -> None:
        text = json.dumps([_GOOD, {"id": "broken"}, "nope"])
        assert [p.id for p in parse_puzzles(text)] == ["a"]

    def test_invalid_record_strict(self) -> None:
        text = json.dumps([_GOOD, {"id": "broken"}])
        with pytest.raises(PuzzleFormatError):
            parse_puzzles(text, strict=True)

    def test_not_json(self) -> None:
        with pytest.raises(PuzzleFormatError):
            parse_puzzles("[{")

    def test_not_an_array(self) -> None:
        with pytest.raises(PuzzleFormatError):
            parse_puzzles(json.dumps(_GOOD))

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps([_GOOD]), encoding="utf-8")
        assert load_puzzles(path)[0].id == "a"


class TestBundledPuzzles:
    def test_load(self) -> None:
        puzzles = load_bundled_puzzles()
        assert len(puzzles) >= 4
        assert len({p.id for p in puzzles}) == len(puzzles)

    def test_every_solution_is_playable(self) -> None:
        for puzzle in load_bundled_puzzles():
            rules = BoardRules(puzzle.starting_fen)
            assert rules.current_turn() == puzzle.player_color, puzzle.id
            for entry in puzzle.solution:
                assert rules.apply_move(entry) is not None, (puzzle.id, entry)


class TestPuzzleCatalogue:
    def _catalogue(self) -> PuzzleCatalogue:
        return PuzzleCatalogue(
            parse_puzzles(json.dumps([dict(_GOOD, id=i) for i in "abc"]))
        )

    def test_starts_at_first(self) -> None:
        catalogue = self._catalogue()
        assert len(catalogue) == 3
        assert catalogue.index == 0
        assert catalogue.current.id == "a"

    def test_next_wraps(self) -> None:
        catalogue = self._catalogue()
        assert [catalogue.next().id for _ in range(3)] == ["b", "c", "a"]

    def test_previous_wraps(self) -> None:
        catalogue = self._catalogue()
        assert catalogue.previous().id == "c"
        assert catalogue.index == 2

    def test_go_to(self) -> None:
        catalogue = self._catalogue()
        assert catalogue.go_to(1).id == "b"
        assert catalogue.go_to(7) is None
        assert catalogue.index == 1

    def test_find(self) -> None:
        catalogue = self._catalogue()
        assert catalogue.find("c").id == "c"
        assert catalogue.find("zzz") is None

    def test_empty(self) -> None:
        catalogue = PuzzleCatalogue([])
        assert catalogue.current is None
        assert catalogue.next() is None
        assert catalogue.previous() is None
