from rollsheet.engine.history import MAX_HISTORY_ENTRIES, RollHistory
from rollsheet.engine.types import HistoryEntry, RollKind


def _entry(label, total=0, **kw):
    return HistoryEntry(label=label, kind=kw.pop("kind", RollKind.CUSTOM), expression=kw.pop("expression", "1d20"), total=total, **kw)


def test_append_reveals_history():
    h = RollHistory()
    assert h.entries == []
    assert h.visible is False

    h.append(_entry("Test Roll", 15))
    assert len(h) == 1
    assert h.visible is True
    assert h.entries[0].label == "Test Roll"


def test_newest_first():
    h = RollHistory()
    h.append(_entry("First"))
    h.append(_entry("Second"))
    assert [e.label for e in h.entries] == ["Second", "First"]


def test_caps_at_50():
    h = RollHistory()
    for i in range(MAX_HISTORY_ENTRIES):
        h.append(_entry(f"Roll {i}"))
    assert len(h) == 50
    assert h.entries[-1].label == "Roll 0"

    h.append(_entry("Roll 50"))
    assert len(h) == 50
    assert h.entries[0].label == "Roll 50"
    assert all(e.label != "Roll 0" for e in h.entries)
    assert h.entries[-1].label == "Roll 1"


def test_toggle_keeps_entries():
    h = RollHistory()
    h.append(_entry("Test"))
    h.toggle_visibility()
    assert h.visible is False
    assert len(h) == 1
    h.toggle_visibility()
    assert h.visible is True


def test_append_after_hiding_shows_again():
    h = RollHistory()
    h.append(_entry("One"))
    h.toggle_visibility()
    h.append(_entry("Two"))
    assert h.visible is True


def test_clear_empties_and_hides():
    h = RollHistory()
    h.append(_entry("Test"))
    h.clear()
    assert h.entries == []
    assert h.visible is False


def test_custom_limit():
    h = RollHistory(limit=3)
    for i in range(5):
        h.append(_entry(str(i)))
    assert [e.label for e in h.entries] == ["4", "3", "2"]
