import pytest

from image_banner.palette import ANSI_16, Palette, PaletteEntry, color_distance


def test_ansi_16_order_and_values():
    assert len(ANSI_16) == 16
    assert ANSI_16.names() == (
        "BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE",
        "BRIGHT_BLACK", "BRIGHT_RED", "BRIGHT_GREEN", "BRIGHT_YELLOW",
        "BRIGHT_BLUE", "BRIGHT_MAGENTA", "BRIGHT_CYAN", "BRIGHT_WHITE",
    )
    assert ANSI_16.color_named("RED") == (170, 0, 0)
    assert ANSI_16.color_named("BRIGHT_RED") == (255, 85, 85)
    assert ANSI_16.color_named("YELLOW") == (170, 85, 0)


def test_unknown_color_raises():
    with pytest.raises(KeyError):
        ANSI_16.color_named("ORANGE")


@pytest.mark.parametrize("entry", list(ANSI_16))
def test_exact_color_is_its_own_nearest(entry):
    assert ANSI_16.nearest_to(entry.rgb) == entry
    assert color_distance(entry.rgb, entry.rgb) == 0


def test_nearest_prefers_first_entry_on_ties():
    pal = Palette((("FIRST", (0, 0, 0)), ("SECOND", (20, 0, 0)), ("THIRD", (0, 0, 0))))
    # (10, 0, 0) is equidistant from FIRST and SECOND.
    assert pal.nearest_to((10, 0, 0)).name == "FIRST"
    reordered = Palette((("SECOND", (20, 0, 0)), ("FIRST", (0, 0, 0))))
    assert reordered.nearest_to((10, 0, 0)).name == "SECOND"


def test_near_colors():
    assert ANSI_16.nearest_to((250, 250, 250)).name == "BRIGHT_WHITE"
    assert ANSI_16.nearest_to((5, 5, 5)).name == "BLACK"
    assert ANSI_16.nearest_to((160, 10, 10)).name == "RED"


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        Palette((("A", (0, 0, 0)), ("A", (1, 1, 1))))


def test_entries_are_immutable():
    entry = ANSI_16[0]
    assert isinstance(entry, PaletteEntry)
    with pytest.raises(AttributeError):
        entry.name = "X"
    assert not hasattr(ANSI_16, "__setitem__")
