from __future__ import annotations

from bart_board.data.models import Departure
from bart_board.rendering.formatter import format_board, format_departure


def test_leaving_has_one_leading_space_and_no_minutes() -> None:
    line = format_departure(Departure("Dublin", "Leaving", "1"))

    assert line == " Leaving | Platform 1"
    assert "min" not in line


def test_single_digit_minutes_have_three_leading_spaces() -> None:
    assert format_departure(Departure("Dublin", "3", "2")) == "   3 min | Platform 2"


def test_two_digit_minutes_have_two_leading_spaces() -> None:
    assert format_departure(Departure("Dublin", "22", "2")) == "  22 min | Platform 2"


def test_unparsable_minutes_pass_through_verbatim() -> None:
    assert format_departure(Departure("Dublin", "soon", "3")) == "  soon min | Platform 3"


def test_destinations_sorted_regardless_of_arrival_order() -> None:
    board = {
        "B": [Departure("B", "4", "1")],
        "A": [Departure("A", "7", "2")],
    }

    text = format_board(board, "Powell St.")

    assert text.index("A:") < text.index("B:")


def test_sort_is_case_sensitive_ordinal() -> None:
    board = {
        "antioch": [Departure("antioch", "4", "1")],
        "Richmond": [Departure("Richmond", "7", "2")],
    }

    lines = format_board(board, "X").splitlines()

    assert lines.index("Richmond:") < lines.index("antioch:")


def test_board_layout_exact() -> None:
    board = {
        "Richmond": [Departure("Richmond", "4", "2"), Departure("Richmond", "19", "2")],
        "Daly City": [Departure("Daly City", "Leaving", "1")],
    }

    text = format_board(board, "Powell St. Departures")

    assert text == (
        "Powell St. Departures\n"
        "\n"
        "Daly City:\n"
        " Leaving | Platform 1\n"
        "\n"
        "Richmond:\n"
        "   4 min | Platform 2\n"
        "  19 min | Platform 2\n"
        "\n"
    )


def test_empty_board_is_title_only() -> None:
    text = format_board({}, "Powell St.")

    assert text.strip() == "Powell St."
