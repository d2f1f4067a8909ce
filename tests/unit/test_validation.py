"""Tests for record validation."""

from typing import Any

import pytest

from crushlog.core.validation import (
    filter_valid,
    is_valid_action,
    is_valid_diary_entry,
    is_valid_record,
    is_valid_timestamp,
    is_valid_trait,
)
from tests.unit.records import make_action, make_crush


def test_accepts_minimal_record() -> None:
    assert is_valid_record(make_crush(name="A")) is True


def test_accepts_record_without_description() -> None:
    record = make_crush()
    del record["description"]
    assert is_valid_record(record) is True


@pytest.mark.parametrize("candidate", [None, "crush", 42, [], ["id", "name"]])
def test_rejects_non_mapping(candidate: object) -> None:
    assert is_valid_record(candidate) is False


@pytest.mark.parametrize("record_id", [None, "", 1, ["1"]])
def test_rejects_bad_id(record_id: object) -> None:
    assert is_valid_record(make_crush(id=record_id)) is False


def test_rejects_missing_id() -> None:
    record = make_crush()
    del record["id"]
    assert is_valid_record(record) is False


@pytest.mark.parametrize("name", [None, "", 7])
def test_rejects_bad_name(name: object) -> None:
    assert is_valid_record(make_crush(name=name)) is False


def test_name_length_limit() -> None:
    assert is_valid_record(make_crush(name="a" * 50)) is True
    assert is_valid_record(make_crush(name="a" * 51)) is False


@pytest.mark.parametrize("mistakes", [0, 1, 4, 5, 2.5])
def test_accepts_mistakes_in_range(mistakes: float) -> None:
    assert is_valid_record(make_crush(mistakes=mistakes)) is True


@pytest.mark.parametrize("mistakes", [-1, 6, 5.01, None, "0", True, False, float("nan")])
def test_rejects_mistakes_out_of_range_or_not_a_number(mistakes: object) -> None:
    assert is_valid_record(make_crush(mistakes=mistakes)) is False


def test_rejects_missing_mistakes() -> None:
    record = make_crush()
    del record["mistakes"]
    assert is_valid_record(record) is False


@pytest.mark.parametrize("field", ["pros", "cons"])
@pytest.mark.parametrize("value", ["not a list", None, {}, ("tuple",)])
def test_rejects_non_list_pros_cons(field: str, value: object) -> None:
    assert is_valid_record(make_crush(**{field: value})) is False


@pytest.mark.parametrize("created_at", [None, "", "not a valid date", 1700000000, "2024-13-40"])
def test_rejects_bad_created_at(created_at: object) -> None:
    assert is_valid_record(make_crush(createdAt=created_at)) is False


@pytest.mark.parametrize(
    "created_at", ["2024-02-14T18:30:00.000Z", "2024-02-14T18:30:00+01:00", "2024-02-14"]
)
def test_accepts_iso_timestamps(created_at: str) -> None:
    assert is_valid_record(make_crush(createdAt=created_at)) is True


def test_description_length_limit() -> None:
    assert is_valid_record(make_crush(description="a" * 500)) is True
    assert is_valid_record(make_crush(description="a" * 501)) is False


def test_rejects_non_string_description() -> None:
    assert is_valid_record(make_crush(description=["a"])) is False


def test_accepts_valid_actions() -> None:
    record = make_crush(
        pros=[make_action(id="p1", title="Good", description="Very good")],
        cons=[make_action(id="c1", title="Bad")],
        mistakes=1,
    )
    assert is_valid_record(record) is True


def test_one_bad_con_rejects_whole_record() -> None:
    record = make_crush(
        pros=[make_action(id="p1")],
        cons=[make_action(id="c1"), make_action(id="c2", title="a" * 101)],
    )
    assert is_valid_record(record) is False


def test_rejects_action_description_over_limit() -> None:
    record = make_crush(pros=[make_action(description="a" * 501)])
    assert is_valid_record(record) is False


def test_action_title_length_limit() -> None:
    assert is_valid_action(make_action(title="a" * 100)) is True
    assert is_valid_action(make_action(title="a" * 101)) is False


@pytest.mark.parametrize(
    "entry",
    [
        None,
        "entry",
        {"title": "No id"},
        {"id": "", "title": "Empty id"},
        {"id": "a1"},
        {"id": "a1", "title": ""},
        {"id": "a1", "title": 5},
    ],
)
def test_rejects_bad_actions(entry: object) -> None:
    assert is_valid_action(entry) is False
    assert is_valid_record(make_crush(cons=[entry])) is False


def test_action_without_description_or_timestamp_is_accepted() -> None:
    assert is_valid_action({"id": "a1", "title": "Minimal"}) is True


def test_numeric_action_id_is_accepted() -> None:
    assert is_valid_action({"id": 1700000000000, "title": "Legacy"}) is True


def test_duplicate_ids_are_not_checked() -> None:
    record = make_crush(pros=[make_action(id="x"), make_action(id="x")])
    assert is_valid_record(record) is True


class TestExtensionFields:
    """Fields added after the first release are optional but checked when present."""

    def test_accepts_all_optional_fields(self) -> None:
        record = make_crush(
            pros=[make_action(id="p1", title="Good", description="Very good")],
            cons=[make_action(id="c1", title="Bad", description="Kind of bad")],
            mistakes=1,
            qualities=[{"id": "q1", "text": "Kind"}],
            defects=[{"id": "d1", "text": "Late"}],
            feelings=75,
            order=0,
            status="active",
            diaryEntries=[
                {
                    "id": "e1",
                    "title": "Entry",
                    "description": "My entry",
                    "createdAt": "2024-02-14T18:30:00.000Z",
                }
            ],
            picture="file:///path/to/image.jpg",
        )
        assert is_valid_record(record) is True

    @pytest.mark.parametrize("field", ["qualities", "defects", "diaryEntries"])
    def test_rejects_non_list(self, field: str) -> None:
        assert is_valid_record(make_crush(**{field: "not an array"})) is False

    @pytest.mark.parametrize("field", ["qualities", "defects", "diaryEntries", "picture"])
    def test_null_means_absent(self, field: str) -> None:
        assert is_valid_record(make_crush(**{field: None})) is True

    @pytest.mark.parametrize("feelings", [150, -10, "50", True])
    def test_rejects_bad_feelings(self, feelings: object) -> None:
        assert is_valid_record(make_crush(feelings=feelings)) is False

    @pytest.mark.parametrize("feelings", [0, 50, 100, 33.3])
    def test_accepts_feelings_in_range(self, feelings: float) -> None:
        assert is_valid_record(make_crush(feelings=feelings)) is True

    def test_rejects_non_number_order(self) -> None:
        assert is_valid_record(make_crush(order="first")) is False

    @pytest.mark.parametrize("field", ["feelings", "order"])
    def test_rejects_explicit_null_number_fields(self, field: str) -> None:
        assert is_valid_record(make_crush(**{field: None})) is False

    @pytest.mark.parametrize("status", ["active", "ended", "standby"])
    def test_accepts_known_statuses(self, status: str) -> None:
        assert is_valid_record(make_crush(status=status)) is True

    @pytest.mark.parametrize("status", ["invalid_status", "", 1, ["active"]])
    def test_rejects_unknown_status(self, status: object) -> None:
        assert is_valid_record(make_crush(status=status)) is False

    def test_rejects_non_string_picture(self) -> None:
        assert is_valid_record(make_crush(picture=123)) is False

    @pytest.mark.parametrize(
        "trait",
        [{"text": "Kind"}, {"id": "q1", "text": ""}, {"id": "q1", "text": "a" * 51}, None],
    )
    def test_rejects_bad_traits(self, trait: Any) -> None:
        assert is_valid_trait(trait) is False
        assert is_valid_record(make_crush(qualities=[trait])) is False
        assert is_valid_record(make_crush(defects=[trait])) is False

    def test_trait_text_length_limit(self) -> None:
        assert is_valid_trait({"id": "q1", "text": "a" * 50}) is True

    @pytest.mark.parametrize(
        "entry",
        [
            {"title": "Entry", "createdAt": "2024-02-14T18:30:00Z"},
            {"id": "e1", "title": "a" * 101, "createdAt": "2024-02-14T18:30:00Z"},
            {
                "id": "e1",
                "title": "Entry",
                "description": "a" * 1001,
                "createdAt": "2024-02-14T18:30:00Z",
            },
            {"id": "e1", "title": "Entry", "createdAt": "invalid date"},
            {"id": "e1", "title": "Entry"},
        ],
    )
    def test_rejects_bad_diary_entries(self, entry: dict[str, Any]) -> None:
        assert is_valid_diary_entry(entry) is False
        assert is_valid_record(make_crush(diaryEntries=[entry])) is False

    def test_diary_description_limit_is_larger_than_action_limit(self) -> None:
        entry = {
            "id": "e1",
            "title": "Entry",
            "description": "a" * 1000,
            "createdAt": "2024-02-14T18:30:00Z",
        }
        assert is_valid_diary_entry(entry) is True


def test_is_valid_timestamp() -> None:
    assert is_valid_timestamp("2024-02-14T18:30:00.000Z") is True
    assert is_valid_timestamp("yesterday") is False
    assert is_valid_timestamp(None) is False


def test_filter_valid_keeps_order_and_drops_invalid() -> None:
    first = make_crush(id="1", name="First")
    second = make_crush(id="2", name="Second")
    candidates = [first, make_crush(id="x", mistakes=6), None, second, {"id": "3"}]

    result = filter_valid(candidates)

    assert result == [first, second]
    assert result[0] is first


def test_filter_valid_on_empty_input() -> None:
    assert filter_valid([]) == []


def test_lengths_count_code_points() -> None:
    emoji_name = "\U0001f600" * 50

    assert is_valid_record(make_crush(name=emoji_name)) is True
    assert is_valid_record(make_crush(name=emoji_name + "a")) is False
