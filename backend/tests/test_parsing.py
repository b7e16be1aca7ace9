from waste_api.api.parsing import parse_bin_update, parse_new_bins
from waste_api.models.schemas import BinUpdate


def test_parse_single_bin_object() -> None:
    assert parse_new_bins({"location": "Main St"}) == (["Main St"], None)


def test_parse_bin_array() -> None:
    assert parse_new_bins([{"location": "A"}, {"location": "B", "fillLevel": 50}]) == (["A", "B"], None)


def test_parse_empty_array_creates_nothing() -> None:
    assert parse_new_bins([]) == ([], None)


def test_parse_new_bins_errors() -> None:
    assert parse_new_bins(None)[1] is not None
    assert parse_new_bins({"location": 5})[1] == "Each bin must have a location string"
    assert parse_new_bins(["Main St"])[1] == "Each bin must have a location string"
    assert parse_new_bins({"location": ""})[1] == "Bin location must not be empty"


def test_parse_new_bins_accepts_blank_looking_location() -> None:
    assert parse_new_bins({"location": "   "}) == (["   "], None)


def test_parse_update_fields() -> None:
    changes, error = parse_bin_update({"location": "B", "fillLevel": 42, "needsCollection": True})
    assert error is None
    assert changes.location == "B"
    assert changes.fill_level == 42
    assert changes.needs_collection is True


def test_parse_update_empty_body() -> None:
    changes, error = parse_bin_update({})
    assert error is None
    assert changes.location is None
    assert changes.fill_level is None
    assert changes.needs_collection is None


def test_parse_update_truncates_float_fill_level() -> None:
    changes, _ = parse_bin_update({"fillLevel": 150.7})
    assert changes.fill_level == 150


def test_parse_update_rejects_non_object() -> None:
    assert parse_bin_update([]) == (None, "Request body must be a JSON object")
    assert parse_bin_update(None)[0] is None


def test_parse_update_skips_mistyped_fields() -> None:
    changes, error = parse_bin_update(
        {"location": 5, "fillLevel": "10", "needsCollection": 1}
    )
    assert error is None
    assert changes == BinUpdate()

    changes, _ = parse_bin_update({"fillLevel": True, "location": "", "needsCollection": False})
    assert changes.fill_level is None
    assert changes.location is None
    assert changes.needs_collection is False
