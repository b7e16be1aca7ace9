import importlib.util
from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parents[2] / "scripts"


def _load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_seed_bins_are_valid_and_reproducible() -> None:
    seed_data = _load_script("seed_data")

    first = seed_data.generate_bins(10, seed="demo", threshold=75)
    second = seed_data.generate_bins(10, seed="demo", threshold=75)

    assert [item.id for item in first] == list(range(1, 11))
    assert [item.fill_level for item in first] == [item.fill_level for item in second]
    for item in first:
        assert 0 <= item.fill_level <= 100
        assert item.needs_collection is (item.fill_level >= 75)


def test_cli_builds_update_request() -> None:
    bins_cli = _load_script("bins_cli")

    args = bins_cli.parse_args(["update", "3", "--fill-level", "80", "--needs-collection"])
    assert bins_cli.build_request(args) == ("PUT", "/bins/3", {"fillLevel": 80, "needsCollection": True})

    args = bins_cli.parse_args(["add", "Main St", "Fifth Ave"])
    assert bins_cli.build_request(args) == ("POST", "/bins", [{"location": "Main St"}, {"location": "Fifth Ave"}])

    args = bins_cli.parse_args(["route"])
    assert bins_cli.build_request(args) == ("GET", "/optimize-route", None)
