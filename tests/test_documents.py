"""Tests for reading input documents and writing output."""

import json

import pytest
from smarthome import documents
from smarthome.models import DeviceMode, ScheduleOutput, TariffPeriod

INPUT = {
    "devices": [
        {"id": "dw", "name": "Dishwasher", "power": 950, "duration": 3, "mode": "night"},
        {"id": "fridge", "name": "Refrigerator", "power": 50, "duration": 24},
    ],
    "rates": [
        {"from": 7, "to": 23, "value": 6.46},
        {"from": 23, "to": 7, "value": 1.79},
    ],
    "maxPower": 2100,
}


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(INPUT))
    return path


def test_load_input_json(input_file):
    data = documents.load_input(input_file)

    assert data.max_power == 2100
    assert data.rates[1] == TariffPeriod(start=23, end=7, value=1.79)
    assert [d.id for d in data.devices] == ["dw", "fridge"]
    assert data.devices[0].policy is DeviceMode.NIGHT
    assert data.devices[0].name == "Dishwasher"
    assert data.devices[1].policy is DeviceMode.ALWAYS_ON
    assert data.devices[1].mode is None


def test_load_input_yaml(tmp_path):
    path = tmp_path / "input.yaml"
    path.write_text(
        "maxPower: 1000\n"
        "rates:\n"
        "  - {from: 0, to: 24, value: 2}\n"
        "devices:\n"
        "  - {id: kettle, power: 2000, duration: 1, mode: day}\n"
    )

    data = documents.load_input(path)

    assert data.max_power == 1000
    assert data.devices[0].policy is DeviceMode.DAY


def test_missing_input(tmp_path):
    with pytest.raises(documents.InputNotFoundError):
        documents.load_input(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "input.json"
    path.write_text("{not json")

    with pytest.raises(documents.InvalidInputError, match="invalid json"):
        documents.load_input(path)


def test_non_mapping_document(tmp_path):
    path = tmp_path / "input.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(documents.InvalidInputError):
        documents.load_input(path)


def test_missing_field_is_named(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({"rates": [], "devices": []}))

    with pytest.raises(documents.InvalidInputError, match="maxPower"):
        documents.load_input(path)


def test_errors_share_a_base_class():
    for error in (documents.InputNotFoundError, documents.InvalidInputError, documents.OutputWriteError):
        assert issubclass(error, documents.SmarthomeError)


def test_save_output(tmp_path):
    output = ScheduleOutput(
        schedule={10: ["oven"], 2: ["dw", "fridge"]},
        total_energy=3.5,
        devices={"dw": 1.5, "oven": 2.0},
    )

    path = documents.save_output(output, tmp_path / "output.json")

    text = path.read_text()
    assert "\t" in text
    document = json.loads(text)
    assert list(document["schedule"]) == ["2", "10"]
    assert document["schedule"]["2"] == ["dw", "fridge"]
    assert document["consumedEnergy"] == {"value": 3.5, "devices": {"dw": 1.5, "oven": 2.0}}


def test_save_output_unwritable(tmp_path):
    target = tmp_path / "missing" / "output.json"

    with pytest.raises(documents.OutputWriteError, match="failed to create a file"):
        documents.save_output(ScheduleOutput(), target)


def test_undecodable_bytes_are_invalid_json(tmp_path):
    path = tmp_path / "input.json"
    path.write_bytes(b'{"maxPower": 1\xff}')

    with pytest.raises(documents.InvalidInputError, match="invalid json"):
        documents.load_input(path)


def test_undecodable_bytes_are_invalid_yaml(tmp_path):
    path = tmp_path / "input.yaml"
    path.write_bytes(b"maxPower: \xff\xfe\n")

    with pytest.raises(documents.InvalidInputError, match="invalid yaml"):
        documents.load_input(path)
