"""Function Host Entry — stdin/file in, JSON out."""

import json

from typer.testing import CliRunner

from hidecod.function_main import app

runner = CliRunner()

PAYLOAD = {
    "paymentCustomization": {"metafield": {"jsonValue": {"allowedCities": ["Lahore"]}}},
    "cart": {"deliveryGroups": [{"deliveryAddress": {"city": "Karachi"}}]},
    "paymentMethods": [{"id": "pm1", "name": "Cash on Delivery"}],
}


def test_reads_stdin():
    result = runner.invoke(app, [], input=json.dumps(PAYLOAD))
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "operations": [{"hide": {"paymentMethodId": "pm1"}}],
    }


def test_reads_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(PAYLOAD), encoding="utf-8")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 0
    assert len(json.loads(result.stdout)["operations"]) == 1


def test_invalid_json_is_no_change():
    result = runner.invoke(app, [], input="not json")
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"operations": []}


def test_deeply_nested_json_is_no_change():
    result = runner.invoke(app, [], input="[" * 200_000)
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"operations": []}
