from roi_api.core.errors import ComputationError
from roi_api.routers import calculations

URL = "/api/calculations"


def test_create_calculation_persists_record(client, valid_input):
    resp = client.post(URL, json=valid_input)
    assert resp.status_code == 201
    body = resp.json()

    assert isinstance(body["id"], int)
    assert "createdAt" in body
    assert body["monthlyInvocations"] == 1_000_000
    assert body["memorySize"] == 512
    assert body["traditionalCost"] == 500
    assert body["savings"] == body["traditionalCost"] - body["serverlessCost"]
    assert body["roi"] == body["savings"] / body["serverlessCost"] * 100
    assert body["paybackPeriod"] == 0.0


def test_preview_does_not_persist(client, valid_input):
    before = len(client.get(URL).json())

    resp = client.post(URL, params={"save": "false"}, json=valid_input)

    assert resp.status_code == 200
    assert set(resp.json()) == {
        "serverlessCost",
        "traditionalCost",
        "savings",
        "roi",
        "paybackPeriod",
    }
    assert len(client.get(URL).json()) == before


def test_negative_savings_serializes_null_payback(client, valid_input):
    valid_input["traditionalServerCost"] = 0
    resp = client.post(URL, json=valid_input)
    assert resp.status_code == 201
    assert resp.json()["paybackPeriod"] is None


def test_validation_error_returns_400_with_all_fields(client):
    resp = client.post(URL, json={"monthlyInvocations": -1, "memorySize": 50})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Bad Request"
    assert {
        "monthlyInvocations",
        "memorySize",
        "averageExecutionTime",
        "traditionalServerCost",
    } <= set(body["errors"])


def test_unknown_field_returns_400(client, valid_input):
    valid_input["extraField"] = 1
    resp = client.post(URL, json=valid_input)
    assert resp.status_code == 400
    assert "extraField" in resp.json()["errors"]


def test_non_object_body_returns_400(client):
    resp = client.post(URL, json=[1, 2, 3])
    assert resp.status_code == 400
    assert "body" in resp.json()["errors"]


def test_missing_body_returns_400(client):
    resp = client.post(URL)
    assert resp.status_code == 400


def test_list_is_in_calculation_order(client, valid_input):
    ids = []
    for cost in (100, 200, 300):
        valid_input["traditionalServerCost"] = cost
        ids.append(client.post(URL, json=valid_input).json()["id"])

    listed = [r["id"] for r in client.get(URL).json()]
    assert [i for i in listed if i in ids] == ids
    assert listed == sorted(listed)


def test_get_calculation(client, valid_input):
    created = client.post(URL, json=valid_input).json()

    resp = client.get(f"{URL}/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_get_unknown_calculation_returns_404(client):
    resp = client.get(f"{URL}/999999")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Not Found"


def test_delete_calculation(client, valid_input):
    created = client.post(URL, json=valid_input).json()

    resp = client.delete(f"{URL}/{created['id']}")
    assert resp.status_code == 204

    assert client.get(f"{URL}/{created['id']}").status_code == 404
    assert client.delete(f"{URL}/{created['id']}").status_code == 404


def test_computation_error_returns_500(client, valid_input, monkeypatch):
    def _runaway(raw, **kwargs):
        raise ComputationError("serverlessCost", float("inf"))

    monkeypatch.setattr(calculations, "parse_and_compute", _runaway)
    resp = client.post(URL, json=valid_input)
    assert resp.status_code == 500
    assert resp.json()["message"] == "Calculation failed"


def test_input_above_caps_returns_400(client, valid_input):
    valid_input["traditionalServerCost"] = 1e307
    resp = client.post(URL, json=valid_input)
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"traditionalServerCost"}


def test_root_and_docs(client):
    assert client.get("/api").json()["apiVersion"] == "v1"
    assert client.get("/api/docs").status_code == 200
    paths = client.get("/api/openapi.json").json()["paths"]
    assert "/api/calculations" in paths
    assert "/api/calculations/{calculation_id}" in paths
