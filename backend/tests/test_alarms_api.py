"""
/api/v1/alarms
"""

URL = "/api/v1/alarms/"


def test_create_starts_inactive(client, tank):
    resp = client.post(URL, json={"name": "warm", "type": "High Temperature", "threshold": 75, "tank_id": tank.id})
    assert resp.status_code == 201
    assert resp.json()["is_active"] is False


def test_unknown_type_and_tank(client, tank):
    bad_type = client.post(URL, json={"name": "x", "type": "Fire", "threshold": 1, "tank_id": tank.id})
    assert bad_type.status_code == 422
    no_tank = client.post(URL, json={"name": "x", "type": "System Error", "threshold": 0, "tank_id": 99})
    assert no_tank.status_code == 404


def test_active_list_follows_monitor(client, app, db, tank):
    alarm_id = client.post(
        URL, json={"name": "warm", "type": "High Temperature", "threshold": 75, "tank_id": tank.id}
    ).json()["id"]
    assert client.get(f"{URL}active").json() == []

    client.post(f"/api/v1/tanks/{tank.id}/temperature", json={"temperature": 80.0})
    app.state.alarm_monitor.evaluate_once()

    assert [a["id"] for a in client.get(f"{URL}active").json()] == [alarm_id]


def test_update_and_delete(client, tank):
    alarm_id = client.post(
        URL, json={"name": "warm", "type": "High Temperature", "threshold": 75, "tank_id": tank.id}
    ).json()["id"]
    assert client.put(f"{URL}{alarm_id}", json={"threshold": 70}).json()["threshold"] == 70
    assert client.delete(f"{URL}{alarm_id}").status_code == 204
    assert client.get(f"{URL}{alarm_id}").status_code == 404


def test_null_threshold_is_rejected(client, tank):
    alarm_id = client.post(
        URL, json={"name": "warm", "type": "High Temperature", "threshold": 75, "tank_id": tank.id}
    ).json()["id"]
    resp = client.put(f"{URL}{alarm_id}", json={"threshold": None})
    assert resp.status_code == 400
    assert resp.json()["field"] == "threshold"
    assert client.get(f"{URL}{alarm_id}").json()["threshold"] == 75
