"""
Singleton resources: system status and dashboard settings.
"""


def test_system_status_defaults_and_update(client):
    data = client.get("/api/v1/system-status/").json()
    assert (data["chiller_status"], data["heater_status"], data["system_mode"]) == (
        "Standby",
        "Standby",
        "Idle",
    )

    resp = client.put("/api/v1/system-status/", json={"chiller_status": "Off", "system_mode": "Cooling"})
    assert resp.status_code == 200
    data = client.get("/api/v1/system-status/").json()
    assert data["chiller_status"] == "Off"
    assert data["heater_status"] == "Standby"
    assert data["system_mode"] == "Cooling"


def test_settings_defaults_and_bounds(client):
    data = client.get("/api/v1/settings/").json()
    assert data["temperature_unit"] == "celsius"
    assert data["refresh_rate"] == 30
    assert data["number_of_tanks"] == 9

    assert client.put("/api/v1/settings/", json={"refresh_rate": 0}).status_code == 422
    assert client.put("/api/v1/settings/", json={"temperature_unit": "fahrenheit"}).json()[
        "temperature_unit"
    ] == "fahrenheit"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_null_status_fields_are_rejected(client):
    resp = client.put("/api/v1/system-status/", json={"system_mode": None})
    assert resp.status_code == 400
    assert resp.json()["field"] == "system_mode"

    resp = client.put("/api/v1/settings/", json={"refresh_rate": None})
    assert resp.status_code == 400
    assert resp.json()["field"] == "refresh_rate"
