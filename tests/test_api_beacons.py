import pytest
from fastapi.testclient import TestClient

from ognbeacon.api import beacons as beacons_module
from ognbeacon.main import app
from ognbeacon.parsers import classify, decode
from ognbeacon.services.registry import DeviceRegistry, get_device_registry

EDMA_LINE = (
    "D-4465>APRS,qAS,EDMA:/132350h4825.31N/01055.79E'112/002/A=001512 "
    "id06DF03B3 -019fpm +0.0rot 39.0dB 0e -6.7kHz gps1x2 hear0CC5 hearABA7"
)
EDMA_UPDATE = "D-4465>APRS,qAS,EDMA:/132450h4825.40N/01055.79E'112/003/A=001600 +100fpm"
RECEIVER_LINE = (
    "LFLE>APRS,TCPIP*,qAC,GLIDERN2:/102546h4530.27NI00600.52E&/A=001024 "
    "v0.2.6.ARM CPU:0.5 RAM:564.7/968.2MB NTP:1.7ms/-3.7ppm +42.8C RF:+39+1.6ppm/+0.25dB"
)
DF03B3_RECORD = (
    "DF03B3" + "Club Augsburg".ljust(20) + " " + "Augsburg".ljust(21) + "LS-4".ljust(21)
    + "D-4465".ljust(7) + "65".ljust(3) + "123.500"
)


@pytest.fixture
def registry(tmp_path):
    path = tmp_path / "data.fln"
    path.write_text(DF03B3_RECORD.encode("latin-1").hex())
    registry = DeviceRegistry(source=str(path))
    app.dependency_overrides[get_device_registry] = lambda: registry
    yield registry
    app.dependency_overrides.clear()


@pytest.fixture
def client(registry):
    beacons_module.aircraft_beacons.clear()
    beacons_module.receiver_beacons.clear()
    with TestClient(app) as test_client:
        yield test_client
    beacons_module.aircraft_beacons.clear()
    beacons_module.receiver_beacons.clear()


def test_health_check(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_decode_endpoint_returns_beacon(client):
    response = client.post("/api/v1/beacons/decode", json={"line": EDMA_LINE + "\n"})

    assert response.status_code == 200
    body = response.json()
    assert body["tracker_id"] == "D-4465"
    assert body["address"] == "DF03B3"
    assert body["address_type"] == 2
    assert sorted(body["heard_aircraft_ids"]) == ["0CC5", "ABA7"]
    assert body["erp_dbm"] is None


def test_decode_endpoint_rejects_undecodable_line(client):
    response = client.post("/api/v1/beacons/decode", json={"line": "invalid packet"})

    assert response.status_code == 422


def test_submitted_beacons_are_merged_and_enriched(client, registry):
    registry.reload()

    first = client.post("/api/v1/beacons", json=decode(EDMA_LINE).model_dump(mode="json"))
    second = client.post("/api/v1/beacons", json=decode(EDMA_UPDATE).model_dump(mode="json"))

    assert first.status_code == 200
    assert second.status_code == 200
    merged = second.json()
    assert merged["climb_rate_ms"] == 0.51
    assert merged["signal_strength_db"] == 39.0

    response = client.get("/api/v1/beacons/D-4465")
    assert response.status_code == 200
    body = response.json()
    assert body["beacon"]["raw_line"] == EDMA_UPDATE
    assert body["beacon"]["address"] == "DF03B3"
    assert body["descriptor"]["registration"] == "D-4465"
    assert body["descriptor"]["owner"] == "Club Augsburg"


def test_unknown_tracker_returns_404(client):
    assert client.get("/api/v1/beacons/UNKNOWN").status_code == 404


def test_receiver_beacons_are_stored(client):
    receiver = classify(RECEIVER_LINE)

    response = client.post("/api/v1/receivers", json=receiver.model_dump(mode="json"))
    assert response.status_code == 200

    response = client.get("/api/v1/receivers/LFLE")
    assert response.status_code == 200
    assert response.json()["server_name"] == "GLIDERN2"
    assert client.get("/api/v1/receivers/NOPE").status_code == 404


def test_registry_lookup_and_reload(client):
    assert client.get("/api/v1/registry/DF03B3").status_code == 404

    response = client.post("/api/v1/registry/reload")
    assert response.status_code == 200
    assert response.json() == {"loaded": 1, "entries": 1}

    response = client.get("/api/v1/registry/DF03B3")
    assert response.status_code == 200
    assert response.json()["model"] == "LS-4"
