"""Tests for the prediction web API routes."""

from web.deps import get_feed


def test_sicbo_payload_shape(client):
    res = client.get("/sicbo")
    assert res.status_code == 200
    data = res.json()
    assert set(data) == {
        "phien",
        "xuc_xac_1",
        "xuc_xac_2",
        "xuc_xac_3",
        "tong",
        "ket_qua",
        "phien_hien_tai",
        "du_doan",
        "dudoan_vi",
        "do_tin_cay",
    }
    assert data["phien"] == "#0000112"
    assert data["phien_hien_tai"] == "#0000113"
    assert (data["xuc_xac_1"], data["xuc_xac_2"], data["xuc_xac_3"]) == (2, 3, 3)
    assert data["tong"] == 8
    assert data["ket_qua"] == "Xỉu"
    assert data["du_doan"] in ("Tài", "Xỉu")


def test_sicbo_display_values(client):
    data = client.get("/sicbo").json()
    low, high = (11, 16) if data["du_doan"] == "Tài" else (5, 10)
    values = [int(v) for v in data["dudoan_vi"].split(",")]
    assert len(values) == 3
    assert all(low <= v <= high for v in values)
    assert data["do_tin_cay"].endswith("%")
    assert 50 <= int(data["do_tin_cay"][:-1]) <= 100


def test_sicbo_records_votes(client, engine):
    client.get("/sicbo")
    assert len(engine.store) == 5


def test_sicbo_unavailable(client, unavailable_feed):
    from web.app import app

    app.dependency_overrides[get_feed] = lambda: unavailable_feed
    res = client.get("/sicbo")
    assert res.status_code == 503
    assert "upstream" in res.json()["detail"]


def test_predict_detail(client):
    res = client.get("/api/predict")
    assert res.status_code == 200
    data = res.json()
    assert data["session"] == "#0000112"
    assert data["next_session"] == "#0000113"
    assert data["outcome"] in ("Tài", "Xỉu")
    assert 0.0 <= data["confidence"] <= 1.0
    assert data["fallback"] is False
    assert set(data["votes"]) == {"trend", "short", "mean", "switch", "bridge", "rules"}
    assert set(data["votes"].values()) <= {"NONE", "TAI", "XIU"}
    assert set(data["scores"]) == {"trend", "short", "mean", "switch", "bridge"}
    assert " | " in data["rationale"]


def test_predict_detail_unavailable(client, unavailable_feed):
    from web.app import app

    app.dependency_overrides[get_feed] = lambda: unavailable_feed
    assert client.get("/api/predict").status_code == 503


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_metrics(client):
    client.get("/sicbo")
    data = client.get("/api/metrics").json()
    assert data["counters"]["ensemble.predictions"] >= 1
    assert "ensemble.predict" in data["timers"]
