import pytest

STRATEGY = {
    "name": "Advanced Delta Neutral",
    "description": "A delta neutral strategy for volatile markets",
    "type": "OPTION",
    "config": {
        "instruments": [{"name": "Sell NIFTY BANK ATM O CE"}, {"name": "Sell NIFTY BANK ATM O PE"}],
        "startTime": "9:22",
        "endTime": "15:11",
        "segmentType": "OPTION",
        "strategyType": "Time Based",
        "legs": {"ce": {"strike": 44500, "lots": [1, 2, 3]}, "hedged": True, "note": None},
    },
}


@pytest.fixture
def alice_strategy(alice):
    resp = alice.post("/api/strategies", json=STRATEGY)
    assert resp.status_code == 201
    return resp.json()


def test_create_returns_owned_record(alice, alice_strategy):
    assert alice_strategy["id"] == 1
    assert alice_strategy["userId"] == 1
    assert alice_strategy["isDeployed"] is False
    assert alice_strategy["maxDrawdown"] == 0
    assert alice_strategy["margin"] == 0
    assert "createdAt" in alice_strategy


def test_config_round_trips_unchanged(alice, alice_strategy):
    resp = alice.get(f"/api/strategies/{alice_strategy['id']}")
    assert resp.status_code == 200
    assert resp.json()["config"] == STRATEGY["config"]


def test_create_ignores_client_owner(alice, bob):
    resp = bob.post("/api/strategies", json={**STRATEGY, "userId": 1})
    assert resp.status_code == 201
    assert resp.json()["userId"] == 2


def test_create_validation(alice):
    resp = alice.post("/api/strategies", json={"description": "no name"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request data"


def test_other_user_gets_forbidden_not_not_found(bob, alice_strategy):
    resp = bob.get(f"/api/strategies/{alice_strategy['id']}")
    assert resp.status_code == 403
    assert resp.json() == {"message": "Not authorized to access this strategy"}


def test_anonymous_gets_unauthorized(client, alice_strategy):
    resp = client.get(f"/api/strategies/{alice_strategy['id']}")
    assert resp.status_code == 401


def test_missing_strategy_is_not_found(alice):
    resp = alice.get("/api/strategies/999")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Strategy not found"}


def test_non_numeric_id_is_bad_request(alice):
    assert alice.get("/api/strategies/abc").status_code == 400


def test_anonymous_checked_before_id_parsing(client):
    assert client.get("/api/strategies/abc").status_code == 401
    assert client.post("/api/strategies", json={}).status_code == 401


def test_list_routes_filter_by_owner(alice, bob, alice_strategy):
    bob.post("/api/strategies", json={**STRATEGY, "isDeployed": True})
    alice.post("/api/strategies", json={**STRATEGY, "name": "Deployed", "isDeployed": True})

    mine = alice.get("/api/strategies").json()
    assert [s["userId"] for s in mine] == [1, 1]

    deployed = alice.get("/api/strategies/deployed").json()
    assert [s["name"] for s in deployed] == ["Deployed"]

    assert [s["userId"] for s in bob.get("/api/strategies/deployed").json()] == [2]


def test_patch_merges_and_ignores_identity(alice, alice_strategy):
    sid = alice_strategy["id"]
    resp = alice.patch(
        f"/api/strategies/{sid}",
        json={"isDeployed": True, "userId": 2, "id": 50, "createdAt": "2000-01-01T00:00:00"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["isDeployed"] is True
    assert body["id"] == sid
    assert body["userId"] == 1
    assert body["createdAt"] == alice_strategy["createdAt"]
    assert body["name"] == STRATEGY["name"]
    assert body["config"] == STRATEGY["config"]


def test_patch_and_delete_enforce_ownership(alice, bob, alice_strategy):
    sid = alice_strategy["id"]
    assert bob.patch(f"/api/strategies/{sid}", json={"name": "mine"}).status_code == 403
    assert bob.delete(f"/api/strategies/{sid}").status_code == 403
    assert alice.get(f"/api/strategies/{sid}").json()["name"] == STRATEGY["name"]

    assert alice.patch("/api/strategies/404", json={"name": "x"}).status_code == 404
    assert alice.delete("/api/strategies/404").status_code == 404


def test_delete(alice, alice_strategy):
    sid = alice_strategy["id"]
    resp = alice.delete(f"/api/strategies/{sid}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Strategy deleted successfully"}
    assert alice.get(f"/api/strategies/{sid}").status_code == 404

    recreated = alice.post("/api/strategies", json=STRATEGY).json()
    assert recreated["id"] > sid


def test_created_at_carries_utc_offset(alice_strategy):
    assert alice_strategy["createdAt"].endswith("Z") or alice_strategy["createdAt"].endswith("+00:00")


def test_patch_null_clears_optional_fields(alice, alice_strategy):
    sid = alice_strategy["id"]
    resp = alice.patch(f"/api/strategies/{sid}", json={"description": None, "config": None})
    assert resp.status_code == 200
    body = resp.json()
    assert body["description"] is None
    assert body["config"] is None
    assert body["name"] == STRATEGY["name"]


def test_patch_null_rejected_for_required_fields(alice, alice_strategy):
    sid = alice_strategy["id"]
    for field in ("name", "type", "isDeployed", "margin"):
        resp = alice.patch(f"/api/strategies/{sid}", json={field: None})
        assert resp.status_code == 400, field
    assert alice.get(f"/api/strategies/{sid}").json()["name"] == STRATEGY["name"]


def test_forbidden_message_names_the_action(bob, alice_strategy):
    sid = alice_strategy["id"]
    assert bob.patch(f"/api/strategies/{sid}", json={"name": "x"}).json() == {
        "message": "Not authorized to update this strategy"
    }
    assert bob.delete(f"/api/strategies/{sid}").json() == {
        "message": "Not authorized to delete this strategy"
    }


@pytest.mark.parametrize("strategy_id", ["0", "99999999999999999999", str(2**63)])
def test_out_of_range_id_is_bad_request(alice, strategy_id):
    assert alice.get(f"/api/strategies/{strategy_id}").status_code == 400
    assert alice.patch(f"/api/strategies/{strategy_id}", json={"name": "x"}).status_code == 400
    assert alice.delete(f"/api/strategies/{strategy_id}").status_code == 400


def test_largest_id_is_not_found(alice):
    assert alice.get(f"/api/strategies/{2**63 - 1}").status_code == 404
