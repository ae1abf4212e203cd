"""API tests for the coupon endpoints (today is 2026-10-19)."""

COUPONS_URL = "/api/v1/cupom"


def test_create_expired_coupon_is_inactive_and_deletable(client):
    r = client.post(
        COUPONS_URL,
        json={"code": "SAVE10", "value": 10, "min_purchase": 0, "expires_on": "2026-10-18"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["active"] is False

    assert client.delete(f"{COUPONS_URL}/{body['id']}").status_code == 204


def test_delete_valid_coupon_returns_409(client):
    c = client.post(
        COUPONS_URL,
        json={"code": "SAVE10", "value": 10, "min_purchase": 0, "expires_on": "2026-12-31"},
    ).json()
    assert c["active"] is True

    r = client.delete(f"{COUPONS_URL}/{c['id']}")
    assert r.status_code == 409
    assert r.json()["detail"] == "COUPON_STILL_VALID"


def test_invalid_coupon_returns_400(client):
    r = client.post(COUPONS_URL, json={"code": "SAVE", "value": 0, "min_purchase": 0, "expires_on": "2026-12-31"})
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_COUPON"


def test_list_only_active_coupons(client):
    assert client.get(COUPONS_URL).status_code == 404

    client.post(COUPONS_URL, json={"code": "OLD", "value": 5, "min_purchase": 0, "expires_on": "2026-01-01"})
    client.post(COUPONS_URL, json={"code": "NEW", "value": 5, "min_purchase": 0, "expires_on": "2027-01-01"})

    r = client.get(COUPONS_URL)
    assert r.status_code == 200
    assert [c["code"] for c in r.json()] == ["NEW"]


def test_update_moves_expiry_and_recomputes_active(client):
    c = client.post(
        COUPONS_URL,
        json={"code": "SAVE", "value": 5, "min_purchase": 0, "expires_on": "2027-01-01"},
    ).json()
    r = client.put(f"{COUPONS_URL}/{c['id']}", json={"expires_on": "2026-10-19"})
    assert r.status_code == 200
    assert r.json()["active"] is False
    assert r.json()["code"] == "SAVE"
