import jobportal.main as main_mod


def test_auth_rate_limit_blocks_excess_requests(monkeypatch, live_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 2)

    # Unknown account: the limiter answers before the third lookup.
    payload = {"email": "x@example.com", "password": "bad-password", "role": "jobseeker"}
    r1 = live_client.post("/auth/login", json=payload)
    r2 = live_client.post("/auth/login", json=payload)
    r3 = live_client.post("/auth/login", json=payload)

    assert r1.status_code == 404
    assert r2.status_code == 404
    assert r3.status_code == 429
    assert int(r3.headers["Retry-After"]) >= 1


def test_reset_links_share_one_bucket(monkeypatch, live_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    body = {"password": "whatever123"}
    assert live_client.post("/auth/reset-password/aaa", json=body).status_code == 400
    assert live_client.post("/auth/reset-password/bbb", json=body).status_code == 429


def test_non_auth_routes_are_not_limited(monkeypatch, live_client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    for _ in range(3):
        assert live_client.get("/health/live").status_code == 200
