"""End-to-end tests for the JSON API through the Flask test client."""

from __future__ import annotations

import pytest


def _register(client, username="alice", password="s3cret-pass"):
    response = client.post(
        "/api/auth/register",
        json={"username": username, "password": password, "email": f"{username}@example.com"},
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["token"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token(client):
    return _register(client)


@pytest.fixture
def portfolio_id(client, token):
    response = client.post("/api/portfolios", json={"name": "Retirement"}, headers=_auth(token))
    assert response.status_code == 201
    return response.get_json()["id"]


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_register_login_and_verify(client):
    token = _register(client)

    login = client.post("/api/auth/login", json={"username": "alice", "password": "s3cret-pass"})
    assert login.status_code == 200
    assert login.get_json()["username"] == "alice"

    verify = client.get("/api/auth/verify", headers=_auth(login.get_json()["token"]))
    assert verify.status_code == 200
    assert verify.get_json() == {"valid": True, "message": "Token is valid", "username": "alice"}
    assert client.get("/api/auth/verify", headers=_auth(token)).status_code == 200


def test_duplicate_registration_conflicts(client):
    _register(client)
    response = client.post("/api/auth/register", json={"username": "alice", "password": "x"})
    assert response.status_code == 409
    assert response.get_json()["error"] == "AlreadyExists"


def test_register_requires_json_object(client):
    assert client.post("/api/auth/register", data="nope").status_code == 400
    assert client.post("/api/auth/register", json=["alice"]).status_code == 400
    assert client.post("/api/auth/register", json={"username": "bob"}).status_code == 400


def test_login_failures(client):
    _register(client)
    wrong = client.post("/api/auth/login", json={"username": "alice", "password": "bad"})
    unknown = client.post("/api/auth/login", json={"username": "zed", "password": "bad"})

    assert wrong.status_code == 401
    assert wrong.get_json()["error"] == "InvalidCredentials"
    assert unknown.status_code == 404
    assert unknown.get_json()["error"] == "UserNotFound"


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "garbage"}, {"Authorization": "Bearer not.a.token"}, {"Authorization": "Token abc"}],
)
def test_protected_routes_reject_bad_tokens(client, headers):
    for method, url in (
        ("get", "/api/portfolios"),
        ("get", "/api/auth/verify"),
        ("get", "/api/stocks/AAPL/price"),
    ):
        response = getattr(client, method)(url, headers=headers)
        assert response.status_code == 401
        assert response.get_json() == {"error": "InvalidToken", "message": "Invalid token"}


def test_portfolio_flow(client, token, portfolio_id):
    headers = _auth(token)

    first = client.post(
        f"/api/portfolios/{portfolio_id}/assets",
        json={"ticker": "aapl", "quantity": 1},
        headers=headers,
    )
    assert first.status_code == 200
    assert first.get_json() == {"message": "Asset added successfully", "ticker": "AAPL", "quantity": 1.0}

    second = client.post(
        f"/api/portfolios/{portfolio_id}/assets",
        json={"ticker": "AAPL", "quantity": 2},
        headers=headers,
    )
    assert second.get_json()["quantity"] == 3.0

    details = client.get(f"/api/portfolios/{portfolio_id}", headers=headers).get_json()
    assert details["name"] == "Retirement"
    assert len(details["assets"]) == 1
    assert details["totalValue"] == pytest.approx(3 * 150.25)

    listing = client.get("/api/portfolios", headers=headers).get_json()
    assert [p["id"] for p in listing] == [portfolio_id]

    removed = client.delete(f"/api/portfolios/{portfolio_id}/assets/aapl", headers=headers)
    assert removed.status_code == 200
    again = client.delete(f"/api/portfolios/{portfolio_id}/assets/AAPL", headers=headers)
    assert again.status_code == 404
    assert again.get_json()["error"] == "AssetNotFound"


def test_foreign_portfolio_is_forbidden(client, portfolio_id):
    other = _auth(_register(client, "mallory"))

    assert client.get(f"/api/portfolios/{portfolio_id}", headers=other).status_code == 403
    add = client.post(
        f"/api/portfolios/{portfolio_id}/assets", json={"ticker": "AAPL", "quantity": 1}, headers=other
    )
    assert add.status_code == 403
    assert client.get(f"/api/portfolios/{portfolio_id}/insights", headers=other).status_code == 403


def test_missing_portfolio_is_not_found(client, token):
    response = client.get("/api/portfolios/4040", headers=_auth(token))
    assert response.status_code == 404
    assert response.get_json()["error"] == "PortfolioNotFound"


@pytest.mark.parametrize(
    "body",
    [
        {"ticker": "AAPL", "quantity": "3"},
        {"ticker": "AAPL", "quantity": 0},
        {"ticker": "AAPL"},
        {"ticker": "", "quantity": 1},
        {"ticker": "WAYTOOLONGTICKER", "quantity": 1},
    ],
)
def test_invalid_asset_payloads(client, token, portfolio_id, body):
    response = client.post(f"/api/portfolios/{portfolio_id}/assets", json=body, headers=_auth(token))
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidInput"


def test_blank_portfolio_name_is_invalid(client, token):
    response = client.post("/api/portfolios", json={"name": "  "}, headers=_auth(token))
    assert response.status_code == 400


def test_insights_endpoint(client, token, portfolio_id):
    client.post(
        f"/api/portfolios/{portfolio_id}/assets",
        json={"ticker": "VTI", "quantity": 5},
        headers=_auth(token),
    )
    payload = client.get(f"/api/portfolios/{portfolio_id}/insights", headers=_auth(token)).get_json()

    assert payload["assetCount"] == 1
    assert payload["riskLevel"] == "High"
    assert payload["totalValue"] == pytest.approx(1102.5)


def test_stock_endpoints(client, token):
    price = client.get("/api/stocks/msft/price", headers=_auth(token)).get_json()
    info = client.get("/api/stocks/ZZZZ/info", headers=_auth(token)).get_json()

    assert price["ticker"] == "MSFT"
    assert price["currentPrice"] == 300.75
    assert info["currentPrice"] == 100.0


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.get_json()["error"] == "NotFound"


def test_missing_jwt_secret_is_server_error(app_config, client):
    app_config.JWT_SECRET = None
    response = client.post("/api/auth/register", json={"username": "alice", "password": "pw"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "ConfigError"


def test_cli_price_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["tickerfolio-price", "aapl"])
    assert result.exit_code == 0
    assert "AAPL: 150.25" in result.output

    info = runner.invoke(args=["tickerfolio-price", "spy", "--info"])
    assert "currentPrice: 450.25" in info.output


def test_cli_init_db_command(app):
    result = app.test_cli_runner().invoke(args=["tickerfolio-init-db"])
    assert result.exit_code == 0
    assert "up to date" in result.output


def test_register_with_numeric_email_is_invalid(client):
    response = client.post(
        "/api/auth/register", json={"username": "bob", "password": "pw", "email": 5}
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidInput"


def test_register_with_overlong_username_is_invalid(client):
    response = client.post("/api/auth/register", json={"username": "u" * 500, "password": "pw"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidInput"


def test_portfolio_id_beyond_integer_range_is_not_found(client, token):
    response = client.get("/api/portfolios/99999999999999999999", headers=_auth(token))
    assert response.status_code == 404
    assert response.get_json()["error"] == "PortfolioNotFound"
