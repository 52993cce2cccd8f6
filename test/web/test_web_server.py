"""Test the REST endpoints of the web server."""

import pytest
from starlette.testclient import TestClient

from calcengine import __version__
from calcengine.math_engine import CalculatorEngine
from calcengine.web_server import CalcWebServer


@pytest.fixture
def client():
    server = CalcWebServer(engine=CalculatorEngine())
    return TestClient(server.get_app())


class TestServiceEndpoints:
    """Tests for root, ping, health and function listing."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "calcengine-web"

    def test_ping(self, client):
        assert client.get("/ping").json() == {"status": "ok", "service": "calcengine-web"}

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert "expression" in data["capabilities"]

    def test_functions(self, client):
        data = client.get("/functions").json()
        assert "atan" in data["functions"]
        assert data["operators"]["*"]["precedence"] == 2


class TestEvaluateEndpoint:
    """Tests for POST /evaluate."""

    def test_success(self, client):
        response = client.post("/evaluate", json={"expression": "(2+3)*4"})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["result"]["value"] == 20.0
        assert body["data"]["dtype"] == "float64"

    def test_angle_mode(self, client):
        body = client.post("/evaluate", json={"expression": "sin(π/2)", "angle_mode": "rad"}).json()
        assert body["data"]["result"]["value"] == pytest.approx(1.0)
        assert body["data"]["result"]["angle_mode"] == "RAD"

    def test_nan_result(self, client):
        body = client.post("/evaluate", json={"expression": "(-8)^(1/3)"}).json()
        assert body["data"]["result"]["value"] == "nan"

    @pytest.mark.parametrize(
        "expression,code",
        [
            ("1/0", "ARITHMETIC_ERROR"),
            ("log(0)", "DOMAIN_ERROR"),
            ("2 3", "SYNTAX_ERROR"),
        ],
    )
    def test_classified_errors(self, client, expression, code):
        response = client.post("/evaluate", json={"expression": expression})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == code
        assert error["recovery"]

    def test_non_finite_operand_in_error_details(self, client):
        response = client.post("/evaluate", json={"expression": "asin(10^400)"})
        assert response.status_code == 400
        assert response.json()["error"]["details"]["operand"] == "inf"

    def test_body_not_utf8(self, client):
        response = client.post(
            "/evaluate",
            content=b'{"expression": "\xff"}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    def test_invalid_json(self, client):
        response = client.post(
            "/evaluate",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"expression": 5},
            {"expression": "1", "angle_mode": "grad"},
            {"expression": "1", "precision": "float32"},
        ],
    )
    def test_validation_errors(self, client, payload):
        response = client.post("/evaluate", json=payload)
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "PYDANTIC_VALIDATION_ERROR"
