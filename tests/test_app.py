from thaiqr.promptpay import verify_payload


class TestBanksApi:
    def test_list(self, client):
        resp = client.get("/api/banks")
        assert resp.status_code == 200
        assert resp.get_json()[0]["code"] == "002"

    def test_one(self, client):
        assert client.get("/api/banks/004").get_json()["short_name"] == "KBANK"

    def test_unknown(self, client):
        resp = client.get("/api/banks/999")
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Unknown bank code 999"


class TestPromptPayApi:
    def test_with_amount(self, client):
        resp = client.get("/api/promptpay?target=0812345678&amount=100")
        data = resp.get_json()
        assert resp.status_code == 200
        assert data["payload"].startswith("000201010212")
        assert "5406100.00" in data["payload"]
        assert data["qr"].startswith("data:image/png;base64,")

    def test_defaults_to_system_id(self, client):
        data = client.get("/api/promptpay").get_json()
        assert "0066812345678" in data["payload"]
        assert data["payload"].startswith("000201010211")

    def test_bad_amount(self, client):
        resp = client.get("/api/promptpay?amount=abc")
        assert resp.status_code == 400
        assert "abc" in resp.get_json()["error"]

    def test_infinite_amount(self, client):
        assert client.get("/api/promptpay?amount=inf").status_code == 400

    def test_svg(self, client):
        resp = client.get("/api/promptpay.svg?target=0812345678")
        assert resp.status_code == 200
        assert resp.mimetype == "image/svg+xml"


class TestBillPayApi:
    def test_ok(self, client):
        resp = client.get("/api/billpay?bank_code=014&account_number=1234567890&amount=500&ref1=INV001")
        data = resp.get_json()
        assert resp.status_code == 200
        assert verify_payload(data["payload"])
        assert data["bank"]["short_name"] == "SCB"

    def test_short_bank_code_padded_for_lookup(self, client):
        data = client.get("/api/billpay?bank_code=14&account_number=1234567890").get_json()
        assert data["bank"]["short_name"] == "SCB"
        assert "01200140000000123456789" in data["payload"]

    def test_missing_account(self, client):
        resp = client.get("/api/billpay?bank_code=014")
        assert resp.status_code == 400
        assert "account_number" in resp.get_json()["error"]


class TestVerifyApi:
    def test_valid(self, client):
        payload = client.get("/api/promptpay?amount=1").get_json()["payload"]
        data = client.post("/api/verify", json={"payload": payload}).get_json()
        assert data["valid"] is True
        assert data["fields"]["29"]["01"] == "0066812345678"

    def test_malformed(self, client):
        resp = client.post("/api/verify", json={"payload": "5805TH"})
        assert resp.status_code == 400

    def test_missing(self, client):
        resp = client.post("/api/verify", json={})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "payload is required"
