import logging
import uuid

import structlog


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_correlation_id_unbound_after_request(self, client):
        client.get("/health", HTTP_X_REQUEST_ID="scoped-correlation-789")
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_request_finished_logs_status(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health")
        finished = [r.getMessage() for r in caplog.records if "request_finished" in r.getMessage()]
        assert finished and "200" in finished[0]

    def test_request_id_echoed_on_error_responses(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.delete("/products/404404")
        assert response.status_code == 404
        assert response["X-Request-ID"] == cid

    def test_product_events_are_logged(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.post(
                "/products",
                {"name": "Widget", "productToken": "LOG001", "price": 1.5, "stock": 2},
            )
        messages = [record.getMessage() for record in caplog.records]
        assert any("product.created" in message for message in messages)


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_secret_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "secret=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_product_token_is_not_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "product.created", "product_token": "WID001"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["product_token"] == "WID001"

    def test_non_string_values_untouched(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "count": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["count"] == 42
