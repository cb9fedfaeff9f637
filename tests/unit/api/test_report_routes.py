"""HTTP tests for the report endpoints."""

import httpx
import pytest
from fastapi import status
from fastapi.testclient import TestClient

from src.sales_report.api.http.app import app
from src.sales_report.api.http.deps import get_report_service
from src.sales_report.core.months import INVALID_MONTH_MESSAGE
from src.sales_report.core.services import ReportClient

FILTERED_ENDPOINTS = ["/statistics", "/bar-chart", "/pie-chart", "/combined-data"]


class TestMonthValidation:
    @pytest.mark.parametrize("path", FILTERED_ENDPOINTS)
    @pytest.mark.parametrize("month", ["Smarch", "", "november"])
    def test_invalid_month_is_rejected(self, client: TestClient, path, month):
        response = client.get(path, params={"month": month})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == INVALID_MONTH_MESSAGE

    @pytest.mark.parametrize("path", FILTERED_ENDPOINTS)
    def test_missing_month_is_rejected(self, client: TestClient, path):
        response = client.get(path)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_handler_not_invoked_for_invalid_month(self, client: TestClient):
        class ExplodingReports:
            def statistics(self, month):
                raise AssertionError("handler should not run")

        app.dependency_overrides[get_report_service] = lambda: ExplodingReports()

        response = client.get("/statistics", params={"month": "Smarch"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestStatisticsEndpoint:
    def test_returns_totals(self, seeded_client: TestClient):
        response = seeded_client.get("/statistics", params={"month": "November"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "totalSaleAmount": 1150.5,
            "totalSoldItems": 2,
            "totalNotSoldItems": 1,
        }

    def test_empty_store_returns_zeros(self, client: TestClient):
        response = client.get("/statistics", params={"month": "November"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "totalSaleAmount": 0,
            "totalSoldItems": 0,
            "totalNotSoldItems": 0,
        }

    def test_query_failure_returns_generic_error(self, client: TestClient):
        class BrokenReports:
            def statistics(self, month):
                raise RuntimeError("disk on fire")

        app.dependency_overrides[get_report_service] = lambda: BrokenReports()

        response = client.get("/statistics", params={"month": "March"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Error fetching statistics."


class TestChartEndpoints:
    def test_bar_chart(self, seeded_client: TestClient):
        response = seeded_client.get("/bar-chart", params={"month": "March"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert sorted(body, key=lambda b: b["priceRange"]) == [
            {"priceRange": "0 - 100", "itemCount": 1},
            {"priceRange": "201 - 300", "itemCount": 1},
            {"priceRange": "801 - 900", "itemCount": 1},
        ]

    def test_pie_chart(self, seeded_client: TestClient):
        response = seeded_client.get("/pie-chart", params={"month": "July"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [{"category": "jewelery", "itemCount": 1}]

    def test_bar_chart_failure(self, client: TestClient):
        class BrokenReports:
            def bar_chart(self, month):
                raise RuntimeError("boom")

        app.dependency_overrides[get_report_service] = lambda: BrokenReports()

        response = client.get("/bar-chart", params={"month": "March"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Error fetching bar chart data."

    def test_pie_chart_failure(self, client: TestClient):
        class BrokenReports:
            def pie_chart(self, month):
                raise RuntimeError("boom")

        app.dependency_overrides[get_report_service] = lambda: BrokenReports()

        response = client.get("/pie-chart", params={"month": "March"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Error fetching pie chart data."


class TestCombinedEndpoint:
    @pytest.mark.parametrize("month", ["January", "March", "November"])
    def test_matches_individual_endpoints(self, seeded_client: TestClient, month):
        combined = seeded_client.get("/combined-data", params={"month": month})

        assert combined.status_code == status.HTTP_200_OK
        body = combined.json()
        assert set(body) == {"statistics", "barChart", "pieChart"}

        statistics = seeded_client.get("/statistics", params={"month": month}).json()
        bar_chart = seeded_client.get("/bar-chart", params={"month": month}).json()
        pie_chart = seeded_client.get("/pie-chart", params={"month": month}).json()

        assert body["statistics"] == statistics
        assert sorted(body["barChart"], key=str) == sorted(bar_chart, key=str)
        assert sorted(body["pieChart"], key=str) == sorted(pie_chart, key=str)

    def test_sub_request_failure_fails_whole_request(self, client: TestClient, app_dependencies):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/pie-chart":
                return httpx.Response(500, json={"detail": "Error fetching pie chart data."})
            return httpx.Response(200, json=[])

        app_dependencies.report_client = ReportClient(
            base_url="http://testserver", transport=httpx.MockTransport(handler)
        )

        response = client.get("/combined-data", params={"month": "March"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Error fetching combined data."

    def test_fans_out_three_requests_with_same_month(self, client: TestClient, app_dependencies):
        seen: list[tuple[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.url.path, request.url.params["month"]))
            if request.url.path == "/statistics":
                return httpx.Response(
                    200,
                    json={"totalSaleAmount": 0, "totalSoldItems": 0, "totalNotSoldItems": 0},
                )
            return httpx.Response(200, json=[])

        app_dependencies.report_client = ReportClient(
            base_url="http://testserver", transport=httpx.MockTransport(handler)
        )

        response = client.get("/combined-data", params={"month": "May"})

        assert response.status_code == status.HTTP_200_OK
        assert sorted(seen) == [
            ("/bar-chart", "May"),
            ("/pie-chart", "May"),
            ("/statistics", "May"),
        ]


class TestRequestLogging:
    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
