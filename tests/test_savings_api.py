"""
Tests for the savings bucket and distribution endpoints.
"""

import pytest


def create_bucket(client, name, bucket_type="Custom", **extra):
    response = client.post("/savings", json={"name": name, "type": bucket_type, **extra})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def buckets(client):
    return [
        create_bucket(client, "Japan", "Trip Fund", targetAmount="1000", autoDistributePercent="33"),
        create_bucket(client, "Rainy Day", "Emergency Fund", autoDistributePercent="33"),
        create_bucket(client, "Index", "Investment Pool", autoDistributePercent="34"),
    ]


class TestBuckets:
    def test_new_bucket_is_empty(self, client):
        bucket = create_bucket(client, "Laptop", targetAmount="1500")

        assert bucket["currentBalance"] == "0.00"
        assert bucket["targetAmount"] == "1500.00"
        assert bucket["progress"] == 0.0
        assert bucket["distributions"] == []

    def test_duplicate_name_is_rejected(self, client):
        create_bucket(client, "Laptop")

        response = client.post("/savings", json={"name": "Laptop", "type": "Custom"})

        assert response.status_code == 400

    def test_unknown_type_is_rejected(self, client):
        response = client.post("/savings", json={"name": "Boat", "type": "Boat Fund"})

        assert response.status_code == 422

    def test_update_and_clear_target(self, client):
        bucket = create_bucket(client, "Laptop", targetAmount="1500")

        response = client.patch(f"/savings/{bucket['id']}", json={"targetAmount": None, "sortOrder": 3})

        assert response.status_code == 200
        assert response.json()["targetAmount"] is None
        assert response.json()["sortOrder"] == 3

    def test_delete_empty_bucket(self, client):
        bucket = create_bucket(client, "Laptop")

        assert client.delete(f"/savings/{bucket['id']}").status_code == 200
        assert client.get("/savings").json() == []


class TestDistributionPlan:
    def test_plan_splits_by_weight(self, client):
        response = client.post(
            "/savings/distribution/plan",
            json={
                "totalContribution": "1000",
                "buckets": [
                    {"bucketId": 1, "weight": 33},
                    {"bucketId": 2, "weight": 33},
                    {"bucketId": 3, "weight": 34},
                ],
            },
        )

        assert response.status_code == 200
        plan = response.json()
        assert [a["amount"] for a in plan["allocations"]] == ["330.00", "330.00", "340.00"]
        assert plan["distributed"] == "1000.00"
        assert plan["undistributed"] == "0.00"

    def test_plan_breaks_ties_in_order(self, client):
        plan = client.post(
            "/savings/distribution/plan",
            json={"totalContribution": "0.05", "buckets": [{"bucketId": 7, "weight": 50}, {"bucketId": 8, "weight": 50}]},
        ).json()

        assert plan["allocations"] == [
            {"bucketId": 7, "amount": "0.03"},
            {"bucketId": 8, "amount": "0.02"},
        ]

    def test_weights_over_100_are_rejected(self, client):
        response = client.post(
            "/savings/distribution/plan",
            json={"totalContribution": "100", "buckets": [{"bucketId": 1, "weight": 60}, {"bucketId": 2, "weight": 50}]},
        )

        assert response.status_code == 400


class TestDistribute:
    def test_auto_distribute_updates_balances(self, client, buckets):
        response = client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "1000"})

        assert response.status_code == 201
        assert [d["amount"] for d in response.json()["distributions"]] == ["330.00", "330.00", "340.00"]

        japan = client.get("/savings").json()[0]
        assert japan["currentBalance"] == "330.00"
        assert japan["progress"] == 33.0
        assert japan["distributions"][0]["month"] == "2024-06"
        assert japan["distributions"][0]["note"] == "Auto-distributed 33.00%"
        assert response.json()["undistributed"] == "0.00"

    def test_auto_distribute_reports_the_rest(self, client):
        create_bucket(client, "Japan", "Trip Fund", autoDistributePercent="50")
        create_bucket(client, "Rainy Day", "Emergency Fund", autoDistributePercent="20")

        response = client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "100"})

        assert response.status_code == 201
        body = response.json()
        assert [d["amount"] for d in body["distributions"]] == ["50.00", "20.00"]
        assert body["undistributed"] == "30.00"

    def test_second_distribution_in_a_month_is_rejected(self, client, buckets):
        client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "1000"})

        response = client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "500"})

        assert response.status_code == 400
        balances = [b["currentBalance"] for b in client.get("/savings").json()]
        assert balances == ["330.00", "330.00", "340.00"]

    def test_auto_distribute_without_weights_is_rejected(self, client):
        create_bucket(client, "Laptop")

        response = client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "100"})

        assert response.status_code == 400

    def test_manual_distribution(self, client, buckets):
        response = client.post(
            "/savings/distribute",
            json={
                "month": "2024-06",
                "distributions": [{"bucketId": buckets[1]["id"], "amount": "75.50", "note": "bonus"}],
            },
        )

        assert response.status_code == 201
        rainy = [b for b in client.get("/savings").json() if b["name"] == "Rainy Day"][0]
        assert rainy["currentBalance"] == "75.50"
        assert rainy["progress"] == 0.0

    def test_unknown_bucket_is_rejected(self, client, buckets):
        response = client.post(
            "/savings/distribute",
            json={"month": "2024-06", "distributions": [{"bucketId": 999, "amount": "10"}]},
        )

        assert response.status_code == 400

    def test_bucket_with_balance_cannot_be_deleted(self, client, buckets):
        client.put("/savings/distribute", json={"month": "2024-06", "totalSavings": "1000"})

        assert client.delete(f"/savings/{buckets[0]['id']}").status_code == 400
