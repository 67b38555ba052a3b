from fastapi import status


def test_submit_batch(client):
    """The full scenario from one block of calls"""
    batch = {
        "sender": "deployer",
        "calls": [
            {"operation": "initialize-budget", "args": [1, 1000]},
            {"operation": "add-category-allocation", "args": [1, "groceries", 300]},
            {"operation": "record-spending", "args": [1, "general", 500]},
            {"operation": "check-budget", "args": [1]},
            {"operation": "add-budget-alert", "args": [1, "groceries", 80]},
            {"operation": "record-spending", "args": [1, "general", 600]},
            {"operation": "check-budget", "args": [1]},
            {"operation": "check-budget", "args": [2]},
        ]
    }

    response = client.post("/api/v1/ledger/batch", json=batch)

    assert response.status_code == 200
    data = response.json()
    assert data["sender"] == "deployer"
    assert data["results"] == [
        "(ok true)",
        "(ok true)",
        "(ok true)",
        "(ok false)",
        "(ok u1)",
        "(ok true)",
        "(ok true)",
        "(err BudgetNotFound)",
    ]
    assert data["receipts"][4]["value"] == 1
    assert data["receipts"][7]["error"] == "BudgetNotFound"


def test_batch_across_requests_keeps_alert_counter(client):
    client.post("/api/v1/ledger/batch", json={"calls": [
        {"operation": "initialize-budget", "args": [1, 100]},
        {"operation": "add-budget-alert", "args": [1, "groceries", 50]},
    ]})
    response = client.post("/api/v1/ledger/batch", json={"calls": [
        {"operation": "initialize-budget", "args": [2, 100]},
        {"operation": "add-budget-alert", "args": [2, "rent", 50]},
    ]})

    assert response.json()["results"] == ["(ok true)", "(ok u2)"]


def test_ledger_events(client):
    client.post("/api/v1/ledger/batch", json={"sender": "deployer", "calls": [
        {"operation": "initialize-budget", "args": [1, 100]},
        {"operation": "record-spending", "args": [1, "general", 40]},
        {"operation": "record-spending", "args": [1, "general", -1]},
    ]})

    response = client.get("/api/v1/ledger/events", params={"budget_id": 1})

    assert response.status_code == 200
    events = response.json()
    assert [e["event_type"] for e in events] == ["SPENDING_RECORDED", "BUDGET_INITIALIZED"]
    assert events[0]["sender"] == "deployer"


def test_ledger_events_unknown_budget(client):
    response = client.get("/api/v1/ledger/events", params={"budget_id": 4})
    assert response.status_code == status.HTTP_404_NOT_FOUND
