from decimal import Decimal

import pytest
from httpx import AsyncClient

BASE = "/api/v1/criteria-categories"


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        BASE,
        json={"name": "Technical Skills", "description": "Job knowledge", "weight": 40},
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Technical Skills"
    assert Decimal(data["weight"]) == Decimal("40")
    assert data["is_active"] is True


@pytest.mark.asyncio
async def test_create_category_requires_token(client: AsyncClient):
    response = await client.post(BASE, json={"name": "X", "weight": 10})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_category_forbidden_for_employee(client: AsyncClient, employee_headers: dict):
    response = await client.post(BASE, json={"name": "X", "weight": 10}, headers=employee_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_category_rejects_out_of_range_weight(client: AsyncClient, admin_headers: dict):
    response = await client.post(BASE, json={"name": "X", "weight": 120}, headers=admin_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_category_above_ceiling(client: AsyncClient, admin_headers: dict, make_category):
    await make_category("A", 60)

    response = await client.post(BASE, json={"name": "B", "weight": 45}, headers=admin_headers)

    assert response.status_code == 400
    assert "105" in response.json()["detail"]


@pytest.mark.asyncio
async def test_update_category_above_ceiling(client: AsyncClient, admin_headers: dict, make_category):
    await make_category("Others", 60)
    target = await make_category("Target", 20)

    response = await client.put(f"{BASE}/{target.id}", json={"weight": 45}, headers=admin_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rebalance_weights(client: AsyncClient, admin_headers: dict, make_category):
    a = await make_category("A", 40)
    b = await make_category("B", 30)
    c = await make_category("C", 30)

    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [
            {"category_id": a.id, "weight": 50},
            {"category_id": b.id, "weight": 25},
            {"category_id": c.id, "weight": 25},
        ]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    listing = await client.get(BASE, headers=admin_headers)
    weights = {item["name"]: Decimal(item["weight"]) for item in listing.json()}
    assert weights == {"A": Decimal("50"), "B": Decimal("25"), "C": Decimal("25")}


@pytest.mark.asyncio
async def test_rebalance_invalid_total(client: AsyncClient, admin_headers: dict, make_category):
    a = await make_category("A", 40)
    b = await make_category("B", 30)
    c = await make_category("C", 30)

    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [
            {"category_id": a.id, "weight": 50},
            {"category_id": b.id, "weight": 30},
            {"category_id": c.id, "weight": 30},
        ]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert Decimal(detail["total"]) == Decimal("110")
    assert Decimal(detail["delta"]) == Decimal("10")


@pytest.mark.asyncio
async def test_rebalance_unknown_category(client: AsyncClient, admin_headers: dict, make_category):
    a = await make_category("A", 100)

    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [{"category_id": a.id, "weight": 60}, {"category_id": 4242, "weight": 40}]},
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rebalance_rejects_inactive_category(client: AsyncClient, admin_headers: dict, make_category):
    active_id = (await make_category("A", 100)).id
    retired_id = (await make_category("Retired", 0, is_active=False)).id

    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [{"category_id": active_id, "weight": 50}, {"category_id": retired_id, "weight": 50}]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    summary = await client.get(f"{BASE}/validate-weights", headers=admin_headers)
    assert Decimal(summary.json()["total_weight"]) == Decimal("100")


@pytest.mark.asyncio
async def test_rebalance_rejects_weights_beyond_two_decimals(client: AsyncClient, admin_headers: dict, make_category):
    ids = [(await make_category(name, 25)).id for name in ("A", "B", "C", "D")]

    # Sums to exactly 100 but cannot be stored as numeric(5,2)
    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [
            {"category_id": ids[0], "weight": "0.035"},
            {"category_id": ids[1], "weight": "0.035"},
            {"category_id": ids[2], "weight": "0.035"},
            {"category_id": ids[3], "weight": "99.895"},
        ]},
        headers=admin_headers,
    )

    assert response.status_code == 422
    summary = await client.get(f"{BASE}/validate-weights", headers=admin_headers)
    assert Decimal(summary.json()["total_weight"]) == Decimal("100")


@pytest.mark.asyncio
async def test_rebalance_forbidden_for_evaluator(client: AsyncClient, evaluator_headers: dict, make_category):
    a = await make_category("A", 100)

    response = await client.post(
        f"{BASE}/rebalance-weights",
        json={"weights": [{"category_id": a.id, "weight": 100}]},
        headers=evaluator_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stored_weight_summary(
    client: AsyncClient, evaluator_headers: dict, employee_headers: dict, make_category
):
    await make_category("A", 60)
    await make_category("B", 40)

    response = await client.get(f"{BASE}/validate-weights", headers=evaluator_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is True
    assert Decimal(data["total_weight"]) == Decimal("100")

    forbidden = await client.get(f"{BASE}/validate-weights", headers=employee_headers)
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_validate_proposed_weights(client: AsyncClient, employee_headers: dict):
    response = await client.post(
        f"{BASE}/validate-weights",
        json={"weights": [{"category_id": 1, "weight": 70}, {"category_id": 2, "weight": -5}]},
        headers=employee_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert [v["reason"] for v in data["violations"]] == ["negative"]


@pytest.mark.asyncio
async def test_listing_hides_inactive_for_employees(
    client: AsyncClient, admin_headers: dict, employee_headers: dict, make_category
):
    await make_category("Active", 50)
    await make_category("Retired", 50, is_active=False)

    admin_names = [c["name"] for c in (await client.get(BASE, headers=admin_headers)).json()]
    employee_names = [c["name"] for c in (await client.get(BASE, headers=employee_headers)).json()]
    active_names = [c["name"] for c in (await client.get(f"{BASE}/active", headers=admin_headers)).json()]

    assert admin_names == ["Active", "Retired"]
    assert employee_names == ["Active"]
    assert active_names == ["Active"]


@pytest.mark.asyncio
async def test_get_missing_category(client: AsyncClient, admin_headers: dict):
    response = await client.get(f"{BASE}/999", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cascade_deactivate_endpoint(client: AsyncClient, admin_headers: dict, make_category, make_criteria):
    category = await make_category("A", 50)
    await make_criteria(category.id, "One")
    await make_criteria(category.id, "Two")

    response = await client.patch(f"{BASE}/{category.id}/cascade-deactivate", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["criteria_deactivated"] == 2

    detail = await client.get(f"{BASE}/{category.id}/with-criteria", headers=admin_headers)
    data = detail.json()
    assert data["is_active"] is False
    assert [c["is_active"] for c in data["criteria"]] == [False, False]


@pytest.mark.asyncio
async def test_deactivate_and_reactivate_endpoints(client: AsyncClient, admin_headers: dict, make_category):
    category = await make_category("A", 50)

    assert (await client.patch(f"{BASE}/{category.id}/deactivate", headers=admin_headers)).status_code == 200
    assert (await client.patch(f"{BASE}/{category.id}/deactivate", headers=admin_headers)).status_code == 404
    assert (await client.patch(f"{BASE}/{category.id}/reactivate", headers=admin_headers)).status_code == 200


@pytest.mark.asyncio
async def test_permanent_delete_conflict(client: AsyncClient, admin_headers: dict, make_category, make_criteria):
    category = await make_category("A", 50)
    await make_criteria(category.id, "Old", is_active=False)

    response = await client.delete(f"{BASE}/{category.id}/permanent", headers=admin_headers)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_permanent_delete(client: AsyncClient, admin_headers: dict, make_category):
    category = await make_category("A", 50)

    response = await client.delete(f"{BASE}/{category.id}/permanent", headers=admin_headers)
    assert response.status_code == 200

    missing = await client.get(f"{BASE}/{category.id}", headers=admin_headers)
    assert missing.status_code == 404
