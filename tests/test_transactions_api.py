from datetime import date, timedelta
from uuid import uuid4

from conftest import auth_headers

OWNER = uuid4()
STRANGER = uuid4()


def _payload(**overrides):
    data = {
        "type": "saida",
        "description": "Notebook",
        "amount": "1.200,00",
        "payment_method": "parcelado",
        "installments": 3,
        "due_date": "2025-01-31",
        "category": "Equipamentos",
    }
    data.update(overrides)
    return data


def test_create_installment_purchase(client):
    response = client.post("/transactions", json=_payload(), headers=auth_headers(OWNER))

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "3 parcelas cadastradas com sucesso"
    items = body["items"]
    assert [i["installment_label"] for i in items] == ["1/3x", "2/3x", "3/3x"]
    assert [i["due_date"] for i in items] == ["2025-01-31", "2025-03-03", "2025-03-31"]
    assert {i["amount"] for i in items} == {"1200.00"}


def test_create_lump_sum(client):
    response = client.post(
        "/transactions",
        json=_payload(type="entrada", payment_method="a_vista", installments=1, amount=250, description="Venda"),
        headers=auth_headers(OWNER),
    )

    assert response.status_code == 201
    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["installment_label"] == "À Vista"
    assert items[0]["type"] == "entrada"


def test_create_rejects_invalid_payload(client):
    headers = auth_headers(OWNER)

    assert client.post("/transactions", json=_payload(amount="0"), headers=headers).status_code == 422
    assert client.post("/transactions", json=_payload(installments=40), headers=headers).status_code == 422
    assert client.post("/transactions", json=_payload(type="outro"), headers=headers).status_code == 422


def test_requires_session(client):
    assert client.get("/transactions").status_code == 401
    assert client.post("/transactions", json=_payload()).status_code == 401


def test_list_is_scoped_to_owner_and_sorted(client):
    client.post("/transactions", json=_payload(), headers=auth_headers(OWNER))
    client.post("/transactions", json=_payload(description="Do outro"), headers=auth_headers(STRANGER))

    asc = client.get("/transactions?sort_by=due_date&order=asc", headers=auth_headers(OWNER)).json()
    desc = client.get("/transactions?sort_by=due_date&order=desc", headers=auth_headers(OWNER)).json()

    assert len(asc) == 3
    assert {row["description"] for row in asc} == {"Notebook"}
    assert [row["due_date"] for row in asc] == sorted(row["due_date"] for row in asc)
    assert [row["due_date"] for row in desc] == list(reversed([row["due_date"] for row in asc]))


def test_list_reports_overdue_without_touching_stored_status(client):
    past = (date.today() - timedelta(days=1)).isoformat()
    client.post(
        "/transactions",
        json=_payload(payment_method="a_vista", installments=1, due_date=past),
        headers=auth_headers(OWNER),
    )

    row = client.get("/transactions", headers=auth_headers(OWNER)).json()[0]

    assert row["status"] == "vencido"
    assert row["stored_status"] == "pendente"


def test_update_status(client):
    created = client.post("/transactions", json=_payload(installments=1), headers=auth_headers(OWNER)).json()
    tx_id = created["items"][0]["id"]

    response = client.patch(f"/transactions/{tx_id}/status", json={"status": "pago"}, headers=auth_headers(OWNER))
    assert response.status_code == 200
    assert response.json()["status"] == "pago"

    response = client.patch(f"/transactions/{tx_id}/status", json={"status": "vencido"}, headers=auth_headers(OWNER))
    assert response.status_code == 422


def test_rows_of_another_owner_answer_404(client):
    created = client.post("/transactions", json=_payload(installments=1), headers=auth_headers(OWNER)).json()
    tx_id = created["items"][0]["id"]

    patch = client.patch(f"/transactions/{tx_id}/status", json={"status": "pago"}, headers=auth_headers(STRANGER))
    delete = client.delete(f"/transactions/{tx_id}", headers=auth_headers(STRANGER))

    assert patch.status_code == 404
    assert delete.status_code == 404
    assert len(client.get("/transactions", headers=auth_headers(OWNER)).json()) == 1


def test_delete_transaction(client):
    created = client.post("/transactions", json=_payload(), headers=auth_headers(OWNER)).json()
    first_id = created["items"][0]["id"]

    response = client.delete(f"/transactions/{first_id}", headers=auth_headers(OWNER))

    assert response.status_code == 200
    remaining = client.get("/transactions", headers=auth_headers(OWNER)).json()
    assert len(remaining) == 2
    assert first_id not in {row["id"] for row in remaining}
