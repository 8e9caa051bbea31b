import logging
from typing import List, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session, select

from bpo_financeiro.core.policies import get_owned, owned
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.transaction import (
    TransactionCreate,
    TransactionCreatedResponse,
    TransactionRead,
    TransactionStatusUpdate,
)
from bpo_financeiro.services.installments import expand_installments
from bpo_financeiro.utils.transaction_helpers import to_transaction_read

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

SORT_COLUMNS = {
    "creation_date": Transaction.created_at,
    "due_date": Transaction.due_date,
}


@router.post("", response_model=TransactionCreatedResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TransactionCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    rows = expand_installments(transaction_data, user_id)
    session.add_all(rows)
    session.commit()
    for row in rows:
        session.refresh(row)

    if len(rows) > 1:
        message = f"{len(rows)} parcelas cadastradas com sucesso"
    else:
        message = "Transação cadastrada com sucesso"
    logger.info("Usuário %s cadastrou %s linha(s) de transação", user_id, len(rows))
    return TransactionCreatedResponse(message=message, items=[to_transaction_read(r) for r in rows])


@router.get("", response_model=List[TransactionRead])
@router.get("/", response_model=List[TransactionRead])
def list_transactions(
    sort_by: Literal["creation_date", "due_date"] = Query("creation_date"),
    order: Literal["asc", "desc"] = Query("desc"),
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    column = SORT_COLUMNS[sort_by]
    statement = owned(select(Transaction), Transaction, user_id).order_by(
        column.asc() if order == "asc" else column.desc()
    )
    return [to_transaction_read(tx) for tx in session.exec(statement).all()]


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: UUID,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    transaction = get_owned(session, Transaction, transaction_id, user_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transação não encontrada")

    session.delete(transaction)
    session.commit()
    return {"message": "Transação excluída com sucesso"}


@router.patch("/{transaction_id}/status", response_model=TransactionRead)
def update_transaction_status(
    transaction_id: UUID,
    data: TransactionStatusUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    transaction = get_owned(session, Transaction, transaction_id, user_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transação não encontrada")

    transaction.status = data.status
    session.add(transaction)
    session.commit()
    session.refresh(transaction)
    return to_transaction_read(transaction)
