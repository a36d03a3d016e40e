from fastapi import APIRouter, Depends, Query

from finassist.dependencies import get_current_user
from finassist.models.schemas import FinancialSnapshot, Transaction
from finassist.services.demo_data import build_snapshot, calculate_account_balances, generate_transactions

router = APIRouter(prefix="/demo", tags=["demo"])


@router.get("/transactions", response_model=list[Transaction])
async def get_demo_transactions(count: int = Query(80, ge=1, le=500), user=Depends(get_current_user)):
    return generate_transactions(str(user["id"]), count=count)


@router.get("/snapshot", response_model=FinancialSnapshot, response_model_by_alias=True)
async def get_demo_snapshot(count: int = Query(80, ge=1, le=500), user=Depends(get_current_user)):
    """
    Mock financial context in the shape the chatbot accepts as `financialData`.
    """
    transactions = generate_transactions(str(user["id"]), count=count)
    accounts = calculate_account_balances(transactions)
    return build_snapshot(transactions, accounts)
