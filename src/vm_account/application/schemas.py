"""Pydantic schemas for vm_account API."""

from pydantic import BaseModel

from src.vm_common.cents import cents_to_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositRequest(BaseModel):
    # Not range-checked here: the ledger validates against the accepted coins
    amount_cents: int


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    user_id: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_cents(cls, user_id: str, balance: int) -> "BalanceResponse":
        return cls(
            user_id=user_id,
            balance_cents=balance,
            balance_display=cents_to_display(balance),
        )


class DepositResponse(BaseModel):
    user_id: str
    balance_cents: int
    balance_display: str
    deposited_cents: int
    deposited_display: str

    @classmethod
    def from_result(cls, user_id: str, balance: int, amount: int) -> "DepositResponse":
        return cls(
            user_id=user_id,
            balance_cents=balance,
            balance_display=cents_to_display(balance),
            deposited_cents=amount,
            deposited_display=cents_to_display(amount),
        )
