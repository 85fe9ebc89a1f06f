"""Fee Breakdown — the three-way split of a raffle's prize pool."""

from pydantic import BaseModel, ConfigDict, model_validator

from raffle_kernel.models.money import Money


class FeeBreakdown(BaseModel):
    """
    Split of `pool_base` into platform fee, creator commission and winner
    payout. The three parts always sum to the pool exactly.
    """

    model_config = ConfigDict(frozen=True)

    pool_base: Money
    platform_fee: Money
    creator_commission: Money
    winner_payout: Money

    @model_validator(mode="after")
    def _check_conservation(self) -> "FeeBreakdown":
        total = self.platform_fee + self.creator_commission + self.winner_payout
        if total != self.pool_base:
            raise ValueError(
                f"Fee split {total.to_decimal_string()} does not equal "
                f"pool {self.pool_base.to_decimal_string()}"
            )
        return self
