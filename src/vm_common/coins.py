"""Coin change calculator.

Greedy decomposition of a remainder (cents) into the machine's coins,
largest denomination first. Callers guarantee remainders are multiples of 5
because every deposit is itself one of these coins.
"""

from dataclasses import dataclass

DENOMINATIONS: tuple[int, ...] = (100, 50, 20, 10, 5)


@dataclass(frozen=True)
class Change:
    hundreds: int = 0
    fifties: int = 0
    twenties: int = 0
    tens: int = 0
    fives: int = 0

    @property
    def total(self) -> int:
        return (
            100 * self.hundreds
            + 50 * self.fifties
            + 20 * self.twenties
            + 10 * self.tens
            + 5 * self.fives
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "hundreds": self.hundreds,
            "fifties": self.fifties,
            "twenties": self.twenties,
            "tens": self.tens,
            "fives": self.fives,
        }


def compute_change(remainder: int) -> Change:
    """Split ``remainder`` cents into coin counts. Negative input yields no coins."""
    if remainder <= 0:
        return Change()
    counts: list[int] = []
    for coin in DENOMINATIONS:
        count, remainder = divmod(remainder, coin)
        counts.append(count)
    return Change(*counts)
