"""Money — exact USDC amounts held as integer minor units."""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field

DECIMALS = 6
MINOR_PER_UNIT = 10 ** DECIMALS
BPS_DENOMINATOR = 10_000


class Underflow(ArithmeticError):
    """Raised when a subtraction would produce a negative amount."""
    pass


class Money(BaseModel):
    """
    A non-negative USDC amount in minor units (1 minor unit = $0.000001).

    Every canonical computation (fees, validation bounds, costs) goes through
    this type. Floats only ever appear in display helpers.
    """

    model_config = ConfigDict(frozen=True)

    minor: int = Field(ge=0)

    @classmethod
    def zero(cls) -> "Money":
        return cls(minor=0)

    @classmethod
    def of(cls, minor: int) -> "Money":
        return cls(minor=minor)

    @classmethod
    def from_decimal_string(cls, text: str) -> "Money":
        """
        Parse a human amount such as "1.50", "$1.50" or "$1.50 USDC".

        At most 6 fractional digits are accepted; anything finer cannot be
        represented on chain and is rejected rather than rounded.
        """
        cleaned = text.strip()
        if cleaned.upper().endswith("USDC"):
            cleaned = cleaned[:-4].strip()
        if cleaned.startswith("$"):
            cleaned = cleaned[1:].strip()
        cleaned = cleaned.replace(",", "")
        if not cleaned:
            raise ValueError(f"Invalid amount: {text!r}")

        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {text!r}") from None

        if not value.is_finite() or value < 0:
            raise ValueError(f"Invalid amount: {text!r}")
        try:
            exact = value == value.quantize(Decimal(1).scaleb(-DECIMALS))
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {text!r}") from None
        if not exact:
            raise ValueError(
                f"Amount {text!r} has more than {DECIMALS} decimal places"
            )
        return cls(minor=int(value.scaleb(DECIMALS)))

    def to_decimal_string(self) -> str:
        """Exact decimal form with at least two fractional digits."""
        whole, frac = divmod(self.minor, MINOR_PER_UNIT)
        frac_text = f"{frac:0{DECIMALS}d}".rstrip("0")
        if len(frac_text) < 2:
            frac_text = frac_text.ljust(2, "0")
        return f"{whole}.{frac_text}"

    def format_usdc(self) -> str:
        """Display form, e.g. "$1.00 USDC". Rounds half-up to cents."""
        cents = (self.minor + 5_000) // 10_000
        whole, frac = divmod(cents, 100)
        return f"${whole}.{frac:02d} USDC"

    def mul_bps(self, bps: int) -> "Money":
        """floor(amount * bps / 10000)."""
        if bps < 0:
            raise ValueError(f"Basis points must be non-negative, got {bps}")
        return Money(minor=(self.minor * bps) // BPS_DENOMINATOR)

    def times(self, count: int) -> "Money":
        if count < 0:
            raise ValueError(f"Multiplier must be non-negative, got {count}")
        return Money(minor=self.minor * count)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(minor=self.minor + other.minor)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        result = self.minor - other.minor
        if result < 0:
            raise Underflow(
                f"{self.to_decimal_string()} - {other.to_decimal_string()} is negative"
            )
        return Money(minor=result)

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.minor < other.minor

    def __le__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.minor <= other.minor

    def __gt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.minor > other.minor

    def __ge__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.minor >= other.minor

    def __bool__(self) -> bool:
        return self.minor > 0

    def __str__(self) -> str:
        return self.format_usdc()
