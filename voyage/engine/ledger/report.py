"""Presentation helpers for settlement - the only place amounts are rounded."""

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from voyage.engine.config import Settings
from voyage.engine.ledger.aggregate import aggregate_trip
from voyage.engine.ledger.settlement import LedgerEngine, default_ledger_engine
from voyage.engine.models.activity import Member, Trip
from voyage.engine.models.ledger import SettlementReport, Transfer

CURRENCY_SYMBOLS: dict[str, str] = {
    "TWD": "NT$",
    "USD": "$",
    "JPY": "¥",
    "KRW": "₩",
    "EUR": "€",
    "CNY": "¥",
    "HKD": "HK$",
}


def round_currency(amount: Decimal) -> int:
    """Round to whole currency units, halves away from zero."""
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def currency_symbol(currency: str) -> str:
    """Display symbol for a currency code, "$" when unknown."""
    return CURRENCY_SYMBOLS.get(currency.upper(), "$")


def to_transfers(balances: Mapping[str, Decimal], reference_member_id: str) -> list[Transfer]:
    """Turn signed balances into directed transfers, dropping those that round to 0.

    A positive balance is a payment from the member to the reference member;
    a negative one flows the other way.
    """
    transfers: list[Transfer] = []
    for member_id, balance in balances.items():
        amount = round_currency(abs(balance))
        if amount == 0:
            continue
        if balance > 0:
            transfers.append(
                Transfer(from_member_id=member_id, to_member_id=reference_member_id, amount=amount)
            )
        else:
            transfers.append(
                Transfer(from_member_id=reference_member_id, to_member_id=member_id, amount=amount)
            )
    return transfers


def build_settlement_report(
    trip: Trip,
    settings: Settings | None = None,
    engine: LedgerEngine | None = None,
) -> SettlementReport:
    """Compute totals, balances and transfers for a trip's cost summary."""
    engine = engine or default_ledger_engine()
    reference = trip.reference_member_id(settings)
    balances = engine.settle(trip.activities(), trip.members, reference)
    return SettlementReport(
        trip_id=trip.id,
        destination=trip.destination,
        currency=trip.currency,
        reference_member_id=reference,
        totals=aggregate_trip(trip),
        balances=balances,
        transfers=to_transfers(balances, reference),
    )


def format_settlement_text(report: SettlementReport, members: Sequence[Member]) -> str:
    """Render the copyable settlement summary."""
    names = {member.id: member.name or member.id for member in members}
    symbol = currency_symbol(report.currency)
    title = f"{report.destination} trip" if report.destination else "Trip"

    lines = [f"{title} settlement ({report.currency}):"]
    for transfer in report.transfers:
        if transfer.to_member_id == report.reference_member_id:
            name = names.get(transfer.from_member_id, transfer.from_member_id)
            lines.append(f"• {name} owes me: {symbol}{transfer.amount}")
        else:
            name = names.get(transfer.to_member_id, transfer.to_member_id)
            lines.append(f"• I owe {name}: {symbol}{transfer.amount}")

    if not report.transfers:
        lines.append("Nothing to settle.")
    return "\n".join(lines)
