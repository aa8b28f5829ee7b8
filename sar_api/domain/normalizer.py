"""Write-path defaulting for SAR sub-structures. Pure functions; never reject input."""

from dataclasses import replace

from sar_api.core.clock import Clock
from sar_api.domain.models.sar import CustomerInformation, SuspicionDetails, TransactionDetail

DEFAULT_CUSTOMER_TYPE = "Individual"
DEFAULT_COUNTRY = "US"
DEFAULT_LOCATION = "Unknown"


def normalize_customer(customer: CustomerInformation) -> CustomerInformation:
    """Default customer_type to Individual and a blank address.country to US."""
    address = customer.address
    country = (address.country or "").strip()
    if not country or country != address.country:
        address = replace(address, country=country or DEFAULT_COUNTRY)
    customer_type = customer.customer_type if customer.customer_type is not None else DEFAULT_CUSTOMER_TYPE
    return replace(customer, address=address, customer_type=customer_type)


def normalize_transaction(transaction: TransactionDetail) -> TransactionDetail:
    if transaction.location is not None:
        return transaction
    return replace(transaction, location=DEFAULT_LOCATION)


def normalize_suspicion(suspicion: SuspicionDetails, clock: Clock) -> SuspicionDetails:
    """Stamp suspicion_identified_date with the clock's time when it was left unset."""
    if suspicion.suspicion_identified_date is not None:
        return suspicion
    return replace(suspicion, suspicion_identified_date=clock.now())


def normalize_transactions(transactions) -> tuple[TransactionDetail, ...]:
    return tuple(normalize_transaction(t) for t in transactions)
