"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Pricing / line items
  2xxx: Transaction process
  3xxx: Negotiation
  4xxx: Tax
  5xxx: Hosted marketplace (upstream)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Pricing ---

class CurrencyMismatchError(AppError):
    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            1001,
            f"Currency mismatch: expected {expected}, got {actual}",
            422,
        )


class InvalidQuantityError(AppError):
    def __init__(self, quantity: int) -> None:
        super().__init__(1002, f"Quantity must be at least 1, got {quantity}", 422)


class MissingListingPriceError(AppError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(1003, f"Listing has no price: {listing_id}", 422)


class DeliveryMethodUnavailableError(AppError):
    def __init__(self, method: str) -> None:
        super().__init__(1004, f"Delivery method not available for all items: {method}", 422)


# --- 2xxx: Transaction process ---

class IllegalTransitionError(AppError):
    def __init__(self, state: str, transition: str) -> None:
        super().__init__(
            2001,
            f"Action no longer available: {transition} is not allowed from state {state}",
            409,
        )


class UnknownProcessError(AppError):
    def __init__(self, process_name: str) -> None:
        super().__init__(2002, f"Unknown transaction process: {process_name}", 422)


class TransitionNotAllowedError(AppError):
    def __init__(self, transition: str, role: str) -> None:
        super().__init__(2003, f"Role {role} may not invoke {transition}", 403)


class InvalidActorError(AppError):
    def __init__(self, actor: object) -> None:
        super().__init__(2004, f"Invalid actor: {actor!r}", 422)


class NotPrivilegedTransitionError(AppError):
    def __init__(self, transition: str) -> None:
        super().__init__(2005, f"Transition is not privileged: {transition}", 422)


class UnknownStateError(AppError):
    def __init__(self, process_name: str, state: str) -> None:
        super().__init__(2006, f"Unknown state {state} in process {process_name}", 422)


# --- 3xxx: Negotiation ---

class InvalidNegotiationHistoryError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            3001,
            f"Negotiation history is out of sync, please retry checkout: {detail}",
            409,
        )


class InvalidOfferError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Invalid offer: {detail}", 422)


# --- 4xxx: Tax ---

class TaxProviderError(AppError):
    """Raised by tax provider adapters; always absorbed by the tax resolver."""

    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Tax provider error: {detail}", 502)


class InvalidShippingAddressError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "Shipping address with country is required", 400)


class MissingCurrencyError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "Currency is required", 400)


# --- 5xxx: Hosted marketplace ---

class ListingNotFoundError(AppError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(5001, f"Listing not found: {listing_id}", 404)


class TransactionNotFoundError(AppError):
    def __init__(self, transaction_id: str) -> None:
        super().__init__(5002, f"Transaction not found: {transaction_id}", 404)


class MarketplaceApiError(AppError):
    def __init__(self, status: int, detail: str) -> None:
        super().__init__(5003, f"Marketplace API error ({status}): {detail}", 502)
        self.upstream_status = status


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
