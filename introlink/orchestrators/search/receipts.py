"""Receipt reconciler: binds a backend receipt to the result set it paid for."""

from pydantic import ValidationError

from introlink.contracts.search_v1 import Receipt
from introlink.core.logger import logger
from introlink.orchestrators.search.errors import ProtocolError
from introlink.orchestrators.search.models import BackendReply, SearchSuccess


class ReceiptReconciler:
    def __init__(self, domain: str):
        self._domain = domain

    def reconcile(self, request_id: int, reply: BackendReply) -> SearchSuccess:
        """Stamp items and receipt with the request that produced them.

        A missing receipt stays None (never a fabricated zero-cost one); an
        empty item list with a receipt is a valid paid-for empty result.
        """
        receipt: Receipt | None = None
        if reply.receipt is not None:
            try:
                receipt = Receipt.model_validate(reply.receipt)
            except ValidationError as e:
                raise ProtocolError(f"Invalid receipt in response: {e}") from e
            logger.receipt_recorded(
                self._domain,
                request_id,
                receipt.provider,
                receipt.amount_paid_usd,
                len(reply.items),
            )
        else:
            logger.debug(f"{self._domain}#{request_id}: response carried no receipt")

        return SearchSuccess(
            request_id=request_id,
            items=tuple(reply.items),
            receipt=receipt,
        )
