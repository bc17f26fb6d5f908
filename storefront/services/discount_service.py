import structlog
from typing import Optional

from ..core.config import Config, Settings
from ..core.locks import LockRegistry
from ..db.store import Store
from ..schemas import DiscountCode


logger = structlog.get_logger(__name__)


class DiscountService:
    """
    Issues and redeems single-use discount codes.

    A code is minted every time the completed-order count reaches a positive
    multiple of ``NTH_ORDER_FOR_DISCOUNT``. Whether one is due is re-derived
    from the order counter, never stored as pending state. Issuance and
    consumption touch global state and run under the ledger lock.
    """

    def __init__(self, store: Store, locks: LockRegistry, settings: Settings = Config):
        self.store = store
        self.locks = locks
        self.nth_order = settings.NTH_ORDER_FOR_DISCOUNT
        self.discount_percent = settings.DISCOUNT_PERCENT

    def should_issue_after_order(self, count: int) -> bool:
        """Zero orders never triggers issuance even though 0 % n == 0."""
        return count > 0 and count % self.nth_order == 0

    def code_for_order(self, count: int) -> str:
        return f"DISC{self.discount_percent:g}_{count}"

    async def issue_if_due(self, count: int) -> Optional[DiscountCode]:
        """
        Mint the code for ``count`` if it is an issuance boundary.

        The caller must hold the ledger lock. A boundary that already has a
        code gets that code back rather than a duplicate.
        """
        if not self.should_issue_after_order(count):
            return None

        label = self.code_for_order(count)
        existing = await self.store.find_discount_code(label)
        if existing:
            return existing

        code = DiscountCode(code=label, discount_percent=self.discount_percent, is_used=False)
        await self.store.add_discount_code(code)
        logger.info("discount_code_issued", code=code.code, order_count=count)
        return code

    async def try_issue_code(self) -> Optional[DiscountCode]:
        """Issue a code for the current order count, or do nothing if none is due."""
        async with self.locks.ledger:
            count = await self.store.current_order_count()
            return await self.issue_if_due(count)

    async def validate(self, code: str) -> Optional[DiscountCode]:
        """Exact lookup. Unknown and used codes are both reported as None."""
        if not code:
            return None

        found = await self.store.find_discount_code(code)
        if not found or found.is_used:
            return None
        return found

    async def consume(self, code: str) -> None:
        """Mark the code used. Unknown codes are ignored."""
        async with self.locks.ledger:
            await self.store.mark_discount_code_used(code)
        logger.info("discount_code_consumed", code=code)
