"""
Filter -- account and commodity predicates applied while building a ledger.

Pure and stateless: one instance can be shared by any number of builds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ledger_kernel.domain.accounts import Account
from ledger_kernel.domain.commodities import Commodity


@dataclass(frozen=True)
class Filter:
    """
    A pair of optional regular expressions.

    Contract:
        An unset pattern matches everything. A set pattern matches when
        ``re.search`` finds it in the entity's canonical string form.
    """

    accounts: re.Pattern[str] | None = None
    commodities: re.Pattern[str] | None = None

    @classmethod
    def of(cls, accounts: str | None = None, commodities: str | None = None) -> Filter:
        """Compile pattern strings into a Filter. Empty strings count as unset."""
        return cls(
            accounts=re.compile(accounts) if accounts else None,
            commodities=re.compile(commodities) if commodities else None,
        )

    def match_account(self, account: Account) -> bool:
        return self.accounts is None or self.accounts.search(str(account)) is not None

    def match_commodity(self, commodity: Commodity) -> bool:
        return self.commodities is None or self.commodities.search(str(commodity)) is not None


MATCH_ALL = Filter()
