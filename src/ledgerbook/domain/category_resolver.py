"""Resolve free-text categories to chart of accounts codes.

Resolution never fails: a direct name match is tried first, then the ordered
expense keyword rules, then a fallback code for the requested account type.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ledgerbook.domain import chart_of_accounts as coa
from ledgerbook.domain.chart_of_accounts import DEFAULT_CHART, ChartOfAccounts
from ledgerbook.domain.entities import AccountResolution, AccountType

logger = structlog.get_logger(__name__)

TIER_DIRECT = "direct"
TIER_KEYWORD = "keyword"
TIER_FALLBACK = "fallback"


@dataclass(frozen=True)
class KeywordRule:
    """Maps any of ``keywords`` (substring, case-insensitive) to an account."""

    keywords: tuple[str, ...]
    account_code: str

    def matches(self, normalized_category: str) -> bool:
        return any(keyword in normalized_category for keyword in self.keywords)


# Order matters: the first matching rule wins.
EXPENSE_KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("meal", "food"), "5010"),
    KeywordRule(("adver", "marketing"), "5000"),
    KeywordRule(("office", "stationery"), "5060"),
    KeywordRule(("supply",), "5070"),
    KeywordRule(("fuel", "gas", "auto", "car"), "5160"),
    KeywordRule(("phone", "internet", "utility"), "5150"),
    KeywordRule(("rent",), "5100"),
)

FALLBACK_CODES: dict[AccountType, str] = {
    AccountType.LIABILITY: coa.CREDIT_CARD_PAYABLE,
    AccountType.ASSET: coa.BUSINESS_BANK,
    AccountType.REVENUE: coa.COMMISSION_INCOME,
}


class CategoryResolver:
    """Ordered rule table over a chart of accounts."""

    def __init__(
        self,
        chart: ChartOfAccounts = DEFAULT_CHART,
        keyword_rules: tuple[KeywordRule, ...] = EXPENSE_KEYWORD_RULES,
        fallback_codes: Optional[dict[AccountType, str]] = None,
        default_code: str = coa.PERSONAL_EXPENSE,
    ):
        self.chart = chart
        self.keyword_rules = keyword_rules
        self.fallback_codes = dict(FALLBACK_CODES if fallback_codes is None else fallback_codes)
        self.default_code = default_code

    def resolve(
        self, category: Optional[str], account_type: AccountType = AccountType.EXPENSE
    ) -> AccountResolution:
        """Resolve a category to an account code, reporting which tier matched.

        Args:
            category: Free-text category (None is treated as empty)
            account_type: Account type to resolve within

        Returns:
            AccountResolution; ``unmatched`` is True when only the fallback applied
        """
        normalized = (category or "").lower()

        if normalized:
            direct = self.chart.find_by_name(normalized, account_type)
            if direct is not None:
                return AccountResolution(code=direct.code, tier=TIER_DIRECT)

            if account_type == AccountType.EXPENSE:
                for rule in self.keyword_rules:
                    if rule.matches(normalized):
                        return AccountResolution(code=rule.account_code, tier=TIER_KEYWORD)

        code = self.fallback_codes.get(account_type, self.default_code)
        logger.debug(
            "category_unmatched",
            category=category,
            account_type=account_type.value,
            fallback_code=code,
        )
        return AccountResolution(code=code, tier=TIER_FALLBACK, unmatched=True)

    def resolve_account_code(
        self, category: Optional[str], account_type: AccountType = AccountType.EXPENSE
    ) -> str:
        return self.resolve(category, account_type).code


DEFAULT_RESOLVER = CategoryResolver()


def resolve_account_code(
    category: Optional[str], account_type: AccountType = AccountType.EXPENSE
) -> str:
    """Resolve a category against the default chart of accounts."""
    return DEFAULT_RESOLVER.resolve_account_code(category, account_type)
