# src/analytics/rule_breaks.py
"""Impact analysis of rule-following versus rule-breaking trades."""
from collections import defaultdict

from src.analytics.grouping import average_r, total_r, win_rate
from src.analytics.models import RuleBreakAnalysis, ViolationImpact
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import RuleViolation, Trade


class RuleBreakAnalyzer:
    """Compares outcomes of trades that followed or broke the plan."""

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def analyze(self, trades: list[Trade]) -> RuleBreakAnalysis:
        """Analyze rule-following behavior.

        Trades with no recorded rule_followed value are left out of both
        partitions but still count toward total_trades.

        Args:
            trades: Trades to analyze.

        Returns:
            RuleBreakAnalysis with partition stats and per-violation impact.
        """
        followed = [t for t in trades if t.rule_followed is True]
        broken = [t for t in trades if t.rule_followed is False]

        followed_rate = len(followed) / len(trades) * 100 if trades else 0.0

        return RuleBreakAnalysis(
            total_trades=len(trades),
            rules_followed_count=len(followed),
            rules_broken_count=len(broken),
            rule_followed_rate=round(followed_rate, 1),
            pnl_with_rules_followed=round(self._normalizer.total_base_pnl(followed), 2),
            pnl_with_rules_broken=round(self._normalizer.total_base_pnl(broken), 2),
            avg_r_with_rules_followed=round(average_r(followed), 2),
            avg_r_with_rules_broken=round(average_r(broken), 2),
            win_rate_with_rules_followed=round(win_rate(followed), 1),
            win_rate_with_rules_broken=round(win_rate(broken), 1),
            violation_breakdown=self._violation_breakdown(trades),
        )

    def _violation_breakdown(self, trades: list[Trade]) -> list[ViolationImpact]:
        """Aggregate per violation tag, worst P&L first.

        A trade carrying several tags counts toward each of them. NONE records
        that no rule was broken and is deliberately left out of the breakdown.
        """
        tagged: dict[RuleViolation, list[Trade]] = defaultdict(list)
        for trade in trades:
            for violation in trade.rule_violations:
                if violation is RuleViolation.NONE:
                    continue
                tagged[violation].append(trade)

        breakdown = [
            ViolationImpact(
                violation=violation,
                count=len(group),
                pnl=round(self._normalizer.total_base_pnl(group), 2),
                avg_r=round(total_r(group) / len(group), 2),
            )
            for violation, group in tagged.items()
        ]
        return sorted(breakdown, key=lambda v: v.pnl)
