# src/journal/metrics_calculator.py
"""Calculator for trading performance statistics."""
import math
from collections.abc import Iterable
from typing import Any

from src.journal.models import StatSnapshot, coerce_pnl


class MetricsCalculator:
    """Calculates core trade statistics from a chronological P&L sequence."""

    def calculate(self, pnls: Iterable[Any]) -> StatSnapshot:
        """Calculate trade statistics.

        Args:
            pnls: P&L of each closed trade in chronological order. Missing or
                malformed values count as 0.

        Returns:
            StatSnapshot with full-precision values. profit_factor and
            recovery_factor are math.inf when their denominator is 0 and the
            numerator is positive.
        """
        values = [coerce_pnl(p) for p in pnls]

        if not values:
            return StatSnapshot.empty()

        wins = [p for p in values if p > 0]
        losses = [p for p in values if p < 0]

        total_trades = len(values)
        winning_trades = len(wins)
        losing_trades = len(losses)

        win_rate = winning_trades / total_trades * 100

        gross_profit = sum(wins)
        gross_loss = abs(sum(losses))
        profit_factor = self._safe_ratio(gross_profit, gross_loss)

        total_pnl = sum(values)
        expectancy = total_pnl / total_trades

        avg_win = gross_profit / winning_trades if winning_trades > 0 else 0.0
        avg_loss = gross_loss / losing_trades if losing_trades > 0 else 0.0

        max_drawdown = self._calculate_max_drawdown(values)
        recovery_factor = self._safe_ratio(total_pnl, abs(max_drawdown))
        sharpe_ratio = self._calculate_sharpe_ratio(values, expectancy)

        return StatSnapshot(
            total_trades=total_trades,
            winning_trades=winning_trades,
            losing_trades=losing_trades,
            total_pnl=total_pnl,
            gross_profit=gross_profit,
            gross_loss=gross_loss,
            win_rate=win_rate,
            profit_factor=profit_factor,
            expectancy=expectancy,
            avg_win=avg_win,
            avg_loss=avg_loss,
            max_drawdown=max_drawdown,
            recovery_factor=recovery_factor,
            sharpe_ratio=sharpe_ratio,
        )

    @staticmethod
    def _safe_ratio(numerator: float, denominator: float) -> float:
        """numerator / denominator with the inf / 0 sentinel on a zero denominator."""
        if denominator == 0:
            return math.inf if numerator > 0 else 0.0
        return numerator / denominator

    def _calculate_max_drawdown(self, pnls: list[float]) -> float:
        """Calculate maximum drawdown from cumulative PnL.

        The running peak starts at 0, so a losing first trade is a drawdown
        from the starting equity.

        Args:
            pnls: Chronological P&L values.

        Returns:
            Largest peak-to-trough decline in cumulative P&L.
        """
        cumulative_pnl = 0.0
        peak = 0.0
        max_drawdown = 0.0

        for pnl in pnls:
            cumulative_pnl += pnl
            if cumulative_pnl > peak:
                peak = cumulative_pnl
            drawdown = peak - cumulative_pnl
            if drawdown > max_drawdown:
                max_drawdown = drawdown

        return max_drawdown

    def _calculate_sharpe_ratio(self, pnls: list[float], avg_return: float) -> float:
        """Trade-level Sharpe ratio using the population standard deviation.

        Args:
            pnls: P&L values.
            avg_return: Mean P&L per trade.

        Returns:
            avg_return / std_dev, or 0 with fewer than two trades or no spread.
        """
        if len(pnls) < 2:
            return 0.0

        variance = sum((p - avg_return) ** 2 for p in pnls) / len(pnls)
        std_dev = math.sqrt(variance)

        # Identical P&Ls can leave float residue in the variance
        if std_dev <= 1e-12 * abs(avg_return):
            return 0.0

        return avg_return / std_dev
