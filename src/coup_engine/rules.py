"""Numeric game parameters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    """Costs, grants and thresholds used by the engine."""
    initial_pool: int = 50

    gather_amount: int = 1
    tax_amount: int = 2
    governor_tax_amount: int = 3

    bribe_cost: int = 4
    sanction_cost: int = 3
    sanction_fine: int = 1
    sanction_veto_penalty: int = 1
    coup_cost: int = 7
    coup_veto_cost: int = 5
    must_coup_threshold: int = 10

    arrest_amount: int = 1
    merchant_arrest_amount: int = 2

    # Role abilities
    baron_invest_cost: int = 3
    baron_invest_return: int = 6
    baron_sanction_compensation: int = 1
    general_arrest_refund: int = 1
    merchant_bonus_threshold: int = 3
    merchant_turn_bonus: int = 1
    merchant_arrest_loss: int = 2


DEFAULT_RULES = GameRules()
