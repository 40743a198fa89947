"""Tests for role abilities and hooks."""

import pytest
from coup_engine.game import Game
from coup_engine.player import Player
from coup_engine.role import Role, RoleAbilities
from coup_engine.rules import GameRules
from coup_engine.types import ActionType, RoleKind
from coup_engine.exceptions import IllegalAction, OutOfCoins


class TestRoleAbilities:
    """Test the capability table."""

    def test_every_role_is_covered(self):
        """Test each role kind has a table entry."""
        for kind in RoleKind:
            assert RoleAbilities.can_perform_action(kind, ActionType.GATHER)
            assert isinstance(RoleAbilities.get_blocks(kind), set)

    def test_default_deny(self):
        """Test only the Governor may tax and nobody else initiates extras."""
        for kind in RoleKind:
            role = Role(kind)
            assert role.can_gather()
            assert role.can_tax() == (kind == RoleKind.GOVERNOR)
            assert not role.can_bribe()
            assert not role.can_arrest()
            assert not role.can_sanction()

    def test_blocks(self):
        """Test which roles may veto what."""
        assert RoleAbilities.get_blocks(RoleKind.GOVERNOR) == {ActionType.TAX}
        assert RoleAbilities.get_blocks(RoleKind.TAX_VETOER) == {ActionType.TAX}
        assert RoleAbilities.get_blocks(RoleKind.SPY) == {ActionType.ARREST}
        assert RoleAbilities.get_blocks(RoleKind.GENERAL) == {ActionType.ELIMINATE}
        assert RoleAbilities.get_blocks(RoleKind.JUDGE) == {ActionType.BRIBE}
        assert RoleAbilities.get_blocks(RoleKind.BARON) == set()
        assert RoleAbilities.get_blocks(RoleKind.MERCHANT) == set()

    def test_nobody_blocks_sanction(self):
        """Test no role carries a sanction veto."""
        for kind in RoleKind:
            assert not Role(kind).can_block(ActionType.SANCTION)

    def test_get_actions(self):
        """Test initiable actions per role."""
        assert RoleAbilities.get_actions(RoleKind.GOVERNOR) == {
            ActionType.GATHER, ActionType.TAX, ActionType.ELIMINATE}
        assert RoleAbilities.get_actions(RoleKind.BARON) == {
            ActionType.GATHER, ActionType.ELIMINATE}

    def test_ensure_can_block(self):
        """Test vetoes are denied unless the table grants them."""
        with pytest.raises(IllegalAction):
            Role(RoleKind.MERCHANT).ensure_can_block(ActionType.TAX)
        Role(RoleKind.SPY).ensure_can_block(ActionType.ARREST)

    def test_grants(self):
        """Test plain roles can be granted extra actions."""
        role = Role.with_grants(ActionType.ARREST, ActionType.SANCTION)

        assert role.kind == RoleKind.PLAIN
        assert role.can_arrest()
        assert role.can_sanction()
        assert not role.can_bribe()

    def test_clone(self):
        """Test clone gives an equal, separate role."""
        role = Role.with_grants(ActionType.BRIBE)

        copy = role.clone()

        assert copy == role
        assert copy is not role

    def test_amounts(self):
        """Test tax and arrest amounts per role."""
        rules = GameRules()

        assert Role(RoleKind.GOVERNOR).tax_amount(rules) == 3
        assert Role().tax_amount(rules) == 2
        assert Role(RoleKind.MERCHANT).arrest_amount(rules) == 2
        assert Role(RoleKind.SPY).arrest_amount(rules) == 1


class TestRoleHooks:
    """Test the role-specific reactions and special actions."""

    def _player(self, kind, coins=0):
        game = Game()
        player = game.add_player(Player("P", Role(kind), game))
        player.add_coins(coins)
        return game, player

    def test_baron_invest(self):
        """Test the Baron pays 3 to gain 6."""
        game, baron = self._player(RoleKind.BARON, 3)

        result = baron.special_action()

        assert baron.coins == 6
        assert result.success
        assert game.pool_coins() == 50

    def test_baron_invest_needs_coins(self):
        """Test the Baron cannot invest without 3 coins."""
        _, baron = self._player(RoleKind.BARON, 2)

        with pytest.raises(OutOfCoins):
            baron.special_action()
        assert baron.coins == 2

    def test_spy_reveal(self):
        """Test the Spy sees a balance without changing it."""
        game, spy = self._player(RoleKind.SPY)
        target = game.add_player(Player("T", Role(), game))
        target.add_coins(4)

        result = spy.special_action(target)

        assert result.revealed_coins == 4
        assert target.coins == 4
        assert "T has 4 coins" in game.action_log[-1]

    def test_spy_reveal_needs_target(self):
        """Test the Spy must name a target."""
        _, spy = self._player(RoleKind.SPY)

        with pytest.raises(IllegalAction):
            spy.special_action()

    def test_no_special_action(self):
        """Test other roles have a harmless special action."""
        _, judge = self._player(RoleKind.JUDGE, 2)

        result = judge.special_action()

        assert result.success
        assert judge.coins == 2

    def test_merchant_turn_bonus(self):
        """Test a Merchant with 3 coins gets 1 at the start of their turn."""
        game = Game()
        alice = game.add_player(Player("Alice", Role(), game))
        merchant = game.add_player(Player("M", Role(RoleKind.MERCHANT), game))
        merchant.add_coins(3)

        alice.gather()

        assert merchant.coins == 4

    def test_merchant_no_bonus_when_poor(self):
        """Test a Merchant under 3 coins gets nothing."""
        _, merchant = self._player(RoleKind.MERCHANT, 2)

        merchant.on_start_turn()

        assert merchant.coins == 2

    def test_merchant_arrested_with_one_coin(self):
        """Test a Merchant loses everything when it has fewer than 2 coins."""
        game, merchant = self._player(RoleKind.MERCHANT, 1)

        merchant.handle_arrested()

        assert merchant.coins == 0
        assert game.pool_coins() == 51

    def test_general_arrested(self):
        """Test a General gets a coin back when arrested."""
        _, general = self._player(RoleKind.GENERAL)

        general.handle_arrested()

        assert general.coins == 1

    def test_baron_sanctioned(self):
        """Test a Baron gains a coin when sanctioned."""
        _, baron = self._player(RoleKind.BARON)

        baron.handle_sanctioned()

        assert baron.coins == 1
        assert baron.role.overrides_sanction_penalty()

    def test_judge_sanctioned(self):
        """Test a Judge's sanctioned hook does nothing."""
        _, judge = self._player(RoleKind.JUDGE, 2)

        judge.handle_sanctioned()

        assert judge.coins == 2
        assert not judge.role.overrides_sanction_penalty()
