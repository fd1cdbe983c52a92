"""Tests for budget preferences resolution and saving."""

import pytest
from pydantic import ValidationError

from budgetplanner.models import BudgetPreferences, UserPreferences
from budgetplanner.schemas.preferences import BudgetPreferencesUpdate
from budgetplanner.services.preferences_service import (
    RatioSumError,
    get_ratios,
    migrate_legacy_preferences,
    rebalance_ratios,
    resolve_preferences,
    save_preferences,
    synthesize_preferences,
    validate_ratios,
)


class TestRatios:
    """Test ratio validation and rebalancing."""

    @pytest.mark.parametrize("ratios", [
        {"essentials": 50, "wants": 30, "savings": 20},
        {"essentials": 33.3, "wants": 33.3, "savings": 33.4},
        {"essentials": 100},
    ])
    def test_valid_ratios(self, ratios):
        """Ratios totalling 100 are accepted."""
        validate_ratios(ratios)

    @pytest.mark.parametrize("ratios", [
        {"essentials": 50, "wants": 30, "savings": 19},
        {"essentials": 50, "wants": 30, "savings": 21},
        {},
    ])
    def test_invalid_ratios(self, ratios):
        """Ratios totalling anything else are rejected."""
        with pytest.raises(RatioSumError, match="Budget ratios must sum to 100%"):
            validate_ratios(ratios)

    def test_rebalance_scales_proportionally(self):
        """Ratios are scaled to a total of 100."""
        assert rebalance_ratios({"essentials": 25, "wants": 15, "savings": 10}) == {
            "essentials": 50, "wants": 30, "savings": 20,
        }

    @pytest.mark.parametrize("ratios", [
        {"a": 1, "b": 1, "c": 1},
        {"a": 10, "b": 20, "c": 30, "d": 7},
        {"a": 3, "b": 3, "c": 3, "d": 3, "e": 3, "f": 3},
        {"a": 120, "b": 5},
    ])
    def test_rebalance_totals_exactly_100(self, ratios):
        """Rounding never leaves the total off by one."""
        rebalanced = rebalance_ratios(ratios)
        assert sum(rebalanced.values()) == 100
        assert set(rebalanced) == set(ratios)

    def test_rebalance_zero_total(self):
        """All-zero ratios are left alone."""
        assert rebalance_ratios({"a": 0, "b": 0}) == {"a": 0, "b": 0}

    @pytest.mark.parametrize("ratios", [
        {"essentials": 150, "wants": -50, "savings": 0},
        {"essentials": 100.5, "wants": -0.5},
    ])
    def test_ratio_bounds(self, ratios):
        """Each ratio must be between 0 and 100."""
        with pytest.raises(ValidationError):
            BudgetPreferencesUpdate(ratios=ratios)


class TestSynthesizePreferences:
    """Test building preferences from categories."""

    def test_default_categories(self, sample_budget):
        """Seeded categories produce the 50/30/20 split."""
        prefs = synthesize_preferences(sample_budget.categories)
        assert prefs.ratios == {"essentials": 50, "wants": 30, "savings": 20}
        assert "income" not in prefs.category_customization
        assert prefs.category_customization["wants"].name == "Wants"

    def test_zero_percentages_fall_back_to_defaults(self, db_session, sample_budget, custom_category):
        """Categories with no percentages get the default split."""
        for category in sample_budget.categories:
            category.percentage = 0
        db_session.commit()

        prefs = synthesize_preferences(sample_budget.categories)
        assert prefs.ratios["essentials"] == 50
        assert prefs.ratios["travel"] == 0
        assert prefs.category_customization["travel"].icon == "✈️"

    def test_custom_split_is_rebalanced(self, db_session, sample_budget, custom_category):
        """Percentages not totalling 100 are scaled to 100."""
        custom_category.percentage = 25
        db_session.commit()

        prefs = synthesize_preferences(sample_budget.categories)
        assert sum(prefs.ratios.values()) == 100
        assert prefs.ratios["travel"] == 20


class TestResolvePreferences:
    """Test first-access reconciliation."""

    def test_defaults_from_categories(self, db_session, sample_budget):
        """A budget without stored or legacy preferences gets defaults."""
        record, source = resolve_preferences(db_session, sample_budget)
        assert source == "defaults"
        assert record.ratios == {"essentials": 50, "wants": 30, "savings": 20}
        assert db_session.query(BudgetPreferences).count() == 1

    def test_migrates_legacy_preferences(self, db_session, sample_budget, legacy_preferences):
        """The user's global document is copied to the budget."""
        record, source = resolve_preferences(db_session, sample_budget)
        assert source == "migrated"
        assert record.ratios == {"essentials": 60, "wants": 20, "savings": 20}
        assert record.category_customization["essentials"]["name"] == "Needs"
        assert record.chart_preferences["show_pie_chart"] is False
        assert record.chart_preferences["show_bar_chart"] is True

    def test_legacy_ignored_for_other_users(self, db_session, other_budget, legacy_preferences):
        """Only the budget owner's global document is migrated."""
        _, source = resolve_preferences(db_session, other_budget)
        assert source == "defaults"

    def test_idempotent(self, db_session, sample_budget, legacy_preferences):
        """A second resolution returns the stored record unchanged."""
        first, _ = resolve_preferences(db_session, sample_budget)
        first_ratios = dict(first.ratios)

        second, source = resolve_preferences(db_session, sample_budget)
        assert source == "stored"
        assert second.budget_id == first.budget_id
        assert second.ratios == first_ratios
        assert db_session.query(BudgetPreferences).count() == 1

    def test_get_ratios(self, db_session, sample_budget):
        """Ratios are available without handling the record."""
        assert get_ratios(db_session, sample_budget) == {"essentials": 50, "wants": 30, "savings": 20}


class TestSavePreferences:
    """Test persisting preferences."""

    def test_save_mirrors_categories(self, db_session, sample_budget):
        """Saved ratios are copied onto the category percentages."""
        update = BudgetPreferencesUpdate(ratios={"Essentials": 40, "Wants": 40, "Savings": 20})
        record = save_preferences(db_session, sample_budget, update)

        assert record.ratios == {"essentials": 40, "wants": 40, "savings": 20}
        percentages = {c.key: c.percentage for c in sample_budget.categories}
        assert percentages["essentials"] == 40
        assert percentages["wants"] == 40
        assert percentages["income"] == 0

    def test_save_rejects_bad_total(self, db_session, sample_budget):
        """Nothing is stored when ratios do not sum to 100."""
        update = BudgetPreferencesUpdate(ratios={"essentials": 50, "wants": 30, "savings": 10})
        with pytest.raises(RatioSumError):
            save_preferences(db_session, sample_budget, update)
        assert db_session.query(BudgetPreferences).count() == 0

    def test_save_overwrites_existing(self, db_session, sample_budget):
        """Saving twice keeps a single record."""
        save_preferences(db_session, sample_budget, BudgetPreferencesUpdate(ratios={"essentials": 70, "wants": 10, "savings": 20}))
        save_preferences(db_session, sample_budget, BudgetPreferencesUpdate(ratios={"essentials": 50, "wants": 30, "savings": 20}))

        assert db_session.query(BudgetPreferences).count() == 1
        record, source = resolve_preferences(db_session, sample_budget)
        assert source == "stored"
        assert record.ratios["essentials"] == 50


class TestMigrateLegacyPreferences:
    """Test normalizing legacy global documents."""

    def test_keys_normalized_and_rebalanced(self):
        """Capitalised keys are lowercased and a 99 total is brought to 100."""
        prefs = migrate_legacy_preferences({
            "ratios": {"Essentials": 50, "Wants": 30, "Savings": 19},
            "category_customization": {
                "Essentials": {"name": "Needs", "color": "#000000", "icon": "🏠"},
            },
        })
        assert prefs.ratios == {"essentials": 51, "wants": 30, "savings": 19}
        assert set(prefs.category_customization) == {"essentials"}

    def test_valid_total_kept(self):
        """Ratios that already round to 100 are kept as they are."""
        prefs = migrate_legacy_preferences({"ratios": {"essentials": 33.3, "wants": 33.3, "savings": 33.4}})
        assert prefs.ratios == {"essentials": 33.3, "wants": 33.3, "savings": 33.4}

    def test_zero_ratios_use_defaults(self):
        """An empty ratio set falls back to 50/30/20."""
        prefs = migrate_legacy_preferences({"ratios": {}})
        assert prefs.ratios == {"essentials": 50, "wants": 30, "savings": 20}

    @pytest.mark.parametrize("document", [
        {"category_customization": {"essentials": {"name": "Needs", "color": "#000000"}}},
        {"ratios": {"essentials": 150, "wants": -50}},
        {"ratios": "50/30/20"},
    ])
    def test_unreadable_document(self, document):
        """Documents that do not validate are rejected."""
        assert migrate_legacy_preferences(document) is None

    def test_unreadable_legacy_falls_back_to_defaults(self, db_session, sample_budget):
        """Resolution ignores an unreadable legacy document."""
        db_session.add(UserPreferences(
            user_id="user-1",
            budget_preferences={"category_customization": {"essentials": {"name": "Needs"}}},
        ))
        db_session.commit()

        record, source = resolve_preferences(db_session, sample_budget)
        assert source == "defaults"
        assert record.ratios == {"essentials": 50, "wants": 30, "savings": 20}
