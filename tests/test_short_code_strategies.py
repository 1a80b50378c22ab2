"""
Tests for short code generation strategies.
"""

import re
import string
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from shortlink_app.config import Settings
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy
from shortlink_app.services.short_code_factory import (
    ShortCodeFactory,
    ShortCodeStrategyType
)


def never_taken(code):
    return False


class TestRandomStrategy:
    """Test random generation strategy"""

    def test_generates_correct_length(self):
        strategy = RandomShortCodeStrategy(length=6)

        code = strategy.generate(never_taken)

        assert len(code) == 6

    def test_uses_alphanumeric_alphabet(self):
        strategy = RandomShortCodeStrategy(length=6)

        assert len(strategy.characters) == 62
        for _ in range(200):
            assert re.fullmatch(r"[A-Za-z0-9]{6}", strategy.generate(never_taken))

    def test_draws_every_character_uniformly(self):
        """Test each draw is a single choice over the whole alphabet"""
        strategy = RandomShortCodeStrategy(length=6)

        with patch("shortlink_app.services.short_code_strategies.random.choice",
                   return_value="Z") as choice:
            code = strategy.generate(never_taken)

        assert code == "ZZZZZZ"
        assert choice.call_count == 6
        choice.assert_called_with(string.ascii_letters + string.digits)

    def test_retries_on_collision(self):
        """Test that taken candidates are rejected until a free one appears"""
        strategy = RandomShortCodeStrategy(length=6)
        taken = {"aaaaaa", "bbbbbb"}
        candidates = iter(["aaaaaa", "bbbbbb", "cccccc"])

        with patch.object(strategy, "_generate_random_string", side_effect=lambda: next(candidates)):
            code = strategy.generate(taken.__contains__)

        assert code == "cccccc"


class TestShortCodeFactory:
    """Test strategy factory"""

    def setup_method(self):
        ShortCodeFactory.clear_cache()

    def teardown_method(self):
        ShortCodeFactory.clear_cache()

    def test_creates_random_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.RANDOM)
        assert isinstance(strategy, RandomShortCodeStrategy)
        assert strategy.length == 6

    def test_returns_cached_instance(self):
        first = ShortCodeFactory.create_strategy(ShortCodeStrategyType.RANDOM)
        second = ShortCodeFactory.create_strategy(ShortCodeStrategyType.RANDOM)
        assert first is second

    def test_creates_default_from_settings(self):
        strategy = ShortCodeFactory.create_strategy()
        assert isinstance(strategy, RandomShortCodeStrategy)

    def test_unknown_strategy_name_is_rejected(self):
        with pytest.raises(ValueError):
            ShortCodeStrategyType("base62")


@pytest.mark.parametrize("length", [0, 3])
def test_generated_length_below_custom_minimum_is_rejected(length):
    with pytest.raises(ValidationError):
        Settings(short_code_length=length)


def test_generated_length_setting_accepts_minimum():
    assert Settings(short_code_length=4).short_code_length == 4
