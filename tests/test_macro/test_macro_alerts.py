"""Tests for macro alert classification and the gold delta lookup."""

from decimal import Decimal

from watchtower.macro.alerts import (
    dominance_trend,
    evaluate_dominance,
    evaluate_fear_greed,
    evaluate_gold,
    evaluate_market_cap,
    gold_correlation,
    news_alerts,
)
from watchtower.macro.models import FearGreed, GlobalData, GoldQuote, NewsFlag
from watchtower.models import PricePoint

HOUR = 3_600_000
NOW = 1_704_067_200_000


class TestFearGreed:
    def test_small_shift_is_quiet(self) -> None:
        assert evaluate_fear_greed(FearGreed(value=50, label="Neutral", change_24h=8)) == []

    def test_drop_alerts(self) -> None:
        alerts = evaluate_fear_greed(FearGreed(value=20, label="Extreme Fear", change_24h=-12))
        assert len(alerts) == 1
        assert alerts[0].type == "fear_shift"
        assert "dropped 12 points" in alerts[0].message
        assert "Extreme Fear (20)" in alerts[0].message

    def test_jump_alerts(self) -> None:
        alerts = evaluate_fear_greed(FearGreed(value=75, label="Greed", change_24h=9))
        assert "jumped 9 points" in alerts[0].message


class TestDominance:
    def test_unknown_without_history(self, macro_settings) -> None:
        reading, alerts = evaluate_dominance(Decimal("52.1"), None, macro_settings)
        assert reading.trend == "unknown"
        assert alerts == []

    def test_rising_by_more_than_one_point(self, macro_settings) -> None:
        """Second run: dominance up 1.2 points."""
        reading, alerts = evaluate_dominance(Decimal("53.3"), Decimal("52.1"), macro_settings)
        assert reading.trend == "rising"
        assert [a.type for a in alerts] == ["dominance_rising"]
        assert "alt bleed likely" in alerts[0].message

    def test_falling(self, macro_settings) -> None:
        reading, alerts = evaluate_dominance(Decimal("50.5"), Decimal("52"), macro_settings)
        assert reading.trend == "falling"
        assert alerts[0].type == "dominance_falling"
        assert "alt season vibes" in alerts[0].message

    def test_trend_without_alert(self, macro_settings) -> None:
        reading, alerts = evaluate_dominance(Decimal("52.5"), Decimal("52"), macro_settings)
        assert reading.trend == "rising"
        assert alerts == []

    def test_stable_band(self) -> None:
        assert dominance_trend(Decimal("52.2"), Decimal("52")) == "stable"
        assert dominance_trend(Decimal("51.8"), Decimal("52")) == "stable"


class TestMarketCap:
    def test_drop_at_threshold_alerts(self) -> None:
        data = GlobalData(Decimal("52"), Decimal("2.5e12"), Decimal("-5"))
        reading, alerts = evaluate_market_cap(data)
        assert reading.usd == Decimal("2.5e12")
        assert alerts[0].type == "market_cap_drop"
        assert "down 5.0%" in alerts[0].message

    def test_mild_change_is_quiet(self) -> None:
        data = GlobalData(Decimal("52"), Decimal("2.5e12"), Decimal("-4.9"))
        assert evaluate_market_cap(data)[1] == []

    def test_missing_total(self) -> None:
        assert evaluate_market_cap(GlobalData(Decimal("52"), None, None)) == (None, [])


class TestGold:
    def _quote(self, price: str = "2000", paxg: str = "0", btc: str = "0") -> GoldQuote:
        return GoldQuote(
            paxg_price=Decimal(price),
            paxg_change_24h=Decimal(paxg),
            btc_price=Decimal("40000"),
            btc_change_24h=Decimal(btc),
        )

    def test_correlation(self) -> None:
        assert gold_correlation(Decimal("3"), Decimal("-3")) == "inverse"
        assert gold_correlation(Decimal("3"), Decimal("3")) == "correlated"
        assert gold_correlation(Decimal("1"), Decimal("-3")) == "neutral"
        assert gold_correlation(Decimal("3"), Decimal("-2")) == "neutral"

    def test_flight_to_safety(self, macro_settings) -> None:
        reading, alerts, _ = evaluate_gold(
            self._quote(paxg="2.5", btc="-3.1"), [], NOW, macro_settings
        )
        assert reading.btc_correlation == "inverse"
        assert [a.type for a in alerts] == ["flight_to_safety"]

    def test_no_history_means_no_deltas(self, macro_settings) -> None:
        reading, _, log = evaluate_gold(self._quote(), [], NOW, macro_settings)
        assert reading.change_1h is None
        assert reading.change_4h is None
        assert log == [PricePoint(Decimal("2000"), NOW)]

    def test_deltas_from_log(self, macro_settings) -> None:
        log = [
            PricePoint(Decimal("1900"), NOW - int(4.5 * HOUR)),
            PricePoint(Decimal("1980"), NOW - int(1.1 * HOUR)),
            PricePoint(Decimal("1990"), NOW - int(0.5 * HOUR)),
        ]
        reading, _, pruned = evaluate_gold(self._quote("2000"), log, NOW, macro_settings)

        assert reading.change_1h == (Decimal("2000") - 1980) / 1980 * 100
        # The 4.5h sample anchors the 4h delta (within 125%) but is pruned afterwards
        assert reading.change_4h == (Decimal("2000") - 1900) / 1900 * 100
        assert all(NOW - p.ts <= 4 * HOUR for p in pruned)
        assert pruned[-1].ts == NOW

    def test_stale_sample_rejected(self, macro_settings) -> None:
        log = [PricePoint(Decimal("1900"), NOW - int(1.5 * HOUR))]
        reading, _, _ = evaluate_gold(self._quote(), log, NOW, macro_settings)
        assert reading.change_1h is None


class TestNewsAlerts:
    def test_one_alert_per_flag(self) -> None:
        flags = [
            NewsFlag("CoinDesk", "Fed holds rates", "FED"),
            NewsFlag("CoinTelegraph", "War fears", "WAR"),
        ]
        alerts = news_alerts(flags)
        assert [a.type for a in alerts] == ["news_keyword", "news_keyword"]
        assert alerts[0].message == '[CoinDesk] "Fed holds rates" (keyword: FED)'
