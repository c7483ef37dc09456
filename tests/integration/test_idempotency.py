"""Integration tests for deterministic results across the full pipeline."""

import threading
from dataclasses import replace

import pytest

from signal_engine.data.models import DiagnosticInput, InvestorFlow
from signal_engine.engine import MarketSignalEngine


class TestPipelineIdempotency:
    """Identical inputs must always produce identical outputs."""

    def setup_method(self):
        """Set up test environment."""
        self.engine = MarketSignalEngine()

    def _run(self, rows, data: DiagnosticInput):
        analysis = self.engine.analyze_volume(rows, 52000, 45000, 47000)
        diagnostic_input = replace(data, volume=analysis)
        return (
            analysis,
            self.engine.volume_insights(analysis),
            self.engine.volume_recommendation(analysis),
            self.engine.diagnose(diagnostic_input),
            self.engine.entry_plan(100, 95, 130),
        )

    def test_repeated_runs_identical(self, ranking_rows, clean_input):
        first = self._run(ranking_rows, clean_input)
        second = self._run(ranking_rows, clean_input)

        assert first == second

    def test_inputs_not_mutated(self, ranking_rows, clean_input):
        rows_before = list(ranking_rows)
        input_before = clean_input

        self._run(ranking_rows, clean_input)

        assert ranking_rows == rows_before
        assert clean_input == input_before

    def test_fresh_engines_agree(self, ranking_rows, clean_input):
        other = MarketSignalEngine()
        analysis = self.engine.analyze_volume(ranking_rows, 52000)

        assert analysis == other.analyze_volume(ranking_rows, 52000)
        assert self.engine.diagnose(clean_input) == other.diagnose(clean_input)

    def test_concurrent_callers(self, ranking_rows, clean_input):
        """Test a shared engine gives every thread the same answer"""
        stressed = replace(
            clean_input,
            smart_money=replace(clean_input.smart_money, foreign=InvestorFlow(today_net=-900, trend_5day=-300)),
        )
        expected = self._run(ranking_rows, stressed)
        results = []
        lock = threading.Lock()

        def worker():
            outcome = self._run(ranking_rows, stressed)
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result == expected for result in results)


@pytest.mark.parametrize("market_id", ["SET", "MAI"])
def test_market_engines_are_deterministic(market_id, market_rows):
    engine = MarketSignalEngine(market_id)
    assert engine.analyze_volume(market_rows, 1500) == engine.analyze_volume(market_rows, 1500)
