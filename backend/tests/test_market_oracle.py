"""Tests for market insights."""

import asyncio
import json

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hirely.agents import market_oracle


class TestMarketInsights:

    def test_parses_reply_in_prose(self, fake_groq):
        body = {
            "marketValueScore": 81,
            "salaryRange": {"min": 120000, "max": 180000, "median": 150000},
            "demandLevel": "Very High",
            "skillHeatmap": [{"skill": "Rust", "demand": 90, "growth": 30}],
            "nextLogicalSkill": {"name": "WebAssembly", "reason": "Edge compute", "potentialIncrease": 12},
            "careerPaths": [{"title": "Staff Engineer", "probability": 0.6}],
        }
        fake = fake_groq("Market view:\n" + json.dumps(body))
        result = asyncio.run(market_oracle.get_market_insights(["Rust", " "]))

        assert result.ok
        assert result.value.demand_level == "medium"
        assert result.value.salary_range.median == 150000
        assert result.value.next_logical_skill.potential_increase == 12
        assert "Skills: Rust\n" in fake.calls[0]["messages"][1]["content"]

    def test_no_skills_makes_no_call(self, fake_groq):
        fake = fake_groq("{}")
        result = asyncio.run(market_oracle.get_market_insights([]))
        assert result.error_kind == "validation"
        assert fake.call_count == 0

    def test_unusable_reply(self, fake_groq):
        fake_groq("The market is hot right now.")
        result = asyncio.run(market_oracle.get_market_insights(["Go"]))
        assert result.error_kind == "shape"


class TestFitScore:

    def test_no_job_skills_is_neutral(self):
        assert market_oracle.calculate_fit_score(["Python"], []) == 0.5

    def test_share_of_covered_skills(self):
        score = market_oracle.calculate_fit_score(["python", "PostgreSQL"], ["Python", "Postgres", "Kubernetes", "Go"])
        assert score == 0.5

    def test_containment_works_both_ways(self):
        assert market_oracle.calculate_fit_score(["React Native"], ["react"]) == 1.0
        assert market_oracle.calculate_fit_score(["AWS"], ["AWS Lambda"]) == 1.0

    def test_floor_and_ceiling(self):
        assert market_oracle.calculate_fit_score([], ["Rust", "Go"]) == 0.1
        assert market_oracle.calculate_fit_score(["COBOL"], ["Rust"]) == 0.1
        assert market_oracle.calculate_fit_score(["Go", "Golang"], ["go"]) == 1.0

    def test_blank_user_skills_match_nothing(self):
        assert market_oracle.calculate_fit_score(["", "  "], ["Rust"]) == 0.1
