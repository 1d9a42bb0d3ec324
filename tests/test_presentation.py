"""Tests for chart, table and summary builders."""

import pytest

from difficulty_estimation_client.models import METRIC_LABELS
from difficulty_estimation_client.nodes.presentation import (
    build_chart_config,
    build_presentation,
    build_summary_lines,
    build_table_rows,
    render_text,
)
from difficulty_estimation_client.normalizer import normalize_response


@pytest.fixture
def marathon_result(marathon_response):
    return normalize_response(marathon_response).value


@pytest.fixture
def similar_result(numeric_level_response):
    return normalize_response(numeric_level_response).value


class TestChartConfig:
    def test_labels_align_with_scores(self, marathon_result):
        chart = build_chart_config(marathon_result)
        assert chart["type"] == "radar"
        assert chart["data"]["labels"] == list(METRIC_LABELS)
        dataset = chart["data"]["datasets"][0]
        assert dataset["label"] == "난이도 점수"
        assert dataset["data"] == [80.0, 60.0, 50.0, 40.0, 30.0, 20.0, 90.0, 70.0, 60.0, 10.0]

    def test_radial_scale(self, marathon_result):
        scale = build_chart_config(marathon_result)["options"]["scales"]["r"]
        assert scale["type"] == "radialLinear"
        assert scale["angleLines"] == {"display": True}
        assert scale["suggestedMin"] == 0
        assert scale["suggestedMax"] == 100


class TestTableRows:
    def test_two_decimal_scores(self, similar_result):
        rows = build_table_rows(similar_result)
        assert len(rows) == 10
        assert rows[0] == ("육체적 힘듦", "95.50")
        assert rows[-1] == ("희소성", "97.00")


class TestSummaryLines:
    def test_similarity_hidden_when_zero(self, marathon_result):
        lines = build_summary_lines(marathon_result)
        assert lines == [
            ("경험", "마라톤 완주"),
            ("난이도 레벨", "5"),
            ("총 난이도", "72.50"),
        ]

    def test_similarity_as_percentage(self, similar_result):
        lines = build_summary_lines(similar_result)
        assert lines[-1] == ("유사한 경험과의 유사도", "87.34%")


class TestRenderText:
    def test_renders_summary_and_table(self, marathon_result):
        text = render_text(build_presentation(marathon_result))
        lines = text.splitlines()
        assert lines[0] == "결과"
        assert "총 난이도: 72.50" in lines
        assert "항목 | 점수" in lines
        assert "희소성 | 10.00" in lines
        assert "유사도" not in text
