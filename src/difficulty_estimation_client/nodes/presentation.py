from typing import Any, Dict, List, Tuple

from ..models import METRIC_LABELS, EstimationResult
from ..state import SubmissionState
from ._utils import record_node_trace

DATASET_LABEL = "난이도 점수"
SCALE_SUGGESTED_MIN = 0
SCALE_SUGGESTED_MAX = 100
FILL_COLOR = "rgba(99, 102, 241, 0.2)"
LINE_COLOR = "rgba(99, 102, 241, 1)"


def build_chart_config(result: EstimationResult) -> Dict[str, Any]:
    """レーダーチャート（線形の放射スケール）の設定を組み立てる。

    `labels` と `data` は位置で対応する（`METRIC_LABELS[i]` ↔ `scores[i]`）。
    """
    return {
        "type": "radar",
        "data": {
            "labels": list(METRIC_LABELS),
            "datasets": [
                {
                    "label": DATASET_LABEL,
                    "data": list(result.scores),
                    "backgroundColor": FILL_COLOR,
                    "borderColor": LINE_COLOR,
                    "borderWidth": 2,
                }
            ],
        },
        "options": {
            "scales": {
                "r": {
                    "type": "radialLinear",
                    "angleLines": {"display": True},
                    "suggestedMin": SCALE_SUGGESTED_MIN,
                    "suggestedMax": SCALE_SUGGESTED_MAX,
                }
            }
        },
    }


def build_table_rows(result: EstimationResult) -> List[Tuple[str, str]]:
    """(項目, 点数) の 2 列表。点数は小数 2 桁。"""
    return [(label, f"{score:.2f}") for label, score in zip(METRIC_LABELS, result.scores)]


def build_summary_lines(result: EstimationResult) -> List[Tuple[str, str]]:
    """結果の要約行を組み立てる。

    振る舞い:
    - 経験・難易度レベル・総難易度（小数 2 桁）は常に出す
    - 類似度は 0 より大きい場合のみ百分率（小数 2 桁）で出す（0 は未計算）
    """
    lines = [
        ("경험", result.experience),
        ("난이도 레벨", result.level),
        ("총 난이도", f"{result.total_difficulty:.2f}"),
    ]
    if result.has_similarity:
        lines.append(("유사한 경험과의 유사도", f"{result.similarity * 100:.2f}%"))
    return lines


def build_presentation(result: EstimationResult) -> Dict[str, Any]:
    return {
        "summary": build_summary_lines(result),
        "chart": build_chart_config(result),
        "table": {
            "columns": ("항목", "점수"),
            "rows": build_table_rows(result),
        },
    }


def render_text(payload: Dict[str, Any]) -> str:
    """`build_presentation` の出力をコンソール表示用の文字列にする。"""
    out = ["결과"]
    out.extend(f"{name}: {value}" for name, value in payload["summary"])
    out.append("")
    out.append("세부 난이도 점수:")
    columns = payload["table"]["columns"]
    out.append(f"{columns[0]} | {columns[1]}")
    out.extend(f"{label} | {score}" for label, score in payload["table"]["rows"])
    return "\n".join(out)


def presentation_node(state: SubmissionState) -> SubmissionState:
    """正規化済みの結果から表示用ペイロードを作るノード。

    振る舞い:
    - `result` からチャート設定・表・要約を組み立て `presentation_payload` に格納
    - 類似度が 0 の場合は要約に類似度行を含めない
    - トレースに "presentation" を追加

    Args:
    - state: 解決グラフの共有状態（`result` が設定済みであること）。

    Returns:
    - SubmissionState: `presentation_payload` を反映した状態。
    """
    record_node_trace(state, "presentation")
    result = state["result"]
    state["presentation_payload"] = build_presentation(result)
    print(f"[node] presentation: rows={len(result.scores)} similarity_shown={result.has_similarity}")
    return state


__all__ = [
    "build_chart_config",
    "build_table_rows",
    "build_summary_lines",
    "build_presentation",
    "render_text",
    "presentation_node",
]
