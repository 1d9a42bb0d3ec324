from ..models import EstimationRequest
from ..state import SubmissionState
from ._utils import record_node_trace


def ingestion_node(state: SubmissionState) -> SubmissionState:
    """入力テキストから送信ボディを組み立てるノード。

    振る舞い:
    - 前提: `state["experience"]` は Coordinator で空でないことを検証済み
    - `request_field`（"text" | "experience"）をキーに 1 フィールドだけの `payload` を作る
    - トレースに "ingestion" を追加

    Args:
    - state: 送信グラフの共有状態。

    Returns:
    - SubmissionState: `payload` を反映した状態。
    """
    record_node_trace(state, "ingestion")
    field = state.get("request_field") or "text"
    request = EstimationRequest(experience=state.get("experience", ""))
    state["payload"] = request.to_payload(field)
    print(f"[node] ingestion: field={field} chars={len(request.experience)}")
    return state


__all__ = ["ingestion_node"]
