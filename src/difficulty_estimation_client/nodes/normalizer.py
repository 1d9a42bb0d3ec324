from ..normalizer import Ok, normalize_response
from ..state import SubmissionState
from ._utils import record_node_trace


def normalizer_node(state: SubmissionState) -> SubmissionState:
    """`raw_response` を正規化し、`result` か `failure` のどちらか一方を設定するノード。"""
    record_node_trace(state, "normalizer")
    outcome = normalize_response(state.get("raw_response"))
    if isinstance(outcome, Ok):
        state["result"] = outcome.value
        state["failure"] = None
        print(f"[node] normalizer: level={outcome.value.level} total={outcome.value.total_difficulty}")
    else:
        state["result"] = None
        state["failure"] = outcome.reason
        reason = outcome.reason
        print(f"[node] normalizer: kind={reason.kind} message={reason.message!r} details={reason.details}")
    return state


__all__ = ["normalizer_node"]
